"""
파일 입출력을 위한 범용 유틸리티 클래스
"""
from pathlib import Path
import logging

logger = logging.getLogger(__name__)


class FileWriter:
    """범용 파일 저장/읽기 유틸리티 클래스"""

    @staticmethod
    def write_to_path(content: str, file_path: str, newline: str = None) -> str:
        """
        지정된 경로에 파일을 저장 (상위 디렉터리가 없으면 생성)

        Args:
            content: 저장할 파일 내용
            file_path: 저장할 파일 경로
            newline: open()에 전달할 개행 변환 옵션

        Returns:
            str: 저장된 파일의 전체 경로

        Raises:
            OSError: 파일 저장 실패시
        """
        path = Path(file_path)
        if path.parent and not path.parent.exists():
            path.parent.mkdir(parents=True, exist_ok=True)

        try:
            with open(path, 'w', encoding='utf-8', newline=newline) as f:
                f.write(content)

            logger.info(f"File written: {path}")
            return str(path)

        except OSError as e:
            logger.error(f"파일 저장 실패 - 경로: {path}, 오류: {str(e)}")
            raise

    @staticmethod
    def read_bytes_from_path(file_path: str) -> bytes:
        """
        지정된 경로의 파일 전체를 바이트로 읽음

        Raises:
            OSError: 파일이 없거나 읽기에 실패했을 때
        """
        try:
            with open(file_path, 'rb') as f:
                content = f.read()

            logger.debug(f"File read: {file_path} ({len(content)} bytes)")
            return content

        except OSError as e:
            logger.error(f"파일 읽기 실패 - 경로: {file_path}, 오류: {str(e)}")
            raise
