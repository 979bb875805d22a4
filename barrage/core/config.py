import os
from dotenv import load_dotenv

load_dotenv()


class Settings:
    """애플리케이션 설정"""

    # 로깅 설정
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # 타겟 기본값
    STRESS_DEFAULT_URL: str = os.getenv("STRESS_DEFAULT_URL", "http://localhost")
    STRESS_DEFAULT_COUNT: int = int(os.getenv("STRESS_DEFAULT_COUNT", "10"))
    STRESS_DEFAULT_CONCURRENCY: int = int(os.getenv("STRESS_DEFAULT_CONCURRENCY", "1"))
    STRESS_DEFAULT_TIMEOUT: str = os.getenv("STRESS_DEFAULT_TIMEOUT", "10s")
    STRESS_DEFAULT_METHOD: str = os.getenv("STRESS_DEFAULT_METHOD", "GET")
    STRESS_DEFAULT_USER_AGENT: str = os.getenv("STRESS_DEFAULT_USER_AGENT", "barrage")

    # 실행 제어
    STRESS_MAX_ACTIVE_REQUESTS: int = int(os.getenv("STRESS_MAX_ACTIVE_REQUESTS", "0"))  # 0 = 제한 없음
    STRESS_REGEX_URL_MAX_REPEAT: int = int(os.getenv("STRESS_REGEX_URL_MAX_REPEAT", "10"))

    # 결과 파일 저장 위치 (API 호출 시)
    STRESS_RESULT_FOLDER: str = os.getenv("STRESS_RESULT_FOLDER", "./results")
    # 요청 본문 파일 위치 (API 호출 시 body_filename은 이 폴더 안에서만 읽음)
    STRESS_BODY_FOLDER: str = os.getenv("STRESS_BODY_FOLDER", "./bodies")

    @classmethod
    def get_target_defaults(cls) -> dict:
        """타겟 기본 설정을 딕셔너리로 반환"""
        return {
            "url": cls.STRESS_DEFAULT_URL,
            "count": cls.STRESS_DEFAULT_COUNT,
            "concurrency": cls.STRESS_DEFAULT_CONCURRENCY,
            "timeout": cls.STRESS_DEFAULT_TIMEOUT,
            "method": cls.STRESS_DEFAULT_METHOD,
            "user_agent": cls.STRESS_DEFAULT_USER_AGENT,
        }


settings = Settings()
