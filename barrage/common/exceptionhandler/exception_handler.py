from fastapi import FastAPI, Request
import logging
import traceback

from barrage.common.exception.stress_exception import StressException
from barrage.common.response.code import FailureCode
from barrage.common.response.response_template import ResponseTemplate

logger = logging.getLogger(__name__)

def register_exception_handler(app: FastAPI):
    # 설정/요청 생성/결과 저장 실패 처리
    @app.exception_handler(StressException)
    async def stress_exception_handler(request: Request, exc: StressException):
        if exc.code.is_server_error():
            logger.error(f"StressException occurred: {exc.code.name} - {exc.message}", exc_info=True)
        else:
            # 설정/요청 오류는 클라이언트 책임
            logger.warning(f"Rejected stress run: {exc.code.name} - {exc.message}")
        return ResponseTemplate.fail(
            code=exc.code,
            custom_message=exc.message,
        )

    # 예상치 못한 모든 예외 처리
    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        tb_str = ''.join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        logger.error(f"Unhandled exception occurred: {exc}\nStack trace:\n{tb_str}")
        return ResponseTemplate.fail(
            FailureCode.INTERNAL_SERVER_ERROR,
        )
