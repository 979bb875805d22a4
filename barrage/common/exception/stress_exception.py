from barrage.common.response.code import BaseCode, FailureCode


class StressException(Exception):
    """실행 전체를 중단시키는 치명적 오류의 기본 클래스"""

    default_code: BaseCode = FailureCode.BAD_REQUEST

    def __init__(self, message: str = None, code: BaseCode = None):
        self.code = code or self.default_code
        self.message = message or self.code.message()
        super().__init__(self.message)


class ConfigValidationError(StressException):
    default_code = FailureCode.INVALID_CONFIGURATION


class RequestBuildError(StressException):
    default_code = FailureCode.REQUEST_BUILD_FAILED


class ResultWriteError(StressException):
    default_code = FailureCode.RESULT_WRITE_FAILED


class KeyValueParseError(ValueError):
    """key:value 목록 문자열 파싱 실패"""
