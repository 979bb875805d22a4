from barrage.common.response.code.base_code import BaseCode

class FailureCode(BaseCode):
    BAD_REQUEST = ("잘못된 요청입니다", 400)
    INVALID_CONFIGURATION = ("invalid configuration", 400)
    REQUEST_BUILD_FAILED = ("failed to create request with target configuration", 400)
    RESULT_WRITE_FAILED = ("failed to write full result data", 500)
    INTERNAL_SERVER_ERROR = ("서버 내부 오류가 발생했습니다", 500)
