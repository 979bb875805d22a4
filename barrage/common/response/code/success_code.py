from barrage.common.response.code.base_code import BaseCode

class SuccessCode(BaseCode):
    SUCCESS_CODE = ("요청 처리에 성공하였습니다.", 200)
    VALID_CONFIGURATION = ("유효한 설정입니다.", 200)
