from barrage.common.response.code.base_code import BaseCode
from barrage.common.response.code.failure_code import FailureCode
from barrage.common.response.code.success_code import SuccessCode

__all__ = ["BaseCode", "FailureCode", "SuccessCode"]
