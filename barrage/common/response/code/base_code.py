from enum import Enum
from typing import Optional


class BaseCode(Enum):
    """값은 (메시지, HTTP 상태 코드)"""

    def message(self) -> str:
        return self.value[0]

    def status_code(self) -> int:
        return self.value[1]

    def is_server_error(self) -> bool:
        return self.status_code() >= 500

    def describe(self, detail: Optional[str] = None) -> str:
        """상세 메시지가 코드 메시지와 다르면 상세 메시지 다음 줄에 코드 메시지를 붙임"""
        if detail and detail != self.message():
            return f"{detail}\n{self.message()}"
        return self.message()
