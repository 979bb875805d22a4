from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Dict, Optional, Tuple


class RequestErrorKind(Enum):
    """요청 실행 중 발생한 실패 유형"""
    TIMEOUT = "timeout"
    CONNECT = "connect"
    TLS = "tls"
    TRANSPORT = "transport"
    STATUS = "status"         # 2xx가 아닌 응답


@dataclass(frozen=True)
class RequestError:
    kind: RequestErrorKind
    message: str

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "message": self.message}

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"


@dataclass(frozen=True)
class BuiltRequest:
    """전송 준비가 끝난 요청 하나"""
    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    body: bytes = b""
    basic_auth: Optional[Tuple[str, str]] = None


@dataclass(frozen=True)
class RequestStat:
    """
    요청 하나의 실행 결과

    error가 None이면 성공으로 간주합니다.
    """
    proto: str
    url: str
    method: str
    start_time: datetime
    end_time: datetime
    duration_ns: int
    status_code: int = 0
    data_transferred: int = 0  # bytes
    error: Optional[RequestError] = None

    @property
    def duration(self) -> timedelta:
        return timedelta(microseconds=self.duration_ns / 1000)

    @property
    def succeeded(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        return {
            "proto": self.proto,
            "url": self.url,
            "method": self.method,
            "startTime": self.start_time.isoformat(),
            "endTime": self.end_time.isoformat(),
            "duration": self.duration_ns,
            "statusCode": self.status_code,
            "error": self.error.to_dict() if self.error else None,
            "dataTransferred": self.data_transferred,
        }
