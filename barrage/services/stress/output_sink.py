import sys
import threading
from typing import Optional, TextIO

import httpx

from barrage.schemas.stress.request_stat import BuiltRequest, RequestStat


class OutputSink:
    """
    콘솔 출력 담당

    여러 워커가 동시에 출력해도 줄이 섞이지 않도록 하나의 lock으로 쓰기를 직렬화합니다.
    같은 스트림에 쓰는 컴포넌트는 모두 같은 OutputSink 인스턴스를 공유해야 합니다.
    """

    def __init__(self, stream: Optional[TextIO] = None, quiet: bool = False, verbose: bool = False):
        self.stream = stream or sys.stdout
        self.quiet = quiet
        self.verbose = verbose
        self.lock = threading.Lock()

    def write(self, text: str = "") -> None:
        with self.lock:
            self.stream.write(text)
            self.stream.flush()

    def writeln(self, text: str = "") -> None:
        self.write(text + "\n")

    def report(self, request: BuiltRequest, response: Optional[httpx.Response], stat: RequestStat) -> None:
        """요청 하나의 결과 출력 (quiet이면 생략)"""
        if self.quiet:
            return
        lines = [format_stat(stat)]
        if self.verbose:
            lines.append(format_verbose(request, response))
        with self.lock:
            self.stream.write("\n".join(lines) + "\n")
            self.stream.flush()


def format_stat(stat: RequestStat) -> str:
    duration_ms = stat.duration_ns / 1_000_000
    if stat.error is not None and stat.status_code == 0:
        return f"Failed to make request to {stat.method} {stat.url}: {stat.error}"
    return (
        f"{stat.proto} {stat.status_code} {duration_ms:.2f}ms "
        f"{stat.data_transferred} bytes {stat.method} {stat.url}"
    )


def format_verbose(request: BuiltRequest, response: Optional[httpx.Response]) -> str:
    lines = ["Request:", f"{request.method} {request.url}"]
    # 응답이 있으면 클라이언트 기본 헤더까지 포함된 실제 전송 헤더를 출력
    sent_headers = response.request.headers if response is not None else request.headers
    for key, value in sent_headers.items():
        if key.lower() == "authorization":
            continue
        lines.append(f"  {key}: {value}")
    if request.basic_auth:
        lines.append(f"  Basic Auth: {request.basic_auth[0]}:****")
    if request.body:
        lines.append(f"  Body: {request.body.decode('utf-8', errors='replace')}")

    if response is None:
        lines.append("Response: none")
    else:
        lines.append(f"Response: {response.http_version} {response.status_code} {response.reason_phrase}")
        for key, value in response.headers.items():
            lines.append(f"  {key}: {value}")
    lines.append("")
    return "\n".join(lines)
