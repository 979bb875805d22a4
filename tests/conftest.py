import io
import threading
from typing import Callable, List

import httpx
import pytest

from barrage.services.stress.output_sink import OutputSink


class RecordingHandler:
    """MockTransport 핸들러 - 받은 요청을 기록하고 responder 결과를 반환"""

    def __init__(self, responder: Callable[[httpx.Request], httpx.Response] = None):
        self.responder = responder or (lambda request: httpx.Response(200, content=b"ok"))
        self.requests: List[httpx.Request] = []
        self._lock = threading.Lock()

    def __call__(self, request: httpx.Request) -> httpx.Response:
        with self._lock:
            self.requests.append(request)
        return self.responder(request)


def make_client_factory(handler: Callable[[httpx.Request], httpx.Response]):
    def factory(target, config):
        return httpx.Client(transport=httpx.MockTransport(handler), follow_redirects=True)
    return factory


@pytest.fixture
def handler():
    return RecordingHandler()


@pytest.fixture
def client_factory(handler):
    return make_client_factory(handler)


@pytest.fixture
def stream():
    return io.StringIO()


@pytest.fixture
def quiet_sink(stream):
    return OutputSink(stream=stream, quiet=True)
