"""
타겟별 워커 풀

타겟 하나에 대해 concurrency개의 워커 스레드가 봉인된 요청 큐를 소진하고,
코디네이터(run()을 호출한 스레드)가 하나의 이벤트 큐에서 요청 결과와
워커 종료 신호를 함께 받아 결과 목록을 채웁니다.
"""
import logging
import queue
import ssl
import threading
import time
from datetime import datetime, timedelta
from typing import Callable, List, Optional, Tuple

import httpx
import pytz

from barrage.schemas.stress.request_stat import BuiltRequest, RequestError, RequestErrorKind, RequestStat
from barrage.schemas.stress.stress_request import StressRequest, TargetSpec
from barrage.services.stress.output_sink import OutputSink
from barrage.services.stress.request_queue import QueueClosed, SealedRequestQueue
from barrage.utils.duration_parser import parse_duration_seconds

logger = logging.getLogger(__name__)

ClientFactory = Callable[[TargetSpec, StressRequest], httpx.Client]

# 이벤트 종류
_STAT = "stat"
_WORKER_DONE = "worker_done"


def create_http_client(target: TargetSpec, config: StressRequest) -> httpx.Client:
    """
    타겟 설정에 맞춘 공유 HTTP 클라이언트 생성

    - timeout: 빈 문자열이면 제한 없음
    - TLS 인증서 검증: enforce_ssl일 때만
    - 압축/keep-alive: 비활성화 시 Accept-Encoding: identity / Connection: close
    - HTTP/2: no_http2가 아니면 협상 허용
    """
    timeout = parse_duration_seconds(target.timeout) if target.timeout else None
    if timeout == 0:
        timeout = None

    headers = {}
    if not target.compress:
        headers["Accept-Encoding"] = "identity"
    if not target.keep_alive:
        headers["Connection"] = "close"

    limits = httpx.Limits(
        max_connections=None,
        max_keepalive_connections=None if target.keep_alive else 0,
    )
    return httpx.Client(
        timeout=timeout,
        verify=config.enforce_ssl,
        http2=not config.no_http2,
        headers=headers,
        limits=limits,
        follow_redirects=True,
    )


def _classify_error(exc: Exception) -> RequestErrorKind:
    if isinstance(exc, httpx.TimeoutException):
        return RequestErrorKind.TIMEOUT
    if isinstance(exc.__cause__, ssl.SSLError) or isinstance(exc.__context__, ssl.SSLError):
        return RequestErrorKind.TLS
    if isinstance(exc, httpx.ConnectError):
        return RequestErrorKind.CONNECT
    return RequestErrorKind.TRANSPORT


def run_request(client: httpx.Client, request: BuiltRequest) -> Tuple[Optional[httpx.Response], RequestStat]:
    """
    요청 하나를 실행하고 결과를 기록

    전송 실패(타임아웃, 연결 실패, TLS 오류 등)와 2xx가 아닌 응답은 예외로 던지지 않고
    RequestStat.error로 담습니다.
    """
    response = None
    error = None
    status_code = 0
    data_transferred = 0
    proto = ""

    start_time = datetime.now(pytz.utc)
    started = time.perf_counter_ns()
    try:
        response = client.request(
            request.method,
            request.url,
            headers=request.headers,
            content=request.body or None,
            auth=request.basic_auth,
        )
        status_code = response.status_code
        data_transferred = len(response.content)
        proto = response.http_version
        if not 200 <= status_code < 300:
            error = RequestError(RequestErrorKind.STATUS, f"{status_code} {response.reason_phrase}".strip())
    except httpx.HTTPError as e:
        error = RequestError(_classify_error(e), str(e) or type(e).__name__)
    except Exception as e:
        logger.warning(f"Unexpected failure for {request.method} {request.url}: {e}", exc_info=True)
        error = RequestError(RequestErrorKind.TRANSPORT, str(e) or type(e).__name__)
    duration_ns = time.perf_counter_ns() - started

    stat = RequestStat(
        proto=proto,
        url=request.url,
        method=request.method,
        start_time=start_time,
        end_time=start_time + timedelta(microseconds=duration_ns / 1000),
        duration_ns=duration_ns,
        status_code=status_code,
        data_transferred=data_transferred,
        error=error,
    )
    return response, stat


class TargetWorkerPool:
    """타겟 하나에 대한 워커 풀과 코디네이터"""

    def __init__(
        self,
        target: TargetSpec,
        request_queue: SealedRequestQueue,
        client: httpx.Client,
        output_sink: OutputSink,
        limiter: Optional[threading.Semaphore] = None,
    ):
        self.target = target
        self.request_queue = request_queue
        self.client = client
        self.output_sink = output_sink
        self.limiter = limiter

    def run(self) -> List[RequestStat]:
        """
        워커를 띄우고 모든 워커가 종료될 때까지 결과를 수집

        Returns:
            List[RequestStat]: 도착 순서대로 채워진 결과 (길이 = count)
        """
        events: "queue.Queue[Tuple[str, Optional[RequestStat]]]" = queue.Queue()
        workers = [
            threading.Thread(
                target=self._work,
                args=(events,),
                name=f"barrage-worker-{i}",
                daemon=True,
            )
            for i in range(self.target.concurrency)
        ]
        for worker in workers:
            worker.start()

        stats: List[Optional[RequestStat]] = [None] * self.target.count
        completed = 0
        workers_done = 0
        while workers_done < self.target.concurrency:
            event, stat = events.get()
            if event == _WORKER_DONE:
                workers_done += 1
                continue
            if completed >= len(stats):
                raise RuntimeError(f"received more results than requests ({len(stats)})")
            stats[completed] = stat
            completed += 1

        for worker in workers:
            worker.join()

        if completed != self.target.count:
            raise RuntimeError(
                f"expected {self.target.count} results for {self.target.url}, got {completed}"
            )
        logger.debug(f"All {self.target.concurrency} workers finished for {self.target.url}")
        return stats

    def _work(self, events: queue.Queue) -> None:
        try:
            while True:
                try:
                    request = self.request_queue.get()
                except QueueClosed:
                    return

                if self.limiter is not None:
                    with self.limiter:
                        response, stat = run_request(self.client, request)
                else:
                    response, stat = run_request(self.client, request)

                # 출력 실패와 무관하게 결과는 먼저 넘김
                events.put((_STAT, stat))
                try:
                    self.output_sink.report(request, response, stat)
                except (OSError, ValueError) as e:
                    logger.warning(f"Failed to print result for {request.method} {request.url}: {e}")
        finally:
            events.put((_WORKER_DONE, None))
