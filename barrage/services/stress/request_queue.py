import logging
import threading
from collections import deque
from typing import Callable, Generic, TypeVar

from barrage.schemas.stress.request_stat import BuiltRequest
from barrage.schemas.stress.stress_request import TargetSpec
from barrage.services.stress.request_builder import build_request, generate_url_from_pattern, UrlGenerator

logger = logging.getLogger(__name__)

T = TypeVar("T")


class QueueClosed(Exception):
    """봉인된 큐가 모두 소진됨"""


class QueueSealedError(RuntimeError):
    """봉인되었거나 가득 찬 큐에 쓰기를 시도함"""


class SealedRequestQueue(Generic[T]):
    """
    용량이 고정된 큐

    - put(): 용량만큼만 쓸 수 있고, seal() 이후에는 쓸 수 없음
    - get(): 비어 있고 봉인 전이면 대기, 봉인 후 소진되면 QueueClosed
    """

    def __init__(self, capacity: int):
        self.capacity = capacity
        self._items = deque()
        self._sealed = False
        self._condition = threading.Condition()

    def put(self, item: T) -> None:
        with self._condition:
            if self._sealed:
                raise QueueSealedError("queue is sealed")
            if len(self._items) >= self.capacity:
                raise QueueSealedError(f"queue is full (capacity={self.capacity})")
            self._items.append(item)
            self._condition.notify()

    def seal(self) -> None:
        with self._condition:
            self._sealed = True
            self._condition.notify_all()

    def get(self) -> T:
        with self._condition:
            while not self._items and not self._sealed:
                self._condition.wait()
            if self._items:
                return self._items.popleft()
            raise QueueClosed()

    @property
    def sealed(self) -> bool:
        return self._sealed

    def __len__(self) -> int:
        with self._condition:
            return len(self._items)


def build_request_queue(
    target: TargetSpec,
    url_generator: UrlGenerator = generate_url_from_pattern,
    builder: Callable[..., BuiltRequest] = build_request,
) -> SealedRequestQueue[BuiltRequest]:
    """
    타겟의 요청 count개를 순차적으로 생성해 봉인된 큐로 반환

    하나라도 생성에 실패하면 RequestBuildError를 그대로 전파합니다.
    """
    queue: SealedRequestQueue[BuiltRequest] = SealedRequestQueue(target.count)
    for _ in range(target.count):
        queue.put(builder(target, url_generator))
    queue.seal()
    logger.debug(f"Built {target.count} requests for {target.method} {target.url}")
    return queue
