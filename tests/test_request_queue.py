import threading

import pytest

from barrage.common.exception.stress_exception import RequestBuildError
from barrage.schemas.stress.stress_request import TargetSpec
from barrage.services.stress.request_queue import (
    QueueClosed,
    QueueSealedError,
    SealedRequestQueue,
    build_request_queue,
)


class TestSealedRequestQueue:

    def test_drains_in_fifo_order_then_closes(self):
        queue = SealedRequestQueue(3)
        for item in ("a", "b", "c"):
            queue.put(item)
        queue.seal()

        assert [queue.get(), queue.get(), queue.get()] == ["a", "b", "c"]
        with pytest.raises(QueueClosed):
            queue.get()
        # 소진 이후에도 계속 닫힘 신호
        with pytest.raises(QueueClosed):
            queue.get()

    def test_rejects_writes_after_seal(self):
        queue = SealedRequestQueue(2)
        queue.put("a")
        queue.seal()

        with pytest.raises(QueueSealedError):
            queue.put("b")

    def test_rejects_writes_beyond_capacity(self):
        queue = SealedRequestQueue(1)
        queue.put("a")

        with pytest.raises(QueueSealedError):
            queue.put("b")

    def test_get_blocks_until_item_or_seal(self):
        queue = SealedRequestQueue(1)
        received = []

        def consume():
            try:
                while True:
                    received.append(queue.get())
            except QueueClosed:
                received.append("closed")

        consumer = threading.Thread(target=consume)
        consumer.start()

        queue.put("late")
        queue.seal()
        consumer.join(timeout=5)

        assert not consumer.is_alive()
        assert received == ["late", "closed"]


class TestBuildRequestQueue:

    def test_builds_exactly_count_requests_and_seals(self):
        queue = build_request_queue(TargetSpec(url="http://example.com", count=7, concurrency=2))

        assert queue.sealed
        assert queue.capacity == 7
        assert len(queue) == 7

    def test_regex_target_builds_each_request_separately(self):
        calls = []

        def generator(pattern):
            calls.append(pattern)
            return f"http://example.com/{len(calls)}"

        queue = build_request_queue(
            TargetSpec(url="http://example.com/[0-9]", regex_url=True, count=3),
            url_generator=generator,
        )

        assert len(calls) == 3
        assert [queue.get().url for _ in range(3)] == [
            "http://example.com/1",
            "http://example.com/2",
            "http://example.com/3",
        ]

    def test_build_failure_propagates(self):
        with pytest.raises(RequestBuildError):
            build_request_queue(TargetSpec(url="http://example.com", headers="broken", count=3))
