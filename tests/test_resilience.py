"""Tests for the progress channel and the retry handler."""

import threading

import pytest

from extractor.config import RetryConfig
from extractor.errors import StoreClosed, StoreReadFailed, StoreWriteFailed
from extractor.models import ExtractionProgress
from extractor.resilience import ProgressTracker, RetryHandler


def event(current, total=10, name="mod.jar"):
    return ExtractionProgress(current=current, total=total, current_archive=name)


class TestProgressTracker:
    """Tests for ProgressTracker."""

    def test_delivers_in_order(self):
        tracker = ProgressTracker()
        for i in range(3):
            tracker.publish(event(i))
        assert [e.current for e in tracker.drain()] == [0, 1, 2]
        assert tracker.drain() == []

    def test_drops_oldest_when_full(self):
        tracker = ProgressTracker(maxsize=2)
        for i in range(5):
            assert tracker.publish(event(i))

        assert [e.current for e in tracker.drain()] == [3, 4]
        assert tracker.get_stats()['dropped'] == 3

    def test_rejects_backwards_events(self):
        tracker = ProgressTracker()
        tracker.publish(event(3))
        assert not tracker.publish(event(2))
        assert tracker.publish(event(3, name="other.jar"))
        assert tracker.latest.current_archive == "other.jar"
        assert tracker.get_stats()['rejected'] == 1

    def test_closed_channel(self):
        tracker = ProgressTracker()
        tracker.publish(event(1))
        tracker.close()

        assert not tracker.publish(event(2))
        assert [e.current for e in tracker] == [1]
        assert tracker.get(timeout=0.01) is None

    def test_get_times_out(self):
        assert ProgressTracker().get(timeout=0.01) is None

    def test_reset_reopens(self):
        tracker = ProgressTracker()
        tracker.publish(event(5))
        tracker.close()
        tracker.reset()

        assert not tracker.closed
        assert tracker.latest is None
        assert tracker.publish(event(0))

    def test_reset_clears_counters(self):
        tracker = ProgressTracker(maxsize=1)
        tracker.publish(event(3))
        tracker.publish(event(4))
        tracker.publish(event(1))
        assert tracker.get_stats()['dropped'] == 1
        assert tracker.get_stats()['rejected'] == 1

        tracker.reset()
        stats = tracker.get_stats()

        assert stats['published'] == 0
        assert stats['dropped'] == 0
        assert stats['rejected'] == 0
        assert stats['pending'] == 0

    def test_listeners(self):
        tracker = ProgressTracker()
        seen = []

        def broken(progress):
            raise RuntimeError("listener bug")

        tracker.subscribe(broken)
        tracker.subscribe(seen.append)
        tracker.publish(event(1))

        assert [e.current for e in seen] == [1]

    def test_consumer_thread(self):
        tracker = ProgressTracker(maxsize=1000)
        received = []
        consumer = threading.Thread(target=lambda: received.extend(tracker))
        consumer.start()

        for i in range(100):
            tracker.publish(event(i, total=100))
        tracker.close()
        consumer.join(timeout=5)

        assert not consumer.is_alive()
        assert [e.current for e in received] == list(range(100))

    def test_stats(self):
        tracker = ProgressTracker()
        tracker.publish(event(5, total=20, name="x.jar"))
        stats = tracker.get_stats()
        assert stats['current'] == 5
        assert stats['total'] == 20
        assert stats['percent'] == 25.0
        assert stats['current_mod'] == "x.jar"
        assert stats['pending'] == 1

    def test_invalid_size(self):
        with pytest.raises(ValueError):
            ProgressTracker(maxsize=0)


class TestRetryHandler:
    """Tests for RetryHandler."""

    def test_success_first_try(self):
        sleeps = []
        handler = RetryHandler(sleep=sleeps.append)
        assert handler.execute_with_retry(lambda x: x * 2, 21) == (True, 42)
        assert sleeps == []

    def test_backoff_then_success(self):
        sleeps = []
        attempts = []

        def flaky():
            attempts.append(1)
            if len(attempts) < 3:
                raise StoreWriteFailed("locked")
            return "ok"

        handler = RetryHandler(RetryConfig(max_retries=3, base_delay=0.5, backoff_factor=2.0), sleep=sleeps.append)

        assert handler.execute_with_retry(flaky) == (True, "ok")
        assert sleeps == [0.5, 1.0]

    def test_gives_up(self):
        sleeps = []

        def always_fails():
            raise StoreWriteFailed("locked")

        handler = RetryHandler(
            RetryConfig(max_retries=4, base_delay=1.0, max_delay=1.5, backoff_factor=3.0),
            sleep=sleeps.append
        )
        success, error = handler.execute_with_retry(always_fails)

        assert not success
        assert isinstance(error, StoreWriteFailed)
        assert sleeps == [1.0, 1.5, 1.5]
        assert handler.get_stats()['failures'] == 1
        assert handler.get_stats()['attempts'] == 4

    def test_other_errors_propagate(self):
        def read_fails():
            raise StoreReadFailed("no such table")

        handler = RetryHandler(sleep=lambda seconds: None)
        with pytest.raises(StoreReadFailed):
            handler.execute_with_retry(read_fails)

    def test_closed_store_is_not_retried(self):
        sleeps = []
        calls = []

        def use_closed_store():
            calls.append(1)
            raise StoreClosed()

        handler = RetryHandler(sleep=sleeps.append)
        with pytest.raises(StoreClosed):
            handler.execute_with_retry(use_closed_store)
        assert calls == [1]
        assert sleeps == []
