"""
Progress reporting for extractions.
A bounded channel between the extraction worker and whoever is watching it.
"""

import logging
import threading
from collections import deque
from typing import Callable, Deque, Iterator, List, Optional

from extractor.models import ExtractionProgress

logger = logging.getLogger(__name__)

ProgressListener = Callable[[ExtractionProgress], None]


class ProgressTracker:
    """
    Bounded, thread-safe channel of ExtractionProgress events.

    The producer never blocks: once the buffer is full the oldest undelivered
    event is dropped. Events that would move ``current`` backwards are
    rejected, so a consumer always sees a monotonic count.
    """

    def __init__(self, maxsize: int = 256):
        """
        Initialize tracker.

        Args:
            maxsize: Undelivered events kept before the oldest are dropped
        """
        if maxsize < 1:
            raise ValueError(f"maxsize must be >= 1, got {maxsize}")
        self.maxsize = maxsize
        self._events: Deque[ExtractionProgress] = deque()
        self._listeners: List[ProgressListener] = []
        self._lock = threading.RLock()
        self._available = threading.Condition(self._lock)
        self._latest: Optional[ExtractionProgress] = None
        self._closed = False
        self._published = 0
        self._dropped = 0
        self._rejected = 0

    def subscribe(self, listener: ProgressListener):
        """
        Register a callback invoked synchronously for every accepted event.

        Args:
            listener: Callable taking an ExtractionProgress
        """
        with self._lock:
            self._listeners.append(listener)

    def reset(self):
        """Forget buffered events and counters and reopen the channel for a new run."""
        with self._lock:
            self._events.clear()
            self._latest = None
            self._closed = False
            self._published = 0
            self._dropped = 0
            self._rejected = 0

    def publish(self, progress: ExtractionProgress) -> bool:
        """
        Push an event without blocking.

        Args:
            progress: Event to deliver

        Returns:
            True if accepted, False if it would have moved current backwards
            or the channel is closed
        """
        with self._lock:
            if self._closed:
                return False
            if self._latest is not None and progress.current < self._latest.current:
                self._rejected += 1
                return False

            if len(self._events) >= self.maxsize:
                self._events.popleft()
                self._dropped += 1
            self._events.append(progress)
            self._latest = progress
            self._published += 1
            listeners = list(self._listeners)
            self._available.notify_all()

            # Listeners run under the lock so they observe events in order
            for listener in listeners:
                try:
                    listener(progress)
                except Exception as e:
                    logger.warning(f"Progress listener failed: {e}")
        return True

    def get(self, timeout: Optional[float] = None) -> Optional[ExtractionProgress]:
        """
        Take the oldest undelivered event, waiting up to timeout seconds.

        Returns:
            The event, or None on timeout or once the channel is closed and empty
        """
        with self._available:
            if not self._events and not self._closed:
                self._available.wait(timeout)
            if self._events:
                return self._events.popleft()
            return None

    def drain(self) -> List[ExtractionProgress]:
        """Take every undelivered event."""
        with self._lock:
            events = list(self._events)
            self._events.clear()
            return events

    def close(self):
        """Mark the run finished and wake up waiting consumers."""
        with self._lock:
            self._closed = True
            self._available.notify_all()

    def __iter__(self) -> Iterator[ExtractionProgress]:
        """Yield events until the channel is closed and drained."""
        while True:
            event = self.get()
            if event is None:
                with self._lock:
                    if self._closed and not self._events:
                        return
                continue
            yield event

    @property
    def latest(self) -> Optional[ExtractionProgress]:
        """Most recent accepted event, delivered or not."""
        with self._lock:
            return self._latest

    @property
    def closed(self) -> bool:
        with self._lock:
            return self._closed

    def get_stats(self) -> dict:
        """
        Get channel statistics.

        Returns:
            Dict with counters and the latest event
        """
        with self._lock:
            latest = self._latest
            total = latest.total if latest else 0
            current = latest.current if latest else 0
            return {
                'published': self._published,
                'pending': len(self._events),
                'dropped': self._dropped,
                'rejected': self._rejected,
                'closed': self._closed,
                'current': current,
                'total': total,
                'percent': (current / total * 100) if total > 0 else 0.0,
                'current_mod': latest.current_archive if latest else '',
            }
