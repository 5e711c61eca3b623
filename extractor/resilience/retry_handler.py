"""
Retries for store commits.

A batch commit can fail for reasons that go away by themselves (most often
SQLite reporting "database is locked" while another writer holds it), so the
controller runs each commit through a RetryHandler with exponential backoff.
"""

import logging
import time
from typing import Any, Callable, Iterator, Optional, Tuple

from extractor.config import RetryConfig
from extractor.errors import StoreWriteFailed

logger = logging.getLogger(__name__)


class RetryHandler:
    """Calls a function until it succeeds or the attempts run out."""

    def __init__(
        self,
        config: Optional[RetryConfig] = None,
        retry_on: Tuple[type, ...] = (StoreWriteFailed,),
        sleep: Callable[[float], None] = time.sleep
    ):
        """
        Args:
            config: Attempts and backoff; defaults to RetryConfig()
            retry_on: Exception types worth another attempt; others propagate
            sleep: Called with each backoff delay (tests pass a recorder)
        """
        self.config = config or RetryConfig()
        self.retry_on = retry_on
        self._sleep = sleep
        self._attempts = 0
        self._failures = 0

    def _backoff_delays(self) -> Iterator[float]:
        """Delays before the 2nd, 3rd, ... attempt, capped at max_delay."""
        delay = self.config.base_delay
        while True:
            yield min(delay, self.config.max_delay)
            delay *= self.config.backoff_factor

    def execute_with_retry(self, func: Callable, *args, **kwargs) -> Tuple[bool, Any]:
        """
        Call func(*args, **kwargs), retrying on the configured exception types.

        Returns:
            (True, return value) on success, or (False, last exception) once
            every attempt has failed
        """
        attempts = max(1, self.config.max_retries)
        delays = self._backoff_delays()
        error: Optional[Exception] = None

        for attempt in range(1, attempts + 1):
            if attempt > 1:
                delay = next(delays)
                logger.info(f"Retrying in {delay:.1f}s...")
                self._sleep(delay)

            self._attempts += 1
            try:
                return True, func(*args, **kwargs)
            except self.retry_on as e:
                error = e
                logger.warning(f"Attempt {attempt}/{attempts} failed: {e}")

        self._failures += 1
        return False, error

    def get_stats(self) -> dict:
        return {
            'attempts': self._attempts,
            'failures': self._failures,
            'max_retries': self.config.max_retries,
            'base_delay': self.config.base_delay
        }
