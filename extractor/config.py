"""
Configuration dataclasses for the recipe extractor.
"""

from dataclasses import dataclass, field
from typing import Tuple


@dataclass
class RetryConfig:
    """Configuration for retrying batch commits."""
    max_retries: int = 3
    base_delay: float = 0.2
    max_delay: float = 2.0
    backoff_factor: float = 2.0


@dataclass
class ExtractorConfig:
    """Main configuration for the extraction pipeline."""
    # Rows per store transaction
    batch_size: int = 100

    # Emit a progress event every N recipes parsed inside one archive
    progress_every: int = 50

    # Undelivered progress events kept before the oldest are dropped
    progress_buffer: int = 256

    # File extensions picked up by the folder scanner
    archive_extensions: Tuple[str, ...] = (".jar", ".zip")

    # Wipe the store before extracting instead of appending
    clear_before_extract: bool = False

    # Retry settings for batch commits
    retry: RetryConfig = field(default_factory=RetryConfig)

    def __post_init__(self):
        if self.batch_size < 1:
            raise ValueError(f"batch_size must be >= 1, got {self.batch_size}")
        if self.progress_every < 1:
            raise ValueError(f"progress_every must be >= 1, got {self.progress_every}")
        if self.progress_buffer < 1:
            raise ValueError(f"progress_buffer must be >= 1, got {self.progress_buffer}")
