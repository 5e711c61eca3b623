"""
Resilience components for the recipe extractor.
"""

from .progress_tracker import ProgressTracker
from .retry_handler import RetryHandler

__all__ = [
    'ProgressTracker',
    'RetryHandler'
]
