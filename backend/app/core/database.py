"""Recipe store handle and extraction progress channel.

Both are created once at application startup and closed on shutdown.
"""
from typing import Optional

from extractor.config import ExtractorConfig
from extractor.database_storage import RecipeStore
from extractor.resilience.progress_tracker import ProgressTracker

from backend.app.core.config import settings

_store: Optional[RecipeStore] = None
_progress: Optional[ProgressTracker] = None


def extractor_config() -> ExtractorConfig:
    """Build the engine configuration from application settings."""
    return ExtractorConfig(
        batch_size=settings.batch_size,
        progress_every=settings.progress_every,
    )


def init_store() -> RecipeStore:
    """Open the recipe store (idempotent)."""
    global _store, _progress
    if _store is None:
        _store = RecipeStore(
            database_path=settings.database_path,
            connection_string=settings.database_url
        )
    if _progress is None:
        _progress = ProgressTracker(extractor_config().progress_buffer)
    return _store


def close_store():
    """Close the recipe store."""
    global _store, _progress
    if _store is not None:
        _store.close()
    _store = None
    _progress = None


def get_store() -> RecipeStore:
    """Dependency for the recipe store."""
    if _store is None:
        raise RuntimeError("Recipe store not initialized")
    return _store


def get_progress() -> ProgressTracker:
    """Dependency for the extraction progress channel."""
    if _progress is None:
        raise RuntimeError("Recipe store not initialized")
    return _progress
