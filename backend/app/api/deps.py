"""API dependencies."""
from backend.app.core.database import get_store, get_progress, extractor_config
from backend.app.core.config import settings

__all__ = ["get_store", "get_progress", "extractor_config", "settings"]
