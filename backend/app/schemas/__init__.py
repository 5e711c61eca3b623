"""Pydantic schemas."""
from backend.app.schemas.recipe import (
    RecipeResponse,
    CountResponse,
    DeleteResponse,
    ExtractionRequest,
    ExtractionResultResponse,
    ProgressEvent,
    ProgressResponse,
)
from backend.app.schemas.mod import (
    ArchiveFileResponse,
    ArchiveEntryResponse,
)
from backend.app.schemas.metadata import (
    StatsResponse,
    ModRecipeCount,
)

__all__ = [
    "RecipeResponse",
    "CountResponse",
    "DeleteResponse",
    "ExtractionRequest",
    "ExtractionResultResponse",
    "ProgressEvent",
    "ProgressResponse",
    "ArchiveFileResponse",
    "ArchiveEntryResponse",
    "StatsResponse",
    "ModRecipeCount",
]
