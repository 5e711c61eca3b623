"""Recipe schemas."""
from typing import List, Optional
from pydantic import BaseModel, Field


class RecipeResponse(BaseModel):
    """Stored recipe."""
    id: int
    mod_name: str
    path: str
    recipe_type: str
    result_item: Optional[str] = None
    result_count: Optional[int] = None
    ingredients: List[str] = []
    shape: Optional[List[str]] = None
    raw_json: str
    created_at: str = ""


class CountResponse(BaseModel):
    """Number of stored recipes."""
    count: int


class DeleteResponse(BaseModel):
    """Number of recipes removed."""
    deleted: int


class ExtractionRequest(BaseModel):
    """Archives to extract."""
    paths: List[str] = Field(default_factory=list)
    clear_existing: bool = False


class ExtractionResultResponse(BaseModel):
    """Summary of an extraction run."""
    mods_processed: int
    recipes_extracted: int
    errors: List[str] = []
    cancelled: bool = False
    started_at: str = ""
    completed_at: str = ""
    duration_seconds: float = 0.0


class ProgressEvent(BaseModel):
    """One extraction progress event."""
    current: int
    total: int
    current_mod: str


class ProgressResponse(BaseModel):
    """Progress events not yet delivered, plus the latest one."""
    events: List[ProgressEvent] = []
    latest: Optional[ProgressEvent] = None
    running: bool = False
