"""Mod archive schemas."""
from pydantic import BaseModel


class ArchiveFileResponse(BaseModel):
    """Archive found in a mods folder."""
    name: str
    path: str
    size: int = 0


class ArchiveEntryResponse(BaseModel):
    """Recipe entry inside an archive."""
    name: str
    is_dir: bool
