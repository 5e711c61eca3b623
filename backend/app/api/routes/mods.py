"""Mod folder and archive routes."""
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query

from backend.app.api.deps import extractor_config, settings
from backend.app.schemas import ArchiveFileResponse, ArchiveEntryResponse
from backend.app.services import recipe_service

router = APIRouter(prefix="/mods", tags=["mods"])


@router.get("/scan", response_model=List[ArchiveFileResponse])
def scan_folder(path: Optional[str] = Query(None, description="Mods folder; defaults to MODS_DIR")):
    """List mod archives in a folder."""
    folder = path or settings.mods_dir
    if not folder:
        raise HTTPException(status_code=400, detail="No folder given and MODS_DIR is not set")
    return recipe_service.scan_folder(folder, extractor_config())


@router.get("/contents", response_model=List[ArchiveEntryResponse])
def get_jar_contents(path: str = Query(..., description="Archive file")):
    """List the recipe entries of one archive."""
    return recipe_service.get_jar_contents(path)
