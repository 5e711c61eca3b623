"""Recipe routes with caching."""
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query

from extractor.database_storage import RecipeStore
from extractor.resilience.progress_tracker import ProgressTracker

from backend.app.api.deps import get_store, get_progress, extractor_config, settings
from backend.app.schemas import (
    RecipeResponse, CountResponse, DeleteResponse,
    ExtractionRequest, ExtractionResultResponse, ProgressResponse,
)
from backend.app.services import recipe_service
from backend.app.core.cache import recipes_list_cache, search_cache, stats_cache, cache_key

router = APIRouter(prefix="/recipes", tags=["recipes"])


# ============================================
# Extraction
# ============================================

@router.post("/extract", response_model=ExtractionResultResponse)
def extract_all_recipes(
    request: ExtractionRequest,
    store: RecipeStore = Depends(get_store),
    progress: ProgressTracker = Depends(get_progress)
):
    """
    Extract recipes from the given archives.
    Poll /recipes/extract/progress while this runs.
    """
    return recipe_service.extract_all_recipes(
        store,
        request.paths,
        progress=progress,
        clear_existing=request.clear_existing,
        config=extractor_config()
    )


@router.get("/extract/progress", response_model=ProgressResponse)
def get_extraction_progress(progress: ProgressTracker = Depends(get_progress)):
    """Drain pending progress events of the current or last extraction."""
    latest = progress.latest
    return {
        "events": [event.to_dict() for event in progress.drain()],
        "latest": latest.to_dict() if latest else None,
        "running": latest is not None and not progress.closed,
    }


# ============================================
# Queries
# ============================================

@router.get("/count", response_model=CountResponse)
def get_recipe_count(store: RecipeStore = Depends(get_store)):
    """Get number of stored recipes."""
    return stats_cache.get_or_compute(
        cache_key("count"),
        lambda: {"count": recipe_service.get_recipe_count(store)}
    )


@router.get("", response_model=List[RecipeResponse])
def list_recipes(
    offset: int = Query(0, ge=0),
    limit: int = Query(None, ge=0),
    store: RecipeStore = Depends(get_store)
):
    """Get a page of recipes in id order."""
    if limit is None:
        limit = settings.default_page_size
    limit = min(limit, settings.max_page_size)

    return recipes_list_cache.get_or_compute(
        cache_key("list", offset, limit),
        lambda: recipe_service.list_recipes(store, offset, limit)
    )


@router.get("/search/output", response_model=List[RecipeResponse])
def search_recipes_by_output(
    item: str = Query(..., min_length=1),
    store: RecipeStore = Depends(get_store)
):
    """Search recipes by produced item (case-insensitive substring)."""
    return search_cache.get_or_compute(
        cache_key("output", item.lower()),
        lambda: recipe_service.search_recipes_by_output(store, item)
    )


@router.get("/search/ingredient", response_model=List[RecipeResponse])
def search_recipes_by_ingredient(
    item: str = Query(..., min_length=1),
    store: RecipeStore = Depends(get_store)
):
    """Search recipes by ingredient (case-insensitive substring)."""
    return search_cache.get_or_compute(
        cache_key("ingredient", item.lower()),
        lambda: recipe_service.search_recipes_by_ingredient(store, item)
    )


@router.get("/{recipe_id}", response_model=RecipeResponse)
def get_recipe(recipe_id: int, store: RecipeStore = Depends(get_store)):
    """Get single recipe by id."""
    recipe = recipe_service.get_recipe(store, recipe_id)
    if not recipe:
        raise HTTPException(status_code=404, detail="Recipe not found")
    return recipe


@router.delete("", response_model=DeleteResponse)
def clear_recipes(store: RecipeStore = Depends(get_store)):
    """Delete every stored recipe."""
    return {"deleted": recipe_service.clear_recipes(store)}
