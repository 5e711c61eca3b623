"""Stats routes."""
from fastapi import APIRouter, Depends

from extractor.database_storage import RecipeStore

from backend.app.api.deps import get_store
from backend.app.schemas import StatsResponse
from backend.app.services import metadata_service
from backend.app.core.cache import stats_cache, cache_key, get_all_cache_stats, invalidate_recipe_caches

router = APIRouter(prefix="/stats", tags=["stats"])


@router.get("", response_model=StatsResponse)
def get_stats(store: RecipeStore = Depends(get_store)):
    """Get database statistics."""
    return stats_cache.get_or_compute(cache_key("stats"), lambda: metadata_service.get_stats(store))


@router.get("/cache")
def get_cache_stats():
    """Get cache statistics for monitoring."""
    return get_all_cache_stats()


@router.post("/cache/clear")
def clear_cache():
    """Clear all caches."""
    invalidate_recipe_caches()
    return {"status": "cleared", "message": "All caches cleared"}
