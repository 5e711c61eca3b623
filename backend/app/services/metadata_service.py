"""Metadata service - recipe statistics."""
from extractor.database_storage import RecipeStore

from backend.app.schemas import StatsResponse, ModRecipeCount


def get_stats(store: RecipeStore) -> StatsResponse:
    """Get database statistics."""
    per_mod = store.count_by_mod()
    return StatsResponse(
        total_recipes=sum(count for _, count in per_mod),
        mods_count=len(per_mod),
        mods=[ModRecipeCount(name=name, recipe_count=count) for name, count in per_mod],
    )
