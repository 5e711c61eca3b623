"""Metadata schemas."""
from typing import List
from pydantic import BaseModel


class ModRecipeCount(BaseModel):
    """Mod with recipe count."""
    name: str
    recipe_count: int


class StatsResponse(BaseModel):
    """Database statistics."""
    total_recipes: int
    mods_count: int
    mods: List[ModRecipeCount] = []
