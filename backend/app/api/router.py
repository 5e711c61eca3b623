"""Main API router - aggregates all route modules."""
from fastapi import APIRouter

from backend.app.api.routes import mods, recipes, stats

api_router = APIRouter(prefix="/api")

api_router.include_router(mods.router)
api_router.include_router(recipes.router)
api_router.include_router(stats.router)


@api_router.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
