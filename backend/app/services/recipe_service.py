"""Recipe service - the command surface used by the presentation layer."""
import threading
from typing import List, Optional

from extractor.archive_reader import ArchiveReader
from extractor.config import ExtractorConfig
from extractor.database_storage import RecipeStore
from extractor.extraction_controller import ExtractionController
from extractor.folder_scanner import FolderScanner
from extractor.resilience.progress_tracker import ProgressTracker

from backend.app.core.cache import invalidate_recipe_caches

# One extraction at a time per process; they share the progress channel
_extraction_lock = threading.Lock()


def scan_folder(path: str, config: Optional[ExtractorConfig] = None) -> List[dict]:
    """List the mod archives directly inside a folder."""
    config = config or ExtractorConfig()
    scanner = FolderScanner(config.archive_extensions)
    return [archive.to_dict() for archive in scanner.scan(path)]


def get_jar_contents(path: str) -> List[dict]:
    """List the recipe entries of one archive."""
    return [entry.to_dict() for entry in ArchiveReader().list_entries(path)]


def extract_all_recipes(
    store: RecipeStore,
    paths: List[str],
    progress: Optional[ProgressTracker] = None,
    clear_existing: bool = False,
    config: Optional[ExtractorConfig] = None
) -> dict:
    """
    Extract recipes from archives into the store.

    Progress events are published on the given channel while the call runs.

    Returns:
        Dict with mods_processed, recipes_extracted and errors
    """
    controller = ExtractionController(store, config=config, progress=progress)
    with _extraction_lock:
        try:
            result = controller.extract_all(paths, clear_existing=clear_existing)
        finally:
            invalidate_recipe_caches()
    return result.to_dict()


def get_recipe_count(store: RecipeStore) -> int:
    """Get number of stored recipes."""
    return store.count()


def list_recipes(store: RecipeStore, offset: int = 0, limit: int = 50) -> List[dict]:
    """Get a page of recipes in id order."""
    return [recipe.to_dict() for recipe in store.list(offset, limit)]


def get_recipe(store: RecipeStore, recipe_id: int) -> Optional[dict]:
    """Get single recipe by id."""
    recipe = store.get(recipe_id)
    return recipe.to_dict() if recipe else None


def search_recipes_by_output(store: RecipeStore, item: str) -> List[dict]:
    """Search recipes by produced item."""
    return [recipe.to_dict() for recipe in store.search_by_output(item)]


def search_recipes_by_ingredient(store: RecipeStore, item: str) -> List[dict]:
    """Search recipes by ingredient."""
    return [recipe.to_dict() for recipe in store.search_by_ingredient(item)]


def clear_recipes(store: RecipeStore) -> int:
    """Delete all stored recipes."""
    try:
        return store.clear()
    finally:
        invalidate_recipe_caches()
