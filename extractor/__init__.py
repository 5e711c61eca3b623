"""
Recipe extraction engine for game-mod archives.
"""

from .archive_reader import ArchiveReader, is_recipe_entry
from .config import ExtractorConfig, RetryConfig
from .database_storage import RecipeStore
from .extraction_controller import ExtractionController
from .folder_scanner import FolderScanner
from .recipe_parser import parse_recipe

__all__ = [
    'ArchiveReader',
    'is_recipe_entry',
    'ExtractorConfig',
    'RetryConfig',
    'RecipeStore',
    'ExtractionController',
    'FolderScanner',
    'parse_recipe'
]
