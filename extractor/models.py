"""
Data models for the recipe extractor.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class RecipeKind(Enum):
    """How a recipe's ingredients are laid out, resolved once from its type."""
    SHAPED = "shaped"
    SHAPELESS = "shapeless"
    COOKING = "cooking"
    STONECUTTING = "stonecutting"
    SMITHING = "smithing"
    SPECIAL = "special"
    GENERIC = "generic"
    INVALID = "invalid"


@dataclass(frozen=True)
class ArchiveFile:
    """A candidate mod archive found by the folder scanner."""
    name: str
    path: str
    size: int

    def to_dict(self) -> dict:
        return {'name': self.name, 'path': self.path, 'size': self.size}


@dataclass(frozen=True)
class ArchiveEntry:
    """One entry of an archive's central directory."""
    name: str
    is_directory: bool

    def to_dict(self) -> dict:
        return {'name': self.name, 'is_dir': self.is_directory}


@dataclass
class RawRecipeEntry:
    """Bytes of one recipe document on their way from archive to parser."""
    archive_name: str
    entry_path: str
    data: bytes


@dataclass
class ParsedRecipe:
    """Normalized recipe ready to be stored."""
    mod_name: str
    source_path: str
    recipe_type: str
    kind: RecipeKind
    raw_json: str
    result_item: Optional[str] = None
    result_count: Optional[int] = None
    ingredients: List[str] = field(default_factory=list)
    shape: Optional[List[str]] = None


@dataclass
class Recipe:
    """A recipe row as stored."""
    id: int
    mod_name: str
    source_path: str
    recipe_type: str
    raw_json: str
    result_item: Optional[str] = None
    result_count: Optional[int] = None
    ingredients: List[str] = field(default_factory=list)
    shape: Optional[List[str]] = None
    created_at: str = ''

    def to_dict(self) -> dict:
        """Convert recipe to the dictionary shape served to callers."""
        return {
            'id': self.id,
            'mod_name': self.mod_name,
            'path': self.source_path,
            'recipe_type': self.recipe_type,
            'result_item': self.result_item,
            'result_count': self.result_count,
            'ingredients': list(self.ingredients),
            'shape': list(self.shape) if self.shape is not None else None,
            'raw_json': self.raw_json,
            'created_at': self.created_at,
        }


@dataclass(frozen=True)
class ExtractionProgress:
    """Progress event emitted while an extraction runs."""
    current: int
    total: int
    current_archive: str

    def to_dict(self) -> dict:
        return {
            'current': self.current,
            'total': self.total,
            'current_mod': self.current_archive,
        }


@dataclass
class ExtractionResult:
    """Result of an extraction run."""
    archives_processed: int = 0
    recipes_extracted: int = 0
    errors: List[str] = field(default_factory=list)
    cancelled: bool = False
    started_at: str = ''
    completed_at: str = ''
    duration_seconds: float = 0.0

    def to_dict(self) -> dict:
        return {
            'mods_processed': self.archives_processed,
            'recipes_extracted': self.recipes_extracted,
            'errors': list(self.errors),
            'cancelled': self.cancelled,
            'started_at': self.started_at,
            'completed_at': self.completed_at,
            'duration_seconds': self.duration_seconds,
        }
