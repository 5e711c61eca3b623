"""
Recipe document parser.

Turns the JSON of one recipe entry into a ParsedRecipe. The recipe's kind is
resolved once from its declared type (see classify) and every kind has a
single ingredient extractor, so the rest of the pipeline never has to inspect
the document's shape.

parse_recipe never raises: undecodable documents come back as "invalid"
recipes and structural surprises degrade to missing fields.
"""

import json
import logging
import string
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from extractor.errors import MalformedRecipeJson
from extractor.models import ParsedRecipe, RecipeKind
from extractor.utils import decode_document, undecodable_placeholder

logger = logging.getLogger(__name__)

UNKNOWN_TYPE = "unknown"
INVALID_TYPE = "invalid"
UNKNOWN_INGREDIENT = "unknown"

# Joins the alternatives accepted in one ingredient slot
ALTERNATIVES_SEPARATOR = "|"

PLACEHOLDERS = string.ascii_uppercase + string.ascii_lowercase + string.digits

COOKING_TYPES = {'smelting', 'blasting', 'smoking', 'campfire_cooking'}
SMITHING_TYPES = {'smithing_transform', 'smithing_trim', 'smithing'}
SMITHING_SLOTS = ('template', 'base', 'addition')


def _local_name(recipe_type: str) -> Tuple[str, str]:
    """Split "namespace:name" into its parts; a bare name has no namespace."""
    if ':' in recipe_type:
        namespace, name = recipe_type.split(':', 1)
        return namespace, name
    return '', recipe_type


def _has_grid(data: dict) -> bool:
    return isinstance(data.get('pattern'), list) and isinstance(data.get('key'), dict)


def classify(recipe_type: str, data: dict) -> RecipeKind:
    """
    Resolve the layout of a recipe from its type.

    Vanilla cooking, stonecutting and smithing types are recognized with or
    without the minecraft namespace. Shaped and shapeless crafting are
    recognized in any namespace by suffix, and any other type carrying both a
    pattern and a key is treated as a shaped grid.

    Args:
        recipe_type: Declared type, already defaulted to "unknown"
        data: Decoded recipe document

    Returns:
        RecipeKind for the recipe (never INVALID; that is decided by the decoder)
    """
    namespace, name = _local_name(recipe_type)
    vanilla = namespace in ('', 'minecraft')

    if 'special' in name:
        return RecipeKind.SPECIAL
    if name == 'crafting_shaped' or name.endswith('_shaped'):
        return RecipeKind.SHAPED
    if name == 'crafting_shapeless' or name.endswith('_shapeless'):
        return RecipeKind.SHAPELESS
    if vanilla and name in COOKING_TYPES:
        return RecipeKind.COOKING
    if vanilla and name == 'stonecutting':
        return RecipeKind.STONECUTTING
    if vanilla and name in SMITHING_TYPES:
        return RecipeKind.SMITHING
    if _has_grid(data):
        return RecipeKind.SHAPED
    return RecipeKind.GENERIC


# ============================================
# Ingredients
# ============================================

def resolve_slot(value: Any) -> Optional[str]:
    """
    Resolve one ingredient slot to an identifier.

    Args:
        value: Slot as found in the document: an item id string, a "#tag"
            string, an {"item": ...}/{"tag": ...} object, or an array of
            alternatives

    Returns:
        The identifier; alternatives joined with "|"; "#tag" for tags;
        "unknown" when unresolvable; None for an empty array (no slot)
    """
    if isinstance(value, str):
        return value if value else UNKNOWN_INGREDIENT

    if isinstance(value, dict):
        item = value.get('item') or value.get('id')
        if isinstance(item, str) and item:
            return item
        tag = value.get('tag')
        if isinstance(tag, str) and tag:
            return f"#{tag}"
        return UNKNOWN_INGREDIENT

    if isinstance(value, list):
        alternatives = [token for token in (resolve_slot(v) for v in value) if token]
        if not alternatives:
            return None
        return ALTERNATIVES_SEPARATOR.join(alternatives)

    return UNKNOWN_INGREDIENT


def _slots(value: Any) -> List[str]:
    """Resolve a field that is either a list of slots or a single slot."""
    values = value if isinstance(value, list) else [value]
    return [token for token in (resolve_slot(v) for v in values) if token]


def _shaped_ingredients(data: dict) -> Tuple[List[str], Optional[List[str]]]:
    """
    Walk the pattern grid row-major, resolving every occupied cell.

    Returns:
        (ingredients with one entry per occupied cell, pattern rewritten
        with placeholders A, B, C... in first-seen order)
    """
    pattern = data.get('pattern')
    key = data.get('key')
    if not isinstance(key, dict):
        key = {}

    if not isinstance(pattern, list) or not all(isinstance(row, str) for row in pattern):
        # No usable grid: one slot per key symbol
        return _slots(list(key.values())), None

    ingredients = []
    placeholders: Dict[str, str] = {}
    shape = []

    for row in pattern:
        cells = []
        for symbol in row:
            if symbol.isspace():
                cells.append(' ')
                continue
            if symbol not in placeholders:
                index = len(placeholders)
                placeholders[symbol] = PLACEHOLDERS[index] if index < len(PLACEHOLDERS) else '?'
            cells.append(placeholders[symbol])

            if symbol in key:
                ingredients.append(resolve_slot(key[symbol]) or UNKNOWN_INGREDIENT)
            else:
                ingredients.append(UNKNOWN_INGREDIENT)
        shape.append(''.join(cells))

    return ingredients, shape


def _shapeless_ingredients(data: dict) -> List[str]:
    if 'ingredients' not in data:
        return []
    return _slots(data['ingredients'])


def _single_ingredient(data: dict) -> List[str]:
    if 'ingredient' not in data:
        return []
    token = resolve_slot(data['ingredient'])
    return [token] if token else []


def _smithing_ingredients(data: dict) -> List[str]:
    ingredients = []
    for slot in SMITHING_SLOTS:
        if slot in data:
            token = resolve_slot(data[slot])
            if token:
                ingredients.append(token)
    return ingredients


def _generic_ingredients(data: dict) -> List[str]:
    """Look for ingredients where modded recipe types usually keep them."""
    ingredients = []

    for field in ('ingredients', 'ingredient'):
        if field in data:
            ingredients.extend(_slots(data[field]))
            break

    key = data.get('key')
    if isinstance(key, dict):
        ingredients.extend(_slots(list(key.values())))

    for field in ('input', 'inputs'):
        if field in data:
            ingredients.extend(_slots(data[field]))
            break

    return ingredients


def _no_ingredients(data: dict) -> List[str]:
    return []


INGREDIENT_EXTRACTORS: Dict[RecipeKind, Callable[[dict], List[str]]] = {
    RecipeKind.SHAPELESS: _shapeless_ingredients,
    RecipeKind.COOKING: _single_ingredient,
    RecipeKind.STONECUTTING: _single_ingredient,
    RecipeKind.SMITHING: _smithing_ingredients,
    RecipeKind.SPECIAL: _no_ingredients,
    RecipeKind.GENERIC: _generic_ingredients,
}


# ============================================
# Result
# ============================================

def _positive_count(value: Any) -> int:
    if isinstance(value, bool):
        return 1
    if isinstance(value, int) and value >= 1:
        return value
    if isinstance(value, float) and value.is_integer() and value >= 1:
        return int(value)
    return 1


def resolve_result(data: dict) -> Tuple[Optional[str], Optional[int]]:
    """
    Resolve the produced item and count.

    Args:
        data: Decoded recipe document

    Returns:
        (item, count). Count is 1 unless a positive count is given, and both
        are None only when the document has no result field at all.
    """
    if 'result' not in data:
        return None, None

    result = data['result']

    if isinstance(result, str):
        return (result or None), 1

    if isinstance(result, dict):
        item = result.get('item') or result.get('id')
        if not isinstance(item, str) or not item:
            item = None
        return item, _positive_count(result.get('count'))

    return None, 1


# ============================================
# Entry point
# ============================================

def _load_document(entry_path: str, text: str) -> dict:
    try:
        data = json.loads(text)
    except ValueError as e:
        raise MalformedRecipeJson(entry_path, f"invalid JSON: {e}") from e
    except RecursionError as e:
        raise MalformedRecipeJson(entry_path, "JSON is nested too deeply") from e
    if not isinstance(data, dict):
        raise MalformedRecipeJson(entry_path, "top-level value is not an object")
    return data


def _invalid(mod_name: str, entry_path: str, raw_json: str) -> ParsedRecipe:
    return ParsedRecipe(
        mod_name=mod_name,
        source_path=entry_path,
        recipe_type=INVALID_TYPE,
        kind=RecipeKind.INVALID,
        raw_json=raw_json,
    )


def parse_recipe(mod_name: str, entry_path: str, raw_json: Union[bytes, str]) -> ParsedRecipe:
    """
    Parse one recipe document.

    Args:
        mod_name: Display name of the owning archive
        entry_path: Entry path the document was read from
        raw_json: Document bytes (or already decoded text)

    Returns:
        ParsedRecipe; one per input, including undecodable ones
    """
    if isinstance(raw_json, bytes):
        text = decode_document(raw_json)
        if text is None:
            logger.warning(f"{mod_name}: {entry_path}: document is not UTF-8 text")
            return _invalid(mod_name, entry_path, undecodable_placeholder(raw_json))
    else:
        text = raw_json.lstrip('\ufeff')

    try:
        data = _load_document(entry_path, text)
    except MalformedRecipeJson as e:
        logger.warning(f"{mod_name}: {e}")
        return _invalid(mod_name, entry_path, text)

    declared = data.get('type')
    recipe_type = declared if isinstance(declared, str) and declared else UNKNOWN_TYPE

    recipe = ParsedRecipe(
        mod_name=mod_name,
        source_path=entry_path,
        recipe_type=recipe_type,
        kind=RecipeKind.GENERIC,
        raw_json=text,
    )

    try:
        recipe.kind = classify(recipe_type, data)
        recipe.result_item, recipe.result_count = resolve_result(data)
        if recipe.kind is RecipeKind.SHAPED:
            recipe.ingredients, recipe.shape = _shaped_ingredients(data)
        else:
            recipe.ingredients = INGREDIENT_EXTRACTORS[recipe.kind](data)
    except Exception as e:
        # Keep the row; only the structured fields are lost
        logger.warning(f"{mod_name}: {entry_path}: could not read recipe fields: {e}")
        recipe.ingredients = []
        recipe.shape = None

    return recipe
