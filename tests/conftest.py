"""
Pytest configuration and fixtures for the recipe extractor tests.
"""

import json
import zipfile
from pathlib import Path
from typing import Dict, Union

import pytest

from extractor.database_storage import RecipeStore
from extractor.models import ParsedRecipe, RecipeKind


def make_jar(path: Path, files: Dict[str, Union[bytes, str, dict]]) -> str:
    """Write a zip archive whose entries are given as {entry path: content}."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(path, 'w', compression=zipfile.ZIP_DEFLATED) as zf:
        for name, content in files.items():
            if isinstance(content, dict):
                content = json.dumps(content)
            zf.writestr(name, content)
    return str(path)


def mark_encrypted(path: Path, entry_name: str):
    """Set the "encrypted" flag bit of one entry in both of its zip headers."""
    data = bytearray(path.read_bytes())
    with zipfile.ZipFile(path) as zf:
        local_header = zf.getinfo(entry_name).header_offset
    # Local file header: flag bits at offset 6
    data[local_header + 6] |= 0x01

    # Central directory header: flag bits at offset 8, name length at 28, name at 46
    name = entry_name.encode('utf-8')
    position = data.find(b'PK\x01\x02')
    while position >= 0:
        name_length = int.from_bytes(data[position + 28:position + 30], 'little')
        if bytes(data[position + 46:position + 46 + name_length]) == name:
            data[position + 8] |= 0x01
        position = data.find(b'PK\x01\x02', position + 4)

    path.write_bytes(bytes(data))


def make_row(index: int = 0, **overrides) -> ParsedRecipe:
    """Build a parsed recipe for store tests."""
    fields = dict(
        mod_name="testmod.jar",
        source_path=f"data/testmod/recipes/r{index}.json",
        recipe_type="minecraft:crafting_shapeless",
        kind=RecipeKind.SHAPELESS,
        raw_json="{}",
        result_item=f"testmod:item_{index}",
        result_count=1,
        ingredients=["minecraft:stick"],
    )
    fields.update(overrides)
    return ParsedRecipe(**fields)


@pytest.fixture
def shaped_recipe():
    """Iron pickaxe, vanilla shaped format."""
    return {
        "type": "minecraft:crafting_shaped",
        "pattern": ["###", " | ", " | "],
        "key": {
            "#": {"item": "minecraft:iron_ingot"},
            "|": {"item": "minecraft:stick"}
        },
        "result": {"item": "minecraft:iron_pickaxe", "count": 1}
    }


@pytest.fixture
def shapeless_recipe():
    """Pink dye, vanilla shapeless format."""
    return {
        "type": "minecraft:crafting_shapeless",
        "ingredients": [
            {"item": "minecraft:red_dye"},
            {"item": "minecraft:white_dye"}
        ],
        "result": {"item": "minecraft:pink_dye", "count": 2}
    }


@pytest.fixture
def smelting_recipe():
    return {
        "type": "minecraft:smelting",
        "ingredient": {"item": "minecraft:iron_ore"},
        "result": "minecraft:iron_ingot",
        "experience": 0.7,
        "cookingtime": 200
    }


@pytest.fixture
def mod_jar(tmp_path, shaped_recipe, shapeless_recipe, smelting_recipe):
    """A mod archive with three recipes plus unrelated files."""
    return make_jar(tmp_path / "mods" / "testmod-1.0.jar", {
        "META-INF/MANIFEST.MF": "Manifest-Version: 1.0\n",
        "assets/testmod/lang/en_us.json": {"item.testmod.gear": "Gear"},
        "data/testmod/recipes/iron_pickaxe.json": shaped_recipe,
        "data/testmod/recipes/pink_dye.json": shapeless_recipe,
        "data/testmod/recipes/smelting/iron_ingot.json": smelting_recipe,
        "data/testmod/tags/items/gears.json": {"values": []},
    })


@pytest.fixture
def store(tmp_path):
    """Temporary SQLite recipe store."""
    recipe_store = RecipeStore(database_path=str(tmp_path / "db" / "recipes.db"))
    yield recipe_store
    recipe_store.close()
