"""Tests for the recipe store."""

import pytest

from extractor.database_storage import RecipeStore
from extractor.errors import StoreClosed
from extractor.models import RecipeKind

from tests.conftest import make_row


class TestInsertAndRead:
    """Tests for batch inserts and single reads."""

    def test_ids_follow_input_order(self, store):
        ids = store.insert_batch([make_row(i) for i in range(3)])
        assert len(ids) == 3
        assert ids == sorted(ids)
        assert [store.get(i).result_item for i in ids] == [
            "testmod:item_0", "testmod:item_1", "testmod:item_2"
        ]

    def test_empty_batch(self, store):
        assert store.insert_batch([]) == []
        assert store.count() == 0

    def test_round_trips_fields(self, store):
        row = make_row(
            recipe_type="minecraft:crafting_shaped",
            kind=RecipeKind.SHAPED,
            raw_json='{"type": "minecraft:crafting_shaped"}',
            result_count=4,
            ingredients=["a:x", "#c:logs", "a:x", "a:y|a:z"],
            shape=["AB", "AC"],
        )
        [recipe_id] = store.insert_batch([row])

        recipe = store.get(recipe_id)

        assert recipe.mod_name == "testmod.jar"
        assert recipe.source_path == "data/testmod/recipes/r0.json"
        assert recipe.recipe_type == "minecraft:crafting_shaped"
        assert recipe.result_count == 4
        assert recipe.ingredients == ["a:x", "#c:logs", "a:x", "a:y|a:z"]
        assert recipe.shape == ["AB", "AC"]
        assert recipe.raw_json == '{"type": "minecraft:crafting_shaped"}'
        assert recipe.created_at

    def test_row_without_result(self, store):
        [recipe_id] = store.insert_batch([make_row(result_item=None, result_count=None, ingredients=[])])
        recipe = store.get(recipe_id)
        assert recipe.result_item is None
        assert recipe.result_count is None
        assert recipe.ingredients == []
        assert recipe.shape is None

    def test_get_missing(self, store):
        assert store.get(12345) is None

    def test_to_dict_shape(self, store):
        [recipe_id] = store.insert_batch([make_row()])
        data = store.get(recipe_id).to_dict()
        assert data["path"] == "data/testmod/recipes/r0.json"
        assert set(data) >= {"id", "mod_name", "recipe_type", "result_item", "result_count", "ingredients", "raw_json"}

    def test_persists_across_handles(self, tmp_path):
        path = str(tmp_path / "persist.db")
        with RecipeStore(database_path=path) as first:
            first.insert_batch([make_row(i) for i in range(5)])
        with RecipeStore(database_path=path) as second:
            assert second.count() == 5

    def test_closed_store_rejects_use(self, tmp_path):
        closed = RecipeStore(database_path=str(tmp_path / "closed.db"))
        closed.close()
        with pytest.raises(StoreClosed):
            closed.insert_batch([make_row()])
        with pytest.raises(StoreClosed):
            closed.clear()
        with pytest.raises(StoreClosed):
            closed.count()


class TestPagination:
    """Tests for list()."""

    def test_pages_in_id_order(self, store):
        store.insert_batch([make_row(i) for i in range(80)])

        first = store.list(0, 50)
        second = store.list(50, 50)

        assert len(first) == 50
        assert len(second) == 30
        ids = [r.id for r in first + second]
        assert ids == sorted(ids)
        assert ids == list(range(ids[0], ids[0] + 80))

    def test_offset_past_end(self, store):
        store.insert_batch([make_row(i) for i in range(3)])
        assert store.list(10, 50) == []

    def test_zero_limit(self, store):
        store.insert_batch([make_row()])
        assert store.list(0, 0) == []

    def test_negative_arguments(self, store):
        with pytest.raises(ValueError):
            store.list(-1, 10)
        with pytest.raises(ValueError):
            store.list(0, -10)


class TestSearch:
    """Tests for output and ingredient searches."""

    @pytest.fixture
    def filled(self, store):
        store.insert_batch([
            make_row(0, result_item="minecraft:Iron_Pickaxe", ingredients=["minecraft:iron_ingot", "minecraft:stick"]),
            make_row(1, result_item="create:cogwheel", ingredients=["#minecraft:planks", "create:shaft"]),
            make_row(2, result_item=None, result_count=None, ingredients=[]),
            make_row(3, result_item="weird:100%_done", ingredients=["weird:under_score"]),
            make_row(4, result_item="weird:1000", ingredients=["weird:underXscore"]),
        ])
        return store

    def test_output_case_insensitive(self, filled):
        results = filled.search_by_output("iron_pick")
        assert [r.result_item for r in results] == ["minecraft:Iron_Pickaxe"]

    def test_output_skips_recipes_without_result(self, filled):
        results = filled.search_by_output("")
        assert len(results) == 4
        assert all(r.result_item is not None for r in results)

    def test_output_wildcards_are_literal(self, filled):
        assert [r.result_item for r in filled.search_by_output("100%")] == ["weird:100%_done"]
        assert [r.result_item for r in filled.search_by_output("00_")] == []

    def test_ingredient_case_insensitive(self, filled):
        results = filled.search_by_ingredient("STICK")
        assert [r.result_item for r in results] == ["minecraft:Iron_Pickaxe"]

    def test_ingredient_matches_tags(self, filled):
        results = filled.search_by_ingredient("planks")
        assert [r.result_item for r in results] == ["create:cogwheel"]

    def test_ingredient_returns_each_recipe_once(self, filled):
        results = filled.search_by_ingredient("minecraft")
        assert [r.result_item for r in results] == ["minecraft:Iron_Pickaxe", "create:cogwheel"]

    def test_ingredient_underscore_is_literal(self, filled):
        assert [r.result_item for r in filled.search_by_ingredient("under_score")] == ["weird:100%_done"]
        assert filled.search_by_ingredient("underscore") == []

    def test_search_empty_store(self, store):
        assert store.search_by_ingredient("x") == []
        assert store.search_by_output("x") == []


class TestClearAndStats:
    """Tests for clear() and count_by_mod()."""

    def test_clear(self, store):
        store.insert_batch([make_row(i) for i in range(4)])
        assert store.clear() == 4
        assert store.count() == 0
        assert store.search_by_ingredient("stick") == []

    def test_clear_empty(self, store):
        assert store.clear() == 0

    def test_count_by_mod(self, store):
        store.insert_batch([make_row(i, mod_name="a.jar") for i in range(2)])
        store.insert_batch([make_row(i, mod_name="b.jar") for i in range(5)])
        assert store.count_by_mod() == [("b.jar", 5), ("a.jar", 2)]
