"""Tests for archive listing and entry reads."""

import pytest

from extractor.archive_reader import ArchiveReader, is_recipe_entry
from extractor.errors import ArchiveUnreadable, EntryNotFound

from tests.conftest import make_jar, mark_encrypted


class TestRecipeEntryFilter:
    """Tests for the recipe path filter."""

    @pytest.mark.parametrize("path", [
        "data/create/recipes/cogwheel.json",
        "data/minecraft/recipe/stick.json",
        "data/mekanism/recipes/crushing/ore/iron.json",
        "pack/nested/data/ae2/recipes/controller.json",
    ])
    def test_matches(self, path):
        assert is_recipe_entry(path)

    @pytest.mark.parametrize("path", [
        "data/create/recipes/cogwheel.txt",
        "data/create/recipes.json",
        "data/create/loot_tables/cogwheel.json",
        "assets/create/recipes/cogwheel.json",
        "Data/create/recipes/cogwheel.json",
        "data/create/Recipes/cogwheel.json",
        "data//recipes/cogwheel.json",
        "data/create/recipes/",
    ])
    def test_rejects(self, path):
        assert not is_recipe_entry(path)


class TestArchiveReader:
    """Tests for ArchiveReader."""

    def test_lists_only_recipe_entries(self, mod_jar):
        entries = ArchiveReader().list_entries(mod_jar)
        assert [e.name for e in entries] == [
            "data/testmod/recipes/iron_pickaxe.json",
            "data/testmod/recipes/pink_dye.json",
            "data/testmod/recipes/smelting/iron_ingot.json",
        ]
        assert not any(e.is_directory for e in entries)

    def test_no_filter_lists_everything(self, mod_jar):
        entries = ArchiveReader().list_entries(mod_jar, filter=None)
        assert len(entries) == 6

    def test_sorted_case_insensitively(self, tmp_path):
        jar = make_jar(tmp_path / "sort.jar", {
            "data/m/recipes/b.json": "{}",
            "data/m/recipes/C.json": "{}",
            "data/m/recipes/a.json": "{}",
        })
        names = [e.name for e in ArchiveReader().list_entries(jar)]
        assert names == ["data/m/recipes/a.json", "data/m/recipes/b.json", "data/m/recipes/C.json"]

    def test_zip_without_recipes_is_empty(self, tmp_path):
        jar = make_jar(tmp_path / "library.jar", {"com/example/Lib.class": b"\xca\xfe\xba\xbe"})
        assert ArchiveReader().list_entries(jar) == []

    def test_read_entry(self, tmp_path):
        jar = make_jar(tmp_path / "read.jar", {"data/m/recipes/a.json": b'{"type": "x"}'})
        assert ArchiveReader().read_entry(jar, "data/m/recipes/a.json") == b'{"type": "x"}'

    def test_read_missing_entry(self, mod_jar):
        with pytest.raises(EntryNotFound) as exc_info:
            ArchiveReader().read_entry(mod_jar, "data/testmod/recipes/missing.json")
        assert "missing.json" in str(exc_info.value)

    def test_read_raw_carries_archive_name(self, mod_jar):
        with ArchiveReader().open(mod_jar) as archive:
            raw = archive.read_raw("data/testmod/recipes/pink_dye.json")
        assert raw.archive_name == "testmod-1.0.jar"
        assert raw.entry_path == "data/testmod/recipes/pink_dye.json"
        assert raw.data.startswith(b"{")

    def test_read_encrypted_entry(self, tmp_path):
        path = tmp_path / "locked.jar"
        make_jar(path, {
            "data/m/recipes/a_locked.json": "{}",
            "data/m/recipes/b_open.json": '{"type": "x"}',
        })
        mark_encrypted(path, "data/m/recipes/a_locked.json")

        reader = ArchiveReader()
        assert len(reader.list_entries(str(path))) == 2
        with pytest.raises(ArchiveUnreadable) as exc_info:
            reader.read_entry(str(path), "data/m/recipes/a_locked.json")
        assert "a_locked.json" in str(exc_info.value)
        assert reader.read_entry(str(path), "data/m/recipes/b_open.json") == b'{"type": "x"}'

    def test_not_a_zip(self, tmp_path):
        fake = tmp_path / "fake.jar"
        fake.write_bytes(b"this is not an archive")
        with pytest.raises(ArchiveUnreadable):
            ArchiveReader().list_entries(str(fake))

    def test_truncated_archive(self, mod_jar, tmp_path):
        with open(mod_jar, 'rb') as f:
            data = f.read()
        truncated = tmp_path / "truncated.jar"
        truncated.write_bytes(data[:len(data) // 2])
        with pytest.raises(ArchiveUnreadable):
            ArchiveReader().list_entries(str(truncated))

    def test_missing_file(self, tmp_path):
        with pytest.raises(ArchiveUnreadable) as exc_info:
            ArchiveReader().list_entries(str(tmp_path / "nope.jar"))
        assert "does not exist" in str(exc_info.value)

    def test_directory(self, tmp_path):
        folder = tmp_path / "folder.jar"
        folder.mkdir()
        with pytest.raises(ArchiveUnreadable):
            ArchiveReader().list_entries(str(folder))
