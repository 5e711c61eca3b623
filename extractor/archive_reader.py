"""
Read-only access to mod archives (jar/zip).

Listing only touches the archive's central directory; entry contents are
decompressed one at a time, on request.
"""

import zipfile
import zlib
from contextlib import contextmanager
from typing import Callable, Iterator, List, Optional

from extractor.errors import ArchiveUnreadable, EntryNotFound
from extractor.models import ArchiveEntry, RawRecipeEntry
from extractor.utils import mod_display_name


EntryFilter = Callable[[str], bool]

RECIPE_DIRS = ('recipe', 'recipes')


def is_recipe_entry(path: str) -> bool:
    """
    Check whether an archive entry path is a recipe document.

    A path qualifies when its segments contain ``data/<namespace>/recipe``
    (or ``recipes``) followed by at least one more segment, and it ends in
    ``.json``. Matching is case-sensitive.

    Args:
        path: Entry path inside the archive (e.g., data/create/recipes/cog.json)

    Returns:
        True if the entry is a recipe JSON file
    """
    if not path.endswith('.json'):
        return False

    parts = path.split('/')
    # Need data, namespace, recipe dir and a file name after it
    for i in range(len(parts) - 3):
        if parts[i] == 'data' and parts[i + 1] and parts[i + 2] in RECIPE_DIRS:
            return True
    return False


class OpenArchive:
    """An archive opened for listing and reading."""

    def __init__(self, path: str, zf: zipfile.ZipFile):
        self.path = path
        self.name = mod_display_name(path)
        self._zf = zf

    def entries(self, filter: Optional[EntryFilter] = is_recipe_entry) -> List[ArchiveEntry]:
        """
        List entries from the central directory.

        Args:
            filter: Predicate on the entry path; None keeps every entry

        Returns:
            Matching entries sorted case-insensitively by name
        """
        entries = [
            ArchiveEntry(name=info.filename, is_directory=info.is_dir())
            for info in self._zf.infolist()
            if filter is None or filter(info.filename)
        ]
        entries.sort(key=lambda e: e.name.lower())
        return entries

    def read(self, entry_path: str) -> bytes:
        """
        Decompress one entry.

        Raises:
            EntryNotFound: Entry is not in the archive's directory
            ArchiveUnreadable: Entry data is corrupt or encrypted
        """
        try:
            return self._zf.read(entry_path)
        except KeyError:
            raise EntryNotFound(self.path, entry_path)
        except (zipfile.BadZipFile, zlib.error, EOFError, OSError, NotImplementedError) as e:
            raise ArchiveUnreadable(self.path, f"{entry_path}: {e}") from e
        except (RuntimeError, ValueError) as e:
            # Encrypted entries and bad header fields
            raise ArchiveUnreadable(self.path, f"{entry_path}: {e}") from e

    def read_raw(self, entry_path: str) -> RawRecipeEntry:
        """Read one entry wrapped with its archive context."""
        return RawRecipeEntry(
            archive_name=self.name,
            entry_path=entry_path,
            data=self.read(entry_path)
        )


class ArchiveReader:
    """Opens mod archives and hands out their recipe entries."""

    @contextmanager
    def open(self, archive_path: str) -> Iterator[OpenArchive]:
        """
        Open an archive for the duration of a with-block.

        Raises:
            ArchiveUnreadable: File is missing, not a zip, truncated or corrupt
        """
        try:
            zf = zipfile.ZipFile(archive_path, 'r')
        except FileNotFoundError as e:
            raise ArchiveUnreadable(archive_path, "file does not exist") from e
        except IsADirectoryError as e:
            raise ArchiveUnreadable(archive_path, "path is a directory") from e
        except zipfile.BadZipFile as e:
            raise ArchiveUnreadable(archive_path, f"not a valid archive: {e}") from e
        except (OSError, EOFError, ValueError) as e:
            raise ArchiveUnreadable(archive_path, str(e)) from e

        try:
            yield OpenArchive(archive_path, zf)
        finally:
            zf.close()

    def list_entries(
        self,
        archive_path: str,
        filter: Optional[EntryFilter] = is_recipe_entry
    ) -> List[ArchiveEntry]:
        """
        List the entries of an archive that match a filter.

        Args:
            archive_path: Path to the archive file
            filter: Predicate on the entry path; defaults to recipe documents

        Returns:
            Matching entries sorted case-insensitively by name
        """
        with self.open(archive_path) as archive:
            return archive.entries(filter)

    def read_entry(self, archive_path: str, entry_path: str) -> bytes:
        """
        Read the contents of a single entry.

        Args:
            archive_path: Path to the archive file
            entry_path: Entry path inside the archive

        Returns:
            Decompressed entry bytes
        """
        with self.open(archive_path) as archive:
            return archive.read(entry_path)
