"""
Finds mod archives in a mods folder.
"""

import logging
import os
from pathlib import Path
from typing import Iterable, List

from extractor.errors import DirectoryUnreadable
from extractor.models import ArchiveFile

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS = ('.jar', '.zip')


class FolderScanner:
    """Lists candidate archives directly inside a folder (no recursion)."""

    def __init__(self, extensions: Iterable[str] = DEFAULT_EXTENSIONS):
        """
        Initialize scanner.

        Args:
            extensions: File extensions that identify archives (case-insensitive)
        """
        self.extensions = tuple(ext.lower() for ext in extensions)

    def scan(self, directory_path: str) -> List[ArchiveFile]:
        """
        Scan a folder for archives.

        Archive validity is not checked here; unreadable files are simply
        skipped and broken archives are reported later by the reader.

        Args:
            directory_path: Folder to scan

        Returns:
            Archives sorted case-insensitively by name

        Raises:
            DirectoryUnreadable: Path does not exist, is not a folder or cannot be listed
        """
        directory = Path(directory_path)

        if not directory.exists():
            raise DirectoryUnreadable(directory_path, "directory does not exist")
        if not directory.is_dir():
            raise DirectoryUnreadable(directory_path, "path is not a directory")

        try:
            entries = list(os.scandir(directory))
        except OSError as e:
            raise DirectoryUnreadable(directory_path, f"failed to read directory: {e}") from e

        files = []
        for entry in entries:
            if not entry.name.lower().endswith(self.extensions):
                continue
            try:
                if not entry.is_file():
                    continue
                size = entry.stat().st_size
            except OSError as e:
                logger.warning(f"Skipping {entry.path}: {e}")
                continue

            files.append(ArchiveFile(
                name=entry.name,
                path=os.path.abspath(entry.path),
                size=size
            ))

        files.sort(key=lambda f: f.name.lower())
        return files
