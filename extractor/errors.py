"""
Exception hierarchy for the recipe extractor.

Every error renders a message with enough context (archive, entry path)
to be reported as-is in an extraction summary.
"""


class ExtractorError(Exception):
    """Base class for all extractor errors."""


class DirectoryUnreadable(ExtractorError):
    """The mods folder does not exist, is not a directory, or cannot be listed."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class ArchiveUnreadable(ExtractorError):
    """The file is missing, not a zip archive, truncated or corrupt."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class EntryNotFound(ExtractorError):
    """The requested entry is not in the archive's directory."""

    def __init__(self, archive_path: str, entry_path: str):
        self.archive_path = archive_path
        self.entry_path = entry_path
        super().__init__(f"{archive_path}: entry not found: {entry_path}")


class MalformedRecipeJson(ExtractorError):
    """Recipe document is not decodable JSON. Never escapes the parser."""

    def __init__(self, entry_path: str, reason: str):
        self.entry_path = entry_path
        self.reason = reason
        super().__init__(f"{entry_path}: {reason}")


class StoreWriteFailed(ExtractorError):
    """A batch could not be committed to the recipe store."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Store write failed: {reason}")


class StoreReadFailed(ExtractorError):
    """A query against the recipe store failed."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Store read failed: {reason}")


class StoreClosed(ExtractorError):
    """The store handle was used after close(). Permanent, so never retried."""

    def __init__(self):
        super().__init__("Store is closed")
