"""
Shared utility functions for the extractor.
"""

import os
from typing import Optional


def mod_display_name(path: str) -> str:
    """
    Get the display name of a mod archive.

    Args:
        path: Archive path (e.g., /home/me/mods/create-0.5.1.jar)

    Returns:
        File name of the archive (e.g., create-0.5.1.jar), or the path
        itself when it has no file name component
    """
    name = os.path.basename(os.path.normpath(path)) if path else ''
    return name or path


def decode_document(data: bytes) -> Optional[str]:
    """
    Decode a recipe document as UTF-8, tolerating a byte order mark.

    Args:
        data: Raw entry bytes

    Returns:
        Decoded text, or None if the bytes are not valid UTF-8
    """
    try:
        return data.decode('utf-8-sig')
    except UnicodeDecodeError:
        return None


def undecodable_placeholder(data: bytes) -> str:
    """Placeholder stored in place of a document that is not text."""
    return f"<undecodable: {len(data)} bytes>"


def escape_like(term: str) -> str:
    """
    Escape LIKE wildcards so a search term matches literally.

    Args:
        term: User-supplied substring

    Returns:
        Term with backslash, % and _ escaped using backslash
    """
    return term.replace('\\', '\\\\').replace('%', '\\%').replace('_', '\\_')
