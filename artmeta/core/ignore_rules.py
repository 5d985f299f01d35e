"""Directory-entry filter for manifest generation.

Excludes OS/VCS housekeeping files and any earlier manifest, so a manifest
never lists itself (or a predecessor) as an artwork file.
"""

from __future__ import annotations

import os

IGNORE_FILES: frozenset[str] = frozenset({
    ".DS_Store",
    "Thumbs.db",
    "desktop.ini",
    ".gitignore",
    ".gitkeep",
})

MANIFEST_SUFFIX = "_metadata.json"
# Bare "metadata.json" is also a manifest name some tools write.
_BARE_MANIFEST_NAME = "metadata.json"


def is_manifest_name(file_name: str, suffix: str = MANIFEST_SUFFIX) -> bool:
    """Return True if *file_name* looks like a manifest file."""
    return file_name.endswith(suffix) or file_name.endswith(_BARE_MANIFEST_NAME)


def should_ignore(file_name: str, suffix: str = MANIFEST_SUFFIX) -> bool:
    """Return True if *file_name* must not take part in the manifest."""
    return file_name in IGNORE_FILES or is_manifest_name(file_name, suffix)


def is_utf8_name(file_name: str) -> bool:
    """Return False for names carrying undecodable bytes (surrogate escapes).

    Such names cannot be written to a UTF-8 manifest or looked up again from it.
    """
    try:
        file_name.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def printable_name(file_name: str) -> str:
    """*file_name* with undecodable bytes shown as ``\\xNN`` escapes."""
    return os.fsencode(file_name).decode("utf-8", "backslashreplace")
