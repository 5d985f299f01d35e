"""Extension-based format classification.

``classify`` never returns ``FileCategory.OTHER``: an unknown or missing
extension is bucketed as video so every file has a place in the legacy
video/audio layout.  ``is_media`` tells known media from such unknowns;
enrichment uses both to decide which files to analyze.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from artmeta.models.manifest import ArtworkFile
from artmeta.models.media import FileCategory

UNKNOWN_FORMAT = "UNKNOWN"

VIDEO_EXTENSIONS: frozenset[str] = frozenset({
    "mp4", "mov", "avi", "mkv", "webm", "m4v", "mpg", "mpeg", "wmv", "flv", "prores", "mxf",
})

AUDIO_EXTENSIONS: frozenset[str] = frozenset({
    "mp3", "wav", "flac", "aac", "ogg", "m4a", "aiff", "aif", "wma", "opus",
})


def _extension(path: str | Path) -> str:
    return Path(path).suffix.lstrip(".")


def classify(path: str | Path) -> FileCategory:
    """Map a file path to a coarse category by lower-cased extension."""
    ext = _extension(path).lower()
    if ext in AUDIO_EXTENSIONS:
        return FileCategory.AUDIO
    # Known video extensions and unknown or missing ones share the video bucket.
    return FileCategory.VIDEO


def is_media(path: str | Path) -> bool:
    """Return True if the extension is in one of the known media sets."""
    ext = _extension(path).lower()
    return ext in VIDEO_EXTENSIONS or ext in AUDIO_EXTENSIONS


def format_label(path: str | Path) -> str:
    """Upper-cased extension, or ``"UNKNOWN"`` if the name has none."""
    ext = _extension(path)
    return ext.upper() if ext else UNKNOWN_FORMAT


def bucket_files(files: Iterable[ArtworkFile]) -> dict[str, list[ArtworkFile]]:
    """Group artwork files into the legacy ``video`` / ``audio`` lists.

    Manifest order is preserved within each bucket.
    """
    buckets: dict[str, list[ArtworkFile]] = {
        FileCategory.VIDEO.value: [],
        FileCategory.AUDIO.value: [],
    }
    for artwork_file in files:
        buckets[classify(artwork_file.file_name).value].append(artwork_file)
    return buckets
