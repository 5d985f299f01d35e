"""Manifest file naming, serialization and loading."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from artmeta.core.hasher import hash_file
from artmeta.core.ignore_rules import MANIFEST_SUFFIX
from artmeta.models.manifest import Metadata

logger = logging.getLogger(__name__)


class ManifestParseError(ValueError):
    """Raised when a manifest file is not well-formed or misses required fields."""


def manifest_filename(title: str, suffix: str = MANIFEST_SUFFIX) -> str:
    """``<title with spaces replaced by underscores><suffix>``."""
    return f"{title.replace(' ', '_')}{suffix}"


def write_manifest(metadata: Metadata, directory: str | Path, suffix: str = MANIFEST_SUFFIX) -> Path:
    """Write *metadata* as pretty-printed UTF-8 JSON into *directory*.

    Overwrites an existing file of the same name.  Returns the output path.
    """
    output = Path(directory) / manifest_filename(metadata.artwork_title, suffix)
    output.write_text(metadata.to_json(), encoding="utf-8")
    logger.info("Wrote manifest %s (%d files)", output, len(metadata.artwork_files))
    return output


def load_manifest(path: str | Path) -> Metadata:
    """Read and validate a manifest.

    Raises ``OSError`` if the file cannot be read and ``ManifestParseError``
    if its content is not a valid manifest.
    """
    raw = Path(path).read_bytes()
    try:
        metadata = Metadata.model_validate_json(raw)
    except ValidationError as exc:
        # Distinguish syntax errors for a clearer message.
        try:
            json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError) as syntax_exc:
            raise ManifestParseError(f"{path}: malformed JSON: {syntax_exc}") from exc
        raise ManifestParseError(f"{path}: invalid manifest: {exc}") from exc

    missing = metadata.missing_manifest_fields()
    if missing:
        raise ManifestParseError(f"{path}: invalid manifest: missing field(s) {', '.join(missing)}")
    return metadata


def fingerprint_manifest(path: str | Path) -> str:
    """BLAKE3 digest of the manifest file itself."""
    return hash_file(path)
