"""Manifest models — the on-disk metadata file and its per-file records.

Field names and order are the serialized JSON layout.  Both models are
frozen: regeneration always builds a fresh ``Metadata``.
"""

from __future__ import annotations

import re

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# BLAKE3 default output is 32 bytes -> 64 lowercase hex characters.
DIGEST_HEX_LENGTH = 64
_DIGEST_RE = re.compile(rf"^[0-9a-f]{{{DIGEST_HEX_LENGTH}}}$")

# A written manifest carries every Metadata field except these.
OPTIONAL_MANIFEST_FIELDS: frozenset[str] = frozenset({"certificate_of_authenticity", "certificate_hash"})


def is_valid_digest(value: str) -> bool:
    """Return True if *value* is a lowercase hex digest of the expected length."""
    return bool(_DIGEST_RE.match(value))


class ArtworkFile(BaseModel):
    """One hashed file of the artwork directory.

    ``path`` is manifest-relative ("./<file_name>").  ``resolution`` and
    ``duration`` are only present when deep enrichment produced them.
    """

    model_config = ConfigDict(frozen=True)

    path: str
    file_name: str
    file_hash: str
    file_size: int = Field(ge=0)
    format: str
    resolution: str | None = None
    duration: str | None = None

    @field_validator("file_hash")
    @classmethod
    def _check_digest(cls, value: str) -> str:
        if not is_valid_digest(value):
            raise ValueError(f"not a valid content digest: {value!r}")
        return value


class Metadata(BaseModel):
    """Descriptive artwork metadata plus the ordered list of hashed files.

    Used both as the caller's template (``artwork_files`` empty) and as the
    assembled manifest written to disk.
    """

    model_config = ConfigDict(frozen=True)

    artwork_id: str = ""
    artwork_title: str
    artwork_short_title: str = ""
    artwork_creator: str = ""
    year_of_creation: int = 0
    short_description: str = ""
    long_description: str = ""
    edition_number: int = 0
    total_editions: int = 0
    issue_date: str = ""
    gallery: str = ""
    keywords: list[str] = []
    medium: list[str] = []
    certificate_of_authenticity: str | None = None
    certificate_hash: str | None = None
    artwork_files: list[ArtworkFile] = []

    @field_validator("certificate_hash")
    @classmethod
    def _check_certificate_digest(cls, value: str | None) -> str | None:
        if value is not None and not is_valid_digest(value):
            raise ValueError(f"not a valid certificate digest: {value!r}")
        return value

    @model_validator(mode="after")
    def _unique_file_names(self) -> Metadata:
        seen: set[str] = set()
        for artwork_file in self.artwork_files:
            if artwork_file.file_name in seen:
                raise ValueError(f"duplicate file name in manifest: {artwork_file.file_name}")
            seen.add(artwork_file.file_name)
        return self

    @property
    def has_certificate(self) -> bool:
        return self.certificate_of_authenticity is not None

    def missing_manifest_fields(self) -> list[str]:
        """Required manifest fields that were not given explicitly, in field order.

        Templates rely on defaults; a manifest read from disk must list every
        field itself, so an empty result is required before it is trusted.
        """
        return [
            name
            for name in type(self).model_fields
            if name not in OPTIONAL_MANIFEST_FIELDS and name not in self.model_fields_set
        ]

    def to_json(self) -> str:
        """Pretty-printed JSON with absent optional fields omitted."""
        return self.model_dump_json(indent=2, exclude_none=True)
