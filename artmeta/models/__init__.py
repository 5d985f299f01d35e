"""Artmeta data models — all Pydantic v2, all frozen (immutable)."""

from artmeta.models.manifest import DIGEST_HEX_LENGTH, ArtworkFile, Metadata, is_valid_digest
from artmeta.models.media import FileCategory, MediaDetails
from artmeta.models.reports import (
    FILE_NOT_FOUND,
    CertificateStatus,
    VerificationReport,
    VerificationResult,
)

__all__ = [
    # manifest
    "DIGEST_HEX_LENGTH",
    "ArtworkFile",
    "Metadata",
    "is_valid_digest",
    # media
    "FileCategory",
    "MediaDetails",
    # reports
    "FILE_NOT_FOUND",
    "CertificateStatus",
    "VerificationResult",
    "VerificationReport",
]
