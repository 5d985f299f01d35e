"""Manifest verification — re-hash every recorded file and compare.

Verification is read-only.  Only an unreadable or malformed manifest aborts
it; missing files, mismatches and certificate problems become entries of
the returned ``VerificationReport``.
"""

from __future__ import annotations

import logging
from pathlib import Path

from artmeta.core.certificate import resolve_relative
from artmeta.core.hasher import ContentHasher
from artmeta.core.manifest_io import fingerprint_manifest, load_manifest
from artmeta.core.progress import (
    CERTIFICATE_LABEL,
    ProgressCallback,
    null_progress,
    overall_fraction,
)
from artmeta.models.manifest import ArtworkFile, Metadata
from artmeta.models.reports import (
    FILE_NOT_FOUND,
    CertificateStatus,
    VerificationReport,
    VerificationResult,
)

logger = logging.getLogger(__name__)


class ManifestVerifier:
    """Checks a directory against a previously written manifest.

    Parameters
    ----------
    hasher:
        Content hasher; a default ``ContentHasher`` is created if omitted.
    progress:
        Progress callback; defaults to a no-op.
    """

    def __init__(
        self,
        hasher: ContentHasher | None = None,
        progress: ProgressCallback | None = None,
    ) -> None:
        self.hasher = hasher or ContentHasher()
        self.progress = progress or null_progress

    def verify(
        self, manifest_path: str | Path, base_directory: str | Path | None = None
    ) -> VerificationReport:
        """Verify *base_directory* (default: the manifest's folder) against *manifest_path*.

        Raises ``OSError`` if the manifest cannot be read and
        ``ManifestParseError`` if it is not a valid manifest.
        """
        manifest_path = Path(manifest_path)
        base = Path(base_directory) if base_directory is not None else manifest_path.parent

        metadata = load_manifest(manifest_path)
        metadata_file_hash = fingerprint_manifest(manifest_path)

        total = len(metadata.artwork_files)
        results: list[VerificationResult] = []
        for index, artwork_file in enumerate(metadata.artwork_files):
            self.progress(artwork_file.file_name, 0.0, overall_fraction(index, total))
            results.append(self._check_file(base, artwork_file))
            self.progress(artwork_file.file_name, 1.0, overall_fraction(index + 1, total))

        certificate_status, certificate_hash = self._check_certificate(base, metadata)

        valid_files = sum(1 for r in results if r.is_valid)
        invalid_files = total - valid_files
        overall_valid = invalid_files == 0 and certificate_status != CertificateStatus.INVALID

        logger.info(
            "Verified %s: %d/%d files valid, certificate %s",
            manifest_path.name,
            valid_files,
            total,
            certificate_status.value,
        )
        return VerificationReport(
            metadata_file_hash=metadata_file_hash,
            total_files=total,
            valid_files=valid_files,
            invalid_files=invalid_files,
            results=results,
            metadata_file_valid=True,
            certificate_status=certificate_status,
            certificate_hash=certificate_hash,
            overall_valid=overall_valid,
        )

    def _check_file(self, base: Path, artwork_file: ArtworkFile) -> VerificationResult:
        path = base / artwork_file.file_name
        if not path.exists():
            logger.debug("Missing file: %s", artwork_file.file_name)
            return VerificationResult(
                file_name=artwork_file.file_name,
                expected_hash=artwork_file.file_hash,
                is_valid=False,
                error=FILE_NOT_FOUND,
            )
        try:
            actual = self.hasher.hash_file(path)
        except OSError as exc:
            logger.debug("Could not hash %s: %s", artwork_file.file_name, exc)
            return VerificationResult(
                file_name=artwork_file.file_name,
                expected_hash=artwork_file.file_hash,
                is_valid=False,
                error=str(exc),
            )
        return VerificationResult(
            file_name=artwork_file.file_name,
            expected_hash=artwork_file.file_hash,
            actual_hash=actual,
            is_valid=actual == artwork_file.file_hash,
        )

    def _check_certificate(self, base: Path, metadata: Metadata) -> tuple[CertificateStatus, str | None]:
        if metadata.certificate_of_authenticity is None:
            return CertificateStatus.NOT_APPLICABLE, None

        self.progress(CERTIFICATE_LABEL, 0.0, 1.0)
        try:
            path = resolve_relative(base, metadata.certificate_of_authenticity)
            if not path.is_file():
                logger.debug("Certificate not found: %s", path)
                return CertificateStatus.INVALID, None
            try:
                actual = self.hasher.hash_file(path)
            except OSError as exc:
                logger.debug("Could not hash certificate %s: %s", path, exc)
                return CertificateStatus.INVALID, None
            # Nothing to compare against when no hash was recorded.
            if metadata.certificate_hash is None or actual != metadata.certificate_hash:
                return CertificateStatus.INVALID, actual
            return CertificateStatus.VALID, actual
        finally:
            self.progress(CERTIFICATE_LABEL, 1.0, 1.0)
