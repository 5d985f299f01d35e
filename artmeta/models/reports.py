"""Verification report models — pure output, never persisted by the engine."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict

FILE_NOT_FOUND = "File not found"


class CertificateStatus(str, Enum):
    """Tri-state certificate outcome of a verification run."""

    NOT_APPLICABLE = "not_applicable"
    VALID = "valid"
    INVALID = "invalid"


class VerificationResult(BaseModel):
    """Outcome for a single recorded file.

    A mismatch has ``error=None`` and ``actual_hash != expected_hash``.
    A missing or unreadable file has an empty ``actual_hash`` and an error.
    """

    model_config = ConfigDict(frozen=True)

    file_name: str
    expected_hash: str
    actual_hash: str = ""
    is_valid: bool
    error: str | None = None

    @property
    def is_mismatch(self) -> bool:
        return not self.is_valid and self.error is None


class VerificationReport(BaseModel):
    """Aggregate result of re-hashing every file recorded in a manifest."""

    model_config = ConfigDict(frozen=True)

    metadata_file_hash: str
    total_files: int
    valid_files: int
    invalid_files: int
    results: list[VerificationResult] = []
    metadata_file_valid: bool = True
    certificate_status: CertificateStatus = CertificateStatus.NOT_APPLICABLE
    certificate_hash: str | None = None
    overall_valid: bool

    @property
    def certificate_valid(self) -> bool | None:
        """``None`` when no certificate is referenced, else its validity."""
        if self.certificate_status == CertificateStatus.NOT_APPLICABLE:
            return None
        return self.certificate_status == CertificateStatus.VALID

    @property
    def failed_results(self) -> list[VerificationResult]:
        return [r for r in self.results if not r.is_valid]
