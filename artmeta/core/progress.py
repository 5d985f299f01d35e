"""Progress reporting boundary between the engine and presentation layers.

A progress callback is any callable taking
``(current_file_name, file_fraction, overall_fraction)``.  The engine calls
it; presentation layers supply it.
"""

from __future__ import annotations

from collections.abc import Callable

ProgressCallback = Callable[[str, float, float], None]

CERTIFICATE_LABEL = "Certificate"
CERTIFICATE_ERROR_LABEL = "Certificate error"


def null_progress(file_name: str, file_fraction: float, overall_fraction: float) -> None:
    """Default callback that ignores every update."""


def overall_fraction(processed: int, total: int) -> float:
    """``processed / total``, treating an empty run as complete."""
    if total <= 0:
        return 1.0
    return processed / total
