"""Certificate-of-authenticity lookup.

Convention: ``<directory>/certificate/*.pdf``.  When several PDFs are present
the lexicographically first name wins, so the choice does not depend on
filesystem enumeration order.
"""

from __future__ import annotations

import logging
from pathlib import Path

from artmeta.core.ignore_rules import is_utf8_name, printable_name

logger = logging.getLogger(__name__)

CERTIFICATE_FOLDER = "certificate"


def locate_certificate(directory: str | Path, folder_name: str = CERTIFICATE_FOLDER) -> str | None:
    """Return the manifest-relative path of the certificate PDF, or None.

    A missing or unreadable certificate folder counts as "no certificate".
    PDFs whose names are not valid UTF-8 are skipped with a warning.
    """
    folder = Path(directory) / folder_name
    try:
        if not folder.is_dir():
            return None
        candidates = sorted(
            entry.name
            for entry in folder.iterdir()
            if entry.is_file() and entry.suffix.lower() == ".pdf"
        )
    except OSError as exc:
        logger.debug("Certificate folder %s unreadable: %s", folder, exc)
        return None

    unusable = [name for name in candidates if not is_utf8_name(name)]
    for name in unusable:
        logger.warning("Skipping certificate with non-UTF-8 name: %s", printable_name(name))
    candidates = [name for name in candidates if is_utf8_name(name)]

    if not candidates:
        return None
    if len(candidates) > 1:
        logger.info(
            "Multiple certificate PDFs in %s; using %s", folder, candidates[0]
        )
    return f"./{folder_name}/{candidates[0]}"


def resolve_relative(base_directory: str | Path, relative_path: str) -> Path:
    """Resolve a "./..." manifest path under *base_directory*."""
    return Path(base_directory) / relative_path.removeprefix("./")
