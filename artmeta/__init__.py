"""Artmeta: tamper-evident metadata manifests for artwork directories.

Scans a directory of media files, records a BLAKE3 digest, size and format
for each one (plus an optional certificate of authenticity), writes the
result as ``<title>_metadata.json``, and later re-verifies the directory
against that manifest.
"""

__version__ = "0.2.0"
__description__ = "Tamper-evident metadata manifests for artwork and media directories"

from artmeta.core.assembler import ManifestAssembler
from artmeta.core.verifier import ManifestVerifier
from artmeta.models.manifest import ArtworkFile, Metadata
from artmeta.models.reports import VerificationReport

__all__ = [
    "ManifestAssembler",
    "ManifestVerifier",
    "Metadata",
    "ArtworkFile",
    "VerificationReport",
    "__version__",
]
