"""Manifest generation: scan, hash, classify, assemble, write.

Files are processed one at a time in directory-enumeration order, which is
also the order of ``artwork_files`` in the written manifest.  Progress is
reported after every step as ``(file_name, file_fraction, overall_fraction)``
where ``overall_fraction`` only reaches 1.0 once the last file is done.

Failure policy
--------------
- Unreadable directory, unhashable artwork file, a file name that is not
  valid UTF-8, unwritable output: the ``OSError`` propagates and no
  manifest is written.
- Enrichment failure: falls back to the extension label.
- Certificate hashing failure: logged as a warning, reported through the
  progress callback, and the manifest is written without a certificate hash.
"""

from __future__ import annotations

import errno
import logging
from pathlib import Path

from artmeta.core.certificate import resolve_relative
from artmeta.core.enrichment import MediaEnricher, enrich
from artmeta.core.hasher import ContentHasher
from artmeta.core.ignore_rules import MANIFEST_SUFFIX, is_utf8_name, printable_name, should_ignore
from artmeta.core.manifest_io import write_manifest
from artmeta.core.progress import (
    CERTIFICATE_ERROR_LABEL,
    CERTIFICATE_LABEL,
    ProgressCallback,
    null_progress,
    overall_fraction,
)
from artmeta.models.manifest import ArtworkFile, Metadata

logger = logging.getLogger(__name__)


class ManifestAssembler:
    """Builds and writes the manifest for one artwork directory.

    Parameters
    ----------
    hasher:
        Content hasher; a default ``ContentHasher`` is created if omitted.
    progress:
        Progress callback; defaults to a no-op.
    enricher:
        Optional deep media analysis backend.
    poll_interval:
        Seconds between polls when hashing in the background.
    manifest_suffix:
        Suffix of manifest files, used for naming and self-exclusion.
    """

    def __init__(
        self,
        hasher: ContentHasher | None = None,
        progress: ProgressCallback | None = None,
        enricher: MediaEnricher | None = None,
        poll_interval: float = 0.05,
        manifest_suffix: str = MANIFEST_SUFFIX,
    ) -> None:
        self.hasher = hasher or ContentHasher()
        self.progress = progress or null_progress
        self.enricher = enricher
        self.poll_interval = poll_interval
        self.manifest_suffix = manifest_suffix

    # ------------------------------------------------------------------
    # Scan
    # ------------------------------------------------------------------

    def scan(self, directory: str | Path) -> list[Path]:
        """Qualifying regular files directly under *directory*, in enumeration order.

        Subdirectories (including the certificate folder) are not descended.
        Raises ``OSError`` (``EILSEQ``) for a qualifying file whose name is not
        valid UTF-8, since the manifest could not record it.
        """
        files: list[Path] = []
        for entry in Path(directory).iterdir():
            if not entry.is_file():
                continue
            if should_ignore(entry.name, self.manifest_suffix):
                logger.debug("Ignoring %s", entry.name)
                continue
            if not is_utf8_name(entry.name):
                raise OSError(errno.EILSEQ, "File name is not valid UTF-8", printable_name(str(entry)))
            files.append(entry)
        return files

    # ------------------------------------------------------------------
    # Assemble
    # ------------------------------------------------------------------

    def build(
        self, directory: str | Path, template: Metadata, *, use_polling: bool = False
    ) -> Metadata:
        """Assemble a fresh manifest for *directory* without writing it.

        The template's descriptive fields are kept; any ``artwork_files``
        and ``certificate_hash`` it carries are replaced.
        """
        directory = Path(directory)
        files = self.scan(directory)
        total = len(files)
        artwork_files: list[ArtworkFile] = []

        for processed, path in enumerate(files):
            name = path.name
            self.progress(name, 0.0, overall_fraction(processed, total))

            if use_polling:
                digest = self.hasher.hash_with_polling(
                    path,
                    on_progress=lambda fraction, n=name, p=processed: self.progress(
                        n, fraction, overall_fraction(p, total)
                    ),
                    poll_interval=self.poll_interval,
                )
            else:
                digest = self.hasher.hash_file(path)

            details = enrich(self.enricher, path)
            artwork_files.append(
                ArtworkFile(
                    path=f"./{name}",
                    file_name=name,
                    file_hash=digest,
                    file_size=path.stat().st_size,
                    format=details.format,
                    resolution=details.resolution,
                    duration=details.duration,
                )
            )
            logger.debug("Hashed %s -> %s", name, digest)
            self.progress(name, 1.0, overall_fraction(processed + 1, total))

        certificate_hash = None
        if template.certificate_of_authenticity is not None:
            certificate_hash = self._hash_certificate(directory, template.certificate_of_authenticity)

        data = template.model_dump()
        data["artwork_files"] = [f.model_dump() for f in artwork_files]
        data["certificate_hash"] = certificate_hash
        return Metadata.model_validate(data)

    def _hash_certificate(self, directory: Path, relative_path: str) -> str | None:
        certificate = resolve_relative(directory, relative_path)
        try:
            digest = self.hasher.hash_file(certificate)
        except OSError as exc:
            logger.warning("Could not hash certificate %s: %s", relative_path, exc)
            self.progress(CERTIFICATE_ERROR_LABEL, 1.0, 1.0)
            return None
        self.progress(CERTIFICATE_LABEL, 1.0, 1.0)
        return digest

    # ------------------------------------------------------------------
    # Generate
    # ------------------------------------------------------------------

    def generate(
        self, directory: str | Path, template: Metadata, *, use_polling: bool = False
    ) -> Path:
        """Assemble the manifest for *directory* and write it next to the files.

        Returns the path of the written ``<title>_metadata.json``.
        """
        metadata = self.build(directory, template, use_polling=use_polling)
        return write_manifest(metadata, directory, self.manifest_suffix)

    def generate_with_polling(self, directory: str | Path, template: Metadata) -> Path:
        """``generate`` using the background hasher, polled every ``poll_interval``."""
        return self.generate(directory, template, use_polling=True)
