"""Shared test fixtures for artmeta."""

from __future__ import annotations

import os
import sys
from collections.abc import Callable
from pathlib import Path

import pytest

from artmeta.core.assembler import ManifestAssembler
from artmeta.core.hasher import ContentHasher
from artmeta.core.verifier import ManifestVerifier
from artmeta.models.manifest import Metadata

CERTIFICATE_BYTES = b"%PDF-1.4\n% certificate of authenticity\n%%EOF\n"


@pytest.fixture
def make_artwork_dir(tmp_path: Path) -> Callable[..., Path]:
    """Factory fixture: build an artwork directory from ``{name: bytes}``.

    ``certificate`` adds ``certificate/<name>`` with a small PDF body.
    """

    def _factory(
        files: dict[str, bytes] | None = None,
        certificate: str | None = None,
        name: str = "artwork",
    ) -> Path:
        directory = tmp_path / name
        directory.mkdir()
        for file_name, content in (files or {}).items():
            (directory / file_name).write_bytes(content)
        if certificate is not None:
            cert_dir = directory / "certificate"
            cert_dir.mkdir()
            (cert_dir / certificate).write_bytes(CERTIFICATE_BYTES)
        return directory

    return _factory


@pytest.fixture
def artwork_dir(make_artwork_dir: Callable[..., Path]) -> Path:
    """Two small media files: ``a.mp4`` ("abcd") and ``b.mp3`` ("wxyz")."""
    return make_artwork_dir({"a.mp4": b"abcd", "b.mp3": b"wxyz"})


@pytest.fixture
def template() -> Metadata:
    """A manifest template with every descriptive field filled in."""
    return Metadata(
        artwork_id="ART-0001",
        artwork_title="Night Garden",
        artwork_short_title="Garden",
        artwork_creator="R. Vale",
        year_of_creation=2024,
        short_description="Looped video piece.",
        long_description="A looped video piece with an ambient score.",
        edition_number=3,
        total_editions=10,
        issue_date="2024-05-01",
        gallery="North Hall",
        keywords=["loop", "garden"],
        medium=["video", "sound"],
    )


@pytest.fixture
def progress_log() -> list[tuple[str, float, float]]:
    """A list that ``recorder`` appends every progress call to."""
    return []


@pytest.fixture
def recorder(progress_log: list[tuple[str, float, float]]) -> Callable[[str, float, float], None]:
    def _record(name: str, file_fraction: float, overall_fraction: float) -> None:
        progress_log.append((name, file_fraction, overall_fraction))

    return _record


@pytest.fixture
def assembler() -> ManifestAssembler:
    """Assembler with a small chunk size so progress has several ticks."""
    return ManifestAssembler(hasher=ContentHasher(chunk_size=2), poll_interval=0.001)


@pytest.fixture
def verifier() -> ManifestVerifier:
    return ManifestVerifier(hasher=ContentHasher(chunk_size=3))


@pytest.fixture
def certificate_bytes() -> bytes:
    """Body of the PDF written by ``make_artwork_dir(certificate=...)``."""
    return CERTIFICATE_BYTES


@pytest.fixture
def write_raw_name() -> Callable[[Path, bytes, bytes], None]:
    """Factory fixture: create ``directory/<raw bytes name>`` with *content*.

    Skips on platforms whose file systems reject non-UTF-8 names.
    """
    if sys.platform != "linux":
        pytest.skip("file system rejects non-UTF-8 names")

    def _write(directory: Path, raw_name: bytes, content: bytes = b"data") -> None:
        with open(os.path.join(os.fsencode(directory), raw_name), "wb") as fh:
            fh.write(content)

    return _write
