"""Pluggable media enrichment backends.

Enrichment is strictly best-effort: ``enrich()`` never raises, it falls
back to the extension-derived format label whenever the backend fails.

Backends:
1. **FfprobeEnricher** — shells out to ``ffprobe`` for resolution/duration.
2. **ExtensionEnricher** — format label from the file extension only.
"""

from __future__ import annotations

import json
import logging
import subprocess
from pathlib import Path
from typing import Protocol, runtime_checkable

from artmeta.core.classifier import classify, format_label, is_media
from artmeta.models.media import FileCategory, MediaDetails

logger = logging.getLogger(__name__)


@runtime_checkable
class MediaEnricher(Protocol):
    """Protocol for media analysis backends.

    Any object with an ``analyze(path) -> MediaDetails`` method satisfies
    this protocol.  ``analyze`` may raise; callers go through ``enrich()``.
    """

    def analyze(self, path: Path) -> MediaDetails:
        ...


class ExtensionEnricher:
    """Extension-only analysis; always succeeds."""

    def analyze(self, path: Path) -> MediaDetails:
        return MediaDetails(format=format_label(path))


class FfprobeError(RuntimeError):
    """Raised when ffprobe cannot describe a file."""


class FfprobeEnricher:
    """Reads resolution and duration with ``ffprobe``.

    Files outside the known media extensions are skipped.  Resolution is
    only recorded for the video category, so cover art embedded in an audio
    file is not mistaken for a picture size.

    Parameters
    ----------
    ffprobe_path:
        Executable name or path.
    timeout:
        Seconds before the ffprobe run is abandoned.
    """

    def __init__(self, ffprobe_path: str = "ffprobe", timeout: float = 30.0) -> None:
        self.ffprobe_path = ffprobe_path
        self.timeout = timeout

    def _run_ffprobe(self, path: Path) -> dict:
        cmd = [
            self.ffprobe_path,
            "-v", "error",
            "-show_entries", "stream=codec_type,width,height:format=duration",
            "-of", "json",
            str(path),
        ]
        try:
            proc = subprocess.run(
                cmd, capture_output=True, text=True, timeout=self.timeout, check=False
            )
        except (OSError, subprocess.TimeoutExpired) as exc:
            raise FfprobeError(f"ffprobe could not run: {exc}") from exc
        if proc.returncode != 0:
            raise FfprobeError(f"ffprobe exited with {proc.returncode}: {proc.stderr.strip()}")
        try:
            return json.loads(proc.stdout or "{}")
        except json.JSONDecodeError as exc:
            raise FfprobeError(f"ffprobe produced invalid JSON: {exc}") from exc

    def analyze(self, path: Path) -> MediaDetails:
        if not is_media(path):
            return MediaDetails(format=format_label(path))
        data = self._run_ffprobe(path)

        resolution = None
        streams = data.get("streams", []) if classify(path) == FileCategory.VIDEO else []
        for stream in streams:
            if stream.get("codec_type") == "video" and stream.get("width") and stream.get("height"):
                resolution = f"{stream['width']}x{stream['height']}"
                break

        duration = None
        raw_duration = data.get("format", {}).get("duration")
        if raw_duration not in (None, "", "N/A"):
            duration = f"{float(raw_duration):.3f}"

        return MediaDetails(format=format_label(path), resolution=resolution, duration=duration)


def enrich(enricher: MediaEnricher | None, path: Path) -> MediaDetails:
    """Run *enricher* on *path*, falling back to the extension label on any failure."""
    if enricher is None:
        return MediaDetails(format=format_label(path))
    try:
        return enricher.analyze(path)
    except Exception as exc:  # noqa: BLE001
        logger.warning("Enrichment failed for %s, using extension label: %s", path.name, exc)
        return MediaDetails(format=format_label(path))
