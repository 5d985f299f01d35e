"""Media classification models."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class FileCategory(str, Enum):
    """Coarse media bucket used for enrichment and legacy grouping."""

    VIDEO = "video"
    AUDIO = "audio"
    OTHER = "other"


class MediaDetails(BaseModel):
    """What an enricher learned about a file.

    ``format`` is always set; ``resolution`` ("WxH") and ``duration``
    (seconds, as a string) only when the enricher could determine them.
    """

    model_config = ConfigDict(frozen=True)

    format: str
    resolution: str | None = None
    duration: str | None = None
