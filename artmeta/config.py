"""Runtime configuration — env-driven via pydantic-settings.

Reads from a .env file and ARTMETA_* environment variables.  Only the CLI
reads this module; the engine classes take explicit constructor arguments.
"""

from __future__ import annotations

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ArtmetaConfig(BaseSettings):
    """Settings with environment variable overrides.

    Examples
    --------
    Override via environment::

        export ARTMETA_LOG_LEVEL=DEBUG
        export ARTMETA_HASH_CHUNK_SIZE=65536
        export ARTMETA_ENABLE_FFPROBE=true
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="ARTMETA_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "INFO"

    # Hashing
    hash_chunk_size: int = 1024 * 1024
    poll_interval_ms: int = 50
    use_async_hashing: bool = False

    # Directory conventions
    certificate_folder: str = "certificate"
    manifest_suffix: str = "_metadata.json"

    # Deep media enrichment (opt-in)
    enable_ffprobe: bool = False
    ffprobe_path: str = "ffprobe"

    @field_validator("hash_chunk_size", "poll_interval_ms")
    @classmethod
    def _positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("must be a positive integer")
        return value

    @property
    def poll_interval(self) -> float:
        """Async poll interval in seconds."""
        return self.poll_interval_ms / 1000.0


# Module-level singleton; import as `from artmeta.config import config`
config = ArtmetaConfig()
