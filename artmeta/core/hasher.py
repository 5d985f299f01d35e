"""BLAKE3 content hashing — synchronous and pollable background modes.

The digest depends only on the file bytes; ``chunk_size`` bounds peak memory
and sets the granularity of progress ticks.

``ContentHasher`` runs at most one background hash at a time.  Starting a
new one resets progress and silently discards the previous result: callers
must consume ``result()`` before calling ``start()`` again.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from pathlib import Path

from blake3 import blake3

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024


def hash_bytes(data: bytes) -> str:
    """Return the BLAKE3 hex digest of raw bytes."""
    return blake3(data).hexdigest()


def hash_file(
    path: str | Path,
    chunk_size: int = CHUNK_SIZE,
    on_chunk: Callable[[int], None] | None = None,
) -> str:
    """Stream *path* through BLAKE3 and return the lowercase hex digest.

    *on_chunk* receives the byte count of every chunk fed to the hasher.
    Raises ``OSError`` if the file cannot be opened or read.
    """
    if chunk_size <= 0:
        raise ValueError("chunk_size must be positive")
    hasher = blake3()
    with open(path, "rb") as fh:
        for chunk in iter(lambda: fh.read(chunk_size), b""):
            hasher.update(chunk)
            if on_chunk is not None:
                on_chunk(len(chunk))
    return hasher.hexdigest()


class HashOutcome:
    """Terminal result of a background hash: a digest or the error raised."""

    __slots__ = ("digest", "error")

    def __init__(self, digest: str | None = None, error: BaseException | None = None) -> None:
        if (digest is None) == (error is None):
            raise ValueError("HashOutcome needs exactly one of digest or error")
        self.digest = digest
        self.error = error

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> str:
        """Return the digest, re-raising the stored error on failure."""
        if self.error is not None:
            raise self.error
        return self.digest  # type: ignore[return-value]

    def __repr__(self) -> str:
        if self.ok:
            return f"HashOutcome(digest={self.digest!r})"
        return f"HashOutcome(error={self.error!r})"


class ContentHasher:
    """File hasher with a synchronous call and a single-slot background mode.

    The worker thread is the only writer of the progress counters and the
    result slot; readers take the same lock.  Each ``start()`` bumps a job
    number so a superseded worker can never write into the new job's state.

    Parameters
    ----------
    chunk_size:
        Bytes read per step.  Does not affect the digest.
    """

    def __init__(self, chunk_size: int = CHUNK_SIZE) -> None:
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        self.chunk_size = chunk_size
        self._lock = threading.Lock()
        self._job = 0
        self._bytes_hashed = 0
        self._total_bytes = 0
        self._outcome: HashOutcome | None = None
        self._current_file = ""
        self._thread: threading.Thread | None = None

    # ------------------------------------------------------------------
    # Synchronous
    # ------------------------------------------------------------------

    def hash_file(self, path: str | Path) -> str:
        """Hash *path* on the calling thread."""
        return hash_file(path, self.chunk_size)

    # ------------------------------------------------------------------
    # Background
    # ------------------------------------------------------------------

    def start(self, path: str | Path) -> None:
        """Begin hashing *path* on a background thread and return at once."""
        path = Path(path)
        with self._lock:
            self._job += 1
            job = self._job
            self._bytes_hashed = 0
            self._total_bytes = 0
            self._outcome = None
            self._current_file = path.name

        thread = threading.Thread(
            target=self._run, args=(job, path), name=f"artmeta-hash-{job}", daemon=True
        )
        self._thread = thread
        thread.start()

    def _run(self, job: int, path: Path) -> None:
        def _tick(n: int) -> None:
            with self._lock:
                if job == self._job:
                    self._bytes_hashed += n

        try:
            total = path.stat().st_size
            with self._lock:
                if job != self._job:
                    return
                self._total_bytes = total
            digest = hash_file(path, self.chunk_size, on_chunk=_tick)
        except Exception as exc:  # noqa: BLE001 - delivered through result()
            logger.debug("Background hash of %s failed: %s", path, exc)
            self._resolve(job, HashOutcome(error=exc))
            return
        self._resolve(job, HashOutcome(digest=digest))

    def _resolve(self, job: int, outcome: HashOutcome) -> None:
        with self._lock:
            if job == self._job:
                self._outcome = outcome

    def progress(self) -> float:
        """Fraction of the current file hashed; 0.0 while the size is unknown or zero."""
        with self._lock:
            if self._total_bytes == 0:
                return 0.0
            return min(self._bytes_hashed / self._total_bytes, 1.0)

    def result(self) -> HashOutcome | None:
        """``None`` while in flight, then the outcome until the next ``start()``."""
        with self._lock:
            return self._outcome

    @property
    def current_file(self) -> str:
        with self._lock:
            return self._current_file

    def join(self, timeout: float | None = None) -> None:
        """Block until the most recent background worker exits."""
        if self._thread is not None:
            self._thread.join(timeout)

    def hash_with_polling(
        self,
        path: str | Path,
        on_progress: Callable[[float], None] | None = None,
        poll_interval: float = 0.05,
    ) -> str:
        """Start a background hash and poll it until resolved.

        *on_progress* is called with the file fraction on every poll.
        Re-raises the worker's error if hashing failed.
        """
        self.start(path)
        while True:
            if on_progress is not None:
                on_progress(self.progress())
            outcome = self.result()
            if outcome is not None:
                return outcome.unwrap()
            time.sleep(poll_interval)
