"""Rich progress display implementing the engine's progress callback."""

from __future__ import annotations

from types import TracebackType

from rich.console import Console
from rich.progress import (
    BarColumn,
    Progress,
    TaskID,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)


class RichProgressReporter:
    """Two-bar progress display: the current file and the whole run.

    Use as a context manager and pass the instance itself as the
    ``progress`` callback of an assembler or verifier::

        with RichProgressReporter(console, "Hashing") as reporter:
            ManifestAssembler(progress=reporter).generate(folder, template)
    """

    def __init__(self, console: Console | None = None, label: str = "Processing") -> None:
        self.label = label
        self._progress = Progress(
            TextColumn("[bold cyan]{task.description}", justify="left"),
            BarColumn(bar_width=40),
            TaskProgressColumn(),
            TimeElapsedColumn(),
            console=console or Console(),
            transient=False,
        )
        self._file_task: TaskID | None = None
        self._overall_task: TaskID | None = None

    def __enter__(self) -> RichProgressReporter:
        self._progress.start()
        self._overall_task = self._progress.add_task(self.label, total=1.0)
        self._file_task = self._progress.add_task("[dim]waiting[/dim]", total=1.0)
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self._progress.stop()

    def __call__(self, file_name: str, file_fraction: float, overall_fraction: float) -> None:
        if self._file_task is None or self._overall_task is None:
            return
        self._progress.update(self._file_task, description=file_name, completed=file_fraction)
        self._progress.update(self._overall_task, completed=overall_fraction)
