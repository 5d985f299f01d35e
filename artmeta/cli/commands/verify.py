"""``artmeta verify MANIFEST`` — re-hash a directory against its manifest.

Exit code 0 when everything matches, 1 when any file or the certificate
fails, or the manifest cannot be read.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from artmeta.config import config
from artmeta.core.hasher import ContentHasher
from artmeta.core.manifest_io import ManifestParseError
from artmeta.core.verifier import ManifestVerifier
from artmeta.display.progress import RichProgressReporter
from artmeta.display.renderer import ReportRenderer

console = Console()


def verify_cmd(
    manifest: Path = typer.Argument(
        ...,
        help="Path to the <title>_metadata.json manifest.",
    ),
    base: Optional[Path] = typer.Option(
        None,
        "--base",
        "-b",
        help="Directory holding the files (default: the manifest's folder).",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the report as JSON instead of a table.",
    ),
) -> None:
    """Verify every file recorded in MANIFEST, and its certificate."""
    hasher = ContentHasher(config.hash_chunk_size)

    try:
        if as_json:
            report = ManifestVerifier(hasher=hasher).verify(manifest, base)
        else:
            with RichProgressReporter(console, "Verifying") as reporter:
                report = ManifestVerifier(hasher=hasher, progress=reporter).verify(manifest, base)
    except ManifestParseError as exc:
        console.print(f"[bold red]Invalid manifest:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=1)
    except OSError as exc:
        console.print(f"[bold red]Could not read manifest:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=1)

    if as_json:
        typer.echo(report.model_dump_json(indent=2))
    else:
        console.print()
        ReportRenderer(console=console).print_report(report, manifest)

    if not report.overall_valid:
        raise typer.Exit(code=1)
