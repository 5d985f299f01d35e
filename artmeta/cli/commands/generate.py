"""``artmeta generate DIRECTORY`` — hash a directory and write its manifest.

Collects the descriptive fields from options (prompting for the title),
detects the certificate of authenticity, runs the assembler with a live
progress display and prints a summary of the written manifest.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape

from artmeta.config import config
from artmeta.core.assembler import ManifestAssembler
from artmeta.core.certificate import locate_certificate
from artmeta.core.enrichment import FfprobeEnricher
from artmeta.core.hasher import ContentHasher
from artmeta.core.manifest_io import ManifestParseError, load_manifest
from artmeta.display.progress import RichProgressReporter
from artmeta.display.renderer import ReportRenderer
from artmeta.models.manifest import Metadata

console = Console()


def generate_cmd(
    directory: Path = typer.Argument(
        ...,
        help="Artwork directory to scan (one level, non-recursive).",
    ),
    title: str = typer.Option(
        ...,
        "--title",
        "-t",
        prompt="Artwork title",
        help="Artwork title; also names the manifest file.",
    ),
    artwork_id: str = typer.Option("", "--id", help="Artwork identifier."),
    short_title: str = typer.Option("", "--short-title", help="Short title."),
    creator: str = typer.Option("", "--creator", "-c", help="Artwork creator."),
    year: int = typer.Option(0, "--year", help="Year of creation."),
    short_description: str = typer.Option("", "--short-description", help="One-line description."),
    long_description: str = typer.Option("", "--long-description", help="Full description."),
    edition_number: int = typer.Option(0, "--edition", help="Edition number."),
    total_editions: int = typer.Option(0, "--total-editions", help="Total number of editions."),
    issue_date: str = typer.Option("", "--issue-date", help="Issue date string."),
    gallery: str = typer.Option("", "--gallery", help="Issuing gallery."),
    keyword: Optional[List[str]] = typer.Option(
        None, "--keyword", "-k", help="Keyword (repeatable)."
    ),
    medium: Optional[List[str]] = typer.Option(
        None, "--medium", "-m", help="Medium (repeatable)."
    ),
    use_async: bool = typer.Option(
        config.use_async_hashing,
        "--async/--sync",
        help="Hash on a background thread with polled progress.",
    ),
    certificate: bool = typer.Option(
        True,
        "--certificate/--no-certificate",
        help="Record the certificate PDF from the certificate folder.",
    ),
    ffprobe: bool = typer.Option(
        config.enable_ffprobe,
        "--ffprobe/--no-ffprobe",
        help="Use ffprobe to record resolution and duration.",
    ),
) -> None:
    """Generate ``<title>_metadata.json`` for DIRECTORY.

    Every qualifying file is hashed with BLAKE3.  An existing manifest with
    the same name is overwritten.
    """
    certificate_path = locate_certificate(directory, config.certificate_folder) if certificate else None

    template = Metadata(
        artwork_id=artwork_id,
        artwork_title=title,
        artwork_short_title=short_title,
        artwork_creator=creator,
        year_of_creation=year,
        short_description=short_description,
        long_description=long_description,
        edition_number=edition_number,
        total_editions=total_editions,
        issue_date=issue_date,
        gallery=gallery,
        keywords=keyword or [],
        medium=medium or [],
        certificate_of_authenticity=certificate_path,
    )

    enricher = FfprobeEnricher(config.ffprobe_path) if ffprobe else None

    try:
        with RichProgressReporter(console, "Hashing") as reporter:
            assembler = ManifestAssembler(
                hasher=ContentHasher(config.hash_chunk_size),
                progress=reporter,
                enricher=enricher,
                poll_interval=config.poll_interval,
                manifest_suffix=config.manifest_suffix,
            )
            output = assembler.generate(directory, template, use_polling=use_async)
        written = load_manifest(output)
    except (OSError, ManifestParseError) as exc:
        console.print(f"[bold red]Generation failed:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=1)

    console.print()
    ReportRenderer(console=console).print_manifest_summary(written, output)

    if written.has_certificate and written.certificate_hash is None:
        console.print("[yellow]Warning: certificate could not be hashed.[/yellow]")
