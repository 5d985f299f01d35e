"""Main Typer application — configures logging and registers all commands.

Entry point: ``artmeta`` (configured via pyproject.toml project.scripts).
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from artmeta.cli.commands.generate import generate_cmd
from artmeta.cli.commands.hash_cmd import hash_cmd
from artmeta.cli.commands.verify import verify_cmd
from artmeta.config import config
from artmeta.core.manifest_io import fingerprint_manifest

app = typer.Typer(
    name="artmeta",
    help="Artmeta: tamper-evident metadata manifests for artwork directories.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)


@app.callback()
def main_callback(
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Logging level (default: ARTMETA_LOG_LEVEL or INFO).",
    ),
) -> None:
    """Configure logging before any command runs."""
    level = (log_level or config.log_level).upper()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(show_path=False, markup=False)],
        force=True,
    )


# Register subcommands
app.command(name="generate", help="Hash a directory and write its manifest.")(generate_cmd)
app.command(name="verify", help="Verify a directory against its manifest.")(verify_cmd)
app.command(name="hash", help="Print BLAKE3 digests of files or directories.")(hash_cmd)


@app.command(name="fingerprint", help="Print the BLAKE3 fingerprint of a manifest file.")
def fingerprint_cmd(
    manifest: Path = typer.Argument(..., help="Manifest file to fingerprint."),
) -> None:
    """Print the self-fingerprint reported by ``verify``."""
    try:
        typer.echo(fingerprint_manifest(manifest))
    except OSError as exc:
        Console(stderr=True).print(f"[bold red]Cannot read manifest:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=1)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
