"""``artmeta hash PATH...`` — print BLAKE3 digests.

Files are hashed directly; directories are scanned the same way manifest
generation scans them.  Output lines are ``<digest>  <path>``.
"""

from __future__ import annotations

from pathlib import Path
from typing import List

import typer
from rich.console import Console
from rich.markup import escape

from artmeta.config import config
from artmeta.core.assembler import ManifestAssembler
from artmeta.core.hasher import ContentHasher

err_console = Console(stderr=True)


def hash_cmd(
    paths: List[Path] = typer.Argument(
        ...,
        help="Files or directories to hash.",
    ),
) -> None:
    """Print the digest of each file, or of each qualifying file in a directory."""
    hasher = ContentHasher(config.hash_chunk_size)
    scanner = ManifestAssembler(hasher=hasher, manifest_suffix=config.manifest_suffix)
    failed = False

    for path in paths:
        try:
            targets = scanner.scan(path) if path.is_dir() else [path]
        except OSError as exc:
            err_console.print(f"[bold red]Cannot read {path}:[/bold red] {escape(str(exc))}")
            failed = True
            continue
        for target in targets:
            try:
                typer.echo(f"{hasher.hash_file(target)}  {target}")
            except OSError as exc:
                err_console.print(f"[bold red]Error hashing {target}:[/bold red] {escape(str(exc))}")
                failed = True

    if failed:
        raise typer.Exit(code=1)
