"""Rich terminal renderer for verification reports and generated manifests.

Color scheme
------------
- green     : valid file / certificate
- red       : hash mismatch, unreadable, or invalid certificate
- yellow    : missing file
- dim       : certificate not applicable
"""

from __future__ import annotations

from pathlib import Path

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from artmeta.models.manifest import Metadata
from artmeta.models.reports import (
    FILE_NOT_FOUND,
    CertificateStatus,
    VerificationReport,
    VerificationResult,
)

_CERTIFICATE_DISPLAY: dict[CertificateStatus, str] = {
    CertificateStatus.VALID: "[green]valid[/green]",
    CertificateStatus.INVALID: "[bold red]INVALID[/bold red]",
    CertificateStatus.NOT_APPLICABLE: "[dim]not applicable[/dim]",
}


def _short(digest: str, width: int = 16) -> str:
    if not digest:
        return "[dim]-[/dim]"
    return digest[:width] + "..." if len(digest) > width else digest


def _status(result: VerificationResult) -> str:
    if result.is_valid:
        return "[green]VALID[/green]"
    if result.error == FILE_NOT_FOUND:
        return "[yellow]MISSING[/yellow]"
    if result.error:
        return "[bold red]ERROR[/bold red]"
    return "[bold red]MISMATCH[/bold red]"


class ReportRenderer:
    """Renders manifests and ``VerificationReport`` objects as Rich output.

    Parameters
    ----------
    console:
        Rich Console instance.  A new one is created if not provided.
    """

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    # ------------------------------------------------------------------
    # Verification report
    # ------------------------------------------------------------------

    def render_report(self, report: VerificationReport, manifest_path: Path | None = None) -> Panel:
        """Render a report as a Panel containing the per-file table and a summary."""
        table = Table(show_header=True, header_style="bold cyan", expand=True)
        table.add_column("#", style="dim", width=5, justify="right")
        table.add_column("File", min_width=20)
        table.add_column("Status", justify="center", min_width=10)
        table.add_column("Expected", min_width=19)
        table.add_column("Actual", min_width=19)
        table.add_column("Details")

        for i, result in enumerate(report.results, start=1):
            details = f"[red]{result.error}[/red]" if result.error else "[dim]-[/dim]"
            table.add_row(
                str(i),
                result.file_name,
                _status(result),
                _short(result.expected_hash),
                _short(result.actual_hash),
                details,
            )

        summary_parts = [
            f"[bold]Files:[/bold] {report.valid_files}/{report.total_files} valid",
            f"[bold]Invalid:[/bold] {report.invalid_files}",
            f"[bold]Certificate:[/bold] {_CERTIFICATE_DISPLAY[report.certificate_status]}",
        ]
        overall = (
            "[bold green]VERIFIED[/bold green]"
            if report.overall_valid
            else "[bold red]VERIFICATION FAILED[/bold red]"
        )
        summary_parts.append(f"[bold]Result:[/bold] {overall}")

        lines = [Text.from_markup("  |  ".join(summary_parts))]
        lines.append(Text.from_markup(f"[dim]Manifest fingerprint: {report.metadata_file_hash}[/dim]"))
        if report.certificate_hash:
            lines.append(Text.from_markup(f"[dim]Certificate hash:     {report.certificate_hash}[/dim]"))

        title = "[bold]Verification Report[/bold]"
        if manifest_path is not None:
            title = f"[bold]Verification Report[/bold] [dim]{manifest_path.name}[/dim]"

        return Panel(
            Group(table, Text(""), *lines),
            title=title,
            border_style="green" if report.overall_valid else "red",
            padding=(1, 2),
        )

    def print_report(self, report: VerificationReport, manifest_path: Path | None = None) -> None:
        self.console.print(self.render_report(report, manifest_path))

    # ------------------------------------------------------------------
    # Generated manifest
    # ------------------------------------------------------------------

    def print_manifest_summary(self, metadata: Metadata, output: Path) -> None:
        """Print the post-generation summary panel."""
        total_bytes = sum(f.file_size for f in metadata.artwork_files)
        lines = [
            "[bold green]Manifest written![/bold green]",
            "",
            f"[bold]Title:[/bold]        {metadata.artwork_title}",
            f"[bold]Creator:[/bold]      {metadata.artwork_creator or '-'}",
            f"[bold]Files:[/bold]        {len(metadata.artwork_files)} ({total_bytes} bytes)",
        ]
        if metadata.has_certificate:
            cert = (
                _short(metadata.certificate_hash)
                if metadata.certificate_hash
                else "[yellow]not hashed[/yellow]"
            )
            lines.append(f"[bold]Certificate:[/bold]  {metadata.certificate_of_authenticity} ({cert})")
        else:
            lines.append("[bold]Certificate:[/bold]  [dim]none[/dim]")
        lines += ["", f"[dim]{output}[/dim]"]

        self.console.print(
            Panel(
                "\n".join(lines),
                title="[bold]Artmeta[/bold]",
                border_style="green",
                padding=(1, 2),
            )
        )
