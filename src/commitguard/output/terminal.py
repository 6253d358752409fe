"""Rich terminal reporter — the rejection message shown to the pusher."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from commitguard.checker.models import CheckResult
from commitguard.config.schema import OutputConfig
from commitguard.rules.models import Violation

DEFAULT_HEADER = "Push rejected by commitguard"

_KIND_STYLE = {
    "committer_name": "bold white on dark_orange",
    "committer_email": "bold white on dark_orange",
    "committer_email_regex": "bold white on dark_orange",
    "commit_regex": "bold black on yellow",
    "branch_name": "bold white on red",
}


def _kind_pill(violation: Violation) -> Text:
    if violation.kind is None:
        return Text(" GENERAL ", style="bold black on bright_cyan")
    kind = violation.kind.value
    return Text(f" {kind.upper()} ", style=_KIND_STYLE.get(kind, ""))


def render(
    result: CheckResult,
    output: Optional[OutputConfig] = None,
    *,
    console: Optional[Console] = None,
) -> None:
    """Print check results to the terminal using Rich."""
    output = output or OutputConfig()
    console = console or Console(stderr=True)

    if not result.blocked:
        console.print("[bold green]✅ All commits comply with the commit policy.[/bold green]")
        if output.show_summary:
            _print_summary(console, result)
        return

    console.print()
    console.print(f"[bold red]{output.header or DEFAULT_HEADER}[/bold red]")

    for ref in result.refs:
        if not ref.violations:
            continue
        table = Table(title=ref.ref_id, show_lines=True, title_style="bold", border_style="dim")
        table.add_column("Kind", justify="center", width=24)
        table.add_column("Violation", min_width=40)
        for violation in ref.violations:
            table.add_row(_kind_pill(violation), Text(violation.message))
        console.print(table)

    if output.footer:
        console.print()
        console.print(output.footer)

    if output.show_summary:
        _print_summary(console, result)


def _print_summary(console: Console, result: CheckResult) -> None:
    console.print()
    console.print(f"[dim]Refs checked:[/dim]  {len(result.refs)}")
    console.print(f"[dim]Commits:[/dim]       {result.commit_count}")
    console.print(f"[dim]Violations:[/dim]    {result.total_violations}")
    console.print(f"[dim]Duration:[/dim]      {result.duration_ms:.0f}ms")
