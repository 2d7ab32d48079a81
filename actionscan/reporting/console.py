# Rich console output: format findings and their suggestions for terminal display.

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from actionscan.findings.models import Finding
from actionscan.rules.base import docs_url


# Remediation hints per rule (shown with --verbose)
RULE_REMEDIATIONS: dict[str, str] = {
    "async-server-action": (
        "Server Actions are called over the network and always return a Promise; "
        "declare the function `async` (run with --apply-suggestions to insert it)."
    ),
}

# Severity → Rich style
SEVERITY_STYLE = {
    "error": "bold red",
    "warning": "bold yellow",
    "info": "bold blue",
}

DEFAULT_SEVERITY_STYLE = "bold white"


def _severity_style(severity: str) -> str:
    return SEVERITY_STYLE.get(severity.lower(), DEFAULT_SEVERITY_STYLE)


def _get_remediation(finding: Finding) -> str | None:
    """Return remediation hint for a finding, or None if unknown."""
    return RULE_REMEDIATIONS.get(finding.rule_id)


def print_findings(
    findings: Sequence[Finding],
    analyzed_files: Sequence[Path] | None = None,
    verbose: bool = False,
    console: Console | None = None,
) -> None:
    """
    Print findings grouped by file, colored by severity, with code snippets.

    With verbose, each finding's suggestions and per-rule remediation hints
    are listed too. If analyzed_files is provided, a file-by-file summary
    table (clean vs flagged) is printed.
    """
    if console is None:
        console = Console()

    if not findings and not analyzed_files:
        console.print(
            Panel(
                "[green]No issues found.[/green]",
                title="actionscan",
                border_style="green",
                box=box.ROUNDED,
            )
        )
        return

    if not findings and analyzed_files:
        _print_file_summary_table([], analyzed_files, console)
        return

    by_file: dict[str, list[Finding]] = {}
    for f in findings:
        by_file.setdefault(str(f.location.path), []).append(f)

    for path in sorted(by_file.keys()):
        file_findings = sorted(by_file[path], key=lambda x: (x.location.line, x.location.column))

        console.print()
        console.print(Panel(
            f"[bold cyan]{_shorten_path(path)}[/bold cyan]",
            box=box.SIMPLE_HEAD,
            border_style="blue",
            padding=(0, 1),
        ))

        table = Table(
            show_header=True,
            header_style="bold magenta",
            box=box.SIMPLE,
            padding=(0, 1),
            expand=False,
        )
        table.add_column("Line", justify="right", style="dim", width=5)
        table.add_column("Col", justify="right", style="dim", width=4)
        table.add_column("Severity", width=10)
        table.add_column("Rule", width=22)
        table.add_column("Message", style="white")

        for f in file_findings:
            loc = f.location
            table.add_row(
                str(loc.line),
                str(loc.column),
                Text(f.severity.upper(), style=_severity_style(f.severity)),
                Text(f"[{f.rule_id}]", style="dim"),
                f.message,
            )

        console.print(table)

        for f in file_findings:
            if f.location.snippet:
                console.print(Text.assemble(("  |-- ", "dim"), f.location.snippet.strip()))
            if verbose:
                for suggestion in f.suggestions:
                    console.print(
                        Text.assemble(
                            ("  [Suggestion] ", "dim"),
                            (suggestion.description, "green"),
                            f" (insert {suggestion.fix.text.strip()!r} at "
                            f"{suggestion.fix.line}:{suggestion.fix.column})",
                        )
                    )
        console.print()

        if verbose:
            seen_rules: set[str] = set()
            for f in file_findings:
                if f.rule_id not in seen_rules:
                    seen_rules.add(f.rule_id)
                    rem = _get_remediation(f)
                    if rem:
                        console.print(Text(f"  [Fix] [{f.rule_id}] {rem}", style="dim"))
                        console.print(Text(f"        see {docs_url(f.rule_id)}", style="dim"))
            if seen_rules:
                console.print()

    if analyzed_files:
        _print_file_summary_table(findings, analyzed_files, console)

    _print_summary(findings, console)


def _shorten_path(path: str | Path) -> str:
    """Return the path relative to the working directory when possible."""
    p = Path(path)
    try:
        return p.resolve().relative_to(Path.cwd().resolve()).as_posix()
    except ValueError:
        return p.as_posix()


def _print_file_summary_table(
    findings: Sequence[Finding],
    analyzed_files: Sequence[Path],
    console: Console,
) -> None:
    """Print a table of clean vs flagged files."""
    by_path: dict[str, int] = {}
    for f in findings:
        key = str(f.location.path)
        by_path[key] = by_path.get(key, 0) + 1

    clean_files = [p for p in analyzed_files if str(p) not in by_path]
    flagged_files = [p for p in analyzed_files if str(p) in by_path]

    table = Table(
        title="Files Summary",
        show_header=True,
        header_style="bold cyan",
        box=box.ROUNDED,
        padding=(0, 1),
    )
    table.add_column("File", style="white")
    table.add_column("Status", width=10)
    table.add_column("Findings", justify="right", width=8)

    for p in sorted(flagged_files, key=str):
        table.add_row(
            _shorten_path(p),
            Text("FLAGGED", style="bold red"),
            str(by_path[str(p)]),
        )
    for p in sorted(clean_files, key=str):
        table.add_row(
            _shorten_path(p),
            Text("OK", style="bold green"),
            "0",
        )

    console.print()
    console.print(Panel(table, border_style="cyan", box=box.ROUNDED))


def _print_summary(findings: Sequence[Finding], console: Console) -> None:
    """Print a compact summary of findings."""
    by_severity: dict[str, int] = {}
    for f in findings:
        s = f.severity.lower()
        by_severity[s] = by_severity.get(s, 0) + 1

    total = len(findings)
    suggestable = sum(1 for f in findings if f.suggestions)
    summary_parts = [f"[bold]{total} finding{'s' if total != 1 else ''}[/bold]"]
    for sev in ("error", "warning", "info"):
        if sev in by_severity:
            summary_parts.append(
                f"[{_severity_style(sev)}]{by_severity[sev]} {sev}[/]"
            )
    if suggestable:
        summary_parts.append(f"[green]{suggestable} with suggestions[/green]")

    console.print()
    console.print(
        Panel(
            " | ".join(summary_parts),
            title="Summary",
            border_style="yellow" if total > 0 else "green",
            box=box.ROUNDED,
        )
    )
