"""Tests for the rich console reporter."""

import io
from pathlib import Path

from rich.console import Console

from actionscan.findings.models import Finding, Fix, Location, Suggestion
from actionscan.reporting.console import print_findings


def _console() -> tuple[Console, io.StringIO]:
    buf = io.StringIO()
    return Console(file=buf, width=200, color_system=None), buf


def _finding(path: str = "app/actions.js", line: int = 3, severity: str = "warning") -> Finding:
    return Finding(
        rule_id="async-server-action",
        message_id="async-server-action",
        message="Server Actions must be async",
        location=Location(path=Path(path), line=line, column=1, snippet="function addToCart(data) {"),
        severity=severity,
        suggestions=(
            Suggestion(
                message_id="suggest-async",
                description="Make `addToCart` async",
                fix=Fix(offset=10, text="async ", line=line, column=1),
            ),
        ),
    )


def test_no_findings_prints_clean_panel():
    console, buf = _console()
    print_findings([], console=console)
    assert "No issues found." in buf.getvalue()


def test_findings_table_and_summary():
    console, buf = _console()
    print_findings([_finding()], console=console)
    out = buf.getvalue()
    assert "Server Actions must be async" in out
    assert "[async-server-action]" in out
    assert "WARNING" in out
    assert "function addToCart(data) {" in out
    assert "1 finding" in out
    assert "1 with suggestions" in out
    assert "Make `addToCart` async" not in out


def test_verbose_lists_suggestions_and_remediation():
    console, buf = _console()
    print_findings([_finding()], verbose=True, console=console)
    out = buf.getvalue()
    assert "Make `addToCart` async" in out
    assert "'async' at 3:1" in out
    assert "[Fix] [async-server-action]" in out
    assert "docs/rules/async-server-action.md" in out


def test_file_summary_table():
    console, buf = _console()
    print_findings(
        [_finding(path="a.js"), _finding(path="a.js", line=9, severity="error")],
        analyzed_files=[Path("a.js"), Path("b.js")],
        console=console,
    )
    out = buf.getvalue()
    assert "Files Summary" in out
    assert "FLAGGED" in out
    assert "OK" in out
    assert "2 findings" in out
    assert "1 error" in out
    assert "1 warning" in out


def test_summary_table_only_when_all_files_clean():
    console, buf = _console()
    print_findings([], analyzed_files=[Path("a.js")], console=console)
    out = buf.getvalue()
    assert "Files Summary" in out
    assert "FLAGGED" not in out
