from __future__ import annotations

"""
Typer CLI entry point and orchestration of the analysis pipeline.

- Accepts a source file or directory path
- Finds .js/.jsx/.ts/.tsx files (traversal.find_source_files for directories)
- Builds a FileContext for each file (one parser per grammar)
- Runs the enabled rules from config.py
- Prints findings with the rich console reporter
- With --apply-suggestions, writes the suggested edits back to each file
"""

import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

import typer

from actionscan.config import Config, get_default_config, get_enabled_rules, with_severity
from actionscan.context import FileContext, load_contexts
from actionscan.findings.models import Finding
from actionscan.fixes import apply_suggestions
from actionscan.parser import UnsupportedLanguageError, language_name_for_path
from actionscan.reporting.console import print_findings
from actionscan.rules.base import Rule
from actionscan.traversal import find_source_files

logger = logging.getLogger(__name__)

app = typer.Typer(help="actionscan - check that Server Actions (`\"use server\"` functions) are async.")


def setup_logging(verbose: bool = False) -> None:
    """Configure logging to stderr."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _collect_source_files(target: Path, config: Config) -> List[Path]:
    """
    Resolve a target path into a list of source files to analyze.

    - A supported source file yields [target]
    - A directory is walked with traversal.find_source_files()
    - Anything else is a bad parameter.
    """
    if target.is_file():
        try:
            language_name_for_path(target)
        except UnsupportedLanguageError as exc:
            raise typer.BadParameter(str(exc)) from exc
        return [target]

    if target.is_dir():
        files = find_source_files(target, ignore_dirs=config.ignore_dirs)
        if not files:
            logger.warning("No JavaScript/TypeScript files found under %s", target)
        return files

    raise typer.BadParameter(f"Target path is neither a file nor a directory: {target}")


def run_rules(ctx: FileContext, rules: Sequence[Rule], config: Config) -> List[Finding]:
    """Run every rule on one file; a crashing rule is logged and skipped."""
    findings: List[Finding] = []
    for rule in rules:
        try:
            findings.extend(rule.run(ctx, config))
        except Exception:
            logger.exception("Rule %s failed on %s", rule.id, ctx.path)
    return findings


def _apply_file_suggestions(ctx: FileContext, findings: Sequence[Finding]) -> int:
    """Write the first suggestion of every finding back to ctx.path; return edits applied."""
    new_source, applied = apply_suggestions(ctx.source, findings)
    if not applied:
        return 0
    try:
        ctx.path.write_bytes(new_source)
    except OSError as e:
        logger.error("Failed to write file %s: %s", ctx.path, e)
        return 0
    logger.info("Applied %d suggestion(s) to %s", len(applied), ctx.path)
    return len(applied)


@app.command()
def analyze(
    target: Path = typer.Argument(
        ...,
        exists=True,
        readable=True,
        resolve_path=True,
        help="JavaScript/TypeScript file or directory to analyze.",
    ),
    select: Optional[List[str]] = typer.Option(
        None,
        "--select",
        "-s",
        help="Only run the given rule id (repeatable).",
    ),
    severity: Optional[str] = typer.Option(
        None,
        "--severity",
        help="Override the severity of the selected rules (error, warning, info).",
    ),
    apply: bool = typer.Option(
        False,
        "--apply-suggestions",
        help="Rewrite files with the suggested fix of every finding.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show suggestions, remediation hints and debug logging.",
    ),
) -> None:
    """
    Analyze a single file or every JavaScript/TypeScript file under a directory.

    Exits with code 1 when findings remain, 0 otherwise.
    """
    setup_logging(verbose)

    config: Config = get_default_config()
    try:
        rules = list(get_enabled_rules(config, select=select or None))
        if severity is not None:
            config = with_severity(config, severity, [rule.id for rule in rules])
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    if not rules:
        typer.echo("No rules are enabled in the current configuration.")
        raise typer.Exit(code=1)

    files = _collect_source_files(target, config)

    all_findings: List[Finding] = []
    analyzed: List[Path] = []
    applied_total = 0

    # Unreadable files are logged and left out by load_contexts
    for ctx in load_contexts(files):
        analyzed.append(ctx.path)
        file_findings = run_rules(ctx, rules, config)
        if apply and file_findings:
            applied = _apply_file_suggestions(ctx, file_findings)
            applied_total += applied
            if applied:
                # Only suggestion-less findings survive a successful rewrite.
                file_findings = [f for f in file_findings if not f.suggestions]
        all_findings.extend(file_findings)

    print_findings(all_findings, analyzed_files=analyzed if len(analyzed) > 1 else None, verbose=verbose)

    if apply:
        typer.echo(f"Applied {applied_total} suggestion(s).")

    if all_findings:
        raise typer.Exit(code=1)


def main() -> None:
    """Entry point for the `actionscan` console script and `python -m actionscan.main`."""
    app()


if __name__ == "__main__":
    main()
