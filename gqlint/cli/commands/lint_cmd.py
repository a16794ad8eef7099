"""GraphQL document linting command for the gqlint CLI."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from gqlint.config_loader import load_config
from gqlint.exceptions import GqlintError
from gqlint.linting.linter import GraphQLLinter, default_rules
from gqlint.linting.models import Severity
from gqlint.linting.presets import get_preset

if TYPE_CHECKING:
    from gqlint.linting.config import LintConfig
    from gqlint.linting.models import Diagnostic, DiagnosticCollection

console = Console()

_CLI_NAME = "lint"
_CLI_HELP = "Lint GraphQL documents for style, best-practice, performance and security issues"
_CLI_TYPE = "command"
_CLI_FUNC = "lint"

_STDIN = "-"
_FORMATS = ("text", "json")
_SEVERITY_STYLE = {Severity.ERROR: "red", Severity.WARNING: "yellow", Severity.INFO: "blue"}


def lint(
    files: Annotated[
        list[str],
        typer.Argument(help="GraphQL files to lint ('-' reads from stdin)"),
    ],
    preset: Annotated[
        str | None,
        typer.Option("--preset", "-p", help="Named preset (strict, relaxed, performance, ...)"),
    ] = None,
    config_file: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Config file (kind: LintConfig YAML or a TOML file with [tool.gqlint])",
        ),
    ] = None,
    severity: Annotated[
        str,
        typer.Option(
            "--severity",
            "-s",
            help="Minimum severity to report (error, warning, info)",
        ),
    ] = "info",
    output_format: Annotated[
        str,
        typer.Option(
            "--format",
            "-f",
            help="Output format (text, json)",
        ),
    ] = "text",
    disable: Annotated[
        str,
        typer.Option(
            "--disable",
            "-d",
            help="Comma-separated rule IDs to skip (e.g., STYLE,PERFORMANCE)",
        ),
    ] = "",
) -> None:
    """Lint GraphQL query documents.

    Exits with status 1 when any document has an ERROR-level finding.

    Examples
    --------
    gqlint lint query.graphql
    gqlint lint queries/*.graphql --preset strict
    gqlint lint query.graphql --severity warning --format json
    cat query.graphql | gqlint lint - --disable STYLE
    """
    try:
        min_severity = Severity.parse(severity)
    except ValueError:
        console.print(
            f"[red]Invalid severity '{severity}'.[/red] Choose from: error, warning, info"
        )
        raise typer.Exit(1) from None

    if output_format not in _FORMATS:
        console.print(f"[red]Invalid format '{output_format}'.[/red] Choose from: text, json")
        raise typer.Exit(1)

    if preset and config_file:
        console.print("[red]Use either --preset or --config, not both.[/red]")
        raise typer.Exit(1)

    try:
        config = get_preset(preset) if preset else load_config(config_file)
    except GqlintError as e:
        console.print(f"[red]Configuration Error:[/red] {e}")
        raise typer.Exit(1) from e

    config = _apply_disabled(config, disable)
    linter = GraphQLLinter.with_default_rules(config)

    results: list[tuple[str, DiagnosticCollection]] = []
    for name in files:
        try:
            text = sys.stdin.read() if name == _STDIN else Path(name).read_text(encoding="utf-8")
        except OSError as e:
            console.print(f"[red]File Error:[/red] {e}")
            raise typer.Exit(1) from e
        results.append((name, linter.lint(text)))

    if output_format == "json":
        _print_json(results, min_severity)
    else:
        for name, collection in results:
            _print_text(name, collection, min_severity)

    if any(collection.has_errors() for _, collection in results):
        raise typer.Exit(1)


def _apply_disabled(config: LintConfig, disable: str) -> LintConfig:
    """Copy of ``config`` with the comma-separated rule ids switched off."""
    disabled_ids = {r.strip().upper() for r in disable.split(",") if r.strip()}
    if not disabled_ids:
        return config

    known_ids = {r.rule_id for r in default_rules()}
    unknown = disabled_ids - known_ids
    if unknown:
        console.print(
            f"[yellow]Unknown rule ID(s): {', '.join(sorted(unknown))}[/yellow]  "
            f"Known: {', '.join(sorted(known_ids))}"
        )
    return config.copy().disable_rules(sorted(disabled_ids))


def _location(diagnostic: Diagnostic) -> str:
    if diagnostic.line is None:
        return diagnostic.path or ""
    return f"{diagnostic.line}:{diagnostic.column or 1}"


def _print_text(name: str, collection: DiagnosticCollection, min_severity: Severity) -> None:
    """Print lint results for one document as rich text."""
    filtered = collection.at_least(min_severity)
    console.print()

    if not filtered:
        console.print(f"[green]No issues found:[/green] {name}")
        console.print()
        return

    console.print(
        f"[bold]{name}[/bold]  "
        f"[red]{collection.error_count} error(s)[/red]  "
        f"[yellow]{collection.warning_count} warning(s)[/yellow]  "
        f"[blue]{collection.info_count} info[/blue]"
    )
    console.print()

    table = Table(show_header=True, border_style="dim")
    table.add_column("Rule", style="cyan", no_wrap=True)
    table.add_column("Severity", no_wrap=True)
    table.add_column("Location", style="green", no_wrap=True)
    table.add_column("Message")

    for d in filtered:
        style = _SEVERITY_STYLE[d.severity]
        table.add_row(
            d.rule_id,
            f"[{style}]{d.severity.name.lower()}[/{style}]",
            _location(d),
            escape(d.message),
        )

    console.print(table)
    console.print()


def _print_json(results: list[tuple[str, DiagnosticCollection]], min_severity: Severity) -> None:
    """Print lint results for every document as one JSON array."""
    output = [
        {
            "file": name,
            "summary": collection.get_summary(),
            "errors": collection.error_count,
            "warnings": collection.warning_count,
            "info": collection.info_count,
            "issues": [d.to_dict() for d in collection.at_least(min_severity)],
        }
        for name, collection in results
    ]
    console.print(
        json.dumps(output, indent=2), markup=False, highlight=False, emoji=False, soft_wrap=True
    )
