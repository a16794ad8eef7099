"""List the built-in lint rules."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table

from gqlint.linting.linter import default_rules

console = Console()

_CLI_NAME = "rules"
_CLI_HELP = "List built-in lint rules"
_CLI_TYPE = "command"
_CLI_FUNC = "rules"


def rules() -> None:
    """Show the default rules in execution order."""
    table = Table(title="Lint Rules", show_header=True, border_style="dim")
    table.add_column("Rule", style="cyan", no_wrap=True)
    table.add_column("Category", no_wrap=True)
    table.add_column("Description")

    for rule in default_rules():
        table.add_row(rule.rule_id, rule.category, rule.description)

    console.print(table)
