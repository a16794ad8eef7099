"""List the named lint presets."""

from __future__ import annotations

from rich.console import Console
from rich.table import Table

from gqlint.linting import config as keys
from gqlint.linting.presets import PRESETS
from gqlint.linting.rules import RuleCategory

console = Console()

_CLI_NAME = "presets"
_CLI_HELP = "List available lint presets"
_CLI_TYPE = "command"
_CLI_FUNC = "presets"

_LIMITS = (keys.MAX_DEPTH, keys.MAX_SECURITY_DEPTH, keys.MAX_FIELDS, keys.MAX_QUERY_COMPLEXITY)


def presets() -> None:
    """Show every preset with its main limits and per-family severities."""
    table = Table(title="Lint Presets", show_header=True, border_style="dim")
    table.add_column("Preset", style="cyan", no_wrap=True)
    for key in _LIMITS:
        table.add_column(key, justify="right")
    table.add_column("Severities")

    for name, factory in PRESETS.items():
        config = factory()
        severities = []
        for category in RuleCategory:
            override = config.get_severity_override(category.value)
            level = override.name.lower() if override is not None else "default"
            severities.append(f"{category.value}={level}")
        table.add_row(
            name,
            *(str(config.get_value(key, int, 0)) for key in _LIMITS),
            ", ".join(severities),
        )

    console.print(table)
