"""CLI command modules."""

from . import lint_cmd, presets_cmd, rules_cmd

__all__ = [
    "lint_cmd",
    "presets_cmd",
    "rules_cmd",
]
