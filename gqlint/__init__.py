"""gqlint - rule-based static analysis for GraphQL documents.

Inspects parsed queries, mutations and subscriptions and reports style,
best-practice, performance and security diagnostics without executing them.
"""

# Version is defined in pyproject.toml and read dynamically
try:
    from importlib.metadata import version

    __version__ = version("gqlint")
except Exception:
    __version__ = "0.0.0.dev0"  # Fallback for development installs

from gqlint.linting import presets
from gqlint.linting.config import LintConfig, RuleConfig
from gqlint.linting.context import LintContext, NodeVisitor
from gqlint.linting.linter import GraphQLLinter
from gqlint.linting.models import Diagnostic, DiagnosticCollection, Severity
from gqlint.linting.rules import BaseRule, LintRule, RuleCategory

__all__ = [
    "BaseRule",
    "Diagnostic",
    "DiagnosticCollection",
    "GraphQLLinter",
    "LintConfig",
    "LintContext",
    "LintRule",
    "NodeVisitor",
    "RuleCategory",
    "RuleConfig",
    "Severity",
    "__version__",
    "presets",
]
