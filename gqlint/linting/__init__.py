"""Lint engine, rule families and configuration for GraphQL documents."""

from gqlint.linting.best_practice_rules import BestPracticeRule
from gqlint.linting.config import LintConfig, RuleConfig
from gqlint.linting.context import LintContext, NodeVisitor
from gqlint.linting.linter import EMPTY_QUERY, PARSE_ERROR, GraphQLLinter, default_rules
from gqlint.linting.models import Diagnostic, DiagnosticCollection, Severity
from gqlint.linting.performance_rules import PerformanceRule
from gqlint.linting.rules import BaseRule, LintRule, RuleCategory
from gqlint.linting.security_rules import SecurityRule
from gqlint.linting.style_rules import StyleRule

__all__ = [
    "EMPTY_QUERY",
    "PARSE_ERROR",
    "BaseRule",
    "BestPracticeRule",
    "Diagnostic",
    "DiagnosticCollection",
    "GraphQLLinter",
    "LintConfig",
    "LintContext",
    "LintRule",
    "NodeVisitor",
    "PerformanceRule",
    "RuleCategory",
    "RuleConfig",
    "SecurityRule",
    "Severity",
    "StyleRule",
    "default_rules",
]
