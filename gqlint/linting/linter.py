"""Lint engine: runs registered rules against one document.

Examples
--------
>>> from gqlint.linting.linter import GraphQLLinter
>>> linter = GraphQLLinter.with_default_rules()
>>> linter.lint("query GetUser { user { id name } }").has_errors()
False
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from graphql import GraphQLError, parse
from graphql.language import DocumentNode

from gqlint.linting.best_practice_rules import BestPracticeRule
from gqlint.linting.config import LintConfig
from gqlint.linting.context import LintContext
from gqlint.linting.models import Diagnostic, DiagnosticCollection, Severity
from gqlint.linting.performance_rules import PerformanceRule
from gqlint.linting.security_rules import SecurityRule
from gqlint.linting.style_rules import StyleRule
from gqlint.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable

    from gqlint.linting.rules import LintRule

logger = get_logger(__name__)

EMPTY_QUERY = "EMPTY_QUERY"
PARSE_ERROR = "PARSE_ERROR"


def default_rules() -> list[LintRule]:
    """Fresh instances of the built-in rule families, in execution order."""
    return [StyleRule(), BestPracticeRule(), PerformanceRule(), SecurityRule()]


def _rule_id(rule: Any) -> str:
    return getattr(rule, "rule_id", None) or type(rule).__name__


class GraphQLLinter:
    """Orchestrates rule execution over a GraphQL document.

    A rule that raises never aborts the run: its failure is reported as a
    WARNING diagnostic carrying the rule's id, and the next rule runs. When
    the config holds a severity override for a rule, every diagnostic that
    rule reports is re-issued at that severity.

    Parameters
    ----------
    config : LintConfig | None
        Configuration shared by every run; defaults to ``LintConfig()``
    rules : Iterable[LintRule] | None
        Initial rules, executed in the given order
    """

    __slots__ = ("_config", "_rules")

    def __init__(
        self, config: LintConfig | None = None, rules: Iterable[LintRule] | None = None
    ) -> None:
        self._config = config if config is not None else LintConfig()
        self._rules: list[LintRule] = []
        if rules is not None:
            self.add_rules(rules)

    @classmethod
    def with_default_rules(cls, config: LintConfig | None = None) -> GraphQLLinter:
        """Linter with Style, Best-Practice, Performance and Security registered."""
        return cls(config, default_rules())

    @property
    def config(self) -> LintConfig:
        return self._config

    # ------------------------------------------------------------------
    # Linting
    # ------------------------------------------------------------------

    def lint(
        self,
        document: DocumentNode | str | None = None,
        context: LintContext | None = None,
    ) -> DiagnosticCollection:
        """Lint a parsed document, raw source text, or a prepared context.

        Never raises: empty text, parse failures and rule failures are all
        reported as diagnostics.
        """
        collection = DiagnosticCollection()
        if context is None:
            if document is None:
                return collection
            parsed = self._prepare(document, collection)
            if parsed is None:
                return collection
            context = LintContext(parsed, self._config)

        for rule in list(self._rules):
            self._run_rule(rule, context, collection)

        logger.debug("Lint finished: {}", collection.get_summary())
        return collection

    def _prepare(
        self, document: DocumentNode | str, collection: DiagnosticCollection
    ) -> DocumentNode | None:
        if isinstance(document, DocumentNode):
            return document
        if not isinstance(document, str):
            collection.add_error(
                PARSE_ERROR, f"Unsupported input type: {type(document).__name__}"
            )
            return None
        if not document.strip():
            collection.add_error(EMPTY_QUERY, "Query text is empty")
            return None
        try:
            return parse(document)
        except GraphQLError as e:
            logger.warning("Failed to parse document: {}", e.message)
            collection.add_diagnostic(self._parse_error(e))
        except Exception as e:
            logger.warning("Failed to parse document: {}", e)
            collection.add_error(PARSE_ERROR, f"Failed to parse query: {e}")
        return None

    @staticmethod
    def _parse_error(error: GraphQLError) -> Diagnostic:
        line = column = None
        if error.locations:
            line, column = error.locations[0].line, error.locations[0].column
        return Diagnostic(
            rule_id=PARSE_ERROR,
            message=f"Failed to parse query: {error.message}",
            severity=Severity.ERROR,
            path="document",
            line=line,
            column=column,
        )

    def _run_rule(
        self, rule: LintRule, context: LintContext, collection: DiagnosticCollection
    ) -> None:
        rule_id = _rule_id(rule)
        findings = DiagnosticCollection()
        failure: Exception | None = None
        try:
            if not rule.is_enabled(context):
                logger.debug("Skipping disabled rule {}", rule_id)
                return
            logger.debug("Running rule {}", rule_id)
            rule.run(context, findings)
        except Exception as e:
            logger.warning("Rule {} failed: {}", rule_id, e)
            failure = e

        override = context.config.get_severity_override(rule_id)
        for diagnostic in findings:
            if override is not None:
                diagnostic = diagnostic.with_severity(override)
            collection.add_diagnostic(diagnostic)

        if failure is not None:
            collection.add_diagnostic(
                Diagnostic(
                    rule_id=rule_id,
                    message=f"Rule execution failed: {failure}",
                    severity=Severity.WARNING,
                    path="document",
                )
            )

    # ------------------------------------------------------------------
    # Registry
    # ------------------------------------------------------------------

    def add_rule(self, rule: LintRule | None) -> GraphQLLinter:
        if rule is not None:
            self._rules.append(rule)
        return self

    def add_rules(self, rules: Iterable[LintRule | None] | None) -> GraphQLLinter:
        for rule in rules or ():
            self.add_rule(rule)
        return self

    def remove_rule(self, rule: LintRule | str | None) -> GraphQLLinter:
        """Remove a rule instance, or every rule with the given id."""
        if rule is None:
            return self
        if isinstance(rule, str):
            self._rules = [r for r in self._rules if _rule_id(r) != rule]
        else:
            self._rules = [r for r in self._rules if r is not rule]
        return self

    def clear_rules(self) -> GraphQLLinter:
        self._rules.clear()
        return self

    @property
    def rules(self) -> tuple[LintRule, ...]:
        return tuple(self._rules)

    @property
    def rule_count(self) -> int:
        return len(self._rules)

    def has_rules(self) -> bool:
        return bool(self._rules)

    def has_rule(self, rule_id: str) -> bool:
        return self.get_rule(rule_id) is not None

    def get_rule(self, rule_id: str) -> LintRule | None:
        return next((r for r in self._rules if _rule_id(r) == rule_id), None)

    def get_rules_by_category(self, category: str) -> list[LintRule]:
        return [r for r in self._rules if getattr(r, "category", None) == category]

    # ------------------------------------------------------------------
    # Copies
    # ------------------------------------------------------------------

    def copy(self) -> GraphQLLinter:
        """Same config, no rules."""
        return GraphQLLinter(self._config)

    def deep_copy(self) -> GraphQLLinter:
        """Same config and the same (stateless) rule instances."""
        return GraphQLLinter(self._config, self._rules)

    def __repr__(self) -> str:
        ids = ", ".join(_rule_id(r) for r in self._rules)
        return f"GraphQLLinter(rules=[{ids}])"
