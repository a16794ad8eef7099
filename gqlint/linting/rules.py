"""Lint rule protocol and shared helpers for GraphQL lint rules."""

from __future__ import annotations

import re
from enum import StrEnum
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from gqlint.linting.context import LintContext
    from gqlint.linting.models import DiagnosticCollection

CAMEL_CASE_RE = re.compile(r"^[a-z][a-zA-Z0-9]*$")
PASCAL_CASE_RE = re.compile(r"^[A-Z][a-zA-Z0-9]*$")


class RuleCategory(StrEnum):
    """Built-in rule families. Custom rules may use any other string."""

    STYLE = "STYLE"
    BEST_PRACTICE = "BEST_PRACTICE"
    PERFORMANCE = "PERFORMANCE"
    SECURITY = "SECURITY"


@runtime_checkable
class LintRule(Protocol):
    """Protocol for a single lint rule.

    Rules are stateless: anything computed during ``run`` lives in locals, so
    one instance can serve many concurrent lint runs.
    """

    rule_id: str
    category: str
    description: str

    def is_enabled(self, context: LintContext) -> bool:
        """Whether this rule should run for the given context."""
        ...

    def run(self, context: LintContext, collection: DiagnosticCollection) -> None:
        """Inspect the context's document and append diagnostics."""
        ...


class BaseRule:
    """Convenience base: config-driven ``is_enabled`` and a readable repr.

    Subclasses set ``rule_id``, ``category`` and ``description`` as class
    attributes and implement ``run``.
    """

    rule_id: str = ""
    category: str = ""
    description: str = ""

    def is_enabled(self, context: LintContext) -> bool:
        return context.config.is_rule_enabled(self.rule_id)

    def run(self, context: LintContext, collection: DiagnosticCollection) -> None:
        raise NotImplementedError

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BaseRule):
            return NotImplemented
        return (
            type(self) is type(other)
            and self.rule_id == other.rule_id
            and self.category == other.category
            and self.description == other.description
        )

    def __hash__(self) -> int:
        return hash((type(self), self.rule_id, self.category, self.description))

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(rule_id={self.rule_id!r}, category={self.category!r}, "
            f"description={self.description!r})"
        )


def contains_any(text: str, vocabulary: frozenset[str]) -> str | None:
    """Return the first vocabulary term found in ``text`` (case-insensitive substring)."""
    lowered = text.lower()
    for term in sorted(vocabulary):
        if term.lower() in lowered:
            return term
    return None
