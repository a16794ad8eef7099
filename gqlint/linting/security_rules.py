"""Security rule: introspection, sensitive data, injection and DoS heuristics.

Everything here is pattern- or structure-based; the document is never
executed. Access-control findings only surface candidates for review, they
never decide anything.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import TYPE_CHECKING

from gqlint.linting import config as keys
from gqlint.linting.context import walk
from gqlint.linting.rules import BaseRule, RuleCategory, contains_any

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from graphql.language import ArgumentNode, StringValueNode, ValueNode

    from gqlint.linting.context import LintContext
    from gqlint.linting.models import DiagnosticCollection

_SQL_PUNCTUATION = r"'|;|--|/\*|\*/"


@lru_cache(maxsize=32)
def sql_injection_pattern(keywords: frozenset[str]) -> re.Pattern[str]:
    """Whole-word, case-insensitive ``keywords`` plus quote and comment punctuation."""
    words = "|".join(sorted(re.escape(k) for k in keywords if k))
    if not words:
        return re.compile(_SQL_PUNCTUATION)
    return re.compile(rf"(?i)\b({words})\b|{_SQL_PUNCTUATION}")


SQL_INJECTION_PATTERN = sql_injection_pattern(keys.DEFAULT_SQL_KEYWORDS)
XSS_PATTERN = re.compile(r"(?i)(<script|javascript:|onload=|onerror=|onclick=|<iframe|<img|<svg)")
PATH_TRAVERSAL_PATTERN = re.compile(r"(?i)(\.\./|\.\.\\|%2e%2e|%2e%2e%2f|%2e%2e%5c)")

_FIXED_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("XSS", XSS_PATTERN),
    ("path traversal", PATH_TRAVERSAL_PATTERN),
)

INTROSPECTION_ROOTS = frozenset({"__schema", "__type"})
MUTATING_VERBS = ("create", "update", "delete", "remove")

_UNSAFE_CHARACTERS = ("'", '"', ";")


def matches_injection(
    text: str, sql_keywords: Iterable[str] = keys.DEFAULT_SQL_KEYWORDS
) -> list[str]:
    """Labels of every injection pattern class found in ``text``."""
    patterns = (
        ("SQL injection", sql_injection_pattern(frozenset(sql_keywords))),
        *_FIXED_PATTERNS,
    )
    return [label for label, pattern in patterns if pattern.search(text)]


def _string_values(value: ValueNode | None, label: str) -> Iterator[tuple[str, StringValueNode]]:
    """Yield ``(label, node)`` for every string inside an argument value."""
    if value is None:
        return
    if value.kind == "string_value":
        yield label, value  # type: ignore[misc]
    elif value.kind == "list_value":
        for item in value.values:  # type: ignore[attr-defined]
            yield from _string_values(item, label)
    elif value.kind == "object_value":
        for object_field in value.fields:  # type: ignore[attr-defined]
            yield from _string_values(object_field.value, f"{label}.{object_field.name.value}")


class SecurityRule(BaseRule):
    """Risk patterns that deserve a closer look before a query ships."""

    rule_id = RuleCategory.SECURITY.value
    category = RuleCategory.SECURITY.value
    description = "Introspection, sensitive fields, injection patterns and DoS limits"

    def run(self, context: LintContext, collection: DiagnosticCollection) -> None:
        self._check_introspection(context, collection)
        self._check_sensitive_names(context, collection)
        if context.get_config_value(keys.ENFORCE_INPUT_VALIDATION, bool, True):
            self._check_argument_values(context, collection)
            self._check_names_for_injection(context, collection)
        self._check_depth(context, collection)
        self._check_complexity(context, collection)
        self._check_directives(context, collection)
        self._check_fragments(context, collection)
        self._check_mutations(context, collection)
        if context.get_config_value(keys.ENFORCE_ACCESS_CONTROL, bool, True):
            self._check_access_control(context, collection)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def _check_introspection(
        self, context: LintContext, collection: DiagnosticCollection
    ) -> None:
        if not context.get_config_value(keys.FORBIDDEN_INTROSPECTION, bool, True):
            return
        for field in context.find_fields(lambda f: f.name.value.startswith("__")):
            name = field.name.value
            collection.add_warning(
                self.rule_id,
                f"Introspection field '{name}' detected - consider restricting in production",
                field,
            )
            if name in INTROSPECTION_ROOTS:
                collection.add_error(
                    self.rule_id,
                    f"Introspection field '{name}' detected - security risk in production",
                    field,
                )
        if context.contains_introspection_queries():
            collection.add_error(
                self.rule_id,
                "Introspection queries detected - disable in production for security",
                context.document,
            )

    # ------------------------------------------------------------------
    # Sensitive data
    # ------------------------------------------------------------------

    def _check_sensitive_names(
        self, context: LintContext, collection: DiagnosticCollection
    ) -> None:
        sensitive = context.get_config_value(
            keys.SENSITIVE_FIELDS, frozenset, keys.DEFAULT_SENSITIVE_FIELDS
        )
        patterns = context.get_config_value(
            keys.SENSITIVE_PATTERNS, frozenset, keys.DEFAULT_SENSITIVE_PATTERNS
        )
        for node in context.nodes():
            if node.kind == "field":
                label = "field"
            elif node.kind == "argument":
                label = "argument"
            else:
                continue
            name = node.name.value  # type: ignore[attr-defined]
            if contains_any(name, sensitive):
                collection.add_warning(
                    self.rule_id,
                    f"Sensitive {label} '{name}' detected - ensure proper access control",
                    node,
                )
            elif contains_any(name, patterns):
                collection.add_warning(
                    self.rule_id,
                    f"{label.capitalize()} '{name}' may contain sensitive data - verify "
                    "access control",
                    node,
                )

    def _check_fragments(self, context: LintContext, collection: DiagnosticCollection) -> None:
        sensitive = context.get_config_value(
            keys.SENSITIVE_FIELDS, frozenset, keys.DEFAULT_SENSITIVE_FIELDS
        )
        for fragment in context.find_fragment_definitions():
            fragment_name = fragment.name.value
            for field in walk(fragment):
                if field.kind != "field":
                    continue
                if contains_any(field.name.value, sensitive):
                    collection.add_warning(
                        self.rule_id,
                        f"Fragment '{fragment_name}' contains sensitive field "
                        f"'{field.name.value}' - verify access control",
                        field,
                    )

    # ------------------------------------------------------------------
    # Injection
    # ------------------------------------------------------------------

    def _check_argument_values(
        self, context: LintContext, collection: DiagnosticCollection
    ) -> None:
        sql_keywords = context.get_config_value(
            keys.SQL_KEYWORDS, frozenset, keys.DEFAULT_SQL_KEYWORDS
        )
        for field in context.find_fields():
            for argument in field.arguments or ():
                self._scan_argument(argument, "Argument", sql_keywords, collection)
        for directive in context.find_directives():
            for argument in directive.arguments or ():
                self._scan_argument(argument, "Directive argument", sql_keywords, collection)

    def _scan_argument(
        self,
        argument: ArgumentNode,
        owner: str,
        sql_keywords: frozenset[str],
        collection: DiagnosticCollection,
    ) -> None:
        for label, string_value in _string_values(argument.value, argument.name.value):
            content = string_value.value
            for pattern_label in matches_injection(content, sql_keywords):
                collection.add_error(
                    self.rule_id,
                    f"{owner} '{label}' contains potential {pattern_label} pattern",
                    argument,
                )
            if any(char in content for char in _UNSAFE_CHARACTERS):
                collection.add_warning(
                    self.rule_id,
                    f"{owner} '{label}' contains potentially unsafe characters - ensure "
                    "proper validation",
                    argument,
                )

    def _check_names_for_injection(
        self, context: LintContext, collection: DiagnosticCollection
    ) -> None:
        sql_keywords = context.get_config_value(
            keys.SQL_KEYWORDS, frozenset, keys.DEFAULT_SQL_KEYWORDS
        )
        named = [
            *(("Argument name", a) for a in context.find_arguments()),
            *(("Fragment name", f) for f in context.find_fragment_definitions()),
            *(("Operation name", o) for o in context.get_operations() if o.name is not None),
        ]
        for owner, node in named:
            name = node.name.value  # type: ignore[union-attr]
            for pattern_label in matches_injection(name, sql_keywords):
                collection.add_error(
                    self.rule_id,
                    f"{owner} '{name}' contains potential {pattern_label} pattern",
                    node,
                )

    # ------------------------------------------------------------------
    # Depth and complexity
    # ------------------------------------------------------------------

    def _check_depth(self, context: LintContext, collection: DiagnosticCollection) -> None:
        max_depth = context.get_config_value(keys.MAX_SECURITY_DEPTH, int, 3)
        exhaustion_depth = context.get_config_value(keys.RESOURCE_EXHAUSTION_DEPTH, int, 5)
        depth = context.calculate_max_depth()
        if depth > max_depth:
            collection.add_error(
                self.rule_id,
                f"Query depth ({depth}) exceeds security limit ({max_depth}) - "
                "potential DoS risk",
                context.document,
            )
        if depth > exhaustion_depth:
            collection.add_error(
                self.rule_id,
                f"Very deep query structure ({depth} levels) - high risk of resource "
                "exhaustion",
                context.document,
            )

    def _check_complexity(self, context: LintContext, collection: DiagnosticCollection) -> None:
        max_complexity = context.get_config_value(keys.MAX_QUERY_COMPLEXITY, int, 50)
        complexity = sum(
            1
            + len(f.arguments or ())
            + len(f.directives or ())
            + (len(f.selection_set.selections) if f.selection_set is not None else 0)
            for f in context.find_fields()
        )
        if complexity > max_complexity:
            collection.add_error(
                self.rule_id,
                f"Query complexity ({complexity}) exceeds security limit ({max_complexity}) - "
                "potential DoS risk",
                context.document,
            )

        exhaustion_depth = context.get_config_value(keys.RESOURCE_EXHAUSTION_DEPTH, int, 5)
        max_breadth = context.get_config_value(keys.EXPONENTIAL_BREADTH, int, 10)
        if (
            context.calculate_max_depth() > exhaustion_depth
            and context.calculate_max_breadth() > max_breadth
        ):
            collection.add_error(
                self.rule_id,
                "Query has exponential complexity pattern - high risk of resource exhaustion",
                context.document,
            )

    # ------------------------------------------------------------------
    # Directives, operations, access control
    # ------------------------------------------------------------------

    def _check_directives(self, context: LintContext, collection: DiagnosticCollection) -> None:
        forbidden = context.get_config_value(
            keys.FORBIDDEN_DIRECTIVES, frozenset, keys.DEFAULT_FORBIDDEN_DIRECTIVES
        )
        for directive in context.find_directives(lambda d: d.name.value in forbidden):
            collection.add_error(
                self.rule_id,
                f"Directive '{directive.name.value}' is forbidden in this context",
                directive,
            )

    def _check_mutations(self, context: LintContext, collection: DiagnosticCollection) -> None:
        for operation in context.get_mutations():
            if operation.selection_set is None:
                continue
            mutating = [
                s
                for s in operation.selection_set.selections
                if s.kind == "field"
                and any(verb in s.name.value.lower() for verb in MUTATING_VERBS)  # type: ignore[union-attr]
            ]
            if len(mutating) > 1:
                collection.add_warning(
                    self.rule_id,
                    f"Operation contains {len(mutating)} mutations - consider splitting for "
                    "atomicity",
                    operation,
                )

    def _check_access_control(
        self, context: LintContext, collection: DiagnosticCollection
    ) -> None:
        admin = context.get_config_value(
            keys.ADMIN_FIELD_PATTERNS, frozenset, keys.DEFAULT_ADMIN_FIELD_PATTERNS
        )
        internal = context.get_config_value(
            keys.INTERNAL_FIELD_PATTERNS, frozenset, keys.DEFAULT_INTERNAL_FIELD_PATTERNS
        )
        for field in context.find_fields():
            name = field.name.value
            if contains_any(name, admin):
                collection.add_warning(
                    self.rule_id,
                    f"Field '{name}' may require admin privileges - verify access control",
                    field,
                )
            if contains_any(name, internal):
                collection.add_warning(
                    self.rule_id,
                    f"Field '{name}' may be internal/system field - verify access control",
                    field,
                )
