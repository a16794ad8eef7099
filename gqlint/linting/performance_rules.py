"""Performance rule: depth, size and complexity ceilings."""

from __future__ import annotations

from typing import TYPE_CHECKING

from gqlint.linting import config as keys
from gqlint.linting.context import count_kind
from gqlint.linting.rules import BaseRule, RuleCategory

if TYPE_CHECKING:
    from gqlint.linting.context import LintContext
    from gqlint.linting.models import DiagnosticCollection

_DEEP_QUERY_HINT = 3
_FRAGMENT_CANDIDATE_SIZE = 10
_LARGE_FRAGMENT_FIELDS = 30
_COMPLEX_OBJECT_FIELDS = 5
_MAX_FIELD_NESTING = 4
_MAX_FIELDS_OF_ONE_KIND = 10


def field_complexity(field: object) -> int:
    """Cost of one field: itself plus its arguments and directives."""
    return 1 + len(getattr(field, "arguments", None) or ()) + len(
        getattr(field, "directives", None) or ()
    )


class PerformanceRule(BaseRule):
    """Flags documents that are likely to be expensive to resolve."""

    rule_id = RuleCategory.PERFORMANCE.value
    category = RuleCategory.PERFORMANCE.value
    description = "Query depth, field count, complexity and selection size"

    def run(self, context: LintContext, collection: DiagnosticCollection) -> None:
        self._check_depth(context, collection)
        self._check_field_count(context, collection)
        self._check_fragment_usage(context, collection)
        self._check_complexity(context, collection)
        self._check_argument_values(context, collection)
        self._check_field_nesting(context, collection)
        self._check_selection_mix(context, collection)

    def _check_depth(self, context: LintContext, collection: DiagnosticCollection) -> None:
        max_depth = context.get_config_value(keys.MAX_DEPTH, int, 5)
        depth = context.calculate_max_depth()
        if depth > max_depth:
            collection.add_warning(
                self.rule_id,
                f"Query depth ({depth}) exceeds recommended limit ({max_depth}) - "
                "consider flattening",
                context.document,
            )
        if depth > _DEEP_QUERY_HINT:
            collection.add_info(
                self.rule_id,
                f"Deep query structure ({depth} levels) - consider using fragments for "
                "better performance",
                context.document,
            )

    def _check_field_count(self, context: LintContext, collection: DiagnosticCollection) -> None:
        max_fields = context.get_config_value(keys.MAX_FIELDS, int, 50)
        field_count = context.calculate_field_count()
        if field_count > max_fields:
            collection.add_warning(
                self.rule_id,
                f"Field count ({field_count}) exceeds recommended limit ({max_fields}) - "
                "consider using fragments",
                context.document,
            )

    def _check_fragment_usage(
        self, context: LintContext, collection: DiagnosticCollection
    ) -> None:
        if not context.get_config_value(keys.ENFORCE_FRAGMENT_USAGE, bool, True):
            return
        for selection_set in context.find_selection_sets():
            selections = selection_set.selections
            if len(selections) >= _FRAGMENT_CANDIDATE_SIZE and not any(
                s.kind == "fragment_spread" for s in selections
            ):
                collection.add_info(
                    self.rule_id,
                    f"Large selection set with {len(selections)} fields - consider using "
                    "fragments for reusability",
                    selection_set,
                )
        for fragment in context.find_fragment_definitions():
            field_count = count_kind(fragment, "field")
            if field_count > _LARGE_FRAGMENT_FIELDS:
                collection.add_warning(
                    self.rule_id,
                    f"Fragment '{fragment.name.value}' has {field_count} fields - consider "
                    "splitting for better performance",
                    fragment,
                )

    def _check_complexity(self, context: LintContext, collection: DiagnosticCollection) -> None:
        max_complexity = context.get_config_value(keys.MAX_QUERY_COMPLEXITY, int, 50)
        complexity = sum(field_complexity(f) for f in context.find_fields())
        if complexity > max_complexity:
            collection.add_warning(
                self.rule_id,
                f"Query complexity ({complexity}) exceeds recommended limit "
                f"({max_complexity}) - consider optimization",
                context.document,
            )

    def _check_argument_values(
        self, context: LintContext, collection: DiagnosticCollection
    ) -> None:
        for argument in context.find_arguments(lambda a: a.value.kind == "object_value"):
            if len(argument.value.fields) > _COMPLEX_OBJECT_FIELDS:  # type: ignore[attr-defined]
                collection.add_info(
                    self.rule_id,
                    f"Argument '{argument.name.value}' has complex object value - consider "
                    "using variables",
                    argument,
                )

    def _check_field_nesting(
        self, context: LintContext, collection: DiagnosticCollection
    ) -> None:
        for field in context.find_fields(lambda f: f.selection_set is not None):
            depth = context.calculate_field_depth(field)
            if depth > _MAX_FIELD_NESTING:
                collection.add_warning(
                    self.rule_id,
                    f"Field '{field.name.value}' has deep nesting ({depth} levels) - "
                    "consider flattening",
                    field,
                )

    def _check_selection_mix(
        self, context: LintContext, collection: DiagnosticCollection
    ) -> None:
        for selection_set in context.find_selection_sets():
            fields = [s for s in selection_set.selections if s.kind == "field"]
            objects = sum(1 for f in fields if f.selection_set is not None)  # type: ignore[union-attr]
            counts = {"scalar": len(fields) - objects, "object": objects}
            for kind, count in counts.items():
                if count > _MAX_FIELDS_OF_ONE_KIND:
                    collection.add_info(
                        self.rule_id,
                        f"Selection set has {count} {kind} fields - consider optimization",
                        selection_set,
                    )
