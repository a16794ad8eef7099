"""Best-practice rule: aliases, fragments, variables, naming and over-fetching."""

from __future__ import annotations

from collections import Counter
from typing import TYPE_CHECKING

from graphql.language import OperationType

from gqlint.linting import config as keys
from gqlint.linting.context import count_kind
from gqlint.linting.rules import CAMEL_CASE_RE, PASCAL_CASE_RE, BaseRule, RuleCategory

if TYPE_CHECKING:
    from graphql.language import FieldNode, SelectionSetNode

    from gqlint.linting.context import LintContext
    from gqlint.linting.models import DiagnosticCollection

# Fields whose joint selection usually means "give me everything"
_COMMON_FIELDS = frozenset({"id", "name", "email", "phone", "address"})

_FRAGMENT_REUSE_HINT = 3
_OVER_FETCH_FIELDS = 10
_OVER_FETCH_WITH_IDENTITY = 5
_MIN_NAME_LENGTH = 3


def _field_names(selection_set: SelectionSetNode | None) -> set[str]:
    if selection_set is None:
        return set()
    return {s.name.value for s in selection_set.selections if s.kind == "field"}  # type: ignore[union-attr]


def _response_key(field: FieldNode) -> str:
    return field.alias.value if field.alias is not None else field.name.value


class BestPracticeRule(BaseRule):
    """Structural health checks for maintainable documents.

    Duplicate response keys and undeclared variables are reported as
    errors because they make the document invalid. Everything else is a
    warning or a hint.
    """

    rule_id = RuleCategory.BEST_PRACTICE.value
    category = RuleCategory.BEST_PRACTICE.value
    description = "Aliases, fragments, variables, operation naming and over-fetching"

    def run(self, context: LintContext, collection: DiagnosticCollection) -> None:
        self._check_aliases(context, collection)
        self._check_fragments(context, collection)
        self._check_selection_sets(context, collection)
        self._check_variables(context, collection)
        self._check_operation_naming(context, collection)
        if context.get_config_value(keys.ENFORCE_FIELD_SELECTION, bool, True):
            self._check_field_selection(context, collection)
        self._check_arguments(context, collection)
        self._check_directives(context, collection)
        self._check_fragment_naming(context, collection)
        self._check_document_structure(context, collection)

    # ------------------------------------------------------------------
    # Aliases
    # ------------------------------------------------------------------

    def _check_aliases(self, context: LintContext, collection: DiagnosticCollection) -> None:
        fields = context.find_fields()
        occurrences = Counter(f.name.value for f in fields)
        enforce_aliases = context.get_config_value(keys.ENFORCE_ALIAS_USAGE, bool, True)
        reported: set[str] = set()
        for field in fields:
            name = field.name.value
            if field.alias is not None:
                alias = field.alias.value
                if alias == name:
                    collection.add_info(
                        self.rule_id, f"Alias '{alias}' is redundant - same as field name", field
                    )
                if len(alias) < 2:
                    collection.add_info(
                        self.rule_id,
                        f"Alias '{alias}' is very short - consider more descriptive name",
                        field,
                    )
                continue
            if (
                not enforce_aliases
                or name.startswith("__")
                or occurrences[name] < 2
                or name in reported
            ):
                continue
            reported.add(name)
            collection.add_warning(
                self.rule_id,
                f"Consider using alias for field '{name}' to avoid conflicts "
                f"(selected {occurrences[name]} times)",
                field,
            )

    # ------------------------------------------------------------------
    # Fragments
    # ------------------------------------------------------------------

    def _check_fragments(self, context: LintContext, collection: DiagnosticCollection) -> None:
        fragments = context.find_fragment_definitions()
        max_fragments = context.get_config_value(keys.MAX_FRAGMENTS, int, 5)
        if len(fragments) > max_fragments:
            collection.add_warning(
                self.rule_id,
                f"Consider consolidating {len(fragments)} fragments for better "
                f"maintainability (max: {max_fragments})",
                context.document,
            )

        usage = Counter(s.name.value for s in context.find_fragment_spreads())
        for fragment in fragments:
            if fragment.name.value not in usage:
                collection.add_warning(
                    self.rule_id,
                    f"Fragment '{fragment.name.value}' is defined but never used",
                    fragment,
                )

        for name, count in usage.items():
            if count > _FRAGMENT_REUSE_HINT:
                collection.add_info(
                    self.rule_id,
                    f"Fragment '{name}' used {count} times - good reuse",
                    context.document,
                )

        max_fields = context.get_config_value(keys.MAX_FRAGMENT_FIELDS, int, 20)
        for fragment in fragments:
            field_count = count_kind(fragment, "field")
            if field_count > max_fields:
                collection.add_warning(
                    self.rule_id,
                    f"Fragment '{fragment.name.value}' has {field_count} fields - "
                    "consider splitting for maintainability",
                    fragment,
                )

    # ------------------------------------------------------------------
    # Selection sets
    # ------------------------------------------------------------------

    def _check_selection_sets(
        self, context: LintContext, collection: DiagnosticCollection
    ) -> None:
        max_size = context.get_config_value(keys.MAX_SELECTION_SET_SIZE, int, 15)
        for selection_set in context.find_selection_sets():
            size = len(selection_set.selections)
            if size > max_size:
                collection.add_warning(
                    self.rule_id,
                    f"Large selection set with {size} fields - consider using fragments",
                    selection_set,
                )

            seen: set[str] = set()
            for selection in selection_set.selections:
                if selection.kind != "field":
                    continue
                key = _response_key(selection)  # type: ignore[arg-type]
                if key in seen:
                    collection.add_error(
                        self.rule_id, f"Duplicate field '{key}' in selection set", selection
                    )
                seen.add(key)

            if _COMMON_FIELDS <= _field_names(selection_set):
                collection.add_info(
                    self.rule_id,
                    "Consider more specific field selection instead of selecting all "
                    "common fields",
                    selection_set,
                )

    # ------------------------------------------------------------------
    # Variables
    # ------------------------------------------------------------------

    def _check_variables(self, context: LintContext, collection: DiagnosticCollection) -> None:
        for operation in context.get_operations():
            declared = {
                d.variable.name.value: d for d in operation.variable_definitions or ()
            }
            used: dict[str, object] = {}
            for node in context.walk_operation(operation):
                if node.kind == "variable":
                    used.setdefault(node.name.value, node)  # type: ignore[attr-defined]

            for name, definition in declared.items():
                if name not in used:
                    collection.add_warning(
                        self.rule_id, f"Variable '${name}' is defined but never used", definition
                    )
            for name, reference in used.items():
                if name not in declared:
                    collection.add_error(
                        self.rule_id,
                        f"Variable '${name}' is used but not defined",
                        reference,  # type: ignore[arg-type]
                    )
            for name, definition in declared.items():
                if not CAMEL_CASE_RE.match(name):
                    collection.add_warning(
                        self.rule_id,
                        f"Variable name '${name}' should follow camelCase convention",
                        definition,
                    )

    # ------------------------------------------------------------------
    # Naming
    # ------------------------------------------------------------------

    def _check_operation_naming(
        self, context: LintContext, collection: DiagnosticCollection
    ) -> None:
        for operation in context.get_operations():
            if operation.name is None:
                collection.add_warning(
                    self.rule_id,
                    "Consider naming your operation for better debugging and monitoring",
                    operation,
                )
                continue
            name = operation.name.value
            if not PASCAL_CASE_RE.match(name):
                collection.add_warning(
                    self.rule_id,
                    f"Operation name '{name}' should follow PascalCase convention",
                    operation,
                )
            if len(name) < _MIN_NAME_LENGTH:
                collection.add_info(
                    self.rule_id,
                    f"Operation name '{name}' is very short - consider more descriptive name",
                    operation,
                )

    def _check_fragment_naming(
        self, context: LintContext, collection: DiagnosticCollection
    ) -> None:
        for fragment in context.find_fragment_definitions():
            name = fragment.name.value
            if len(name) < _MIN_NAME_LENGTH:
                collection.add_info(
                    self.rule_id,
                    f"Fragment name '{name}' is very short - consider more descriptive name",
                    fragment,
                )

    # ------------------------------------------------------------------
    # Fields, arguments, directives
    # ------------------------------------------------------------------

    def _check_field_selection(
        self, context: LintContext, collection: DiagnosticCollection
    ) -> None:
        for field in context.find_fields():
            if field.selection_set is None:
                continue
            names = _field_names(field.selection_set)
            if len(names) > _OVER_FETCH_FIELDS or (
                {"id", "name"} <= names and len(names) > _OVER_FETCH_WITH_IDENTITY
            ):
                collection.add_warning(
                    self.rule_id,
                    f"Field '{field.name.value}' may be over-fetching data - consider more "
                    "specific field selection",
                    field,
                )
            selections = field.selection_set.selections
            if (
                len(selections) == 1
                and selections[0].kind == "field"
                and selections[0].selection_set is None  # type: ignore[union-attr]
            ):
                collection.add_info(
                    self.rule_id,
                    f"Field '{field.name.value}' has unnecessary nesting - consider flattening",
                    field,
                )

    def _check_arguments(self, context: LintContext, collection: DiagnosticCollection) -> None:
        max_arguments = context.get_config_value(keys.MAX_ARGUMENTS, int, 10)
        for field in context.find_fields(lambda f: len(f.arguments or ()) > max_arguments):
            collection.add_warning(
                self.rule_id,
                f"Field '{field.name.value}' has {len(field.arguments)} arguments - "
                "consider using variables or input types",
                field,
            )

    def _check_directives(self, context: LintContext, collection: DiagnosticCollection) -> None:
        for directive in context.find_directives(lambda d: not CAMEL_CASE_RE.match(d.name.value)):
            collection.add_warning(
                self.rule_id,
                f"Directive name '{directive.name.value}' should follow camelCase convention",
                directive,
            )

    # ------------------------------------------------------------------
    # Document structure
    # ------------------------------------------------------------------

    def _check_document_structure(
        self, context: LintContext, collection: DiagnosticCollection
    ) -> None:
        operations = context.get_operations()
        if len(operations) > 1:
            collection.add_info(
                self.rule_id,
                f"Document contains {len(operations)} operations - consider splitting for "
                "better maintainability",
                context.document,
            )
        mutations = [op for op in operations if op.operation == OperationType.MUTATION]
        if len(mutations) > 1:
            for mutation in mutations:
                collection.add_warning(
                    self.rule_id,
                    "Multiple mutations in single document - consider splitting for atomicity",
                    mutation,
                )
