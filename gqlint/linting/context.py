"""Lint context: one parsed document plus the config it is linted against.

The context offers a pre-order walk over the executable part of a graphql-core
AST and the structural metrics (depth, field counts, complexity) that several
rule families share.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING, Any, TypeVar

from graphql.language import OperationType, print_ast

from gqlint.linting.config import LintConfig
from gqlint.logging import get_logger

if TYPE_CHECKING:
    from graphql.language import (
        ArgumentNode,
        DirectiveNode,
        DocumentNode,
        FieldNode,
        FragmentDefinitionNode,
        FragmentSpreadNode,
        InlineFragmentNode,
        Node,
        OperationDefinitionNode,
        SelectionSetNode,
        VariableDefinitionNode,
        VariableNode,
    )

T = TypeVar("T")

logger = get_logger(__name__)

# Child attributes visited for each node kind, in source order.
_CHILDREN: dict[str, tuple[str, ...]] = {
    "document": ("definitions",),
    "operation_definition": ("variable_definitions", "directives", "selection_set"),
    "variable_definition": ("default_value", "directives"),
    "selection_set": ("selections",),
    "field": ("arguments", "directives", "selection_set"),
    "argument": ("value",),
    "fragment_spread": ("directives",),
    "inline_fragment": ("directives", "selection_set"),
    "fragment_definition": ("directives", "selection_set"),
    "directive": ("arguments",),
    "list_value": ("values",),
    "object_value": ("fields",),
    "object_field": ("value",),
}


def iter_children(node: Node) -> Iterator[Node]:
    """Yield the direct children of ``node`` in source order, skipping gaps."""
    for attr in _CHILDREN.get(node.kind, ()):
        child = getattr(node, attr, None)
        if child is None:
            continue
        if isinstance(child, (list, tuple)):
            yield from (item for item in child if item is not None)
        else:
            yield child


def walk(root: Node | None) -> Iterator[Node]:
    """Pre-order walk from ``root``; every reachable node is yielded once."""
    if root is None:
        return
    stack: list[Node] = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(list(iter_children(node))))


def count_kind(root: Node | None, kind: str) -> int:
    """Number of nodes of ``kind`` under ``root`` (fragment spreads not expanded)."""
    return sum(1 for node in walk(root) if node.kind == kind)


class NodeVisitor:
    """Callable visitor dispatching to ``visit_<kind>`` methods.

    Subclasses implement only the kinds they care about (``visit_field``,
    ``visit_argument``, ``visit_fragment_definition``, ...). Anything else
    falls through to ``generic_visit``.

    Examples
    --------
    >>> class FieldNames(NodeVisitor):
    ...     def __init__(self):
    ...         self.names = []
    ...     def visit_field(self, node):
    ...         self.names.append(node.name.value)
    """

    def __call__(self, node: Node) -> None:
        method = getattr(self, f"visit_{node.kind}", self.generic_visit)
        method(node)

    def generic_visit(self, node: Node) -> None:
        """Called for node kinds without a dedicated method."""


class LintContext:
    """Read-only view of one document for the duration of a lint run.

    Parameters
    ----------
    document : DocumentNode
        Parsed graphql-core document; never mutated
    config : LintConfig | None
        Settings to lint with; defaults to ``LintConfig()``

    Notes
    -----
    Metrics are recomputed on every call. A context is meant to live for a
    single ``lint()`` call.
    """

    __slots__ = ("_config", "_document")

    def __init__(self, document: DocumentNode, config: LintConfig | None = None) -> None:
        self._document = document
        self._config = config if config is not None else LintConfig()

    @property
    def document(self) -> DocumentNode:
        return self._document

    @property
    def config(self) -> LintConfig:
        return self._config

    def get_config_value(self, key: str, expected_type: type[T], default: T) -> T:
        return self._config.get_value(key, expected_type, default)

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    def traverse(self, visitor: Callable[[Node], Any]) -> None:
        """Call ``visitor`` on every node of the document in pre-order."""
        for node in walk(self._document):
            visitor(node)

    def nodes(self, kind: str | None = None) -> list[Node]:
        """All traversed nodes, optionally restricted to one ``kind``."""
        return [node for node in walk(self._document) if kind is None or node.kind == kind]

    def find_fields(
        self, predicate: Callable[[FieldNode], bool] | None = None
    ) -> list[FieldNode]:
        fields: list[FieldNode] = self.nodes("field")  # type: ignore[assignment]
        return fields if predicate is None else [f for f in fields if predicate(f)]

    def find_arguments(
        self, predicate: Callable[[ArgumentNode], bool] | None = None
    ) -> list[ArgumentNode]:
        arguments: list[ArgumentNode] = self.nodes("argument")  # type: ignore[assignment]
        return arguments if predicate is None else [a for a in arguments if predicate(a)]

    def find_directives(
        self, predicate: Callable[[DirectiveNode], bool] | None = None
    ) -> list[DirectiveNode]:
        directives: list[DirectiveNode] = self.nodes("directive")  # type: ignore[assignment]
        return directives if predicate is None else [d for d in directives if predicate(d)]

    def find_fragment_definitions(self) -> list[FragmentDefinitionNode]:
        return [
            d for d in self._document.definitions if d.kind == "fragment_definition"
        ]  # type: ignore[misc]

    def find_fragment_spreads(self) -> list[FragmentSpreadNode]:
        return self.nodes("fragment_spread")  # type: ignore[return-value]

    def find_inline_fragments(self) -> list[InlineFragmentNode]:
        return self.nodes("inline_fragment")  # type: ignore[return-value]

    def find_selection_sets(self) -> list[SelectionSetNode]:
        return self.nodes("selection_set")  # type: ignore[return-value]

    def find_variable_definitions(self) -> list[VariableDefinitionNode]:
        return self.nodes("variable_definition")  # type: ignore[return-value]

    def find_variable_references(self) -> list[VariableNode]:
        """Variable usages; the variables named by definitions are not included."""
        return self.nodes("variable")  # type: ignore[return-value]

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def get_operations(self) -> list[OperationDefinitionNode]:
        return [
            d for d in self._document.definitions if d.kind == "operation_definition"
        ]  # type: ignore[misc]

    def get_queries(self) -> list[OperationDefinitionNode]:
        return [op for op in self.get_operations() if op.operation == OperationType.QUERY]

    def get_mutations(self) -> list[OperationDefinitionNode]:
        return [op for op in self.get_operations() if op.operation == OperationType.MUTATION]

    def get_subscriptions(self) -> list[OperationDefinitionNode]:
        return [
            op for op in self.get_operations() if op.operation == OperationType.SUBSCRIPTION
        ]

    def walk_operation(self, operation: OperationDefinitionNode) -> Iterator[Node]:
        """Nodes of ``operation`` plus every fragment it spreads, transitively.

        Each reachable fragment definition is walked once.
        """
        fragments = self._fragments_by_name()
        seen: set[str] = set()
        pending: list[Node] = [operation]
        while pending:
            for node in walk(pending.pop()):
                yield node
                if node.kind != "fragment_spread":
                    continue
                name = node.name.value  # type: ignore[attr-defined]
                if name not in seen and name in fragments:
                    seen.add(name)
                    pending.append(fragments[name])

    # ------------------------------------------------------------------
    # Metrics
    # ------------------------------------------------------------------

    def calculate_max_depth(self) -> int:
        """Deepest selection-set nesting, counted from operation roots.

        A document whose operations select only scalar top-level fields has
        depth 1. Inline fragments do not add a level, named fragment spreads
        are expanded (a spread that re-enters a fragment already on the path
        contributes nothing). Without operations, fragment definitions serve
        as the roots.
        """
        fragments = self._fragments_by_name()
        roots: list[Any] = self.get_operations() or list(fragments.values())
        return max(
            (self._selection_depth(root.selection_set, fragments, frozenset()) for root in roots),
            default=0,
        )

    def calculate_field_depth(self, field: FieldNode) -> int:
        """Nesting depth of one field's subtree; a leaf field has depth 1."""
        return 1 + self._selection_depth(
            field.selection_set, self._fragments_by_name(), frozenset()
        )

    def calculate_max_breadth(self) -> int:
        """Largest number of selections in any one selection set."""
        return max((len(s.selections) for s in self.find_selection_sets()), default=0)

    def calculate_field_count(self) -> int:
        return count_kind(self._document, "field")

    def calculate_argument_count(self) -> int:
        return count_kind(self._document, "argument")

    def calculate_directive_count(self) -> int:
        return count_kind(self._document, "directive")

    def contains_introspection_queries(self) -> bool:
        return any(f.name.value.startswith("__") for f in self.find_fields())

    # ------------------------------------------------------------------
    # Source
    # ------------------------------------------------------------------

    @property
    def source_text(self) -> str:
        """Original source when the document carries locations, else the printed form."""
        loc = getattr(self._document, "loc", None)
        if loc is not None and loc.source is not None:
            return loc.source.body
        return self.printed_text

    @property
    def printed_text(self) -> str:
        """Printed form of the document, empty when the tree cannot be printed.

        Hand-built trees may leave required children unset (an operation
        without a selection set); the printer fails on those.
        """
        try:
            return print_ast(self._document)
        except (AttributeError, TypeError) as e:
            logger.debug("Document cannot be printed: {}", e)
            return ""

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _fragments_by_name(self) -> dict[str, FragmentDefinitionNode]:
        return {f.name.value: f for f in self.find_fragment_definitions()}

    def _selection_depth(
        self,
        selection_set: SelectionSetNode | None,
        fragments: dict[str, FragmentDefinitionNode],
        active: frozenset[str],
    ) -> int:
        if selection_set is None:
            return 0
        deepest = 0
        for selection in selection_set.selections:
            if selection.kind == "field":
                depth = 1 + self._selection_depth(
                    selection.selection_set, fragments, active  # type: ignore[union-attr]
                )
            elif selection.kind == "inline_fragment":
                depth = self._selection_depth(
                    selection.selection_set, fragments, active  # type: ignore[union-attr]
                )
            else:
                name = selection.name.value  # type: ignore[union-attr]
                fragment = fragments.get(name)
                if fragment is None or name in active:
                    continue
                depth = self._selection_depth(fragment.selection_set, fragments, active | {name})
            deepest = max(deepest, depth)
        return deepest

    def __repr__(self) -> str:
        return f"LintContext(definitions={len(self._document.definitions)})"
