"""Style rule: naming conventions, whitespace, indentation and line length.

Style findings are WARNING or INFO only; none of them is a correctness
problem. The checks are schema-agnostic.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from graphql.language import Lexer, Source, TokenKind

from gqlint.linting import config as keys
from gqlint.linting.context import NodeVisitor
from gqlint.linting.models import Diagnostic, Severity
from gqlint.linting.rules import CAMEL_CASE_RE, PASCAL_CASE_RE, BaseRule, RuleCategory

if TYPE_CHECKING:
    from graphql.language import (
        ArgumentNode,
        DirectiveNode,
        FieldNode,
        FragmentDefinitionNode,
        OperationDefinitionNode,
        Token,
    )

    from gqlint.linting.context import LintContext
    from gqlint.linting.models import DiagnosticCollection

RESERVED_WORDS = frozenset({
    "query",
    "mutation",
    "subscription",
    "fragment",
    "on",
    "true",
    "false",
    "null",
    "type",
    "interface",
    "union",
    "enum",
    "input",
    "scalar",
    "directive",
    "schema",
    "extend",
    "implements",
    "repeatable",
    "deprecated",
    "include",
    "skip",
})

# Directives defined by the GraphQL specification itself
BUILTIN_DIRECTIVES = frozenset({"include", "skip", "deprecated", "specifiedBy"})

_CONSECUTIVE_UPPER_RE = re.compile(r"[A-Z]{2,}")
_PRINTED_INDENT_STEP = 2


def is_reserved_word(name: str) -> bool:
    return name.lower() in RESERVED_WORDS


class _NamingVisitor(NodeVisitor):
    """Per-run visitor collecting naming diagnostics for one document."""

    def __init__(self, rule_id: str, collection: DiagnosticCollection, camel_case: bool) -> None:
        self.rule_id = rule_id
        self.collection = collection
        self.camel_case = camel_case

    def _warn(self, message: str, node: object) -> None:
        self.collection.add_warning(self.rule_id, message, node)  # type: ignore[arg-type]

    def _info(self, message: str, node: object) -> None:
        self.collection.add_info(self.rule_id, message, node)  # type: ignore[arg-type]

    def visit_field(self, node: FieldNode) -> None:
        name = node.name.value
        if name.startswith("__"):
            return
        if self.camel_case and not CAMEL_CASE_RE.match(name):
            self._warn(f"Field name '{name}' should follow camelCase convention", node)
        if "_" in name:
            self._info(f"Field name '{name}' contains underscores - consider camelCase", node)
        if _CONSECUTIVE_UPPER_RE.search(name):
            self._info(
                f"Field name '{name}' contains consecutive uppercase letters - consider camelCase",
                node,
            )
        if is_reserved_word(name):
            self._warn(
                f"Field name '{name}' is a reserved word - consider alternative naming", node
            )

    def visit_argument(self, node: ArgumentNode) -> None:
        name = node.name.value
        if self.camel_case and not CAMEL_CASE_RE.match(name):
            self._warn(f"Argument name '{name}' should follow camelCase convention", node)
        if "_" in name:
            self._info(f"Argument name '{name}' contains underscores - consider camelCase", node)
        if is_reserved_word(name):
            self._warn(
                f"Argument name '{name}' is a reserved word - consider alternative naming", node
            )

    def visit_directive(self, node: DirectiveNode) -> None:
        name = node.name.value
        if self.camel_case and not CAMEL_CASE_RE.match(name):
            self._warn(f"Directive name '{name}' should follow camelCase convention", node)
        if "_" in name:
            self._info(
                f"Directive name '{name}' contains underscores - consider camelCase", node
            )
        if name not in BUILTIN_DIRECTIVES and is_reserved_word(name):
            self._warn(
                f"Directive name '{name}' is a reserved word - consider alternative naming", node
            )

    def visit_fragment_definition(self, node: FragmentDefinitionNode) -> None:
        name = node.name.value
        if not PASCAL_CASE_RE.match(name):
            self._warn(f"Fragment name '{name}' should follow PascalCase convention", node)
        if "_" in name:
            self._info(
                f"Fragment name '{name}' contains underscores - consider PascalCase", node
            )

    def visit_operation_definition(self, node: OperationDefinitionNode) -> None:
        if node.name is None:
            return
        name = node.name.value
        if not PASCAL_CASE_RE.match(name):
            self._warn(f"Operation name '{name}' should follow PascalCase convention", node)
        if "_" in name:
            self._info(
                f"Operation name '{name}' contains underscores - consider PascalCase", node
            )


def _tokens(text: str) -> list[Token]:
    """Significant tokens of ``text``; the lexer drops commas and comments."""
    lexer = Lexer(Source(text))
    tokens = []
    token = lexer.advance()
    while token.kind != TokenKind.EOF:
        tokens.append(token)
        token = lexer.advance()
    return tokens


class StyleRule(BaseRule):
    """Cosmetic consistency checks over names and source layout."""

    rule_id = RuleCategory.STYLE.value
    category = RuleCategory.STYLE.value
    description = "Naming conventions, whitespace, indentation and line length"

    def run(self, context: LintContext, collection: DiagnosticCollection) -> None:
        camel_case = context.get_config_value(keys.ENFORCE_CAMEL_CASE, bool, True)
        context.traverse(_NamingVisitor(self.rule_id, collection, camel_case))

        text = context.source_text
        tokens = _tokens(text)
        if context.get_config_value(keys.ENFORCE_CONSISTENT_SPACING, bool, True):
            self._check_spacing(text, tokens, collection)
        if context.get_config_value(keys.ENFORCE_INDENTATION, bool, True):
            self._check_indentation(context, tokens, collection)
        self._check_line_length(context, text, collection)

    # -- whitespace ---------------------------------------------------------

    def _check_spacing(
        self, text: str, tokens: list[Token], collection: DiagnosticCollection
    ) -> None:
        reported: set[str] = set()

        def report(key: str, message: str, severity: Severity, token: Token) -> None:
            if key in reported:
                return
            reported.add(key)
            collection.add_diagnostic(
                Diagnostic(
                    rule_id=self.rule_id,
                    message=message,
                    severity=severity,
                    path="document",
                    line=token.line,
                    column=token.column,
                )
            )

        for previous, token in zip(tokens, tokens[1:]):
            gap = text[previous.end : token.start]
            if "\n" in gap or "\r" in gap or "#" in gap:
                continue
            if "  " in gap:
                report(
                    "spaces",
                    "Multiple consecutive spaces detected - use single spaces between tokens",
                    Severity.INFO,
                    token,
                )
            if previous.kind == TokenKind.COLON and gap == "":
                report(
                    "colon",
                    "Missing space after colon - use consistent spacing",
                    Severity.WARNING,
                    token,
                )
            if gap.endswith(","):
                report(
                    "comma",
                    "Missing space after comma - use consistent spacing",
                    Severity.INFO,
                    token,
                )

    # -- indentation --------------------------------------------------------

    def _check_indentation(
        self,
        context: LintContext,
        tokens: list[Token],
        collection: DiagnosticCollection,
    ) -> None:
        text = context.source_text
        indents: list[int] = []
        last_line = 0
        for token in tokens:
            if token.line == last_line:
                continue
            last_line = token.line
            # A token following the tail of a block string does not start its line
            line_start = text.rfind("\n", 0, token.start) + 1
            if not text[line_start : token.start].strip():
                indents.append(token.column - 1)
        steps = [indent for indent in indents if indent > 0]
        if steps:
            step = min(steps)
            if any(indent % step for indent in steps):
                collection.add_warning(
                    self.rule_id,
                    "Inconsistent indentation - use the same indentation step on every level",
                    context.document,
                )

        limit = context.get_config_value(keys.MAX_INDENTATION_LEVEL, int, 4)
        for line in context.printed_text.splitlines():
            if not line.strip():
                continue
            level = (len(line) - len(line.lstrip(" "))) // _PRINTED_INDENT_STEP
            if level > limit:
                collection.add_warning(
                    self.rule_id,
                    f"Indentation level ({level}) exceeds recommended limit ({limit})",
                    context.document,
                )
                break

    # -- line length --------------------------------------------------------

    def _check_line_length(
        self, context: LintContext, text: str, collection: DiagnosticCollection
    ) -> None:
        limit = context.get_config_value(keys.MAX_LINE_LENGTH, int, 80)
        for number, line in enumerate(text.splitlines(), start=1):
            if len(line) > limit:
                collection.add_diagnostic(
                    Diagnostic(
                        rule_id=self.rule_id,
                        message=(
                            f"Line {number} length ({len(line)}) exceeds "
                            f"recommended limit ({limit})"
                        ),
                        severity=Severity.WARNING,
                        path="document",
                        line=number,
                        column=limit + 1,
                    )
                )
                break
