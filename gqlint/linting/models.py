"""Core models for the gqlint linting framework."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import TYPE_CHECKING, Any

from graphql.language import get_location

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from graphql.language import Node


class Severity(IntEnum):
    """Ordered diagnostic severity: ``INFO < WARNING < ERROR``."""

    INFO = 0
    WARNING = 1
    ERROR = 2

    def is_more_severe_than(self, other: Severity) -> bool:
        return self > other

    def is_less_severe_than(self, other: Severity) -> bool:
        return self < other

    def is_at_least(self, other: Severity) -> bool:
        return self >= other

    @classmethod
    def parse(cls, value: str | Severity) -> Severity:
        """Parse a severity name case-insensitively (``"warn"`` is accepted)."""
        if isinstance(value, Severity):
            return value
        name = value.strip().upper()
        if name == "WARN":
            name = "WARNING"
        try:
            return cls[name]
        except KeyError:
            choices = ", ".join(s.name.lower() for s in cls)
            raise ValueError(f"Unknown severity {value!r}. Choose from: {choices}") from None


def describe_node(node: Node | None) -> str | None:
    """Return a short ``kind:name`` descriptor for a node, e.g. ``field:user``."""
    if node is None:
        return None
    kind = getattr(node, "kind", type(node).__name__)
    name_node = getattr(node, "name", None)
    name = getattr(name_node, "value", None)
    if kind == "field" and getattr(node, "alias", None) is not None:
        name = f"{node.alias.value}:{name}"  # type: ignore[attr-defined]
    return f"{kind}:{name}" if name else kind


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """A single finding reported by a rule.

    ``node`` is a non-owning reference into the parsed document; it takes
    part in equality but not in hashing.
    """

    rule_id: str
    message: str
    severity: Severity
    node: Node | None = field(default=None, hash=False, repr=False)
    path: str | None = None
    line: int | None = None
    column: int | None = None

    @classmethod
    def from_node(
        cls, rule_id: str, message: str, severity: Severity, node: Node | None = None
    ) -> Diagnostic:
        """Build a diagnostic, deriving path and source position from ``node``."""
        line = column = None
        loc = getattr(node, "loc", None) if node is not None else None
        if loc is not None and loc.source is not None:
            position = get_location(loc.source, loc.start)
            line, column = position.line, position.column
        return cls(
            rule_id=rule_id,
            message=message,
            severity=severity,
            node=node,
            path=describe_node(node),
            line=line,
            column=column,
        )

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    @property
    def is_warning(self) -> bool:
        return self.severity is Severity.WARNING

    @property
    def is_info(self) -> bool:
        return self.severity is Severity.INFO

    def with_severity(self, severity: Severity) -> Diagnostic:
        """Return a copy of this diagnostic with a different severity."""
        return Diagnostic(
            rule_id=self.rule_id,
            message=self.message,
            severity=severity,
            node=self.node,
            path=self.path,
            line=self.line,
            column=self.column,
        )

    def to_dict(self) -> dict[str, Any]:
        """JSON-serialisable view (the AST node itself is omitted)."""
        return {
            "rule_id": self.rule_id,
            "severity": self.severity.name.lower(),
            "message": self.message,
            "path": self.path,
            "line": self.line,
            "column": self.column,
        }

    def __str__(self) -> str:
        text = f"{self.severity.name}: {self.rule_id} - {self.message}"
        if self.line is not None:
            text += f" (line {self.line}"
            if self.column is not None:
                text += f", column {self.column}"
            text += ")"
        if self.path:
            text += f" [{self.path}]"
        return text


class DiagnosticCollection:
    """Diagnostics from one lint run, partitioned by severity.

    Each bucket is append-only and keeps insertion order. Once returned from
    ``GraphQLLinter.lint`` the collection is treated as read-only.
    """

    __slots__ = ("_errors", "_info", "_warnings")

    def __init__(self) -> None:
        """Initialize an empty collection."""
        self._errors: list[Diagnostic] = []
        self._warnings: list[Diagnostic] = []
        self._info: list[Diagnostic] = []

    # -- population ---------------------------------------------------------

    def add_diagnostic(self, diagnostic: Diagnostic | None) -> None:
        """Append a diagnostic to the bucket matching its severity."""
        if diagnostic is None:
            return
        self._bucket(diagnostic.severity).append(diagnostic)

    def add(
        self, rule_id: str, message: str, severity: Severity, node: Node | None = None
    ) -> Diagnostic:
        diagnostic = Diagnostic.from_node(rule_id, message, severity, node)
        self.add_diagnostic(diagnostic)
        return diagnostic

    def add_error(self, rule_id: str, message: str, node: Node | None = None) -> Diagnostic:
        return self.add(rule_id, message, Severity.ERROR, node)

    def add_warning(self, rule_id: str, message: str, node: Node | None = None) -> Diagnostic:
        return self.add(rule_id, message, Severity.WARNING, node)

    def add_info(self, rule_id: str, message: str, node: Node | None = None) -> Diagnostic:
        return self.add(rule_id, message, Severity.INFO, node)

    def merge(self, other: DiagnosticCollection | None) -> None:
        """Append ``other``'s buckets onto ours, preserving relative order."""
        if other is None:
            return
        self._errors.extend(other._errors)
        self._warnings.extend(other._warnings)
        self._info.extend(other._info)

    # -- queries ------------------------------------------------------------

    @property
    def errors(self) -> tuple[Diagnostic, ...]:
        return tuple(self._errors)

    @property
    def warnings(self) -> tuple[Diagnostic, ...]:
        return tuple(self._warnings)

    @property
    def info(self) -> tuple[Diagnostic, ...]:
        return tuple(self._info)

    @property
    def error_count(self) -> int:
        return len(self._errors)

    @property
    def warning_count(self) -> int:
        return len(self._warnings)

    @property
    def info_count(self) -> int:
        return len(self._info)

    @property
    def total_count(self) -> int:
        return len(self._errors) + len(self._warnings) + len(self._info)

    def has_errors(self) -> bool:
        return bool(self._errors)

    def has_warnings(self) -> bool:
        return bool(self._warnings)

    def has_info(self) -> bool:
        return bool(self._info)

    def has_issues(self) -> bool:
        return self.total_count > 0

    def get_all_issues(self) -> list[Diagnostic]:
        """All diagnostics: errors, then warnings, then info."""
        return [*self._errors, *self._warnings, *self._info]

    def get_issues_by_level(self, severity: Severity | None) -> list[Diagnostic]:
        if severity is None:
            return []
        return list(self._bucket(severity))

    def get_issues_by_rule(self, rule_id: str | None) -> list[Diagnostic]:
        if rule_id is None:
            return []
        return [d for d in self if d.rule_id == rule_id]

    def filter(self, predicate: Callable[[Diagnostic], bool]) -> list[Diagnostic]:
        return [d for d in self if predicate(d)]

    def at_least(self, severity: Severity) -> list[Diagnostic]:
        """Diagnostics whose severity is ``severity`` or higher."""
        return [d for d in self if d.severity >= severity]

    def max_severity(self) -> Severity | None:
        if self._errors:
            return Severity.ERROR
        if self._warnings:
            return Severity.WARNING
        if self._info:
            return Severity.INFO
        return None

    def get_summary(self) -> str:
        """One-line human summary, e.g. ``"3 error(s), 1 warning(s)"``."""
        parts = []
        if self._errors:
            parts.append(f"{len(self._errors)} error(s)")
        if self._warnings:
            parts.append(f"{len(self._warnings)} warning(s)")
        if self._info:
            parts.append(f"{len(self._info)} info")
        return ", ".join(parts) if parts else "No issues found"

    def to_dict(self) -> dict[str, Any]:
        return {
            "summary": self.get_summary(),
            "errors": self.error_count,
            "warnings": self.warning_count,
            "info": self.info_count,
            "issues": [d.to_dict() for d in self],
        }

    # -- helpers ------------------------------------------------------------

    def _bucket(self, severity: Severity) -> list[Diagnostic]:
        if severity is Severity.ERROR:
            return self._errors
        if severity is Severity.WARNING:
            return self._warnings
        return self._info

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.get_all_issues())

    def __len__(self) -> int:
        return self.total_count

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DiagnosticCollection):
            return NotImplemented
        return (
            self._errors == other._errors
            and self._warnings == other._warnings
            and self._info == other._info
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"DiagnosticCollection(errors={len(self._errors)}, "
            f"warnings={len(self._warnings)}, info={len(self._info)})"
        )
