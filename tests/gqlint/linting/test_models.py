"""Tests for gqlint.linting.models."""

import dataclasses

import pytest
from graphql import parse

from gqlint.linting.models import Diagnostic, DiagnosticCollection, Severity, describe_node


def _diag(rule_id: str, severity: Severity, message: str = "msg") -> Diagnostic:
    return Diagnostic(rule_id=rule_id, message=message, severity=severity)


def _collection(*diagnostics: Diagnostic) -> DiagnosticCollection:
    collection = DiagnosticCollection()
    for d in diagnostics:
        collection.add_diagnostic(d)
    return collection


class TestSeverity:
    def test_ordering(self) -> None:
        assert Severity.INFO < Severity.WARNING < Severity.ERROR
        assert Severity.ERROR.is_more_severe_than(Severity.WARNING)
        assert Severity.INFO.is_less_severe_than(Severity.WARNING)
        assert Severity.WARNING.is_at_least(Severity.WARNING)

    def test_parse_is_case_insensitive(self) -> None:
        assert Severity.parse("error") is Severity.ERROR
        assert Severity.parse(" Warning ") is Severity.WARNING
        assert Severity.parse("INFO") is Severity.INFO

    def test_parse_accepts_warn(self) -> None:
        assert Severity.parse("warn") is Severity.WARNING

    def test_parse_passes_severity_through(self) -> None:
        assert Severity.parse(Severity.ERROR) is Severity.ERROR

    def test_parse_unknown(self) -> None:
        with pytest.raises(ValueError, match="Unknown severity"):
            Severity.parse("fatal")


class TestDiagnostic:
    def test_creation(self) -> None:
        d = Diagnostic(rule_id="STYLE", message="Bad name", severity=Severity.WARNING)
        assert d.rule_id == "STYLE"
        assert d.message == "Bad name"
        assert d.is_warning
        assert not d.is_error
        assert d.node is None
        assert d.path is None
        assert d.line is None

    def test_frozen(self) -> None:
        d = _diag("STYLE", Severity.INFO)
        with pytest.raises(dataclasses.FrozenInstanceError):
            d.rule_id = "X"  # type: ignore[misc]

    def test_from_node_derives_location(self) -> None:
        document = parse("query Q {\n  user { id }\n}")
        field = document.definitions[0].selection_set.selections[0]
        d = Diagnostic.from_node("STYLE", "msg", Severity.INFO, field)
        assert d.node is field
        assert d.path == "field:user"
        assert d.line == 2
        assert d.column == 3

    def test_from_node_without_location(self) -> None:
        document = parse("{ user }", no_location=True)
        field = document.definitions[0].selection_set.selections[0]
        d = Diagnostic.from_node("STYLE", "msg", Severity.INFO, field)
        assert d.path == "field:user"
        assert d.line is None
        assert d.column is None

    def test_with_severity(self) -> None:
        d = Diagnostic(
            rule_id="SECURITY", message="m", severity=Severity.WARNING, path="document", line=1
        )
        remapped = d.with_severity(Severity.ERROR)
        assert remapped.severity is Severity.ERROR
        assert remapped.rule_id == d.rule_id
        assert remapped.path == "document"
        assert remapped.line == 1
        assert d.severity is Severity.WARNING

    def test_hashable(self) -> None:
        a = _diag("STYLE", Severity.INFO)
        b = _diag("STYLE", Severity.INFO)
        assert a == b
        assert len({a, b}) == 1

    def test_to_dict(self) -> None:
        d = Diagnostic(
            rule_id="STYLE",
            message="m",
            severity=Severity.WARNING,
            path="field:User",
            line=1,
            column=9,
        )
        assert d.to_dict() == {
            "rule_id": "STYLE",
            "severity": "warning",
            "message": "m",
            "path": "field:User",
            "line": 1,
            "column": 9,
        }

    def test_str(self) -> None:
        d = Diagnostic(
            rule_id="STYLE", message="m", severity=Severity.ERROR, path="document", line=2, column=4
        )
        assert str(d) == "ERROR: STYLE - m (line 2, column 4) [document]"


class TestDescribeNode:
    def test_none(self) -> None:
        assert describe_node(None) is None

    def test_aliased_field(self) -> None:
        field = parse("{ me: user }").definitions[0].selection_set.selections[0]
        assert describe_node(field) == "field:me:user"

    def test_unnamed_node(self) -> None:
        selection_set = parse("{ user }").definitions[0].selection_set
        assert describe_node(selection_set) == "selection_set"


class TestDiagnosticCollection:
    def test_empty(self) -> None:
        collection = DiagnosticCollection()
        assert not collection.has_issues()
        assert not collection.has_errors()
        assert collection.total_count == 0
        assert len(collection) == 0
        assert collection.get_all_issues() == []
        assert collection.max_severity() is None
        assert collection.get_summary() == "No issues found"

    def test_add_dispatches_by_severity(self) -> None:
        collection = DiagnosticCollection()
        collection.add_error("A", "err")
        collection.add_warning("B", "warn")
        collection.add_info("C", "info")
        collection.add_diagnostic(_diag("D", Severity.WARNING))
        collection.add_diagnostic(None)

        assert collection.error_count == 1
        assert collection.warning_count == 2
        assert collection.info_count == 1
        assert collection.has_errors()
        assert collection.has_warnings()
        assert collection.has_info()
        assert [d.rule_id for d in collection.warnings] == ["B", "D"]

    def test_all_issues_order(self) -> None:
        collection = _collection(
            _diag("i", Severity.INFO),
            _diag("w", Severity.WARNING),
            _diag("e", Severity.ERROR),
        )
        assert [d.rule_id for d in collection.get_all_issues()] == ["e", "w", "i"]
        assert [d.rule_id for d in collection] == ["e", "w", "i"]

    def test_get_issues_by_level_and_rule(self) -> None:
        collection = _collection(
            _diag("STYLE", Severity.WARNING),
            _diag("SECURITY", Severity.ERROR),
            _diag("STYLE", Severity.INFO),
        )
        assert len(collection.get_issues_by_level(Severity.WARNING)) == 1
        assert collection.get_issues_by_level(None) == []
        assert len(collection.get_issues_by_rule("STYLE")) == 2
        assert collection.get_issues_by_rule(None) == []
        # Filters never mutate
        assert collection.total_count == 3

    def test_filter_and_at_least(self) -> None:
        collection = _collection(
            _diag("a", Severity.INFO),
            _diag("b", Severity.WARNING),
            _diag("c", Severity.ERROR),
        )
        assert [d.rule_id for d in collection.at_least(Severity.WARNING)] == ["c", "b"]
        assert [d.rule_id for d in collection.filter(lambda d: d.rule_id == "a")] == ["a"]
        assert collection.max_severity() is Severity.ERROR

    def test_summary(self) -> None:
        collection = _collection(
            _diag("a", Severity.ERROR),
            _diag("b", Severity.ERROR),
            _diag("c", Severity.ERROR),
            _diag("d", Severity.WARNING),
        )
        assert collection.get_summary() == "3 error(s), 1 warning(s)"

    def test_merge_appends_per_bucket(self) -> None:
        a = _collection(_diag("a1", Severity.ERROR), _diag("a2", Severity.INFO))
        b = _collection(_diag("b1", Severity.ERROR), _diag("b2", Severity.WARNING))
        a.merge(b)
        assert [d.rule_id for d in a.errors] == ["a1", "b1"]
        assert [d.rule_id for d in a.warnings] == ["b2"]
        assert [d.rule_id for d in a.info] == ["a2"]
        assert b.total_count == 2

    def test_merge_none(self) -> None:
        a = _collection(_diag("a", Severity.ERROR))
        a.merge(None)
        assert a.total_count == 1

    def test_equality(self) -> None:
        assert _collection(_diag("a", Severity.INFO)) == _collection(_diag("a", Severity.INFO))
        assert _collection(_diag("a", Severity.INFO)) != _collection(_diag("b", Severity.INFO))

    def test_to_dict(self) -> None:
        data = _collection(_diag("a", Severity.WARNING)).to_dict()
        assert data["summary"] == "1 warning(s)"
        assert data["warnings"] == 1
        assert data["issues"][0]["severity"] == "warning"
