"""Tests for gqlint.linting.best_practice_rules."""

from graphql import parse

from gqlint.linting.best_practice_rules import BestPracticeRule
from gqlint.linting.config import LintConfig
from gqlint.linting.context import LintContext
from gqlint.linting.models import DiagnosticCollection, Severity


def _run(source: str, **settings) -> DiagnosticCollection:
    collection = DiagnosticCollection()
    BestPracticeRule().run(LintContext(parse(source), LintConfig(settings)), collection)
    return collection


def _messages(collection: DiagnosticCollection, severity: Severity | None = None) -> list[str]:
    return [d.message for d in collection if severity is None or d.severity is severity]


def _matching(collection: DiagnosticCollection, fragment: str) -> list[str]:
    return [m for m in _messages(collection) if fragment in m]


class TestAliases:
    def test_redundant_alias(self) -> None:
        infos = _messages(_run("query GetUser { user: user { id name } }"), Severity.INFO)
        assert "Alias 'user' is redundant - same as field name" in infos

    def test_short_alias(self) -> None:
        infos = _messages(_run("query GetUser { u: user { id name } }"), Severity.INFO)
        assert "Alias 'u' is very short - consider more descriptive name" in infos

    def test_missing_alias_reported_once_per_name(self) -> None:
        result = _run("query GetUser { a { id name } b { id name } c { id name } }")
        alias_warnings = _matching(result, "Consider using alias")
        assert alias_warnings == [
            "Consider using alias for field 'id' to avoid conflicts (selected 3 times)",
            "Consider using alias for field 'name' to avoid conflicts (selected 3 times)",
        ]

    def test_missing_alias_can_be_disabled(self) -> None:
        result = _run("query GetUser { a { id name } b { id name } }", enforceAliasUsage=False)
        assert not _matching(result, "Consider using alias")

    def test_aliased_fields_are_not_flagged(self) -> None:
        result = _run("query GetUser { first: user { id } second: user { name } }")
        assert not _matching(result, "Consider using alias")


class TestFragments:
    def test_unused_fragment(self) -> None:
        result = _run("query GetUser { user { name } } fragment UserFields on User { id email }")
        assert _messages(result, Severity.WARNING) == [
            "Fragment 'UserFields' is defined but never used"
        ]
        assert result.warnings[0].path == "fragment_definition:UserFields"

    def test_too_many_fragments(self) -> None:
        source = (
            "query GetUser { ...FragOne ...FragTwo } "
            "fragment FragOne on Query { a } fragment FragTwo on Query { b }"
        )
        assert _matching(_run(source, maxFragments=1), "Consider consolidating 2 fragments")
        assert not _matching(_run(source), "Consider consolidating")

    def test_good_reuse_hint(self) -> None:
        source = (
            "query GetUser { a { ...Frag } b { ...Frag } c { ...Frag } d { ...Frag } } "
            "fragment Frag on T { id }"
        )
        assert "Fragment 'Frag' used 4 times - good reuse" in _messages(_run(source), Severity.INFO)

    def test_oversized_fragment(self) -> None:
        source = "query GetUser { ...Profile } fragment Profile on User { id name email }"
        warnings = _messages(_run(source, maxFragmentFields=2), Severity.WARNING)
        assert (
            "Fragment 'Profile' has 3 fields - consider splitting for maintainability" in warnings
        )

    def test_short_fragment_name(self) -> None:
        result = _run("query GetUser { ...Ab } fragment Ab on T { id }")
        assert "Fragment name 'Ab' is very short - consider more descriptive name" in (
            _messages(result, Severity.INFO)
        )


class TestSelectionSets:
    def test_duplicate_field_is_an_error(self) -> None:
        result = _run("query GetUser { user { id id } }")
        assert _messages(result, Severity.ERROR) == ["Duplicate field 'id' in selection set"]

    def test_duplicate_response_key_via_alias(self) -> None:
        result = _run("query GetUser { key: user key: account }")
        assert _messages(result, Severity.ERROR) == ["Duplicate field 'key' in selection set"]

    def test_same_field_different_aliases(self) -> None:
        assert not _run("query GetUser { me: user you: user }").has_errors()

    def test_large_selection_set(self) -> None:
        warnings = _messages(_run("query GetUser { a b c }", maxSelectionSetSize=2))
        assert "Large selection set with 3 fields - consider using fragments" in warnings

    def test_common_fields_shape(self) -> None:
        result = _run("query GetUser { user { id name email phone address } }")
        assert _matching(result, "instead of selecting all common fields")
        assert not _matching(result, "over-fetching")

    def test_over_fetching(self) -> None:
        result = _run("query GetUser { user { id name email phone address city } }")
        assert _messages(result, Severity.WARNING) == [
            "Field 'user' may be over-fetching data - consider more specific field selection"
        ]

    def test_unnecessary_nesting(self) -> None:
        infos = _messages(_run("query GetUser { user { id } }"), Severity.INFO)
        assert infos == ["Field 'user' has unnecessary nesting - consider flattening"]

    def test_field_selection_can_be_disabled(self) -> None:
        source = "query GetUser { user { id name email phone address city } account { id } }"
        result = _run(source, enforceFieldSelection=False)
        assert not _matching(result, "over-fetching")
        assert not _matching(result, "unnecessary nesting")


class TestVariables:
    def test_unused_variable(self) -> None:
        result = _run("query GetUser($id: ID) { user { id name } }")
        assert _messages(result, Severity.WARNING) == ["Variable '$id' is defined but never used"]

    def test_undeclared_variable_is_an_error(self) -> None:
        result = _run("query GetUser { user(id: $id) { id name } }")
        assert _messages(result, Severity.ERROR) == ["Variable '$id' is used but not defined"]
        assert result.errors[0].path == "variable:id"

    def test_usage_through_fragments(self) -> None:
        source = (
            "query GetUser($id: ID) { ...UserQuery } "
            "fragment UserQuery on Query { user(id: $id) { id name } }"
        )
        result = _run(source)
        assert not _matching(result, "Variable")

    def test_checked_per_operation(self) -> None:
        source = (
            "query GetUser($id: ID) { ...UserQuery } query ListUsers { ...UserQuery } "
            "fragment UserQuery on Query { user(id: $id) { id name } }"
        )
        errors = _messages(_run(source), Severity.ERROR)
        assert errors == ["Variable '$id' is used but not defined"]

    def test_variable_naming(self) -> None:
        result = _run("query GetUser($user_id: ID) { user(id: $user_id) { id name } }")
        assert _messages(result, Severity.WARNING) == [
            "Variable name '$user_id' should follow camelCase convention"
        ]


class TestOperations:
    def test_anonymous_operation(self) -> None:
        warnings = _messages(_run("{ user { id name } }"), Severity.WARNING)
        assert warnings == ["Consider naming your operation for better debugging and monitoring"]

    def test_operation_pascal_case(self) -> None:
        warnings = _messages(_run("query getUser { user { id name } }"), Severity.WARNING)
        assert warnings == ["Operation name 'getUser' should follow PascalCase convention"]

    def test_short_operation_name(self) -> None:
        infos = _messages(_run("query Ab { user { id name } }"), Severity.INFO)
        assert "Operation name 'Ab' is very short - consider more descriptive name" in infos

    def test_multiple_operations(self) -> None:
        result = _run("query GetUser { a } query GetPost { b }")
        assert _matching(result, "Document contains 2 operations")

    def test_multiple_mutations(self) -> None:
        result = _run("mutation AddUser { a } mutation AddPost { b }")
        assert _messages(result, Severity.WARNING) == [
            "Multiple mutations in single document - consider splitting for atomicity"
        ] * 2


class TestArgumentsAndDirectives:
    def test_too_many_arguments(self) -> None:
        result = _run("query GetUser { users(a: 1, b: 2, c: 3) { id name } }", maxArguments=2)
        assert _messages(result, Severity.WARNING) == [
            "Field 'users' has 3 arguments - consider using variables or input types"
        ]

    def test_directive_naming(self) -> None:
        result = _run("query GetUser { user @cache_control { id name } }")
        assert _messages(result, Severity.WARNING) == [
            "Directive name 'cache_control' should follow camelCase convention"
        ]
