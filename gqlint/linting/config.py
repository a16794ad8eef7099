"""Lint configuration: typed settings plus per-rule enable/severity overrides.

Setting names keep camelCase keys (``maxDepth``, ``sensitiveFields``) so
that they read the same in Python, ``pyproject.toml`` and YAML.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, TypeVar

from gqlint.exceptions import ValidationError
from gqlint.linting.models import Severity

T = TypeVar("T")

# ---------------------------------------------------------------------------
# Setting keys
# ---------------------------------------------------------------------------

MAX_LINE_LENGTH = "maxLineLength"
MAX_DEPTH = "maxDepth"
MAX_FIELDS = "maxFields"
MAX_ARGUMENTS = "maxArguments"
MAX_FRAGMENTS = "maxFragments"
MAX_FRAGMENT_FIELDS = "maxFragmentFields"
MAX_SELECTION_SET_SIZE = "maxSelectionSetSize"
MAX_SECURITY_DEPTH = "maxSecurityDepth"
MAX_QUERY_COMPLEXITY = "maxQueryComplexity"
MAX_INDENTATION_LEVEL = "maxIndentationLevel"
RESOURCE_EXHAUSTION_DEPTH = "resourceExhaustionDepth"
EXPONENTIAL_BREADTH = "exponentialBreadth"

SENSITIVE_FIELDS = "sensitiveFields"
SENSITIVE_PATTERNS = "sensitivePatterns"
ADMIN_FIELD_PATTERNS = "adminFieldPatterns"
INTERNAL_FIELD_PATTERNS = "internalFieldPatterns"
FORBIDDEN_DIRECTIVES = "forbiddenDirectives"
SQL_KEYWORDS = "sqlKeywords"

FORBIDDEN_INTROSPECTION = "forbiddenIntrospection"
ENFORCE_CAMEL_CASE = "enforceCamelCase"
ENFORCE_CONSISTENT_SPACING = "enforceConsistentSpacing"
ENFORCE_INDENTATION = "enforceIndentation"
ENFORCE_FRAGMENT_USAGE = "enforceFragmentUsage"
ENFORCE_FIELD_SELECTION = "enforceFieldSelection"
ENFORCE_ALIAS_USAGE = "enforceAliasUsage"
ENFORCE_INPUT_VALIDATION = "enforceInputValidation"
ENFORCE_ACCESS_CONTROL = "enforceAccessControl"

DEFAULT_SENSITIVE_FIELDS = frozenset({
    "password",
    "ssn",
    "creditCard",
    "apiKey",
    "token",
    "secret",
})

DEFAULT_SENSITIVE_PATTERNS = frozenset({
    "password",
    "passwd",
    "pwd",
    "secret",
    "token",
    "credential",
    "ssn",
    "social",
    "credit",
    "card",
    "bank",
    "iban",
    "financial",
    "payment",
    "salary",
    "personal",
    "private",
    "confidential",
    "sensitive",
    "birth",
    "passport",
})

DEFAULT_ADMIN_FIELD_PATTERNS = frozenset({
    "admin",
    "administrator",
    "superuser",
    "root",
    "privileged",
    "elevated",
})

DEFAULT_INTERNAL_FIELD_PATTERNS = frozenset({
    "internal",
    "system",
    "hidden",
    "confidential",
    "restricted",
})

DEFAULT_FORBIDDEN_DIRECTIVES = frozenset({"auth", "admin", "internal"})

# Bare words that flag a string argument as a possible SQL fragment
DEFAULT_SQL_KEYWORDS = frozenset({
    "SELECT",
    "INSERT",
    "UPDATE",
    "DELETE",
    "DROP",
    "CREATE",
    "ALTER",
    "EXEC",
    "UNION",
    "OR",
    "AND",
})

DEFAULT_SETTINGS: Mapping[str, Any] = {
    MAX_LINE_LENGTH: 80,
    MAX_DEPTH: 5,
    MAX_FIELDS: 50,
    MAX_ARGUMENTS: 10,
    MAX_FRAGMENTS: 5,
    MAX_FRAGMENT_FIELDS: 20,
    MAX_SELECTION_SET_SIZE: 15,
    MAX_SECURITY_DEPTH: 3,
    MAX_QUERY_COMPLEXITY: 50,
    MAX_INDENTATION_LEVEL: 4,
    RESOURCE_EXHAUSTION_DEPTH: 5,
    EXPONENTIAL_BREADTH: 10,
    SENSITIVE_FIELDS: DEFAULT_SENSITIVE_FIELDS,
    SENSITIVE_PATTERNS: DEFAULT_SENSITIVE_PATTERNS,
    ADMIN_FIELD_PATTERNS: DEFAULT_ADMIN_FIELD_PATTERNS,
    INTERNAL_FIELD_PATTERNS: DEFAULT_INTERNAL_FIELD_PATTERNS,
    FORBIDDEN_DIRECTIVES: DEFAULT_FORBIDDEN_DIRECTIVES,
    SQL_KEYWORDS: DEFAULT_SQL_KEYWORDS,
    FORBIDDEN_INTROSPECTION: True,
    ENFORCE_CAMEL_CASE: True,
    ENFORCE_CONSISTENT_SPACING: True,
    ENFORCE_INDENTATION: True,
    ENFORCE_FRAGMENT_USAGE: True,
    ENFORCE_FIELD_SELECTION: True,
    ENFORCE_ALIAS_USAGE: True,
    ENFORCE_INPUT_VALIDATION: True,
    ENFORCE_ACCESS_CONTROL: True,
}

_SET_TYPES = (set, frozenset)


@dataclass(frozen=True, slots=True)
class RuleConfig:
    """Per-rule switch and optional severity override.

    When ``severity_override`` is set, every diagnostic the rule reports is
    re-issued at that severity.
    """

    enabled: bool = True
    severity_override: Severity | None = None


_DEFAULT_RULE_CONFIG = RuleConfig()


def _normalize(key: str, value: Any) -> Any:
    """Coerce collection settings to frozensets and reject unusable values."""
    if isinstance(value, (list, tuple, set)):
        if not all(isinstance(item, str) for item in value):
            raise ValidationError(key, "collection settings must contain only strings", value)
        return frozenset(value)
    if isinstance(value, int) and not isinstance(value, bool) and value < 0:
        raise ValidationError(key, "numeric limits must be non-negative", value)
    return value


class LintConfig:
    """Key/value lint settings with defaults and per-rule overrides.

    A config is only read while a lint run is in progress. Callers that
    want to tweak a shared config should ``copy()`` it first.

    Examples
    --------
    >>> config = LintConfig({"maxDepth": 3})
    >>> config.get_value("maxDepth", int, 5)
    3
    >>> config.get_value("unknownKey", int, 7)
    7
    """

    __slots__ = ("_explicit", "_rule_configs", "_settings")

    def __init__(
        self,
        settings: Mapping[str, Any] | None = None,
        rule_configs: Mapping[str, RuleConfig] | None = None,
    ) -> None:
        self._settings: dict[str, Any] = dict(DEFAULT_SETTINGS)
        self._explicit: set[str] = set()
        self._rule_configs: dict[str, RuleConfig] = {}
        if settings:
            for key, value in settings.items():
                self.set_value(key, value)
        if rule_configs:
            for rule_id, rule_config in rule_configs.items():
                self.set_rule_config(rule_id, rule_config)

    # -- settings -------------------------------------------------------------

    def get_value(self, key: str, expected_type: type[T], default: T) -> T:
        """Typed lookup; unknown keys or mismatched types yield ``default``.

        ``bool`` values never satisfy an ``int`` request, and any set-like
        value satisfies a ``set``/``frozenset`` request (returned as frozenset).
        """
        if key is None or expected_type is None:
            return default
        value = self._settings.get(key)
        if value is None:
            return default
        if expected_type in _SET_TYPES:
            if isinstance(value, (set, frozenset, list, tuple)):
                return frozenset(value)  # type: ignore[return-value]
            return default
        if expected_type is int and isinstance(value, bool):
            return default
        if isinstance(value, expected_type):
            return value
        return default

    def set_value(self, key: str, value: Any) -> LintConfig:
        if key is not None:
            self._settings[key] = _normalize(key, value)
            self._explicit.add(key)
        return self

    def update(self, settings: Mapping[str, Any]) -> LintConfig:
        for key, value in settings.items():
            self.set_value(key, value)
        return self

    @property
    def settings(self) -> dict[str, Any]:
        """A copy of all settings."""
        return dict(self._settings)

    # -- rule configs -----------------------------------------------------------

    def get_rule_config(self, rule_id: str | None) -> RuleConfig:
        if rule_id is None:
            return _DEFAULT_RULE_CONFIG
        return self._rule_configs.get(rule_id, _DEFAULT_RULE_CONFIG)

    def set_rule_config(self, rule_id: str, rule_config: RuleConfig) -> LintConfig:
        if rule_id is not None and rule_config is not None:
            self._rule_configs[rule_id] = rule_config
        return self

    def enable_rule(self, rule_id: str) -> LintConfig:
        current = self.get_rule_config(rule_id)
        return self.set_rule_config(rule_id, RuleConfig(True, current.severity_override))

    def disable_rule(self, rule_id: str) -> LintConfig:
        current = self.get_rule_config(rule_id)
        return self.set_rule_config(rule_id, RuleConfig(False, current.severity_override))

    def disable_rules(self, rule_ids: Iterable[str]) -> LintConfig:
        for rule_id in rule_ids:
            self.disable_rule(rule_id)
        return self

    def is_rule_enabled(self, rule_id: str) -> bool:
        return self.get_rule_config(rule_id).enabled

    def get_severity_override(self, rule_id: str) -> Severity | None:
        return self.get_rule_config(rule_id).severity_override

    @property
    def rule_configs(self) -> dict[str, RuleConfig]:
        """A copy of all per-rule configurations."""
        return dict(self._rule_configs)

    # -- composition ------------------------------------------------------------

    def merge(self, other: LintConfig | None) -> LintConfig:
        """Overlay ``other``'s rule configs and explicitly set values onto this config.

        Settings ``other`` only holds as defaults are left alone, so
        ``strict().merge(LintConfig({"maxDepth": 7}))`` keeps strict's other limits.
        """
        if other is None:
            return self
        for key in other._explicit:
            self._settings[key] = other._settings[key]
        self._explicit.update(other._explicit)
        self._rule_configs.update(other._rule_configs)
        return self

    def copy(self) -> LintConfig:
        clone = LintConfig()
        clone._settings = dict(self._settings)
        clone._explicit = set(self._explicit)
        clone._rule_configs = dict(self._rule_configs)
        return clone

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LintConfig):
            return NotImplemented
        return self._settings == other._settings and self._rule_configs == other._rule_configs

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"LintConfig(settings={len(self._settings)}, "
            f"rule_configs={len(self._rule_configs)})"
        )
