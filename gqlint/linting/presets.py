"""Named lint presets.

Each preset is a factory returning a fresh, fully populated ``LintConfig``;
no preset mutates shared state.

Examples
--------
>>> from gqlint.linting.presets import get_preset
>>> get_preset("strict").get_value("maxDepth", int, 0)
3
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from gqlint.exceptions import ResourceNotFoundError
from gqlint.linting import config as keys
from gqlint.linting.config import LintConfig, RuleConfig
from gqlint.linting.models import Severity
from gqlint.linting.rules import RuleCategory

_STYLE = RuleCategory.STYLE.value
_BEST_PRACTICE = RuleCategory.BEST_PRACTICE.value
_PERFORMANCE = RuleCategory.PERFORMANCE.value
_SECURITY = RuleCategory.SECURITY.value


def _with_levels(
    config: LintConfig,
    style: Severity,
    best_practice: Severity,
    performance: Severity,
    security: Severity,
) -> LintConfig:
    config.set_rule_config(_STYLE, RuleConfig(True, style))
    config.set_rule_config(_BEST_PRACTICE, RuleConfig(True, best_practice))
    config.set_rule_config(_PERFORMANCE, RuleConfig(True, performance))
    config.set_rule_config(_SECURITY, RuleConfig(True, security))
    return config


def strict() -> LintConfig:
    """Tight limits everywhere; every finding is an error."""
    config = LintConfig({
        keys.MAX_LINE_LENGTH: 100,
        keys.MAX_DEPTH: 3,
        keys.MAX_FIELDS: 30,
        keys.MAX_SECURITY_DEPTH: 2,
        keys.MAX_ARGUMENTS: 10,
        keys.MAX_FRAGMENTS: 5,
        keys.SENSITIVE_FIELDS: keys.DEFAULT_SENSITIVE_FIELDS,
        keys.FORBIDDEN_INTROSPECTION: True,
        keys.MAX_QUERY_COMPLEXITY: 50,
        keys.ENFORCE_CAMEL_CASE: True,
        keys.ENFORCE_CONSISTENT_SPACING: True,
        keys.ENFORCE_INDENTATION: True,
        keys.MAX_INDENTATION_LEVEL: 4,
    })
    return _with_levels(config, Severity.ERROR, Severity.ERROR, Severity.ERROR, Severity.ERROR)


def relaxed() -> LintConfig:
    """Permissive limits, style reduced to hints, introspection allowed."""
    config = LintConfig({
        keys.MAX_LINE_LENGTH: 120,
        keys.MAX_DEPTH: 7,
        keys.MAX_FIELDS: 80,
        keys.MAX_SECURITY_DEPTH: 4,
        keys.MAX_ARGUMENTS: 20,
        keys.MAX_FRAGMENTS: 10,
        keys.SENSITIVE_FIELDS: {"password", "ssn", "creditCard"},
        keys.FORBIDDEN_INTROSPECTION: False,
        keys.MAX_QUERY_COMPLEXITY: 100,
        keys.ENFORCE_CAMEL_CASE: False,
        keys.ENFORCE_CONSISTENT_SPACING: False,
        keys.ENFORCE_INDENTATION: False,
        keys.MAX_INDENTATION_LEVEL: 8,
    })
    return _with_levels(config, Severity.INFO, Severity.WARNING, Severity.INFO, Severity.WARNING)


def performance() -> LintConfig:
    """Tight size/depth limits; performance findings are errors."""
    config = LintConfig({
        keys.MAX_LINE_LENGTH: 80,
        keys.MAX_DEPTH: 4,
        keys.MAX_FIELDS: 40,
        keys.MAX_SECURITY_DEPTH: 3,
        keys.MAX_ARGUMENTS: 8,
        keys.MAX_FRAGMENTS: 3,
        keys.MAX_QUERY_COMPLEXITY: 30,
        keys.ENFORCE_FRAGMENT_USAGE: True,
        keys.ENFORCE_FIELD_SELECTION: True,
        keys.ENFORCE_ALIAS_USAGE: True,
        keys.MAX_SELECTION_SET_SIZE: 15,
        keys.SENSITIVE_FIELDS: {"password", "ssn", "creditCard", "apiKey"},
        keys.FORBIDDEN_INTROSPECTION: True,
        keys.ENFORCE_CAMEL_CASE: True,
        keys.ENFORCE_CONSISTENT_SPACING: True,
        keys.ENFORCE_INDENTATION: True,
        keys.MAX_INDENTATION_LEVEL: 4,
    })
    return _with_levels(config, Severity.INFO, Severity.WARNING, Severity.ERROR, Severity.WARNING)


def security() -> LintConfig:
    """Security-first: very low depth/complexity ceilings, security findings are errors."""
    config = LintConfig({
        keys.MAX_LINE_LENGTH: 80,
        keys.MAX_DEPTH: 2,
        keys.MAX_FIELDS: 20,
        keys.MAX_SECURITY_DEPTH: 2,
        keys.MAX_ARGUMENTS: 5,
        keys.MAX_FRAGMENTS: 2,
        keys.MAX_QUERY_COMPLEXITY: 20,
        keys.SENSITIVE_FIELDS: keys.DEFAULT_SENSITIVE_FIELDS | {"privateKey", "authToken"},
        keys.FORBIDDEN_INTROSPECTION: True,
        keys.ENFORCE_INPUT_VALIDATION: True,
        keys.ENFORCE_ACCESS_CONTROL: True,
        keys.FORBIDDEN_DIRECTIVES: keys.DEFAULT_FORBIDDEN_DIRECTIVES,
        keys.ENFORCE_FRAGMENT_USAGE: True,
        keys.ENFORCE_FIELD_SELECTION: True,
        keys.MAX_SELECTION_SET_SIZE: 10,
        keys.ENFORCE_CAMEL_CASE: True,
        keys.ENFORCE_CONSISTENT_SPACING: True,
        keys.ENFORCE_INDENTATION: True,
        keys.MAX_INDENTATION_LEVEL: 3,
    })
    return _with_levels(
        config, Severity.WARNING, Severity.WARNING, Severity.WARNING, Severity.ERROR
    )


def development() -> LintConfig:
    """Balanced limits for local work; introspection allowed, everything a warning."""
    config = LintConfig({
        keys.MAX_LINE_LENGTH: 100,
        keys.MAX_DEPTH: 5,
        keys.MAX_FIELDS: 50,
        keys.MAX_SECURITY_DEPTH: 3,
        keys.MAX_ARGUMENTS: 15,
        keys.MAX_FRAGMENTS: 5,
        keys.MAX_QUERY_COMPLEXITY: 75,
        keys.SENSITIVE_FIELDS: {"password", "ssn", "creditCard"},
        keys.FORBIDDEN_INTROSPECTION: False,
        keys.ENFORCE_FRAGMENT_USAGE: True,
        keys.ENFORCE_FIELD_SELECTION: True,
        keys.MAX_SELECTION_SET_SIZE: 20,
        keys.MAX_INDENTATION_LEVEL: 5,
    })
    return _with_levels(
        config, Severity.WARNING, Severity.WARNING, Severity.WARNING, Severity.WARNING
    )


def production() -> LintConfig:
    """Strict production gate; performance findings stay warnings."""
    config = LintConfig({
        keys.MAX_LINE_LENGTH: 80,
        keys.MAX_DEPTH: 4,
        keys.MAX_FIELDS: 40,
        keys.MAX_SECURITY_DEPTH: 3,
        keys.MAX_ARGUMENTS: 10,
        keys.MAX_FRAGMENTS: 5,
        keys.MAX_QUERY_COMPLEXITY: 50,
        keys.SENSITIVE_FIELDS: keys.DEFAULT_SENSITIVE_FIELDS,
        keys.FORBIDDEN_INTROSPECTION: True,
        keys.ENFORCE_FRAGMENT_USAGE: True,
        keys.ENFORCE_FIELD_SELECTION: True,
        keys.MAX_SELECTION_SET_SIZE: 15,
        keys.ENFORCE_INPUT_VALIDATION: True,
        keys.ENFORCE_ACCESS_CONTROL: True,
        keys.MAX_INDENTATION_LEVEL: 4,
    })
    return _with_levels(config, Severity.ERROR, Severity.ERROR, Severity.WARNING, Severity.ERROR)


def custom(
    settings: Mapping[str, Any] | None = None,
    rule_configs: Mapping[str, RuleConfig] | None = None,
) -> LintConfig:
    """Defaults overlaid with the given settings and rule configs."""
    return LintConfig(settings, rule_configs)


def merge(base: LintConfig, override: LintConfig) -> LintConfig:
    """New config holding ``base`` overlaid with ``override``; inputs untouched."""
    return base.copy().merge(override)


PRESETS: dict[str, Callable[[], LintConfig]] = {
    "strict": strict,
    "relaxed": relaxed,
    "performance": performance,
    "security": security,
    "development": development,
    "production": production,
    "security-first": security,
}


def get_preset(name: str) -> LintConfig:
    """Build the named preset.

    Raises
    ------
    ResourceNotFoundError
        If no preset with that name exists
    """
    factory = PRESETS.get(name.strip().lower())
    if factory is None:
        raise ResourceNotFoundError("preset", name, sorted(PRESETS))
    return factory()
