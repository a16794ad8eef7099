"""Tests for gqlint.linting.presets."""

import pytest

from gqlint.exceptions import ResourceNotFoundError
from gqlint.linting import presets
from gqlint.linting.config import LintConfig, RuleConfig
from gqlint.linting.models import Severity
from gqlint.linting.rules import RuleCategory


class TestPresets:
    def test_strict(self) -> None:
        config = presets.strict()
        assert config.get_value("maxDepth", int, 0) == 3
        assert config.get_value("maxSecurityDepth", int, 0) == 2
        for category in RuleCategory:
            assert config.get_severity_override(category.value) is Severity.ERROR

    def test_relaxed_allows_introspection(self) -> None:
        config = presets.relaxed()
        assert config.get_value("forbiddenIntrospection", bool, True) is False
        assert config.get_value("enforceCamelCase", bool, True) is False
        assert config.get_severity_override("STYLE") is Severity.INFO

    def test_performance(self) -> None:
        config = presets.performance()
        assert config.get_value("maxQueryComplexity", int, 0) == 30
        assert config.get_severity_override("PERFORMANCE") is Severity.ERROR

    def test_security(self) -> None:
        config = presets.security()
        sensitive = config.get_value("sensitiveFields", frozenset, frozenset())
        assert {"privateKey", "authToken", "password"} <= sensitive
        assert config.get_severity_override("SECURITY") is Severity.ERROR
        assert config.get_severity_override("STYLE") is Severity.WARNING

    def test_every_preset_enables_every_family(self) -> None:
        for factory in presets.PRESETS.values():
            config = factory()
            for category in RuleCategory:
                assert config.is_rule_enabled(category.value)

    def test_factories_return_fresh_configs(self) -> None:
        first = presets.strict()
        first.set_value("maxDepth", 99)
        assert presets.strict().get_value("maxDepth", int, 0) == 3

    def test_custom(self) -> None:
        config = presets.custom({"maxDepth": 1}, {"STYLE": RuleConfig(False)})
        assert config.get_value("maxDepth", int, 0) == 1
        assert config.get_value("maxFields", int, 0) == 50
        assert not config.is_rule_enabled("STYLE")

    def test_merge_leaves_inputs_untouched(self) -> None:
        base = presets.strict()
        override = LintConfig({"maxDepth": 9})
        merged = presets.merge(base, override)
        assert merged.get_value("maxDepth", int, 0) == 9
        assert base.get_value("maxDepth", int, 0) == 3

    def test_merge_keeps_values_the_override_leaves_at_default(self) -> None:
        merged = presets.merge(presets.strict(), presets.custom({"maxDepth": 7}))
        assert merged.get_value("maxDepth", int, 0) == 7
        assert merged.get_value("maxFields", int, 0) == 30
        assert merged.get_value("maxLineLength", int, 0) == 100
        assert merged.get_severity_override("STYLE") is Severity.ERROR


class TestGetPreset:
    def test_by_name(self) -> None:
        assert presets.get_preset("strict") == presets.strict()

    def test_name_is_normalized(self) -> None:
        assert presets.get_preset("  Relaxed ") == presets.relaxed()

    def test_security_first_alias(self) -> None:
        assert presets.get_preset("security-first") == presets.security()

    def test_unknown(self) -> None:
        with pytest.raises(ResourceNotFoundError, match="Preset 'paranoid' not found"):
            presets.get_preset("paranoid")
