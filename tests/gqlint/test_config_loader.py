"""Tests for gqlint.config_loader."""

from pathlib import Path

import pytest

from gqlint.config_loader import CONFIG_PATH_ENV, ConfigLoader, RuleSpec, load_config
from gqlint.exceptions import ConfigurationError
from gqlint.linting.config import LintConfig, RuleConfig
from gqlint.linting.models import Severity
from gqlint.linting.presets import strict


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    """Run every test from an empty directory without config env vars."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv(CONFIG_PATH_ENV, raising=False)
    return tmp_path


def _write(path: Path, content: str) -> Path:
    path.write_text(content, encoding="utf-8")
    return path


class TestDiscovery:
    def test_defaults_without_files(self) -> None:
        assert load_config() == LintConfig()

    def test_pyproject_in_cwd(self, isolated_cwd) -> None:
        _write(
            isolated_cwd / "pyproject.toml",
            '[project]\nname = "demo"\n\n[tool.gqlint.settings]\nmaxDepth = 2\n',
        )
        assert load_config().get_value("maxDepth", int, 0) == 2

    def test_pyproject_without_section(self, isolated_cwd) -> None:
        _write(isolated_cwd / "pyproject.toml", '[project]\nname = "demo"\n')
        assert load_config() == LintConfig()

    def test_env_var_wins_over_pyproject(self, isolated_cwd, monkeypatch) -> None:
        _write(isolated_cwd / "pyproject.toml", "[tool.gqlint.settings]\nmaxDepth = 2\n")
        yaml_path = _write(
            isolated_cwd / "lint.yaml",
            "kind: LintConfig\nspec:\n  settings:\n    maxDepth: 7\n",
        )
        monkeypatch.setenv(CONFIG_PATH_ENV, str(yaml_path))
        assert load_config().get_value("maxDepth", int, 0) == 7

    def test_missing_env_file_falls_back(self, isolated_cwd, monkeypatch) -> None:
        monkeypatch.setenv(CONFIG_PATH_ENV, str(isolated_cwd / "missing.yaml"))
        assert load_config() == LintConfig()

    def test_explicit_missing_path(self, isolated_cwd) -> None:
        with pytest.raises(ConfigurationError, match="configuration file not found"):
            load_config(isolated_cwd / "nope.toml")


class TestYaml:
    def test_full_yaml_document(self, isolated_cwd) -> None:
        path = _write(
            isolated_cwd / "gqlint.yaml",
            """\
kind: LintConfig
metadata:
  name: api-queries
spec:
  preset: strict
  settings:
    maxDepth: 4
    sensitiveFields: [pin, otp]
  rules:
    STYLE:
      severity: warn
    PERFORMANCE:
      enabled: false
  disable: [BEST_PRACTICE]
""",
        )
        config = load_config(path)
        assert config.get_value("maxDepth", int, 0) == 4
        assert config.get_value("maxSecurityDepth", int, 0) == 2
        assert config.get_value("sensitiveFields", frozenset, frozenset()) == {"pin", "otp"}
        assert config.get_severity_override("STYLE") is Severity.WARNING
        assert config.get_severity_override("SECURITY") is Severity.ERROR
        assert not config.is_rule_enabled("PERFORMANCE")
        assert not config.is_rule_enabled("BEST_PRACTICE")

    def test_wrong_kind(self, isolated_cwd) -> None:
        path = _write(isolated_cwd / "c.yaml", "kind: Pipeline\nspec: {}\n")
        with pytest.raises(ConfigurationError, match="kind: LintConfig"):
            load_config(path)

    def test_not_a_mapping(self, isolated_cwd) -> None:
        path = _write(isolated_cwd / "c.yml", "- a\n- b\n")
        with pytest.raises(ConfigurationError, match="expected a mapping"):
            load_config(path)

    def test_invalid_yaml(self, isolated_cwd) -> None:
        path = _write(isolated_cwd / "c.yaml", "kind: [unclosed\n")
        with pytest.raises(ConfigurationError, match="invalid YAML"):
            load_config(path)

    def test_env_substitution(self, isolated_cwd, monkeypatch) -> None:
        monkeypatch.setenv("GQLINT_TEST_PRESET", "relaxed")
        path = _write(
            isolated_cwd / "c.yaml", "kind: LintConfig\nspec:\n  preset: ${GQLINT_TEST_PRESET}\n"
        )
        assert load_config(path).get_value("maxDepth", int, 0) == 7


class TestToml:
    def test_flat_toml_file(self, isolated_cwd) -> None:
        path = _write(
            isolated_cwd / "gqlint.toml",
            'preset = "security"\n\n[rules.SECURITY]\nseverity = "warning"\n',
        )
        config = load_config(path)
        assert config.get_value("maxDepth", int, 0) == 2
        assert config.get_severity_override("SECURITY") is Severity.WARNING

    def test_invalid_toml(self, isolated_cwd) -> None:
        path = _write(isolated_cwd / "pyproject.toml", "[tool.gqlint\n")
        with pytest.raises(ConfigurationError, match="invalid TOML"):
            load_config(path)

    def test_section_must_be_a_table(self, isolated_cwd) -> None:
        path = _write(isolated_cwd / "pyproject.toml", '[tool]\ngqlint = "strict"\n')
        with pytest.raises(ConfigurationError, match="must be a table"):
            load_config(path)


class TestValidation:
    def test_unknown_top_level_key(self) -> None:
        with pytest.raises(ConfigurationError, match="presets"):
            ConfigLoader().load_from_mapping({"presets": "strict"})

    def test_unknown_preset(self) -> None:
        with pytest.raises(ConfigurationError, match="Preset 'paranoid' not found"):
            ConfigLoader().load_from_mapping({"preset": "paranoid"})

    def test_bad_severity(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown severity"):
            ConfigLoader().load_from_mapping({"rules": {"STYLE": {"severity": "fatal"}}})

    def test_negative_limit(self) -> None:
        with pytest.raises(ConfigurationError, match="maxDepth"):
            ConfigLoader().load_from_mapping({"settings": {"maxDepth": -3}}, source="inline")

    def test_error_names_source(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            ConfigLoader().load_from_mapping({"preset": "nope"}, source="team.yaml")
        assert exc_info.value.component == "team.yaml"

    def test_preset_then_overrides(self) -> None:
        config = ConfigLoader().load_from_mapping(
            {"preset": "strict", "settings": {"maxFields": 12}}
        )
        expected = strict().set_value("maxFields", 12)
        assert config == expected


class TestRuleSpec:
    def test_to_domain(self) -> None:
        spec = RuleSpec(enabled=False, severity="Error")
        assert spec.to_domain() == RuleConfig(False, Severity.ERROR)

    def test_defaults(self) -> None:
        assert RuleSpec().to_domain() == RuleConfig()
