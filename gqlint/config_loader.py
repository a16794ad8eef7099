"""Configuration loader for gqlint.

Turns configuration files into a :class:`~gqlint.linting.config.LintConfig`.
Two sources are supported:

1. **kind: LintConfig YAML**, loaded via explicit path or the
   ``GQLINT_CONFIG_PATH`` env var.
2. **pyproject.toml [tool.gqlint]**, the auto-discovery fallback.

Both share one schema::

    [tool.gqlint]
    preset = "strict"
    disable = ["PERFORMANCE"]

    [tool.gqlint.settings]
    maxDepth = 4
    sensitiveFields = ["password", "ssn"]

    [tool.gqlint.rules.SECURITY]
    severity = "error"
"""

from __future__ import annotations

import os
import re
import tomllib
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from gqlint.exceptions import ConfigurationError, GqlintError
from gqlint.linting.config import LintConfig, RuleConfig
from gqlint.linting.models import Severity
from gqlint.linting.presets import get_preset
from gqlint.logging import get_logger

logger = get_logger(__name__)

CONFIG_PATH_ENV = "GQLINT_CONFIG_PATH"
YAML_KIND = "LintConfig"

SettingValue = bool | int | list[str]


class RuleSpec(BaseModel):
    """Pydantic representation of a :class:`RuleConfig` for file parsing."""

    model_config = ConfigDict(extra="forbid")

    enabled: bool = Field(default=True, description="Whether the rule runs")
    severity: Severity | None = Field(
        default=None, description="Re-issue every finding of the rule at this severity"
    )

    @field_validator("severity", mode="before")
    @classmethod
    def _parse_severity(cls, value: Any) -> Any:
        if isinstance(value, str):
            return Severity.parse(value)
        return value

    def to_domain(self) -> RuleConfig:
        """Convert to the frozen dataclass used by the engine."""
        return RuleConfig(enabled=self.enabled, severity_override=self.severity)


class LintConfigSpec(BaseModel):
    """Validated contents of ``[tool.gqlint]`` or a ``kind: LintConfig`` spec."""

    model_config = ConfigDict(extra="forbid")

    preset: str | None = Field(default=None, description="Named preset used as the base")
    settings: dict[str, SettingValue] = Field(
        default_factory=dict, description="Setting overrides keyed by camelCase name"
    )
    rules: dict[str, RuleSpec] = Field(
        default_factory=dict, description="Per-rule enable flags and severity overrides"
    )
    disable: list[str] = Field(default_factory=list, description="Rule ids to switch off")

    def to_domain(self) -> LintConfig:
        """Build the LintConfig: preset (or defaults), then settings, then rules."""
        config = get_preset(self.preset) if self.preset else LintConfig()
        config.update(self.settings)
        for rule_id, rule_spec in self.rules.items():
            config.set_rule_config(rule_id, rule_spec.to_domain())
        config.disable_rules(self.disable)
        return config


class ConfigLoader:
    """Loads lint configuration from YAML or pyproject.toml.

    Discovery order when no explicit path is given:

    1. ``GQLINT_CONFIG_PATH`` env var
    2. ``pyproject.toml`` in the current directory
    3. built-in defaults
    """

    ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")

    def load_config_file(self, path: str | Path | None = None) -> LintConfig:
        """Load configuration from ``path`` or by discovery.

        Parameters
        ----------
        path : str | Path | None
            Path to a YAML or TOML config file. If None, searches using
            discovery order.

        Returns
        -------
        LintConfig
            Parsed configuration

        Raises
        ------
        ConfigurationError
            If the file is missing, malformed, or fails validation
        """
        config_path = self._find_config_file(path)
        if config_path is None:
            logger.debug("No configuration file found, using defaults")
            return LintConfig()
        return self._load_and_parse(config_path)

    def load_from_mapping(self, data: dict[str, Any], source: str = "<mapping>") -> LintConfig:
        """Validate an already-parsed mapping and build a LintConfig."""
        try:
            spec = LintConfigSpec.model_validate(self._substitute_env_vars(data))
            return spec.to_domain()
        except PydanticValidationError as e:
            raise ConfigurationError(source, str(e)) from e
        except GqlintError as e:
            raise ConfigurationError(source, str(e)) from e

    def _load_and_parse(self, config_path: Path) -> LintConfig:
        logger.info("Loading configuration from {}", config_path)
        if config_path.suffix in (".yaml", ".yml"):
            data = self._load_yaml_config(config_path)
        else:
            data = self._load_toml_config(config_path)
        return self.load_from_mapping(data, str(config_path))

    def _load_yaml_config(self, config_path: Path) -> dict[str, Any]:
        """Read the ``spec`` mapping of a ``kind: LintConfig`` YAML file."""
        try:
            with config_path.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(str(config_path), f"invalid YAML: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(
                str(config_path), f"expected a mapping, got {type(data).__name__}"
            )

        kind = data.get("kind")
        if kind != YAML_KIND:
            raise ConfigurationError(
                str(config_path),
                f"YAML config must use 'kind: {YAML_KIND}', got 'kind: {kind}'",
            )

        spec = data.get("spec") or {}
        if not isinstance(spec, dict):
            raise ConfigurationError(str(config_path), "'spec' must be a mapping")
        return spec

    def _load_toml_config(self, config_path: Path) -> dict[str, Any]:
        """Read ``[tool.gqlint]`` from a TOML file (or the whole file if flat)."""
        try:
            with config_path.open("rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigurationError(str(config_path), f"invalid TOML: {e}") from e

        section = data.get("tool", {}).get("gqlint")
        if section is None:
            if config_path.name == "pyproject.toml":
                logger.debug("No [tool.gqlint] section in {}, using defaults", config_path)
                return {}
            section = data
        if not isinstance(section, dict):
            raise ConfigurationError(str(config_path), "[tool.gqlint] must be a table")
        return section

    def _find_config_file(self, path: str | Path | None) -> Path | None:
        if path:
            config_path = Path(path)
            if not config_path.exists():
                raise ConfigurationError(str(config_path), "configuration file not found")
            return config_path

        if env_path := os.getenv(CONFIG_PATH_ENV):
            config_path = Path(env_path)
            if config_path.exists():
                logger.debug("Using config from {}: {}", CONFIG_PATH_ENV, config_path)
                return config_path
            logger.warning("{} set but file not found: {}", CONFIG_PATH_ENV, config_path)

        if Path("pyproject.toml").exists():
            return Path("pyproject.toml")
        return None

    def _substitute_env_vars(self, data: Any) -> Any:
        """Recursively replace ``${VAR}`` placeholders with environment values."""
        if isinstance(data, str):

            def replacer(match: re.Match[str]) -> str:
                value = os.environ.get(match.group(1))
                return match.group(0) if value is None else value

            return self.ENV_VAR_PATTERN.sub(replacer, data)
        if isinstance(data, dict):
            return {key: self._substitute_env_vars(value) for key, value in data.items()}
        if isinstance(data, list):
            return [self._substitute_env_vars(item) for item in data]
        return data


def load_config(path: str | Path | None = None) -> LintConfig:
    """Load a LintConfig using :class:`ConfigLoader` discovery."""
    return ConfigLoader().load_config_file(path)
