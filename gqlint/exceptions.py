"""Core exception hierarchy for gqlint.

Exceptions are raised only outside the lint engine boundary: while loading
configuration files, resolving presets, or validating setting values.
``GraphQLLinter.lint`` itself never raises; every failure there is turned
into a diagnostic. All gqlint exceptions inherit from GqlintError.
"""

from __future__ import annotations

# ============================================================================
# Base Exception
# ============================================================================


class GqlintError(Exception):
    """Base exception for all gqlint errors.

    Catch this to handle all gqlint-specific errors.
    """

    pass


# ============================================================================
# Configuration & Validation Errors
# ============================================================================


class ConfigurationError(GqlintError):
    """Raised when configuration is invalid or missing.

    Examples
    --------
    Example usage::

        raise ConfigurationError("pyproject.toml", "[tool.gqlint] must be a table")
    """

    def __init__(self, component: str, reason: str) -> None:
        """Initialize configuration error.

        Args
        ----
            component: Name of the config source or preset that is invalid
            reason: Explanation of what's wrong
        """
        super().__init__(f"Configuration error in '{component}': {reason}")
        self.component = component
        self.reason = reason


class ValidationError(GqlintError):
    """Raised when a setting value fails validation.

    Examples
    --------
    Example usage::

        raise ValidationError("maxDepth", "must be a non-negative integer", value=-1)
    """

    def __init__(self, field: str, constraint: str, value: object = None) -> None:
        """Initialize validation error.

        Args
        ----
            field: Name of the setting that failed validation
            constraint: Description of the validation constraint
            value: The invalid value (optional)
        """
        if value is not None:
            msg = f"Validation failed for '{field}': {constraint} (got {value!r})"
        else:
            msg = f"Validation failed for '{field}': {constraint}"
        super().__init__(msg)
        self.field = field
        self.constraint = constraint
        self.value = value


class ResourceNotFoundError(GqlintError):
    """Raised when a named resource (preset, rule, config file) cannot be found.

    Examples
    --------
    Example usage::

        raise ResourceNotFoundError("preset", "paranoid", ["strict", "relaxed"])
    """

    def __init__(
        self, resource_type: str, resource_id: str, available: list[str] | None = None
    ) -> None:
        """Initialize resource not found error.

        Args
        ----
            resource_type: Type of resource (e.g., "preset", "rule", "file")
            resource_id: Identifier of the missing resource
            available: List of available resources (optional)
        """
        msg = f"{resource_type.title()} '{resource_id}' not found"
        if available:
            msg += f". Available: {', '.join(available[:5])}"
            if len(available) > 5:
                msg += f" ... and {len(available) - 5} more"
        super().__init__(msg)
        self.resource_type = resource_type
        self.resource_id = resource_id
        self.available = available
