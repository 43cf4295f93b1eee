"""
Configuration errors raised by the environment loader.

Hierarchy:
    ConfigError
    ├── SchemaError               - bad field declarations (programming error)
    ├── ConfigValidationError     - one violated field
    │   ├── MissingRequiredField
    │   ├── TypeMismatch
    │   └── InvalidEnumValue
    ├── ConfigurationInvalid      - aggregate of every violation, raised by initialize()
    └── UnknownOrUnsetField       - access to a field that is not in the config
"""

from typing import Sequence


class ConfigError(Exception):
    """Base class for all configuration errors."""


class SchemaError(ConfigError):
    """Raised when a schema declaration is itself invalid."""


class ConfigValidationError(ConfigError):
    """A single field that failed validation."""

    def __init__(self, name: str, message: str):
        self.name = name
        super().__init__(message)


class MissingRequiredField(ConfigValidationError):
    def __init__(self, name: str):
        super().__init__(name, f"{name}: required but not set")


class TypeMismatch(ConfigValidationError):
    def __init__(self, name: str, expected: str, actual: str):
        self.expected = expected
        self.actual = actual
        super().__init__(name, f"{name}: expected {expected}, got {actual!r}")


class InvalidEnumValue(ConfigValidationError):
    def __init__(self, name: str, allowed: Sequence[str], actual: str):
        self.allowed = tuple(allowed)
        self.actual = actual
        super().__init__(
            name,
            f"{name}: {actual!r} is not one of {', '.join(self.allowed)}",
        )


class ConfigurationInvalid(ConfigError):
    """
    Every violation found while validating an environment.

    The message enumerates one violation per line so a single startup
    failure tells the operator everything that needs fixing.
    """

    def __init__(self, violations: Sequence[ConfigValidationError]):
        self.violations = tuple(violations)
        lines = [f"Invalid configuration ({len(self.violations)} problem(s)):"]
        lines.extend(f"  - {violation}" for violation in self.violations)
        super().__init__("\n".join(lines))

    @property
    def field_names(self) -> list[str]:
        return [violation.name for violation in self.violations]


class UnknownOrUnsetField(ConfigError, LookupError):
    """Raised by ValidatedConfig.get() for a name with no validated value."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Configuration field '{name}' is unknown or unset")
