"""
Environment configuration - fail-fast validation at process startup.

This package turns the untyped process environment into a typed, immutable
configuration object that is injected into application components instead of
being re-read from global state.

Architecture:
    - Schema / FieldSpec: declared fields (string, number, enum)
    - initialize(): validates the environment and collects every violation
    - ValidatedConfig: immutable result with has() / get()
    - errors: the configuration error taxonomy

Example:
    from envconfig import FieldSpec, FieldType, Schema, initialize

    schema = Schema([FieldSpec("PORT", FieldType.NUMBER)])
    config = initialize(schema, {"PORT": "8080"})
    config.get("PORT")  # 8080
"""

from .errors import (
    ConfigError,
    ConfigurationInvalid,
    ConfigValidationError,
    InvalidEnumValue,
    MissingRequiredField,
    SchemaError,
    TypeMismatch,
    UnknownOrUnsetField,
)
from .loader import ValidatedConfig, initialize, initialize_or_exit
from .schema import FieldSpec, FieldType, Schema

__all__ = [
    "ConfigError",
    "ConfigurationInvalid",
    "ConfigValidationError",
    "FieldSpec",
    "FieldType",
    "InvalidEnumValue",
    "MissingRequiredField",
    "Schema",
    "SchemaError",
    "TypeMismatch",
    "UnknownOrUnsetField",
    "ValidatedConfig",
    "initialize",
    "initialize_or_exit",
]
