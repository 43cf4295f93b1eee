"""
ConfigLoader - validate the environment once, at startup.

initialize() turns an untyped mapping of strings into an immutable
ValidatedConfig, or raises ConfigurationInvalid listing every problem it
found. The result is meant to be passed explicitly to whatever needs it;
nothing downstream should read os.environ again.

Example:
    config = initialize(schema)                       # real process environment
    config = initialize(schema, {"PORT": "8080"})     # injected, for tests
    config = initialize(schema, env_file=".env")      # .env under the real env

    config.get("PORT")   # 8080
    config.has("DEBUG")  # False
"""

import logging
import math
import os
import re
import sys
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Optional, TextIO, Union

from dotenv import dotenv_values

from .errors import (
    ConfigurationInvalid,
    ConfigValidationError,
    InvalidEnumValue,
    MissingRequiredField,
    TypeMismatch,
    UnknownOrUnsetField,
)
from .schema import FieldSpec, FieldType, Schema

logger = logging.getLogger(__name__)

MASK = "***"

_INTEGER_LITERAL = re.compile(r"^[+-]?\d+\Z")
_NUMBER_LITERAL = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?\Z")

ConfigValue = Union[str, int, float]


class ValidatedConfig:
    """
    Immutable, typed view of a validated environment.

    Only produced by initialize(). Contains exactly the declared fields that
    had a value (explicit or default); there is no setter surface and
    assignment raises TypeError.
    """

    __slots__ = ("_values", "_secrets")

    def __init__(self, values: Mapping[str, ConfigValue], secrets: frozenset[str] = frozenset()):
        object.__setattr__(self, "_values", MappingProxyType(dict(values)))
        object.__setattr__(self, "_secrets", frozenset(secrets))

    def __setattr__(self, name, value):
        raise TypeError("ValidatedConfig is immutable")

    def __delattr__(self, name):
        raise TypeError("ValidatedConfig is immutable")

    def has(self, name: str) -> bool:
        """True iff the field is present with a non-falsy value."""
        return bool(self._values.get(name))

    def get(self, name: str) -> ConfigValue:
        """
        Return the validated value for a field.

        Raises:
            UnknownOrUnsetField: if the field was not declared or has no value.
        """
        try:
            return self._values[name]
        except KeyError:
            raise UnknownOrUnsetField(name) from None

    def __getitem__(self, name: str) -> ConfigValue:
        return self.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._values

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def as_dict(self) -> dict[str, ConfigValue]:
        """Return a mutable copy of the values. Changes do not affect the config."""
        return dict(self._values)

    def summary(self) -> dict[str, Any]:
        """Values with secret fields masked, safe for logs and diagnostics."""
        return {
            name: MASK if name in self._secrets else value
            for name, value in self._values.items()
        }

    def __repr__(self) -> str:
        return f"<ValidatedConfig {self.summary()}>"


def _coerce(spec: FieldSpec, raw: str) -> ConfigValue:
    if spec.type is FieldType.STRING:
        return raw

    # Secret values never reach error messages or logs
    shown = MASK if spec.secret else raw

    if spec.type is FieldType.NUMBER:
        if not _NUMBER_LITERAL.match(raw):
            raise TypeMismatch(spec.name, "number", shown)
        if _INTEGER_LITERAL.match(raw):
            return int(raw)
        number = float(raw)
        if not math.isfinite(number):
            raise TypeMismatch(spec.name, "finite number", shown)
        return number

    # FieldType.ENUM
    if raw not in spec.choices:
        raise InvalidEnumValue(spec.name, spec.choices, shown)
    return raw


def _read_environment(
    raw_environment: Optional[Mapping[str, str]],
    env_file: Optional[Union[str, os.PathLike]],
) -> dict[str, str]:
    source = os.environ if raw_environment is None else raw_environment
    merged: dict[str, str] = {}
    if env_file is not None:
        # Values without "=" come back as None from python-dotenv
        file_values = dotenv_values(env_file)
        merged.update({k: v for k, v in file_values.items() if v is not None})
    merged.update(source)
    return merged


def initialize(
    schema: Schema,
    raw_environment: Optional[Mapping[str, str]] = None,
    *,
    env_file: Optional[Union[str, os.PathLike]] = None,
) -> ValidatedConfig:
    """
    Validate an environment against a schema.

    Args:
        schema: The declared fields.
        raw_environment: Mapping to validate. Defaults to os.environ. When
                         supplied it is used verbatim, which is how tests
                         inject a deterministic environment.
        env_file: Optional .env file whose entries sit underneath the
                  environment (real variables win). os.environ is never
                  modified.

    Returns:
        A ValidatedConfig holding every declared field that has a value.

    Raises:
        ConfigurationInvalid: listing every violated field, not just the first.
    """
    environment = _read_environment(raw_environment, env_file)

    values: dict[str, ConfigValue] = {}
    violations: list[ConfigValidationError] = []

    for spec in schema:
        raw = environment.get(spec.name)
        # An empty string is as good as unset for configuration purposes
        if raw is None or raw == "":
            if spec.default is not None:
                raw = spec.default
            elif spec.required:
                violations.append(MissingRequiredField(spec.name))
                continue
            else:
                continue

        try:
            values[spec.name] = _coerce(spec, raw)
        except ConfigValidationError as e:
            violations.append(e)

    if violations:
        error = ConfigurationInvalid(violations)
        # Names only; the full report is the exception message
        logger.error(f"Configuration invalid for: {', '.join(error.field_names)}")
        raise error

    config = ValidatedConfig(values, frozenset(s.name for s in schema if s.secret))
    logger.info(f"Configuration loaded: {config.summary()}")
    return config


def initialize_or_exit(
    schema: Schema,
    raw_environment: Optional[Mapping[str, str]] = None,
    *,
    env_file: Optional[Union[str, os.PathLike]] = None,
    stream: Optional[TextIO] = None,
) -> ValidatedConfig:
    """
    Fail-fast wrapper around initialize() for process entrypoints.

    On any violation the aggregate message is written to stderr (or
    ``stream``) and the process exits with status 1. Call this before
    opening any listener.
    """
    try:
        return initialize(schema, raw_environment, env_file=env_file)
    except ConfigurationInvalid as e:
        print(str(e), file=stream or sys.stderr)
        raise SystemExit(1) from e
