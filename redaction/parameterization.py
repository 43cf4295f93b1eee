"""
Parameterization - which fields to redact for a given call.

A ParameterizationSpec is deliberately a different type from the validated
environment configuration: flipping one of its booleans changes the output
for identical input data, which configuration must never do.

It usually arrives string-encoded (a CLI argument, an env var, a tool
argument) as a JSON object, e.g. '{"ssn": true, "dob": false}'.
"""

import json
from collections.abc import Mapping
from types import MappingProxyType
from typing import Iterator, Optional

from .errors import InvalidParameterization


class ParameterizationSpec(Mapping):
    """Immutable mapping of field name -> bool ("redact this field")."""

    def __init__(self, directives: Optional[Mapping] = None):
        checked: dict[str, bool] = {}
        for name, flag in (directives or {}).items():
            if not isinstance(name, str) or not name:
                raise InvalidParameterization(f"Field names must be non-empty strings, got {name!r}")
            # bool only; 0/1 and "true" are rejected
            if not isinstance(flag, bool):
                raise InvalidParameterization(
                    f"Redaction directive for '{name}' must be true or false, got {flag!r}"
                )
            checked[name] = flag
        self._directives = MappingProxyType(checked)

    def __getitem__(self, name: str) -> bool:
        return self._directives[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._directives)

    def __len__(self) -> int:
        return len(self._directives)

    def enabled(self) -> frozenset[str]:
        """Fields marked for redaction."""
        return frozenset(name for name, flag in self._directives.items() if flag)

    def __repr__(self) -> str:
        return f"ParameterizationSpec({dict(self._directives)!r})"


def parse_parameterization(text: Optional[str]) -> ParameterizationSpec:
    """
    Decode a string-encoded parameterization.

    Args:
        text: A JSON object mapping field names to booleans. None, empty or
              whitespace-only text yields an empty spec (redact nothing).

    Raises:
        InvalidParameterization: malformed JSON, a non-object, or non-bool values.
    """
    if text is None or not text.strip():
        return ParameterizationSpec()
    try:
        decoded = json.loads(text)
    except json.JSONDecodeError as e:
        raise InvalidParameterization(f"Parameterization is not valid JSON: {e.msg}") from e
    if not isinstance(decoded, dict):
        raise InvalidParameterization(
            f"Parameterization must be a JSON object, got {type(decoded).__name__}"
        )
    return ParameterizationSpec(decoded)
