"""Errors raised while building rule registries or redacting records."""

from typing import Sequence


class RedactionError(Exception):
    """Base class for redaction errors."""


class UnregisteredRedactionField(RedactionError):
    """
    A parameterization names a field that has no registered rule.

    Treated as a hard failure: ignoring the directive would let data that
    policy says must be scrubbed pass through untouched.
    """

    def __init__(self, names: Sequence[str]):
        self.names = tuple(names)
        self.name = self.names[0]
        super().__init__(
            f"No redaction rule registered for field(s): {', '.join(self.names)}"
        )


class InvalidParameterization(RedactionError, ValueError):
    """The parameterization could not be decoded or has non-boolean values."""


class DuplicateRuleError(RedactionError):
    """Two rules were registered for the same field."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Duplicate redaction rule for field: {field}")
