"""
Redaction rules - pure, field-scoped record transforms.

A RedactionRule maps a record to a redacted variant of that record for
exactly one field. Rules never mutate their input; they return a new dict.

Factories:
    - replace_with_marker(): swap the value for a fixed marker ("[REDACTED]")
    - mask_tail(): keep the last few characters, mask the rest
    - scrub_text(): run scrubadub plus regex patterns over free text

All factories leave the record unchanged when the field is absent or None.
"""

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Sequence

import scrubadub

from .base_profile import TextPattern

DEFAULT_MARKER = "[REDACTED]"

Record = dict[str, Any]


@dataclass(frozen=True)
class RedactionRule:
    """A single field's redaction transform."""
    field: str  # e.g. "ssn"
    transform: Callable[[Mapping[str, Any]], Record]
    description: str = ""

    def __call__(self, record: Mapping[str, Any]) -> Record:
        return self.transform(record)


def replace_with_marker(field: str, marker: str = DEFAULT_MARKER) -> RedactionRule:
    """Replace the field's value with a fixed marker. Idempotent."""

    def transform(record: Mapping[str, Any]) -> Record:
        if record.get(field) is None:
            return dict(record)
        return {**record, field: marker}

    return RedactionRule(field, transform, f"Replace {field} with {marker}")


def mask_tail(field: str, visible: int = 4, mask_char: str = "*") -> RedactionRule:
    """
    Mask all but the last ``visible`` characters of the field.

    Example:
        mask_tail("ssn")({"ssn": "123456789"})  # {"ssn": "*****6789"}
    """
    if visible < 0:
        raise ValueError("visible must be >= 0")

    def transform(record: Mapping[str, Any]) -> Record:
        value = record.get(field)
        if value is None:
            return dict(record)
        text = str(value)
        hidden = max(len(text) - visible, 0)
        return {**record, field: mask_char * hidden + text[hidden:]}

    return RedactionRule(field, transform, f"Mask {field} except last {visible} characters")


def scrub_text(field: str, patterns: Sequence[TextPattern] = ()) -> RedactionRule:
    """
    Scrub PII and credentials out of a free-text field.

    Uses a layered approach:
    1. scrubadub's built-in detectors (emails, URLs, credentials, ...)
    2. the given regex patterns, in order
    """
    scrubber = scrubadub.Scrubber()
    patterns = tuple(patterns)

    def transform(record: Mapping[str, Any]) -> Record:
        value = record.get(field)
        if value is None:
            return dict(record)
        text = scrubber.clean(str(value))
        for pattern in patterns:
            text = pattern.pattern.sub(pattern.replacement, text)
        return {**record, field: text}

    names = ", ".join(p.name for p in patterns) or "none"
    return RedactionRule(field, transform, f"Scrub free text in {field} (patterns: {names})")
