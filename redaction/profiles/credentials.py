"""
Free-text profile - scrub secrets and identifiers out of prose fields.

Structured fields (names, SSNs) are handled by field rules; free-text fields
such as clinical notes or support comments can contain anything, so they get
scrubadub's detectors plus the regex patterns below.
"""

import re
from typing import Sequence

from ..base_profile import RedactionProfile, TextPattern, compile_pattern
from ..rules import RedactionRule, scrub_text

CREDENTIAL_PATTERNS: list[TextPattern] = [
    compile_pattern(
        "ssn",
        r'\b(?!000|666|9\d{2})\d{3}-(?!00)\d{2}-(?!0000)\d{4}\b',
        "{{SSN}}",
        "US Social Security Number",
    ),
    compile_pattern(
        "credit_card",
        r'\b(?:\d{4}[-\s]?){3}\d{4}\b',
        "{{CREDIT_CARD}}",
        "16-digit card number, optionally separated",
    ),
    compile_pattern(
        "aws_access_key",
        r'\b(?:AKIA|ABIA|ACCA|ASIA)[A-Z0-9]{16}\b',
        "{{AWS_ACCESS_KEY}}",
        "AWS Access Key ID",
    ),
    compile_pattern(
        "bearer_token",
        r'Bearer\s+eyJ[A-Za-z0-9_-]+\.eyJ[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+',
        "Bearer {{JWT_TOKEN}}",
        "JWT bearer token",
    ),
    compile_pattern(
        "password",
        r'(password|passwd|pwd)\s*[=:]\s*["\']?[^\s"\']{4,}["\']?',
        r"\1={{REDACTED_PASSWORD}}",
        "Password in key=value form",
        flags=re.IGNORECASE,
    ),
    compile_pattern(
        "github_token",
        r'\bgh[pousr]_[A-Za-z0-9]{36}\b',
        "{{GITHUB_TOKEN}}",
        "GitHub token",
    ),
]


class FreeTextProfile(RedactionProfile):
    """Text-scrubbing rules for one or more free-text fields."""

    def __init__(self, fields: Sequence[str] = ("notes",), patterns: Sequence[TextPattern] = CREDENTIAL_PATTERNS):
        self._fields = tuple(fields)
        self._patterns = tuple(patterns)

    @property
    def name(self) -> str:
        return "free_text"

    @property
    def description(self) -> str:
        return f"Scrub PII and credentials from: {', '.join(self._fields)}"

    def get_rules(self) -> list[RedactionRule]:
        return [scrub_text(field, self._patterns) for field in self._fields]
