"""
Base Redaction Profile - Abstract base class for bundles of field rules.

A profile groups the rules for one kind of record so a RuleRegistry can be
assembled from a few named building blocks at startup. For example:
    - patient.py for patient demographics (names, SSN, date of birth)
    - credentials.py for free-text fields that may carry secrets

Each profile defines:
    - name: Unique identifier for the profile
    - description: Human-readable description
    - get_rules(): Returns the RedactionRules it contributes
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Pattern

if TYPE_CHECKING:
    from .rules import RedactionRule


@dataclass(frozen=True)
class TextPattern:
    """A regex applied by free-text rules."""
    name: str  # e.g., "ssn", "aws_access_key"
    pattern: Pattern[str]
    replacement: str  # e.g., "{{SSN}}"
    description: str = ""


class RedactionProfile(ABC):
    """
    Abstract base class for redaction profiles.

    Example:
        class BillingProfile(RedactionProfile):
            @property
            def name(self) -> str:
                return "billing"

            @property
            def description(self) -> str:
                return "Card and account numbers"

            def get_rules(self) -> list[RedactionRule]:
                return [mask_tail("cardNumber"), replace_with_marker("iban")]
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique identifier for this profile (e.g., 'patient')."""

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable description of what this profile covers."""

    @abstractmethod
    def get_rules(self) -> "list[RedactionRule]":
        """
        Return the rules this profile contributes, in application order.

        Rules from several profiles are applied in the order the profiles
        were given to RuleRegistry.from_profiles().
        """

    def __repr__(self) -> str:
        return f"<RedactionProfile: {self.name}>"


def compile_pattern(name: str, regex: str, replacement: str, description: str = "", flags: int = 0) -> TextPattern:
    """Shorthand for building a TextPattern from a regex string."""
    return TextPattern(name, re.compile(regex, flags), replacement, description)
