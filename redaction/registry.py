"""
RuleRegistry - the closed, ordered set of redaction rules.

The registry is fixed when it is constructed; there is no way to register
rules later. Declaration order is the order rules are applied in, which
keeps redaction output deterministic regardless of how a parameterization
mapping happens to be ordered.
"""

import logging
from typing import Iterable, Iterator, Optional

from .base_profile import RedactionProfile
from .errors import DuplicateRuleError
from .rules import RedactionRule

logger = logging.getLogger(__name__)


class RuleRegistry:
    """Immutable, ordered mapping of field name -> RedactionRule."""

    def __init__(self, rules: Iterable[RedactionRule]):
        ordered: dict[str, RedactionRule] = {}
        for rule in rules:
            if rule.field in ordered:
                raise DuplicateRuleError(rule.field)
            ordered[rule.field] = rule
        self._rules = ordered

    @classmethod
    def from_profiles(cls, *profiles: RedactionProfile) -> "RuleRegistry":
        """Build a registry from profiles, in the order given."""
        rules: list[RedactionRule] = []
        for profile in profiles:
            profile_rules = profile.get_rules()
            logger.info(f"Loaded redaction profile: {profile.name} ({len(profile_rules)} rules)")
            rules.extend(profile_rules)
        return cls(rules)

    def __contains__(self, field: object) -> bool:
        return field in self._rules

    def __iter__(self) -> Iterator[RedactionRule]:
        return iter(self._rules.values())

    def __len__(self) -> int:
        return len(self._rules)

    def get(self, field: str) -> Optional[RedactionRule]:
        return self._rules.get(field)

    @property
    def fields(self) -> list[str]:
        """Registered field names in application order."""
        return list(self._rules)

    def __repr__(self) -> str:
        return f"<RuleRegistry: {', '.join(self._rules)}>"
