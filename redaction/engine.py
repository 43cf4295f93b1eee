"""
RedactionEngine - Core engine for parameterized record redaction.

This engine orchestrates:
1. Checking that every field named in the parameterization has a rule
2. Copying the record so the caller's data is never touched
3. Applying the enabled rules in registry declaration order

Records are always copied (deep copy) rather than mutated, so a failed call
leaves the input exactly as it was and concurrent calls on the same record
are safe.
"""

import copy
import logging
from typing import Any, Iterable, Mapping, Optional

from .errors import UnregisteredRedactionField
from .parameterization import ParameterizationSpec
from .profiles import DEFAULT_PROFILES
from .registry import RuleRegistry
from .rules import Record

logger = logging.getLogger(__name__)


def _as_spec(parameterization: Mapping[str, bool]) -> ParameterizationSpec:
    if isinstance(parameterization, ParameterizationSpec):
        return parameterization
    return ParameterizationSpec(parameterization)


def redact(
    record: Mapping[str, Any],
    parameterization: Mapping[str, bool],
    registry: RuleRegistry,
) -> Record:
    """
    Return a redacted copy of ``record``.

    Args:
        record: The record to redact. Never mutated.
        parameterization: Field name -> True to redact. False or absent
                          fields are left untouched.
        registry: The rules available, applied in declaration order.

    Returns:
        A new dict with the enabled rules applied.

    Raises:
        UnregisteredRedactionField: if the parameterization names any field
            the registry has no rule for (whatever its boolean value).
        InvalidParameterization: if a directive is not a bool.

    Example:
        redact({"ssn": "123456789", "dob": "1947-07-30"},
               {"ssn": True, "dob": False},
               registry)
        # {"ssn": "[REDACTED]", "dob": "1947-07-30"}
    """
    spec = _as_spec(parameterization)

    unknown = [name for name in spec if name not in registry]
    if unknown:
        raise UnregisteredRedactionField(unknown)

    result: Record = copy.deepcopy(dict(record))
    applied = []
    for rule in registry:
        if spec.get(rule.field, False):
            result = rule(result)
            applied.append(rule.field)

    logger.debug(f"Redacted fields: {applied}")
    return result


class RedactionEngine:
    """
    Engine for redacting records according to a parameterization.

    Example:
        engine = RedactionEngine()

        safe = engine.redact(
            {"firstName": "Howard", "ssn": "123456789"},
            {"firstName": True, "ssn": True},
        )
        # {"firstName": "[REDACTED]", "ssn": "[REDACTED]"}

        # With a custom registry
        engine = RedactionEngine(RuleRegistry([mask_tail("cardNumber")]))

    Thread Safety:
        redact() and redact_batch() are safe to call concurrently; the
        registry is immutable and records are copied.
    """

    def __init__(self, registry: Optional[RuleRegistry] = None):
        """
        Initialize the RedactionEngine.

        Args:
            registry: The closed set of rules to use. Defaults to the
                      built-in patient and free-text profiles.
        """
        if registry is None:
            registry = RuleRegistry.from_profiles(*DEFAULT_PROFILES)
        self._registry = registry

    @property
    def registry(self) -> RuleRegistry:
        return self._registry

    def redact(self, record: Mapping[str, Any], parameterization: Mapping[str, bool]) -> Record:
        """Redact one record. See the module-level redact()."""
        return redact(record, parameterization, self._registry)

    def redact_batch(
        self,
        records: Iterable[Mapping[str, Any]],
        parameterization: Mapping[str, bool],
    ) -> list[Record]:
        """
        Redact several records with the same parameterization.

        The parameterization is checked once up front, so an unknown field
        fails the whole batch before any record is processed.
        """
        spec = _as_spec(parameterization)
        unknown = [name for name in spec if name not in self._registry]
        if unknown:
            raise UnregisteredRedactionField(unknown)
        return [redact(record, spec, self._registry) for record in records]
