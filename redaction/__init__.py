"""
Redaction Module - Parameterized, field-level record redaction

This module applies per-field redaction to records, driven by a
parameterization that says which fields to redact on this call.

Architecture:
    - RedactionEngine / redact(): apply enabled rules to a copy of a record
    - RuleRegistry: closed, ordered set of RedactionRules fixed at startup
    - RedactionProfile: abstract base class for bundles of rules
    - profiles/: the built-in patient and free-text profiles
    - ParameterizationSpec / parse_parameterization(): which fields to redact

Example:
    from redaction import RedactionEngine

    engine = RedactionEngine()
    safe = engine.redact(
        {"firstName": "Howard", "lastName": "Langston"},
        {"firstName": True, "lastName": False},
    )
    # safe: {"firstName": "[REDACTED]", "lastName": "Langston"}
"""

from .base_profile import RedactionProfile, TextPattern
from .engine import RedactionEngine, redact
from .errors import (
    DuplicateRuleError,
    InvalidParameterization,
    RedactionError,
    UnregisteredRedactionField,
)
from .parameterization import ParameterizationSpec, parse_parameterization
from .registry import RuleRegistry
from .rules import DEFAULT_MARKER, RedactionRule, mask_tail, replace_with_marker, scrub_text

__all__ = [
    "DEFAULT_MARKER",
    "DuplicateRuleError",
    "InvalidParameterization",
    "ParameterizationSpec",
    "RedactionEngine",
    "RedactionError",
    "RedactionProfile",
    "RedactionRule",
    "RuleRegistry",
    "TextPattern",
    "UnregisteredRedactionField",
    "mask_tail",
    "parse_parameterization",
    "redact",
    "replace_with_marker",
    "scrub_text",
]
