"""
Redaction Profiles Package

This package contains the built-in rule profiles. A RuleRegistry is built
from profiles once, at startup.

Available profiles:
    - patient: firstName, lastName, ssn, dob replaced with "[REDACTED]"
    - free_text: scrubadub + credential patterns over free-text fields ("notes")

To add a new profile:
    1. Create a new file (e.g., billing.py)
    2. Subclass RedactionProfile
    3. Implement get_rules() with your RedactionRules
    4. Pass it to RuleRegistry.from_profiles()
"""

from .credentials import CREDENTIAL_PATTERNS, FreeTextProfile
from .patient import PATIENT_FIELDS, PatientProfile

DEFAULT_PROFILES = (PatientProfile(), FreeTextProfile())

__all__ = [
    "CREDENTIAL_PATTERNS",
    "DEFAULT_PROFILES",
    "FreeTextProfile",
    "PATIENT_FIELDS",
    "PatientProfile",
]
