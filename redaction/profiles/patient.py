"""
Patient profile - demographic fields of a patient record.

Covers the identifying fields that governance policy most often asks to
remove before a record is logged or shared:
    - firstName, lastName
    - ssn
    - dob
Each is replaced with the same fixed marker, so the rules are idempotent.
"""

from ..base_profile import RedactionProfile
from ..rules import DEFAULT_MARKER, RedactionRule, replace_with_marker

PATIENT_FIELDS = ("firstName", "lastName", "ssn", "dob")


class PatientProfile(RedactionProfile):

    def __init__(self, marker: str = DEFAULT_MARKER):
        self._marker = marker

    @property
    def name(self) -> str:
        return "patient"

    @property
    def description(self) -> str:
        return "Patient demographics (names, SSN, date of birth)"

    def get_rules(self) -> list[RedactionRule]:
        return [replace_with_marker(field, self._marker) for field in PATIENT_FIELDS]
