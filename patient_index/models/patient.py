"""
Patient record and VaccinationStatus for the ten-field data file.
"""

import re
from dataclasses import astuple, dataclass, fields
from datetime import date
from enum import IntEnum

from patient_index.models.exceptions import InvalidPatientError, RecordFormatError

# Written in place of a dose date that has not been given
NO_DOSE = "0000-00-00"

FIELD_COUNT = 10

_EMAIL_PATTERN = re.compile(r"^[A-Za-z0-9+_.-]+@(.+)$")

# Characters that would split one record across fields or lines
_RESERVED = (",", "\r", "\n")


class VaccinationStatus(IntEnum):
    """Which of the two doses a patient has received."""

    NONE = 0
    FIRST_ONLY = 1
    BOTH = 2
    INCONSISTENT = 3  # Second dose recorded without a first


def has_dose(value: str | None) -> bool:
    return bool(value) and value != NO_DOSE


@dataclass
class Patient:
    """
    One patient record, keyed by e-mail.

    Fields are declared in data file order. Dose dates are ISO strings
    (YYYY-MM-DD), or NO_DOSE when not yet given.
    """

    first_name: str = ""
    last_name: str = ""
    address: str = ""
    city: str = ""
    state: str = ""
    zip: str = ""
    phone: str = ""
    email: str = ""
    date1: str = NO_DOSE
    date2: str = NO_DOSE

    @classmethod
    def probe(cls, email: str) -> "Patient":
        """Key-only record used to look up, update or remove by e-mail."""
        return cls(email=email)

    @classmethod
    def from_data_string(cls, line: str, line_number: int | None = None) -> "Patient":
        """
        Parse one data file line.

        Args:
            line: Ten comma-separated fields, optionally newline-terminated.
            line_number: Position in the source file, for error reporting.

        Raises:
            RecordFormatError: If the line does not hold exactly ten fields.
        """
        line = line.rstrip("\r\n")
        values = line.split(",")
        if len(values) != FIELD_COUNT:
            raise RecordFormatError(line, len(values), line_number)

        values[8] = values[8] or NO_DOSE
        values[9] = values[9] or NO_DOSE
        return cls(*values)

    def to_data_string(self) -> str:
        """
        Serialize to one data file line (no line terminator).

        Raises:
            InvalidPatientError: If a field holds a comma or a line break.
        """
        self.check_fields()
        values = list(astuple(self))
        values[8] = values[8] if has_dose(values[8]) else NO_DOSE
        values[9] = values[9] if has_dose(values[9]) else NO_DOSE
        return ",".join(values)

    def check_fields(self) -> None:
        """Reject field values that cannot be written as one ten-field line."""
        for f in fields(self):
            value = getattr(self, f.name)
            if value and any(char in value for char in _RESERVED):
                raise InvalidPatientError(
                    self.email, f"{f.name} contains a comma or line break: {value!r}"
                )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def vaccination_status(self) -> VaccinationStatus:
        first, second = has_dose(self.date1), has_dose(self.date2)
        if first and second:
            return VaccinationStatus.BOTH
        if first:
            return VaccinationStatus.FIRST_ONLY
        if second:
            return VaccinationStatus.INCONSISTENT
        return VaccinationStatus.NONE

    def validate(self) -> None:
        """
        Check the fields, the e-mail key and the dose dates.

        Raises:
            InvalidPatientError: If a field holds a comma or line break, the
                e-mail is malformed, a dose date is not an ISO date, or the
                second dose is before the first.
        """
        self.check_fields()

        if not self.email or not _EMAIL_PATTERN.match(self.email):
            raise InvalidPatientError(self.email, "malformed e-mail address")

        doses = {}
        for name in ("date1", "date2"):
            value = getattr(self, name)
            if not has_dose(value):
                continue
            try:
                doses[name] = date.fromisoformat(value)
            except ValueError as e:
                raise InvalidPatientError(
                    self.email, f"{name} is not a YYYY-MM-DD date: {value!r}"
                ) from e

        if len(doses) == 2 and doses["date2"] < doses["date1"]:
            raise InvalidPatientError(self.email, "second dose cannot be before the first")

    def is_valid(self) -> bool:
        try:
            self.validate()
        except InvalidPatientError:
            return False
        return True
