"""
Custom exceptions for the patient index.
"""


class RecordFormatError(Exception):
    """
    Raised when a data file line does not hold exactly ten fields.

    This is a fail-fast error; loading stops at the first malformed line.
    """

    def __init__(self, line: str, field_count: int, line_number: int | None = None):
        """
        Initialize format error.

        Args:
            line: The offending line, without its line terminator.
            field_count: Number of comma-separated fields found.
            line_number: 1-based position of the line in its file, if known.
        """
        self.line = line
        self.field_count = field_count
        self.line_number = line_number
        where = f" at line {line_number}" if line_number is not None else ""
        super().__init__(
            f"Malformed patient record{where}: "
            f"expected 10 fields, got {field_count}: {line!r}"
        )


class InvalidPatientError(Exception):
    """Raised when a patient record fails validation."""

    def __init__(self, email: str | None, reason: str):
        self.email = email
        self.reason = reason
        super().__init__(f"Invalid patient record {email!r}: {reason}")
