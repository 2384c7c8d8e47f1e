"""
PatientLoader - Rebuild a PatientTable from a data file.
"""

import logging
from collections.abc import Iterable, Iterator

from patient_index.models.patient import Patient
from patient_index.models.patient_table import PatientTable

logger = logging.getLogger(__name__)


class PatientLoader:
    """
    Loads patients from the ten-field comma-separated data file.

    Lines are inserted one by one in file order, so the file order decides
    the shape of the tree and which duplicate e-mail is found first.
    """

    def load(self, file_path: str, table: PatientTable | None = None) -> PatientTable:
        """
        Load a data file into a table.

        Args:
            file_path: Path of the data file.
            table: Table to populate. A new empty table is used if None.

        Returns:
            The populated table.

        Raises:
            RecordFormatError: On the first line that does not hold ten fields.
        """
        table = table if table is not None else PatientTable()

        with open(file_path, "r", encoding="utf-8", newline="") as f:
            count = self.load_lines(f, table)

        logger.info(f"Loaded {count} patients from {file_path}")
        return table

    def load_lines(self, lines: Iterable[str], table: PatientTable) -> int:
        """
        Insert every record from an iterable of lines.

        Returns:
            Number of patients inserted.
        """
        count = 0
        for patient in self.parse(lines):
            table.add(patient)
            count += 1
        return count

    def parse(self, lines: Iterable[str]) -> Iterator[Patient]:
        """Yield patients in line order, skipping blank lines."""
        for line_number, line in enumerate(lines, start=1):
            if not line.strip():
                continue
            patient = Patient.from_data_string(line, line_number)
            logger.debug(f"Parsed patient {patient.email} at line {line_number}")
            yield patient
