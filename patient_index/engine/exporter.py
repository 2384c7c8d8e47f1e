"""
TreeToFileExporter - Write a PatientTable to a data file in key order.
"""

import logging
import os
from collections.abc import Iterator
from pathlib import Path

from patient_index.models.exceptions import InvalidPatientError
from patient_index.models.patient_table import PatientTable

logger = logging.getLogger(__name__)


class TreeToFileExporter:
    """
    Writes a table's in-order walk to disk, one record per line.

    The file is written under a temporary name and renamed into place, so a
    failed export never leaves a half-written data file behind.
    """

    def __init__(self, table: PatientTable) -> None:
        """
        Initialize exporter.

        Args:
            table: The table whose contents are written.
        """
        self._table = table

    def export(self, file_path: str) -> int:
        """
        Export the table.

        Args:
            file_path: Destination path of the data file.

        Returns:
            Number of records written.

        Raises:
            InvalidPatientError: If a record cannot be written as one line. The
                existing file at file_path is left untouched.
        """
        Path(file_path).parent.mkdir(parents=True, exist_ok=True)
        temp_path = file_path + ".tmp"

        count = 0
        try:
            with open(temp_path, "w", encoding="utf-8", newline="\n") as f:
                for line in self._get_lines():
                    f.write(line)
                    f.write("\n")
                    count += 1
                f.flush()
                os.fsync(f.fileno())
            os.replace(temp_path, file_path)
        except (OSError, InvalidPatientError):
            if os.path.exists(temp_path):
                os.remove(temp_path)
            raise

        logger.info(f"Exported {count} patients to {file_path}")
        return count

    def _get_lines(self) -> Iterator[str]:
        """Get serialized records in ascending e-mail order."""
        for patient in self._table:
            yield patient.to_data_string()
