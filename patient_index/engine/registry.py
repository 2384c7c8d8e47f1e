"""
PatientRegistry - Main patient index API.
"""

import logging
import os
from collections.abc import Iterator
from pathlib import Path

from patient_index.engine.exporter import TreeToFileExporter
from patient_index.engine.loader import PatientLoader
from patient_index.engine.query import QueryResult, VaccinationQuery
from patient_index.interfaces.traversable import TraversalOrder
from patient_index.models.patient import Patient
from patient_index.models.patient_table import PatientTable

logger = logging.getLogger(__name__)


class PatientRegistry:
    """
    In-memory patient registry backed by a binary search tree.

    Provides:
    - add_patient / delete_patient / update_patient / search_patient
    - all_patients(): every patient in ascending e-mail order
    - query(state=..., zip=...): vaccination tallies
    - load() / save(): round trip through the ten-field data file

    Used as a context manager, the registry loads the data file on enter and
    saves to the export file on a clean exit.
    """

    DEFAULT_DATA_FILE = "patients.txt"

    DEFAULT_EXPORT_FILE = "patients_bst.txt"

    def __init__(
        self,
        storage_dir: str,
        data_file: str = DEFAULT_DATA_FILE,
        export_file: str = DEFAULT_EXPORT_FILE,
    ) -> None:
        """
        Initialize the registry.

        Args:
            storage_dir: Directory holding the data files.
            data_file: File name read by load(), relative to storage_dir.
            export_file: File name written by save() when no name is given.
        """
        if not storage_dir or not storage_dir.strip():
            raise ValueError("storage_dir cannot be empty")
        if not data_file or not data_file.strip():
            raise ValueError("data_file cannot be empty")
        if not export_file or not export_file.strip():
            raise ValueError("export_file cannot be empty")

        storage_dir = os.path.abspath(storage_dir)

        # Check parent directory is writable (if dir doesn't exist)
        if not os.path.exists(storage_dir):
            parent = os.path.dirname(storage_dir)
            if not os.access(parent, os.W_OK):
                raise PermissionError(
                    f"Cannot create storage_dir: {storage_dir}. "
                    f"Parent directory not writable: {parent}"
                )
        elif not os.access(storage_dir, os.W_OK):
            raise PermissionError(f"storage_dir not writable: {storage_dir}")

        self._storage_dir = storage_dir
        self._data_file = data_file
        self._export_file = export_file
        self._table = PatientTable()
        self._loaded = False

    @property
    def data_path(self) -> str:
        return os.path.join(self._storage_dir, self._data_file)

    @property
    def export_path(self) -> str:
        return os.path.join(self._storage_dir, self._export_file)

    @property
    def table(self) -> PatientTable:
        return self._table

    def load(self) -> int:
        """
        Insert every record of the data file, in file order.

        The file is read at most once per registry, even if that read failed
        part way. Duplicate e-mails are kept, so reading it again would insert
        every record a second time.

        Returns:
            Number of patients loaded. 0 if the data file does not exist or
            was already loaded.
        """
        if self._loaded:
            logger.warning(f"Data file already loaded: {self.data_path}")
            return 0

        if not os.path.exists(self.data_path):
            logger.warning(f"Data file not found: {self.data_path}")
            return 0

        before = self._table.size()
        try:
            PatientLoader().load(self.data_path, self._table)
        finally:
            # A failed load may already have inserted the lines before the bad one
            self._loaded = True
        return self._table.size() - before

    def save(self, filename: str | None = None) -> int:
        """
        Write all patients in ascending e-mail order.

        Args:
            filename: File name relative to storage_dir. Defaults to the
                      export file.

        Returns:
            Number of patients written.
        """
        Path(self._storage_dir).mkdir(parents=True, exist_ok=True)
        path = os.path.join(self._storage_dir, filename or self._export_file)
        return TreeToFileExporter(self._table).export(path)

    def add_patient(self, patient: Patient) -> None:
        """
        Add a patient.

        Raises:
            InvalidPatientError: If a field holds a comma or line break.
        """
        logger.debug(f"Adding patient {patient.email}")
        self._table.add(patient)

    def delete_patient(self, email: str) -> bool:
        """
        Delete a patient by e-mail.

        Returns:
            True if a patient was removed.
        """
        removed = self._table.delete(email)
        logger.debug(f"Delete {email}: {'removed' if removed else 'not found'}")
        return removed

    def update_patient(self, patient: Patient) -> bool:
        """
        Replace the details of the patient with the same e-mail.

        Returns:
            True if the patient existed and the record was valid.
        """
        return self._table.update(patient)

    def search_patient(self, email: str) -> Patient | None:
        return self._table.search(email)

    def all_patients(self) -> list[Patient]:
        return self._table.all_patients()

    def query(self, state: str | None = None, zip: str | None = None) -> QueryResult:
        """
        Tally vaccination status of the patients in a state or zip code.

        Args:
            state: State to match. Mutually exclusive with zip.
            zip: Zip code to match.

        Returns:
            QueryResult; empty when the registry holds no patients.
        """
        query = VaccinationQuery(state=state, zip=zip)
        if self._table.is_empty():
            return QueryResult()
        return query.run(self._table)

    def traverse(self, order: TraversalOrder = TraversalOrder.IN_ORDER) -> Iterator[Patient]:
        return self._table.traverse(order)

    def size(self) -> int:
        return self._table.size()

    def is_empty(self) -> bool:
        return self._table.is_empty()

    def depth(self) -> int:
        return self._table.depth()

    def __enter__(self) -> "PatientRegistry":
        self.load()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if exc_type is None:
            self.save()
