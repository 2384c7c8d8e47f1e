"""
PatientTable - In-memory patient table keyed by e-mail over an ordered container.
"""

import logging
from collections.abc import AsyncIterator, Iterator
from operator import attrgetter

from patient_index.interfaces.ordered_container import OrderedContainer
from patient_index.interfaces.traversable import Traversable, TraversalOrder
from patient_index.models.exceptions import InvalidPatientError
from patient_index.models.patient import Patient
from patient_index.models.sortedcontainers import OrderedTree

logger = logging.getLogger(__name__)

# Order key of every patient container
patient_key = attrgetter("email")


class PatientTable(Traversable):
    """
    In-memory patient table backed by an OrderedContainer.

    Supports:
    - add, delete, update and search by e-mail
    - Ordered walks (in-order is ascending e-mail)
    - Size and depth of the backing structure
    """

    def __init__(self, container: OrderedContainer | None = None) -> None:
        """
        Initialize PatientTable.

        Args:
            container: The backing ordered structure. It must order patients
                       by e-mail. Defaults to an empty OrderedTree.
        """
        self._container = container if container is not None else OrderedTree(key=patient_key)

    def add(self, patient: Patient) -> None:
        """
        Add a patient. A second record with an existing e-mail is kept
        alongside the first, not merged into it.

        Raises:
            InvalidPatientError: If a field holds a comma or line break, so the
                record could not be saved and loaded back.
        """
        patient.check_fields()
        self._container.insert(patient)

    def delete(self, email: str) -> bool:
        """
        Delete the patient with the given e-mail.

        Args:
            email: The key of the patient to delete.

        Returns:
            True if a patient was removed, False if none had that e-mail.
        """
        return self._container.remove(Patient.probe(email))

    def update(self, patient: Patient) -> bool:
        """
        Replace the stored record that has the same e-mail.

        Args:
            patient: The record with updated details.

        Returns:
            True if a record was replaced. False if the record is invalid or
            no patient has that e-mail; the table is left unchanged.
        """
        try:
            patient.validate()
        except InvalidPatientError as e:
            logger.warning(f"Rejected update: {e}")
            return False

        return self._container.update(patient)

    def search(self, email: str) -> Patient | None:
        """
        Look up a patient by e-mail.

        Returns:
            The earliest added patient with that e-mail, or None.
        """
        return self._container.find(Patient.probe(email))

    def has(self, email: str) -> bool:
        return self._container.contains(Patient.probe(email))

    def all_patients(self) -> list[Patient]:
        return list(self._container)

    def size(self) -> int:
        return self._container.size()

    def is_empty(self) -> bool:
        return self._container.is_empty()

    def depth(self) -> int:
        return self._container.depth()

    def __iter__(self) -> Iterator[Patient]:
        return self._container.__iter__()

    def iterator(self, start: str | None = None, end: str | None = None) -> Iterator[Patient]:
        """In-order walk over patients with start <= e-mail < end."""
        return self._container.iterator(*self._bounds(start, end))

    def traverse(self, order: TraversalOrder = TraversalOrder.IN_ORDER) -> Iterator[Patient]:
        return self._container.traverse(order)

    def __aiter__(self) -> AsyncIterator[Patient]:
        return self._container.__aiter__()

    def async_iterator(
        self, start: str | None = None, end: str | None = None
    ) -> AsyncIterator[Patient]:
        return self._container.async_iterator(*self._bounds(start, end))

    def async_traverse(
        self, order: TraversalOrder = TraversalOrder.IN_ORDER
    ) -> AsyncIterator[Patient]:
        return self._container.async_traverse(order)

    @staticmethod
    def _bounds(start: str | None, end: str | None) -> tuple[Patient | None, Patient | None]:
        """Turn e-mail bounds into probe records."""
        return (
            Patient.probe(start) if start is not None else None,
            Patient.probe(end) if end is not None else None,
        )
