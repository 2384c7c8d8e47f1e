"""
VaccinationQuery - Vaccination counts for patients in a state or zip code.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field

from patient_index.models.patient import Patient, VaccinationStatus


@dataclass
class QueryResult:
    """
    Patients matching a query, with per-status tallies.

    Attributes:
        patients: Matching patients in ascending e-mail order.
        first_shot_only: Patients with the first dose but not the second.
        no_shots: Patients with neither dose.
        both_shots: Patients with both doses.
    """

    patients: list[Patient] = field(default_factory=list)
    first_shot_only: list[Patient] = field(default_factory=list)
    no_shots: list[Patient] = field(default_factory=list)
    both_shots: list[Patient] = field(default_factory=list)

    def summary(self) -> str:
        return (
            f"Number having received the first shot but not the second: {len(self.first_shot_only)}\n"
            f"Number not receiving either shot: {len(self.no_shots)}\n"
            f"Number receiving both shots: {len(self.both_shots)}"
        )


class VaccinationQuery:
    """Filters patients by state or zip code and buckets them by dose status."""

    def __init__(self, state: str | None = None, zip: str | None = None) -> None:
        """
        Initialize query. Exactly one of state and zip must be given.

        Args:
            state: Two-letter state to match exactly.
            zip: Zip code to match exactly.
        """
        if (state is None) == (zip is None):
            raise ValueError("Exactly one of state or zip must be given")
        self._state = state
        self._zip = zip

    def matches(self, patient: Patient) -> bool:
        if self._state is not None:
            return patient.state == self._state
        return patient.zip == self._zip

    def run(self, patients: Iterable[Patient]) -> QueryResult:
        """
        Run the query.

        Args:
            patients: Patients in the order they should be reported.

        Returns:
            QueryResult with matches and tallies. Records with a second dose
            but no first appear in patients but in none of the tallies.
        """
        result = QueryResult()
        buckets = {
            VaccinationStatus.FIRST_ONLY: result.first_shot_only,
            VaccinationStatus.NONE: result.no_shots,
            VaccinationStatus.BOTH: result.both_shots,
        }

        for patient in patients:
            if not self.matches(patient):
                continue
            result.patients.append(patient)
            bucket = buckets.get(patient.vaccination_status)
            if bucket is not None:
                bucket.append(patient)

        return result
