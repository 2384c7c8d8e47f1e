"""
Data models for the patient index.
"""

from patient_index.models.exceptions import InvalidPatientError, RecordFormatError
from patient_index.models.patient import NO_DOSE, Patient, VaccinationStatus
from patient_index.models.patient_table import PatientTable

__all__ = [
    "NO_DOSE",
    "InvalidPatientError",
    "Patient",
    "PatientTable",
    "RecordFormatError",
    "VaccinationStatus",
]
