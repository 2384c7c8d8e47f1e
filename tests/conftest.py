"""
Shared pytest fixtures for patient index tests.
"""

import os
import tempfile

import pytest
from common import EXAMPLE_KEYS, make_patient

from patient_index.engine.registry import PatientRegistry
from patient_index.models.patient_table import PatientTable
from patient_index.models.sortedcontainers import OrderedTree


@pytest.fixture
def temp_dir():
    """Provide a temporary directory that is cleaned up after test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def example_tree():
    """Provide the seven-node tree built from 50, 30, 70, 20, 40, 60, 80."""
    tree = OrderedTree()
    for key in EXAMPLE_KEYS:
        tree.insert(key)
    return tree


@pytest.fixture
def sample_patients():
    """Provide patients listed out of e-mail order."""
    return [
        make_patient("mary@example.com", "Mary", date1="2021-01-05", date2="2021-02-02"),
        make_patient("bob@example.com", "Bob", date1="2021-03-01"),
        make_patient("zoe@example.com", "Zoe", state="OH", zip="43004"),
        make_patient("carl@example.com", "Carl", zip="49686"),
    ]


@pytest.fixture
def table(sample_patients):
    """Provide a PatientTable holding the sample patients."""
    table = PatientTable()
    for patient in sample_patients:
        table.add(patient)
    return table


@pytest.fixture
def data_file(temp_dir, sample_patients):
    """Provide a patients.txt holding the sample patients in list order."""
    path = os.path.join(temp_dir, PatientRegistry.DEFAULT_DATA_FILE)
    with open(path, "w", encoding="utf-8") as f:
        for patient in sample_patients:
            f.write(patient.to_data_string() + "\n")
    return path


@pytest.fixture
def registry(temp_dir, data_file):
    """Provide a registry loaded from the sample data file."""
    registry = PatientRegistry(storage_dir=temp_dir)
    registry.load()
    return registry
