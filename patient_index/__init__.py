"""
Patient index built on an unbalanced binary search tree.

This package provides an in-memory keyed index with:
- insert(value) - O(depth), equal keys kept side by side
- find(key) / contains(key) - O(depth), earliest inserted match
- remove(key) - O(depth), in-order predecessor promotion
- size() / depth() - recomputed from the structure
- In-order, pre-order and post-order walks
- Round trip through a ten-field comma-separated patient file
"""

from patient_index.engine.registry import PatientRegistry
from patient_index.interfaces.traversable import TraversalOrder
from patient_index.models.patient import Patient
from patient_index.models.sortedcontainers import OrderedTree

__all__ = ["OrderedTree", "Patient", "PatientRegistry", "TraversalOrder"]
