"""
Registry engine and the load/save/query collaborators around the tree.
"""

from patient_index.engine.registry import PatientRegistry

__all__ = ["PatientRegistry"]
