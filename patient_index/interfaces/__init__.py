"""
Abstract base classes and protocols for the patient index.
"""

from patient_index.interfaces.ordered_container import OrderedContainer
from patient_index.interfaces.traversable import Traversable, TraversalOrder

__all__ = ["OrderedContainer", "Traversable", "TraversalOrder"]
