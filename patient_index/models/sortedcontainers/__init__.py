"""
Ordered container implementations for the patient index.
"""

from patient_index.models.sortedcontainers.ordered_tree import Node, OrderedTree, natural_compare

__all__ = ["Node", "OrderedTree", "natural_compare"]
