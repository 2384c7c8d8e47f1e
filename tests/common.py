"""Helpers shared by the patient index tests."""

from patient_index.models.patient import NO_DOSE, Patient
from patient_index.models.sortedcontainers import Node, OrderedTree

EXAMPLE_KEYS = [50, 30, 70, 20, 40, 60, 80]


def make_patient(
    email: str,
    first_name: str = "Ada",
    state: str = "MI",
    zip: str = "49684",
    date1: str = NO_DOSE,
    date2: str = NO_DOSE,
) -> Patient:
    """Build a patient with filler contact details."""
    return Patient(
        first_name=first_name,
        last_name="Lovelace",
        address="1 Main St",
        city="Traverse City",
        state=state,
        zip=zip,
        phone="231-555-0100",
        email=email,
        date1=date1,
        date2=date2,
    )


def assert_bst(tree: OrderedTree, strict_left: bool = True) -> None:
    """
    Check every node against the bounds set by its ancestors.

    Left descendants must compare less (or less-or-equal when strict_left is
    False); right descendants must compare greater-or-equal.
    """
    stack: list[tuple[Node, object, object]] = [(tree.root, None, None)] if tree.root else []
    seen: set[int] = set()
    while stack:
        node, low, high = stack.pop()
        assert id(node) not in seen, "node reachable from two places"
        seen.add(id(node))
        if low is not None:
            assert node.value >= low
        if high is not None:
            assert node.value < high if strict_left else node.value <= high
        if node.left:
            stack.append((node.left, low, node.value))
        if node.right:
            stack.append((node.right, node.value, high))
