"""Property-based tests for OrderedTree and the data file round trip."""

from collections import Counter
from operator import itemgetter

from common import assert_bst, make_patient
from hypothesis import given, strategies as st
from hypothesis.stateful import RuleBasedStateMachine, invariant, rule

from patient_index.engine.loader import PatientLoader
from patient_index.interfaces.traversable import TraversalOrder
from patient_index.models.patient_table import PatientTable
from patient_index.models.sortedcontainers import OrderedTree

keys = st.integers(min_value=0, max_value=40)


def build(values) -> OrderedTree:
    tree = OrderedTree()
    for value in values:
        tree.insert(value)
    return tree


@given(st.lists(keys))
def test_size_counts_every_insert(values):
    tree = build(values)
    assert tree.size() == len(values)
    assert tree.is_empty() == (not values)


@given(st.lists(keys))
def test_in_order_is_sorted(values):
    assert list(build(values)) == sorted(values)


@given(st.lists(keys, unique=True))
def test_depth_matches_longest_path(values):
    tree = build(values)
    # A tree of n nodes is at least as deep as a complete one and at most a chain
    if values:
        assert (len(values)).bit_length() - 1 <= tree.depth() <= len(values) - 1
    else:
        assert tree.depth() == -1


@given(st.lists(keys))
def test_every_traversal_visits_each_node_once(values):
    tree = build(values)
    for order in TraversalOrder:
        assert Counter(tree.traverse(order)) == Counter(values)


@given(st.lists(keys, unique=True), st.lists(keys))
def test_distinct_keys_keep_strict_bst_property(values, removals):
    tree = build(values)
    for key in removals:
        assert tree.remove(key) == (key in values)
        if key in values:
            values.remove(key)
        assert_bst(tree)
    assert list(tree) == sorted(values)


@given(st.lists(st.tuples(keys, st.integers())), st.integers(0, 40))
def test_duplicates_round_trip_in_insertion_order(items, key):
    tree = OrderedTree(key=itemgetter(0))
    for item in items:
        tree.insert(item)

    rebuilt = OrderedTree(key=itemgetter(0))
    for item in tree:
        rebuilt.insert(item)

    assert list(rebuilt) == list(tree)
    assert list(tree) == sorted(items, key=itemgetter(0))
    matches = [item for item in items if item[0] == key]
    assert tree.find((key, None)) == (matches[0] if matches else None)


@given(
    st.lists(
        st.tuples(st.sampled_from(["a", "b", "c", "d"]), st.sampled_from(["MI", "OH"])),
        max_size=12,
    )
)
def test_export_then_import_preserves_order(rows):
    table = PatientTable()
    for n, (local, state) in enumerate(rows):
        table.add(make_patient(f"{local}@example.com", first_name=f"P{n}", state=state))

    lines = [patient.to_data_string() for patient in table]
    reloaded = PatientTable()
    PatientLoader().load_lines(lines, reloaded)

    assert [p.to_data_string() for p in reloaded] == lines


class OrderedTreeMachine(RuleBasedStateMachine):
    """Random insert/remove sequences checked against a multiset model."""

    def __init__(self):
        super().__init__()
        self.tree = OrderedTree()
        self.model: Counter = Counter()

    @rule(key=keys)
    def insert(self, key):
        self.tree.insert(key)
        self.model[key] += 1

    @rule(key=keys)
    def remove(self, key):
        removed = self.tree.remove(key)
        assert removed == (self.model[key] > 0)
        if removed:
            self.model[key] -= 1
        assert self.tree.contains(key) == (self.model[key] > 0)

    @invariant()
    def matches_model(self):
        assert self.tree.size() == sum(self.model.values())
        assert list(self.tree) == sorted(self.model.elements())

    @invariant()
    def ordered_with_ties(self):
        assert_bst(self.tree, strict_left=False)


TestOrderedTreeMachine = OrderedTreeMachine.TestCase
