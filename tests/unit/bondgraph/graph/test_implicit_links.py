"""Tests for deriving 2nd and 3rd degree links from explicit bonds."""

from __future__ import annotations

import random
from collections import namedtuple
from dataclasses import FrozenInstanceError, dataclass
from types import SimpleNamespace
from uuid import UUID

import networkx as nx
import pytest

from bondgraph.errors import MalformedEndpointError
from bondgraph.graph.implicit_links import (
    TraversalStep,
    canonical_pair_key,
    derive_links,
    endpoint_id,
)


def _derived(links):
    return [(link["source"], link["target"], link["type"], link["category"]) for link in links if link["category"] > 1]


def _pair(a, b):
    return canonical_pair_key(a, b)


class TestChainScenario:
    """Chain A-B-C-D-E of four friend bonds."""

    def test_explicit_bonds_come_first_in_input_order(self, chain_people, chain_bonds):
        links = derive_links(chain_people, chain_bonds)

        assert links[:4] == [{**bond, "category": 1} for bond in chain_bonds]

    def test_derived_links_follow_shortest_path_distance(self, chain_people, chain_bonds):
        links = derive_links(chain_people, chain_bonds)

        assert _derived(links) == [
            ("A", "C", "second_degree", 2),
            ("A", "D", "third_degree", 3),
            ("B", "D", "second_degree", 2),
            ("B", "E", "third_degree", 3),
            ("C", "E", "second_degree", 2),
        ]

    def test_fourth_degree_pair_is_absent(self, chain_people, chain_bonds):
        links = derive_links(chain_people, chain_bonds)

        pairs = {_pair(link["source"], link["target"]) for link in links}
        assert "A-E" not in pairs

    def test_input_is_not_mutated(self, chain_people, chain_bonds):
        snapshot = [dict(bond) for bond in chain_bonds]

        derive_links(chain_people, chain_bonds)

        assert chain_bonds == snapshot
        assert all("category" not in bond for bond in chain_bonds)


class TestExplicitOverride:
    """An explicit bond wins over a derived link for the same pair."""

    def test_explicit_pair_appears_once(self, chain_people, chain_bonds):
        bonds = [*chain_bonds, {"id": "r5", "source": "A", "target": "C", "type": "best_friend"}]

        links = derive_links(chain_people, bonds)

        a_c = [link for link in links if _pair(link["source"], link["target"]) == "A-C"]
        assert a_c == [{"id": "r5", "source": "A", "target": "C", "type": "best_friend", "category": 1}]

    def test_shortcut_changes_other_distances(self, chain_people, chain_bonds):
        bonds = [*chain_bonds, {"id": "r5", "source": "A", "target": "C", "type": "best_friend"}]

        links = derive_links(chain_people, bonds)

        assert _derived(links) == [
            ("A", "D", "second_degree", 2),
            ("A", "E", "third_degree", 3),
            ("B", "D", "second_degree", 2),
            ("B", "E", "third_degree", 3),
            ("C", "E", "second_degree", 2),
        ]

    def test_reverse_direction_bond_also_counts(self):
        people = ["A", "B", "C"]
        bonds = [
            {"source": "A", "target": "B", "type": "friend"},
            {"source": "B", "target": "C", "type": "friend"},
            {"source": "C", "target": "A", "type": "crush"},
        ]

        links = derive_links(people, bonds)

        assert _derived(links) == []


class TestDisconnectedAndUnknown:
    """Components without a path and bonds to unknown people."""

    def test_no_links_across_components(self):
        people = [{"id": p} for p in "ABCD"]
        bonds = [
            {"source": "A", "target": "B", "type": "friend"},
            {"source": "C", "target": "D", "type": "friend"},
        ]

        links = derive_links(people, bonds)

        assert len(links) == 2
        assert _derived(links) == []

    def test_unknown_person_bond_passes_through(self):
        people = [{"id": p} for p in "AB"]
        phantom = {"id": "r9", "source": "A", "target": "ghost", "type": "friend", "lore": "met once"}
        bonds = [{"source": "A", "target": "B", "type": "friend"}, phantom]

        links = derive_links(people, bonds)

        assert links[1] == {**phantom, "category": 1}
        assert _derived(links) == []

    def test_unknown_person_is_not_a_bridge(self):
        people = [{"id": p} for p in "AB"]
        bonds = [
            {"source": "A", "target": "ghost", "type": "friend"},
            {"source": "ghost", "target": "B", "type": "friend"},
        ]

        links = derive_links(people, bonds)

        assert _derived(links) == []

    def test_empty_inputs(self):
        assert derive_links([], []) == []
        assert derive_links([{"id": "A"}], []) == []

    def test_bonds_without_people_pass_through(self):
        bonds = [{"source": "A", "target": "B", "type": "friend"}]

        assert derive_links([], bonds) == [{"source": "A", "target": "B", "type": "friend", "category": 1}]

    def test_self_bond_and_parallel_bonds(self):
        people = ["A", "B", "C"]
        bonds = [
            {"source": "A", "target": "A", "type": "self"},
            {"source": "A", "target": "B", "type": "friend"},
            {"source": "B", "target": "A", "type": "crush"},
            {"source": "B", "target": "C", "type": "friend"},
        ]

        links = derive_links(people, bonds)

        assert [link["category"] for link in links[:4]] == [1, 1, 1, 1]
        assert _derived(links) == [("A", "C", "second_degree", 2)]


class TestEndpointNormalization:
    """Endpoints may be bare ids, mappings or objects with an id."""

    def test_bare_ids(self):
        assert endpoint_id("abc") == "abc"
        assert endpoint_id(7) == 7

    def test_uuid(self):
        value = UUID("12345678-1234-5678-1234-567812345678")
        assert endpoint_id(value) == value

    def test_mapping_and_object(self):
        assert endpoint_id({"id": "abc", "name": "Alice"}) == "abc"
        assert endpoint_id(SimpleNamespace(id="abc")) == "abc"

    @pytest.mark.parametrize("endpoint", [None, True, {"name": "no id"}, SimpleNamespace(name="no id"), 1.5])
    def test_malformed_endpoints_raise(self, endpoint):
        with pytest.raises(MalformedEndpointError):
            endpoint_id(endpoint)

    def test_malformed_error_is_value_error(self):
        with pytest.raises(ValueError):
            endpoint_id(None)

    def test_object_endpoints_in_bonds(self):
        people = [SimpleNamespace(id=p) for p in "ABC"]
        bonds = [
            {"source": people[0], "target": {"id": "B"}, "type": "friend"},
            SimpleNamespace(source="B", target=people[2], type="friend"),
        ]

        links = derive_links(people, bonds)

        assert links[1]["source"] == "B"
        assert links[1]["category"] == 1
        assert _derived(links) == [("A", "C", "second_degree", 2)]

    def test_named_tuple_bonds(self):
        Bond = namedtuple("Bond", "source target type")
        bonds = [Bond("A", "B", "friend"), Bond("B", "C", "friend")]

        links = derive_links(["A", "B", "C"], bonds)

        assert links[0] == {"source": "A", "target": "B", "type": "friend", "category": 1}
        assert _derived(links) == [("A", "C", "second_degree", 2)]

    def test_slotted_dataclass_bonds(self):
        @dataclass(slots=True)
        class Bond:
            source: str
            target: str
            type: str

        links = derive_links(["A", "B", "C"], [Bond("A", "B", "friend"), Bond("B", "C", "family")])

        assert links[1] == {"source": "B", "target": "C", "type": "family", "category": 1}
        assert _derived(links) == [("A", "C", "second_degree", 2)]

    def test_slots_only_bonds(self):
        class Bond:
            __slots__ = ("source", "target", "type")

            def __init__(self, source, target, bond_type):
                self.source = source
                self.target = target
                self.type = bond_type

        links = derive_links(["A", "B"], [Bond("A", "B", "friend")])

        assert links == [{"source": "A", "target": "B", "type": "friend", "category": 1}]

    def test_derived_links_keep_original_id_type(self):
        people = [{"id": 1}, {"id": 2}, {"id": 3}]
        bonds = [
            {"source": 1, "target": 2, "type": "friend"},
            {"source": "2", "target": 3, "type": "friend"},
        ]

        links = derive_links(people, bonds)

        assert _derived(links) == [(1, 3, "second_degree", 2)]

    def test_malformed_bond_endpoint_fails_the_call(self):
        with pytest.raises(MalformedEndpointError):
            derive_links(["A", "B"], [{"source": "A", "target": None, "type": "friend"}])


class TestHelpers:
    def test_canonical_pair_key_is_direction_independent(self):
        assert canonical_pair_key("b", "a") == canonical_pair_key("a", "b") == "a-b"

    def test_canonical_pair_key_uses_string_order(self):
        assert canonical_pair_key(10, 9) == "10-9"

    def test_traversal_step_is_frozen(self):
        step = TraversalStep("A", 1)
        with pytest.raises(FrozenInstanceError):
            step.distance = 2  # type: ignore[misc]


class TestAgainstNetworkX:
    """Cross-check distances against NetworkX shortest paths on random graphs."""

    @pytest.mark.parametrize("seed", [1, 7, 42, 2024])
    def test_derived_pairs_match_shortest_paths(self, seed):
        rng = random.Random(seed)
        people = [f"p{i}" for i in range(14)]
        bonds = []
        for _ in range(16):
            source, target = rng.sample(people, 2)
            bonds.append({"source": source, "target": target, "type": "friend"})

        links = derive_links(people, bonds)

        graph = nx.Graph()
        graph.add_nodes_from(people)
        graph.add_edges_from((bond["source"], bond["target"]) for bond in bonds)
        distances = dict(nx.all_pairs_shortest_path_length(graph, cutoff=3))
        expected = {
            _pair(a, b): d for a in people for b, d in distances[a].items() if a < b and d in (2, 3)
        }

        derived = {_pair(link["source"], link["target"]): link["category"] for link in links[len(bonds) :]}
        assert derived == expected
        assert len(links) == len(bonds) + len(expected)

    @pytest.mark.parametrize("seed", [3, 11])
    def test_no_pair_is_derived_twice(self, seed):
        rng = random.Random(seed)
        people = [str(i) for i in range(10)]
        bonds = [dict(zip(("source", "target"), rng.sample(people, 2), strict=True), type="x") for _ in range(12)]

        links = derive_links(people, bonds)

        derived_keys = [_pair(link["source"], link["target"]) for link in links if link["category"] > 1]
        explicit_keys = {_pair(bond["source"], bond["target"]) for bond in bonds}
        assert len(derived_keys) == len(set(derived_keys))
        assert not explicit_keys & set(derived_keys)
