"""Tests for the cycle-safe tree builder."""
from __future__ import annotations

from kinship_graph.builder import TreeBuilder, build
from kinship_graph.config import BuilderConfig, ParentPolicy, ResolverConfig, SpousePolicy
from kinship_graph.models import RelationshipType
from kinship_graph.resolver import RelationshipIndex, resolve

from conftest import make_person

R = RelationshipType


class _CountingIndex(RelationshipIndex):
    """RelationshipIndex that counts full iterations over its person ids."""

    iterations = 0

    @classmethod
    def wrap(cls, index: RelationshipIndex) -> "_CountingIndex":
        return cls(
            {pid: index.person(pid) for pid in index},
            {pid: index[pid] for pid in index},
        )

    def __iter__(self):
        self.iterations += 1
        return super().__iter__()


class TestTreeBuilder:
    """Tests for TreeBuilder."""

    def test_scenario(self, scenario_people):
        """Test spouse and child of the root."""
        root = build("A", resolve(scenario_people))

        assert root.id == "A"
        assert root.name == "Al"
        assert root.relationship_type is None
        assert root.spouse.id == "B"
        assert root.spouse.relationship_type == R.SPOUSE_OF
        assert [c.id for c in root.children] == ["C"]
        assert root.children[0].relationship_type == R.FATHER_OF
        assert root.parents == []

    def test_missing_root(self, scenario_people):
        """Test a missing root yields no tree."""
        assert build("nobody", resolve(scenario_people)) is None

    def test_cycle_terminates(self):
        """Test a father_of cycle is cut where it closes."""
        people = [
            make_person("A", ("father_of", "B")),
            make_person("B", ("father_of", "C")),
            make_person("C", ("father_of", "A")),
        ]

        root = build("A", resolve(people))

        assert root.id == "A"
        b = root.children[0]
        assert b.id == "B"
        c = b.children[0]
        assert c.id == "C"
        assert c.children == []
        assert root.person_ids == {"A", "B", "C"}

    def test_parent_classification_wins(self):
        """Test a pair is never both parent and child of the same person."""
        people = [
            make_person("A", ("father_of", "B")),
            make_person("B", ("father_of", "A")),
        ]

        root = build("A", resolve(people))

        assert [c.id for c in root.children] == ["B"]
        assert root.parents == []

    def test_redundant_reverse_declaration(self):
        """Test father_of plus a redundant child_of never makes B a parent of A."""
        people = [
            make_person("A", ("father_of", "B")),
            make_person("B", ("child_of", "A")),
        ]
        index = resolve(people)

        from_a = build("A", index)
        assert [c.id for c in from_a.children] == ["B"]
        assert from_a.parents == []

        from_b = build("B", index)
        assert [p.id for p in from_b.parents] == ["A"]
        assert from_b.parents[0].relationship_type == R.CHILD_OF
        assert from_b.children == []

    def test_shared_grandchild_in_both_branches(self):
        """Test branch-scoped visiting keeps a person reachable twice."""
        people = [
            make_person("G", ("father_of", "P1"), ("father_of", "P2")),
            make_person("P1", ("father_of", "K")),
            make_person("P2", ("father_of", "K")),
            make_person("K"),
        ]

        root = build("G", resolve(people))

        assert [c.id for c in root.children] == ["P1", "P2"]
        assert [c.id for c in root.children[0].children] == ["K"]
        assert [c.id for c in root.children[1].children] == ["K"]

    def test_depth_ceiling(self):
        """Test a long chain stops at the configured depth."""
        people = [make_person(f"p{i}", ("father_of", f"p{i + 1}")) for i in range(15)]
        people.append(make_person("p15"))

        root = TreeBuilder(resolve(people), BuilderConfig(max_depth=3)).build("p0")

        chain = []
        node = root
        while node is not None:
            chain.append(node.id)
            node = node.children[0] if node.children else None
        assert chain == ["p0", "p1", "p2", "p3"]

    def test_default_depth_ceiling(self):
        """Test the default ceiling keeps depths 0 through 10."""
        people = [make_person(f"p{i}", ("father_of", f"p{i + 1}")) for i in range(15)]
        people.append(make_person("p15"))

        root = build("p0", resolve(people))

        assert len(root.person_ids) == 11

    def test_siblings(self):
        """Test sibling edges."""
        root = build("A", resolve([make_person("A", ("brother_of", "B")), make_person("B")]))

        assert [s.id for s in root.siblings] == ["B"]
        assert root.siblings[0].relationship_type == R.BROTHER_OF

    def test_spouse_policy(self):
        """Test first and last spouse selection."""
        people = [make_person("A", ("spouse_of", "B"), ("spouse_of", "C")), make_person("B"), make_person("C")]
        index = resolve(people)

        assert build("A", index).spouse.id == "B"
        assert build("A", index, BuilderConfig(spouse_policy=SpousePolicy.LAST)).spouse.id == "C"

    def test_child_found_through_child_declaration(self):
        """Test a child declaring daughter_of is found even without an inferred parent edge."""
        people = [make_person("Y"), make_person("X", ("daughter_of", "Y"))]
        index = resolve(people, ResolverConfig(parent_policy=ParentPolicy.SKIP))

        root = build("Y", index)

        assert [c.id for c in root.children] == ["X"]
        assert root.children[0].relationship_type == R.DAUGHTER_OF

    def test_inferred_parent_edge_keeps_declared_child_type(self):
        """Test a child reached through an inferred father_of carries its own daughter_of."""
        people = [make_person("Y"), make_person("X", ("daughter_of", "Y"))]
        index = resolve(people)

        assert index["Y"][0].type == R.FATHER_OF
        assert index["Y"][0].inferred

        root = build("Y", index)

        assert [c.id for c in root.children] == ["X"]
        assert root.children[0].relationship_type == R.DAUGHTER_OF

    def test_index_scanned_once(self):
        """Test child-type claims are collected once per builder, not per node."""
        people = [
            make_person("F", ("spouse_of", "M"), gender="male"),
            make_person("M", gender="female"),
        ]
        brothers = [f"b{i}" for i in range(4)]
        for b in brothers:
            others = [("brother_of", o) for o in brothers if o != b]
            people.append(make_person(b, ("son_of", "F"), ("son_of", "M"), *others, gender="male"))
        index = _CountingIndex.wrap(resolve(people))

        root = TreeBuilder(index).build("F")

        assert index.iterations == 1
        assert [c.id for c in root.children] == brothers
        assert all(c.relationship_type == R.SON_OF for c in root.children)
        assert root.spouse.id == "M"

    def test_photos_carried(self):
        """Test person payload is copied onto the node."""
        root = build("A", resolve([make_person("A", photos=["a.jpg", "b.jpg"], gender="male")]))

        assert root.photos == ("a.jpg", "b.jpg")
        assert root.gender == "male"
