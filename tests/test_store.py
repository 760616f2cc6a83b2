"""Tests for the in-memory person store."""
from __future__ import annotations

import pytest

from kinship_graph.exceptions import KinshipGraphError, UnknownPersonError, UnknownTreeError
from kinship_graph.models import RelationshipType
from kinship_graph.store import PersonStore

R = RelationshipType


def _decls(store, person_id):
    return [(d.type, d.target_person_id) for d in store.get(person_id).declared_relationships]


@pytest.fixture
def store():
    s = PersonStore()
    s.add_person("Alice Smith", gender="female", person_id="alice")
    s.add_person("Bob Smith", gender="male", person_id="bob")
    s.add_person("Casey", person_id="casey")
    return s


class TestPeople:
    """Tests for person commands."""

    def test_add_person_generates_id(self):
        store = PersonStore()

        person = store.add_person("  Dana  ", photos=["d.jpg"])

        assert person.id
        assert person.name == "Dana"
        assert store.get(person.id).primary_photo == "d.jpg"

    def test_blank_name_rejected(self):
        with pytest.raises(ValueError):
            PersonStore().add_person("   ")

    def test_duplicate_id_rejected(self, store):
        with pytest.raises(ValueError, match="already exists"):
            store.add_person("Other", person_id="alice")

    def test_search(self, store):
        """Test case-insensitive name search."""
        assert [p.id for p in store.search("smith")] == ["alice", "bob"]
        assert [p.id for p in store.search("CASE")] == ["casey"]
        assert len(store.search("")) == 3
        assert store.search("nobody") == []

    def test_snapshot_is_stable(self, store):
        """Test a snapshot is unaffected by later commands."""
        snapshot = store.snapshot()

        store.add_relationship("alice", R.SPOUSE_OF, "bob")

        alice = next(p for p in snapshot if p.id == "alice")
        assert alice.declared_relationships == ()
        assert _decls(store, "alice") == [(R.SPOUSE_OF, "bob")]


class TestRelationships:
    """Tests for relationship commands."""

    def test_writes_reverse(self, store):
        """Test a symmetric relationship lands on both people."""
        store.add_relationship("alice", R.SPOUSE_OF, "bob")

        assert _decls(store, "alice") == [(R.SPOUSE_OF, "bob")]
        assert _decls(store, "bob") == [(R.SPOUSE_OF, "alice")]

    def test_reverse_uses_target_gender(self, store):
        """Test the reverse form follows the target's gender."""
        store.add_relationship("alice", R.MOTHER_OF, "bob")

        assert _decls(store, "bob") == [(R.SON_OF, "alice")]

    def test_ambiguous_reverse_not_written(self, store):
        """Test a child-type declaration towards an unknown-gender parent is one-sided."""
        store.add_relationship("alice", R.DAUGHTER_OF, "casey")

        assert _decls(store, "alice") == [(R.DAUGHTER_OF, "casey")]
        assert _decls(store, "casey") == []

    def test_gendered_parent_gets_reverse(self, store):
        store.add_relationship("casey", R.CHILD_OF, "alice")

        assert _decls(store, "alice") == [(R.MOTHER_OF, "casey")]

    def test_new_person_target(self, store):
        """Test naming a new person creates them as the target."""
        target = store.add_relationship("alice", R.SISTER_OF, new_person_name="Erin")

        assert target.name == "Erin"
        assert store.get(target.id) is not None
        assert _decls(store, "alice") == [(R.SISTER_OF, target.id)]
        assert _decls(store, target.id) == [(R.SISTER_OF, "alice")]

    def test_string_type_accepted(self, store):
        store.add_relationship("alice", "spouse_of", "bob")

        assert _decls(store, "bob") == [(R.SPOUSE_OF, "alice")]

    def test_repeat_is_noop(self, store):
        """Test re-declaring an equivalent relationship adds nothing."""
        store.add_relationship("alice", R.MOTHER_OF, "bob")
        store.add_relationship("bob", R.CHILD_OF, "alice")

        assert _decls(store, "alice") == [(R.MOTHER_OF, "bob")]
        assert _decls(store, "bob") == [(R.SON_OF, "alice")]

    def test_unknown_person(self, store):
        with pytest.raises(UnknownPersonError) as exc_info:
            store.add_relationship("alice", R.SPOUSE_OF, "ghost")

        assert exc_info.value.person_id == "ghost"
        assert "add_relationship" in str(exc_info.value)
        assert isinstance(exc_info.value, KinshipGraphError)

    def test_self_relationship_rejected(self, store):
        with pytest.raises(ValueError):
            store.add_relationship("alice", R.SPOUSE_OF, "alice")

    def test_missing_target_rejected(self, store):
        with pytest.raises(ValueError):
            store.add_relationship("alice", R.SPOUSE_OF)

    def test_remove_relationship(self, store):
        """Test removal clears the declaration and its reverse."""
        store.add_relationship("alice", R.MOTHER_OF, "bob")
        store.add_relationship("alice", R.SPOUSE_OF, "casey")

        store.remove_relationship("alice", R.MOTHER_OF, "bob")

        assert _decls(store, "alice") == [(R.SPOUSE_OF, "casey")]
        assert _decls(store, "bob") == []
        assert _decls(store, "casey") == [(R.SPOUSE_OF, "alice")]


class TestFamilyTrees:
    """Tests for saved family tree commands."""

    def test_create_and_list(self, store):
        tree = store.create_tree("Smiths", "alice", tree_id="t1")

        assert tree.root_person_id == "alice"
        assert store.trees() == [tree]
        assert store.get_tree("t1") == tree

    def test_create_with_unknown_root(self, store):
        with pytest.raises(UnknownPersonError):
            store.create_tree("Ghosts", "ghost")

    def test_update(self, store):
        store.create_tree("Smiths", "alice", tree_id="t1")

        tree = store.update_tree("t1", name="Smith family", root_person_id="bob")

        assert tree.name == "Smith family"
        assert tree.root_person_id == "bob"
        assert store.get_tree("t1") == tree

    def test_update_blank_name_rejected(self, store):
        store.create_tree("Smiths", "alice", tree_id="t1")

        with pytest.raises(ValueError):
            store.update_tree("t1", name=" ")

    def test_delete(self, store):
        store.create_tree("Smiths", "alice", tree_id="t1")

        store.delete_tree("t1")

        assert store.trees() == []
        with pytest.raises(UnknownTreeError):
            store.get_tree("t1")
