"""In-memory relationship store and the mutation commands that drive recompute.

The engine only ever reads ``snapshot()``; every command here replaces the
affected immutable Person records, so a snapshot taken earlier is never
changed underneath a running computation.
"""
from __future__ import annotations

from collections.abc import Iterable
from uuid import uuid4

from kinship_graph.config import ParentPolicy
from kinship_graph.exceptions import UnknownPersonError, UnknownTreeError
from kinship_graph.logging import get_logger
from kinship_graph.models.person import FamilyTree, Person, RelationshipDeclaration
from kinship_graph.models.relationships import (
    Gender,
    RelationshipType,
    is_ambiguous_reverse,
    reverse_of,
)

logger = get_logger(__name__)


class PersonStore:
    """Owns the people and saved family trees of one notebook."""

    def __init__(self, people: Iterable[Person] = (), trees: Iterable[FamilyTree] = ()) -> None:
        self._people: dict[str, Person] = {p.id: p for p in people}
        self._trees: dict[str, FamilyTree] = {t.id: t for t in trees}

    # ─────────────────────────────────────────
    # People
    # ─────────────────────────────────────────

    def add_person(
        self,
        name: str,
        photos: Iterable[str] = (),
        gender: Gender | None = None,
        person_id: str | None = None,
    ) -> Person:
        if not name.strip():
            raise ValueError("person name must not be blank")
        person = Person(
            id=person_id or uuid4().hex,
            name=name.strip(),
            photos=tuple(photos),
            gender=gender,
        )
        if person.id in self._people:
            raise ValueError(f"person id {person.id!r} already exists")
        self._people[person.id] = person
        logger.info("person_added", person_id=person.id)
        return person

    def get(self, person_id: str) -> Person | None:
        return self._people.get(person_id)

    def all(self) -> list[Person]:
        return list(self._people.values())

    def snapshot(self) -> tuple[Person, ...]:
        """Point-in-time view handed to the engine."""
        return tuple(self._people.values())

    def search(self, query: str) -> list[Person]:
        """Case-insensitive substring match on name; blank query returns everyone."""
        needle = query.strip().lower()
        if not needle:
            return self.all()
        return [p for p in self._people.values() if needle in p.name.lower()]

    def _require(self, person_id: str, command: str) -> Person:
        person = self._people.get(person_id)
        if person is None:
            raise UnknownPersonError(person_id, command)
        return person

    # ─────────────────────────────────────────
    # Relationships
    # ─────────────────────────────────────────

    def add_relationship(
        self,
        source_id: str,
        rel_type: RelationshipType | str,
        target_id: str | None = None,
        new_person_name: str | None = None,
    ) -> Person:
        """Declare ``source <rel_type> target`` and, where unambiguous, its reverse.

        Either ``target_id`` or ``new_person_name`` must be given; a new name
        creates the target first.

        Returns:
            The (possibly new) target person, as stored after the command
        """
        rel_type = RelationshipType(rel_type)
        source = self._require(source_id, "add_relationship")

        if target_id is not None:
            target = self._require(target_id, "add_relationship")
        elif new_person_name:
            target = self.add_person(new_person_name)
        else:
            raise ValueError("add_relationship needs target_id or new_person_name")

        if target.id == source.id:
            raise ValueError("a person cannot be related to themselves")

        self._declare(source, rel_type, target.id)

        if is_ambiguous_reverse(rel_type, target.gender):
            logger.info(
                "reverse_not_written",
                person_id=source.id,
                relationship_type=rel_type.value,
                target_person_id=target.id,
            )
        else:
            reverse_type = reverse_of(rel_type, target.gender)
            self._declare(self._people[target.id], reverse_type, source.id)

        return self._people[target.id]

    def remove_relationship(self, source_id: str, rel_type: RelationshipType | str, target_id: str) -> None:
        """Remove the declaration and any equivalent reverse on the target."""
        rel_type = RelationshipType(rel_type)
        source = self._require(source_id, "remove_relationship")
        target = self._require(target_id, "remove_relationship")

        self._replace_declarations(
            source,
            [d for d in source.declared_relationships if not (d.type == rel_type and d.target_person_id == target.id)],
        )

        # Any gender gives the same class, so a fixed policy is fine here
        reverse_class = reverse_of(rel_type, target.gender, ParentPolicy.FATHER).equivalence_class
        target = self._people[target.id]
        self._replace_declarations(
            target,
            [
                d
                for d in target.declared_relationships
                if not (d.target_person_id == source.id and d.type.equivalence_class == reverse_class)
            ],
        )
        logger.info(
            "relationship_removed",
            person_id=source.id,
            relationship_type=rel_type.value,
            target_person_id=target.id,
        )

    def _declare(self, owner: Person, rel_type: RelationshipType, target_id: str) -> None:
        for existing in owner.declared_relationships:
            if existing.target_person_id == target_id and existing.type.equivalence_class == rel_type.equivalence_class:
                return
        decl = RelationshipDeclaration(type=rel_type, target_person_id=target_id)
        self._replace_declarations(owner, [*owner.declared_relationships, decl])
        logger.info(
            "relationship_declared",
            person_id=owner.id,
            relationship_type=rel_type.value,
            target_person_id=target_id,
        )

    def _replace_declarations(self, person: Person, declarations: list[RelationshipDeclaration]) -> None:
        self._people[person.id] = person.model_copy(update={"declared_relationships": tuple(declarations)})

    # ─────────────────────────────────────────
    # Family trees
    # ─────────────────────────────────────────

    def create_tree(self, name: str, root_person_id: str, tree_id: str | None = None) -> FamilyTree:
        self._require(root_person_id, "create_tree")
        tree = FamilyTree(id=tree_id or uuid4().hex, name=name.strip(), root_person_id=root_person_id)
        self._trees[tree.id] = tree
        return tree

    def update_tree(self, tree_id: str, name: str | None = None, root_person_id: str | None = None) -> FamilyTree:
        tree = self.get_tree(tree_id)
        updates: dict[str, str] = {}
        if name is not None:
            if not name.strip():
                raise ValueError("family tree name must not be blank")
            updates["name"] = name.strip()
        if root_person_id is not None:
            self._require(root_person_id, "update_tree")
            updates["root_person_id"] = root_person_id
        tree = tree.model_copy(update=updates)
        self._trees[tree_id] = tree
        return tree

    def delete_tree(self, tree_id: str) -> None:
        self.get_tree(tree_id)
        del self._trees[tree_id]

    def get_tree(self, tree_id: str) -> FamilyTree:
        tree = self._trees.get(tree_id)
        if tree is None:
            raise UnknownTreeError(tree_id)
        return tree

    def trees(self) -> list[FamilyTree]:
        return list(self._trees.values())
