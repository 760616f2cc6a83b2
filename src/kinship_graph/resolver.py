"""Relationship resolution.

Turns one-sided, possibly duplicated declarations into a per-person,
bidirectional view:

- every declaration that points at a known person is kept verbatim
- its reverse is inferred on the target unless the target already holds
  a relationship of the same equivalence class back to the declarer
- direct declarations always win over inferred ones for the same
  (other person, equivalence class) key, regardless of input order

Dangling references are dropped and logged; nothing here raises.
"""
from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping

from kinship_graph.config import ResolverConfig
from kinship_graph.logging import get_logger
from kinship_graph.models.person import Person, ResolvedRelationship
from kinship_graph.models.relationships import EquivalenceClass, reverse_of

logger = get_logger(__name__)


class RelationshipIndex(Mapping[str, tuple[ResolvedRelationship, ...]]):
    """Resolved relationships keyed by person id, plus the person records.

    Acts as a read-only mapping ``person_id -> ResolvedRelationship tuple``.
    """

    def __init__(
        self,
        people: dict[str, Person],
        relationships: dict[str, tuple[ResolvedRelationship, ...]],
    ) -> None:
        self._people = people
        self._relationships = relationships

    def __getitem__(self, person_id: str) -> tuple[ResolvedRelationship, ...]:
        return self._relationships[person_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._relationships)

    def __len__(self) -> int:
        return len(self._relationships)

    def person(self, person_id: str) -> Person | None:
        return self._people.get(person_id)

    def relationships_of(self, person_id: str) -> tuple[ResolvedRelationship, ...]:
        return self._relationships.get(person_id, ())


def resolve(people: Iterable[Person], config: ResolverConfig | None = None) -> RelationshipIndex:
    """Build the bidirectional relationship index for a snapshot of people.

    Args:
        people: Snapshot from the store; order is preserved in the output
        config: Resolver settings (ambiguous-parent policy)

    Returns:
        RelationshipIndex with one entry per person
    """
    config = config or ResolverConfig()

    by_id: dict[str, Person] = {}
    for person in people:
        if person.id in by_id:
            logger.warning("duplicate_person_id", person_id=person.id)
            continue
        by_id[person.id] = person

    resolved: dict[str, list[ResolvedRelationship]] = {pid: [] for pid in by_id}
    keys: dict[str, set[tuple[str, EquivalenceClass]]] = {pid: set() for pid in by_id}

    # Pass 1: direct declarations, so they always beat inferred reverses
    for person in by_id.values():
        for decl in person.declared_relationships:
            target_id = decl.target_person_id
            if target_id not in by_id or target_id == person.id:
                logger.warning(
                    "dangling_relationship",
                    person_id=person.id,
                    relationship_type=decl.type.value,
                    target_person_id=target_id,
                )
                continue

            rel = ResolvedRelationship(type=decl.type, person_id=target_id)
            if rel.key in keys[person.id]:
                logger.debug("duplicate_declaration", person_id=person.id, target_person_id=target_id)
                continue
            keys[person.id].add(rel.key)
            resolved[person.id].append(rel)

    # Pass 2: infer reverses on the targets
    for person in by_id.values():
        for rel in list(resolved[person.id]):
            if rel.inferred:
                continue
            target = by_id[rel.person_id]
            reverse_type = reverse_of(rel.type, target.gender, config.parent_policy)
            if reverse_type is None:
                logger.debug(
                    "reverse_skipped",
                    person_id=person.id,
                    relationship_type=rel.type.value,
                    target_person_id=target.id,
                )
                continue

            inferred = ResolvedRelationship(type=reverse_type, person_id=person.id, inferred=True)
            if inferred.key in keys[target.id]:
                continue
            keys[target.id].add(inferred.key)
            resolved[target.id].append(inferred)

    return RelationshipIndex(by_id, {pid: tuple(rels) for pid, rels in resolved.items()})
