from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

from kinship_graph.models.relationships import RelationshipType


@dataclass
class FamilyNode:
    """Transient traversal node built fresh for every layout pass.

    ``relationship_type`` is the declaration type used to reach this node
    from its parent in the traversal (None on the root).
    """
    id: str
    name: str
    photos: tuple[str, ...] = ()
    gender: str | None = None
    relationship_type: RelationshipType | None = None
    children: list[FamilyNode] = field(default_factory=list)
    parents: list[FamilyNode] = field(default_factory=list)
    siblings: list[FamilyNode] = field(default_factory=list)
    spouse: FamilyNode | None = None

    def walk(self) -> Iterator[FamilyNode]:
        """Depth-first iteration over this node and everything below it."""
        yield self
        for parent in self.parents:
            yield from parent.walk()
        if self.spouse is not None:
            yield from self.spouse.walk()
        for child in self.children:
            yield from child.walk()
        for sibling in self.siblings:
            yield from sibling.walk()

    @property
    def person_ids(self) -> set[str]:
        return {node.id for node in self.walk()}
