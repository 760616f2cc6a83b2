"""Cycle-safe family tree construction from a resolved relationship index.

Traversal is depth-first with a branch-scoped visited set: each recursive
call receives its own copy seeded with the current branch's ancestry, so a
person can legitimately appear in two branches (a grandchild reached through
two children) while a true cycle is cut where it closes. A hard depth
ceiling bounds pathological chains.
"""
from __future__ import annotations

from kinship_graph.config import BuilderConfig, SpousePolicy
from kinship_graph.logging import get_logger
from kinship_graph.models.relationships import (
    CHILD_TYPES,
    PARENT_TYPES,
    SIBLING_TYPES,
    RelationshipType,
)
from kinship_graph.models.tree import FamilyNode
from kinship_graph.resolver import RelationshipIndex

logger = get_logger(__name__)

# (person id, relationship type used to reach them)
_Ref = tuple[str, RelationshipType]


class TreeBuilder:
    """Builds a nested FamilyNode tree rooted at one person.

    Example:
        >>> index = resolve(people)
        >>> root = TreeBuilder(index).build("alice")
        >>> [child.name for child in root.children]
    """

    def __init__(self, index: RelationshipIndex, config: BuilderConfig | None = None) -> None:
        self.index = index
        self.config = config or BuilderConfig()

        # parent id -> {child id: child-type relationship the child holds}, in index order
        self._child_claims: dict[str, dict[str, RelationshipType]] = {}
        for other_id in index:
            for rel in index.relationships_of(other_id):
                if rel.type in CHILD_TYPES:
                    self._child_claims.setdefault(rel.person_id, {}).setdefault(other_id, rel.type)
        self._classified: dict[str, tuple[list[_Ref], list[_Ref]]] = {}

    def build(self, root_id: str) -> FamilyNode | None:
        """Return the tree for ``root_id``, or None when the person does not exist."""
        if self.index.person(root_id) is None:
            logger.warning("root_not_found", root_id=root_id)
            return None
        return self._build(root_id, frozenset(), 0, None)

    def _build(
        self,
        person_id: str,
        visited: frozenset[str],
        depth: int,
        rel_type: RelationshipType | None,
    ) -> FamilyNode | None:
        if person_id in visited:
            logger.debug("cycle_cut", person_id=person_id, depth=depth)
            return None
        if depth > self.config.max_depth:
            logger.debug("depth_exceeded", person_id=person_id, depth=depth)
            return None

        person = self.index.person(person_id)
        if person is None:
            return None

        node = FamilyNode(
            id=person.id,
            name=person.name,
            photos=person.photos,
            gender=person.gender,
            relationship_type=rel_type,
        )
        branch = visited | {person_id}

        parent_refs, child_refs = self._classify(person_id)

        for child_id, child_type in child_refs:
            child = self._build(child_id, branch, depth + 1, child_type)
            if child is not None and all(c.id != child.id for c in node.children):
                node.children.append(child)

        for parent_id, parent_type in parent_refs:
            parent = self._build(parent_id, branch, depth + 1, parent_type)
            if parent is not None:
                node.parents.append(parent)

        for rel in self.index.relationships_of(person_id):
            if rel.type in SIBLING_TYPES:
                sibling = self._build(rel.person_id, branch, depth + 1, rel.type)
                if sibling is not None and all(s.id != sibling.id for s in node.siblings):
                    node.siblings.append(sibling)

        node.spouse = self._build_spouse(person_id, branch, depth)
        return node

    def _classify(self, person_id: str) -> tuple[list[_Ref], list[_Ref]]:
        """Split a person's vertical relationships into parents and children.

        A pair is never both: the person's own father_of/mother_of edges
        claim their targets as children first, child_of-type edges then name
        the parents among the rest, and finally anyone declaring a child-type
        edge at this person becomes a child unless already a parent.

        A child reached through an inferred father_of/mother_of edge carries
        the child-type relationship the child itself holds, so its edge is
        labelled by what was declared. Results depend only on the index and
        are cached per person.
        """
        cached = self._classified.get(person_id)
        if cached is not None:
            return cached

        rels = self.index.relationships_of(person_id)
        claims = self._child_claims.get(person_id, {})

        children: list[_Ref] = []
        child_ids: set[str] = set()
        for rel in rels:
            if rel.type in PARENT_TYPES and rel.person_id not in child_ids:
                rel_type = claims.get(rel.person_id, rel.type) if rel.inferred else rel.type
                children.append((rel.person_id, rel_type))
                child_ids.add(rel.person_id)

        parents: list[_Ref] = []
        parent_ids: set[str] = set()
        for rel in rels:
            if rel.type in CHILD_TYPES and rel.person_id not in child_ids | parent_ids:
                parents.append((rel.person_id, rel.type))
                parent_ids.add(rel.person_id)

        for other_id, rel_type in claims.items():
            if other_id == person_id or other_id in child_ids or other_id in parent_ids:
                continue
            children.append((other_id, rel_type))
            child_ids.add(other_id)

        self._classified[person_id] = (parents, children)
        return parents, children

    def _build_spouse(self, person_id: str, branch: frozenset[str], depth: int) -> FamilyNode | None:
        spouses = [r for r in self.index.relationships_of(person_id) if r.type == RelationshipType.SPOUSE_OF]
        if self.config.spouse_policy == SpousePolicy.LAST:
            spouses.reverse()
        if len(spouses) > 1:
            logger.debug("multiple_spouses", person_id=person_id, count=len(spouses))

        for rel in spouses:
            spouse = self._build(rel.person_id, branch, depth + 1, rel.type)
            if spouse is not None:
                return spouse
        return None


def build(root_id: str, index: RelationshipIndex, config: BuilderConfig | None = None) -> FamilyNode | None:
    """Functional shortcut for ``TreeBuilder(index, config).build(root_id)``."""
    return TreeBuilder(index, config).build(root_id)
