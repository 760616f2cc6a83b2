"""Data models for the family relationship graph."""
from kinship_graph.models.flow import (
    Anchor,
    EdgeKind,
    FlowEdge,
    FlowGraph,
    FlowNode,
    NodeFlags,
    PersonRef,
    Position,
)
from kinship_graph.models.person import (
    FamilyTree,
    Person,
    RelationshipDeclaration,
    ResolvedRelationship,
)
from kinship_graph.models.relationships import (
    CHILD_TYPES,
    PARENT_TYPES,
    SIBLING_TYPES,
    EquivalenceClass,
    Gender,
    RelationshipType,
    is_ambiguous_reverse,
    reverse_of,
)
from kinship_graph.models.tree import FamilyNode

__all__ = [
    # Relationship types
    "RelationshipType",
    "EquivalenceClass",
    "Gender",
    "PARENT_TYPES",
    "CHILD_TYPES",
    "SIBLING_TYPES",
    "reverse_of",
    "is_ambiguous_reverse",
    # Store records
    "Person",
    "RelationshipDeclaration",
    "ResolvedRelationship",
    "FamilyTree",
    # Traversal
    "FamilyNode",
    # Output graph
    "FlowGraph",
    "FlowNode",
    "FlowEdge",
    "NodeFlags",
    "PersonRef",
    "Position",
    "EdgeKind",
    "Anchor",
]
