"""Renderer-agnostic output graph.

``FlowGraph.to_dict()`` produces the node/edge shape common graph
visualization libraries accept (React Flow, Cytoscape via a thin mapping):
nodes carry ``position`` and a ``data`` payload, edges carry handles,
a label and style hints.
"""
from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field


class EdgeKind(str, Enum):
    """Structural role of an edge in the drawn tree."""
    PARENT = "parent"  # parent above -> node
    CHILD = "child"  # node -> child below
    SPOUSE = "spouse"
    SIBLING = "sibling"


class Anchor(str, Enum):
    TOP = "top"
    BOTTOM = "bottom"
    LEFT = "left"
    RIGHT = "right"


class Position(BaseModel):
    model_config = ConfigDict(frozen=True)

    x: float
    y: float


class NodeFlags(BaseModel):
    model_config = ConfigDict(frozen=True)

    is_root: bool = False
    is_selected: bool = False
    is_highlighted: bool = False
    is_dimmed: bool = False


class PersonRef(BaseModel):
    """Payload a renderer needs to draw a person card."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    photo: str | None = None
    gender: str | None = None


class FlowNode(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    position: Position
    person: PersonRef
    flags: NodeFlags = Field(default_factory=NodeFlags)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "position": {"x": self.position.x, "y": self.position.y},
            "data": {
                "label": self.person.name,
                "photo": self.person.photo,
                "gender": self.person.gender,
                "isRoot": self.flags.is_root,
                "isSelected": self.flags.is_selected,
                "isHighlighted": self.flags.is_highlighted,
                "isDimmed": self.flags.is_dimmed,
            },
        }


class FlowEdge(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    source_id: str
    target_id: str
    source_anchor: Anchor
    target_anchor: Anchor
    label: str
    kind: EdgeKind
    color: str
    width: float = 2.0
    opacity: float = 1.0
    is_highlighted: bool = False

    def touches(self, person_id: str) -> bool:
        return person_id in (self.source_id, self.target_id)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "source": self.source_id,
            "target": self.target_id,
            "sourceHandle": self.source_anchor.value,
            "targetHandle": self.target_anchor.value,
            "label": self.label,
            "data": {"kind": self.kind.value, "isHighlighted": self.is_highlighted},
            "style": {"stroke": self.color, "strokeWidth": self.width, "opacity": self.opacity},
        }


class FlowGraph(BaseModel):
    """Complete output of one layout pass."""
    model_config = ConfigDict(frozen=True)

    root_id: str | None = None
    nodes: tuple[FlowNode, ...] = ()
    edges: tuple[FlowEdge, ...] = ()

    @computed_field
    @property
    def is_empty(self) -> bool:
        return not self.nodes

    def node(self, person_id: str) -> FlowNode | None:
        for node in self.nodes:
            if node.id == person_id:
                return node
        return None

    def edge(self, source_id: str, target_id: str) -> FlowEdge | None:
        """Edge between two people in either direction."""
        for edge in self.edges:
            if {edge.source_id, edge.target_id} == {source_id, target_id}:
                return edge
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "rootId": self.root_id,
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
        }
