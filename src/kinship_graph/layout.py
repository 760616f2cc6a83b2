"""Deterministic 2-D layout of a FamilyNode tree.

Placement works in ranks (generations). Parents sit one rank above their
child, spouses beside their partner on the same rank, children one rank
below the couple's midpoint, siblings stepped to the right. Every new node
is pushed right until it clears all nodes already on its rank.

A person is materialized at most once; reaching them again through another
branch only adds an edge. One edge is kept per unordered pair of people.
Edge colors come from the golden-angle hue sequence over creation order,
so identical trees always produce identical graphs.
"""
from __future__ import annotations

from kinship_graph.config import LayoutConfig
from kinship_graph.logging import get_logger
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
from kinship_graph.models.relationships import RelationshipType
from kinship_graph.models.tree import FamilyNode

logger = get_logger(__name__)

_ANCHORS: dict[EdgeKind, tuple[Anchor, Anchor]] = {
    EdgeKind.PARENT: (Anchor.BOTTOM, Anchor.TOP),
    EdgeKind.CHILD: (Anchor.BOTTOM, Anchor.TOP),
    EdgeKind.SPOUSE: (Anchor.RIGHT, Anchor.LEFT),
    EdgeKind.SIBLING: (Anchor.RIGHT, Anchor.LEFT),
}


def spread_offsets(count: int) -> list[float]:
    """Symmetric horizontal offsets, in units of spacing, for ``count`` items.

    Odd counts put the first item on the center and alternate outward
    (0, -1, +1, -2, +2, ...); even counts straddle the center in pairs
    (-0.5, +0.5, -1.5, +1.5, ...).
    """
    offsets: list[float] = [0.0] if count % 2 else []
    step = 1.0 if count % 2 else 0.5
    while len(offsets) < count:
        offsets.extend([-step, step])
        step += 1.0
    return offsets[:count]


def edge_color(index: int, golden_angle: float = 137.508) -> str:
    hue = (index * golden_angle) % 360
    return f"hsl({hue:.1f}, 70%, 50%)"


def edge_label(rel_type: RelationshipType | None) -> str:
    return rel_type.label if rel_type is not None else "Relative"


class LayoutEngine:
    """Assigns positions and edges to a FamilyNode tree.

    One instance can lay out many trees; all per-pass state is reset by
    ``layout``.
    """

    def __init__(self, config: LayoutConfig | None = None) -> None:
        self.config = config or LayoutConfig()
        self._reset()

    def _reset(self) -> None:
        self._positions: dict[str, Position] = {}
        self._nodes: list[FlowNode] = []
        self._edges: list[FlowEdge] = []
        self._pairs: set[frozenset[str]] = set()

    def layout(self, root: FamilyNode | None) -> FlowGraph:
        """Lay out ``root`` and everything reachable from it.

        Returns an empty graph when ``root`` is None.
        """
        self._reset()
        if root is None:
            return FlowGraph()

        cfg = self.config
        position = self._place(root, cfg.start_x, cfg.start_y, is_root=True)
        self._layout_node(root, position, partner_id=None)

        graph = FlowGraph(root_id=root.id, nodes=tuple(self._nodes), edges=tuple(self._edges))
        logger.debug("layout_done", root_id=root.id, nodes=len(graph.nodes), edges=len(graph.edges))
        return graph

    # ─────────────────────────────────────────
    # Placement
    # ─────────────────────────────────────────

    def _layout_node(self, node: FamilyNode, position: Position, partner_id: str | None) -> None:
        cfg = self.config

        count = len(node.parents)
        for i, parent in enumerate(node.parents):
            x = position.x + (i - (count - 1) / 2) * cfg.sibling_spacing
            parent_pos = self._place(parent, x, position.y - cfg.rank_spacing)
            self._connect(parent.id, node.id, parent.relationship_type, EdgeKind.PARENT)
            self._layout_node(parent, parent_pos, partner_id=None)

        if node.spouse is not None:
            spouse = node.spouse
            already_placed = spouse.id in self._positions
            spouse_pos = self._place(spouse, position.x + cfg.spouse_spacing, position.y)
            self._connect(node.id, spouse.id, spouse.relationship_type, EdgeKind.SPOUSE)
            if already_placed:
                logger.debug("spouse_reused", person_id=spouse.id)
            self._layout_node(spouse, spouse_pos, partner_id=node.id)
            partner_id = spouse.id

        center_x, base_y = position.x, position.y
        partner_pos = self._positions.get(partner_id) if partner_id else None
        if partner_pos is not None:
            center_x = (position.x + partner_pos.x) / 2
            base_y = max(position.y, partner_pos.y)

        for child, offset in zip(node.children, spread_offsets(len(node.children))):
            child_pos = self._place(child, center_x + offset * cfg.sibling_spacing, base_y + cfg.rank_spacing)
            self._connect(node.id, child.id, child.relationship_type, EdgeKind.CHILD)
            self._layout_node(child, child_pos, partner_id=None)

        for i, sibling in enumerate(node.siblings):
            sibling_pos = self._place(sibling, position.x + (i + 1) * cfg.sibling_spacing, position.y)
            self._connect(node.id, sibling.id, sibling.relationship_type, EdgeKind.SIBLING)
            self._layout_node(sibling, sibling_pos, partner_id=None)

    def _place(self, node: FamilyNode, x: float, y: float, is_root: bool = False) -> Position:
        """Materialize ``node`` at the first collision-free x, or reuse its position."""
        existing = self._positions.get(node.id)
        if existing is not None:
            return existing

        position = Position(x=self._clear_x(x, y), y=y)
        self._positions[node.id] = position
        self._nodes.append(
            FlowNode(
                id=node.id,
                position=position,
                person=PersonRef(
                    id=node.id,
                    name=node.name,
                    photo=node.photos[0] if node.photos else None,
                    gender=node.gender,
                ),
                flags=NodeFlags(is_root=is_root),
            )
        )
        return position

    def _clear_x(self, x: float, y: float) -> float:
        """Shift ``x`` right until it clears every placed node on rank ``y``.

        Each shift jumps just past one blocking node, and x only grows, so
        every placed node can block at most once.
        """
        cfg = self.config
        min_distance = cfg.min_distance
        moved = True
        while moved:
            moved = False
            for other in self._positions.values():
                if abs(other.y - y) < cfg.rank_tolerance and abs(other.x - x) < min_distance:
                    x = other.x + min_distance
                    moved = True
        return x

    # ─────────────────────────────────────────
    # Edges
    # ─────────────────────────────────────────

    def _connect(
        self,
        source_id: str,
        target_id: str,
        rel_type: RelationshipType | None,
        kind: EdgeKind,
    ) -> None:
        pair = frozenset((source_id, target_id))
        if pair in self._pairs:
            return
        self._pairs.add(pair)

        source_anchor, target_anchor = _ANCHORS[kind]
        self._edges.append(
            FlowEdge(
                id=f"{source_id}->{target_id}",
                source_id=source_id,
                target_id=target_id,
                source_anchor=source_anchor,
                target_anchor=target_anchor,
                label=edge_label(rel_type),
                kind=kind,
                color=edge_color(len(self._edges), self.config.golden_angle),
                width=self.config.edge_width,
            )
        )


def layout(root: FamilyNode | None, config: LayoutConfig | None = None) -> FlowGraph:
    """Functional shortcut for ``LayoutEngine(config).layout(root)``."""
    return LayoutEngine(config).layout(root)
