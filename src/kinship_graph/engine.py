"""Pipeline facade: resolve -> build -> layout -> focus.

Every stage is a pure function of its inputs, so the engine recomputes in
full whenever the root, a person or a relationship changes. A caller
swapping in a newer result simply drops the older one.
"""
from __future__ import annotations

import time
from collections.abc import Iterable

from kinship_graph.builder import TreeBuilder
from kinship_graph.config import EngineConfig
from kinship_graph.focus import focus_graph, resolve_active_id
from kinship_graph.layout import LayoutEngine
from kinship_graph.logging import get_logger
from kinship_graph.models.flow import FlowGraph
from kinship_graph.models.person import Person
from kinship_graph.models.tree import FamilyNode
from kinship_graph.resolver import RelationshipIndex, resolve

logger = get_logger(__name__)


class FamilyTreeEngine:
    """Computes a renderable family graph from a snapshot of people.

    Usage:
        engine = FamilyTreeEngine()
        graph = engine.compute(store.snapshot(), root_id="p1", hovered_id="p2")
        payload = graph.to_dict()
    """

    def __init__(self, config: EngineConfig | None = None) -> None:
        self.config = config or EngineConfig()

    def resolve(self, people: Iterable[Person]) -> RelationshipIndex:
        return resolve(people, self.config.resolver)

    def build(self, root_id: str, index: RelationshipIndex) -> FamilyNode | None:
        return TreeBuilder(index, self.config.builder).build(root_id)

    def layout(self, root: FamilyNode | None) -> FlowGraph:
        return LayoutEngine(self.config.layout).layout(root)

    def compute(
        self,
        people: Iterable[Person],
        root_id: str,
        hovered_id: str | None = None,
        selected_id: str | None = None,
    ) -> FlowGraph:
        """Run all four stages for ``root_id``.

        Returns an empty graph when the root does not exist.
        """
        start_time = time.time()

        index = self.resolve(people)
        tree = self.build(root_id, index)
        graph = self.refocus(self.layout(tree), hovered_id, selected_id)

        logger.info(
            "layout_computed",
            root_id=root_id,
            people=len(index),
            nodes=len(graph.nodes),
            edges=len(graph.edges),
            duration_ms=round((time.time() - start_time) * 1000, 3),
        )
        return graph

    def refocus(
        self,
        graph: FlowGraph,
        hovered_id: str | None = None,
        selected_id: str | None = None,
    ) -> FlowGraph:
        """Re-apply focus styling without recomputing the layout."""
        return focus_graph(
            graph,
            resolve_active_id(hovered_id, selected_id),
            self.config.focus,
            base_edge_width=self.config.layout.edge_width,
        )
