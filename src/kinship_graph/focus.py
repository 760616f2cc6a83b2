"""Focus-driven highlighting of a laid-out graph.

A pure mapping from (graph, active person) to styled graph. The caller owns
hover/selection state; nothing here is incremental.
"""
from __future__ import annotations

from collections.abc import Sequence

from kinship_graph.config import FocusConfig, LayoutConfig
from kinship_graph.models.flow import FlowEdge, FlowGraph, FlowNode, NodeFlags


def resolve_active_id(hovered_id: str | None, selected_id: str | None) -> str | None:
    """Hover takes precedence over click-selection."""
    return hovered_id if hovered_id is not None else selected_id


def apply_focus(
    nodes: Sequence[FlowNode],
    edges: Sequence[FlowEdge],
    active_id: str | None,
    config: FocusConfig | None = None,
    base_edge_width: float | None = None,
) -> tuple[list[FlowNode], list[FlowEdge]]:
    """Classify every node and edge relative to ``active_id``.

    Args:
        nodes: Laid-out nodes
        edges: Laid-out edges
        active_id: Focused person, or None to return everything to neutral
        config: Highlight width and dimmed opacity
        base_edge_width: Width of an unfocused edge (defaults to the layout setting)

    Returns:
        New node and edge lists; the inputs are not modified
    """
    config = config or FocusConfig()
    base_width = base_edge_width if base_edge_width is not None else LayoutConfig().edge_width

    if active_id is None:
        return (
            [_restyle_node(n, selected=False, highlighted=False, dimmed=False) for n in nodes],
            [e.model_copy(update={"is_highlighted": False, "opacity": 1.0, "width": base_width}) for e in edges],
        )

    touched: set[str] = {active_id}
    new_edges: list[FlowEdge] = []
    for edge in edges:
        if edge.touches(active_id):
            touched.update((edge.source_id, edge.target_id))
            new_edges.append(
                edge.model_copy(
                    update={"is_highlighted": True, "opacity": 1.0, "width": config.highlight_edge_width}
                )
            )
        else:
            new_edges.append(
                edge.model_copy(
                    update={"is_highlighted": False, "opacity": config.dimmed_edge_opacity, "width": base_width}
                )
            )

    new_nodes = [
        _restyle_node(
            node,
            selected=node.id == active_id,
            highlighted=node.id in touched and node.id != active_id,
            dimmed=node.id not in touched,
        )
        for node in nodes
    ]
    return new_nodes, new_edges


def focus_graph(
    graph: FlowGraph,
    active_id: str | None,
    config: FocusConfig | None = None,
    base_edge_width: float | None = None,
) -> FlowGraph:
    """``apply_focus`` over a whole FlowGraph."""
    nodes, edges = apply_focus(graph.nodes, graph.edges, active_id, config, base_edge_width)
    return graph.model_copy(update={"nodes": tuple(nodes), "edges": tuple(edges)})


def _restyle_node(node: FlowNode, selected: bool, highlighted: bool, dimmed: bool) -> FlowNode:
    flags = NodeFlags(
        is_root=node.flags.is_root,
        is_selected=selected,
        is_highlighted=highlighted,
        is_dimmed=dimmed,
    )
    return node.model_copy(update={"flags": flags})
