"""Export a computed FlowGraph.

Supported formats:
- JSON: the generic node/edge payload from ``FlowGraph.to_dict()``
- Mermaid: ``flowchart TD`` markup for GitHub/GitLab
"""
from __future__ import annotations

import json
from pathlib import Path

from kinship_graph.models.flow import EdgeKind, FlowGraph


def to_mermaid(graph: FlowGraph) -> str:
    lines = ["flowchart TD"]
    for node in graph.nodes:
        lines.append(f"  {_node_id(node.id)}[\"{_escape(node.person.name)}\"]")

    for edge in graph.edges:
        source = _node_id(edge.source_id)
        target = _node_id(edge.target_id)
        label = _escape(edge.label)
        if edge.kind in (EdgeKind.SPOUSE, EdgeKind.SIBLING):
            lines.append(f"  {source} ---|{label}| {target}")
        else:
            lines.append(f"  {source} -->|{label}| {target}")
    return "\n".join(lines)


def export_mermaid(graph: FlowGraph, out_file: Path) -> Path:
    out_file.parent.mkdir(parents=True, exist_ok=True)
    out_file.write_text(to_mermaid(graph), encoding="utf-8")
    return out_file


def export_json(graph: FlowGraph, out_file: Path) -> Path:
    out_file.parent.mkdir(parents=True, exist_ok=True)
    out_file.write_text(json.dumps(graph.to_dict(), indent=2), encoding="utf-8")
    return out_file


EXPORT_FORMATS = {
    "json": export_json,
    "mermaid": export_mermaid,
}


def _node_id(person_id: str) -> str:
    # Generate a mermaid-safe identifier
    return "N_" + "".join(ch if ch.isalnum() else "_" for ch in person_id)[:60]


def _escape(text: str) -> str:
    return text.replace('"', "#quot;").replace("|", "#124;")
