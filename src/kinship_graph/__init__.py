"""kinship-graph - family relationship graph resolution and layout.

Resolves one-sided relationship declarations into a bidirectional graph,
builds a cycle-safe tree from a chosen root, and lays it out as a
renderer-agnostic node/edge graph with focus highlighting.
"""

__version__ = "0.1.0"

# Lazy imports so the CLI and adapters stay cheap to import
def __getattr__(name: str):
    if name == "FamilyTreeEngine":
        from kinship_graph.engine import FamilyTreeEngine
        return FamilyTreeEngine
    if name == "PersonStore":
        from kinship_graph.store import PersonStore
        return PersonStore
    if name == "resolve":
        from kinship_graph.resolver import resolve
        return resolve
    if name == "build":
        from kinship_graph.builder import build
        return build
    if name == "apply_focus":
        from kinship_graph.focus import apply_focus
        return apply_focus
    if name == "models":
        from kinship_graph import models
        return models
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
