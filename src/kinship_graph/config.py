from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum


def _f(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, default))
    except ValueError:
        return default


def _i(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, default))
    except ValueError:
        return default


def _s(name: str, default: str) -> str:
    return os.getenv(name, default).strip().lower() or default


class ParentPolicy(str, Enum):
    """What reverse a child-type declaration gets when the parent's gender is unknown."""

    FATHER = "father"
    MOTHER = "mother"
    SKIP = "skip"


class SpousePolicy(str, Enum):
    """Which declared spouse a node keeps when several are declared."""

    FIRST = "first"
    LAST = "last"


def _policy(enum_cls, name: str, default):
    try:
        return enum_cls(_s(name, default.value))
    except ValueError:
        return default


@dataclass(frozen=True)
class ResolverConfig:
    parent_policy: ParentPolicy = field(
        default_factory=lambda: _policy(ParentPolicy, "KINSHIP_PARENT_POLICY", ParentPolicy.FATHER)
    )


@dataclass(frozen=True)
class BuilderConfig:
    max_depth: int = field(default_factory=lambda: _i("KINSHIP_MAX_DEPTH", 10))
    spouse_policy: SpousePolicy = field(
        default_factory=lambda: _policy(SpousePolicy, "KINSHIP_SPOUSE_POLICY", SpousePolicy.FIRST)
    )


@dataclass(frozen=True)
class LayoutConfig:
    node_width: float = field(default_factory=lambda: _f("KINSHIP_NODE_WIDTH", 180.0))
    gutter: float = field(default_factory=lambda: _f("KINSHIP_GUTTER", 60.0))
    # Tighter than node_width + gutter, never below node_width + margin
    spouse_spacing: float = field(default_factory=lambda: _f("KINSHIP_SPOUSE_SPACING", 200.0))
    rank_spacing: float = field(default_factory=lambda: _f("KINSHIP_RANK_SPACING", 150.0))
    margin: float = field(default_factory=lambda: _f("KINSHIP_MARGIN", 20.0))
    rank_tolerance: float = field(default_factory=lambda: _f("KINSHIP_RANK_TOLERANCE", 10.0))
    start_x: float = field(default_factory=lambda: _f("KINSHIP_START_X", 0.0))
    start_y: float = field(default_factory=lambda: _f("KINSHIP_START_Y", 0.0))
    edge_width: float = field(default_factory=lambda: _f("KINSHIP_EDGE_WIDTH", 2.0))
    golden_angle: float = 137.508

    @property
    def sibling_spacing(self) -> float:
        return self.node_width + self.gutter

    @property
    def min_distance(self) -> float:
        return self.node_width + self.margin


@dataclass(frozen=True)
class FocusConfig:
    highlight_edge_width: float = field(default_factory=lambda: _f("KINSHIP_HIGHLIGHT_EDGE_WIDTH", 3.0))
    dimmed_edge_opacity: float = field(default_factory=lambda: _f("KINSHIP_DIMMED_EDGE_OPACITY", 0.2))


@dataclass(frozen=True)
class EngineConfig:
    resolver: ResolverConfig = field(default_factory=ResolverConfig)
    builder: BuilderConfig = field(default_factory=BuilderConfig)
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    focus: FocusConfig = field(default_factory=FocusConfig)
    log_level: str = field(default_factory=lambda: os.getenv("KINSHIP_LOG_LEVEL", "INFO").upper())
