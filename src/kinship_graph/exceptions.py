from __future__ import annotations

from dataclasses import dataclass


class KinshipGraphError(Exception):
    """Base class for errors raised by store commands."""


@dataclass
class UnknownPersonError(KinshipGraphError):
    """Raised when a command references a person id the store does not hold."""

    person_id: str
    command: str = "lookup"

    def __str__(self) -> str:
        return f"{self.command}: unknown person id {self.person_id!r}"


@dataclass
class UnknownTreeError(KinshipGraphError):
    """Raised when a command references a family tree id the store does not hold."""

    tree_id: str

    def __str__(self) -> str:
        return f"unknown family tree id {self.tree_id!r}"
