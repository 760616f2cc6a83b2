"""Pydantic records supplied by the relationship store.

Inputs are immutable snapshots: a resolution pass never mutates them.
"""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from kinship_graph.models.relationships import EquivalenceClass, Gender, RelationshipType


class RelationshipDeclaration(BaseModel):
    """One-directional relationship as authored: "owner is <type> target"."""
    model_config = ConfigDict(frozen=True)

    type: RelationshipType
    target_person_id: str


class Person(BaseModel):
    """A person with the relationships they declare."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    photos: tuple[str, ...] = ()
    gender: Gender | None = None
    declared_relationships: tuple[RelationshipDeclaration, ...] = ()

    @field_validator("id")
    @classmethod
    def id_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("person id must not be blank")
        return v

    @property
    def primary_photo(self) -> str | None:
        return self.photos[0] if self.photos else None


class ResolvedRelationship(BaseModel):
    """Relationship in a person's de-duplicated, bidirectional view."""
    model_config = ConfigDict(frozen=True)

    type: RelationshipType
    person_id: str
    inferred: bool = False

    @property
    def key(self) -> tuple[str, EquivalenceClass]:
        """Deduplication key: (other person, equivalence class)."""
        return (self.person_id, self.type.equivalence_class)


class FamilyTree(BaseModel):
    """A named, saved view of the graph rooted at one person."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str = Field(min_length=1)
    root_person_id: str
