"""Adapter between plain-text notes and the typed person model.

Notes are ``{"id": ..., "content": ...}`` records whose first content line
is the display name, followed by line-prefixed tags:

    Jane Doe
    meta::person::
    meta::gender::female
    meta::photo::https://example.org/jane.jpg
    meta::relationship::mother_of::<person note id>

A saved family tree is a note carrying ``meta::family-tree::<root id>``.
"""
from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from kinship_graph.logging import get_logger
from kinship_graph.models.person import FamilyTree, Person, RelationshipDeclaration
from kinship_graph.models.relationships import RelationshipType

logger = get_logger(__name__)

PERSON_TAG = "meta::person::"
FAMILY_TREE_TAG = "meta::family-tree::"
RELATIONSHIP_TAG = "meta::relationship::"
PHOTO_TAG = "meta::photo::"
GENDER_TAG = "meta::gender::"


def is_person_note(content: str) -> bool:
    return PERSON_TAG in content


def is_family_tree_note(content: str) -> bool:
    return FAMILY_TREE_TAG in content


def _first_line(content: str) -> str:
    return content.split("\n", 1)[0].strip()


def parse_person_note(note_id: str, content: str) -> Person:
    """Parse a person note. Malformed relationship lines are skipped."""
    lines = content.split("\n")
    relationships: list[RelationshipDeclaration] = []
    photos: list[str] = []
    gender = None

    for line in lines[1:]:
        line = line.strip()
        if line.startswith(RELATIONSHIP_TAG):
            parts = line.split("::")
            if len(parts) < 4 or not parts[3].strip():
                logger.warning("malformed_relationship_line", note_id=note_id, line=line)
                continue
            rel_type = RelationshipType.parse(parts[2])
            if rel_type is None:
                logger.warning("unknown_relationship_type", note_id=note_id, relationship_type=parts[2])
                continue
            relationships.append(RelationshipDeclaration(type=rel_type, target_person_id=parts[3].strip()))
        elif line.startswith(PHOTO_TAG):
            photo = line[len(PHOTO_TAG):].strip()
            if photo:
                photos.append(photo)
        elif line.startswith(GENDER_TAG):
            value = line[len(GENDER_TAG):].strip().lower()
            if value in ("male", "female"):
                gender = value

    return Person(
        id=note_id,
        name=_first_line(content),
        photos=tuple(photos),
        gender=gender,
        declared_relationships=tuple(relationships),
    )


def parse_family_tree_note(note_id: str, content: str) -> FamilyTree | None:
    """Parse a family tree note; returns None when it names no root."""
    for line in content.split("\n"):
        line = line.strip()
        if line.startswith(FAMILY_TREE_TAG):
            root_id = line[len(FAMILY_TREE_TAG):].strip()
            if not root_id:
                break
            return FamilyTree(id=note_id, name=_first_line(content) or "Family Tree", root_person_id=root_id)
    logger.warning("family_tree_without_root", note_id=note_id)
    return None


def render_person_note(person: Person) -> str:
    lines = [person.name, PERSON_TAG]
    if person.gender:
        lines.append(f"{GENDER_TAG}{person.gender}")
    lines.extend(f"{PHOTO_TAG}{photo}" for photo in person.photos)
    lines.extend(
        f"{RELATIONSHIP_TAG}{decl.type.value}::{decl.target_person_id}"
        for decl in person.declared_relationships
    )
    return "\n".join(lines)


def render_family_tree_note(tree: FamilyTree) -> str:
    return f"{tree.name}\n{FAMILY_TREE_TAG}{tree.root_person_id}"


def load_notes(notes: Iterable[Any]) -> tuple[list[Person], list[FamilyTree]]:
    """Split a notebook into people and family trees.

    Notes that are not ``{id, content}`` objects are skipped and logged; notes
    without person or family tree tags are ignored.
    """
    people: list[Person] = []
    trees: list[FamilyTree] = []
    for position, note in enumerate(notes):
        if not isinstance(note, Mapping):
            logger.warning("note_not_an_object", position=position, value_type=type(note).__name__)
            continue
        note_id = str(note.get("id", "")).strip()
        content = note.get("content") or ""
        if not isinstance(content, str):
            logger.warning("note_content_not_text", note_id=note_id)
            continue
        if not note_id:
            logger.warning("note_without_id")
            continue
        if is_family_tree_note(content):
            tree = parse_family_tree_note(note_id, content)
            if tree is not None:
                trees.append(tree)
        elif is_person_note(content):
            people.append(parse_person_note(note_id, content))
    return people, trees
