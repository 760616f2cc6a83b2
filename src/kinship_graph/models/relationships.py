"""Canonical relationship types and their reverse mapping.

A declaration ``A <type> B`` reads "A is the <type> B", e.g. ``A father_of B``.
The reverse is the type B holds back towards A.
"""
from __future__ import annotations

from enum import Enum
from typing import Literal

from kinship_graph.config import ParentPolicy

Gender = Literal["male", "female"]


class RelationshipType(str, Enum):
    """Closed set of relationship types a declaration may carry."""
    FATHER_OF = "father_of"
    MOTHER_OF = "mother_of"
    BROTHER_OF = "brother_of"
    SISTER_OF = "sister_of"
    SPOUSE_OF = "spouse_of"
    CHILD_OF = "child_of"
    SON_OF = "son_of"
    DAUGHTER_OF = "daughter_of"
    UNCLE_OF = "uncle_of"
    AUNT_OF = "aunt_of"
    COUSIN_OF = "cousin_of"
    GRANDFATHER_OF = "grandfather_of"
    GRANDMOTHER_OF = "grandmother_of"
    GRANDCHILD_OF = "grandchild_of"
    NEPHEW_OF = "nephew_of"
    NIECE_OF = "niece_of"

    @property
    def label(self) -> str:
        """Human-readable edge label, e.g. ``daughter_of`` -> ``Daughter``."""
        return self.value.removesuffix("_of").capitalize()

    @property
    def equivalence_class(self) -> "EquivalenceClass":
        return _CLASS_OF[self]

    @classmethod
    def parse(cls, value: str) -> "RelationshipType | None":
        """Lenient lookup used by adapters; returns None for unknown strings."""
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


class EquivalenceClass(str, Enum):
    """Groups of types that are interchangeable for deduplication."""
    PARENT = "parent"
    CHILD = "child"
    SIBLING = "sibling"
    SPOUSE = "spouse"
    UNCLE_AUNT = "uncle_aunt"
    NEPHEW_NIECE = "nephew_niece"
    GRANDPARENT = "grandparent"
    GRANDCHILD = "grandchild"
    COUSIN = "cousin"


R = RelationshipType

_CLASS_OF: dict[RelationshipType, EquivalenceClass] = {
    R.FATHER_OF: EquivalenceClass.PARENT,
    R.MOTHER_OF: EquivalenceClass.PARENT,
    R.CHILD_OF: EquivalenceClass.CHILD,
    R.SON_OF: EquivalenceClass.CHILD,
    R.DAUGHTER_OF: EquivalenceClass.CHILD,
    R.BROTHER_OF: EquivalenceClass.SIBLING,
    R.SISTER_OF: EquivalenceClass.SIBLING,
    R.SPOUSE_OF: EquivalenceClass.SPOUSE,
    R.UNCLE_OF: EquivalenceClass.UNCLE_AUNT,
    R.AUNT_OF: EquivalenceClass.UNCLE_AUNT,
    R.NEPHEW_OF: EquivalenceClass.NEPHEW_NIECE,
    R.NIECE_OF: EquivalenceClass.NEPHEW_NIECE,
    R.GRANDFATHER_OF: EquivalenceClass.GRANDPARENT,
    R.GRANDMOTHER_OF: EquivalenceClass.GRANDPARENT,
    R.GRANDCHILD_OF: EquivalenceClass.GRANDCHILD,
    R.COUSIN_OF: EquivalenceClass.COUSIN,
}

PARENT_TYPES = frozenset({R.FATHER_OF, R.MOTHER_OF})
CHILD_TYPES = frozenset({R.CHILD_OF, R.SON_OF, R.DAUGHTER_OF})
SIBLING_TYPES = frozenset({R.BROTHER_OF, R.SISTER_OF})

# (male, female, unknown) reverse held by the target of a declaration.
# None in the unknown slot means "ambiguous, ask the parent policy".
_REVERSE: dict[RelationshipType, tuple[RelationshipType, RelationshipType, RelationshipType | None]] = {
    R.FATHER_OF: (R.SON_OF, R.DAUGHTER_OF, R.CHILD_OF),
    R.MOTHER_OF: (R.SON_OF, R.DAUGHTER_OF, R.CHILD_OF),
    R.CHILD_OF: (R.FATHER_OF, R.MOTHER_OF, None),
    R.SON_OF: (R.FATHER_OF, R.MOTHER_OF, None),
    R.DAUGHTER_OF: (R.FATHER_OF, R.MOTHER_OF, None),
    R.BROTHER_OF: (R.BROTHER_OF, R.SISTER_OF, R.BROTHER_OF),
    R.SISTER_OF: (R.BROTHER_OF, R.SISTER_OF, R.SISTER_OF),
    R.SPOUSE_OF: (R.SPOUSE_OF, R.SPOUSE_OF, R.SPOUSE_OF),
    R.COUSIN_OF: (R.COUSIN_OF, R.COUSIN_OF, R.COUSIN_OF),
    R.UNCLE_OF: (R.NEPHEW_OF, R.NIECE_OF, R.NEPHEW_OF),
    R.AUNT_OF: (R.NEPHEW_OF, R.NIECE_OF, R.NIECE_OF),
    R.NEPHEW_OF: (R.UNCLE_OF, R.AUNT_OF, R.UNCLE_OF),
    R.NIECE_OF: (R.UNCLE_OF, R.AUNT_OF, R.AUNT_OF),
    R.GRANDFATHER_OF: (R.GRANDCHILD_OF, R.GRANDCHILD_OF, R.GRANDCHILD_OF),
    R.GRANDMOTHER_OF: (R.GRANDCHILD_OF, R.GRANDCHILD_OF, R.GRANDCHILD_OF),
    R.GRANDCHILD_OF: (R.GRANDFATHER_OF, R.GRANDMOTHER_OF, None),
}


def is_ambiguous_reverse(rel_type: RelationshipType, owner_gender: Gender | None) -> bool:
    """True when reversing needs the parent policy (no gender to decide by)."""
    return owner_gender is None and _REVERSE[rel_type][2] is None


def reverse_of(
    rel_type: RelationshipType,
    owner_gender: Gender | None = None,
    parent_policy: ParentPolicy = ParentPolicy.FATHER,
) -> RelationshipType | None:
    """Type the target of ``rel_type`` holds back towards the declarer.

    Args:
        rel_type: The declared type, read as "declarer is <rel_type> target"
        owner_gender: Gender of the target, who will own the reverse
        parent_policy: Fallback for child/grandchild types when the gender is unknown

    Returns:
        The reverse type, or None when the policy is SKIP for an ambiguous case
    """
    male, female, unknown = _REVERSE[rel_type]
    if owner_gender == "male":
        return male
    if owner_gender == "female":
        return female
    if unknown is not None:
        return unknown

    if parent_policy == ParentPolicy.SKIP:
        return None
    return male if parent_policy == ParentPolicy.FATHER else female
