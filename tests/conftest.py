"""Pytest fixtures for kinship-graph tests."""
from __future__ import annotations

import pytest

from kinship_graph.config import EngineConfig, LayoutConfig
from kinship_graph.models import Person, RelationshipDeclaration


def make_person(person_id: str, *relationships: tuple[str, str], name: str | None = None, gender=None, photos=()):
    """Person declaring ``relationships`` given as (type, target_id) pairs."""
    return Person(
        id=person_id,
        name=name or person_id,
        gender=gender,
        photos=tuple(photos),
        declared_relationships=tuple(
            RelationshipDeclaration(type=rel_type, target_person_id=target)
            for rel_type, target in relationships
        ),
    )


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep KINSHIP_* overrides from the developer's shell out of the tests."""
    import os

    for key in list(os.environ):
        if key.startswith("KINSHIP_"):
            monkeypatch.delenv(key)


@pytest.fixture
def scenario_people() -> list[Person]:
    """Al is married to Bo and is Cy's father."""
    return [
        make_person("A", ("spouse_of", "B"), ("father_of", "C"), name="Al"),
        make_person("B", name="Bo"),
        make_person("C", name="Cy"),
    ]


@pytest.fixture
def extended_family() -> list[Person]:
    """Three generations with a married couple, shared children and in-laws.

    G + H are married; G is father of P1 and P2; P1 is married to W;
    P1 and W share children K1 and K2; P2 has child K3 and a brother link to P1.
    """
    return [
        make_person("G", ("spouse_of", "H"), ("father_of", "P1"), ("father_of", "P2"), gender="male"),
        make_person("H", ("mother_of", "P1"), ("mother_of", "P2"), gender="female"),
        make_person("P1", ("spouse_of", "W"), ("father_of", "K1"), ("father_of", "K2"), gender="male"),
        make_person("W", ("mother_of", "K1"), ("mother_of", "K2"), gender="female"),
        make_person("P2", ("brother_of", "P1"), ("father_of", "K3"), gender="male"),
        make_person("K1", gender="female"),
        make_person("K2", gender="male"),
        make_person("K3"),
    ]


@pytest.fixture
def layout_config() -> LayoutConfig:
    return LayoutConfig()


@pytest.fixture
def engine_config() -> EngineConfig:
    return EngineConfig()
