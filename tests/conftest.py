"""Shared pytest fixtures and test helpers for genealogy tests."""

from __future__ import annotations

from typing import Any, Callable

import pytest

from genealogy import GenealogySettings, GenealogyStore

Snapshot = dict[Any, tuple[frozenset, tuple]]


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep GENEALOGY_* variables from the host out of every test."""
    for var in ("GENEALOGY_VERBOSE", "GENEALOGY_LOG_JSON", "GENEALOGY_VALIDATE_PAYLOAD_IDS"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def settings() -> GenealogySettings:
    return GenealogySettings()


@pytest.fixture
def store(settings: GenealogySettings) -> GenealogyStore:
    """Store holding only the stem ``S``."""
    return GenealogyStore("S", settings=settings)


@pytest.fixture
def diamond(store: GenealogyStore) -> GenealogyStore:
    """S -> A, S -> B, A -> C, B -> C."""
    store.create("A", ["S"])
    store.create("B", ["S"])
    store.create("C", ["A", "B"])
    return store


def take_snapshot(store: GenealogyStore) -> Snapshot:
    """Every entity with its parents and its ordered children."""
    return {
        entity_id: (
            frozenset(store.parents_of(entity_id)),
            tuple(child.id for child in store.children(entity_id)),
        )
        for entity_id in store
    }


@pytest.fixture
def snapshot() -> Callable[[GenealogyStore], Snapshot]:
    return take_snapshot
