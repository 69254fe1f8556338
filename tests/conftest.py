from __future__ import annotations

from typing import Iterable, Tuple

import pytest

from dagstore.graph.dag_store import DAGStore
from dagstore.graph.identity import Vertex


def V(vertex_id: str, category: str = "") -> Vertex:
    return Vertex(id=vertex_id, category=category, attrs=vertex_id.upper())


def build(edges: Iterable[Tuple[str, str, int]]) -> DAGStore:
    store = DAGStore()
    for start, end, weight in edges:
        store.add_edge(V(start), V(end), weight)
    return store


DIAMOND_EDGES = [
    ("a", "b", 0),
    ("a", "c", 0),
    ("a", "d", 0),
    ("a", "e", 0),
    ("b", "d", 0),
    ("c", "d", 0),
    ("c", "e", 0),
    ("d", "e", 0),
    ("x", "b", 0),
    ("d", "y", 0),
]

WEIGHTED_EDGES = [
    ("a", "x", 10),
    ("x", "b", 10),
    ("a", "c", 10),
    ("a", "d", 10),
    ("a", "e", 10),
    ("b", "d", 10),
    ("c", "d", 10),
    ("c", "e", 10),
    ("d", "e", 10),
    ("d", "y", 10),
]


@pytest.fixture()
def diamond() -> DAGStore:
    return build(DIAMOND_EDGES)


@pytest.fixture()
def weighted() -> DAGStore:
    return build(WEIGHTED_EDGES)
