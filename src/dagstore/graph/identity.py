from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterable, List, NamedTuple, Optional, Protocol, TypeVar
from uuid import uuid4

T = TypeVar("T")


class Identified(Protocol):
    """
    Minimal capability a value needs to live in a DAGStore.
    """

    @property
    def id(self) -> str: ...

    @property
    def category(self) -> str: ...


class VertexKey(NamedTuple):
    """
    Composite address of a vertex: (category, id).

    Ordering is lexicographic on category first, then id.
    """

    category: str
    id: str


def key_of(vertex: Any) -> VertexKey:
    """
    Composite key of any value satisfying the identity contract.

    Values without a category attribute live in the empty category.
    """
    return VertexKey(
        category=str(getattr(vertex, "category", "") or ""),
        id=str(vertex.id),
    )


def is_valid_vertex(vertex: Any) -> bool:
    if vertex is None:
        return False
    vertex_id = getattr(vertex, "id", None)
    return isinstance(vertex_id, str) and vertex_id != ""


@dataclass(frozen=True)
class Vertex(Generic[T]):
    """
    Generic vertex carrying an opaque payload.
    """

    id: str
    category: str = ""
    attrs: Optional[T] = None

    @property
    def key(self) -> VertexKey:
        return VertexKey(category=self.category, id=self.id)

    @staticmethod
    def create(
        category: str = "",
        attrs: Optional[T] = None,
    ) -> "Vertex[T]":
        return Vertex(
            id=str(uuid4()),
            category=category,
            attrs=attrs,
        )


# ---------------------------------------------------------------------
# Sequence helpers
# ---------------------------------------------------------------------


def sort_vertices(vertices: Iterable[Any]) -> List[Any]:
    return sorted(vertices, key=key_of)


def vertex_ids(vertices: Iterable[Any]) -> List[str]:
    return [v.id for v in vertices]


def vertex_attrs(vertices: Iterable[Any]) -> List[Any]:
    return [getattr(v, "attrs", None) for v in vertices]


def filter_vertices(
    vertices: Iterable[Any],
    predicate: Callable[[Any], bool],
) -> List[Any]:
    return [v for v in vertices if predicate(v)]
