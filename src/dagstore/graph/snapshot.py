from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Tuple

from dagstore.graph.errors import SnapshotImportError
from dagstore.graph.identity import Vertex, VertexKey, key_of


@dataclass(frozen=True)
class VertexRecord:
    """
    Declared vertex in a snapshot: identity plus opaque payload.
    """

    id: str
    category: str = ""
    attrs: Any = None

    @property
    def key(self) -> VertexKey:
        return VertexKey(category=self.category, id=self.id)

    @staticmethod
    def from_vertex(vertex: Any) -> "VertexRecord":
        key = key_of(vertex)
        return VertexRecord(
            id=key.id,
            category=key.category,
            attrs=getattr(vertex, "attrs", None),
        )

    def to_vertex(self) -> Vertex[Any]:
        return Vertex(id=self.id, category=self.category, attrs=self.attrs)


@dataclass(frozen=True)
class DAGSnapshot:
    """
    Canonical, round-trippable form of a DAGStore.

    vertices is ordered by composite key; edges maps a source key to
    {target key: weight}. Vertices with no outgoing edges have no entry
    in edges.
    """

    vertices: Tuple[VertexRecord, ...] = ()
    edges: Mapping[VertexKey, Mapping[VertexKey, int]] = field(default_factory=dict)

    @property
    def edge_count(self) -> int:
        return sum(len(targets) for targets in self.edges.values())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "vertices": [
                {"id": r.id, "category": r.category, "attrs": r.attrs}
                for r in self.vertices
            ],
            "edges": [
                {
                    "source": {"category": source[0], "id": source[1]},
                    "target": {"category": target[0], "id": target[1]},
                    "weight": weight,
                }
                for source, targets in self.edges.items()
                for target, weight in targets.items()
            ],
        }

    @staticmethod
    def from_dict(payload: Mapping[str, Any]) -> "DAGSnapshot":
        """
        Inverse of to_dict.

        Raises:
            SnapshotImportError: a vertex or edge row is missing a field
                or is not a mapping
        """
        try:
            vertices = tuple(
                VertexRecord(
                    id=str(v["id"]),
                    category=str(v.get("category", "") or ""),
                    attrs=v.get("attrs"),
                )
                for v in payload.get("vertices", [])
            )

            edges: Dict[VertexKey, Dict[VertexKey, int]] = {}
            for row in payload.get("edges", []):
                source = _endpoint(row["source"])
                target = _endpoint(row["target"])
                edges.setdefault(source, {})[target] = row["weight"]
        except (KeyError, TypeError, AttributeError) as exc:
            raise SnapshotImportError(f"malformed snapshot payload: {exc!r}") from exc

        return DAGSnapshot(vertices=vertices, edges=edges)


def _endpoint(ref: Mapping[str, Any]) -> VertexKey:
    return VertexKey(
        category=str(ref.get("category", "") or ""),
        id=str(ref["id"]),
    )
