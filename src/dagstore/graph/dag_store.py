from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence

import networkx as nx

from dagstore.config.settings import DAGConfig
from dagstore.graph import dag_derive, dag_traversal
from dagstore.graph.dag_traversal import PathResult
from dagstore.graph.errors import (
    CycleDetectedError,
    DAGError,
    InvalidVertexError,
    SelfLoopError,
    SnapshotImportError,
)
from dagstore.graph.identity import (
    Identified,
    VertexKey,
    filter_vertices,
    is_valid_vertex,
    key_of,
    sort_vertices,
    vertex_attrs,
    vertex_ids,
)
from dagstore.graph.snapshot import DAGSnapshot, VertexRecord

logger = logging.getLogger("dagstore.mutation")


@dataclass(frozen=True)
class EdgeRecord:
    """
    Directed, weighted edge between two composite keys.
    """

    start: VertexKey
    end: VertexKey
    weight: int


class DAGStore:
    """
    Authoritative in-memory DAG of identity-bearing vertices.

    Nodes live in a single networkx arena keyed by VertexKey; each node
    holds the caller's vertex under the "vertex" attribute and edges
    carry an int "weight". Every add_edge keeps the graph acyclic.
    """

    def __init__(self, config: Optional[DAGConfig] = None) -> None:
        self._graph = nx.DiGraph()
        self.config = config or DAGConfig()

    def spawn(self) -> "DAGStore":
        """
        Empty store sharing this store's configuration.
        """
        return self.__class__(config=self.config)

    # -------------------- Nodes --------------------

    def __len__(self) -> int:
        return self._graph.number_of_nodes()

    def __contains__(self, vertex: Any) -> bool:
        return self._lookup(vertex) is not None

    def __iter__(self) -> Iterator[Any]:
        return iter(self.vertices())

    def node_count(self) -> int:
        return self._graph.number_of_nodes()

    def edge_count(self) -> int:
        return self._graph.number_of_edges()

    def has_vertex(self, vertex: Any) -> bool:
        return self._lookup(vertex) is not None

    def get_vertex(self, vertex_id: str, category: str = "") -> Optional[Any]:
        """
        Look a vertex up by id.

        An empty category searches every category and returns the first
        match in key order.
        """
        if category:
            key = VertexKey(category=category, id=vertex_id)
            return self._vertex(key) if key in self._graph else None

        for key in sorted(self._graph.nodes):
            if key.id == vertex_id:
                return self._vertex(key)
        return None

    def vertices(self, category: str = "") -> List[Any]:
        everything = sort_vertices(data["vertex"] for _, data in self._graph.nodes(data=True))
        if not category:
            return everything
        return filter_vertices(everything, lambda v: key_of(v).category == category)

    def vertex_ids(self, category: str = "") -> List[str]:
        return vertex_ids(self.vertices(category))

    def attrs(self) -> List[Any]:
        return vertex_attrs(self.vertices())

    # -------------------- Edges --------------------

    def add_edge(
        self,
        start: Optional[Identified],
        end: Optional[Identified],
        weight: int = 0,
    ) -> None:
        """
        Connect start -> end with the given weight.

        Missing endpoints are created. Re-adding an existing edge
        overwrites its weight.

        Raises:
            InvalidVertexError: an endpoint is None or has an empty id
            SelfLoopError: both endpoints share a composite key
            CycleDetectedError: end can already reach start
            TypeError: weight is not an int under strict weights
        """
        if not is_valid_vertex(start):
            raise InvalidVertexError("starting", start)
        if not is_valid_vertex(end):
            raise InvalidVertexError("ending", end)

        start_key = key_of(start)
        end_key = key_of(end)
        if start_key == end_key:
            raise SelfLoopError(start_key)

        weight = self._coerce_weight(weight)

        if start_key in self._graph and end_key in self._graph:
            if self._reaches(end_key, start_key):
                logger.debug(
                    "rejected edge %s -> %s: would close a cycle",
                    start_key,
                    end_key,
                )
                raise CycleDetectedError(
                    f"cyclic graph would come into being: {end_key} already reaches {start_key}",
                    start=start_key,
                    end=end_key,
                )

        self._adopt(start_key, start)
        self._adopt(end_key, end)
        self._graph.add_edge(start_key, end_key, weight=weight)
        logger.debug("added edge %s -> %s (weight=%s)", start_key, end_key, weight)

    def remove_edge(self, start: Any, end: Any) -> None:
        start_key = self._lookup(start)
        end_key = self._lookup(end)
        if start_key is None or end_key is None:
            return
        if self._graph.has_edge(start_key, end_key):
            self._graph.remove_edge(start_key, end_key)
            logger.debug("removed edge %s -> %s", start_key, end_key)

    def has_edge(self, start: Any, end: Any) -> bool:
        start_key = self._lookup(start)
        end_key = self._lookup(end)
        if start_key is None or end_key is None:
            return False
        return self._graph.has_edge(start_key, end_key)

    def get_weight(self, start: Any, end: Any) -> Optional[int]:
        if not self.has_edge(start, end):
            return None
        return self._graph.edges[key_of(start), key_of(end)]["weight"]

    def edges(self) -> Iterator[EdgeRecord]:
        for start_key in sorted(self._graph.nodes):
            successors = self._graph.succ[start_key]
            for end_key in sorted(successors):
                yield EdgeRecord(
                    start=start_key,
                    end=end_key,
                    weight=successors[end_key]["weight"],
                )

    # -------------------- Queries --------------------

    def starting_vertices(self) -> List[Any]:
        return [
            self._vertex(key)
            for key in sorted(self._graph.nodes)
            if self._graph.in_degree(key) == 0
        ]

    def ending_vertices(self) -> List[Any]:
        return [
            self._vertex(key)
            for key in sorted(self._graph.nodes)
            if self._graph.out_degree(key) == 0 and self._graph.in_degree(key) > 0
        ]

    def to_vertices(self, vertex: Any) -> List[Any]:
        key = self._lookup(vertex)
        if key is None:
            return []
        return [self._vertex(k) for k in sorted(self._graph.successors(key))]

    def from_vertices(self, vertex: Any) -> List[Any]:
        key = self._lookup(vertex)
        if key is None:
            return []
        return [self._vertex(k) for k in sorted(self._graph.predecessors(key))]

    def is_reachable(self, start: Any, end: Any) -> bool:
        start_key = self._lookup(start)
        end_key = self._lookup(end)
        if start_key is None or end_key is None:
            return False
        return self._reaches(start_key, end_key)

    # -------------------- Derived graphs --------------------

    def reach_dag(self, start: Any) -> "DAGStore":
        return dag_derive.reach_dag(self, start)

    def close_dag(self, start: Any, end: Any) -> "DAGStore":
        return dag_derive.close_dag(self, start, end)

    def reduce_dag(self, start: Any, end: Any) -> "DAGStore":
        return dag_derive.reduce_dag(self, start, end)

    def reverse(self) -> "DAGStore":
        return dag_derive.reverse_dag(self)

    # -------------------- Traversal --------------------

    def iterate(
        self,
        start: Any,
        initial: Optional[Sequence[Any]],
        combine: Callable[[Any, int, List[Any]], Sequence[Any]],
    ) -> List[Any]:
        return dag_traversal.iterate(self, start, initial, combine)

    def find_paths(self, start: Any, end: Any) -> List[PathResult]:
        return dag_traversal.find_paths(self, start, end)

    def shortest(self, start: Any, end: Any, by_weight: bool = False) -> List[Any]:
        return dag_traversal.shortest(self, start, end, by_weight=by_weight)

    def longest(self, start: Any, end: Any, by_weight: bool = False) -> List[Any]:
        return dag_traversal.longest(self, start, end, by_weight=by_weight)

    # -------------------- Structure --------------------

    def equal(self, other: "DAGStore") -> bool:
        if not isinstance(other, DAGStore):
            return False
        if self._graph.number_of_nodes() != other._graph.number_of_nodes():
            return False

        for key in self._graph.nodes:
            if key not in other._graph:
                return False
            if key_of(self._vertex(key)) != key_of(other._vertex(key)):
                return False
            if _weights(self._graph.succ[key]) != _weights(other._graph.succ[key]):
                return False
            if _weights(self._graph.pred[key]) != _weights(other._graph.pred[key]):
                return False
        return True

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DAGStore):
            return NotImplemented
        return self.equal(other)

    __hash__ = None  # type: ignore[assignment]

    def clone(self) -> "DAGStore":
        g = self.spawn()
        g._graph = self._graph.copy()
        return g

    def merge(self, other: "DAGStore") -> "DAGStore":
        """
        Union other's vertices and edges into this store.

        Weights from other win on collision. Acyclicity is re-checked
        after each merged node; on failure the store keeps everything
        merged so far. Clone first if atomicity matters.
        """
        merge_logger = logging.getLogger("dagstore.merge")

        for key in sorted(other._graph.nodes):
            self._adopt(key, other._vertex(key))

            for nbr, data in other._graph.succ[key].items():
                self._adopt(nbr, other._vertex(nbr))
                self._graph.add_edge(key, nbr, weight=data["weight"])

            for nbr, data in other._graph.pred[key].items():
                self._adopt(nbr, other._vertex(nbr))
                self._graph.add_edge(nbr, key, weight=data["weight"])

            if any(self._reaches(nxt, key) for nxt in self._graph.successors(key)):
                merge_logger.warning(
                    "merge stopped at %s: cycle detected, store left partially merged",
                    key,
                )
                raise CycleDetectedError(
                    f"merging would create a cycle through {key}",
                    start=key,
                    end=key,
                )

        merge_logger.debug(
            "merged %s nodes; store now has %s nodes, %s edges",
            other.node_count(),
            self.node_count(),
            self.edge_count(),
        )
        return self

    # -------------------- Snapshots --------------------

    def export_snapshot(self) -> DAGSnapshot:
        keys = sorted(self._graph.nodes)
        return DAGSnapshot(
            vertices=tuple(VertexRecord.from_vertex(self._vertex(k)) for k in keys),
            edges={
                key: _weights(self._graph.succ[key])
                for key in keys
                if self._graph.out_degree(key) > 0
            },
        )

    @classmethod
    def from_snapshot(
        cls,
        snapshot: DAGSnapshot,
        *,
        factory: Optional[Callable[[VertexRecord], Any]] = None,
        config: Optional[DAGConfig] = None,
    ) -> "DAGStore":
        """
        Rebuild a store from its canonical form.

        factory turns each VertexRecord into the caller's vertex value
        (default: a generic Vertex). No store is returned on failure.

        Raises:
            SnapshotImportError: duplicate or invalid vertex, edge to an
                undeclared vertex, or an edge that would close a cycle
        """
        snapshot_logger = logging.getLogger("dagstore.snapshot")
        build = factory or VertexRecord.to_vertex
        store = cls(config=config)

        declared: Dict[VertexKey, Any] = {}
        for record in snapshot.vertices:
            key = record.key
            if not record.id:
                raise SnapshotImportError(f"vertex with empty id in category {record.category!r}")
            if key in declared:
                raise SnapshotImportError(f"duplicate vertex key: {key}")
            vertex = build(record)
            if not is_valid_vertex(vertex) or key_of(vertex) != key:
                raise SnapshotImportError(f"factory returned a vertex not matching {key}")
            declared[key] = vertex
            store._adopt(key, vertex)

        for source, targets in snapshot.edges.items():
            for target, weight in targets.items():
                for endpoint in (source, target):
                    if endpoint not in declared:
                        raise SnapshotImportError(f"edge {source} -> {target} references undeclared vertex {endpoint}")
                try:
                    store.add_edge(declared[source], declared[target], weight)
                except (DAGError, TypeError, ValueError) as exc:
                    snapshot_logger.warning("snapshot import rejected edge %s -> %s: %s", source, target, exc)
                    raise SnapshotImportError(f"invalid edge {source} -> {target}: {exc}") from exc

        snapshot_logger.debug(
            "imported snapshot: %s vertices, %s edges",
            store.node_count(),
            store.edge_count(),
        )
        return store

    # -------------------- Internals --------------------

    def _lookup(self, vertex: Any) -> Optional[VertexKey]:
        if not is_valid_vertex(vertex):
            return None
        key = key_of(vertex)
        return key if key in self._graph else None

    def _vertex(self, key: VertexKey) -> Any:
        return self._graph.nodes[key]["vertex"]

    def _adopt(self, key: VertexKey, vertex: Any) -> None:
        if key not in self._graph:
            self._graph.add_node(key, vertex=vertex)

    def _reaches(self, source: VertexKey, target: VertexKey) -> bool:
        """
        True if target is reachable from source via one or more edges.
        """
        if source == target:
            return False
        return nx.has_path(self._graph, source, target)

    def _coerce_weight(self, weight: Any) -> int:
        if self.config.mutation.strict_weights:
            if isinstance(weight, bool) or not isinstance(weight, int):
                raise TypeError(f"edge weight must be an int, got {type(weight).__name__}")
            return weight
        return int(weight)


def _weights(adjacency: Any) -> Dict[VertexKey, int]:
    return {key: data["weight"] for key, data in sorted(adjacency.items())}
