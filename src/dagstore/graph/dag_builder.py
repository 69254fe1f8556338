from __future__ import annotations

from typing import Any, Iterable, Optional, Sequence

from dagstore.config.settings import DAGConfig
from dagstore.graph.dag_store import DAGStore


class DAGBuilder:
    """
    Constructs a DAG from bulk edge inputs.

    Every edge goes through DAGStore.add_edge; the first violation
    propagates and leaves earlier edges in place.
    """

    def __init__(self, store: Optional[DAGStore] = None, *, config: Optional[DAGConfig] = None) -> None:
        self.store = store if store is not None else DAGStore(config=config)

    def add_edges(self, edges: Iterable[Sequence[Any]]) -> "DAGBuilder":
        """
        Add (start, end) or (start, end, weight) tuples.
        """
        for edge in edges:
            if len(edge) == 2:
                start, end = edge
                weight = 0
            else:
                start, end, weight = edge
            self.store.add_edge(start, end, weight)
        return self

    def add_path(self, vertices: Sequence[Any], weight: int = 0) -> "DAGBuilder":
        for start, end in zip(vertices, vertices[1:]):
            self.store.add_edge(start, end, weight)
        return self

    def build(self) -> DAGStore:
        return self.store
