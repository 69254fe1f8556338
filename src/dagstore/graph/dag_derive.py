"""
Derived-graph algorithms.

Each function returns a new, independent DAGStore built from a source
store. Vertex values are shared with the source; adjacency never is.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import networkx as nx

if TYPE_CHECKING:
    from dagstore.graph.dag_store import DAGStore

logger = logging.getLogger("dagstore.derive")


def reach_dag(store: "DAGStore", start: Any) -> "DAGStore":
    """
    Sub-DAG of every vertex and edge reachable from start.

    A start with no outgoing edges yields an empty store.
    """
    derived = store.spawn()
    start_key = store._lookup(start)
    if start_key is None:
        return derived

    reachable = nx.descendants(store._graph, start_key)
    if not reachable:
        return derived

    reachable.add(start_key)
    derived._graph = store._graph.subgraph(reachable).copy()
    return derived


def close_dag(store: "DAGStore", start: Any, end: Any) -> "DAGStore":
    """
    Sub-DAG of every vertex and edge lying on at least one start -> end path.
    """
    derived = store.spawn()
    start_key = store._lookup(start)
    end_key = store._lookup(end)
    if start_key is None or end_key is None or start_key == end_key:
        return derived

    downstream = nx.descendants(store._graph, start_key)
    if end_key not in downstream:
        return derived

    # u downstream of start and v upstream of end puts any u -> v edge on a path
    upstream = nx.ancestors(store._graph, end_key)
    on_path = (downstream & upstream) | {start_key, end_key}
    derived._graph = store._graph.subgraph(on_path).copy()
    return derived


def reduce_dag(store: "DAGStore", start: Any, end: Any) -> "DAGStore":
    """
    Transitive reduction of close_dag(start, end).

    Walks backward from end. Each incoming edge is removed and restored
    only if its target stops being reachable from its source.
    """
    derived = close_dag(store, start, end)
    if len(derived) == 0:
        return derived

    g = derived._graph
    end_key = store._lookup(end)
    pending = [end_key]
    seen = {end_key}
    dropped = 0

    while pending:
        node = pending.pop()
        for pred in sorted(g.predecessors(node)):
            weight = g[pred][node]["weight"]
            g.remove_edge(pred, node)
            if nx.has_path(g, pred, node):
                dropped += 1
            else:
                g.add_edge(pred, node, weight=weight)

            if pred not in seen:
                seen.add(pred)
                pending.append(pred)

    logger.debug("reduce_dag dropped %s redundant edges", dropped)
    return derived


def reverse_dag(store: "DAGStore") -> "DAGStore":
    derived = store.spawn()
    reversed_graph = nx.DiGraph()
    reversed_graph.add_nodes_from(store._graph.nodes(data=True))
    reversed_graph.add_edges_from(
        (v, u, {"weight": data["weight"]})
        for u, v, data in store._graph.edges(data=True)
    )
    derived._graph = reversed_graph
    return derived
