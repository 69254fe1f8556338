from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, List, Optional, Sequence, Tuple

import networkx as nx

from dagstore.graph.identity import VertexKey

if TYPE_CHECKING:
    from dagstore.graph.dag_store import DAGStore

logger = logging.getLogger("dagstore.traversal")

Combine = Callable[[Any, int, List[Any]], Sequence[Any]]


@dataclass(frozen=True)
class PathResult:
    """
    One directed path, endpoints included, with its total edge weight.
    """

    weight: int
    keys: Tuple[VertexKey, ...]

    @property
    def hops(self) -> int:
        return len(self.keys) - 1


# ------------------------------------------------------------------
# Fold traversal
# ------------------------------------------------------------------


def iterate(
    store: "DAGStore",
    start: Any,
    initial: Optional[Sequence[Any]],
    combine: Combine,
) -> List[Any]:
    """
    Depth-first, pre-order fold over every path leaving start.

    combine(vertex, incoming_weight, acc) returns the accumulator handed
    to each successor; each call gets its own copy, so siblings never see
    each other's results. Leaf accumulators are concatenated in
    visitation order. Successors are visited in ascending key order and
    the root's incoming weight is 0.
    """
    start_key = store._lookup(start)
    if start_key is None:
        return []

    g = store._graph
    results: List[Any] = []
    stack: List[Tuple[VertexKey, int, Sequence[Any]]] = [
        (start_key, 0, list(initial or [])),
    ]

    while stack:
        node, weight, acc = stack.pop()
        folded = combine(store._vertex(node), weight, list(acc))

        successors = g.succ[node]
        if not successors:
            results.extend(folded)
            continue

        # reversed push keeps ascending pop order
        for nxt in sorted(successors, reverse=True):
            stack.append((nxt, successors[nxt]["weight"], folded))

    return results


# ------------------------------------------------------------------
# Path enumeration
# ------------------------------------------------------------------


def find_paths(store: "DAGStore", start: Any, end: Any) -> List[PathResult]:
    """
    Every directed path from start to end, in depth-first order with
    successors taken in ascending key order.

    Enumeration stops early once config.traversal.max_paths is reached
    (0 means unbounded).
    """
    start_key = store._lookup(start)
    end_key = store._lookup(end)
    if start_key is None or end_key is None or start_key == end_key:
        return []

    g = store._graph
    if not nx.has_path(g, start_key, end_key):
        return []

    can_finish = nx.ancestors(g, end_key)
    can_finish.add(end_key)
    limit = store.config.traversal.max_paths

    paths: List[PathResult] = []
    stack: List[Tuple[VertexKey, int, Tuple[VertexKey, ...]]] = [
        (start_key, 0, (start_key,)),
    ]

    while stack:
        node, weight, trail = stack.pop()
        if node == end_key:
            paths.append(PathResult(weight=weight, keys=trail))
            if limit and len(paths) >= limit:
                logger.warning(
                    "path enumeration %s -> %s truncated at max_paths=%s",
                    start_key,
                    end_key,
                    limit,
                )
                break
            continue

        successors = g.succ[node]
        for nxt in sorted(successors, reverse=True):
            if nxt in can_finish:
                stack.append((nxt, weight + successors[nxt]["weight"], trail + (nxt,)))

    logger.debug("found %s paths %s -> %s", len(paths), start_key, end_key)
    return paths


def shortest(store: "DAGStore", start: Any, end: Any, *, by_weight: bool = False) -> List[Any]:
    """
    Vertices of the path with the fewest hops (or lowest weight sum).

    The first such path in enumeration order wins ties.
    """
    paths = find_paths(store, start, end)
    if not paths:
        return []
    best = min(paths, key=_measure(by_weight))
    return [store._vertex(k) for k in best.keys]


def longest(store: "DAGStore", start: Any, end: Any, *, by_weight: bool = False) -> List[Any]:
    paths = find_paths(store, start, end)
    if not paths:
        return []
    best = max(paths, key=_measure(by_weight))
    return [store._vertex(k) for k in best.keys]


def _measure(by_weight: bool) -> Callable[[PathResult], int]:
    if by_weight:
        return lambda p: p.weight
    return lambda p: p.hops
