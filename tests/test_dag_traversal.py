from dagstore.config.settings import DAGConfig, TraversalConfig
from dagstore.graph.dag_store import DAGStore

from conftest import DIAMOND_EDGES, V, WEIGHTED_EDGES, build


def _ids(vertices):
    return [v.id for v in vertices]


def test_shortest_and_longest_by_hops(weighted):
    assert weighted.shortest(V("a"), V("e")) == [V("a"), V("e")]
    assert weighted.longest(V("a"), V("e")) == [V("a"), V("x"), V("b"), V("d"), V("e")]


def test_shortest_and_longest_by_weight(weighted):
    weighted.add_edge(V("a"), V("c"), 3)
    weighted.add_edge(V("c"), V("e"), 3)
    assert weighted.shortest(V("a"), V("e"), by_weight=True) == [V("a"), V("c"), V("e")]

    weighted.add_edge(V("c"), V("d"), 100)
    assert weighted.longest(V("a"), V("e"), by_weight=True) == [V("a"), V("c"), V("d"), V("e")]


def test_paths_without_a_route_are_empty(weighted):
    assert weighted.shortest(V("a"), V("a")) == []
    assert weighted.shortest(V("e"), V("a")) == []
    assert weighted.longest(None, V("e")) == []
    assert weighted.longest(V("a"), V("missing"), by_weight=True) == []
    assert weighted.find_paths(V("y"), V("e")) == []


def test_find_paths_enumeration_order(weighted):
    paths = weighted.find_paths(V("a"), V("e"))

    assert [[k.id for k in p.keys] for p in paths] == [
        ["a", "c", "d", "e"],
        ["a", "c", "e"],
        ["a", "d", "e"],
        ["a", "e"],
        ["a", "x", "b", "d", "e"],
    ]
    assert [p.weight for p in paths] == [30, 20, 20, 10, 40]
    assert [p.hops for p in paths] == [3, 2, 2, 1, 4]


def test_ties_go_to_the_first_enumerated_path():
    store = build([("a", "b", 1), ("a", "c", 1), ("b", "d", 1), ("c", "d", 1)])

    assert _ids(store.shortest(V("a"), V("d"))) == ["a", "b", "d"]
    assert _ids(store.longest(V("a"), V("d"))) == ["a", "b", "d"]
    assert _ids(store.shortest(V("a"), V("d"), by_weight=True)) == ["a", "b", "d"]


def test_max_paths_truncates_enumeration():
    config = DAGConfig(traversal=TraversalConfig(max_paths=2))
    store = DAGStore(config=config)
    for start, end, weight in WEIGHTED_EDGES:
        store.add_edge(V(start), V(end), weight)

    assert len(store.find_paths(V("a"), V("e"))) == 2
    assert _ids(store.longest(V("a"), V("e"))) == ["a", "c", "d", "e"]


def test_iterate_folds_every_path():
    store = build([(start, end, 1) for start, end, _ in DIAMOND_EDGES])
    total = 0

    def combine(vertex, weight, acc):
        nonlocal total
        total += weight
        return acc + [vertex.attrs]

    attrs = store.close_dag(V("a"), V("e")).iterate(V("a"), None, combine)

    assert total == 10
    assert sorted(attrs) == ["A"] * 5 + ["B"] + ["C"] * 2 + ["D"] * 3 + ["E"] * 5


def test_iterate_visits_successors_in_key_order():
    store = build([("a", "c", 0), ("a", "b", 0), ("b", "d", 0)])

    result = store.iterate(V("a"), ["start"], lambda v, w, acc: acc + [v.id])

    assert result == ["start", "a", "b", "d", "start", "a", "c"]


def test_iterate_isolates_sibling_accumulators():
    store = build([("a", "b", 2), ("a", "c", 5)])

    def combine(vertex, weight, acc):
        acc.append((vertex.id, weight))
        return acc

    result = store.iterate(V("a"), None, combine)

    assert result == [("a", 0), ("b", 2), ("a", 0), ("c", 5)]


def test_iterate_unknown_start_is_empty(diamond):
    assert diamond.iterate(V("missing"), None, lambda v, w, acc: acc) == []
    assert diamond.iterate(None, None, lambda v, w, acc: acc) == []
