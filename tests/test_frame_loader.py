import math

import pandas as pd
import pytest

from dagstore.config.settings import DAGConfig, MutationConfig
from dagstore.graph.errors import SnapshotImportError
from dagstore.loaders.frame_loader import (
    EDGE_COLUMNS,
    VERTEX_COLUMNS,
    dag_to_frames,
    load_dag_from_frames,
    load_dag_from_processed,
    save_dag_to_processed,
)

from conftest import V


def test_dag_to_frames_layout(diamond):
    vertices_df, edges_df = dag_to_frames(diamond)

    assert list(vertices_df.columns) == VERTEX_COLUMNS
    assert list(edges_df.columns) == EDGE_COLUMNS
    assert len(vertices_df) == len(diamond)
    assert len(edges_df) == diamond.edge_count()
    assert vertices_df.iloc[0]["id"] == "a"


def test_frames_round_trip(diamond):
    diamond.add_edge(V("q", "other"), V("a"), 9)

    restored = load_dag_from_frames(*dag_to_frames(diamond))

    assert restored == diamond
    assert restored.get_weight(V("q", "other"), V("a")) == 9


def test_frames_reject_undeclared_vertices():
    vertices_df = pd.DataFrame([{"id": "a", "category": "", "attrs": None}])
    edges_df = pd.DataFrame(
        [
            {
                "source_category": "",
                "source_id": "a",
                "target_category": "",
                "target_id": "b",
                "weight": 1,
            }
        ]
    )

    with pytest.raises(SnapshotImportError):
        load_dag_from_frames(vertices_df, edges_df)


_LENIENT = DAGConfig(mutation=MutationConfig(strict_weights=False))


def _single_edge_frames(weight):
    vertices_df = pd.DataFrame(
        [
            {"id": "a", "category": "", "attrs": None},
            {"id": "b", "category": "", "attrs": None},
        ]
    )
    edges_df = pd.DataFrame(
        [
            {
                "source_category": "",
                "source_id": "a",
                "target_category": "",
                "target_id": "b",
                "weight": weight,
            }
        ]
    )
    return vertices_df, edges_df


def test_frames_reject_fractional_weight_under_strict_weights():
    with pytest.raises(SnapshotImportError) as excinfo:
        load_dag_from_frames(*_single_edge_frames(2.7))
    assert isinstance(excinfo.value.__cause__, TypeError)


def test_frames_truncate_fractional_weight_when_lenient():
    store = load_dag_from_frames(*_single_edge_frames(2.7), config=_LENIENT)

    assert store.get_weight(V("a"), V("b")) == 2


def test_frames_accept_integral_float_weight():
    store = load_dag_from_frames(*_single_edge_frames(3.0))

    assert store.get_weight(V("a"), V("b")) == 3
    assert type(store.get_weight(V("a"), V("b"))) is int


@pytest.mark.parametrize("config", [None, _LENIENT])
def test_frames_reject_nan_weight(config):
    with pytest.raises(SnapshotImportError):
        load_dag_from_frames(*_single_edge_frames(math.nan), config=config)


def test_parquet_round_trip(diamond, tmp_path):
    save_dag_to_processed(diamond, tmp_path / "processed")

    restored = load_dag_from_processed(tmp_path / "processed")

    assert restored is not None
    assert restored == diamond
    assert restored.get_vertex("d").attrs == "D"


def test_missing_processed_dir_returns_none(tmp_path):
    assert load_dag_from_processed(tmp_path / "absent") is None
