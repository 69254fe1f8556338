from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple
import time
import logging

import pandas as pd

from dagstore.config.settings import DAGConfig
from dagstore.graph.dag_store import DAGStore
from dagstore.graph.identity import VertexKey
from dagstore.graph.snapshot import DAGSnapshot, VertexRecord

VERTEX_COLUMNS = ["id", "category", "attrs"]
EDGE_COLUMNS = [
    "source_category",
    "source_id",
    "target_category",
    "target_id",
    "weight",
]

logger = logging.getLogger("dagstore.load")


def dag_to_frames(store: DAGStore) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """
    Flatten a store into vertex and edge tables.
    """
    snapshot = store.export_snapshot()

    vertices_df = pd.DataFrame(
        [
            {"id": r.id, "category": r.category, "attrs": r.attrs}
            for r in snapshot.vertices
        ],
        columns=VERTEX_COLUMNS,
    )
    edges_df = pd.DataFrame(
        [
            {
                "source_category": source.category,
                "source_id": source.id,
                "target_category": target.category,
                "target_id": target.id,
                "weight": weight,
            }
            for source, targets in snapshot.edges.items()
            for target, weight in targets.items()
        ],
        columns=EDGE_COLUMNS,
    )
    return vertices_df, edges_df


def _text(value: Any) -> str:
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return ""
    return str(value)


def _weight(value: Any) -> Any:
    # numpy scalars and integral floats (pandas upcasts int columns holding
    # NaN) become plain ints; anything else is left for the store to reject.
    if pd.api.types.is_integer(value):
        return int(value)
    if pd.api.types.is_float(value) and float(value).is_integer():
        return int(value)
    return value


def load_dag_from_frames(
    vertices_df: pd.DataFrame,
    edges_df: pd.DataFrame,
    *,
    factory: Optional[Callable[[VertexRecord], Any]] = None,
    config: Optional[DAGConfig] = None,
) -> DAGStore:
    """
    Rebuild a store from vertex and edge tables.

    Rows are validated exactly like a snapshot import. Integral float
    weights (pandas upcasts int columns that hold NaN) are read as ints;
    fractional ones are left to the store's weight policy.

    Raises:
        SnapshotImportError: see DAGStore.from_snapshot
    """
    vertices = tuple(
        VertexRecord(
            id=_text(row["id"]),
            category=_text(row.get("category")),
            attrs=row.get("attrs"),
        )
        for _, row in vertices_df.iterrows()
    )

    edges: Dict[VertexKey, Dict[VertexKey, int]] = {}
    for _, row in edges_df.iterrows():
        source = VertexKey(category=_text(row.get("source_category")), id=_text(row["source_id"]))
        target = VertexKey(category=_text(row.get("target_category")), id=_text(row["target_id"]))
        edges.setdefault(source, {})[target] = _weight(row["weight"])

    return DAGStore.from_snapshot(
        DAGSnapshot(vertices=vertices, edges=edges),
        factory=factory,
        config=config,
    )


def save_dag_to_processed(store: DAGStore, processed_dir: Path) -> None:
    """
    Write vertices.parquet and edges.parquet under processed_dir.
    """
    processed_dir = Path(processed_dir)
    processed_dir.mkdir(parents=True, exist_ok=True)

    t0 = time.perf_counter()
    vertices_df, edges_df = dag_to_frames(store)
    vertices_df.to_parquet(processed_dir / "vertices.parquet", index=False)
    edges_df.to_parquet(processed_dir / "edges.parquet", index=False)
    logger.info(
        "saved vertices=%s edges=%s -> %s in %.3fs",
        len(vertices_df),
        len(edges_df),
        processed_dir,
        time.perf_counter() - t0,
    )


def load_dag_from_processed(
    processed_dir: Path,
    *,
    factory: Optional[Callable[[VertexRecord], Any]] = None,
    config: Optional[DAGConfig] = None,
) -> Optional[DAGStore]:
    """
    Load a store written by save_dag_to_processed.

    Returns None when either parquet file is missing.
    """
    processed_dir = Path(processed_dir)
    vertices_path = processed_dir / "vertices.parquet"
    edges_path = processed_dir / "edges.parquet"

    if not vertices_path.exists() or not edges_path.exists():
        logger.info("no processed DAG under %s", processed_dir)
        return None

    t0 = time.perf_counter()
    vertices_df = pd.read_parquet(vertices_path)
    t_vertices = time.perf_counter()
    edges_df = pd.read_parquet(edges_path)
    t_edges = time.perf_counter()
    logger.info(
        "read vertices=%s in %.3fs; read edges=%s in %.3fs",
        len(vertices_df),
        t_vertices - t0,
        len(edges_df),
        t_edges - t_vertices,
    )

    store = load_dag_from_frames(vertices_df, edges_df, factory=factory, config=config)
    logger.info(
        "built DAG nodes=%s edges=%s in %.3fs",
        store.node_count(),
        store.edge_count(),
        time.perf_counter() - t_edges,
    )
    return store
