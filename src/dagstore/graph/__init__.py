"""
Graph subsystem for dagstore.

Defines the DAG abstractions used for:
- identity-keyed vertex storage with weighted edges
- cycle-safe mutation
- derived graphs (reach, closure, reduction, reversal)
- deterministic traversal and path selection
"""

from dagstore.graph.identity import (
    Identified,
    Vertex,
    VertexKey,
    filter_vertices,
    key_of,
    sort_vertices,
    vertex_attrs,
    vertex_ids,
)
from dagstore.graph.errors import (
    CycleDetectedError,
    DAGError,
    InvalidVertexError,
    SelfLoopError,
    SnapshotImportError,
)
from dagstore.graph.snapshot import DAGSnapshot, VertexRecord
from dagstore.graph.dag_traversal import PathResult
from dagstore.graph.dag_store import DAGStore, EdgeRecord
from dagstore.graph.dag_builder import DAGBuilder

__all__ = [
    "Identified",
    "Vertex",
    "VertexKey",
    "filter_vertices",
    "key_of",
    "sort_vertices",
    "vertex_attrs",
    "vertex_ids",
    "CycleDetectedError",
    "DAGError",
    "InvalidVertexError",
    "SelfLoopError",
    "SnapshotImportError",
    "DAGSnapshot",
    "VertexRecord",
    "PathResult",
    "DAGStore",
    "EdgeRecord",
    "DAGBuilder",
]
