"""
dagstore
========

An in-memory engine for directed acyclic graphs of typed,
identity-bearing vertices connected by int-weighted edges.

Core idea:
- Every mutation keeps the graph acyclic; every derived graph is a new,
  independent store.

Public API:
- DAGStore
- DAGBuilder
- Vertex
- DAGConfig
"""

from dagstore.config.settings import DAGConfig
from dagstore.graph.dag_store import DAGStore
from dagstore.graph.dag_builder import DAGBuilder
from dagstore.graph.identity import Vertex, VertexKey
from dagstore.graph.errors import (
    CycleDetectedError,
    DAGError,
    InvalidVertexError,
    SelfLoopError,
    SnapshotImportError,
)

__all__ = [
    "DAGConfig",
    "DAGStore",
    "DAGBuilder",
    "Vertex",
    "VertexKey",
    "CycleDetectedError",
    "DAGError",
    "InvalidVertexError",
    "SelfLoopError",
    "SnapshotImportError",
]

__version__ = "0.1.0"
