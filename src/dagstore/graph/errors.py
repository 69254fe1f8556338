"""
Error hierarchy for DAG mutation and snapshot import.

Every error here is an invariant violation surfaced synchronously;
none of them is transient.
"""

from __future__ import annotations

from typing import Any, Optional

from dagstore.graph.identity import VertexKey


class DAGError(ValueError):
    """Base class for all graph invariant violations."""

    pass


class InvalidVertexError(DAGError):
    """Raised when an edge endpoint is None or has an empty id."""

    def __init__(self, role: str, vertex: Any) -> None:
        super().__init__(f"invalid {role} vertex: {vertex!r}")
        self.role = role
        self.vertex = vertex


class SelfLoopError(DAGError):
    """Raised when both edge endpoints resolve to the same key."""

    def __init__(self, key: VertexKey) -> None:
        super().__init__(f"starting vertex is ending vertex: {key.category}/{key.id}")
        self.key = key


class CycleDetectedError(DAGError):
    """Raised when an edge insertion or merge would close a cycle."""

    def __init__(
        self,
        message: str = "cyclic graph would come into being",
        *,
        start: Optional[VertexKey] = None,
        end: Optional[VertexKey] = None,
    ) -> None:
        super().__init__(message)
        self.start = start
        self.end = end


class SnapshotImportError(DAGError):
    """Raised when a snapshot cannot be turned into a valid DAG."""

    pass
