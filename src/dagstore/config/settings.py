from __future__ import annotations

from dataclasses import dataclass, field

# ---------------------------------------------------------------------
# Traversal & path enumeration
# ---------------------------------------------------------------------


@dataclass(frozen=True)
class TraversalConfig:
    """
    Controls exhaustive path enumeration.

    Path counts grow exponentially in dense DAGs; max_paths caps
    enumeration in enumeration order. 0 means unbounded.
    """

    max_paths: int = 0


# ---------------------------------------------------------------------
# Edge mutation
# ---------------------------------------------------------------------


@dataclass(frozen=True)
class MutationConfig:
    """
    Controls what add_edge accepts.
    """

    strict_weights: bool = True


# ---------------------------------------------------------------------
# Root configuration object
# ---------------------------------------------------------------------


@dataclass(frozen=True)
class DAGConfig:
    """
    Root configuration object for dagstore.

    Passed explicitly to a DAGStore and inherited by every store
    derived from it.
    """

    traversal: TraversalConfig = field(default_factory=TraversalConfig)
    mutation: MutationConfig = field(default_factory=MutationConfig)
