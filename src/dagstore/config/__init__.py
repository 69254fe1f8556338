"""
Configuration layer for dagstore.

Configuration in dagstore is:
- Explicit (passed to each store, not global)
- Typed (frozen dataclasses)
- Environment-loadable (DAGSTORE_* variables via dynaconf)
"""

from dagstore.config.settings import (
    DAGConfig,
    MutationConfig,
    TraversalConfig,
)
from dagstore.config.loader import get_config, load_config

__all__ = [
    "DAGConfig",
    "MutationConfig",
    "TraversalConfig",
    "get_config",
    "load_config",
]
