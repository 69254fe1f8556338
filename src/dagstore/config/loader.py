from __future__ import annotations

from functools import lru_cache
from typing import Any, Mapping, Optional

from dynaconf import Dynaconf

from dagstore.config.constants import DEFAULTS
from dagstore.config.settings import DAGConfig, MutationConfig, TraversalConfig


def _parse_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return bool(value)


def load_config(overrides: Optional[Mapping[str, Any]] = None) -> DAGConfig:
    """
    Build a DAGConfig from DAGSTORE_* environment variables.

    Explicit overrides win over the environment, which wins over DEFAULTS.
    """
    settings = Dynaconf(
        envvar_prefix="DAGSTORE",
        load_dotenv=True,
        settings_files=[],
    )
    overrides = dict(overrides or {})

    def _get(name: str) -> Any:
        if name in overrides:
            return overrides[name]
        return settings.get(name, DEFAULTS[name])

    return DAGConfig(
        traversal=TraversalConfig(
            max_paths=max(int(_get("TRAVERSAL_MAX_PATHS")), 0),
        ),
        mutation=MutationConfig(
            strict_weights=_parse_bool(_get("MUTATION_STRICT_WEIGHTS")),
        ),
    )


@lru_cache
def get_config() -> DAGConfig:
    return load_config()
