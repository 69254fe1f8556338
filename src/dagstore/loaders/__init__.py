"""
Tabular import/export for dagstore (pandas frames and parquet files).
"""

from dagstore.loaders.frame_loader import (
    dag_to_frames,
    load_dag_from_frames,
    load_dag_from_processed,
    save_dag_to_processed,
)

__all__ = [
    "dag_to_frames",
    "load_dag_from_frames",
    "load_dag_from_processed",
    "save_dag_to_processed",
]
