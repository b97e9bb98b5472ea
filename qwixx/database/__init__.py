"""
Qwixx Database Layer.

Supabase integration for saved game snapshots.
"""

from qwixx.database.client import get_supabase_client
from qwixx.database.models import GameSnapshot
from qwixx.database.snapshots import DEFAULT_SLOT, SnapshotManager, get_snapshot_manager

__all__ = [
    "DEFAULT_SLOT",
    "GameSnapshot",
    "SnapshotManager",
    "get_snapshot_manager",
    "get_supabase_client",
]
