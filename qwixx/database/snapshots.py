"""
Qwixx - Snapshot Manager

Save and load complete game snapshots in the configured snapshot table
(`game_snapshots` unless QWIXX_SNAPSHOT_TABLE says otherwise).
A snapshot is written in one upsert, so readers never see a partial game.
"""

import logging

from supabase import Client

from qwixx.config.settings import get_settings
from qwixx.database.client import get_supabase_client
from qwixx.database.models import GameSnapshot
from qwixx.engine.base import GameState
from qwixx.engine.validators import validate_game_state

logger = logging.getLogger(__name__)

DEFAULT_SLOT = "default"


class SnapshotManager:
    """Manages saved games in Supabase."""

    def __init__(self, client: Client, table: str | None = None) -> None:
        self.client = client
        self.table_name = table or get_settings().snapshot_table
        self.table = client.table(self.table_name)

    def save(self, state: GameState, slot: str = DEFAULT_SLOT) -> GameSnapshot:
        """Store ``state`` under ``slot``, replacing any previous save."""
        data = (
            self.table
            .upsert({"slot": slot, "state": state.to_dict()}, on_conflict="slot")
            .execute()
        )
        logger.debug("Saved snapshot %s (%d actions)", slot, len(state.history))
        return GameSnapshot.model_validate(data.data[0])

    def load(self, slot: str = DEFAULT_SLOT) -> GameState | None:
        """
        Load the game saved under ``slot``.

        Returns:
            The saved GameState, or None if nothing usable is stored
        """
        data = (
            self.table
            .select("*")
            .eq("slot", slot)
            .execute()
        )
        if not data.data:
            return None

        try:
            snapshot = GameSnapshot.model_validate(data.data[0])
            state = GameState.from_dict(snapshot.state)
        except (KeyError, TypeError, ValueError):
            logger.exception("Failed to decode snapshot %s", slot)
            return None

        errors = validate_game_state(state)
        if errors:
            logger.warning("Discarding inconsistent snapshot %s: %s", slot, "; ".join(errors))
            return None
        return state

    def exists(self, slot: str = DEFAULT_SLOT) -> bool:
        """Check whether a snapshot is stored under ``slot``."""
        data = (
            self.table
            .select("slot")
            .eq("slot", slot)
            .execute()
        )
        return bool(data.data)

    def clear(self, slot: str = DEFAULT_SLOT) -> None:
        """Delete the snapshot under ``slot``."""
        self.table.delete().eq("slot", slot).execute()


def get_snapshot_manager() -> SnapshotManager:
    """Snapshot manager on the configured Supabase project and table."""
    return SnapshotManager(get_supabase_client(), get_settings().snapshot_table)
