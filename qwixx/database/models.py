"""
Qwixx - Database Models

Pydantic models that mirror the Supabase table schemas.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class GameSnapshot(BaseModel):
    """Mirrors the `game_snapshots` table."""

    slot: str = Field(max_length=64)
    state: dict[str, Any]
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}
