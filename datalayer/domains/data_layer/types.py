"""Types for the data layer domain."""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class PushEntry(BaseModel):
    """One accepted push, as kept in the debugging history."""

    model_config = ConfigDict(frozen=True)

    event_name: str
    schema_name: str
    record: dict[str, Any]
    adapters_notified: int
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
