"""Timer models for scheduled alarms."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class TimerState(str, Enum):
    """Timer lifecycle state."""

    SCHEDULED = "scheduled"
    FIRED = "fired"
    CANCELLED = "cancelled"


class TimerInfo(BaseModel):
    """Snapshot of a scheduled timer as shown in the list."""

    timer_id: int
    remaining_seconds: int = Field(..., ge=0)
    total_seconds: int = Field(..., ge=0)

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "timer_id": 1,
                "remaining_seconds": 1740,
                "total_seconds": 1800,
            }
        },
    )
