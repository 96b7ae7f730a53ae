"""Track status timeline and track info models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from livetiming.constants import TRACK_STATUS_CODES, TrackStatus


class TrackStatusFrame(BaseModel):
    """One recorded flag change at a race second."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    race_second: float
    track_status: int

    @property
    def status(self) -> TrackStatus:
        """Decoded flag; unknown codes map to NONE."""
        return TRACK_STATUS_CODES.get(self.track_status, TrackStatus.NONE)


class TrackStatusData(BaseModel):
    """Track status API response."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    track_status_data: list[TrackStatusFrame] = Field(default_factory=list)


class TrackInfo(BaseModel):
    """Circuit facts; only the length matters to the engine."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    track_length: float | None = None
    event_name: str | None = None
    location: str | None = None
    country: str | None = None
    official_event_name: str | None = None
