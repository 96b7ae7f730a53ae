"""Race session model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Session(BaseModel):
    """Static session facts needed by the timing engine."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    total_laps: int
    track_length_meters: float | None = None
    year: int | None = None
    event: str | None = None
    location: str | None = None
    type: str | None = None
    local_time_at_race_start: str | None = None
