"""Pit stop model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class PitStop(BaseModel):
    """Pit lane visit; either time may be missing."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    lap_number: int | None = None
    pit_in_time: float | None = None
    pit_out_time: float | None = None
    compound: str | None = None

    @property
    def is_pit_lane_start(self) -> bool:
        """A lap-1 record without an entry time is a start from the pit lane."""
        return self.lap_number == 1 and self.pit_in_time is None
