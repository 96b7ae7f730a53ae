"""Per-driver recorded timing model."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from livetiming.models.lap import TimingLap
from livetiming.models.pit import PitStop


class DriverData(BaseModel):
    """Identity plus the driver's recorded laps and pit stops."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    driver_number: str = ""
    team: str = ""
    laps: list[TimingLap] = Field(default_factory=list)
    pit_stops: list[PitStop] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _flatten_timing(cls, data: Any) -> Any:
        """Accept the nested ``{"timing": {"laps", "pitStops"}}`` wire shape."""
        if isinstance(data, dict) and isinstance(data.get("timing"), dict):
            data = {**data}
            timing = data.pop("timing")
            data.setdefault("laps", timing.get("laps", []))
            data.setdefault("pitStops", timing.get("pitStops", []))
        return data

    @field_validator("driver_number", mode="before")
    @classmethod
    def _number_as_str(cls, value: Any) -> Any:
        if isinstance(value, int):
            return str(value)
        return value

    @field_validator("laps")
    @classmethod
    def _sort_laps(cls, laps: list[TimingLap]) -> list[TimingLap]:
        return sorted(laps, key=lambda lap: lap.lap_number)
