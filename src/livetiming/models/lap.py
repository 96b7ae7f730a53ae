"""Recorded lap timing model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class TimingLap(BaseModel):
    """One recorded lap with absolute start time and sector splits."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    lap_number: int
    lap_start_time: float | None = None
    lap_time: float | None = None
    sector_times: list[float | None] = Field(default_factory=lambda: [None, None, None])
    position_at_lap_end: int | None = None
    tyre_life: float | None = None

    @property
    def is_timed(self) -> bool:
        """True when the lap has a start time and a positive duration."""
        return (
            self.lap_start_time is not None
            and self.lap_time is not None
            and self.lap_time > 0
        )

    @property
    def end_time(self) -> float | None:
        """Absolute race time the lap was completed, or None if untimed."""
        if not self.is_timed:
            return None
        return self.lap_start_time + self.lap_time  # type: ignore[operator]

    def sector(self, number: int) -> float | None:
        """Duration of sector 1-3, or None if missing."""
        if 1 <= number <= len(self.sector_times):
            return self.sector_times[number - 1]
        return None
