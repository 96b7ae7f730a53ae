"""Top-level recorded race payload."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from livetiming.models.driver import DriverData
from livetiming.models.session import Session


class RaceData(BaseModel):
    """Session facts plus every driver's recorded timing, keyed by driver code."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    session: Session
    drivers: dict[str, DriverData]

    @property
    def driver_codes(self) -> list[str]:
        return list(self.drivers)

    @property
    def last_lap_end(self) -> float:
        """Latest recorded lap completion time, 0.0 with no timed laps."""
        return max(
            (lap.end_time for data in self.drivers.values() for lap in data.laps
             if lap.end_time is not None),
            default=0.0,
        )
