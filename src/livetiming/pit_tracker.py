"""Pit lane and tyre state for one driver (no engine dependency)."""

from __future__ import annotations

from livetiming.config import DEFAULT_CONFIG, TimingConfig
from livetiming.models.lap import TimingLap
from livetiming.models.pit import PitStop

_ENTRY = 0
_EXIT = 1


class PitAndTyreTracker:
    """Derives pit and tyre state from a driver's pit-stop records and a race time."""

    def __init__(
        self,
        pit_stops: list[PitStop],
        config: TimingConfig = DEFAULT_CONFIG,
    ) -> None:
        self._pit_stops = list(pit_stops)
        self._config = config

        # (time, kind) sorted so an exit at the same second follows its entry
        events: list[tuple[float, int]] = []
        for stop in self._pit_stops:
            if stop.pit_in_time is not None:
                events.append((stop.pit_in_time, _ENTRY))
            if stop.pit_out_time is not None:
                events.append((stop.pit_out_time, _EXIT))
        self._events = sorted(events)

    @property
    def starting_compound(self) -> str:
        """Compound declared on the first pit record, else the default."""
        if self._pit_stops and self._pit_stops[0].compound:
            return self._pit_stops[0].compound
        return self._config.default_compound

    def is_in_pit(self, race_time: float) -> bool:
        """True when the latest pit event at or before *race_time* is an entry."""
        if race_time < self._config.pit_grace_seconds:
            return False

        latest: int | None = None
        for event_time, kind in self._events:
            if event_time > race_time:
                break
            latest = kind
        return latest == _ENTRY

    def compound(self, race_time: float) -> str:
        """Compound fitted at *race_time*."""
        compound = self.starting_compound
        for stop in self._pit_stops[1:]:
            if stop.pit_out_time is None or stop.pit_out_time > race_time:
                continue
            if stop.compound:
                compound = stop.compound
        return compound

    def pit_stop_count(self, race_time: float) -> int:
        """Completed stops; a pit-lane start is not a stop."""
        return sum(
            1 for stop in self._pit_stops
            if stop.pit_out_time is not None
            and stop.pit_out_time <= race_time
            and not stop.is_pit_lane_start
        )


def tyre_life_after(laps: list[TimingLap], completed_laps: int) -> float | None:
    """Tyre age recorded on the most recently completed lap."""
    if completed_laps < 1 or completed_laps > len(laps):
        return None
    return laps[completed_laps - 1].tyre_life
