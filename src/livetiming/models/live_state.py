"""Per-tick derived driver state."""

from __future__ import annotations

from dataclasses import dataclass, replace

from livetiming.constants import ProvisionalStatus


@dataclass
class LiveDriverState:
    """One driver's timing state for a single tick.

    Built and mutated only inside the timing computer and handed out as is
    inside a ``TimingSnapshot``; consumers treat it as read-only. The
    replayed final classification is copied on every tick.
    """

    driver: str
    driver_number: str
    team: str
    completed_laps: int
    current_lap: int
    current_sector: int
    lap_distance: float
    race_distance: float
    timing_position: int | None = None
    display_position: int | None = None
    gap_to_leader: float | None = None  # None = not displayable yet
    interval_gap: float | None = None
    laps_down: int = 0
    provisional_status: ProvisionalStatus | None = None
    is_leader: bool = False
    is_finished: bool = False
    is_in_pit: bool = False
    compound: str = "UNKNOWN"
    tyre_life: float | None = None


@dataclass(frozen=True)
class TimingSnapshot:
    race_time: float
    drivers: tuple[LiveDriverState, ...]
    leader_lap: int
    is_race_finished: bool = False

    @property
    def leader(self) -> LiveDriverState | None:
        return next((d for d in self.drivers if d.is_leader), None)

    def by_driver(self, driver: str) -> LiveDriverState | None:
        return next((d for d in self.drivers if d.driver == driver), None)

    def copy(self) -> TimingSnapshot:
        """Snapshot with its own copies of every driver state."""
        return replace(self, drivers=tuple(replace(d) for d in self.drivers))
