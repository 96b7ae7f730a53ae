"""Display-ready leaderboard rows."""

from __future__ import annotations

from dataclasses import dataclass

from livetiming.constants import PositionArrow, ProvisionalStatus


@dataclass(frozen=True)
class LeaderboardEntry:
    position: int
    driver: str
    driver_number: str
    team: str
    lap: int
    gap_to_leader: float | None
    interval_gap: float | None
    laps_down: int
    lap_distance: float
    race_distance: float
    is_in_pit: bool
    compound: str
    tyre_life: float | None
    pit_stops: int
    position_arrow: PositionArrow | None = None
    provisional: ProvisionalStatus | None = None
    status: str | None = None  # "OUT" once retired
    is_leader: bool = False
    is_finished: bool = False


@dataclass(frozen=True)
class LeaderboardView:
    entries: tuple[LeaderboardEntry, ...]
    leader_lap: int
    total_laps: int

    def entry_for(self, driver: str) -> LeaderboardEntry | None:
        return next((e for e in self.entries if e.driver == driver), None)
