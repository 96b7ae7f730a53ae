"""Leaderboard projection: retirements, positions, arrows and pit counts."""

from __future__ import annotations

import time
from typing import Callable

from livetiming._logging import get_logger
from livetiming.config import DEFAULT_CONFIG, TimingConfig
from livetiming.constants import RETIRED_STATUS, PositionArrow
from livetiming.models.leaderboard import LeaderboardEntry, LeaderboardView
from livetiming.models.live_state import LiveDriverState, TimingSnapshot
from livetiming.models.race import RaceData
from livetiming.pit_tracker import PitAndTyreTracker


def _never_absent(driver: str) -> bool:
    return False


class LeaderboardProjector:
    """Turns a timing snapshot into the displayable leaderboard.

    Active drivers keep the computed order; retired drivers are appended in
    order of retirement. Positions are renumbered 1..N on every call.
    """

    def __init__(
        self,
        race_data: RaceData,
        config: TimingConfig = DEFAULT_CONFIG,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._total_laps = race_data.session.total_laps
        self._trackers = {
            code: PitAndTyreTracker(data.pit_stops, config)
            for code, data in race_data.drivers.items()
        }
        self._config = config
        self._clock = clock

        self._previous_positions: dict[str, int] = {}
        self._arrows: dict[str, tuple[PositionArrow, float]] = {}
        self._retired_at: dict[str, float] = {}
        self._last_stable_leader_lap = 1

    @property
    def retired_at(self) -> dict[str, float]:
        """Race time each retired driver was first reported absent."""
        return dict(self._retired_at)

    def pit_stop_count(self, driver: str, race_time: float) -> int:
        tracker = self._trackers.get(driver)
        return tracker.pit_stop_count(race_time) if tracker else 0

    def project(
        self,
        snapshot: TimingSnapshot,
        is_absent: Callable[[str], bool] | None = None,
        now: float | None = None,
        race_time: float | None = None,
    ) -> LeaderboardView:
        """Build the leaderboard for *snapshot*.

        *now* is the wall clock for arrows. *race_time* is the tick being
        shown, which runs past the snapshot once the classification is frozen.
        """
        now = self._clock() if now is None else now
        race_time = snapshot.race_time if race_time is None else race_time
        is_absent = is_absent or _never_absent

        active: list[LiveDriverState] = []
        retired: list[LiveDriverState] = []
        for state in snapshot.drivers:
            if not is_absent(state.driver):
                active.append(state)
                continue
            if state.driver not in self._retired_at:
                self._retired_at[state.driver] = race_time
                get_logger().info("%s retired at %.1fs", state.driver, race_time)
            retired.append(state)

        retired.sort(key=lambda s: self._retired_at[s.driver])
        retired_codes = {s.driver for s in retired}

        entries: list[LeaderboardEntry] = []
        for position, state in enumerate(active + retired, start=1):
            is_retired = state.driver in retired_codes
            entries.append(LeaderboardEntry(
                position=position,
                driver=state.driver,
                driver_number=state.driver_number,
                team=state.team,
                lap=state.current_lap,
                gap_to_leader=state.gap_to_leader,
                interval_gap=state.interval_gap,
                laps_down=state.laps_down,
                lap_distance=state.lap_distance,
                race_distance=state.race_distance,
                is_in_pit=state.is_in_pit,
                compound=state.compound,
                tyre_life=state.tyre_life,
                pit_stops=self.pit_stop_count(state.driver, race_time),
                position_arrow=self._position_arrow(state, position, is_retired, now),
                provisional=state.provisional_status,
                status=RETIRED_STATUS if is_retired else None,
                is_leader=state.is_leader,
                is_finished=state.is_finished,
            ))

        # Leader lap never falls back to 0 once the race is under way
        leader_lap = snapshot.leader_lap if snapshot.leader_lap >= 1 else self._last_stable_leader_lap
        self._last_stable_leader_lap = leader_lap

        return LeaderboardView(
            entries=tuple(entries),
            leader_lap=leader_lap,
            total_laps=self._total_laps,
        )

    def _position_arrow(
        self,
        state: LiveDriverState,
        position: int,
        is_retired: bool,
        now: float,
    ) -> PositionArrow | None:
        previous = self._previous_positions.get(state.driver)
        self._previous_positions[state.driver] = position

        # No arrows while gaps are still hidden (race start)
        displayable = state.gap_to_leader is not None or state.interval_gap is not None
        if displayable and previous is not None and previous != position:
            arrow = PositionArrow.UP if position < previous else PositionArrow.DOWN
            self._arrows[state.driver] = (
                arrow, now + self._config.arrow_duration_seconds,
            )

        marker = self._arrows.get(state.driver)
        if marker is None or is_retired or marker[1] <= now:
            return None
        return marker[0]
