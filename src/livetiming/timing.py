"""Per-tick timing state: running order, gaps, freezes and provisional overtakes."""

from __future__ import annotations

from livetiming._logging import get_logger, log_service_call
from livetiming.config import DEFAULT_CONFIG, TimingConfig
from livetiming.constants import ProvisionalStatus
from livetiming.exceptions import ClockRewindError, TrackLengthUnavailableError
from livetiming.models.lap import TimingLap
from livetiming.models.live_state import LiveDriverState, TimingSnapshot
from livetiming.models.race import RaceData
from livetiming.pit_tracker import PitAndTyreTracker, tyre_life_after
from livetiming.sector_anchors import SectorAnchorIndex


def _track_position_key(state: LiveDriverState) -> tuple[float, float, float]:
    return (-state.completed_laps, -state.lap_distance, -state.race_distance)


def _sector_for(elapsed: float, lap: TimingLap | None) -> int:
    """Sector 1-3 reached *elapsed* seconds into *lap*; 1 without sector data."""
    if lap is None:
        return 1
    s1, s2, s3 = lap.sector(1), lap.sector(2), lap.sector(3)

    if s1 is None:
        # No start split (typically lap 1): sector 1 until the S3 boundary is known
        if s3 is not None and lap.lap_time and elapsed >= lap.lap_time - s3:
            return 3
        return 1
    if elapsed < s1:
        return 1
    if s2 is not None:
        return 2 if elapsed < s1 + s2 else 3
    if s3 is not None and lap.lap_time:
        return 2 if elapsed < lap.lap_time - s3 else 3
    return 2


def _apply_intervals(ordered: list[LiveDriverState]) -> None:
    """Interval = own gap minus the nearest non-null gap ahead."""
    previous_gap: float | None = None
    for idx, state in enumerate(ordered):
        if idx == 0:
            state.interval_gap = None
        elif state.gap_to_leader is None or previous_gap is None:
            state.interval_gap = None
        else:
            state.interval_gap = state.gap_to_leader - previous_gap
        if state.gap_to_leader is not None:
            previous_gap = state.gap_to_leader


class TimingStateComputer:
    """Rebuilds every driver's timing state from recorded laps on each tick.

    Usage:
        computer = TimingStateComputer(race_data)
        snapshot = computer.compute(431.0, neutralized=False)
        snapshot.leader.driver

    All per-driver caches (distances, last gaps, recovery locks, swap
    latches) live on this instance for the lifetime of the session.
    """

    @log_service_call
    def __init__(
        self,
        race_data: RaceData,
        track_length: float | None = None,
        *,
        sector_index: SectorAnchorIndex | None = None,
        config: TimingConfig = DEFAULT_CONFIG,
    ) -> None:
        length = track_length if track_length is not None else race_data.session.track_length_meters
        if length is None or length <= 0:
            raise TrackLengthUnavailableError(
                f"Track length not available (got {length!r})",
            )

        self._race_data = race_data
        self._track_length = float(length)
        self._total_laps = race_data.session.total_laps
        self._config = config
        self._sector_index = sector_index or SectorAnchorIndex.build(race_data)
        self._trackers = {
            code: PitAndTyreTracker(data.pit_stops, config)
            for code, data in race_data.drivers.items()
        }
        self._log = get_logger()

        self._last_race_time: float | None = None
        self._last_snapshot: TimingSnapshot | None = None
        self._final_snapshot: TimingSnapshot | None = None

        self._completed: dict[str, int] = {}
        self._race_distance: dict[str, float] = {}
        self._gaps: dict[str, float | None] = {}
        self._last_valid_gap: dict[str, float] = {}
        self._recovery_locked: set[str] = set()

        self._last_leader_completed = -1
        self._hold_until: float | None = None
        self._neutral_lap_index: int | None = None
        self._neutral_reference_end: float | None = None
        self._swap_latches: set[tuple[int, str, str]] = set()

    # ── Public API ─────────────────────────────────────────────

    @property
    def track_length(self) -> float:
        return self._track_length

    @property
    def total_laps(self) -> int:
        return self._total_laps

    @property
    def leader_lap(self) -> int:
        """Leader's current lap from the latest tick, 0 before the first tick."""
        if self._last_snapshot is None:
            return 0
        return self._last_snapshot.leader_lap

    @property
    def is_race_finished(self) -> bool:
        return self._final_snapshot is not None

    @property
    def last_snapshot(self) -> TimingSnapshot | None:
        return self._last_snapshot

    @property
    def recovery_locked(self) -> frozenset[str]:
        """Drivers currently pinned to their last valid gap."""
        return frozenset(self._recovery_locked)

    def pit_stop_count(self, driver: str, race_time: float) -> int:
        tracker = self._trackers.get(driver)
        return tracker.pit_stop_count(race_time) if tracker else 0

    def compute(self, race_time: float, neutralized: bool = False) -> TimingSnapshot:
        """Recompute the ordered snapshot for *race_time*."""
        if self._last_race_time is not None and race_time < self._last_race_time:
            raise ClockRewindError(self._last_race_time, race_time)
        self._last_race_time = race_time

        if self._final_snapshot is not None:
            # Copies, so consumer writes never reach the replayed classification
            self._last_snapshot = self._final_snapshot.copy()
            return self._last_snapshot

        states = [
            self._reconstruct(code, race_time)
            for code in self._race_data.drivers
        ]
        if not states:
            snapshot = TimingSnapshot(race_time=race_time, drivers=(), leader_lap=0)
            self._last_snapshot = snapshot
            return snapshot

        states.sort(key=_track_position_key)
        leader = states[0]
        leader.is_leader = True
        for state in states:
            state.laps_down = max(0, leader.completed_laps - state.completed_laps)

        if leader.completed_laps >= self._total_laps:
            return self._classify_final(states, race_time)

        at_boundary = leader.completed_laps != self._last_leader_completed
        if at_boundary:
            self._last_leader_completed = leader.completed_laps
            self._swap_latches.clear()
            self._hold_until = self._lap_end_hold_until(states)
            self._log.debug(
                "Lap-end freeze at %.1fs: %s completed lap %d",
                race_time, leader.driver, leader.completed_laps,
            )

        if neutralized:
            if self._neutral_lap_index is None:
                self._neutral_lap_index = leader.completed_laps
                self._neutral_reference_end = self._completion_time(
                    leader.driver, self._neutral_lap_index,
                )
                self._log.info(
                    "Neutralization from %.1fs, gaps pinned to lap %d",
                    race_time, self._neutral_lap_index,
                )
            self._apply_lap_end_gaps(
                states, self._neutral_lap_index, self._neutral_reference_end,
            )
        else:
            if self._neutral_lap_index is not None:
                self._log.info("Neutralization ended at %.1fs", race_time)
                self._neutral_lap_index = None
                self._neutral_reference_end = None
            holding = self._hold_until is not None and race_time < self._hold_until
            if at_boundary or holding:
                self._apply_lap_end_gaps(states, leader.completed_laps)
            else:
                self._hold_until = None
                self._apply_mid_lap_gaps(states)

        _apply_intervals(states)
        for idx, state in enumerate(states, start=1):
            state.timing_position = idx
            self._gaps[state.driver] = state.gap_to_leader

        display = self._apply_provisional(states, race_time)
        for idx, state in enumerate(display, start=1):
            state.display_position = idx

        snapshot = TimingSnapshot(
            race_time=race_time,
            drivers=tuple(display),
            leader_lap=leader.current_lap,
        )
        self._last_snapshot = snapshot
        return snapshot

    # ── Reconstruction ─────────────────────────────────────────

    def _lap_at(self, driver: str, index: int) -> TimingLap | None:
        laps = self._race_data.drivers[driver].laps
        if 0 <= index < len(laps):
            return laps[index]
        return None

    def _reconstruct(self, driver: str, race_time: float) -> LiveDriverState:
        data = self._race_data.drivers[driver]
        laps = data.laps

        completed = sum(
            1 for lap in laps
            if lap.is_timed and lap.end_time <= race_time  # type: ignore[operator]
        )
        completed = max(completed, self._completed.get(driver, 0))
        self._completed[driver] = completed

        # Current lap first; a completed previous lap only anchors elapsed time
        reference = self._lap_at(driver, completed)
        on_current_lap = reference is not None and reference.is_timed
        if not on_current_lap:
            previous = self._lap_at(driver, completed - 1) if completed >= 1 else None
            reference = previous if previous is not None and previous.is_timed else None

        elapsed = 0.0
        if reference is not None:
            elapsed = max(0.0, race_time - reference.lap_start_time)  # type: ignore[operator]

        lap_distance = 0.0
        if on_current_lap and reference is not None:
            capped = min(elapsed, reference.lap_time)  # type: ignore[type-var]
            lap_distance = capped / reference.lap_time * self._track_length  # type: ignore[operator]

        race_distance = completed * self._track_length + lap_distance
        race_distance = max(race_distance, self._race_distance.get(driver, 0.0))
        self._race_distance[driver] = race_distance

        tracker = self._trackers[driver]
        return LiveDriverState(
            driver=driver,
            driver_number=data.driver_number,
            team=data.team,
            completed_laps=completed,
            current_lap=min(completed + 1, max(self._total_laps, 1)),
            current_sector=_sector_for(elapsed, reference),
            lap_distance=lap_distance,
            race_distance=race_distance,
            gap_to_leader=self._gaps.get(driver),
            is_finished=completed >= self._total_laps,
            is_in_pit=tracker.is_in_pit(race_time),
            compound=tracker.compound(race_time),
            tyre_life=tyre_life_after(laps, completed),
        )

    # ── Gap policies ───────────────────────────────────────────

    def _lap_end_hold_until(self, ordered: list[LiveDriverState]) -> float | None:
        """Race time by which every lead-lap car has crossed the line the leader just crossed."""
        leader = ordered[0]
        if leader.completed_laps < 1:
            return None
        leader_lap = self._lap_at(leader.driver, leader.completed_laps - 1)
        if leader_lap is None or leader_lap.end_time is None:
            return None

        leader_end = leader_lap.end_time
        window = leader_lap.lap_time or 0.0
        hold = leader_end
        for state in ordered[1:]:
            lap = self._lap_at(state.driver, leader.completed_laps - 1)
            end = lap.end_time if lap is not None else None
            if end is not None and leader_end < end < leader_end + window:
                hold = max(hold, end)
        return hold if hold > leader_end else None

    def _completion_time(self, driver: str, completed_laps: int) -> float | None:
        """Recorded end time of lap *completed_laps* for *driver*."""
        if completed_laps < 1:
            return None
        lap = self._lap_at(driver, completed_laps - 1)
        return lap.end_time if lap is not None else None

    def _apply_lap_end_gaps(
        self,
        ordered: list[LiveDriverState],
        completed_laps: int,
        reference_end: float | None = None,
    ) -> None:
        """Gaps from recorded completion times of lap *completed_laps*.

        *reference_end* pins the time gaps are measured from; by default it
        is the current leader's own completion time for that lap.
        """
        leader = ordered[0]
        leader.gap_to_leader = 0.0
        if completed_laps < 1:
            return

        if reference_end is None:
            reference_end = self._completion_time(leader.driver, completed_laps)
            if reference_end is None:
                return

        for state in ordered[1:]:
            end = self._completion_time(state.driver, completed_laps)
            if end is None:
                continue  # keeps previous value
            state.gap_to_leader = max(0.0, end - reference_end)
            self._last_valid_gap[state.driver] = state.gap_to_leader

    def _apply_mid_lap_gaps(self, ordered: list[LiveDriverState]) -> None:
        """Distance-based gaps at the leader's current-lap pace."""
        leader = ordered[0]
        leader.gap_to_leader = 0.0

        leader_lap = self._lap_at(leader.driver, leader.completed_laps)
        if leader_lap is None or not leader_lap.is_timed:
            return  # previous gaps stay
        leader_speed = self._track_length / leader_lap.lap_time  # type: ignore[operator]

        for state in ordered[1:]:
            current = self._lap_at(state.driver, state.completed_laps)
            if current is not None and current.is_timed:
                gap = (leader.race_distance - state.race_distance) / leader_speed
                state.gap_to_leader = gap
                self._last_valid_gap[state.driver] = gap
                if state.driver in self._recovery_locked:
                    self._recovery_locked.discard(state.driver)
                    self._log.debug("Recovery lock cleared for %s", state.driver)
                continue

            if state.driver not in self._recovery_locked:
                self._recovery_locked.add(state.driver)
                self._log.debug(
                    "Recovery lock for %s on lap %d", state.driver, state.current_lap,
                )
            if state.driver in self._last_valid_gap:
                state.gap_to_leader = self._last_valid_gap[state.driver]

    # ── Provisional overtakes ──────────────────────────────────

    def _is_provisional_swap(
        self,
        ahead: LiveDriverState,
        behind: LiveDriverState,
        race_time: float,
    ) -> bool:
        key = (behind.current_lap, ahead.driver, behind.driver)
        if key in self._swap_latches:
            return True

        anchor = self._sector_index.last_anchor_before(behind.driver, race_time)
        if anchor is None or anchor.lap != behind.current_lap:
            return False
        rival = self._sector_index.anchor_at(ahead.driver, anchor.lap, anchor.sector)
        if rival is None or rival.race_time <= anchor.race_time:
            return False

        self._swap_latches.add(key)
        self._log.debug(
            "Provisional overtake lap %d sector %d: %s ahead of %s",
            anchor.lap, anchor.sector, behind.driver, ahead.driver,
        )
        return True

    def _apply_provisional(
        self,
        ordered: list[LiveDriverState],
        race_time: float,
    ) -> list[LiveDriverState]:
        """Display order = authoritative order plus latched adjacent swaps."""
        display = list(ordered)
        idx = 0
        while idx < len(ordered) - 1:
            ahead, behind = ordered[idx], ordered[idx + 1]
            if (
                ahead.current_lap == behind.current_lap
                and self._is_provisional_swap(ahead, behind, race_time)
            ):
                display[idx], display[idx + 1] = behind, ahead
                behind.provisional_status = ProvisionalStatus.UP
                ahead.provisional_status = ProvisionalStatus.DOWN
                idx += 2
                continue
            idx += 1
        return display

    # ── Final classification ───────────────────────────────────

    def _classify_final(self, states: list[LiveDriverState], race_time: float) -> TimingSnapshot:
        index = self._total_laps - 1
        finishers: list[tuple[float, LiveDriverState]] = []
        others: list[LiveDriverState] = []

        for state in states:
            lap = self._lap_at(state.driver, index)
            end = lap.end_time if lap is not None else None
            if end is not None:
                finishers.append((end, state))
            elif state is states[0]:
                finishers.append((race_time, state))
            else:
                others.append(state)

        finishers.sort(key=lambda item: item[0])
        winner_end = finishers[0][0]
        full_distance = self._total_laps * self._track_length

        for end, state in finishers:
            state.is_leader = False
            state.completed_laps = self._total_laps
            state.current_lap = self._total_laps
            state.is_finished = True
            state.laps_down = 0
            state.lap_distance = self._track_length
            state.race_distance = max(state.race_distance, full_distance)
            state.gap_to_leader = end - winner_end
        finishers[0][1].is_leader = True

        for state in others:
            deficit = full_distance - state.race_distance
            state.laps_down = max(1, int(deficit // self._track_length))
            state.gap_to_leader = None

        ordered = [state for _, state in finishers] + others
        _apply_intervals(ordered)
        for idx, state in enumerate(ordered, start=1):
            state.provisional_status = None
            state.timing_position = idx
            state.display_position = idx
            self._completed[state.driver] = state.completed_laps
            self._race_distance[state.driver] = state.race_distance
            self._gaps[state.driver] = state.gap_to_leader

        snapshot = TimingSnapshot(
            race_time=race_time,
            drivers=tuple(ordered),
            leader_lap=self._total_laps,
            is_race_finished=True,
        )
        self._final_snapshot = snapshot
        self._last_snapshot = snapshot.copy()
        self._log.info(
            "Race finished at %.1fs: %s wins, %d classified on the lead lap",
            race_time, ordered[0].driver, len(finishers),
        )
        return self._last_snapshot
