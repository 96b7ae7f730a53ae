"""Broadcast gap-column phase: hidden, gap to leader, or interval."""

from __future__ import annotations

from livetiming.config import DEFAULT_CONFIG, TimingConfig
from livetiming.constants import BroadcastPhase
from livetiming.track_status import TrackStatusState


class BroadcastPhaseResolver:
    """Mirrors the TV graphic: gaps hidden under neutralization and right
    after a green flag, gap-to-leader for the first laps after it, then
    intervals.
    """

    def __init__(self, config: TimingConfig = DEFAULT_CONFIG) -> None:
        self._config = config
        self._phase = BroadcastPhase.HIDDEN
        self._green_leader_lap = 0

    @property
    def phase(self) -> BroadcastPhase:
        return self._phase

    def update(self, track_status: TrackStatusState, leader_lap: int) -> BroadcastPhase:
        if track_status.is_neutralized:
            self._phase = BroadcastPhase.HIDDEN
        elif track_status.green_transition:
            self._green_leader_lap = track_status.green_leader_lap or 0
            self._phase = BroadcastPhase.HIDDEN
        elif leader_lap != 0:
            laps_since_green = leader_lap - self._green_leader_lap
            if laps_since_green < self._config.interval_phase_laps:
                self._phase = BroadcastPhase.GAP_TO_LEADER
            else:
                self._phase = BroadcastPhase.INTERVAL
        return self._phase
