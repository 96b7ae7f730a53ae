"""Replay session: one synchronous recompute step per race-clock tick."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Iterable, Iterator

from livetiming._logging import log_service_call
from livetiming.broadcast_phase import BroadcastPhaseResolver
from livetiming.config import DEFAULT_CONFIG, TimingConfig
from livetiming.constants import BroadcastPhase
from livetiming.exceptions import ClockRewindError
from livetiming.leaderboard import LeaderboardProjector
from livetiming.models.leaderboard import LeaderboardView
from livetiming.models.live_state import TimingSnapshot
from livetiming.models.race import RaceData
from livetiming.models.track_status import TrackStatusFrame
from livetiming.presence import DriverPresenceTracker
from livetiming.sector_anchors import SectorAnchorIndex
from livetiming.timing import TimingStateComputer
from livetiming.track_status import TrackStatusResolver, TrackStatusState

if TYPE_CHECKING:
    from livetiming.client import ReplayDataClient


@dataclass(frozen=True)
class ReplayFrame:
    race_time: float
    track_status: TrackStatusState
    phase: BroadcastPhase
    timing: TimingSnapshot
    leaderboard: LeaderboardView


class ReplaySession:
    """Composes the engine components into a single ``tick`` step.

    Usage:
        session = ReplaySession(race_data, track_status_frames)
        for frame in session.run(range(0, 5400)):
            render(frame.leaderboard)

    Each tick runs track status, timing, broadcast phase and leaderboard in
    that order; nothing is shared between components except the values
    passed along.
    """

    @log_service_call
    def __init__(
        self,
        race_data: RaceData,
        track_status_frames: Iterable[TrackStatusFrame] = (),
        *,
        track_length: float | None = None,
        config: TimingConfig = DEFAULT_CONFIG,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._race_data = race_data
        self._sector_index = SectorAnchorIndex.build(race_data)
        self._timing = TimingStateComputer(
            race_data,
            track_length,
            sector_index=self._sector_index,
            config=config,
        )
        self._track_status = TrackStatusResolver(track_status_frames, config, clock)
        self._phase = BroadcastPhaseResolver(config)
        self._presence = DriverPresenceTracker()
        self._leaderboard = LeaderboardProjector(race_data, config, clock)
        self._last_race_time: float | None = None

    @classmethod
    def from_client(
        cls,
        client: ReplayDataClient,
        year: int,
        round_number: int,
        **kwargs: object,
    ) -> ReplaySession:
        """Load race data and the flag timeline through *client* and start a session."""
        race_data = client.load_session(year, round_number)
        frames = client.track_status(year, round_number)
        return cls(race_data, frames, **kwargs)  # type: ignore[arg-type]

    @property
    def race_data(self) -> RaceData:
        return self._race_data

    @property
    def sector_index(self) -> SectorAnchorIndex:
        return self._sector_index

    @property
    def presence(self) -> DriverPresenceTracker:
        return self._presence

    @property
    def leader_lap(self) -> int:
        """Leader's current lap, for phase-decision logic outside the engine."""
        return self._timing.leader_lap

    @property
    def is_race_finished(self) -> bool:
        return self._timing.is_race_finished

    def tick(
        self,
        race_time: float,
        present_drivers: Iterable[str] | None = None,
        now: float | None = None,
    ) -> ReplayFrame:
        """Advance to *race_time*.

        *present_drivers* are the drivers in the telemetry frame for this
        second; when omitted, presence is left unchanged. *now* overrides
        the wall clock used for display timers.
        """
        if self._last_race_time is not None and race_time < self._last_race_time:
            raise ClockRewindError(self._last_race_time, race_time)
        self._last_race_time = race_time

        if present_drivers is not None:
            self._presence.update(present_drivers)

        status = self._track_status.resolve(
            race_time, leader_lap=self._timing.leader_lap, now=now,
        )
        timing = self._timing.compute(race_time, neutralized=status.is_neutralized)
        phase = self._phase.update(status, timing.leader_lap)
        board = self._leaderboard.project(
            timing, self._presence.is_out, now=now, race_time=race_time,
        )

        return ReplayFrame(
            race_time=race_time,
            track_status=status,
            phase=phase,
            timing=timing,
            leaderboard=board,
        )

    def run(self, race_times: Iterable[float]) -> Iterator[ReplayFrame]:
        """Tick through *race_times* in order."""
        for race_time in race_times:
            yield self.tick(race_time)
