"""Flag timeline resolution: current status, displayed status and green pulses."""

from __future__ import annotations

import time
from bisect import bisect_right
from dataclasses import dataclass
from typing import Callable, Iterable

from livetiming._logging import get_logger
from livetiming.config import DEFAULT_CONFIG, TimingConfig
from livetiming.constants import NEUTRALIZED_STATUSES, TrackStatus
from livetiming.models.track_status import TrackStatusFrame


@dataclass(frozen=True)
class TrackStatusState:
    race_time: float
    status: TrackStatus
    display_status: TrackStatus | None  # None = nothing on the graphic
    is_neutralized: bool
    green_transition: bool  # one-shot pulse on this tick
    green_leader_lap: int | None


class TrackStatusResolver:
    """Resolves the active flag for a race second from the recorded timeline.

    Usage:
        resolver = TrackStatusResolver(frames)
        state = resolver.resolve(race_time, leader_lap=computer.leader_lap)
        if state.is_neutralized: ...
    """

    def __init__(
        self,
        frames: Iterable[TrackStatusFrame] = (),
        config: TimingConfig = DEFAULT_CONFIG,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        timeline = sorted(
            ((frame.race_second, frame.status) for frame in frames),
            key=lambda item: item[0],
        )
        self._seconds = [second for second, _ in timeline]
        self._statuses = [status for _, status in timeline]
        self._config = config
        self._clock = clock

        self._last_status: TrackStatus | None = None
        self._display: TrackStatus | None = None
        self._green_expires_at: float | None = None
        self._green_leader_lap: int | None = None

    @property
    def timeline(self) -> list[tuple[float, TrackStatus]]:
        return list(zip(self._seconds, self._statuses))

    @property
    def green_leader_lap(self) -> int | None:
        return self._green_leader_lap

    def status_at(self, race_time: float) -> TrackStatus:
        """Last timeline status at or before *race_time*, NONE before the first entry."""
        idx = bisect_right(self._seconds, race_time)
        if idx == 0:
            return TrackStatus.NONE
        return self._statuses[idx - 1]

    def resolve(
        self,
        race_time: float,
        leader_lap: int = 0,
        now: float | None = None,
    ) -> TrackStatusState:
        """Advance to *race_time*; *now* is the wall clock for the green display timer."""
        now = self._clock() if now is None else now
        active = self.status_at(race_time)
        green_pulse = False

        if active == TrackStatus.GREEN and self._last_status is None:
            # Race start: never shown, but downstream phase logic is seeded
            self._last_status = active
            self._display = None
            self._green_expires_at = None
            green_pulse = True
        elif active != (self._last_status or TrackStatus.NONE):
            self._last_status = active
            self._green_expires_at = None

            if active == TrackStatus.GREEN:
                self._display = TrackStatus.GREEN
                self._green_expires_at = now + self._config.green_display_seconds
                green_pulse = True
            elif active == TrackStatus.NONE:
                self._display = None
            else:
                self._display = active
            get_logger().info("Track status %s at %.1fs", active.value, race_time)

        if self._green_expires_at is not None and now >= self._green_expires_at:
            self._display = None
            self._green_expires_at = None

        if green_pulse:
            self._green_leader_lap = leader_lap

        return TrackStatusState(
            race_time=race_time,
            status=active,
            display_status=self._display,
            is_neutralized=active in NEUTRALIZED_STATUSES,
            green_transition=green_pulse,
            green_leader_lap=self._green_leader_lap,
        )
