"""Live timing replay engine: gaps, positions, flags and tyres from recorded race data."""

from livetiming.broadcast_phase import BroadcastPhaseResolver
from livetiming.client import (
    AsyncReplayDataClient,
    ReplayDataClient,
    load_race_data,
    load_track_status,
)
from livetiming.config import DEFAULT_CONFIG, TimingConfig
from livetiming.constants import BroadcastPhase, PositionArrow, ProvisionalStatus, TrackStatus
from livetiming.exceptions import (
    ClockRewindError,
    LiveTimingError,
    RaceDataValidationError,
    ReplayAPIError,
    ReplayConnectionError,
    ReplayTimeoutError,
    TrackLengthUnavailableError,
)
from livetiming.leaderboard import LeaderboardProjector
from livetiming.pit_tracker import PitAndTyreTracker
from livetiming.presence import DriverPresenceTracker
from livetiming.replay import ReplayFrame, ReplaySession
from livetiming.sector_anchors import SectorAnchorIndex
from livetiming.timing import TimingStateComputer
from livetiming.track_status import TrackStatusResolver, TrackStatusState

__all__ = [
    "AsyncReplayDataClient",
    "BroadcastPhase",
    "BroadcastPhaseResolver",
    "ClockRewindError",
    "DEFAULT_CONFIG",
    "DriverPresenceTracker",
    "LeaderboardProjector",
    "LiveTimingError",
    "PitAndTyreTracker",
    "PositionArrow",
    "ProvisionalStatus",
    "RaceDataValidationError",
    "ReplayAPIError",
    "ReplayConnectionError",
    "ReplayDataClient",
    "ReplayFrame",
    "ReplaySession",
    "ReplayTimeoutError",
    "SectorAnchorIndex",
    "TimingConfig",
    "TimingStateComputer",
    "TrackLengthUnavailableError",
    "TrackStatus",
    "TrackStatusResolver",
    "TrackStatusState",
    "load_race_data",
    "load_track_status",
]

__version__ = "0.1.0"
