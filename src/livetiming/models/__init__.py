"""Live timing data models."""

from livetiming.models.driver import DriverData
from livetiming.models.lap import TimingLap
from livetiming.models.leaderboard import LeaderboardEntry, LeaderboardView
from livetiming.models.live_state import LiveDriverState, TimingSnapshot
from livetiming.models.pit import PitStop
from livetiming.models.race import RaceData
from livetiming.models.sector_anchor import SectorAnchor
from livetiming.models.session import Session
from livetiming.models.track_status import TrackInfo, TrackStatusData, TrackStatusFrame

__all__ = [
    "DriverData",
    "LeaderboardEntry",
    "LeaderboardView",
    "LiveDriverState",
    "PitStop",
    "RaceData",
    "SectorAnchor",
    "Session",
    "TimingLap",
    "TimingSnapshot",
    "TrackInfo",
    "TrackStatusData",
    "TrackStatusFrame",
]
