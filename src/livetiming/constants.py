"""Shared constants for the live timing engine."""

from __future__ import annotations

from enum import Enum

UNKNOWN_COMPOUND = "UNKNOWN"


class TrackStatus(str, Enum):
    """Track status flags as shown by the broadcast graphic."""

    GREEN = "GREEN"
    YELLOW = "YELLOW"
    SAFETY_CAR = "SC"
    VIRTUAL_SAFETY_CAR = "VSC"
    VIRTUAL_SAFETY_CAR_ENDING = "VSC_ENDING"
    RED = "RED"
    NONE = "NONE"


# Numeric codes used by the recorded track status feed
TRACK_STATUS_CODES: dict[int, TrackStatus] = {
    1: TrackStatus.GREEN,
    2: TrackStatus.YELLOW,
    4: TrackStatus.SAFETY_CAR,
    5: TrackStatus.RED,
    6: TrackStatus.VIRTUAL_SAFETY_CAR,
    7: TrackStatus.VIRTUAL_SAFETY_CAR_ENDING,
}

NEUTRALIZED_STATUSES: frozenset[TrackStatus] = frozenset({
    TrackStatus.YELLOW,
    TrackStatus.SAFETY_CAR,
    TrackStatus.VIRTUAL_SAFETY_CAR,
    TrackStatus.VIRTUAL_SAFETY_CAR_ENDING,
    TrackStatus.RED,
})


class ProvisionalStatus(str, Enum):
    """Mid-lap position change derived from sector anchors."""

    UP = "UP"
    DOWN = "DOWN"


class PositionArrow(str, Enum):
    """Short-lived leaderboard marker after a position change."""

    UP = "up"
    DOWN = "down"


class BroadcastPhase(str, Enum):
    """Which gap column the timing graphic shows."""

    HIDDEN = "HIDDEN"
    GAP_TO_LEADER = "GAP_TO_LEADER"
    INTERVAL = "INTERVAL"


RETIRED_STATUS = "OUT"
