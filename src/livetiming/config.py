"""Tunable timing policies."""

from __future__ import annotations

from dataclasses import dataclass

from livetiming.constants import UNKNOWN_COMPOUND


@dataclass(frozen=True)
class TimingConfig:
    """Policy knobs shared by the engine components.

    Usage:
        config = TimingConfig(arrow_duration_seconds=1.0)
        session = ReplaySession(race_data, config=config)
    """

    # Start of race: grid and formation artifacts are never reported as pit visits
    pit_grace_seconds: float = 60.0
    # Wall-clock seconds a GREEN flag stays on the graphic
    green_display_seconds: float = 5.0
    # Wall-clock seconds a position arrow stays visible
    arrow_duration_seconds: float = 0.5
    # Leader laps after a green flag before intervals replace gap-to-leader
    interval_phase_laps: int = 2
    default_compound: str = UNKNOWN_COMPOUND


DEFAULT_CONFIG = TimingConfig()
