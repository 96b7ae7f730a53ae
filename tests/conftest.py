"""Shared fixtures and race data factories."""

from __future__ import annotations

import logging

import pytest

from livetiming import load_race_data
from livetiming.models.race import RaceData

# ── Race data factories ─────────────────────────────────────────────────────


def _make_lap(
    lap_number: int,
    start: float | None,
    duration: float | None,
    sectors: list[float | None] | None = None,
    position: int | None = None,
    tyre_life: float | None = None,
) -> dict:
    if sectors is None:
        sectors = [duration / 3] * 3 if duration else [None, None, None]
    return {
        "lapNumber": lap_number,
        "lapStartTime": start,
        "lapTime": duration,
        "sectorTimes": sectors,
        "positionAtLapEnd": position,
        "tyreLife": tyre_life,
    }


def _make_laps(durations: list[float | None], start: float = 0.0) -> list[dict]:
    """Back-to-back laps; a None duration is an untimed lap starting where the previous ended."""
    laps = []
    for number, duration in enumerate(durations, start=1):
        laps.append(_make_lap(number, start, duration, tyre_life=float(number)))
        if duration is not None:
            start += duration
    return laps


def _make_pit(
    lap_number: int,
    pit_in: float | None,
    pit_out: float | None,
    compound: str | None = None,
) -> dict:
    return {
        "lapNumber": lap_number,
        "pitInTime": pit_in,
        "pitOutTime": pit_out,
        "compound": compound,
    }


def _make_driver(
    laps: list[dict],
    pit_stops: list[dict] | None = None,
    number: str = "1",
    team: str = "Team",
) -> dict:
    return {
        "driverNumber": number,
        "team": team,
        "laps": laps,
        "pitStops": pit_stops or [],
    }


def _make_race(
    drivers: dict[str, dict],
    total_laps: int = 5,
    track_length: float | None = 5000.0,
) -> dict:
    return {
        "session": {
            "year": 2024,
            "event": "Test Grand Prix",
            "type": "Race",
            "totalLaps": total_laps,
            "trackLengthMeters": track_length,
        },
        "drivers": drivers,
    }


# ── Race fixtures ───────────────────────────────────────────────────────────


@pytest.fixture
def two_driver_race() -> RaceData:
    """A laps 90s throughout; B loses 2s on lap 1 and matches A after."""
    return load_race_data(_make_race({
        "A": _make_driver(_make_laps([90.0] * 5), number="1", team="Red"),
        "B": _make_driver(_make_laps([92.0, 90.0, 90.0, 90.0, 90.0]), number="2", team="Blue"),
    }))


@pytest.fixture
def three_lap_race() -> RaceData:
    """C stops on lap 3, which is recorded without a time."""
    return load_race_data(_make_race({
        "A": _make_driver(_make_laps([90.0, 90.0, 90.0]), number="1"),
        "B": _make_driver(_make_laps([92.0, 90.0, 90.0]), number="2"),
        "C": _make_driver(_make_laps([95.0, 95.0, None]), number="3"),
    }, total_laps=3))


@pytest.fixture
def sector_race() -> RaceData:
    """B is behind on distance through lap 2 but completes sector 2 first (119s vs 130s)."""
    return load_race_data(_make_race({
        "A": _make_driver([
            _make_lap(1, 0.0, 90.0, [30.0, 30.0, 30.0]),
            _make_lap(2, 90.0, 90.0, [20.0, 20.0, 50.0]),
            _make_lap(3, 180.0, 90.0, [30.0, 30.0, 30.0]),
        ], number="1"),
        "B": _make_driver([
            _make_lap(1, 0.0, 91.0, [31.0, 30.0, 30.0]),
            _make_lap(2, 91.0, 100.0, [20.0, 8.0, 72.0]),
            _make_lap(3, 191.0, 90.0, [30.0, 30.0, 30.0]),
        ], number="2"),
    }))


@pytest.fixture
def make_lap():
    """Factory fixture for creating lap dicts."""
    return _make_lap


@pytest.fixture
def make_laps():
    return _make_laps


@pytest.fixture
def make_pit():
    return _make_pit


@pytest.fixture
def make_driver():
    return _make_driver


@pytest.fixture
def make_race():
    """Factory fixture returning raw race payload dicts."""
    return _make_race


# ── Logging ─────────────────────────────────────────────────────────────────


@pytest.fixture(autouse=True)
def _reset_logger_and_paths(tmp_path):
    """Redirect the file logger to tmp_path for every test."""
    import livetiming._logging as mod

    old_logger = mod._logger
    old_dir = mod._LOG_DIR
    old_file = mod._LOG_FILE

    named_logger = logging.getLogger(mod.LOGGER_NAME)
    for h in named_logger.handlers[:]:
        h.close()
        named_logger.removeHandler(h)

    mod._logger = None
    mod._LOG_DIR = str(tmp_path)
    mod._LOG_FILE = str(tmp_path / "livetiming.log")

    yield tmp_path

    for h in named_logger.handlers[:]:
        h.close()
        named_logger.removeHandler(h)
    mod._logger = old_logger
    mod._LOG_DIR = old_dir
    mod._LOG_FILE = old_file
