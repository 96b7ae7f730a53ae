"""Tests for PitAndTyreTracker."""

from __future__ import annotations

import pytest

from livetiming import PitAndTyreTracker, TimingConfig
from livetiming.models import PitStop, TimingLap
from livetiming.pit_tracker import tyre_life_after


@pytest.fixture
def stops(make_pit) -> list[PitStop]:
    return [
        PitStop.model_validate(make_pit(1, None, 30.0, "MEDIUM")),
        PitStop.model_validate(make_pit(18, 1500.0, 1522.0, "HARD")),
        PitStop.model_validate(make_pit(40, 3400.0, None, "SOFT")),
    ]


class TestIsInPit:
    def test_between_entry_and_exit(self, stops) -> None:
        tracker = PitAndTyreTracker(stops)
        assert tracker.is_in_pit(1510.0)
        assert not tracker.is_in_pit(1499.0)
        assert not tracker.is_in_pit(1522.0)

    def test_entry_without_exit(self, stops) -> None:
        tracker = PitAndTyreTracker(stops)
        assert tracker.is_in_pit(3600.0)

    def test_grace_window(self, make_pit) -> None:
        tracker = PitAndTyreTracker([PitStop.model_validate(make_pit(1, 5.0, None))])
        assert not tracker.is_in_pit(59.0)
        assert tracker.is_in_pit(60.0)

    def test_custom_grace_window(self, make_pit) -> None:
        stop = PitStop.model_validate(make_pit(1, 5.0, None))
        tracker = PitAndTyreTracker([stop], TimingConfig(pit_grace_seconds=0.0))
        assert tracker.is_in_pit(10.0)

    def test_no_stops(self) -> None:
        assert not PitAndTyreTracker([]).is_in_pit(1000.0)


class TestCompound:
    def test_starting_compound(self, stops) -> None:
        tracker = PitAndTyreTracker(stops)
        assert tracker.starting_compound == "MEDIUM"
        assert tracker.compound(100.0) == "MEDIUM"

    def test_changes_after_exit(self, stops) -> None:
        tracker = PitAndTyreTracker(stops)
        assert tracker.compound(1521.0) == "MEDIUM"
        assert tracker.compound(1522.0) == "HARD"

    def test_stop_without_exit_keeps_compound(self, stops) -> None:
        tracker = PitAndTyreTracker(stops)
        assert tracker.compound(4000.0) == "HARD"

    def test_unknown_without_records(self) -> None:
        assert PitAndTyreTracker([]).compound(100.0) == "UNKNOWN"

    def test_configured_default(self) -> None:
        tracker = PitAndTyreTracker([], TimingConfig(default_compound="TEST"))
        assert tracker.compound(0.0) == "TEST"


class TestPitStopCount:
    def test_pit_lane_start_not_counted(self, stops) -> None:
        tracker = PitAndTyreTracker(stops)
        assert tracker.pit_stop_count(100.0) == 0
        assert tracker.pit_stop_count(1522.0) == 1

    def test_stop_in_progress_not_counted(self, stops) -> None:
        tracker = PitAndTyreTracker(stops)
        assert tracker.pit_stop_count(5000.0) == 1


class TestTyreLife:
    def test_from_last_completed_lap(self) -> None:
        laps = [
            TimingLap(lap_number=1, tyre_life=4.0),
            TimingLap(lap_number=2, tyre_life=5.0),
        ]
        assert tyre_life_after(laps, 2) == 5.0
        assert tyre_life_after(laps, 1) == 4.0

    def test_none_before_first_lap(self) -> None:
        assert tyre_life_after([TimingLap(lap_number=1, tyre_life=4.0)], 0) is None

    def test_none_when_missing(self) -> None:
        assert tyre_life_after([TimingLap(lap_number=1)], 1) is None
