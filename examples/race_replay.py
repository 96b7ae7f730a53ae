"""Replay a race from local JSON files, tracking flags, pit stops and provisional overtakes."""

import json
import sys
from pathlib import Path

from livetiming import (
    BroadcastPhase,
    ProvisionalStatus,
    ReplaySession,
    TimingConfig,
    load_race_data,
    load_track_status,
)


def replay(race_file: Path, track_status_file: Path | None = None) -> None:
    race = load_race_data(json.loads(race_file.read_text()))
    frames = []
    if track_status_file is not None:
        frames = load_track_status(json.loads(track_status_file.read_text()))

    # Display timers are driven by race time here instead of the wall clock
    clock = {"now": 0.0}
    session = ReplaySession(
        race,
        frames,
        config=TimingConfig(arrow_duration_seconds=2.0),
        clock=lambda: clock["now"],
    )

    last_status = None
    last_phase = BroadcastPhase.HIDDEN
    pit_counts: dict[str, int] = {}
    race_second = 0
    # Red-flagged races never reach the scheduled distance
    last_second = int(race.last_lap_end) + 1
    while not session.is_race_finished and race_second <= last_second:
        clock["now"] = float(race_second)
        frame = session.tick(race_second)
        race_second += 1

        # 1. Flags
        if frame.track_status.status != last_status:
            last_status = frame.track_status.status
            print(f"[{frame.race_time:>5}s] Track status: {last_status.value}")

        # 2. Gap column
        if frame.phase != last_phase:
            last_phase = frame.phase
            print(f"[{frame.race_time:>5}s] Graphic shows: {last_phase.value}")

        # 3. Pit stops
        for entry in frame.leaderboard.entries:
            if entry.pit_stops != pit_counts.get(entry.driver, 0):
                pit_counts[entry.driver] = entry.pit_stops
                print(f"[{frame.race_time:>5}s] {entry.driver} pitted -> {entry.compound}")

        # 4. Provisional overtakes
        for entry in frame.leaderboard.entries:
            if entry.provisional == ProvisionalStatus.UP and entry.position_arrow:
                print(f"[{frame.race_time:>5}s] {entry.driver} up to P{entry.position} (provisional)")

    print(f"\n=== Classification after {race_second}s ===")
    for entry in session.tick(race_second).leaderboard.entries:
        gap = "WINNER" if entry.is_leader else (
            f"+{entry.gap_to_leader:.3f}" if entry.gap_to_leader is not None else f"+{entry.laps_down}L"
        )
        print(f"  P{entry.position}: {entry.driver} [{entry.team}] {gap}")


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("usage: race_replay.py RACE_JSON [TRACK_STATUS_JSON]")
        sys.exit(1)
    replay(Path(sys.argv[1]), Path(sys.argv[2]) if len(sys.argv) > 2 else None)
