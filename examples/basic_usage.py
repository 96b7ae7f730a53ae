"""Basic usage: load a recorded race from the API and print the leaderboard every lap."""

from livetiming import ReplayDataClient, ReplaySession


def _format_gap(gap: float | None, laps_down: int) -> str:
    if laps_down:
        return f"+{laps_down} LAP{'S' if laps_down > 1 else ''}"
    if gap is None:
        return ""
    return "LEADER" if gap == 0 else f"+{gap:.3f}"


def main() -> None:
    with ReplayDataClient() as api:
        session = ReplaySession.from_client(api, 2024, 1)

    last_lap = 0
    race_second = 0
    last_second = int(session.race_data.last_lap_end) + 1
    while not session.is_race_finished and race_second <= last_second:
        frame = session.tick(race_second)
        race_second += 1

        if frame.leaderboard.leader_lap == last_lap:
            continue
        last_lap = frame.leaderboard.leader_lap

        status = frame.track_status.display_status
        print(f"\n=== Lap {last_lap}/{frame.leaderboard.total_laps} {status.value if status else ''} ===")
        for entry in frame.leaderboard.entries[:10]:
            pit = " PIT" if entry.is_in_pit else ""
            print(
                f"  P{entry.position:<2} {entry.driver} {_format_gap(entry.gap_to_leader, entry.laps_down):>10}"
                f"  {entry.compound}{pit}"
            )

    frame = session.tick(race_second)
    print("\n=== Classification ===")
    for entry in frame.leaderboard.entries:
        print(f"  P{entry.position:<2} {entry.driver} {_format_gap(entry.gap_to_leader, entry.laps_down)}")


if __name__ == "__main__":
    main()
