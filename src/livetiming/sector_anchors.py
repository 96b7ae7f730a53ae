"""Static index of per-driver sector completion times."""

from __future__ import annotations

from bisect import bisect_right

from livetiming._logging import get_logger, log_service_call
from livetiming.models.race import RaceData
from livetiming.models.sector_anchor import SectorAnchor


class SectorAnchorIndex:
    """Ordered sector anchors per driver, built once per session.

    Usage:
        index = SectorAnchorIndex.build(race_data)
        anchor = index.last_anchor_before("VER", 412.0)
    """

    def __init__(self, anchors: dict[str, list[SectorAnchor]] | None = None) -> None:
        self._anchors: dict[str, list[SectorAnchor]] = anchors or {}
        self._times: dict[str, list[float]] = {
            driver: [a.race_time for a in items] for driver, items in self._anchors.items()
        }
        self._by_key: dict[tuple[str, int, int], SectorAnchor] = {
            (a.driver, a.lap, a.sector): a
            for items in self._anchors.values()
            for a in items
        }

    @classmethod
    @log_service_call
    def build(cls, race_data: RaceData) -> SectorAnchorIndex:
        """Walk every driver's laps in order and emit one anchor per recorded sector."""
        anchors: dict[str, list[SectorAnchor]] = {}

        for driver, data in race_data.drivers.items():
            items: list[SectorAnchor] = []
            for lap in data.laps:
                if lap.lap_start_time is None or len(lap.sector_times) != 3:
                    continue

                cumulative = 0.0
                for sector, duration in enumerate(lap.sector_times, start=1):
                    # A missing split adds no anchor but keeps the chain
                    if duration is None:
                        continue
                    cumulative += duration
                    race_time = lap.lap_start_time + cumulative
                    if items and race_time <= items[-1].race_time:
                        continue
                    items.append(SectorAnchor(
                        driver=driver,
                        lap=lap.lap_number,
                        sector=sector,
                        race_time=race_time,
                        sector_time=duration,
                    ))
            anchors[driver] = items

        get_logger().debug(
            "Sector anchors built for %d drivers (%d anchors)",
            len(anchors), sum(len(v) for v in anchors.values()),
        )
        return cls(anchors)

    def last_anchor_before(self, driver: str, race_time: float) -> SectorAnchor | None:
        """Latest anchor completed at or before *race_time*, or None."""
        times = self._times.get(driver)
        if not times:
            return None
        idx = bisect_right(times, race_time)
        if idx == 0:
            return None
        return self._anchors[driver][idx - 1]

    def anchor_at(self, driver: str, lap: int, sector: int) -> SectorAnchor | None:
        """Anchor for an exact (lap, sector), regardless of the current time."""
        return self._by_key.get((driver, lap, sector))

    def anchors_for(self, driver: str) -> list[SectorAnchor]:
        return list(self._anchors.get(driver, []))

    def has_anchors(self) -> bool:
        return any(self._anchors.values())

    @property
    def driver_count(self) -> int:
        return len(self._anchors)
