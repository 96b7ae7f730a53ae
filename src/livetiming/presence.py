"""Driver presence derived from telemetry frame membership."""

from __future__ import annotations

from typing import Iterable

from livetiming._logging import get_logger


class DriverPresenceTracker:
    """Marks a driver out once it disappears from the telemetry frames.

    Out is sticky: a driver that reappears stays out.
    """

    def __init__(self) -> None:
        self._active: frozenset[str] = frozenset()
        self._out: set[str] = set()

    def update(self, present_drivers: Iterable[str]) -> None:
        """Call once per telemetry frame with the drivers it contains."""
        present = frozenset(present_drivers)
        for driver in self._active - present:
            if driver not in self._out:
                self._out.add(driver)
                get_logger().info("Driver %s dropped out of telemetry", driver)
        self._active = present

    def is_out(self, driver: str) -> bool:
        return driver in self._out

    @property
    def active_drivers(self) -> frozenset[str]:
        return self._active

    @property
    def out_drivers(self) -> frozenset[str]:
        return frozenset(self._out)
