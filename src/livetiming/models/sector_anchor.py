"""Sector completion checkpoint."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SectorAnchor:
    driver: str
    lap: int
    sector: int
    race_time: float  # absolute race second the sector was completed
    sector_time: float
