"""Clients for the recorded race data API."""

from __future__ import annotations

from pydantic import ValidationError

from livetiming._http import (
    DEFAULT_BASE_URL,
    DEFAULT_TIMEOUT,
    AsyncTransport,
    JSONDocument,
    Resource,
    SyncTransport,
)
from livetiming._logging import log_api_call
from livetiming.exceptions import RaceDataValidationError
from livetiming.models.race import RaceData
from livetiming.models.track_status import TrackInfo, TrackStatusData, TrackStatusFrame


def load_race_data(payload: JSONDocument) -> RaceData:
    """Validate a race data document (API response or local JSON file)."""
    try:
        return RaceData.model_validate(payload)
    except ValidationError as exc:
        raise RaceDataValidationError(
            f"Failed to validate race data: {exc}"
        ) from exc


def load_track_status(payload: JSONDocument) -> list[TrackStatusFrame]:
    """Validate a track status document; a bare list of frames is accepted too."""
    if isinstance(payload, list):
        payload = {"trackStatusData": payload}
    try:
        return TrackStatusData.model_validate(payload).track_status_data
    except ValidationError as exc:
        raise RaceDataValidationError(
            f"Failed to validate track status: {exc}"
        ) from exc


def _load_track_info(payload: JSONDocument) -> TrackInfo:
    if isinstance(payload, dict):
        payload = payload.get("trackInfo", payload)
    try:
        return TrackInfo.model_validate(payload)
    except ValidationError as exc:
        raise RaceDataValidationError(
            f"Failed to validate track info: {exc}"
        ) from exc


def _with_track_length(race: RaceData, info: TrackInfo) -> RaceData:
    if race.session.track_length_meters or not info.track_length:
        return race
    session = race.session.model_copy(update={"track_length_meters": info.track_length})
    return race.model_copy(update={"session": session})


class ReplayDataClient:
    """Synchronous client for the recorded race data API.

    Usage:
        with ReplayDataClient() as api:
            race = api.load_session(2024, 3)
            frames = api.track_status(2024, 3)
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._transport = SyncTransport(base_url=base_url, timeout=timeout)

    def __enter__(self) -> ReplayDataClient:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying HTTP connection."""
        self._transport.close()

    @log_api_call
    def race_data(self, year: int, round_number: int) -> RaceData:
        """Session facts plus every driver's laps and pit stops."""
        return load_race_data(self._transport.fetch(Resource.RACE, year, round_number))

    @log_api_call
    def track_status(self, year: int, round_number: int) -> list[TrackStatusFrame]:
        """Recorded flag timeline for the race."""
        return load_track_status(self._transport.fetch(Resource.TRACK_STATUS, year, round_number))

    @log_api_call
    def track_info(self, year: int, round_number: int) -> TrackInfo:
        """Circuit facts, including the track length in meters."""
        return _load_track_info(self._transport.fetch(Resource.TRACK_MAP, year, round_number))

    def load_session(self, year: int, round_number: int) -> RaceData:
        """Race data with the track length filled in from track info when missing."""
        race = self.race_data(year, round_number)
        if race.session.track_length_meters:
            return race
        return _with_track_length(race, self.track_info(year, round_number))


class AsyncReplayDataClient:
    """Asynchronous client for the recorded race data API.

    Usage:
        async with AsyncReplayDataClient() as api:
            race = await api.load_session(2024, 3)
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._transport = AsyncTransport(base_url=base_url, timeout=timeout)

    async def __aenter__(self) -> AsyncReplayDataClient:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()

    async def close(self) -> None:
        await self._transport.close()

    async def race_data(self, year: int, round_number: int) -> RaceData:
        return load_race_data(await self._transport.fetch(Resource.RACE, year, round_number))

    async def track_status(self, year: int, round_number: int) -> list[TrackStatusFrame]:
        return load_track_status(
            await self._transport.fetch(Resource.TRACK_STATUS, year, round_number)
        )

    async def track_info(self, year: int, round_number: int) -> TrackInfo:
        return _load_track_info(await self._transport.fetch(Resource.TRACK_MAP, year, round_number))

    async def load_session(self, year: int, round_number: int) -> RaceData:
        race = await self.race_data(year, round_number)
        if race.session.track_length_meters:
            return race
        return _with_track_length(race, await self.track_info(year, round_number))
