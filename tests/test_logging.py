"""Tests for livetiming._logging: decorators and file logging."""

from __future__ import annotations

import logging

import pytest

from livetiming import _logging as mod
from livetiming._logging import get_logger, log_api_call, log_service_call


class _FakeLoader:
    """Minimal class to test logging decorators."""

    @log_api_call
    def get_frames(self, year: int) -> list[dict]:
        return [{"raceSecond": 0}, {"raceSecond": 10}]

    @log_api_call
    def get_race(self, year: int, round_number: int) -> dict:
        return {"session": {}}

    @log_api_call
    def get_failing(self, key: int) -> list[dict]:
        raise ValueError("test error")

    @log_service_call
    def build(self, data: list) -> dict:
        return {"result": len(data)}

    @log_service_call
    def build_failing(self) -> None:
        raise RuntimeError("service error")


@pytest.fixture
def loader():
    return _FakeLoader()


def _log_text(log_dir) -> str:
    return (log_dir / "livetiming.log").read_text()


class TestLogApiCall:
    def test_returns_result(self, loader) -> None:
        assert loader.get_frames(2024) == [{"raceSecond": 0}, {"raceSecond": 10}]

    def test_logs_call_and_ok(self, loader, _reset_logger_and_paths) -> None:
        loader.get_frames(2024)
        content = _log_text(_reset_logger_and_paths)
        assert "CALL: _FakeLoader.get_frames(2024)" in content
        assert "OK: _FakeLoader.get_frames(2024) -> 2 items" in content

    def test_single_object_counts_as_one(self, loader, _reset_logger_and_paths) -> None:
        loader.get_race(2024, 3)
        assert "-> 1 items" in _log_text(_reset_logger_and_paths)

    def test_logs_failure(self, loader, _reset_logger_and_paths) -> None:
        with pytest.raises(ValueError, match="test error"):
            loader.get_failing(123)
        content = _log_text(_reset_logger_and_paths)
        assert "FAIL: _FakeLoader.get_failing(123)" in content
        assert "ValueError" in content

    def test_preserves_function_name(self, loader) -> None:
        assert loader.get_frames.__name__ == "get_frames"


class TestLogServiceCall:
    def test_returns_result(self, loader) -> None:
        assert loader.build([1, 2, 3]) == {"result": 3}

    def test_logs_service_call(self, loader, _reset_logger_and_paths) -> None:
        loader.build([1, 2])
        content = _log_text(_reset_logger_and_paths)
        assert "SERVICE CALL: _FakeLoader.build(<list>)" in content
        assert "SERVICE OK: _FakeLoader.build" in content

    def test_logs_service_failure(self, loader, _reset_logger_and_paths) -> None:
        with pytest.raises(RuntimeError, match="service error"):
            loader.build_failing()
        content = _log_text(_reset_logger_and_paths)
        assert "SERVICE FAIL: _FakeLoader.build_failing" in content
        assert "RuntimeError" in content


class TestGetLogger:
    def test_same_instance(self) -> None:
        assert get_logger() is get_logger()

    def test_single_handler(self) -> None:
        get_logger()
        mod._logger = None
        logger = get_logger()
        assert len(logger.handlers) == 1

    def test_does_not_propagate(self) -> None:
        assert not get_logger().propagate
        assert get_logger().name == "livetiming"

    def test_creates_log_directory(self, tmp_path) -> None:
        new_dir = tmp_path / "nested" / "logs"
        mod._LOG_DIR = str(new_dir)
        mod._LOG_FILE = str(new_dir / "livetiming.log")
        mod._logger = None
        logging.getLogger(mod.LOGGER_NAME).handlers.clear()

        _FakeLoader().build([])

        assert new_dir.exists()
        assert (new_dir / "livetiming.log").exists()
