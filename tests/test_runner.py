"""Tests for server/runner.py — server lock handling."""

import json
import os
from unittest.mock import patch

import pytest

from designdex.config import Config
from designdex.server import runner
from designdex.server.runner import (
    ServerRunningError,
    clear_server_lock,
    find_running_server,
    get_lock_path,
    read_server_lock,
    run_server,
    write_server_lock,
)


@pytest.fixture(autouse=True)
def data_dir(tmp_path, monkeypatch):
    path = tmp_path / "data"
    monkeypatch.setenv("DESIGNDEX_DATA_DIR", str(path))
    return path


class TestServerLock:
    def test_lock_path_in_data_dir(self, data_dir):
        assert get_lock_path() == data_dir / "server.lock"

    def test_write_and_read(self, tmp_path):
        config = Config(port=5123, patterns_dir=str(tmp_path / "kb"))
        write_server_lock(config)
        lock = read_server_lock()
        assert lock["port"] == 5123
        assert lock["pid"] == os.getpid()
        assert lock["patterns_dir"] == str((tmp_path / "kb").resolve())

    def test_read_missing_or_corrupt(self, data_dir):
        assert read_server_lock() == {}
        data_dir.mkdir()
        get_lock_path().write_text("{oops")
        assert read_server_lock() == {}
        get_lock_path().write_text("[1, 2]")
        assert read_server_lock() == {}

    def test_clear_is_idempotent(self, tmp_path):
        write_server_lock(Config(patterns_dir=str(tmp_path)))
        clear_server_lock()
        clear_server_lock()
        assert not get_lock_path().exists()


def _write_lock(data_dir, pid):
    data_dir.mkdir(exist_ok=True)
    lock = {"port": 41888, "pid": pid, "patterns_dir": "/srv/kb"}
    get_lock_path().write_text(json.dumps(lock))
    return lock


class TestFindRunningServer:
    def test_no_lock(self):
        assert find_running_server() is None

    def test_live_process(self, data_dir):
        lock = _write_lock(data_dir, 4242)
        with patch.object(runner, "_pid_alive", return_value=True):
            assert find_running_server() == lock

    def test_stale_lock_removed(self, data_dir):
        _write_lock(data_dir, 4242)
        with patch.object(runner, "_pid_alive", return_value=False):
            assert find_running_server() is None
        assert not get_lock_path().exists()


class TestRunServer:
    def test_refuses_second_server(self, data_dir):
        _write_lock(data_dir, 4242)
        with patch.object(runner, "_pid_alive", return_value=True):
            with patch("uvicorn.run") as uvicorn_run:
                with pytest.raises(ServerRunningError, match="/srv/kb"):
                    run_server(Config())
        uvicorn_run.assert_not_called()

    def test_runs_uvicorn_and_clears_lock(self, tmp_path):
        config = Config(port=5123, patterns_dir=str(tmp_path / "kb"), log_level="INFO")
        with (
            patch("uvicorn.run") as uvicorn_run,
            patch("signal.signal"),
        ):
            run_server(config)
        kwargs = uvicorn_run.call_args.kwargs
        assert kwargs["port"] == 5123
        assert kwargs["host"] == "127.0.0.1"
        assert kwargs["log_level"] == "info"
        assert not get_lock_path().exists()
