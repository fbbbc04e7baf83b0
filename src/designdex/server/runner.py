"""Uvicorn launcher guarded by a server.lock file in the data dir."""

from __future__ import annotations

import json
import logging
import os
import signal
from pathlib import Path

from designdex.config import CONFIG_FILENAME, Config, get_data_dir, load_config

logger = logging.getLogger(__name__)


class ServerRunningError(RuntimeError):
    def __init__(self, lock: dict) -> None:
        self.lock = lock
        super().__init__(
            f"designdex is already serving {lock.get('patterns_dir')} "
            f"on port {lock.get('port')} (pid {lock.get('pid')})"
        )


def get_lock_path() -> Path:
    return get_data_dir() / "server.lock"


def write_server_lock(config: Config) -> Path:
    lock_path = get_lock_path()
    lock_path.parent.mkdir(parents=True, exist_ok=True)
    lock = {
        "port": config.port,
        "pid": os.getpid(),
        "patterns_dir": str(config.patterns_path.resolve()),
    }
    lock_path.write_text(json.dumps(lock))
    return lock_path


def read_server_lock() -> dict:
    try:
        data = json.loads(get_lock_path().read_text())
    except (FileNotFoundError, json.JSONDecodeError):
        return {}
    return data if isinstance(data, dict) else {}


def clear_server_lock() -> None:
    get_lock_path().unlink(missing_ok=True)


def find_running_server() -> dict | None:
    """Lock contents if the process that wrote it is still alive; stale locks are removed."""
    lock = read_server_lock()
    pid = lock.get("pid")
    if not isinstance(pid, int):
        return None
    if pid != os.getpid() and _pid_alive(pid):
        return lock
    logger.debug("Removing stale server lock for pid %d", pid)
    clear_server_lock()
    return None


def _pid_alive(pid: int) -> bool:
    try:
        os.kill(pid, 0)
    except ProcessLookupError:
        return False
    except PermissionError:
        return True
    return True


def run_server(config: Config | None = None) -> None:
    """Serve the pattern store over HTTP until SIGINT/SIGTERM."""
    import uvicorn

    from designdex.server.app import create_app

    if config is None:
        config = load_config(Path.cwd() / CONFIG_FILENAME)

    running = find_running_server()
    if running is not None:
        raise ServerRunningError(running)

    write_server_lock(config)

    def cleanup(signum, frame):
        clear_server_lock()
        raise SystemExit(0)

    signal.signal(signal.SIGTERM, cleanup)
    signal.signal(signal.SIGINT, cleanup)

    try:
        uvicorn.run(
            create_app(config=config),
            host="127.0.0.1",
            port=config.port,
            log_level=config.log_level.lower(),
        )
    finally:
        clear_server_lock()
