"""
Pytest configuration and fixtures for vibelogger tests
"""

from pathlib import Path

import pytest

from vibelogger.logger.engine import VibeLogger


@pytest.fixture(autouse=True)
def clean_vibe_env(monkeypatch):
    """Keep VIBE_* variables from the developer's shell out of tests"""
    import os

    for key in list(os.environ):
        if key.upper().startswith("VIBE_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def memory_logger():
    """Logger that keeps entries in memory and writes no file"""
    return VibeLogger({"keep_logs_in_memory": True, "auto_save": False})


@pytest.fixture
def log_file(tmp_path: Path) -> Path:
    """Log file path inside a directory that does not exist yet"""
    return tmp_path / "logs" / "nested" / "test.log"


@pytest.fixture
def file_logger(log_file: Path):
    """Logger persisting to ``log_file``, closed after the test"""
    logger = VibeLogger(
        {
            "log_file": str(log_file),
            "auto_save": True,
            "keep_logs_in_memory": True,
            "create_dirs": True,
        }
    )
    yield logger
    logger.close()


@pytest.fixture
def sample_log_file(tmp_path: Path) -> Path:
    """A persisted log file with three records and one malformed line"""
    logger = VibeLogger({"log_file": str(tmp_path / "sample.log")})
    logger.info("fetch_user", "Message 1", context={"user_id": 1})
    logger.error("save_data", "Message 2")
    logger.warning("fetch_user", "Message 3")
    logger.close()

    path = tmp_path / "sample.log"
    with open(path, "a", encoding="utf-8") as f:
        f.write('{"truncated": \n')
    return path
