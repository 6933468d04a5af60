"""
Tests for settings and logger setup
"""
import logging
from pathlib import Path

from config import LedgerSettings, get_settings
from utils.logger import get_logger, setup_logger


def test_defaults(monkeypatch):
    for var in ("LOYALTY_STORAGE_DIR", "LOYALTY_LOG_DIR", "LOYALTY_DATA_FILE", "LOYALTY_POINTS_RATE"):
        monkeypatch.delenv(var, raising=False)
    settings = get_settings()
    assert settings == LedgerSettings()
    assert settings.data_path == Path("data/storage") / "members.dat"


def test_environment_overrides(isolated_settings, tmp_path, monkeypatch):
    monkeypatch.setenv("LOYALTY_DATA_FILE", "roster.dat")
    monkeypatch.setenv("LOYALTY_POINTS_RATE", "3")
    settings = get_settings()
    assert settings.storage_dir == tmp_path / "storage"
    assert settings.log_dir == tmp_path / "logs"
    assert settings.data_path == tmp_path / "storage" / "roster.dat"
    assert settings.default_points_rate == 3


def test_bad_points_rate_falls_back(monkeypatch):
    monkeypatch.setenv("LOYALTY_POINTS_RATE", "lots")
    assert get_settings().default_points_rate == 1
    monkeypatch.setenv("LOYALTY_POINTS_RATE", "-4")
    assert get_settings().default_points_rate == 1


def test_setup_logger_is_idempotent(tmp_path):
    logger = logging.getLogger("loyalty")
    saved = list(logger.handlers)
    for h in saved:
        logger.removeHandler(h)
    try:
        first = setup_logger(tmp_path / "logs")
        count = len(first.handlers)
        second = setup_logger(tmp_path / "logs")
        assert first is second
        assert len(second.handlers) == count == 2
        assert (tmp_path / "logs" / "loyalty.log").exists()
        assert get_logger("registry").parent is first
    finally:
        for h in list(logger.handlers):
            h.close()
            logger.removeHandler(h)
        for h in saved:
            logger.addHandler(h)
