"""
config.py

Loyalty ledger configuration.

Defaults live on LedgerSettings; each one can be overridden from the
environment:

    LOYALTY_STORAGE_DIR   folder for the members data file (data/storage)
    LOYALTY_LOG_DIR       folder for the rotating log files (data/logs)
    LOYALTY_DATA_FILE     default data file name (members.dat)
    LOYALTY_POINTS_RATE   points earned per unit paid for new members (1)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path


@dataclass
class LedgerSettings:
    storage_dir: Path = Path("data/storage")
    log_dir: Path = Path("data/logs")
    data_file: str = "members.dat"
    default_points_rate: int = 1

    @property
    def data_path(self) -> Path:
        return self.storage_dir / self.data_file


def get_settings() -> LedgerSettings:
    settings = LedgerSettings()

    storage_dir = os.environ.get("LOYALTY_STORAGE_DIR")
    if storage_dir:
        settings.storage_dir = Path(storage_dir)

    log_dir = os.environ.get("LOYALTY_LOG_DIR")
    if log_dir:
        settings.log_dir = Path(log_dir)

    data_file = os.environ.get("LOYALTY_DATA_FILE")
    if data_file:
        settings.data_file = data_file

    rate = os.environ.get("LOYALTY_POINTS_RATE")
    if rate:
        try:
            settings.default_points_rate = max(int(rate), 1)
        except ValueError:
            # keep the default on garbage input
            pass

    return settings
