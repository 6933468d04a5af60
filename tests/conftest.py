"""
Shared fixtures for the loyalty ledger tests.
"""
from datetime import datetime

import pytest

from data.repository import MemberRepository
from models.member import MemberAccount
from services.registry_service import MemberRegistry

THIS_YEAR = 2025


@pytest.fixture
def isolated_settings(tmp_path, monkeypatch):
    """Point the configured folders at a temporary directory"""
    monkeypatch.setenv("LOYALTY_STORAGE_DIR", str(tmp_path / "storage"))
    monkeypatch.setenv("LOYALTY_LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.delenv("LOYALTY_DATA_FILE", raising=False)
    monkeypatch.delenv("LOYALTY_POINTS_RATE", raising=False)


@pytest.fixture
def now():
    return datetime(THIS_YEAR, 6, 15, 12, 0, 0)


@pytest.fixture
def repo(tmp_path):
    return MemberRepository(tmp_path / "storage")


@pytest.fixture
def registry(repo):
    return MemberRegistry(repo=repo, default_points_rate=1)


@pytest.fixture
def populated_registry(registry):
    """Three members: ids 1, 2, 3"""
    registry.add("Alice", "13800000001", "1990-01-01")
    registry.add("Bob", "13800000002", "1985-05-20")
    registry.add("Carol", "13800000003", "2000-12-31")
    return registry


@pytest.fixture
def account():
    return MemberAccount(1, "Alice", "13800000001", "1990-01-01")
