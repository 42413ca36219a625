"""
Global test fixtures for the replica set bootstrap.

This module provides shared fixtures for all tests including:
- The default replica set layout as raw documents
- Mock async MongoDB clients with scripted admin command replies
- Settings built without reading the environment
"""

import sys
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

# Add backend to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))


# =============================================================================
# Replica Set Fixtures
# =============================================================================

@pytest.fixture
def default_members() -> list[dict[str, Any]]:
    """The three-member layout as it appears in the shell literal."""
    return [
        {"_id": 0, "host": "mongo1:27017", "priority": 2},
        {"_id": 1, "host": "mongo2:27017", "priority": 1},
        {"_id": 2, "host": "mongo3:27017", "priority": 1},
    ]


@pytest.fixture
def default_spec():
    """The default ReplicaSetSpec."""
    from app.models.replica_set import default_replica_set
    return default_replica_set()


@pytest.fixture
def primary_status() -> dict[str, Any]:
    """A replSetGetStatus reply after mongo1 won the election."""
    return {
        "set": "myReplicaSet",
        "myState": 1,
        "members": [
            {"_id": 0, "name": "mongo1:27017", "state": 1, "stateStr": "PRIMARY"},
            {"_id": 1, "name": "mongo2:27017", "state": 2, "stateStr": "SECONDARY"},
            {"_id": 2, "name": "mongo3:27017", "state": 2, "stateStr": "SECONDARY"},
        ],
        "ok": 1,
    }


@pytest.fixture
def electing_status() -> dict[str, Any]:
    """A replSetGetStatus reply while the election is still running."""
    return {
        "set": "myReplicaSet",
        "myState": 2,
        "members": [
            {"_id": 0, "name": "mongo1:27017", "state": 2, "stateStr": "SECONDARY"},
            {"_id": 1, "name": "mongo2:27017", "state": 0, "stateStr": "STARTUP"},
            {"_id": 2, "name": "mongo3:27017", "state": 0, "stateStr": "STARTUP"},
        ],
        "ok": 1,
    }


# =============================================================================
# MongoDB Fixtures
# =============================================================================

@pytest.fixture
def mock_admin_client():
    """
    A mock AsyncIOMotorClient whose admin.command is an AsyncMock.

    Configure replies per test:

        mock_admin_client.admin.command.side_effect = [...]
    """
    client = MagicMock()
    client.admin.command = AsyncMock(return_value={"ok": 1})
    return client


# =============================================================================
# Settings Fixtures
# =============================================================================

@pytest.fixture
def settings_factory():
    """
    Build Settings without reading .env files.

    Usage:
        def test_something(settings_factory):
            settings = settings_factory(wait_for_primary=False)
    """
    from app.config import Settings

    def _make(**overrides) -> Settings:
        values = {
            "mongo_uri": "mongodb://test:27017",
            "server_selection_timeout_ms": 1000,
            "status_poll_interval_seconds": 0,
            "primary_wait_timeout_seconds": 1,
        }
        values.update(overrides)
        return Settings(_env_file=None, **values)

    return _make
