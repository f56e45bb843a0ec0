"""Shared pytest fixtures for the parish dashboard tests."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from services import data_loader
from services.event_bus import EventBus, Topic


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    """A data directory with every record store and the audit log created."""
    directory = tmp_path / "data"
    data_loader.ensure_data_files(directory, directory / "audit_log.csv")
    return directory


@pytest.fixture
def audit_file(data_dir: Path) -> Path:
    return data_dir / "audit_log.csv"


@pytest.fixture
def bus_events():
    """An EventBus plus the list of (topic, payload) pairs it delivered."""
    bus = EventBus()
    received = []
    for topic in Topic:
        bus.subscribe(topic, lambda topic, payload: received.append((topic, payload)))
    return bus, received


@pytest.fixture
def fake_st() -> MagicMock:
    """A MagicMock standing in for the ``streamlit`` module inside a component."""
    fake = MagicMock()
    fake.session_state = {}

    def columns(spec, **kwargs):
        count = spec if isinstance(spec, int) else len(spec)
        return [MagicMock() for _ in range(count)]

    fake.columns.side_effect = columns
    return fake
