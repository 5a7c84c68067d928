from __future__ import annotations

from datetime import datetime

import pytest

from tests.fakes import build_world


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 2, 2, 18, 0, 0)


@pytest.fixture
def world():
    return build_world()


@pytest.fixture
def guarded_world():
    """World whose store rejects a second open session per member, like the MySQL unique key."""
    return build_world(enforce_unique_open=True)
