"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import pytest

from fenboard.core.position import Position


@pytest.fixture
def start() -> Position:
    """Standard starting position."""
    return Position()


@pytest.fixture
def empty() -> Position:
    """A position whose board has been cleared (white to move)."""
    pos = Position()
    pos.clear()
    return pos
