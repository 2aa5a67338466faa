"""Shared test fixtures."""

import random

import pytest

from americano.models import Player


def make_players(count: int, **kwargs) -> list[Player]:
    """``count`` active players with ids p1..pN."""
    return [Player(id=f"p{i}", name=f"Player {i}", **kwargs) for i in range(1, count + 1)]


@pytest.fixture
def rng() -> random.Random:
    """Seeded generator so every run draws the same shuffles."""
    return random.Random(1234)


@pytest.fixture
def eight_players() -> list[Player]:
    return make_players(8)


@pytest.fixture
def mixed_players() -> list[Player]:
    men = [Player(id=f"m{i}", name=f"Man {i}", sex="M") for i in range(1, 5)]
    women = [Player(id=f"w{i}", name=f"Woman {i}", sex="F") for i in range(1, 5)]
    return men + women
