"""Pytest configuration and shared fixtures."""

import pytest

from membertree import CollectErrorsPolicy, MemberTree
from sample_models import Player


@pytest.fixture
def player():
    """Provide a fresh Player graph."""
    return Player()


@pytest.fixture
def player_tree(player):
    """Provide a MemberTree built over the player fixture."""
    return MemberTree(player)


@pytest.fixture
def collect_policy():
    """Provide an error policy that records errors silently."""
    return CollectErrorsPolicy()
