"""Shared pytest fixtures for beankeeper tests."""

import pytest

from beankeeper.keeper import Keeper
from beankeeper.options import WithSettings
from beankeeper.settings import KeeperSettings
from beankeeper.wiring import WiringInspector


@pytest.fixture()
def keeper() -> Keeper:
    """Default keeper with type checks and settings instantiation enabled."""
    return Keeper(WithSettings(KeeperSettings(check_types=True, instantiate_settings=True)))


@pytest.fixture()
def keeper_unchecked() -> Keeper:
    """Keeper that assigns located beans without checking their types."""
    return Keeper(WithSettings(KeeperSettings(check_types=False)))


@pytest.fixture()
def wiring_inspector() -> WiringInspector:
    """WiringInspector instance with an empty cache."""
    return WiringInspector()
