"""Shared fixtures for the Lane Shooter test suite."""

import random

import pytest

from laneshooter.config.settings import Settings
from laneshooter.core.events import EventBus
from laneshooter.game.session import Session, World, start_session
from laneshooter.game.spawner import Spawner


class QuietSpawner(Spawner):
    """Spawner that never fires, for scenarios with hand-placed enemies."""

    def due(self, timestamp, last_spawn, difficulty):
        return False


@pytest.fixture
def settings():
    return Settings(_env_file=None)


@pytest.fixture
def world(settings):
    return World.from_settings(settings)


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def spawner(world, rng, settings):
    return Spawner(world.lanes, rng, settings.entities, settings.timing)


@pytest.fixture
def quiet_spawner(world, rng, settings):
    return QuietSpawner(world.lanes, rng, settings.entities, settings.timing)


@pytest.fixture
def active_session():
    return start_session(Session())


@pytest.fixture
def event_bus():
    return EventBus()
