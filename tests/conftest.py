"""Shared fixtures for the Birthday Game tests."""

import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pytest

from catchgame import GameConfig, GameLoop, MemoryStore, ScreenState


class StubRandom:
    """Deterministic stand-in for random.Random: fixed fraction, cycling symbols."""

    def __init__(self, fraction=0.5):
        self.fraction = fraction
        self.picks = 0

    def random(self):
        return self.fraction

    def choice(self, seq):
        value = seq[self.picks % len(seq)]
        self.picks += 1
        return value


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def game(store):
    return GameLoop(config=GameConfig(), store=store, rng=StubRandom())


@pytest.fixture
def playing(game):
    game.start()
    return game


def ticks_to(game, y):
    """Physics ticks needed for a fresh item to reach y."""
    step = game.config.fall_step
    return int(-(-y // step))


def drop_item(game, x):
    """Spawn an item at x and tick until it is gone or the round ends."""
    item = game.spawn()
    item.x = x
    while item in game.items and game.screen is ScreenState.PLAYING:
        game.physics_tick()
    return item
