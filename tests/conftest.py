from __future__ import annotations

import os

# Headless SDL so display-dependent code runs on CI machines.
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import random
from collections.abc import Generator

import pygame
import pytest

from language_jumper import Game, GameConfig


@pytest.fixture(autouse=True)
def _pygame_init() -> None:
    # Some tests end with pygame.quit(); every test starts initialised.
    pygame.init()


@pytest.fixture()
def pygame_display() -> Generator[pygame.Surface, None, None]:
    screen = pygame.display.set_mode((1, 1))
    yield screen
    pygame.quit()


@pytest.fixture()
def config() -> GameConfig:
    return GameConfig()


@pytest.fixture()
def game(config: GameConfig) -> Game:
    return Game(config, random.Random(1234))


@pytest.fixture()
def grounded_game(game: Game) -> Game:
    """A game whose player already stands on the ground, with no icons on screen."""
    game.player.pos.y = game.config.ground_level
    game.player.vel.y = 0.0
    return game
