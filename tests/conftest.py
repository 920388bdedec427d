import pytest

from checkers.game import Game


@pytest.fixture
def game() -> Game:
    return Game()
