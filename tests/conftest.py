import random

import pytest

from sparkplug.game.board import Board


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def small_board():
    return Board.empty(4, 4)
