import numpy as np
import pytest

from sparkplug.game.inventory import ActivePiece
from sparkplug.game.tetris import TetrisGame

pygame = pytest.importorskip("pygame")

from sparkplug.renderer import TetrisRenderer  # noqa: E402


def test_renderer_defers_window_and_fonts():
    renderer = TetrisRenderer(TetrisGame(), cell_size=20)
    assert renderer.screen is None
    assert renderer._font is None
    assert renderer._small_font is None
    assert renderer.window_width == 20 * (10 + TetrisRenderer.SIDEBAR_WIDTH_CELLS)


def test_active_piece_shape_is_an_array():
    shape = ActivePiece("T", rotation=5).shape
    assert isinstance(shape, np.ndarray)
    assert shape.sum() == 4
