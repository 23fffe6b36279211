import numpy as np
import pytest

from sparkplug.game.pieces import PIECE_KINDS, PIECE_TYPES, get_shape, rotation_count


def test_seven_kinds_in_canonical_order():
    assert PIECE_KINDS == ["I", "O", "T", "S", "Z", "J", "L"]


@pytest.mark.parametrize("kind,expected", [("I", 2), ("O", 1), ("T", 4), ("S", 2), ("Z", 2), ("J", 4), ("L", 4)])
def test_rotation_counts(kind, expected):
    assert rotation_count(kind) == expected


def test_every_state_has_four_cells_and_fits_in_3x4():
    for piece in PIECE_TYPES:
        for shape in piece["rotations"]:
            assert int(shape.sum()) == 4
            rows, cols = shape.shape
            assert max(rows, cols) <= 4
            assert min(rows, cols) <= 3


def test_rotation_index_wraps():
    assert np.array_equal(get_shape("T", 5), get_shape("T", 1))
    assert np.array_equal(get_shape("I", -1), get_shape("I", 1))
    assert np.array_equal(get_shape("O", 99), get_shape("O", 0))


def test_spawn_orientation_of_i_is_horizontal():
    assert get_shape("I", 0).shape == (1, 4)


def test_shapes_are_read_only():
    with pytest.raises(ValueError):
        get_shape("L", 0)[0, 0] = 0


def test_unknown_kind_raises():
    with pytest.raises(KeyError):
        get_shape("Q", 0)
