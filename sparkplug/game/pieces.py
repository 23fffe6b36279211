"""
Piece definitions: every rotation state of the seven falling-block kinds.

Each rotation state is the smallest bounding-box occupancy matrix for that
orientation, so the matrices vary in size (at most 3x4). Kinds with
rotational symmetry carry fewer states: I, S and Z have 2, O has 1, and
T, J and L have 4.

Coordinate convention:
  - Row 0 is the top of a matrix and rows increase downward.
  - Column 0 is the left edge and columns increase rightward.
  - A piece is anchored on the board by the top-left corner of its matrix.
"""

from __future__ import annotations

import numpy as np

# =============================================================================
# Piece Colors (RGB)
# =============================================================================

COLOR_CYAN   = (23, 233, 224)   # I
COLOR_YELLOW = (252, 205, 4)    # O
COLOR_PURPLE = (166, 74, 201)   # T
COLOR_GREEN  = (141, 227, 111)  # S
COLOR_RED    = (255, 107, 107)  # Z
COLOR_BLUE   = (77, 163, 255)   # J
COLOR_PEACH  = (255, 180, 143)  # L

# =============================================================================
# Piece Definitions
# =============================================================================
# Rotation order is clockwise starting from the spawn orientation.

I_PIECE: dict = {
    "id": 1,
    "name": "I",
    "color": COLOR_CYAN,
    "rotations": [
        np.array([
            [1, 1, 1, 1],
        ], dtype=np.int8),
        np.array([
            [1],
            [1],
            [1],
            [1],
        ], dtype=np.int8),
    ],
}

O_PIECE: dict = {
    "id": 2,
    "name": "O",
    "color": COLOR_YELLOW,
    "rotations": [
        np.array([
            [1, 1],
            [1, 1],
        ], dtype=np.int8),
    ],
}

T_PIECE: dict = {
    "id": 3,
    "name": "T",
    "color": COLOR_PURPLE,
    "rotations": [
        np.array([
            [1, 1, 1],
            [0, 1, 0],
        ], dtype=np.int8),
        np.array([
            [1, 0],
            [1, 1],
            [1, 0],
        ], dtype=np.int8),
        np.array([
            [0, 1, 0],
            [1, 1, 1],
        ], dtype=np.int8),
        np.array([
            [0, 1],
            [1, 1],
            [0, 1],
        ], dtype=np.int8),
    ],
}

S_PIECE: dict = {
    "id": 4,
    "name": "S",
    "color": COLOR_GREEN,
    "rotations": [
        np.array([
            [0, 1, 1],
            [1, 1, 0],
        ], dtype=np.int8),
        np.array([
            [1, 0],
            [1, 1],
            [0, 1],
        ], dtype=np.int8),
    ],
}

Z_PIECE: dict = {
    "id": 5,
    "name": "Z",
    "color": COLOR_RED,
    "rotations": [
        np.array([
            [1, 1, 0],
            [0, 1, 1],
        ], dtype=np.int8),
        np.array([
            [0, 1],
            [1, 1],
            [1, 0],
        ], dtype=np.int8),
    ],
}

J_PIECE: dict = {
    "id": 6,
    "name": "J",
    "color": COLOR_BLUE,
    "rotations": [
        np.array([
            [1, 0, 0],
            [1, 1, 1],
        ], dtype=np.int8),
        np.array([
            [1, 1],
            [1, 0],
            [1, 0],
        ], dtype=np.int8),
        np.array([
            [1, 1, 1],
            [0, 0, 1],
        ], dtype=np.int8),
        np.array([
            [0, 1],
            [0, 1],
            [1, 1],
        ], dtype=np.int8),
    ],
}

L_PIECE: dict = {
    "id": 7,
    "name": "L",
    "color": COLOR_PEACH,
    "rotations": [
        np.array([
            [0, 0, 1],
            [1, 1, 1],
        ], dtype=np.int8),
        np.array([
            [1, 0],
            [1, 0],
            [1, 1],
        ], dtype=np.int8),
        np.array([
            [1, 1, 1],
            [1, 0, 0],
        ], dtype=np.int8),
        np.array([
            [1, 1],
            [0, 1],
            [0, 1],
        ], dtype=np.int8),
    ],
}

# =============================================================================
# Lookup tables
# =============================================================================

PIECE_TYPES: list[dict] = [I_PIECE, O_PIECE, T_PIECE, S_PIECE, Z_PIECE, J_PIECE, L_PIECE]

# Canonical kind order, also the order inventories are listed in.
PIECE_KINDS: list[str] = [piece["name"] for piece in PIECE_TYPES]

PIECES_BY_KIND: dict[str, dict] = {piece["name"]: piece for piece in PIECE_TYPES}

for _piece in PIECE_TYPES:
    for _shape in _piece["rotations"]:
        _shape.setflags(write=False)


def get_piece(kind: str) -> dict:
    """Return the piece dict for a kind.

    Raises:
        KeyError: If ``kind`` is not one of PIECE_KINDS.
    """
    return PIECES_BY_KIND[kind]


def rotation_count(kind: str) -> int:
    """Number of distinct rotation states for a kind."""
    return len(PIECES_BY_KIND[kind]["rotations"])


def get_shape(kind: str, rotation: int) -> np.ndarray:
    """Return the occupancy matrix of ``kind`` at ``rotation``.

    The rotation index is taken modulo the kind's rotation count, so any
    integer (including negatives) wraps onto a valid state.

    Args:
        kind: Piece kind name (one of PIECE_KINDS).
        rotation: Rotation index, wrapped.

    Returns:
        A read-only int8 array of shape (rows, cols).
    """
    rotations = PIECES_BY_KIND[kind]["rotations"]
    return rotations[rotation % len(rotations)]
