"""
Board logic for the reward-game grid (20 rows x 10 columns by default).

The board is a 2D numpy array (height x width) of int8 occupancy flags:
  - 0 = empty cell
  - 1 = occupied cell

Boards are immutable snapshots. Every operation that changes occupancy
returns a new Board and leaves its input untouched, so a game state can
be replaced as a whole on each tick without sharing a mutable grid.
"""

from __future__ import annotations

import random
from typing import Sequence

import numpy as np

DEFAULT_HEIGHT = 20
DEFAULT_WIDTH = 10

# Probability that a non-gap cell in a garbage row is filled.
GARBAGE_FILL_PROBABILITY = 0.9


class PlacementError(ValueError):
    """Raised when a shape is merged at a position that cannot hold it."""


class Board:
    """Fixed-size occupancy grid with placement checks and line clearing.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        grid: Read-only 2D numpy array of shape (height, width), dtype int8.
    """

    def __init__(self, grid: np.ndarray) -> None:
        grid = (np.asarray(grid) != 0).astype(np.int8)
        if grid.ndim != 2:
            raise ValueError(f"Board grid must be 2D, got shape {grid.shape}")
        grid.setflags(write=False)
        self.grid = grid
        self.height, self.width = grid.shape

    @classmethod
    def empty(cls, height: int = DEFAULT_HEIGHT, width: int = DEFAULT_WIDTH) -> Board:
        """Create a board with every cell empty."""
        return cls(np.zeros((height, width), dtype=np.int8))

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> Board:
        """Build a board from nested row lists (truthy = occupied)."""
        return cls(np.array(rows, dtype=np.int8))

    def can_place(self, shape: np.ndarray, x: int, y: int) -> bool:
        """Check whether ``shape`` anchored at column x, row y fits.

        A position is valid if every filled cell of the shape:
          - Is within the board boundaries (0 <= col < width, 0 <= row < height).
          - Does not overlap a filled cell on the board grid.

        Args:
            shape: Occupancy matrix of the piece orientation.
            x: Column offset of the shape's top-left corner.
            y: Row offset of the shape's top-left corner.

        Returns:
            True if the position is valid, False otherwise.
        """
        rows, cols = shape.shape
        for r in range(rows):
            for c in range(cols):
                if shape[r, c] != 0:
                    board_row = y + r
                    board_col = x + c
                    # Check boundaries
                    if board_col < 0 or board_col >= self.width:
                        return False
                    if board_row < 0 or board_row >= self.height:
                        return False
                    # Check collision with existing blocks
                    if self.grid[board_row, board_col] != 0:
                        return False
        return True

    def merge(self, shape: np.ndarray, x: int, y: int) -> Board:
        """Return a new board with ``shape`` locked in at (x, y).

        Raises:
            PlacementError: If the placement is out of bounds or overlaps
                an occupied cell. The board is never partially written.
        """
        if not self.can_place(shape, x, y):
            raise PlacementError(
                f"cannot merge {shape.shape[0]}x{shape.shape[1]} shape at x={x}, y={y}"
            )
        grid = self.grid.copy()
        rows, cols = shape.shape
        for r in range(rows):
            for c in range(cols):
                if shape[r, c] != 0:
                    grid[y + r, x + c] = 1
        return Board(grid)

    def clear_lines(self) -> tuple[Board, int]:
        """Remove all fully filled rows and shift everything above them down.

        Returns:
            (board, lines_cleared) where the board keeps the same dimensions,
            with one empty row inserted on top for each removed row.
        """
        full = np.all(self.grid != 0, axis=1)
        lines_cleared = int(full.sum())
        if lines_cleared == 0:
            return self, 0

        remaining = self.grid[~full]
        empty_rows = np.zeros((lines_cleared, self.width), dtype=np.int8)
        return Board(np.vstack([empty_rows, remaining])), lines_cleared

    def full_rows(self) -> list[int]:
        """Indices of rows whose every cell is occupied."""
        return [int(r) for r in np.flatnonzero(np.all(self.grid != 0, axis=1))]

    def get_grid(self) -> np.ndarray:
        """Return a writable copy of the board grid."""
        return self.grid.copy()

    def to_rows(self) -> list[list[int]]:
        """Return the grid as nested Python lists."""
        return self.grid.tolist()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return np.array_equal(self.grid, other.grid)

    def __repr__(self) -> str:
        return f"Board(height={self.height}, width={self.width}, filled={int(self.grid.sum())})"


def create_board(height: int = DEFAULT_HEIGHT, width: int = DEFAULT_WIDTH) -> Board:
    """Return an empty board of the given size."""
    return Board.empty(height, width)


def generate_garbage(
    height: int,
    width: int,
    rows: int,
    rng: random.Random | None = None,
) -> Board:
    """Create a board whose bottom ``rows`` rows are pre-filled with garbage.

    Each garbage row leaves one random gap column empty and fills every
    other cell with probability GARBAGE_FILL_PROBABILITY. A row that still
    comes out full gets one random cell cleared, so no generated row can
    be cleared before the first piece lands.

    Args:
        height: Board height in rows.
        width: Board width in columns.
        rows: Number of garbage rows; clamped to [0, height].
        rng: Random source. Defaults to a fresh ``random.Random()``.

    Returns:
        A new Board.
    """
    rng = rng or random.Random()
    rows = max(0, min(height, rows))
    grid = np.zeros((height, width), dtype=np.int8)
    for i in range(rows):
        y = height - 1 - i
        gap = rng.randrange(width)
        for x in range(width):
            if x == gap:
                grid[y, x] = 0
            else:
                grid[y, x] = 1 if rng.random() < GARBAGE_FILL_PROBABILITY else 0
        if np.all(grid[y] != 0):
            grid[y, rng.randrange(width)] = 0
    return Board(grid)
