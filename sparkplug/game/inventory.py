"""
Piece inventory, spawner, and random reward grants.

The inventory is the player's stock of spawnable piece kinds. Completing a
task grants a handful of random kinds; every spawn consumes one. Inventories
are immutable: ``add`` and ``take`` return new instances so callers can
persist the updated counts as plain data.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Any, Mapping

import numpy as np

from sparkplug.game.board import DEFAULT_WIDTH
from sparkplug.game.pieces import PIECE_KINDS, get_shape


@dataclass(frozen=True)
class ActivePiece:
    """A falling piece.

    Attributes:
        kind: Piece kind name.
        rotation: Rotation index (wrapped against the kind's rotation list).
        x: Column of the piece's top-left corner.
        y: Row of the piece's top-left corner.
    """

    kind: str
    rotation: int = 0
    x: int = 0
    y: int = 0

    @property
    def shape(self) -> np.ndarray:
        return get_shape(self.kind, self.rotation)

    def moved(self, dx: int = 0, dy: int = 0) -> ActivePiece:
        return ActivePiece(self.kind, self.rotation, self.x + dx, self.y + dy)

    def rotated(self, step: int = 1) -> ActivePiece:
        return ActivePiece(self.kind, self.rotation + step, self.x, self.y)


class Inventory:
    """Non-negative count per piece kind."""

    def __init__(self, counts: Mapping[str, int] | None = None) -> None:
        self._counts: dict[str, int] = {kind: 0 for kind in PIECE_KINDS}
        for kind, n in (counts or {}).items():
            if kind not in self._counts:
                raise KeyError(f"Unknown piece kind: {kind!r}")
            if n < 0:
                raise ValueError(f"Inventory count for {kind} cannot be negative: {n}")
            self._counts[kind] = int(n)

    @classmethod
    def empty(cls) -> Inventory:
        return cls()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> Inventory:
        """Load persisted counts, ignoring kinds this build doesn't know."""
        data = data or {}
        return cls({kind: int(data.get(kind, 0) or 0) for kind in PIECE_KINDS})

    def to_dict(self) -> dict[str, int]:
        return dict(self._counts)

    def count(self, kind: str) -> int:
        return self._counts[kind]

    def total(self) -> int:
        return sum(self._counts.values())

    def available(self) -> list[str]:
        """Kinds with a positive count, in canonical order."""
        return [kind for kind in PIECE_KINDS if self._counts[kind] > 0]

    def add(self, kind: str, n: int = 1) -> Inventory:
        if n < 0:
            raise ValueError(f"Cannot add a negative amount: {n}")
        counts = dict(self._counts)
        counts[kind] = counts[kind] + n
        return Inventory(counts)

    def take(self, kind: str) -> Inventory:
        """Return a new inventory with one ``kind`` removed.

        Raises:
            ValueError: If the kind's count is already zero.
        """
        if self._counts[kind] <= 0:
            raise ValueError(f"No {kind} pieces left in inventory")
        counts = dict(self._counts)
        counts[kind] -= 1
        return Inventory(counts)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Inventory):
            return NotImplemented
        return self._counts == other._counts

    def __repr__(self) -> str:
        inner = ", ".join(f"{k}={v}" for k, v in self._counts.items())
        return f"Inventory({inner})"


def spawn(
    inventory: Inventory,
    board_width: int = DEFAULT_WIDTH,
    rng: random.Random | None = None,
) -> tuple[ActivePiece | None, str | None, Inventory]:
    """Draw a random available kind and build a piece at the top center.

    Args:
        inventory: Current inventory.
        board_width: Width of the board the piece will enter.
        rng: Random source. Defaults to a fresh ``random.Random()``.

    Returns:
        (piece, consumed_kind, updated_inventory). When no kind has a
        positive count the result is (None, None, inventory) unchanged.
    """
    available = inventory.available()
    if not available:
        return None, None, inventory

    rng = rng or random.Random()
    kind = available[rng.randrange(len(available))]
    shape = get_shape(kind, 0)
    x = (board_width - shape.shape[1]) // 2
    return ActivePiece(kind, 0, x, 0), kind, inventory.take(kind)


def grant_random_pieces(
    inventory: Inventory,
    min_pieces: int = 1,
    max_pieces: int = 3,
    rng: random.Random | None = None,
) -> tuple[Inventory, list[str]]:
    """Grant between ``min_pieces`` and ``max_pieces`` random kinds.

    The count is uniform in [min_pieces, max_pieces]; each piece is an
    independent uniform draw over all kinds, duplicates allowed.

    Returns:
        (updated_inventory, granted_kinds in draw order).
    """
    if min_pieces < 0 or min_pieces > max_pieces:
        raise ValueError(f"Invalid grant range: [{min_pieces}, {max_pieces}]")
    rng = rng or random.Random()
    n = rng.randint(min_pieces, max_pieces)
    granted: list[str] = []
    for _ in range(n):
        kind = PIECE_KINDS[rng.randrange(len(PIECE_KINDS))]
        inventory = inventory.add(kind)
        granted.append(kind)
    return inventory, granted
