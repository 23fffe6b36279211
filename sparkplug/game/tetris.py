"""
Game loop for the reward minigame: gravity ticks, moves, and landing.

The transition functions are pure: each takes a GameState snapshot and
returns the next one. TetrisGame wraps them as the single writer that owns
the current state, the inventory, and the random source, so the UI callbacks
and the tick source only ever replace whole states.

Ruleset: one row per tick, no hold, no wall kicks, 100 points per cleared
row. Running out of inventory pauses the game until pieces are granted.
"""

from __future__ import annotations

import enum
import random
from dataclasses import dataclass, replace
from typing import Any

from sparkplug.game.board import DEFAULT_HEIGHT, DEFAULT_WIDTH, Board, generate_garbage
from sparkplug.game.inventory import ActivePiece, Inventory, spawn

POINTS_PER_LINE = 100


class Action(enum.IntEnum):
    """Player actions accepted by TetrisGame.step()."""
    LEFT = 0
    RIGHT = 1
    ROTATE = 2
    SOFT_DROP = 3
    HARD_DROP = 4
    NOOP = 5


@dataclass(frozen=True)
class GameState:
    """Snapshot of one game.

    Attributes:
        board: Locked cells.
        piece: The falling piece, or None while idle.
        paused: True when the last spawn attempt found an empty inventory.
        blocked: True when a piece was available but its spawn position
            was already occupied.
        score: 100 points per cleared row.
        lines: Total rows cleared this game.
    """

    board: Board
    piece: ActivePiece | None = None
    paused: bool = False
    blocked: bool = False
    score: int = 0
    lines: int = 0

    @property
    def falling(self) -> bool:
        return self.piece is not None


def new_game(
    height: int = DEFAULT_HEIGHT,
    width: int = DEFAULT_WIDTH,
    garbage_rows: int = 0,
    rng: random.Random | None = None,
) -> GameState:
    """Start a game on a board pre-filled with ``garbage_rows`` garbage rows."""
    return GameState(board=generate_garbage(height, width, garbage_rows, rng))


def _land(state: GameState) -> GameState:
    """Lock the falling piece where it is and clear any full rows."""
    piece = state.piece
    merged = state.board.merge(piece.shape, piece.x, piece.y)
    board, lines = merged.clear_lines()
    return replace(
        state,
        board=board,
        piece=None,
        score=state.score + lines * POINTS_PER_LINE,
        lines=state.lines + lines,
    )


def ensure_piece(
    state: GameState,
    inventory: Inventory,
    rng: random.Random | None = None,
) -> tuple[GameState, Inventory]:
    """Spawn a piece if none is falling.

    An empty inventory leaves the state idle with ``paused`` set. A spawn
    position that is already occupied leaves the state idle with
    ``blocked`` set and does not consume the piece.
    """
    if state.piece is not None:
        return state, inventory

    piece, _, remaining = spawn(inventory, state.board.width, rng)
    if piece is None:
        return replace(state, paused=True), inventory
    if not state.board.can_place(piece.shape, piece.x, piece.y):
        return replace(state, paused=False, blocked=True), inventory
    return replace(state, piece=piece, paused=False, blocked=False), remaining


def tick(
    state: GameState,
    inventory: Inventory,
    rng: random.Random | None = None,
) -> tuple[GameState, Inventory]:
    """Advance the game by one gravity step.

    While falling, the piece moves down one row, or lands if it can't.
    While idle, a piece is spawned from the inventory if possible.

    Returns:
        (new_state, updated_inventory)
    """
    piece = state.piece
    if piece is None:
        return ensure_piece(state, inventory, rng)

    if state.board.can_place(piece.shape, piece.x, piece.y + 1):
        return replace(state, piece=piece.moved(dy=1)), inventory
    return _land(state), inventory


def move(state: GameState, dx: int) -> GameState:
    """Shift the falling piece horizontally; blocked moves are no-ops."""
    piece = state.piece
    if piece is None:
        return state
    candidate = piece.moved(dx=dx)
    if state.board.can_place(candidate.shape, candidate.x, candidate.y):
        return replace(state, piece=candidate)
    return state


def rotate(state: GameState) -> GameState:
    """Rotate the falling piece clockwise in place; blocked rotations are no-ops."""
    piece = state.piece
    if piece is None:
        return state
    candidate = piece.rotated()
    if state.board.can_place(candidate.shape, candidate.x, candidate.y):
        return replace(state, piece=candidate)
    return state


def soft_drop(state: GameState) -> GameState:
    """Move the falling piece down one row if there is room."""
    piece = state.piece
    if piece is None:
        return state
    candidate = piece.moved(dy=1)
    if state.board.can_place(candidate.shape, candidate.x, candidate.y):
        return replace(state, piece=candidate)
    return state


def drop_row(state: GameState) -> int | None:
    """Row the falling piece would land on if hard-dropped, or None with no piece."""
    piece = state.piece
    if piece is None:
        return None
    y = piece.y
    while state.board.can_place(piece.shape, piece.x, y + 1):
        y += 1
    return y


def hard_drop(state: GameState) -> GameState:
    """Drop the falling piece as far as it goes and land it immediately."""
    if state.piece is None:
        return state
    dropped = replace(state, piece=replace(state.piece, y=drop_row(state)))
    return _land(dropped)


class TetrisGame:
    """Single-writer orchestrator for the reward game.

    Attributes:
        state: Current GameState snapshot.
        inventory: Current piece inventory.
        height: Board height in rows.
        width: Board width in columns.
        last_consumed: Kind of the most recently spawned piece, or None.
    """

    def __init__(
        self,
        inventory: Inventory | None = None,
        board_width: int = DEFAULT_WIDTH,
        board_height: int = DEFAULT_HEIGHT,
        garbage_rows: int = 0,
        rng: random.Random | None = None,
    ) -> None:
        self.width = board_width
        self.height = board_height
        self.rng = rng or random.Random()
        self.inventory = inventory or Inventory.empty()
        self.last_consumed: str | None = None
        self.state = new_game(board_height, board_width, garbage_rows, self.rng)

    def reset(self, garbage_rows: int = 0) -> GameState:
        """Start over on a fresh garbage board. The inventory is kept."""
        self.state = new_game(self.height, self.width, garbage_rows, self.rng)
        self.last_consumed = None
        return self.state

    def replenish(self, inventory: Inventory) -> None:
        """Swap in an inventory updated elsewhere (e.g. after a task completion)."""
        self.inventory = inventory
        if self.state.paused:
            self.state = replace(self.state, paused=False)

    def tick(self) -> GameState:
        """Apply one gravity step."""
        self._apply(*tick(self.state, self.inventory, self.rng))
        return self.state

    def step(self, action: int) -> GameState:
        """Apply one player action.

        A hard drop lands the piece and immediately spawns the next one if
        the inventory allows. Every other action leaves spawning to tick().
        """
        if action == Action.LEFT:
            self.state = move(self.state, -1)
        elif action == Action.RIGHT:
            self.state = move(self.state, 1)
        elif action == Action.ROTATE:
            self.state = rotate(self.state)
        elif action == Action.SOFT_DROP:
            self.state = soft_drop(self.state)
        elif action == Action.HARD_DROP:
            if self.state.piece is not None:
                self.state = hard_drop(self.state)
                self._apply(*ensure_piece(self.state, self.inventory, self.rng))
        return self.state

    def get_state(self) -> dict[str, Any]:
        """Return a plain dict describing the observable game state."""
        piece = self.state.piece
        return {
            "board_grid": self.state.board.get_grid(),
            "piece": None if piece is None else {
                "kind": piece.kind, "rotation": piece.rotation, "x": piece.x, "y": piece.y,
            },
            "paused": self.state.paused,
            "blocked": self.state.blocked,
            "score": self.state.score,
            "lines": self.state.lines,
            "inventory": self.inventory.to_dict(),
            "last_consumed": self.last_consumed,
        }

    def _apply(self, state: GameState, inventory: Inventory) -> None:
        if state.piece is not None and self.state.piece is None:
            self.last_consumed = state.piece.kind
        self.state = state
        self.inventory = inventory
