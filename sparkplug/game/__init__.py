"""Game logic: pieces, board, inventory, and game loop."""

from sparkplug.game.pieces import PIECE_TYPES, PIECE_KINDS, get_shape
from sparkplug.game.board import Board, PlacementError, create_board, generate_garbage
from sparkplug.game.inventory import ActivePiece, Inventory, spawn, grant_random_pieces
from sparkplug.game.tetris import TetrisGame, GameState, Action, tick, move, rotate, hard_drop

__all__ = [
    "PIECE_TYPES",
    "PIECE_KINDS",
    "get_shape",
    "Board",
    "PlacementError",
    "create_board",
    "generate_garbage",
    "ActivePiece",
    "Inventory",
    "spawn",
    "grant_random_pieces",
    "TetrisGame",
    "GameState",
    "Action",
    "tick",
    "move",
    "rotate",
    "hard_drop",
]
