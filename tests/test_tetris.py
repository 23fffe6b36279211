import random

from sparkplug.game.board import Board
from sparkplug.game.inventory import ActivePiece, Inventory
from sparkplug.game.tetris import (
    Action,
    GameState,
    TetrisGame,
    drop_row,
    hard_drop,
    move,
    new_game,
    rotate,
    tick,
)


def test_idle_tick_with_empty_inventory_pauses(rng):
    state = GameState(board=Board.empty())
    state, inv = tick(state, Inventory.empty(), rng)
    assert state.piece is None
    assert state.paused
    assert inv == Inventory.empty()


def test_idle_tick_spawns(rng):
    state, inv = tick(GameState(board=Board.empty()), Inventory({"O": 1}), rng)
    assert state.piece == ActivePiece("O", 0, 4, 0)
    assert not state.paused
    assert inv.total() == 0


def test_falling_tick_moves_down_one_row(rng):
    state = GameState(board=Board.empty(), piece=ActivePiece("T", 0, 3, 0))
    state, _ = tick(state, Inventory.empty(), rng)
    assert state.piece.y == 1


def test_piece_lands_at_bottom(small_board, rng):
    state = GameState(board=small_board, piece=ActivePiece("O", 0, 0, 2))
    state, _ = tick(state, Inventory.empty(), rng)
    assert state.piece is None
    assert state.board.to_rows() == [
        [0, 0, 0, 0],
        [0, 0, 0, 0],
        [1, 1, 0, 0],
        [1, 1, 0, 0],
    ]
    assert state.score == 0


def test_landing_clears_lines_and_scores(rng):
    board = Board.from_rows([
        [0, 0, 0, 0],
        [0, 0, 0, 0],
        [0, 0, 1, 1],
        [0, 0, 1, 1],
    ])
    state = GameState(board=board, piece=ActivePiece("O", 0, 0, 2))
    state, _ = tick(state, Inventory.empty(), rng)
    assert state.score == 200
    assert state.lines == 2
    assert int(state.board.grid.sum()) == 0


def test_landing_does_not_spawn_in_same_tick(small_board, rng):
    state = GameState(board=small_board, piece=ActivePiece("O", 0, 0, 2))
    state, inv = tick(state, Inventory({"O": 1}), rng)
    assert state.piece is None
    assert inv.count("O") == 1
    state, inv = tick(state, inv, rng)
    assert state.piece is not None


def test_move_against_wall_is_noop():
    state = GameState(board=Board.empty(), piece=ActivePiece("O", 0, 0, 5))
    assert move(state, -1) is state
    assert move(state, 1).piece.x == 1


def test_move_into_filled_cell_is_noop():
    board = Board.from_rows([[0, 0, 1, 0]] * 4)
    state = GameState(board=board, piece=ActivePiece("O", 0, 0, 0))
    assert move(state, 1) is state


def test_rotate_changes_orientation():
    state = GameState(board=Board.empty(), piece=ActivePiece("I", 0, 3, 0))
    rotated = rotate(state)
    assert rotated.piece.rotation == 1
    assert rotated.piece.shape.shape == (4, 1)
    assert rotate(rotated).piece.shape.shape == (1, 4)


def test_rotate_blocked_by_wall_is_noop():
    state = GameState(board=Board.empty(), piece=ActivePiece("I", 1, 9, 0))
    assert rotate(state) is state


def test_moves_without_piece_are_noops():
    state = GameState(board=Board.empty())
    assert move(state, 1) is state
    assert rotate(state) is state
    assert hard_drop(state) is state
    assert drop_row(state) is None


def test_hard_drop_lands_on_floor():
    state = GameState(board=Board.empty(), piece=ActivePiece("O", 0, 4, 0))
    state = hard_drop(state)
    assert state.piece is None
    grid = state.board.grid
    assert grid[18:, 4:6].sum() == 4
    assert int(grid.sum()) == 4


def test_hard_drop_stops_on_stack():
    board = Board.from_rows([[0, 0, 0, 0]] * 3 + [[1, 1, 0, 0]])
    state = GameState(board=board, piece=ActivePiece("O", 0, 0, 0))
    state = hard_drop(state)
    assert state.board.to_rows()[:3] == [
        [0, 0, 0, 0],
        [1, 1, 0, 0],
        [1, 1, 0, 0],
    ]


def test_occupied_spawn_position_blocks_without_consuming(rng):
    grid = Board.empty().get_grid()
    grid[0, 4] = 1
    state = GameState(board=Board(grid))
    state, inv = tick(state, Inventory({"O": 1}), rng)
    assert state.blocked
    assert state.piece is None
    assert inv.count("O") == 1


def test_new_game_has_garbage(rng):
    state = new_game(20, 10, 3, rng)
    assert int(state.board.grid[:17].sum()) == 0
    assert int(state.board.grid[17:].sum()) > 0
    assert state.score == 0 and state.piece is None


def test_game_hard_drop_spawns_next_piece():
    game = TetrisGame(Inventory({"O": 2}), rng=random.Random(3))
    game.tick()
    assert game.state.piece is not None
    assert game.last_consumed == "O"
    game.step(Action.HARD_DROP)
    assert game.state.piece is not None
    assert game.inventory.total() == 0
    assert int(game.state.board.grid.sum()) == 4


def test_game_pauses_when_starved_and_resumes_on_replenish():
    game = TetrisGame(Inventory.empty(), rng=random.Random(0))
    game.tick()
    assert game.state.paused
    game.replenish(Inventory({"L": 1}))
    assert not game.state.paused
    game.tick()
    assert game.state.piece.kind == "L"


def test_game_reset_keeps_inventory():
    game = TetrisGame(Inventory({"S": 2}), garbage_rows=2, rng=random.Random(5))
    game.tick()
    game.step(Action.LEFT)
    game.reset(4)
    assert game.state.piece is None
    assert game.inventory.count("S") == 1
    assert game.state.board.grid[:16].sum() == 0


def test_get_state_reports_piece_and_inventory():
    game = TetrisGame(Inventory({"J": 1}), rng=random.Random(9))
    game.tick()
    info = game.get_state()
    assert info["piece"] == {"kind": "J", "rotation": 0, "x": 3, "y": 0}
    assert info["inventory"]["J"] == 0
    assert info["board_grid"].shape == (20, 10)


def test_drop_row_reports_landing_row():
    state = GameState(board=Board.empty(), piece=ActivePiece("O", 0, 4, 0))
    assert drop_row(state) == 18
