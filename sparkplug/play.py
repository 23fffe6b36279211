"""
Reward-play mode: the player spends earned pieces in a pygame window.

Controls:
  - Left/Right arrow: move piece
  - Up arrow / X: rotate
  - Down arrow: soft drop
  - Space: hard drop
  - P: pause / resume
  - R: restart on a fresh garbage board (inventory is kept)
  - Escape / close window: quit
"""

from __future__ import annotations

import random
from typing import Any

try:
    import pygame
except ImportError:
    pygame = None  # type: ignore[assignment]

from sparkplug.game.inventory import Inventory
from sparkplug.game.tetris import Action, TetrisGame
from sparkplug.renderer import TetrisRenderer


KEY_MAP: dict[int, Action] = {}
if pygame is not None:
    KEY_MAP = {
        pygame.K_LEFT: Action.LEFT,
        pygame.K_RIGHT: Action.RIGHT,
        pygame.K_DOWN: Action.SOFT_DROP,
        pygame.K_SPACE: Action.HARD_DROP,
        pygame.K_UP: Action.ROTATE,
        pygame.K_x: Action.ROTATE,
    }


def play_reward(
    config: dict[str, Any],
    inventory: Inventory,
    rng: random.Random | None = None,
) -> tuple[Inventory, int]:
    """Run the reward game until the window is closed.

    Gravity ticks every ``config["tick_ms"]`` milliseconds while running.
    The game starts paused so the player can look at the board first.

    Args:
        config: Config dict loaded from settings.yaml.
        inventory: Pieces available to spend.
        rng: Random source for garbage and spawns.

    Returns:
        (remaining_inventory, best_score) for the caller to persist/report.
    """
    if pygame is None:
        raise ImportError("pygame is required for play mode. Install it: pip install pygame")

    tick_ms = config.get("tick_ms", 600)
    fps = config.get("fps", 60)
    garbage_rows = config.get("garbage_rows", 2)

    game = TetrisGame(
        inventory,
        board_width=config.get("board_width", 10),
        board_height=config.get("board_height", 20),
        garbage_rows=garbage_rows,
        rng=rng,
    )
    renderer = TetrisRenderer(game, cell_size=config.get("cell_size", 30))
    renderer.render(fps)

    running = True
    ticking = False
    best_score = 0
    last_tick = pygame.time.get_ticks()

    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
                break
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False
                    break
                if event.key == pygame.K_p:
                    ticking = not ticking
                    last_tick = pygame.time.get_ticks()
                elif event.key == pygame.K_r:
                    best_score = max(best_score, game.state.score)
                    game.reset(garbage_rows)
                    ticking = False
                elif ticking and event.key in KEY_MAP:
                    game.step(KEY_MAP[event.key])

        if not running:
            break

        now = pygame.time.get_ticks()
        if ticking and now - last_tick >= tick_ms:
            game.tick()
            last_tick = now
            # Nothing to spend: stop the clock until a new game or task.
            if game.state.paused:
                ticking = False

        renderer.render(fps)

    renderer.close()
    best_score = max(best_score, game.state.score)
    return game.inventory, best_score
