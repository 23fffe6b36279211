"""
Pygame renderer for the reward game.

Draws the board grid, active piece, ghost piece, and a sidebar with the
piece inventory, score, lines, and the paused/blocked status.
"""

from __future__ import annotations

try:
    import pygame
except ImportError:
    pygame = None  # type: ignore[assignment]

from sparkplug.game.pieces import PIECE_KINDS, PIECES_BY_KIND, get_shape
from sparkplug.game.tetris import TetrisGame, drop_row


# ── Color constants ───────────────────────────────────────────────────────
BACKGROUND_COLOR = (23, 23, 23)
GRID_LINE_COLOR = (45, 45, 45)
BORDER_COLOR = (200, 200, 200)
TEXT_COLOR = (245, 245, 245)
DIM_TEXT_COLOR = (160, 160, 160)
WARN_TEXT_COLOR = (255, 180, 143)
GHOST_ALPHA = 80  # transparency for ghost piece (0-255)
SIDEBAR_BG_COLOR = (17, 17, 17)
EMPTY_CELL_COLOR = (30, 30, 30)

# Locked cells lose their kind, so they are tinted by position instead.
LOCKED_PALETTE: list[tuple[int, int, int]] = [
    (166, 74, 201), (252, 205, 4), (255, 180, 143), (245, 230, 204), (23, 233, 224),
]


def locked_cell_color(row: int, col: int) -> tuple[int, int, int]:
    return LOCKED_PALETTE[(row * 13 + col * 7) % len(LOCKED_PALETTE)]


class TetrisRenderer:
    """Pygame-based renderer for a TetrisGame.

    The window is divided into:
      - Left: board area (cell_size * width) x (cell_size * height)
      - Right: sidebar with inventory counts, score, lines, status

    Attributes:
        game: Reference to the TetrisGame being rendered.
        cell_size: Pixel size of each grid cell.
        screen: Pygame display surface (created on first render).
    """

    SIDEBAR_WIDTH_CELLS: int = 7

    def __init__(self, game: TetrisGame, cell_size: int = 30) -> None:
        """Does NOT create the window yet; that happens on the first render()."""
        if pygame is None:
            raise ImportError("pygame is required for rendering. Install it: pip install pygame")

        self.game = game
        self.cell_size = cell_size

        self.board_pixel_width = cell_size * game.width
        self.board_pixel_height = cell_size * game.height
        self.sidebar_width = cell_size * self.SIDEBAR_WIDTH_CELLS
        self.window_width = self.board_pixel_width + self.sidebar_width
        self.window_height = self.board_pixel_height

        self.screen: pygame.Surface | None = None
        self._clock: pygame.time.Clock | None = None
        self._font: pygame.font.Font | None = None
        self._small_font: pygame.font.Font | None = None
        self._initialized: bool = False

    def render(self, fps: int = 60) -> None:
        """Draw the current game state and flip the display."""
        if not self._initialized:
            self._init_pygame()

        self.screen.fill(BACKGROUND_COLOR)
        self._draw_board()
        self._draw_ghost_piece()
        self._draw_current_piece()
        self._draw_sidebar()

        pygame.draw.rect(
            self.screen,
            BORDER_COLOR,
            (0, 0, self.board_pixel_width, self.board_pixel_height),
            2,
        )

        pygame.display.flip()
        self._clock.tick(fps)

    def _init_pygame(self) -> None:
        pygame.init()
        self.screen = pygame.display.set_mode((self.window_width, self.window_height))
        pygame.display.set_caption("Spark Plug: Reward")
        self._clock = pygame.time.Clock()
        self._font = pygame.font.SysFont("monospace", 20)
        self._small_font = pygame.font.SysFont("monospace", 14)
        self._initialized = True

    def _draw_cell(self, row: int, col: int, color: tuple[int, int, int]) -> None:
        x = col * self.cell_size
        y = row * self.cell_size
        pygame.draw.rect(self.screen, color, (x, y, self.cell_size - 1, self.cell_size - 1))

    def _draw_board(self) -> None:
        grid = self.game.state.board.grid
        for row in range(self.game.height):
            for col in range(self.game.width):
                if grid[row, col] != 0:
                    self._draw_cell(row, col, locked_cell_color(row, col))
                else:
                    self._draw_cell(row, col, EMPTY_CELL_COLOR)
                pygame.draw.rect(
                    self.screen,
                    GRID_LINE_COLOR,
                    (col * self.cell_size, row * self.cell_size, self.cell_size, self.cell_size),
                    1,
                )

    def _draw_current_piece(self) -> None:
        piece = self.game.state.piece
        if piece is None:
            return
        color = PIECES_BY_KIND[piece.kind]["color"]
        rows, cols = piece.shape.shape
        for r in range(rows):
            for c in range(cols):
                if piece.shape[r, c] != 0:
                    self._draw_cell(piece.y + r, piece.x + c, color)

    def _draw_ghost_piece(self) -> None:
        """Outline where the current piece would land if hard-dropped."""
        state = self.game.state
        piece = state.piece
        if piece is None:
            return
        ghost_y = drop_row(state)
        if ghost_y == piece.y:
            return

        color = PIECES_BY_KIND[piece.kind]["color"]
        ghost_surface = pygame.Surface((self.cell_size, self.cell_size), pygame.SRCALPHA)
        ghost_surface.fill((*color, GHOST_ALPHA))
        rows, cols = piece.shape.shape
        for r in range(rows):
            for c in range(cols):
                if piece.shape[r, c] != 0:
                    x = (piece.x + c) * self.cell_size
                    y = (ghost_y + r) * self.cell_size
                    self.screen.blit(ghost_surface, (x, y))
                    pygame.draw.rect(self.screen, color, (x, y, self.cell_size, self.cell_size), 1)

    def _draw_sidebar(self) -> None:
        sidebar_x = self.board_pixel_width
        pygame.draw.rect(
            self.screen,
            SIDEBAR_BG_COLOR,
            (sidebar_x, 0, self.sidebar_width, self.window_height),
        )
        pygame.draw.line(
            self.screen,
            BORDER_COLOR,
            (sidebar_x, 0),
            (sidebar_x, self.window_height),
            2,
        )

        text_x = sidebar_x + 15
        text_y = 20
        self._draw_text("PIECES", text_x, text_y)
        text_y += 30
        for kind in PIECE_KINDS:
            self._draw_piece_icon(kind, text_x, text_y)
            self._draw_text(f"x {self.game.inventory.count(kind)}", text_x + 60, text_y, small=True)
            text_y += 36

        text_y += 10
        self._draw_text("SCORE", text_x, text_y)
        self._draw_text(str(self.game.state.score), text_x, text_y + 25)

        text_y += 65
        self._draw_text("LINES", text_x, text_y)
        self._draw_text(str(self.game.state.lines), text_x, text_y + 25)

        text_y += 65
        if self.game.state.blocked:
            self._draw_text("BLOCKED", text_x, text_y, color=WARN_TEXT_COLOR)
            self._draw_text("R to restart", text_x, text_y + 25, small=True, color=DIM_TEXT_COLOR)
        elif self.game.state.paused:
            self._draw_text("OUT OF PIECES", text_x, text_y, color=WARN_TEXT_COLOR, small=True)
            self._draw_text("finish a task", text_x, text_y + 20, small=True, color=DIM_TEXT_COLOR)
        elif self.game.last_consumed:
            self._draw_text(f"using {self.game.last_consumed}", text_x, text_y, small=True,
                            color=DIM_TEXT_COLOR)

    def _draw_piece_icon(self, kind: str, x_offset: int, y_offset: int) -> None:
        shape = get_shape(kind, 0)
        color = PIECES_BY_KIND[kind]["color"]
        cell = max(4, self.cell_size // 4)
        rows, cols = shape.shape
        for r in range(rows):
            for c in range(cols):
                if shape[r, c] != 0:
                    pygame.draw.rect(
                        self.screen, color,
                        (x_offset + c * cell, y_offset + r * cell, cell - 1, cell - 1),
                    )

    def _draw_text(
        self,
        text: str,
        x: int,
        y: int,
        color: tuple[int, int, int] = TEXT_COLOR,
        small: bool = False,
    ) -> None:
        font = self._small_font if small else self._font
        surface = font.render(text, True, color)
        self.screen.blit(surface, (x, y))

    def close(self) -> None:
        """Shut down Pygame and close the window."""
        if self._initialized:
            pygame.quit()
            self._initialized = False
