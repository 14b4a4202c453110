from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
import pygame

from falling_blocks.game import COLS, ROWS, GameSnapshot, GameStatus, Piece, drop_distance

Color = Tuple[int, int, int]

PALETTE = {
    1: (255, 13, 114),   # I
    2: (13, 194, 255),   # J
    3: (13, 255, 114),   # L
    4: (245, 56, 255),   # O
    5: (255, 142, 13),   # S
    6: (255, 225, 56),   # T
    7: (56, 119, 255),   # Z
}

BACKGROUND = (10, 10, 14)
WELL = (0, 0, 0)
GRID_LINE = (34, 34, 34)
TEXT = (230, 230, 230)


def _color_for_value(v: int) -> Color:
    return PALETTE.get(abs(v), (200, 200, 200))


def _blend(color: Color, other: Color, t: float) -> Color:
    return tuple(int(a + (b - a) * t) for a, b in zip(color, other))  # type: ignore[return-value]


class Renderer:
    """Draws snapshots of the engine onto a pygame surface.

    The board sits at the top-left margin; a side panel on the right shows the
    counters and the next piece.
    """

    def __init__(self, cell_size: int = 30, margin: int = 20) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.panel_w = 6 * cell_size
        self.board_w = COLS * cell_size
        self.board_h = ROWS * cell_size
        self.panel_x = margin * 2 + self.board_w
        self.screen: Optional[pygame.Surface] = None
        self._font: Optional[pygame.font.Font] = None
        self._big_font: Optional[pygame.font.Font] = None

    @property
    def window_size(self) -> Tuple[int, int]:
        return self.margin * 3 + self.board_w + self.panel_w, self.margin * 2 + self.board_h

    def attach(self, screen: pygame.Surface) -> None:
        self.screen = screen
        self._font = pygame.font.SysFont(None, 26)
        self._big_font = pygame.font.SysFont(None, 44)

    def _draw_block(self, px: int, py: int, color: Color) -> None:
        size = self.cell_size - 2
        body = pygame.Rect(px + 1, py + 1, size, size)
        pygame.draw.rect(self.screen, color, body)
        shine = pygame.Rect(px + 1, py + 1, size, size // 2)
        pygame.draw.rect(self.screen, _blend(color, (255, 255, 255), 0.3), shine)
        pygame.draw.rect(self.screen, _blend(color, (0, 0, 0), 0.3), body, 2)

    def _draw_outline(self, px: int, py: int, color: Color) -> None:
        rect = pygame.Rect(px + 2, py + 2, self.cell_size - 4, self.cell_size - 4)
        pygame.draw.rect(self.screen, _blend(color, WELL, 0.5), rect, 2)

    def _draw_well(self, board: np.ndarray) -> None:
        left, top = self.margin, self.margin
        pygame.draw.rect(self.screen, WELL, pygame.Rect(left, top, self.board_w, self.board_h))
        for row in range(ROWS + 1):
            y = top + row * self.cell_size
            pygame.draw.line(self.screen, GRID_LINE, (left, y), (left + self.board_w, y))
        for col in range(COLS + 1):
            x = left + col * self.cell_size
            pygame.draw.line(self.screen, GRID_LINE, (x, top), (x, top + self.board_h))
        h, w = board.shape
        for y in range(h):
            for x in range(w):
                v = int(board[y, x])
                if v:
                    self._draw_block(left + x * self.cell_size, top + y * self.cell_size, _color_for_value(v))

    def _draw_piece(self, piece: Piece, board: np.ndarray) -> None:
        color = _color_for_value(piece.color_id)
        ghost_y = piece.y + drop_distance(piece.x, piece.y, piece.shape, board)
        for x, y in piece.cells():
            gy = y - piece.y + ghost_y
            if gy >= 0 and gy != y:
                self._draw_outline(self.margin + x * self.cell_size, self.margin + gy * self.cell_size, color)
        for x, y in piece.cells():
            if y >= 0:
                self._draw_block(self.margin + x * self.cell_size, self.margin + y * self.cell_size, color)

    def _draw_text(self, text: str, pos: Tuple[int, int], big: bool = False, center: bool = False) -> None:
        font = self._big_font if big else self._font
        img = font.render(text, True, TEXT)
        rect = img.get_rect(center=pos) if center else img.get_rect(topleft=pos)
        self.screen.blit(img, rect)

    def _draw_banner(self, lines) -> None:
        shade = pygame.Surface((self.board_w, self.board_h), pygame.SRCALPHA)
        shade.fill((0, 0, 0, 170))
        self.screen.blit(shade, (self.margin, self.margin))
        cx = self.margin + self.board_w // 2
        cy = self.margin + self.board_h // 2 - 24 * (len(lines) - 1)
        for i, (text, big) in enumerate(lines):
            self._draw_text(text, (cx, cy + i * 48), big=big, center=True)

    def render_board(self, snapshot: GameSnapshot) -> None:
        self.screen.fill(BACKGROUND)
        self._draw_well(snapshot.board)
        if snapshot.piece is not None and snapshot.status in (GameStatus.RUNNING, GameStatus.PAUSED):
            self._draw_piece(snapshot.piece, snapshot.board)

        info_lines = [
            f"Score: {snapshot.score}",
            f"Level: {snapshot.level}",
            f"Lines: {snapshot.lines}",
        ]
        y_text = self.margin + 5 * self.cell_size
        for i, txt in enumerate(info_lines):
            self._draw_text(txt, (self.panel_x, y_text + i * 28))
        help_lines = ["Arrows: move/rotate", "Space: hard drop", "P: pause", "Enter: start"]
        y_help = self.margin + self.board_h - len(help_lines) * 22
        for i, txt in enumerate(help_lines):
            self._draw_text(txt, (self.panel_x, y_help + i * 22))

        if snapshot.status is GameStatus.IDLE:
            self._draw_banner([("FALLING BLOCKS", True), ("Press Enter to start", False)])
        elif snapshot.status is GameStatus.PAUSED:
            self._draw_banner([("PAUSED", True), ("Press P to resume", False)])
        elif snapshot.status is GameStatus.GAME_OVER:
            self._draw_banner([
                ("GAME OVER", True),
                (f"Final score: {snapshot.score}", False),
                ("Press Enter to restart", False),
            ])

    def render_next(self, piece: Optional[Piece]) -> None:
        box = pygame.Rect(self.panel_x, self.margin, self.panel_w, 4 * self.cell_size)
        pygame.draw.rect(self.screen, _blend(BACKGROUND, (255, 255, 255), 0.2), box)
        self._draw_text("Next", (self.panel_x + 6, self.margin + 4))
        if piece is None:
            return
        off_x = box.x + (box.w - piece.width * self.cell_size) // 2
        off_y = box.y + (box.h - piece.height * self.cell_size) // 2 + 10
        color = _color_for_value(piece.color_id)
        for r in range(piece.height):
            for c in range(piece.width):
                if piece.shape[r, c]:
                    self._draw_block(off_x + c * self.cell_size, off_y + r * self.cell_size, color)
