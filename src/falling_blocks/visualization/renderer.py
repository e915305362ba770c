from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
import pygame

from falling_blocks.game import Cell, GameState


def _color_for_value(v: int) -> Tuple[int, int, int]:
    palette = {
        Cell.EMPTY: (20, 20, 26),
        Cell.LOCKED: (220, 70, 70),
        Cell.ACTIVE: (90, 220, 120),
    }
    return palette.get(v, (200, 200, 200))


class Renderer:
    def __init__(self, cell_size: int = 28, margin: int = 20, panel_width: int = 180) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.panel_width = panel_width
        self._font: Optional[pygame.font.Font] = None

    def window_size(self, width: int, height: int) -> Tuple[int, int]:
        return (
            width * self.cell_size + self.margin * 3 + self.panel_width,
            height * self.cell_size + self.margin * 2,
        )

    def _font_or_default(self) -> pygame.font.Font:
        if self._font is None:
            self._font = pygame.font.SysFont(None, 26)
        return self._font

    def _cells_surface(self, cells: np.ndarray) -> pygame.Surface:
        h, w = cells.shape
        surf = pygame.Surface((w * self.cell_size, h * self.cell_size))
        surf.fill((30, 30, 36))
        for y in range(h):
            for x in range(w):
                rect = pygame.Rect(
                    x * self.cell_size,
                    y * self.cell_size,
                    self.cell_size - 1,
                    self.cell_size - 1,
                )
                pygame.draw.rect(surf, _color_for_value(int(cells[y, x])), rect)
        return surf

    def _draw_panel(self, screen: pygame.Surface, state: GameState, x0: int) -> None:
        font = self._font_or_default()
        lines = [
            f"Score: {state.score}",
            f"Level: {state.level}",
            f"Lines: {state.lines_cleared}",
            "Next:",
        ]
        y = self.margin
        for txt in lines:
            screen.blit(font.render(txt, True, (230, 230, 230)), (x0, y))
            y += 24
        preview = np.where(state.next_piece.shape != 0, int(Cell.ACTIVE), int(Cell.EMPTY))
        screen.blit(self._cells_surface(preview), (x0, y + 4))
        y += preview.shape[0] * self.cell_size + 16
        for txt in ("Arrows: move/rotate", "Space: hard drop", "P: pause  R: restart"):
            screen.blit(font.render(txt, True, (150, 150, 160)), (x0, y))
            y += 22

    def draw(self, screen: pygame.Surface, board: np.ndarray, state: GameState) -> None:
        screen.fill((10, 10, 14))
        screen.blit(self._cells_surface(board), (self.margin, self.margin))
        panel_x = self.margin * 2 + board.shape[1] * self.cell_size
        self._draw_panel(screen, state, panel_x)
        banner = None
        if state.game_over:
            banner = "Game Over - Press R to restart"
        elif state.paused:
            banner = "Paused"
        if banner is not None:
            text = self._font_or_default().render(banner, True, (255, 110, 110))
            rect = text.get_rect(center=(self.margin + board.shape[1] * self.cell_size // 2, self.margin // 2 + 2))
            screen.blit(text, rect)
        pygame.display.flip()
