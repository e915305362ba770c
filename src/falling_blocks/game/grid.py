from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, Tuple

import numpy as np


Coordinate = Tuple[int, int]


class Cell(IntEnum):
    EMPTY = 0
    LOCKED = 1
    ACTIVE = 2  # only ever produced by overlay(), never stored


@dataclass
class LockResult:
    lines_cleared: int
    topped_out: bool


class GameGrid:
    """Locked board of `height` rows by `width` columns.

    Row 0 is the top (spawn) row. The grid stores only EMPTY and LOCKED cells;
    the falling piece lives outside the grid and is merged in by `lock`.
    Every coordinate is bounds-checked before the array is indexed.
    """

    # A locked cell at or above this row ends the game.
    TOP_OUT_ROW = 1

    def __init__(self, width: int, height: int) -> None:
        self.width = int(width)
        self.height = int(height)
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    def reset(self) -> None:
        self.grid.fill(Cell.EMPTY)

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def collides(self, cells: Iterable[Coordinate]) -> bool:
        """True when any cell is off the sides, below the floor, or on a locked cell.

        Cells above the top edge (y < 0) are legal and only checked horizontally.
        """
        for x, y in cells:
            if x < 0 or x >= self.width:
                return True
            if y >= self.height:
                return True
            if y >= 0 and self.grid[y, x] != Cell.EMPTY:
                return True
        return False

    def lock(self, cells: Iterable[Coordinate]) -> LockResult:
        """Merge cells into the board, then clear full rows."""
        topped_out = False
        for x, y in cells:
            if not self.is_inside(x, y):
                continue
            self.grid[y, x] = Cell.LOCKED
            if y <= self.TOP_OUT_ROW:
                topped_out = True
        lines = self.clear_full_lines()
        return LockResult(lines_cleared=lines, topped_out=topped_out)

    def clear_full_lines(self) -> int:
        cleared = 0
        y = self.height - 1
        while y >= 0:
            if np.all(self.grid[y] != Cell.EMPTY):
                # Rows above shift down into y, so y is examined again.
                self.grid[1 : y + 1] = self.grid[0:y].copy()
                self.grid[0].fill(Cell.EMPTY)
                cleared += 1
            else:
                y -= 1
        return cleared

    def overlay(self, cells: Iterable[Coordinate]) -> np.ndarray:
        """Copy of the board with `cells` marked ACTIVE; the stored grid is untouched."""
        state = self.grid.copy()
        for x, y in cells:
            if self.is_inside(x, y):
                state[y, x] = Cell.ACTIVE
        return state

    def locked_per_row(self) -> np.ndarray:
        return np.count_nonzero(self.grid, axis=1)

    def clone_state(self) -> np.ndarray:
        return self.grid.copy()
