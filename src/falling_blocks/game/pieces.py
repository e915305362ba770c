from __future__ import annotations

from enum import IntEnum
from typing import Dict, Tuple

import numpy as np


class TetrominoType(IntEnum):
    I = 1
    O = 2
    T = 3
    S = 4
    Z = 5
    J = 6
    L = 7


Shape = np.ndarray
Offset = Tuple[int, int]


BASE_SHAPES: Dict[TetrominoType, Shape] = {
    TetrominoType.I: np.array([[0, 0, 0, 0], [1, 1, 1, 1], [0, 0, 0, 0], [0, 0, 0, 0]], dtype=np.int8),
    TetrominoType.O: np.array([[1, 1], [1, 1]], dtype=np.int8),
    TetrominoType.T: np.array([[0, 1, 0], [1, 1, 1], [0, 0, 0]], dtype=np.int8),
    TetrominoType.S: np.array([[0, 1, 1], [1, 1, 0], [0, 0, 0]], dtype=np.int8),
    TetrominoType.Z: np.array([[1, 1, 0], [0, 1, 1], [0, 0, 0]], dtype=np.int8),
    TetrominoType.J: np.array([[1, 0, 0], [1, 1, 1], [0, 0, 0]], dtype=np.int8),
    TetrominoType.L: np.array([[0, 0, 1], [1, 1, 1], [0, 0, 0]], dtype=np.int8),
}

# Offsets tried in order after an in-place rotation collides. Repeated entries
# are intentional: the first collision-free offset wins.
I_KICKS: Tuple[Offset, ...] = (
    (0, 0), (-1, 0), (2, 0), (-1, 0), (2, 0),
    (0, 1), (0, -1), (1, 0), (-2, 0), (1, 0),
)
O_KICKS: Tuple[Offset, ...] = ((0, 0),)
DEFAULT_KICKS: Tuple[Offset, ...] = (
    (0, 0), (-1, 0), (-1, 1), (0, -2), (-1, -2),
    (1, 0), (1, -1), (0, 2), (1, 2), (-2, 0),
)


def base_shape(kind: TetrominoType) -> Shape:
    """Canonical spawn matrix for `kind` (a fresh, writable copy)."""
    return BASE_SHAPES[kind].copy()


def rotate_clockwise(shape: Shape) -> Shape:
    """Rotate a square matrix 90 degrees clockwise (transpose, then reverse rows)."""
    return np.ascontiguousarray(np.rot90(shape, 1, axes=(1, 0)))


def kick_tests(kind: TetrominoType) -> Tuple[Offset, ...]:
    if kind == TetrominoType.I:
        return I_KICKS
    if kind == TetrominoType.O:
        return O_KICKS
    return DEFAULT_KICKS


def shape_cells(shape: Shape, origin_x: int, origin_y: int) -> list[Tuple[int, int]]:
    """Board coordinates (x, y) of every filled cell of `shape` placed at the origin."""
    cells: list[Tuple[int, int]] = []
    h, w = shape.shape
    for dy in range(h):
        for dx in range(w):
            if shape[dy, dx]:
                cells.append((origin_x + dx, origin_y + dy))
    return cells
