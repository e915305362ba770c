from __future__ import annotations

import logging
import random
from dataclasses import dataclass, replace
from typing import List, Optional, Tuple

import numpy as np

from .grid import GameGrid
from .pieces import Shape, TetrominoType, base_shape, kick_tests, rotate_clockwise, shape_cells
from .rules import DEFAULT_RULES, ScoringRules

logger = logging.getLogger(__name__)


@dataclass
class GameConfig:
    width: int = 10
    height: int = 20
    initial_level: int = 1
    random_seed: Optional[int] = None

    def __post_init__(self) -> None:
        if int(self.width) <= 0:
            raise ValueError(f"width must be positive, got {self.width}")
        if int(self.height) <= 0:
            raise ValueError(f"height must be positive, got {self.height}")
        if int(self.initial_level) < 1:
            raise ValueError(f"initial_level must be >= 1, got {self.initial_level}")


def _frozen(array: np.ndarray) -> np.ndarray:
    out = array.copy()
    out.setflags(write=False)
    return out


@dataclass(frozen=True, eq=False)
class ActivePiece:
    kind: TetrominoType
    shape: Shape
    x: int
    y: int

    def __post_init__(self) -> None:
        # Shapes are shared with snapshots, so they are stored read-only.
        if self.shape.flags.writeable:
            object.__setattr__(self, "shape", _frozen(self.shape))

    @classmethod
    def spawn(cls, kind: TetrominoType, board_width: int) -> "ActivePiece":
        return cls(kind=kind, shape=base_shape(kind), x=board_width // 2 - 1, y=0)

    def moved(self, dx: int, dy: int) -> "ActivePiece":
        return replace(self, x=self.x + dx, y=self.y + dy)

    def cells(self) -> List[Tuple[int, int]]:
        return shape_cells(self.shape, self.x, self.y)


@dataclass(frozen=True, eq=False)
class GameState:
    """Point-in-time copy of the engine, safe to hand to the presentation layer.

    `board` is the locked board only (read-only array); use
    `FallingBlocksGame.get_board_with_piece` for the overlaid view.
    """

    board: np.ndarray
    current_piece: Optional[ActivePiece]
    next_piece: ActivePiece
    score: int
    level: int
    lines_cleared: int
    game_over: bool
    paused: bool


class FallingBlocksGame:
    """Rules engine: board, active piece, scoring and the Running/Paused/GameOver machine.

    Commands return False (and change nothing) while paused or after game over.
    Nothing here knows about time, input devices or drawing.
    """

    def __init__(self, config: Optional[GameConfig] = None, rules: Optional[ScoringRules] = None) -> None:
        self.config = config or GameConfig()
        self.rules = rules or DEFAULT_RULES
        self.rng = random.Random(self.config.random_seed)
        self.grid = GameGrid(self.config.width, self.config.height)
        self.current_piece: Optional[ActivePiece] = None
        self.next_piece: ActivePiece
        self.score = 0
        self.level = self.config.initial_level
        self.lines_cleared = 0
        self.game_over = False
        self.paused = False
        self._new_game()

    def _new_game(self) -> None:
        self.grid.reset()
        self.score = 0
        self.level = self.config.initial_level
        self.lines_cleared = 0
        self.game_over = False
        self.paused = False
        self.next_piece = self._random_piece()
        self._spawn_piece()

    def restart(self) -> None:
        logger.debug("restarting game (score=%d, lines=%d)", self.score, self.lines_cleared)
        self._new_game()

    @property
    def is_running(self) -> bool:
        return not self.game_over and not self.paused and self.current_piece is not None

    def _random_piece(self) -> ActivePiece:
        kind = self.rng.choice(list(TetrominoType))
        return ActivePiece.spawn(kind, self.config.width)

    def _collides(self, piece: ActivePiece) -> bool:
        return self.grid.collides(piece.cells())

    def move_down(self) -> bool:
        if not self.is_running:
            return False
        assert self.current_piece is not None
        moved = self.current_piece.moved(0, 1)
        if self._collides(moved):
            self._lock_piece()
            return False
        self.current_piece = moved
        return True

    def move_left(self) -> bool:
        return self._shift(-1)

    def move_right(self) -> bool:
        return self._shift(1)

    def _shift(self, dx: int) -> bool:
        if not self.is_running:
            return False
        assert self.current_piece is not None
        moved = self.current_piece.moved(dx, 0)
        if self._collides(moved):
            return False
        self.current_piece = moved
        return True

    def rotate(self) -> bool:
        if not self.is_running:
            return False
        original = self.current_piece
        assert original is not None
        rotated = replace(original, shape=rotate_clockwise(original.shape))
        if not self._collides(rotated):
            self.current_piece = rotated
            return True
        for dx, dy in kick_tests(original.kind):
            kicked = rotated.moved(dx, dy)
            if not self._collides(kicked):
                self.current_piece = kicked
                return True
        return False

    def hard_drop(self) -> bool:
        if not self.is_running:
            return False
        while self.move_down():
            pass
        return True

    def toggle_pause(self) -> None:
        if not self.game_over:
            self.paused = not self.paused

    def _lock_piece(self) -> None:
        piece = self.current_piece
        if piece is None:
            return
        result = self.grid.lock(piece.cells())
        if result.topped_out:
            self.game_over = True
        logger.debug("locked %s at (%d, %d), cleared %d", piece.kind.name, piece.x, piece.y, result.lines_cleared)
        if result.lines_cleared > 0:
            self._update_score(result.lines_cleared)
        self._spawn_piece()
        if self.game_over:
            logger.info("game over: score=%d level=%d lines=%d", self.score, self.level, self.lines_cleared)

    def _update_score(self, lines: int) -> None:
        self.score += self.rules.score_for_lines(lines, self.level)
        self.lines_cleared += lines
        self.level = self.rules.level_for(self.config.initial_level, self.lines_cleared)

    def _spawn_piece(self) -> None:
        self.current_piece = self.next_piece
        self.next_piece = self._random_piece()
        if self._collides(self.current_piece):
            self.game_over = True

    def get_state(self) -> GameState:
        return GameState(
            board=_frozen(self.grid.grid),
            current_piece=self.current_piece,
            next_piece=self.next_piece,
            score=self.score,
            level=self.level,
            lines_cleared=self.lines_cleared,
            game_over=self.game_over,
            paused=self.paused,
        )

    def get_board_with_piece(self) -> np.ndarray:
        if self.current_piece is None:
            return self.grid.clone_state()
        return self.grid.overlay(self.current_piece.cells())
