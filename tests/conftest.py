from __future__ import annotations

from typing import Callable

import pytest

from falling_blocks.game import ActivePiece, FallingBlocksGame, GameConfig, TetrominoType


@pytest.fixture
def game() -> FallingBlocksGame:
    return FallingBlocksGame(GameConfig(width=10, height=20, initial_level=1, random_seed=7))


@pytest.fixture
def set_pieces() -> Callable[..., None]:
    """Replace the current and next piece with known kinds at the spawn position."""

    def apply(game: FallingBlocksGame, current: TetrominoType, next_kind: TetrominoType = TetrominoType.T) -> None:
        game.current_piece = ActivePiece.spawn(current, game.config.width)
        game.next_piece = ActivePiece.spawn(next_kind, game.config.width)

    return apply
