"""Falling Blocks: rules engine and session layer for a falling-block puzzle game."""

from .game import FallingBlocksGame, GameConfig, GameState, TetrominoType
from .session import GameSession, ManualFrameScheduler

__all__ = [
    "FallingBlocksGame",
    "GameConfig",
    "GameState",
    "TetrominoType",
    "GameSession",
    "ManualFrameScheduler",
]
