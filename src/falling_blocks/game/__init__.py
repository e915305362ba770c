"""Game module for Falling Blocks.

Exports the rules engine and supporting classes:
- GameGrid: Locked board, collision rule and line clearing
- TetrominoType: Enum of available piece kinds
- ScoringRules: Score table, level progression and drop speed
- FallingBlocksGame: The game state machine
- GameState: Immutable snapshot handed to observers
"""

from .grid import Cell, GameGrid
from .pieces import TetrominoType, rotate_clockwise, kick_tests
from .rules import ScoringRules, DEFAULT_RULES
from .core import ActivePiece, FallingBlocksGame, GameConfig, GameState

__all__ = [
    "Cell",
    "GameGrid",
    "TetrominoType",
    "rotate_clockwise",
    "kick_tests",
    "ScoringRules",
    "DEFAULT_RULES",
    "ActivePiece",
    "FallingBlocksGame",
    "GameConfig",
    "GameState",
]
