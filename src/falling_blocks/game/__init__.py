"""Game module for Falling Blocks.

Exports the core game engine and supporting classes:
- GameGrid: Board representation, collision and line clearing
- Piece: Tetromino piece with clockwise rotation
- TetrominoType: Enum of available piece types
- PieceGenerator: Uniform random piece source
- ScoringRules: Scoring, level and gravity configuration
- TetrisGame: Session state machine
- GameLoop: Fixed-timestep scheduler with an input queue
"""

from .grid import GameGrid
from .pieces import COLORS, Piece, TetrominoType, rotate_cw
from .generator import PieceGenerator
from .rules import ScoringRules
from .core import Action, GameConfig, GameStatus, TetrisGame
from .loop import GameLoop

__all__ = [
    "GameGrid",
    "COLORS",
    "Piece",
    "TetrominoType",
    "rotate_cw",
    "PieceGenerator",
    "ScoringRules",
    "Action",
    "GameConfig",
    "GameStatus",
    "TetrisGame",
    "GameLoop",
]
