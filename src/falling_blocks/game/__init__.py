"""Game module for Falling Blocks.

Exports the core game engine and supporting classes:
- TetrominoType / SHAPES: the seven piece shapes
- GameGrid: Board of locked cells and line clearing
- Piece / rotate: Falling piece and its rotation transform
- collides: Placement legality against the board
- ScoringRules: Line clear scoring and the drop speed curve
- TetrisEngine: Game state machine driven by ticks and input
- PresentationAdapter: Interface a front-end implements
"""

from .shapes import COLS, ROWS, SHAPES, TetrominoType, get_shape
from .grid import GameGrid
from .pieces import Piece, rotate
from .collision import collides, drop_distance
from .rules import ScoringRules
from .core import Action, GameConfig, GameSnapshot, GameStatus, TetrisEngine
from .adapter import PresentationAdapter

__all__ = [
    "COLS",
    "ROWS",
    "SHAPES",
    "TetrominoType",
    "get_shape",
    "GameGrid",
    "Piece",
    "rotate",
    "collides",
    "drop_distance",
    "ScoringRules",
    "Action",
    "GameConfig",
    "GameSnapshot",
    "GameStatus",
    "TetrisEngine",
    "PresentationAdapter",
]
