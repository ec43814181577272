"""Game module for Tetris Arcade.

Exports the core game engine and supporting classes:
- Board, Cell: Occupancy grid, placed cells and line clearing
- Piece, TetrominoType, RotationState: Tetrominoes with table-driven rotation
- PieceGenerator, GeneratorPair: Piece queue and shared two-player sequence
- ScoringRules: Score table, leveling and gravity interval
- DifficultySettings, GameConfig: Session configuration
- GameSession: One player's game state and gravity handling
- Match: Two bound sessions with garbage exchange
"""

from .clock import GravityClock, ManualClock
from .collaborators import GameStats, NullNavigator, ScoreBoard, View
from .controls import Command, InputRouter, PlayerSlot
from .errors import BindingError, PairingError, SessionStateError, TetrisError
from .generator import GeneratorPair, PieceGenerator
from .grid import Board, Cell
from .match import Match
from .pieces import Piece, RotationState, TetrominoType, rotation_offsets
from .rules import ScoringRules
from .session import GameMode, GameSession, SessionState
from .settings import Difficulty, DifficultySettings, GameConfig, settings_for

__all__ = [
    "Board",
    "BindingError",
    "Cell",
    "Command",
    "Difficulty",
    "DifficultySettings",
    "GameConfig",
    "GameMode",
    "GameSession",
    "GameStats",
    "GeneratorPair",
    "GravityClock",
    "InputRouter",
    "ManualClock",
    "Match",
    "NullNavigator",
    "PairingError",
    "Piece",
    "PieceGenerator",
    "PlayerSlot",
    "RotationState",
    "ScoreBoard",
    "ScoringRules",
    "SessionState",
    "SessionStateError",
    "TetrisError",
    "TetrominoType",
    "View",
    "rotation_offsets",
    "settings_for",
]
