"""Grid snake: a tick-driven engine with pluggable drawing, scheduling and storage."""

from .engine import GameEngine, SurfaceUnavailableError
from .game import BoardSize, Difficulty, Direction, GameState, GameStatus, Position

__all__ = [
    "GameEngine",
    "SurfaceUnavailableError",
    "BoardSize",
    "Difficulty",
    "Direction",
    "GameState",
    "GameStatus",
    "Position",
]
