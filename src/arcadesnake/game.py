# game.py
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, NamedTuple, Tuple
import random

from .config import (
    UP, DOWN, LEFT, RIGHT,
    GAME_MODE, INITIAL_SNAKE_LENGTH,
    Config,
)

# ---------- Types ----------
class Position(NamedTuple):
    x: int
    y: int

class BoardSize(NamedTuple):
    width: int
    height: int

class Direction(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def vector(self) -> Tuple[int, int]:
        return _VECTORS[self]

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITES[self]

_VECTORS = {
    Direction.UP: UP,
    Direction.DOWN: DOWN,
    Direction.LEFT: LEFT,
    Direction.RIGHT: RIGHT,
}

_OPPOSITES = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}

class GameStatus(Enum):
    IDLE = "idle"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "gameOver"

class Difficulty(Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

# ---------- Helpers ----------
def is_opposite(a: Direction, b: Direction) -> bool:
    return a.opposite is b

def next_position(pos: Position, direction: Direction) -> Position:
    dx, dy = direction.vector
    return Position(pos.x + dx, pos.y + dy)

def hits_wall(pos: Position, board: BoardSize) -> bool:
    return not (0 <= pos.x < board.width and 0 <= pos.y < board.height)

def hits_body(pos: Position, body: Iterable[Position]) -> bool:
    return pos in set(body)

def level_for_score(score: int, threshold: int = 100) -> int:
    return score // threshold + 1

def speed_for_level(level: int, base_ms: int, step_ms: int = 10, min_ms: int = 50) -> int:
    """Tick interval for a level: shrinks by step_ms per level, floored at min_ms."""
    return max(min_ms, base_ms - (level - 1) * step_ms)

def spawn_food(
    board: BoardSize,
    exclude: Iterable[Position],
    rng: random.Random,
    max_attempts: int = 100,
) -> Position:
    """
    Pick a random free cell. Gives up after max_attempts draws and returns the
    last candidate, which may sit on the snake when the board is nearly full.
    """
    taken = set(exclude)
    candidate = Position(rng.randrange(board.width), rng.randrange(board.height))
    attempts = 1
    while candidate in taken and attempts < max_attempts:
        candidate = Position(rng.randrange(board.width), rng.randrange(board.height))
        attempts += 1
    return candidate

# ---------- State ----------
@dataclass
class GameState:
    status: GameStatus
    score: int
    high_score: int
    level: int
    snake: List[Position]          # head at index 0
    food: Position
    direction: Direction
    next_direction: Direction
    board_size: BoardSize
    difficulty: Difficulty
    speed_ms: int                  # current step interval
    game_mode: str = GAME_MODE

    @property
    def head(self) -> Position:
        return self.snake[0]

    def copy(self) -> "GameState":
        """Independent copy: the snake list is new, everything else is immutable."""
        return GameState(
            status=self.status,
            score=self.score,
            high_score=self.high_score,
            level=self.level,
            snake=list(self.snake),
            food=self.food,
            direction=self.direction,
            next_direction=self.next_direction,
            board_size=self.board_size,
            difficulty=self.difficulty,
            speed_ms=self.speed_ms,
            game_mode=self.game_mode,
        )

def new_game_state(
    board: BoardSize,
    high_score: int,
    config: Config,
    rng: random.Random,
) -> GameState:
    cx, cy = board.width // 2, board.height // 2
    snake = [Position(cx - i, cy) for i in range(INITIAL_SNAKE_LENGTH)]
    food = spawn_food(board, snake, rng, config.max_food_attempts)
    return GameState(
        status=GameStatus.IDLE,
        score=0,
        high_score=high_score,
        level=1,
        snake=snake,
        food=food,
        direction=Direction.RIGHT,
        next_direction=Direction.RIGHT,
        board_size=board,
        difficulty=Difficulty(config.difficulty),
        speed_ms=config.base_move_ms,
    )

# ---------- Update ----------
def step_game(state: GameState, config: Config, rng: random.Random) -> bool:
    """
    Advance the game by one tick.
    Does nothing unless the game is playing.
    Returns True if alive, False if this step ended the game.
    """
    if state.status is not GameStatus.PLAYING:
        return True

    # Commit direction once per tick (no 180° turns for a multi-cell snake)
    if not (is_opposite(state.next_direction, state.direction) and len(state.snake) > 1):
        state.direction = state.next_direction

    new_head = next_position(state.snake[0], state.direction)

    # Wall collision, then self collision against the body before it moves
    if hits_wall(new_head, state.board_size) or hits_body(new_head, state.snake):
        state.status = GameStatus.GAME_OVER
        return False

    # Move / grow
    state.snake.insert(0, new_head)
    if new_head == state.food:
        state.score += config.food_points
        state.food = spawn_food(state.board_size, state.snake, rng, config.max_food_attempts)
    else:
        state.snake.pop()

    # Level up speeds the game up, never below the floor
    level = level_for_score(state.score, config.level_up_threshold)
    if level > state.level:
        state.speed_ms = min(
            state.speed_ms,
            speed_for_level(level, config.base_move_ms, config.level_speedup_ms, config.min_move_ms),
        )
    state.level = level
    return True
