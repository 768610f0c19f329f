# config.py
from dataclasses import dataclass, fields
import os
from typing import Optional

# ----- Window & grid -----
WIDTH, HEIGHT = 400, 400
CELL_SIZE = 20

# ----- Colors -----
BG         = (0, 0, 0)
GRID       = (51, 51, 51)
SNAKE_HEAD = (74, 222, 128)
SNAKE_BODY = (34, 197, 94)
EYES       = (0, 0, 0)
FOOD       = (239, 68, 68)
TEXT       = (220, 220, 230)

# ----- Directions (dx, dy) -----
UP, DOWN, LEFT, RIGHT = (0, -1), (0, 1), (-1, 0), (1, 0)

# ----- Difficulty presets: base ms per step -----
GAME_SPEEDS = {
    "easy": 200,
    "medium": 150,
    "hard": 100,
}

GAME_MODE = "classic"
HIGH_SCORE_KEY = "snake-high-score"
INITIAL_SNAKE_LENGTH = 3

# ----- Tunables (what you'd tweak for difficulty) -----
@dataclass
class Config:
    seed: Optional[int] = None
    cell_size: int = CELL_SIZE
    difficulty: str = "medium"
    min_move_ms: int = 50
    level_speedup_ms: int = 10
    level_up_threshold: int = 100
    food_points: int = 10
    max_food_attempts: int = 100
    high_score_key: str = HIGH_SCORE_KEY

    def __post_init__(self):
        if self.difficulty not in GAME_SPEEDS:
            raise ValueError(f"Unknown difficulty: {self.difficulty}")
        if self.cell_size <= 0:
            raise ValueError("cell_size must be positive")

    @property
    def base_move_ms(self) -> int:
        return GAME_SPEEDS[self.difficulty]

    @classmethod
    def from_env(cls, environ=None, **overrides) -> "Config":
        """
        Build a Config from SNAKE_* environment variables.
        Keyword overrides that are not None win over the environment.
        """
        env = os.environ if environ is None else environ
        values = {}
        if env.get("SNAKE_SEED"):
            values["seed"] = int(env["SNAKE_SEED"])
        if env.get("SNAKE_DIFFICULTY"):
            values["difficulty"] = env["SNAKE_DIFFICULTY"].lower()
        if env.get("SNAKE_CELL_SIZE"):
            values["cell_size"] = int(env["SNAKE_CELL_SIZE"])

        known = {f.name for f in fields(cls)}
        for key, value in overrides.items():
            if key not in known:
                raise TypeError(f"Unknown config field: {key}")
            if value is not None:
                values[key] = value
        return cls(**values)

CFG = Config()
