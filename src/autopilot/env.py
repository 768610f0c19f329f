# src/autopilot/env.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional
import random

import numpy as np  # type: ignore

from arcadesnake.adapters import FrameScheduler, MemoryStorage
from arcadesnake.config import Config
from arcadesnake.engine import GameEngine
from arcadesnake.game import (
    BoardSize, Direction, GameState, GameStatus, Position,
    hits_body, hits_wall, next_position,
)
from arcadesnake.surface import HeadlessCanvas

# -----------------------------------------------------------------------------
# Actions: integers -> grid directions
# -----------------------------------------------------------------------------
ACTIONS: Dict[int, Direction] = {
    0: Direction.UP,
    1: Direction.DOWN,
    2: Direction.LEFT,
    3: Direction.RIGHT,
}

_BY_VECTOR = {d.vector: d for d in Direction}

# -----------------------------------------------------------------------------
# Small geometry helpers
# -----------------------------------------------------------------------------
def left_of(direction: Direction) -> Direction:
    """Rotate a direction 90° CCW (in vector terms)."""
    dx, dy = direction.vector
    return _BY_VECTOR[(-dy, dx)]

def right_of(direction: Direction) -> Direction:
    """Rotate a direction 90° CW (in vector terms)."""
    dx, dy = direction.vector
    return _BY_VECTOR[(dy, -dx)]

def would_hit(state: GameState, direction: Direction) -> bool:
    """
    Returns True if moving the head 1 cell in 'direction' would result
    in a collision with a wall or the snake's body.
    """
    nxt = next_position(state.head, direction)
    return hits_wall(nxt, state.board_size) or hits_body(nxt, state.snake)

def manhattan(a: Position, b: Position) -> int:
    """Manhattan (L1) distance on the grid."""
    return abs(a.x - b.x) + abs(a.y - b.y)

# -----------------------------------------------------------------------------
# Observation function
# -----------------------------------------------------------------------------
def observe(state: GameState) -> np.ndarray:
    """
    Return a compact 9-D observation vector describing the board around the head.

    Features:
      0: hx_n  - head x normalized in [0, 1]
      1: hy_n  - head y normalized in [0, 1]
      2: fx_n  - food x normalized in [0, 1]
      3: fy_n  - food y normalized in [0, 1]
      4: dx    - current direction x component in {-1, 0, 1}
      5: dy    - current direction y component in {-1, 0, 1}
      6: danger_ahead  - 1.0 if the next cell forward would be fatal
      7: danger_left   - 1.0 if the next cell to the left would be fatal
      8: danger_right  - 1.0 if the next cell to the right would be fatal
    """
    hx, hy = state.head
    fx, fy = state.food
    denom_w = max(state.board_size.width - 1, 1)
    denom_h = max(state.board_size.height - 1, 1)
    dx, dy = state.direction.vector

    return np.array(
        [
            hx / denom_w, hy / denom_h, fx / denom_w, fy / denom_h,
            float(dx), float(dy),
            float(would_hit(state, state.direction)),
            float(would_hit(state, left_of(state.direction))),
            float(would_hit(state, right_of(state.direction))),
        ],
        dtype=np.float32,
    )

# -----------------------------------------------------------------------------
# Headless environment
# -----------------------------------------------------------------------------
@dataclass
class SnakeEnv:
    """
    Gym-like wrapper around GameEngine: one engine step per step() call, no
    real-time gating, nothing drawn.

    Rewards:
      + eat_reward  when food is eaten
      + shaping_coef * (d_before - d_after) per step (closer -> positive)
      + step_penalty per step (tiny negative to discourage dithering)
      + death_reward on death
    """
    step_penalty: float = -0.001
    eat_reward: float   = 1.0
    death_reward: float = -1.0
    shaping_coef: float = 0.01
    board_w: int        = 20
    board_h: int        = 20
    seed_value: Optional[int] = None
    engine: GameEngine = field(init=False, repr=False)

    def __post_init__(self):
        # Deterministic RNG for reproducibility
        self.rng = random.Random(self.seed_value)
        if self.seed_value is not None:
            np.random.seed(self.seed_value)
        cfg = Config(seed=self.seed_value)
        self.engine = GameEngine(
            HeadlessCanvas(self.board_w * cfg.cell_size, self.board_h * cfg.cell_size),
            scheduler=FrameScheduler(),
            storage=MemoryStorage(),
            config=cfg,
            rng=self.rng,
        )

    @property
    def board_size(self) -> BoardSize:
        return self.engine.board_size

    # Gym-like API -------------------------------------------------------------
    def reset(self, seed: Optional[int] = None) -> np.ndarray:
        """Start a new episode. Returns the initial observation."""
        if seed is not None:
            self.rng.seed(seed)
            np.random.seed(seed)
        self.engine.reset_game()
        self.engine.start_game()
        return observe(self.engine.get_game_state())

    def step(self, action: int):
        """
        Apply an action (0..3), advance exactly one grid step, and return:
          (obs, reward, terminated, info)
        """
        before = self.engine.get_game_state()
        if before.status is not GameStatus.PLAYING:
            raise RuntimeError("Call reset() first.")
        if action not in ACTIONS:
            raise ValueError(f"Invalid action {action}")

        self.engine.change_direction(ACTIONS[action])
        self.engine.update()
        after = self.engine.get_game_state()
        obs = observe(after)

        if after.status is GameStatus.GAME_OVER:
            return obs, self.death_reward, True, {"reason": "death", "score": after.score}

        reward = self.step_penalty
        if after.score > before.score:
            reward += self.eat_reward
        else:
            # food moves when eaten, so shaping only applies to plain moves
            d_before = manhattan(before.head, before.food)
            d_after = manhattan(after.head, after.food)
            reward += self.shaping_coef * (d_before - d_after)

        return obs, reward, False, {"score": after.score}

    @property
    def action_space_n(self) -> int:
        return len(ACTIONS)

    @property
    def observation_space_shape(self):
        # 9 features defined in observe()
        return (9,)

# -----------------------------------------------------------------------------
# Live steering
# -----------------------------------------------------------------------------
class Autopilot:
    """Lets a policy steer a live engine, e.g. the windowed game."""

    def __init__(self, engine: GameEngine, policy: Callable, epsilon: float = 0.1):
        self.engine = engine
        self.policy = policy
        self.epsilon = epsilon

    @property
    def board_size(self) -> BoardSize:
        return self.engine.board_size

    @property
    def action_space_n(self) -> int:
        return len(ACTIONS)

    def steer(self) -> Optional[Direction]:
        state = self.engine.get_game_state()
        if state.status is not GameStatus.PLAYING:
            return None
        action = self.policy(observe(state), self, self.epsilon)
        direction = ACTIONS[int(action)]
        self.engine.change_direction(direction)
        return direction
