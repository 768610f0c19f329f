# engine.py
from __future__ import annotations

import logging
import random
import time
from typing import Callable, List, Optional, Sequence, Tuple, Union

from .adapters import Canvas, FrameScheduler, MemoryStorage, Storage, TickScheduler
from .config import CFG, Config
from .game import (
    BoardSize, Direction, GameState, GameStatus, Position,
    new_game_state, spawn_food, step_game,
)
from .render import draw_game

logger = logging.getLogger(__name__)


class SurfaceUnavailableError(RuntimeError):
    """Raised when the canvas cannot hand out a drawing context."""


def _now_ms() -> float:
    return time.perf_counter() * 1000.0


def _parse_high_score(raw) -> int:
    """Stored high score -> int. Anything unusable counts as 0."""
    if raw is None or isinstance(raw, bool):
        return 0
    try:
        value = int(float(raw))
    except (TypeError, ValueError, OverflowError):
        logger.warning("Ignoring non-numeric stored high score: %r", raw)
        return 0
    return max(value, 0)


class GameEngine:
    """
    Owns one game of snake.

    The engine never runs a clock of its own: it asks the scheduler for one
    future callback at a time and, on each callback, moves the snake only if
    enough time has passed for the current speed. The state it holds is never
    handed out; get_game_state() returns a copy.
    """

    def __init__(
        self,
        canvas: Canvas,
        on_game_over: Optional[Callable[[int], None]] = None,
        *,
        scheduler: Optional[TickScheduler] = None,
        storage: Optional[Storage] = None,
        clock: Optional[Callable[[], float]] = None,
        config: Optional[Config] = None,
        rng: Optional[random.Random] = None,
    ):
        context = canvas.get_context() if canvas is not None else None
        if context is None:
            raise SurfaceUnavailableError("Could not get 2D context from canvas")

        self.canvas = canvas
        self.ctx = context
        self.on_game_over = on_game_over
        self.config = config or CFG
        self.scheduler = scheduler if scheduler is not None else FrameScheduler()
        self.storage = storage if storage is not None else MemoryStorage()
        self.clock = clock or _now_ms
        self.rng = rng or random.Random(self.config.seed)

        cell = self.config.cell_size
        self.board_size = BoardSize(canvas.width // cell, canvas.height // cell)
        if self.board_size.width < 4 or self.board_size.height < 1:
            raise SurfaceUnavailableError(
                f"Canvas {canvas.width}x{canvas.height} is too small for {cell}px cells"
            )

        self._frame_handle: Optional[int] = None
        self._last_frame_time = 0.0
        self._state = new_game_state(
            self.board_size, self._load_high_score(), self.config, self.rng
        )

    # ---------- Persistence ----------
    def _load_high_score(self) -> int:
        try:
            raw = self.storage.get(self.config.high_score_key)
        except Exception:
            logger.warning("Could not read high score; starting from 0", exc_info=True)
            return 0
        return _parse_high_score(raw)

    def _save_high_score(self, score: int) -> None:
        try:
            self.storage.set(self.config.high_score_key, score)
        except Exception:
            logger.warning("Could not save high score %d", score, exc_info=True)

    # ---------- Scheduling ----------
    def _request_frame(self) -> None:
        self._frame_handle = self.scheduler.request(self.game_loop)

    def _cancel_frame(self) -> None:
        if self._frame_handle is not None:
            self.scheduler.cancel(self._frame_handle)
            self._frame_handle = None

    @property
    def is_running(self) -> bool:
        """True while a tick is waiting on the scheduler."""
        return self._frame_handle is not None

    def _reinitialize(self) -> None:
        self._state = new_game_state(
            self.board_size, self._state.high_score, self.config, self.rng
        )

    # ---------- Lifecycle ----------
    def start_game(self) -> None:
        status = self._state.status
        if status is GameStatus.PLAYING and self.is_running:
            return
        if status in (GameStatus.IDLE, GameStatus.GAME_OVER):
            self._reinitialize()
        self._state.status = GameStatus.PLAYING
        logger.debug("Game %s", "resumed" if status is GameStatus.PAUSED else "started")
        if not self.is_running:
            self._last_frame_time = self.clock()
            self._request_frame()

    def pause_game(self) -> None:
        if self._state.status is not GameStatus.PLAYING:
            return
        self._state.status = GameStatus.PAUSED
        self._cancel_frame()
        logger.debug("Game paused at score %d", self._state.score)

    def end_game(self) -> None:
        if self._state.status is GameStatus.GAME_OVER:
            return
        self._state.status = GameStatus.GAME_OVER
        self._finish_game()

    def _finish_game(self) -> None:
        state = self._state
        self._cancel_frame()

        if state.score > state.high_score:
            state.high_score = state.score
            self._save_high_score(state.score)
        logger.debug("Game over: score=%d high=%d", state.score, state.high_score)

        if self.on_game_over is not None:
            self.on_game_over(state.score)

    def reset_game(self) -> None:
        if self._state.status in (GameStatus.PLAYING, GameStatus.PAUSED):
            self.end_game()
        self._cancel_frame()
        self._reinitialize()
        logger.debug("Game reset")

    def change_direction(self, direction: Union[Direction, str]) -> None:
        """Buffer a turn; it is applied on the next step, last call wins."""
        self._state.next_direction = Direction(direction)

    # ---------- Ticking ----------
    def update(self, delta_time: float = 0.0) -> None:
        """One simulation step. No-op unless playing."""
        if self._state.status is not GameStatus.PLAYING:
            return
        alive = step_game(self._state, self.config, self.rng)
        if not alive:
            self._finish_game()

    def game_loop(self, now_ms: float) -> None:
        self._frame_handle = None
        delta = now_ms - self._last_frame_time
        if delta >= self._state.speed_ms:
            self.update(delta)
            self.render()
            self._last_frame_time = now_ms
        if self._state.status is GameStatus.PLAYING and not self.is_running:
            self._request_frame()

    def render(self) -> None:
        draw_game(self.ctx, self._state, self.config.cell_size,
                  self.canvas.width, self.canvas.height)

    # ---------- Accessors ----------
    def get_game_state(self) -> GameState:
        return self._state.copy()

    def get_game_speed(self) -> int:
        return self._state.speed_ms

    # ---------- Hooks for tests and automation ----------
    def set_score(self, score: int) -> None:
        self._state.score = score

    def set_level(self, level: int) -> None:
        self._state.level = level

    def set_snake_position(self, positions: Sequence[Tuple[int, int]]) -> None:
        if not positions:
            raise ValueError("snake needs at least one segment")
        snake: List[Position] = [Position(int(x), int(y)) for x, y in positions]
        self._state.snake = snake
        self._state.food = spawn_food(
            self.board_size, snake, self.rng, self.config.max_food_attempts
        )

    def set_food_position(self, position: Tuple[int, int]) -> None:
        x, y = position
        self._state.food = Position(int(x), int(y))

