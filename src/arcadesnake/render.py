# render.py
from typing import Optional

from .adapters import DrawingContext
from .config import BG, GRID, SNAKE_HEAD, SNAKE_BODY, EYES, FOOD
from .game import Direction, GameState

EYE_SIZE = 3
EYE_OFFSET = 6

# ---------- Helpers ----------
def clear(ctx: DrawingContext, width: int, height: int) -> None:
    ctx.fill_rect(0, 0, width, height, BG)

def draw_grid(ctx: DrawingContext, state: GameState, cell_size: int) -> None:
    cols, rows = state.board_size
    width_px, height_px = cols * cell_size, rows * cell_size
    for x in range(cols + 1):
        ctx.stroke_line(x * cell_size, 0, x * cell_size, height_px, GRID)
    for y in range(rows + 1):
        ctx.stroke_line(0, y * cell_size, width_px, y * cell_size, GRID)

def _eye_offsets(direction: Direction):
    """Top-left corners of the two eyes, relative to the head cell."""
    if direction is Direction.RIGHT:
        return (EYE_OFFSET + 4, 4), (EYE_OFFSET + 4, 13)
    if direction is Direction.LEFT:
        return (4, 4), (4, 13)
    if direction is Direction.UP:
        return (4, 4), (13, 4)
    return (4, EYE_OFFSET + 4), (13, EYE_OFFSET + 4)

def draw_snake(ctx: DrawingContext, state: GameState, cell_size: int) -> None:
    for index, (gx, gy) in enumerate(state.snake):
        x, y = gx * cell_size, gy * cell_size
        if index == 0:
            ctx.fill_rect(x + 1, y + 1, cell_size - 2, cell_size - 2, SNAKE_HEAD)
            for ex, ey in _eye_offsets(state.direction):
                ctx.fill_rect(x + ex, y + ey, EYE_SIZE, EYE_SIZE, EYES)
        else:
            ctx.fill_rect(x + 2, y + 2, cell_size - 4, cell_size - 4, SNAKE_BODY)

def draw_food(ctx: DrawingContext, state: GameState, cell_size: int) -> None:
    x, y = state.food.x * cell_size, state.food.y * cell_size
    ctx.fill_circle(x + cell_size / 2, y + cell_size / 2, (cell_size - 4) / 2, FOOD)

# ---------- Draw ----------
def draw_game(ctx: DrawingContext, state: GameState, cell_size: int,
              width: Optional[int] = None, height: Optional[int] = None) -> None:
    """Paint one frame: background, grid, snake, food."""
    if width is None:
        width = state.board_size.width * cell_size
    if height is None:
        height = state.board_size.height * cell_size
    clear(ctx, width, height)
    draw_grid(ctx, state, cell_size)
    draw_snake(ctx, state, cell_size)
    draw_food(ctx, state, cell_size)
