import random

import pytest

from arcadesnake.config import Config
from arcadesnake.game import (
    BoardSize, Direction, GameStatus, Position,
    hits_body, hits_wall, is_opposite, level_for_score, new_game_state,
    next_position, spawn_food, speed_for_level, step_game,
)

BOARD = BoardSize(20, 20)


class CountingRandom(random.Random):
    def __init__(self, seed=None):
        super().__init__(seed)
        self.draws = 0

    def randrange(self, *args, **kwargs):
        self.draws += 1
        return super().randrange(*args, **kwargs)


@pytest.fixture
def state():
    s = new_game_state(BOARD, 0, Config(seed=3), random.Random(3))
    s.status = GameStatus.PLAYING
    return s


def test_opposites():
    assert is_opposite(Direction.UP, Direction.DOWN)
    assert is_opposite(Direction.LEFT, Direction.RIGHT)
    assert not is_opposite(Direction.UP, Direction.LEFT)
    assert not is_opposite(Direction.RIGHT, Direction.RIGHT)


def test_next_position_uses_screen_coordinates():
    p = Position(5, 5)
    assert next_position(p, Direction.UP) == (5, 4)
    assert next_position(p, Direction.DOWN) == (5, 6)
    assert next_position(p, Direction.LEFT) == (4, 5)
    assert next_position(p, Direction.RIGHT) == (6, 5)


@pytest.mark.parametrize(
    "pos, expected",
    [((0, 0), False), ((19, 19), False), ((-1, 5), True), ((20, 5), True), ((5, -1), True), ((5, 20), True)],
)
def test_hits_wall(pos, expected):
    assert hits_wall(Position(*pos), BOARD) is expected


def test_hits_body():
    body = [Position(1, 1), Position(2, 1)]
    assert hits_body(Position(2, 1), body)
    assert not hits_body(Position(3, 1), body)


@pytest.mark.parametrize("score, level", [(0, 1), (99, 1), (100, 2), (150, 2), (2000, 21)])
def test_level_for_score(score, level):
    assert level_for_score(score) == level


def test_speed_for_level_is_floored():
    assert speed_for_level(1, 150) == 150
    assert speed_for_level(2, 150) == 140
    assert speed_for_level(11, 150) == 50
    speeds = [speed_for_level(level, 150) for level in range(1, 200)]
    assert min(speeds) == 50
    assert speeds == sorted(speeds, reverse=True)


def test_spawn_food_avoids_snake():
    board = BoardSize(3, 3)
    taken = [Position(x, y) for x in range(3) for y in range(3) if (x, y) != (2, 2)]
    for seed in range(5):
        assert spawn_food(board, taken, random.Random(seed), max_attempts=1000) == (2, 2)


def test_spawn_food_gives_up_on_full_board():
    board = BoardSize(2, 2)
    taken = [Position(x, y) for x in range(2) for y in range(2)]
    rng = CountingRandom(0)

    food = spawn_food(board, taken, rng, max_attempts=5)

    assert food in taken
    assert rng.draws == 10


def test_new_game_state_spawn(state):
    assert state.snake == [(10, 10), (9, 10), (8, 10)]
    assert state.direction is Direction.RIGHT
    assert state.speed_ms == 150
    assert state.food not in state.snake


def test_copy_is_independent(state):
    clone = state.copy()
    clone.snake.pop()
    clone.score = 50
    assert len(state.snake) == 3
    assert state.score == 0
    assert clone.board_size == state.board_size


def test_step_grows_on_food(state):
    state.food = Position(11, 10)
    assert step_game(state, Config(), random.Random(1)) is True
    assert state.head == (11, 10)
    assert len(state.snake) == 4
    assert state.score == 10


def test_step_moves_without_food(state):
    state.food = Position(0, 0)
    step_game(state, Config(), random.Random(1))
    assert state.snake == [(11, 10), (10, 10), (9, 10)]
    assert state.score == 0


def test_step_collision_leaves_body_alone(state):
    state.snake = [Position(19, 3), Position(18, 3)]
    assert step_game(state, Config(), random.Random(1)) is False
    assert state.status is GameStatus.GAME_OVER
    assert state.snake == [(19, 3), (18, 3)]


def test_step_does_nothing_when_not_playing(state):
    state.status = GameStatus.PAUSED
    before = state.copy()
    assert step_game(state, Config(), random.Random(1)) is True
    assert state == before


def test_single_segment_may_reverse(state):
    state.snake = [Position(5, 5)]
    state.next_direction = Direction.LEFT
    step_game(state, Config(), random.Random(1))
    assert state.direction is Direction.LEFT
    assert state.head == (4, 5)
