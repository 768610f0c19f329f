import pygame
import pytest

from arcadesnake.controls import handle_events, handle_key, key_to_direction
from arcadesnake.game import Direction, GameStatus


def keydown(key):
    return pygame.event.Event(pygame.KEYDOWN, key=key)


@pytest.mark.parametrize(
    "key, direction",
    [
        (pygame.K_UP, Direction.UP), (pygame.K_w, Direction.UP),
        (pygame.K_DOWN, Direction.DOWN), (pygame.K_s, Direction.DOWN),
        (pygame.K_LEFT, Direction.LEFT), (pygame.K_a, Direction.LEFT),
        (pygame.K_RIGHT, Direction.RIGHT), (pygame.K_d, Direction.RIGHT),
    ],
)
def test_key_map(key, direction):
    assert key_to_direction(key) is direction


def test_unmapped_key():
    assert key_to_direction(pygame.K_q) is None


def test_arrow_buffers_direction(engine):
    assert handle_events(engine, [keydown(pygame.K_UP)]) is True
    assert engine.get_game_state().next_direction is Direction.UP


def test_space_starts_pauses_and_resumes(engine):
    handle_key(engine, pygame.K_SPACE)
    assert engine.get_game_state().status is GameStatus.PLAYING
    handle_key(engine, pygame.K_SPACE)
    assert engine.get_game_state().status is GameStatus.PAUSED
    handle_key(engine, pygame.K_SPACE)
    assert engine.get_game_state().status is GameStatus.PLAYING


def test_r_resets_only_after_game_over(engine):
    engine.start_game()
    handle_key(engine, pygame.K_r)
    assert engine.get_game_state().status is GameStatus.PLAYING

    engine.end_game()
    handle_key(engine, pygame.K_r)
    assert engine.get_game_state().status is GameStatus.IDLE


def test_quit_and_escape(engine):
    assert handle_events(engine, [pygame.event.Event(pygame.QUIT)]) is False
    assert handle_events(engine, [keydown(pygame.K_ESCAPE)]) is False


def test_other_events_are_ignored(engine):
    before = engine.get_game_state()
    assert handle_events(engine, [pygame.event.Event(pygame.KEYUP, key=pygame.K_UP)]) is True
    assert engine.get_game_state() == before
