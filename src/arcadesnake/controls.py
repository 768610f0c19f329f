# controls.py
from typing import Iterable, Optional

import pygame # type: ignore

from .engine import GameEngine
from .game import Direction, GameStatus

KEY_DIRECTIONS = {
    pygame.K_UP: Direction.UP,
    pygame.K_w: Direction.UP,
    pygame.K_DOWN: Direction.DOWN,
    pygame.K_s: Direction.DOWN,
    pygame.K_LEFT: Direction.LEFT,
    pygame.K_a: Direction.LEFT,
    pygame.K_RIGHT: Direction.RIGHT,
    pygame.K_d: Direction.RIGHT,
}

def key_to_direction(key: int) -> Optional[Direction]:
    return KEY_DIRECTIONS.get(key)

def handle_key(engine: GameEngine, key: int) -> bool:
    """Apply one key press to the engine. Return False to quit."""
    if key == pygame.K_ESCAPE:
        return False

    direction = key_to_direction(key)
    if direction is not None:
        engine.change_direction(direction)
        return True

    status = engine.get_game_state().status
    if key == pygame.K_SPACE:
        if status is GameStatus.PLAYING:
            engine.pause_game()
        else:
            engine.start_game()
    elif key == pygame.K_r and status is GameStatus.GAME_OVER:
        engine.reset_game()
    return True

def handle_events(engine: GameEngine, events: Iterable[pygame.event.Event]) -> bool:
    """Process events; feed keys to the engine. Return False to quit."""
    for event in events:
        if event.type == pygame.QUIT:
            return False
        if event.type == pygame.KEYDOWN and not handle_key(engine, event.key):
            return False
    return True
