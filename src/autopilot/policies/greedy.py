from typing import List

import numpy as np # type: ignore

from arcadesnake.game import Direction
from autopilot.env import ACTIONS, left_of, right_of


def best_move_toward_food(hx: int, hy: int, fx: int, fy: int) -> List[Direction]:
    """
    Returns a preference ordering of moves that reduce Manhattan distance to food.
    Does NOT check collisions; caller should filter unsafe moves.
    """
    prefs = []
    if fx < hx:
        prefs.append(Direction.LEFT)
    elif fx > hx:
        prefs.append(Direction.RIGHT)
    if fy < hy:
        prefs.append(Direction.UP)
    elif fy > hy:
        prefs.append(Direction.DOWN)
    # Orthogonal options go last so the caller still has choices when blocked
    for d in (Direction.UP, Direction.DOWN, Direction.LEFT, Direction.RIGHT):
        if d not in prefs:
            prefs.append(d)
    return prefs  # length 4


def dir_to_action(direction: Direction) -> int:
    """Map a Direction to the env action id."""
    for a, d in ACTIONS.items():
        if d is direction:
            return a
    raise ValueError(f"No action for {direction}")


def decode_obs(obs: np.ndarray):
    """
    Matches observe() layout (9 dims):
    [hx_n, hy_n, fx_n, fy_n, dx, dy, danger_ahead, danger_left, danger_right]
    """
    hx_n, hy_n, fx_n, fy_n, dx, dy, dan_f, dan_l, dan_r = obs.tolist()
    return hx_n, hy_n, fx_n, fy_n, int(dx), int(dy), bool(dan_f), bool(dan_l), bool(dan_r)


def policy_greedy(obs: np.ndarray, env, epsilon: float = 0.0) -> int:
    """
    Greedy on food distance with simple safety:
    - prefer actions that reduce Manhattan distance
    - avoid any move flagged dangerous if possible
    - if all preferred moves dangerous, choose any safe move
    - if all moves look dangerous, fall back to random

    `env` needs `board_size` and `action_space_n`.
    """
    hx_n, hy_n, fx_n, fy_n, dx, dy, dan_f, dan_l, dan_r = decode_obs(obs)

    # Convert normalized to grid ints
    width, height = env.board_size
    hx = int(round(hx_n * (width - 1)))
    hy = int(round(hy_n * (height - 1)))
    fx = int(round(fx_n * (width - 1)))
    fy = int(round(fy_n * (height - 1)))

    forward = next(d for d in Direction if d.vector == (dx, dy))

    # Danger flags are relative to heading; the reversal has none and the
    # engine ignores it anyway, so treat it as dangerous.
    danger_map = {
        dir_to_action(forward): dan_f,
        dir_to_action(left_of(forward)): dan_l,
        dir_to_action(right_of(forward)): dan_r,
    }
    all_actions = list(range(env.action_space_n))
    for a in all_actions:
        danger_map.setdefault(a, True)

    pref_actions = [dir_to_action(d) for d in best_move_toward_food(hx, hy, fx, fy)]

    # 1) try safe preferred actions in order
    for a in pref_actions:
        if not danger_map[a]:
            return a

    # 2) otherwise, try any safe non-preferred action
    for a in all_actions:
        if not danger_map[a]:
            return a

    # 3) otherwise, fallback to random (we're boxed in)
    return int(np.random.randint(env.action_space_n))
