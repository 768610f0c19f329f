import numpy as np # type: ignore


def policy_random(obs: np.ndarray, env, epsilon: float = 0.0) -> int:
    """
    Random policy: pick a uniformly random action.
    Roughly a quarter of the picks are reversals, which the engine ignores.
    """
    return int(np.random.randint(env.action_space_n))
