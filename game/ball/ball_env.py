"""
BallEnv - the ball game as a Gymnasium environment
--------------------------------------------------
- Arcade for rendering
- Gymnasium API
- 1 RL agent that moves in 8 directions (or stays put)
- Stars to collect for reward, bouncing enemies that end the episode on contact
- Vector observation: agent state + top-K nearest enemies + top-M nearest stars
- Discrete(9) action space: (dx, dy) in {-1, 0, 1}^2

The game rules themselves live in ``BallSimulation``; this module only maps
actions to movement keys and simulation state to observations and rewards.

Install:
    pip install gymnasium arcade numpy

Quick test:
    python -m game.ball.ball_env
"""

from __future__ import annotations

import random
from typing import List, Optional, Dict, Any

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .config import KEY_UP, KEY_DOWN, KEY_LEFT, KEY_RIGHT
from .simulation import BallSimulation

DEFAULT_REWARDS = {
    "R_STAR": 1.0,     # per collected star
    "R_DEATH": 5.0,    # on the tick the player is hit
    "R_TIME": 0.001,   # per step
}

# action index -> (dx, dy); index 4 is "stay"
ACTIONS = [(dx, dy) for dy in (-1, 0, 1) for dx in (-1, 0, 1)]


def action_to_keys(action: int) -> frozenset:
    """Map a Discrete(9) action index to a set of movement keys"""
    dx, dy = ACTIONS[int(action)]
    keys = set()
    if dx < 0:
        keys.add(KEY_LEFT)
    elif dx > 0:
        keys.add(KEY_RIGHT)
    if dy < 0:
        keys.add(KEY_DOWN)
    elif dy > 0:
        keys.add(KEY_UP)
    return frozenset(keys)


class BallEnv(gym.Env):
    """Dodge enemies and collect stars, rendered with Arcade"""

    metadata = {"render_modes": ["human"], "render_fps": 60}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        width: int = 800,
        height: int = 600,
        dt: float = 1 / 30,
        max_steps: int = 1800,  # 60s at 30 FPS
        k_enemies: int = 4,
        m_stars: int = 3,
        timer_mode: str = "carry",
        reward_params: Optional[Dict[str, float]] = None,
    ):
        super().__init__()

        if render_mode is not None and render_mode not in self.metadata["render_modes"]:
            raise ValueError(f"Unsupported render_mode {render_mode!r}")
        self.render_mode = render_mode

        # Arena
        self.width = width
        self.height = height
        self.dt = dt
        self.max_steps = max_steps
        self.timer_mode = timer_mode

        # Observation config
        self.k_enemies = k_enemies
        self.m_stars = m_stars

        self.rewards = dict(DEFAULT_REWARDS)
        if reward_params:
            self.rewards.update({k: v for k, v in reward_params.items() if k in DEFAULT_REWARDS})

        self.action_space = spaces.Discrete(len(ACTIONS))

        # Agent: pos(2) alive(1)
        # Each enemy: rel pos(2) direction(2)
        # Each star: rel pos(2)
        obs_dim = 2 + 1 + (self.k_enemies * 4) + (self.m_stars * 2)
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        # Arcade rendering state
        self._window = None

        self.sim: BallSimulation = None  # type: ignore
        self._step_count = 0
        self._stars_collected = 0
        self._last_pos = (width * 0.5, height * 0.5)

    @property
    def window_size(self):
        return (self.width, self.height)

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)

        rng = random.Random(seed) if seed is not None else random.Random()
        self.sim = BallSimulation(rng=rng, timer_mode=self.timer_mode, verbose=0)
        self.sim.setup(self.window_size)

        self._step_count = 0
        self._stars_collected = 0
        self._last_pos = (self.sim.world.player.x, self.sim.world.player.y)

        return self._get_obs(), self._get_info()

    def step(self, action):
        was_alive = self.sim.world.alive
        score_before = self.sim.score

        self.sim.step(self.dt, action_to_keys(action), self.window_size)

        collected = self.sim.score - score_before
        self._stars_collected += collected
        died = was_alive and not self.sim.world.alive
        if self.sim.world.alive:
            self._last_pos = (self.sim.world.player.x, self.sim.world.player.y)

        reward = self._compute_reward(collected, died)

        terminated = not self.sim.world.alive
        self._step_count += 1
        truncated = self._step_count >= self.max_steps

        obs = self._get_obs()
        info = self._get_info()

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    # ----------------------------
    # Observation / reward / info
    # ----------------------------

    def _get_obs(self) -> np.ndarray:
        world = self.sim.world
        # After death the last known position anchors the relative features
        px, py = self._last_pos

        obs_parts = [
            (px / self.width) * 2 - 1,
            (py / self.height) * 2 - 1,
            1.0 if world.alive else -1.0,
        ]

        enemies_sorted = sorted(
            world.enemies,
            key=lambda e: (e.x - px) ** 2 + (e.y - py) ** 2
        )
        for i in range(self.k_enemies):
            if i < len(enemies_sorted):
                e = enemies_sorted[i]
                obs_parts += [
                    (e.x - px) / self.width,
                    (e.y - py) / self.height,
                    e.dx,
                    e.dy,
                ]
            else:
                obs_parts += [0.0, 0.0, 0.0, 0.0]

        stars_sorted = sorted(
            world.stars,
            key=lambda s: (s.x - px) ** 2 + (s.y - py) ** 2
        )
        for i in range(self.m_stars):
            if i < len(stars_sorted):
                s = stars_sorted[i]
                obs_parts += [
                    (s.x - px) / self.width,
                    (s.y - py) / self.height,
                ]
            else:
                obs_parts += [0.0, 0.0]

        return np.clip(np.array(obs_parts, dtype=np.float32), -1.0, 1.0)

    def _compute_reward(self, collected: int, died: bool) -> float:
        reward = self.rewards["R_STAR"] * collected
        reward -= self.rewards["R_TIME"]
        if died:
            reward -= self.rewards["R_DEATH"]
        return float(reward)

    def _get_info(self) -> Dict[str, Any]:
        world = self.sim.world
        return {
            "score": world.score.value,
            "stars_collected": self._stars_collected,
            "alive": world.alive,
            "num_enemies": len(world.enemies),
            "num_stars": len(world.stars),
            "step": self._step_count,
        }

    # ----------------------------
    # Rendering with Arcade
    # ----------------------------

    def render(self):
        if self.render_mode != "human":
            return None

        if self._window is None:
            # arcade needs a display, keep it out of headless training
            from .render import BallWindow
            self._window = BallWindow(self, self.width, self.height)
        self._window.on_draw()
        return None

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None


# ----------------------------
# Quick sanity test
# ----------------------------

def run_random_episode(render: bool = True, seed: Optional[int] = 42) -> List[float]:
    """Run a random episode, returns the per-step rewards"""
    env = BallEnv(render_mode="human" if render else None)
    obs, info = env.reset(seed=seed)

    terminated = False
    truncated = False
    rewards = []

    import time
    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        rewards.append(reward)

        if render and env._window:
            env._window.dispatch_events()
            env._window.on_draw()
            env._window.flip()
            time.sleep(0.03)

    print(f"Random episode return: {sum(rewards):.2f}, score: {info['score']}, "
          f"steps: {info['step']}")

    env.close()
    return rewards


if __name__ == "__main__":
    run_random_episode(render=True)
