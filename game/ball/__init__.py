"""Ball game module - dodge the enemies, collect the stars"""

from .simulation import BallSimulation, World, Event
from .ball_env import BallEnv, run_random_episode

__all__ = ['BallSimulation', 'World', 'Event', 'BallEnv', 'run_random_episode']
