"""
Game entity dataclasses
"""

from dataclasses import dataclass

from .config import (
    PLAYER_SIZE,
    ENEMY_SIZE,
    ENEMY_SPEED,
    STAR_SIZE,
    TIMER_MODES,
)

# Float slack for accumulators fed by e.g. ten steps of 0.1s
TIMER_EPS = 1e-9


@dataclass(eq=False)
class Player:
    """Player controlled ball"""
    entity_id: int
    x: float
    y: float
    size: float = PLAYER_SIZE

    kind = "player"


@dataclass(eq=False)
class Enemy:
    """Enemy ball bouncing around the window"""
    entity_id: int
    x: float
    y: float
    dx: float  # unit direction
    dy: float
    size: float = ENEMY_SIZE
    speed: float = ENEMY_SPEED  # units/s

    kind = "enemy"


@dataclass(eq=False)
class Star:
    """Collectible star entity"""
    entity_id: int
    x: float
    y: float
    size: float = STAR_SIZE

    kind = "star"


@dataclass
class Score:
    """Process-wide counter of collected stars"""
    value: int = 0

    def increment(self, amount: int = 1) -> int:
        if amount < 0:
            raise ValueError(f"Score can only increase, got {amount}")
        self.value += amount
        return self.value


@dataclass
class SpawnTimer:
    """
    Repeating timer.

    ``tick`` returns the number of times the timer fired. In ``carry`` mode
    the period is subtracted per firing and the remainder kept; in ``reset``
    mode the accumulator is zeroed and the timer fires at most once per tick.
    """
    period: float
    mode: str = "carry"
    elapsed: float = 0.0

    def __post_init__(self):
        if self.period <= 0:
            raise ValueError(f"Timer period must be positive, got {self.period}")
        if self.mode not in TIMER_MODES:
            raise ValueError(f"Unknown timer mode: {self.mode!r}")

    def tick(self, dt: float) -> int:
        self.elapsed += dt
        if self.elapsed + TIMER_EPS < self.period:
            return 0

        if self.mode == "reset":
            self.elapsed = 0.0
            return 1

        fired = 0
        while self.elapsed + TIMER_EPS >= self.period:
            self.elapsed -= self.period
            fired += 1
        self.elapsed = max(self.elapsed, 0.0)
        return fired

    def reset(self):
        self.elapsed = 0.0
