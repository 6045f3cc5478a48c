"""
BallSimulation - per-frame rules of the ball game
-------------------------------------------------
- Player moves with the pressed movement keys and is confined to the window
- Enemies travel in a straight line and bounce off the window edges
- Touching an enemy removes the player for good
- Touching a star collects it and increments the score
- Two repeating timers spawn a star every second and an enemy every 5 seconds

The simulation never draws or plays anything itself. Every side effect is
returned from ``step`` as an ``Event`` and forwarded to the optional
collaborator callables (audio, spawn/despawn, score sink).
"""

from __future__ import annotations

import itertools
import random
import warnings
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Tuple

from .config import (
    PLAYER_SPEED,
    NUMBER_OF_ENEMIES,
    NUMBER_OF_STARS,
    STAR_SPAWN_TIME,
    ENEMY_SPAWN_TIME,
    CLIP_BOUNCE,
    CLIP_EXPLOSION,
    CLIP_COLLECT,
    KEY_UP,
    KEY_DOWN,
    KEY_LEFT,
    KEY_RIGHT,
    MOVEMENT_KEYS,
)
from .entities import Player, Enemy, Star, Score, SpawnTimer
from .utils import unit, confine_axis, touching

KEY_DIRECTIONS = {
    KEY_UP: (0.0, 1.0),
    KEY_DOWN: (0.0, -1.0),
    KEY_LEFT: (-1.0, 0.0),
    KEY_RIGHT: (1.0, 0.0),
}


@dataclass
class Event:
    """Side-effect request emitted by the simulation"""
    kind: str  # "spawn", "despawn", "sound" or "score_changed"
    entity: Optional[object] = None
    clip: Optional[str] = None
    value: Optional[int] = None


class World:
    """In-memory entity store: optional player, enemies, stars, score, timers"""

    def __init__(self, timer_mode: str = "carry"):
        self.player: Optional[Player] = None
        self.enemies: List[Enemy] = []
        self.stars: List[Star] = []
        self.score = Score()
        self.star_timer = SpawnTimer(STAR_SPAWN_TIME, mode=timer_mode)
        self.enemy_timer = SpawnTimer(ENEMY_SPAWN_TIME, mode=timer_mode)
        self._ids = itertools.count(1)

    def next_id(self) -> int:
        return next(self._ids)

    def add_player(self, x: float, y: float) -> Player:
        if self.player is not None:
            raise ValueError("World already has a player")
        self.player = Player(entity_id=self.next_id(), x=x, y=y)
        return self.player

    def add_enemy(self, x: float, y: float, dx: float, dy: float) -> Enemy:
        enemy = Enemy(entity_id=self.next_id(), x=x, y=y, dx=dx, dy=dy)
        self.enemies.append(enemy)
        return enemy

    def add_star(self, x: float, y: float) -> Star:
        star = Star(entity_id=self.next_id(), x=x, y=y)
        self.stars.append(star)
        return star

    def remove_player(self) -> Optional[Player]:
        player, self.player = self.player, None
        return player

    def remove_star(self, star: Star):
        self.stars = [s for s in self.stars if s is not star]

    @property
    def alive(self) -> bool:
        return self.player is not None


def check_window_size(window_size) -> Tuple[float, float]:
    """Validate a (width, height) pair; there is no sane default window."""
    if window_size is None:
        raise ValueError("Window size is required")
    try:
        width, height = window_size
    except (TypeError, ValueError):
        raise ValueError(f"Window size must be a (width, height) pair, got {window_size!r}")
    if width <= 0 or height <= 0:
        raise ValueError(f"Window dimensions must be positive, got {width}x{height}")
    return float(width), float(height)


class BallSimulation:
    """Entity store plus the ordered per-frame systems operating on it"""

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        timer_mode: str = "carry",
        n_enemies: int = NUMBER_OF_ENEMIES,
        n_stars: int = NUMBER_OF_STARS,
        audio: Optional[Callable[[str], None]] = None,
        on_spawn: Optional[Callable[[object], None]] = None,
        on_despawn: Optional[Callable[[object], None]] = None,
        on_score: Optional[Callable[[int], None]] = None,
        verbose: int = 1,
    ):
        self.rng = rng if rng is not None else random.Random()
        self.timer_mode = timer_mode
        self.n_enemies = n_enemies
        self.n_stars = n_stars
        self.verbose = verbose

        # Collaborators
        self.audio = audio
        self.on_spawn = on_spawn
        self.on_despawn = on_despawn
        self.on_score = on_score if on_score is not None else self._print_score

        self.world = World(timer_mode=timer_mode)
        self._last_score = self.world.score.value
        self._events: List[Event] = []
        self._failed_callbacks = set()

    # ----------------------------
    # Public API
    # ----------------------------

    def setup(self, window_size) -> List[Event]:
        """Spawn the player at the center plus the initial enemies and stars"""
        width, height = check_window_size(window_size)
        self._events = []

        player = self.world.add_player(width / 2.0, height / 2.0)
        self._emit(Event("spawn", entity=player))
        for _ in range(self.n_enemies):
            self._spawn_enemy(width, height)
        for _ in range(self.n_stars):
            self._spawn_star(width, height)

        return self._events

    def step(self, dt: float, pressed_keys: Iterable[str], window_size) -> List[Event]:
        """Advance the game by ``dt`` seconds and return the emitted events"""
        if dt < 0:
            raise ValueError(f"dt must be non-negative, got {dt}")
        width, height = check_window_size(window_size)
        keys = frozenset(pressed_keys)
        unknown = keys - MOVEMENT_KEYS
        if unknown:
            raise ValueError(f"Unknown movement keys: {sorted(unknown)}")

        self._events = []

        self.move_player(keys, dt)
        self.confine_player(width, height)
        self.move_enemies(dt)
        self.confine_enemies(width, height)
        self.check_enemy_hit()
        self.collect_stars()
        self.report_score()
        star_fires, enemy_fires = self.tick_timers(dt)
        for _ in range(star_fires):
            self._spawn_star(width, height)
        for _ in range(enemy_fires):
            self._spawn_enemy(width, height)

        return self._events

    @property
    def score(self) -> int:
        return self.world.score.value

    # ----------------------------
    # Systems
    # ----------------------------

    def move_player(self, keys: Iterable[str], dt: float):
        player = self.world.player
        if player is None:
            return

        dx, dy = 0.0, 0.0
        for key in keys:
            kx, ky = KEY_DIRECTIONS[key]
            dx += kx
            dy += ky

        # Opposite keys cancel out to a zero vector, which stays zero
        dx, dy = unit(dx, dy)
        player.x += dx * PLAYER_SPEED * dt
        player.y += dy * PLAYER_SPEED * dt

    def confine_player(self, width: float, height: float):
        player = self.world.player
        if player is None:
            return

        half = player.size / 2.0
        player.x, _ = confine_axis(player.x, half, width - half)
        player.y, _ = confine_axis(player.y, half, height - half)

    def move_enemies(self, dt: float):
        for e in self.world.enemies:
            e.x += e.dx * e.speed * dt
            e.y += e.dy * e.speed * dt

    def confine_enemies(self, width: float, height: float):
        for e in self.world.enemies:
            half = e.size / 2.0
            e.x, crossed_x = confine_axis(e.x, half, width - half)
            e.y, crossed_y = confine_axis(e.y, half, height - half)

            # Each crossed bound flips the component once, so two crossings cancel
            if crossed_x % 2:
                e.dx *= -1.0
            if crossed_y % 2:
                e.dy *= -1.0

            if crossed_x or crossed_y:
                self._play(CLIP_BOUNCE)

    def check_enemy_hit(self) -> bool:
        player = self.world.player
        if player is None:
            return False

        for e in self.world.enemies:
            if touching(player, e):
                self._play(CLIP_EXPLOSION)
                self.world.remove_player()
                self._emit(Event("despawn", entity=player))
                return True
        return False

    def collect_stars(self) -> int:
        player = self.world.player
        if player is None:
            return 0

        collected = 0
        for star in list(self.world.stars):
            if touching(player, star):
                self._play(CLIP_COLLECT)
                self.world.remove_star(star)
                self._emit(Event("despawn", entity=star))
                self.world.score.increment()
                collected += 1
        return collected

    def report_score(self):
        value = self.world.score.value
        if value != self._last_score:
            self._last_score = value
            self._emit(Event("score_changed", value=value))

    def tick_timers(self, dt: float) -> Tuple[int, int]:
        return self.world.star_timer.tick(dt), self.world.enemy_timer.tick(dt)

    # ----------------------------
    # Spawning
    # ----------------------------

    def _spawn_star(self, width: float, height: float) -> Star:
        x = self.rng.random() * width
        y = self.rng.random() * height
        star = self.world.add_star(x, y)
        self._emit(Event("spawn", entity=star))
        return star

    def _spawn_enemy(self, width: float, height: float) -> Enemy:
        x = self.rng.random() * width
        y = self.rng.random() * height
        # Both components from [0, 1): enemies always start heading up-right
        dx, dy = unit(self.rng.random(), self.rng.random())
        if dx == 0.0 and dy == 0.0:
            dx = 1.0
        enemy = self.world.add_enemy(x, y, dx, dy)
        self._emit(Event("spawn", entity=enemy))
        return enemy

    # ----------------------------
    # Side effects
    # ----------------------------

    def _play(self, clip: str):
        self._emit(Event("sound", clip=clip))

    def _emit(self, event: Event):
        self._events.append(event)

        if event.kind == "sound":
            self._notify("audio", self.audio, event.clip)
        elif event.kind == "spawn":
            self._notify("on_spawn", self.on_spawn, event.entity)
        elif event.kind == "despawn":
            self._notify("on_despawn", self.on_despawn, event.entity)
        elif event.kind == "score_changed":
            self._notify("on_score", self.on_score, event.value)

    def _notify(self, name: str, callback, arg):
        if callback is None:
            return
        try:
            callback(arg)
        except Exception as exc:
            # Collaborators are best-effort, the frame must still complete
            if name not in self._failed_callbacks:
                self._failed_callbacks.add(name)
                warnings.warn(f"[BallSimulation] {name} failed: {exc!r}", RuntimeWarning)

    def _print_score(self, value: int):
        if self.verbose > 0:
            print(f"Score:{value}")
