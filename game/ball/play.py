"""
Human-playable version of the ball game

Controls: WASD or arrow keys to move, ESC to quit.

Run:
    python -m game.ball.play
"""

from __future__ import annotations

from typing import Dict, Optional
import random

import arcade

from .config import (
    GAME_CONFIG,
    SOUNDS,
    SPRITES,
    COLORS,
    KEY_UP,
    KEY_DOWN,
    KEY_LEFT,
    KEY_RIGHT,
)
from .simulation import BallSimulation
from .render import draw_hud

KEYMAP = {
    arcade.key.W: KEY_UP,
    arcade.key.UP: KEY_UP,
    arcade.key.S: KEY_DOWN,
    arcade.key.DOWN: KEY_DOWN,
    arcade.key.A: KEY_LEFT,
    arcade.key.LEFT: KEY_LEFT,
    arcade.key.D: KEY_RIGHT,
    arcade.key.RIGHT: KEY_RIGHT,
}


class BallGame(arcade.Window):
    """Arcade window driving a BallSimulation from the keyboard"""

    def __init__(
        self,
        width: int = GAME_CONFIG["width"],
        height: int = GAME_CONFIG["height"],
        title: str = GAME_CONFIG["title"],
        update_rate: float = GAME_CONFIG["update_rate"],
        timer_mode: str = GAME_CONFIG["timer_mode"],
        seed: Optional[int] = None,
    ):
        super().__init__(width, height, title, update_rate=update_rate)
        arcade.set_background_color(COLORS["background"])

        self._held = set()
        self._sounds: Dict[str, arcade.Sound] = {}
        self._sprites: Dict[int, arcade.Sprite] = {}
        self.sprite_list = arcade.SpriteList()

        self.sim = BallSimulation(
            rng=random.Random(seed),
            timer_mode=timer_mode,
            audio=self.play_audio,
            on_spawn=self.load_sprite,
            on_despawn=self.drop_sprite,
        )

    def setup(self):
        self.sim.setup((self.width, self.height))

    # ----------------------------
    # Collaborators
    # ----------------------------

    def play_audio(self, clip_id: str):
        sound = self._sounds.get(clip_id)
        if sound is None:
            sound = arcade.load_sound(SOUNDS[clip_id])
            self._sounds[clip_id] = sound
        arcade.play_sound(sound)

    def load_sprite(self, entity):
        try:
            sprite = arcade.Sprite(SPRITES[entity.kind])
            sprite.width = entity.size
            sprite.height = entity.size
        except (KeyError, OSError) as exc:
            print(f"[BallGame] no image for {entity.kind}, drawing a circle: {exc!r}")
            sprite = arcade.SpriteCircle(int(entity.size / 2), COLORS[entity.kind])
        sprite.center_x = entity.x
        sprite.center_y = entity.y
        self._sprites[entity.entity_id] = sprite
        self.sprite_list.append(sprite)

    def drop_sprite(self, entity):
        sprite = self._sprites.pop(entity.entity_id, None)
        if sprite is not None:
            sprite.remove_from_sprite_lists()

    # ----------------------------
    # Input
    # ----------------------------

    @property
    def pressed_keys(self) -> frozenset:
        return frozenset(KEYMAP[k] for k in self._held)

    def on_key_press(self, key, modifiers):
        if key == arcade.key.ESCAPE:
            self.close()
        elif key in KEYMAP:
            self._held.add(key)

    def on_key_release(self, key, modifiers):
        self._held.discard(key)

    # ----------------------------
    # Frame
    # ----------------------------

    def on_update(self, delta_time: float):
        self.sim.step(delta_time, self.pressed_keys, (self.width, self.height))

        world = self.sim.world
        movers = list(world.enemies)
        if world.player is not None:
            movers.append(world.player)
        for entity in movers:
            sprite = self._sprites.get(entity.entity_id)
            if sprite is not None:
                sprite.center_x = entity.x
                sprite.center_y = entity.y

    def on_draw(self):
        self.clear()
        self.sprite_list.draw()

        draw_hud(self.sim.score, self.sim.world.alive, self.height)


def main():
    game = BallGame()
    game.setup()
    arcade.run()


if __name__ == "__main__":
    main()
