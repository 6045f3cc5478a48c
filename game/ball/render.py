"""
Arcade drawing helpers shared by the environment window and the play driver
"""

import arcade

from .config import COLORS


def draw_hud(score: int, alive: bool, height: int):
    txt = f"Score: {score}"
    if not alive:
        txt += "  (game over)"
    arcade.draw_text(txt, 12, height - 28, COLORS["hud"], 14)


def draw_world(world, height: int):
    """Draw every entity as a filled circle plus the score HUD"""
    for s in world.stars:
        arcade.draw_circle_filled(s.x, s.y, s.size / 2, COLORS["star"])

    for e in world.enemies:
        arcade.draw_circle_filled(e.x, e.y, e.size / 2, COLORS["enemy"])

    if world.player is not None:
        p = world.player
        arcade.draw_circle_filled(p.x, p.y, p.size / 2, COLORS["player"])

    draw_hud(world.score.value, world.alive, height)


class BallWindow(arcade.Window):
    """Arcade window for rendering the ball environment"""

    def __init__(self, env, width: int, height: int):
        super().__init__(width, height, "BallEnv - Arcade")
        self.env = env
        arcade.set_background_color(COLORS["background"])

    def on_draw(self):
        self.clear()
        draw_world(self.env.sim.world, self.height)
