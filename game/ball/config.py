"""
Game constants and default configuration for the ball game
"""

PLAYER_SIZE = 64.0
PLAYER_SPEED = 500.0

NUMBER_OF_ENEMIES = 4
ENEMY_SIZE = 64.0
ENEMY_SPEED = 200.0
ENEMY_SPAWN_TIME = 5.0

STAR_SIZE = 32.0
NUMBER_OF_STARS = 10
STAR_SPAWN_TIME = 1.0

# Clip ids requested from the audio collaborator
CLIP_BOUNCE = "pluck"
CLIP_EXPLOSION = "explosion"
CLIP_COLLECT = "collect"

# Movement keys understood by the simulation
KEY_UP = "up"
KEY_DOWN = "down"
KEY_LEFT = "left"
KEY_RIGHT = "right"
MOVEMENT_KEYS = frozenset((KEY_UP, KEY_DOWN, KEY_LEFT, KEY_RIGHT))

TIMER_MODES = ("carry", "reset")

# Window / driver parameters
GAME_CONFIG = {
    "width": 1280,
    "height": 720,
    "title": "Ball",
    "update_rate": 1 / 60,
    "timer_mode": "carry",
}

# Arcade built-in resources used by the play driver
SOUNDS = {
    CLIP_BOUNCE: ":resources:sounds/hit1.wav",
    CLIP_EXPLOSION: ":resources:sounds/explosion2.wav",
    CLIP_COLLECT: ":resources:sounds/coin1.wav",
}

# Built-in arcade images, drawn at the entity size; circles stand in if one fails to load
SPRITES = {
    "player": ":resources:images/pinball/pool_cue_ball.png",
    "enemy": ":resources:images/enemies/saw.png",
    "star": ":resources:images/items/star.png",
}

COLORS = {
    "background": (18, 18, 22),
    "player": (80, 140, 230),
    "enemy": (220, 80, 80),
    "star": (240, 210, 80),
    "hud": (220, 220, 220),
}
