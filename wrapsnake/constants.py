"""Game constants."""

GRID_SIZE = 20
BASE_TICK_INTERVAL_MS = 100
MIN_SPEED_MULTIPLIER, MAX_SPEED_MULTIPLIER = 1, 3
SPEED_MULTIPLIERS = (1, 2, 3)

DIRECTIONS = {
    "up": (0, -1),
    "down": (0, 1),
    "left": (-1, 0),
    "right": (1, 0),
}
OPPOSITES = {"up": "down", "down": "up", "left": "right", "right": "left"}

# event name -> (frequency Hz, duration seconds) for the audio client
TONES = {
    "turned": (220, 0.1),
    "consumed": (440, 0.1),
    "collided": (110, 0.5),
}
