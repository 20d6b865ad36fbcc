"""Arena dimensions, physics tuning and difficulty presets.

All distances are in arena units (1 unit = 1 pixel of the reference 800x500 canvas).
Velocities are in units per tick and the constants are tuned for a 60 Hz logical tick;
the frame driver runs a fixed-step accumulator so the tuning holds on any display.
"""

# Arena
ARENA_WIDTH = 800
ARENA_HEIGHT = 500

# Paddles
PADDLE_WIDTH = 12
PADDLE_HEIGHT = 80
PADDLE_MARGIN = 10  # gap between the arena edge and the back of each paddle
LEFT_PADDLE_X = PADDLE_MARGIN
RIGHT_PADDLE_X = ARENA_WIDTH - PADDLE_MARGIN - PADDLE_WIDTH

# Ball
BALL_RADIUS = 8
INITIAL_BALL_SPEED = 6
SERVE_JITTER = 4  # serve vy is uniform in [-SERVE_JITTER/2, SERVE_JITTER/2)
SPEED_INCREMENT = 1.03  # applied on every paddle hit while below the cap
MAX_BALL_SPEED = 22

# Aerodynamics: multiplicative per-tick retention, i.e. exponential decay
AIR_DRAG = 0.9995
SPIN_INFLUENCE = 0.08  # spin -> vy coupling (Magnus-like curve)
SPIN_DECAY = 0.98

# Walls
WALL_RESTITUTION = 0.9
WALL_SPIN_FRICTION = 0.8

# Paddle contact
PADDLE_FRICTION = 0.35  # paddle velocity -> spin
VERTICAL_KICK = 4  # relative hit offset -> vy
PADDLE_VERTICAL_DRAG = 0.2  # paddle velocity -> vy

# Paddle control
PADDLE_SMOOTHING = 0.25
AI_TRACKING_GAIN = 0.12
AI_REFERENCE_SPEED = 6.0
KEY_NUDGE = 12

# Timing
TICK_RATE = 60
TICK_SECONDS = 1.0 / TICK_RATE
MAX_TICKS_PER_ADVANCE = 5
MATCH_DURATION = 90  # seconds

# Commentary triggers
RALLY_MILESTONE = 5
COMMENTARY_HISTORY = 5

DIFFICULTIES = {
    "easy": {
        "label": "Beginner",
        "speed": 3.5,
        "error_margin": 45,
    },
    "medium": {
        "label": "Pro",
        "speed": 6.0,
        "error_margin": 20,
    },
    "hard": {
        "label": "Insane",
        "speed": 10.5,
        "error_margin": 2,
    },
}

THEME_COLORS = {
    "cyan": "#22d3ee",
    "pink": "#f472b6",
    "yellow": "#fbbf24",
    "green": "#4ade80",
}

PERSONALITIES = ("enthusiastic", "sarcastic", "neutral")

MODES = ("1P", "2P")
