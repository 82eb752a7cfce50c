"""Central place for ripplesurf default settings."""

# Wave integrator
DEFAULT_DAMPING: float = 0.98
DEFAULT_SPREAD: float = 0.5
DEFAULT_WAVE_HEIGHT_SCALE: float = 1.0
DEFAULT_BACKEND: str = "numba"
BACKEND_CHOICES: tuple[str, ...] = ("numba", "scipy")

# Continuous injection (every pointer move: small, frequent)
DEFAULT_CONTINUOUS_INTENSITY: float = 0.05
DEFAULT_CONTINUOUS_RADIUS: float = 0.5
DEFAULT_CONTINUOUS_SPEED_GAIN: float = 0.0

# Trigger injection (explicit events: large, rare)
DEFAULT_TRIGGER_INTENSITY: float = 1.0
DEFAULT_TRIGGER_RADIUS: float = 1.0
DEFAULT_TRIGGER_SPEED_GAIN: float = 0.0

# Surface plane (world units / segment counts)
DEFAULT_PLANE_SIZE: tuple[float, float] = (10.0, 14.0)
DEFAULT_PLANE_SEGMENTS: tuple[int, int] = (180, 252)

# Cursor bump follower
DEFAULT_BUMP_AMPLITUDE: float = 2.0
DEFAULT_BUMP_DIST_MULT: float = 1.5  # bump reaches out to pi * dist_mult
DEFAULT_BUMP_EASING: float = 0.1
DEFAULT_BUMP_REST_HEIGHT: float = 0.0
