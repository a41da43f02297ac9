"""Centralized defaults for the simulation client, playback, and input form.

Consuming modules should import from this module rather than defining
their own inline literals.
"""

from __future__ import annotations

DEFAULT_BASE_URL = "http://localhost:8000"
"""Base URL of the simulation service."""

SIMULATION_PATH = "/simulation"
"""Endpoint used both to start a simulation (POST) and to fetch its trajectory (GET)."""

REQUEST_TIMEOUT_S = 30.0
"""Per-request timeout handed to ``requests``."""

FRAME_RATE = 60.0
"""Nominal trajectory frames advanced per second of wall clock at speed 1."""

DEFAULT_SPEED = 1.0
"""Playback speed multiplier at session start and after reset."""

SPEED_SLIDER_MIN = 0.1
"""Lower bound of the speed control offered to users (advisory)."""

SPEED_SLIDER_MAX = 5.0
"""Upper bound of the speed control offered to users (advisory)."""

DEBOUNCE_WINDOW_S = 0.3
"""Trailing-debounce window for coalescing rapid form edits."""

FORM_SLIDER_MIN = -5.0
FORM_SLIDER_MAX = 5.0
FORM_SLIDER_STEP = 0.1

ANIMATION_FPS = 30
"""Default frames per second for rendered playback animations."""

POSITION_CHANNELS: tuple[str, str] = ("x", "y")
VELOCITY_CHANNELS: tuple[str, str] = ("vx", "vy")

DEFAULT_BODIES: dict[str, dict[str, float]] = {
    "Planet": {"x": 0.0, "y": 0.1, "vx": 0.1, "vy": 0.0},
    "Satellite": {"x": 0.0, "y": 1.0, "vx": 1.0, "vy": 0.0},
}
"""Initial conditions pre-filled in a fresh input form."""
