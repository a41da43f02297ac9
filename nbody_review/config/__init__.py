"""Configuration layer: constants and typed config dataclasses."""

from nbody_review.config.constants import (
    ANIMATION_FPS,
    DEBOUNCE_WINDOW_S,
    DEFAULT_BASE_URL,
    DEFAULT_BODIES,
    DEFAULT_SPEED,
    FRAME_RATE,
    POSITION_CHANNELS,
    REQUEST_TIMEOUT_S,
    SIMULATION_PATH,
    VELOCITY_CHANNELS,
)
from nbody_review.config.types import (
    PLANAR_SCHEMA,
    REGISTERED_SCHEMAS,
    SPATIAL_SCHEMA,
    ChannelSchema,
    ClientConfig,
    PlaybackConfig,
    get_schema,
)

__all__ = [
    "ANIMATION_FPS",
    "ChannelSchema",
    "ClientConfig",
    "DEBOUNCE_WINDOW_S",
    "DEFAULT_BASE_URL",
    "DEFAULT_BODIES",
    "DEFAULT_SPEED",
    "FRAME_RATE",
    "PLANAR_SCHEMA",
    "POSITION_CHANNELS",
    "PlaybackConfig",
    "REGISTERED_SCHEMAS",
    "REQUEST_TIMEOUT_S",
    "SIMULATION_PATH",
    "SPATIAL_SCHEMA",
    "VELOCITY_CHANNELS",
    "get_schema",
]
