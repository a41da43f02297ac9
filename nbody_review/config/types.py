"""Configuration dataclasses for the simulation client, playback, and input schemas.

All frozen dataclasses validate themselves in ``__post_init__`` and raise
:exc:`ValueError` on bad values.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from nbody_review.config.constants import (
    DEFAULT_BASE_URL,
    DEFAULT_SPEED,
    FRAME_RATE,
    REQUEST_TIMEOUT_S,
    SIMULATION_PATH,
)

__all__ = [
    "ChannelSchema",
    "ClientConfig",
    "PLANAR_SCHEMA",
    "PlaybackConfig",
    "REGISTERED_SCHEMAS",
    "SPATIAL_SCHEMA",
    "get_schema",
]

# ---------------------------------------------------------------------------
# Client / playback config
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ClientConfig:
    """Connection settings for the simulation service."""

    base_url: str = DEFAULT_BASE_URL
    simulation_path: str = SIMULATION_PATH
    timeout_s: float = REQUEST_TIMEOUT_S

    def __post_init__(self) -> None:
        if not self.base_url.startswith(("http://", "https://")):
            raise ValueError("base_url must start with http:// or https://")
        if not self.simulation_path.startswith("/"):
            raise ValueError("simulation_path must start with '/'")
        if not math.isfinite(self.timeout_s) or self.timeout_s <= 0:
            raise ValueError("timeout_s must be > 0")

    @property
    def simulation_url(self) -> str:
        return self.base_url.rstrip("/") + self.simulation_path


@dataclass(frozen=True)
class PlaybackConfig:
    """Playback clock settings."""

    frame_rate: float = FRAME_RATE
    initial_speed: float = DEFAULT_SPEED

    def __post_init__(self) -> None:
        if not math.isfinite(self.frame_rate) or self.frame_rate <= 0:
            raise ValueError("frame_rate must be > 0")
        if not math.isfinite(self.initial_speed) or self.initial_speed <= 0:
            raise ValueError("initial_speed must be > 0")


# ---------------------------------------------------------------------------
# Input channel schemas
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ChannelSchema:
    """Named set of initial-condition channels every body must supply."""

    name: str
    channels: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.channels:
            raise ValueError("channels must not be empty")
        if len(set(self.channels)) != len(self.channels):
            raise ValueError("channels must be distinct")


PLANAR_SCHEMA = ChannelSchema(name="planar", channels=("x", "y", "vx", "vy"))
SPATIAL_SCHEMA = ChannelSchema(
    name="spatial", channels=("x", "y", "z", "vx", "vy", "vz", "mass")
)

REGISTERED_SCHEMAS: dict[str, ChannelSchema] = {
    "planar": PLANAR_SCHEMA,
    "spatial": SPATIAL_SCHEMA,
}


def get_schema(name: str) -> ChannelSchema:
    """Look up a channel schema by name (case-insensitive)."""
    key = name.lower()
    if key not in REGISTERED_SCHEMAS:
        valid = ", ".join(sorted(REGISTERED_SCHEMAS))
        raise ValueError(f"Unknown schema {name!r}; available: {valid}")
    return REGISTERED_SCHEMAS[key]
