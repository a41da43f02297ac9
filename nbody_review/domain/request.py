"""Validate raw form values into a simulation request and map it to/from the wire.

A request maps body name -> {channel: value} for exactly the channels of the
selected :class:`~nbody_review.config.types.ChannelSchema`. Validation stops at
the first bad field and never fills in defaults.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import dataclass

from nbody_review.config.types import ChannelSchema
from nbody_review.errors import ValidationError


@dataclass(frozen=True)
class SimulationRequest:
    """Initial conditions for one simulation run, in body then schema-channel order."""

    bodies: dict[str, dict[str, float]]

    @property
    def body_names(self) -> tuple[str, ...]:
        return tuple(self.bodies)


def _parse_channel(raw: object, body: str, channel: str) -> float:
    """Parse one raw form value; strings are parsed, booleans are rejected."""
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        raise ValidationError(body, channel, "value is missing")
    if isinstance(raw, bool):
        raise ValidationError(body, channel, f"expected a number, got {raw!r}")
    if isinstance(raw, (int, float)):
        value = float(raw)
    elif isinstance(raw, str):
        try:
            value = float(raw.strip())
        except ValueError as exc:
            raise ValidationError(body, channel, f"not a number: {raw!r}") from exc
    else:
        raise ValidationError(body, channel, f"expected a number, got {type(raw).__name__}")
    if not math.isfinite(value):
        raise ValidationError(body, channel, f"value must be finite, got {raw!r}")
    return value


def build_request(
    raw_form_values: Mapping[str, Mapping[str, object]], schema: ChannelSchema
) -> SimulationRequest:
    """Build a :class:`SimulationRequest` from per-body raw values.

    Every channel in ``schema`` must be present and parse to a finite number
    for every body; the first failure raises :exc:`ValidationError` naming
    ``body.channel``. Channels outside the schema are ignored.
    """
    if not raw_form_values:
        raise ValidationError("<request>", None, "at least one body is required")

    bodies: dict[str, dict[str, float]] = {}
    for body, raw_channels in raw_form_values.items():
        if not isinstance(body, str) or not body:
            raise ValidationError(str(body), None, "body name must be a non-empty string")
        if not isinstance(raw_channels, Mapping):
            raise ValidationError(body, None, "expected a mapping of channel to value")
        state: dict[str, float] = {}
        for channel in schema.channels:
            if channel not in raw_channels:
                raise ValidationError(body, channel, "value is missing")
            state[channel] = _parse_channel(raw_channels[channel], body, channel)
        bodies[body] = state
    return SimulationRequest(bodies=bodies)


def serialize_request(request: SimulationRequest) -> dict[str, dict[str, float]]:
    """Map a request onto the JSON object body sent to the service."""
    return {body: dict(channels) for body, channels in request.bodies.items()}


def deserialize_request(payload: Mapping[str, Mapping[str, object]]) -> SimulationRequest:
    """Rebuild a request from a decoded payload, as the receiving side would."""
    bodies: dict[str, dict[str, float]] = {}
    for body, channels in payload.items():
        if not isinstance(channels, Mapping):
            raise ValidationError(body, None, "expected a mapping of channel to value")
        state: dict[str, float] = {}
        for channel, raw in channels.items():
            if isinstance(raw, bool) or not isinstance(raw, (int, float)):
                raise ValidationError(body, channel, f"expected a number, got {raw!r}")
            state[channel] = float(raw)
        bodies[body] = state
    return SimulationRequest(bodies=bodies)
