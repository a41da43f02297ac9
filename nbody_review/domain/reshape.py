"""Reshape frame-indexed trajectories into per-agent chart series.

Every series is index-aligned with the trajectory: ``series.xs[i]`` belongs to
``trajectory[i]``. Agent order in the output follows first appearance in
frame 0 so that consumers can color and label by position.
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from nbody_review.config.constants import POSITION_CHANNELS, VELOCITY_CHANNELS
from nbody_review.domain.trajectory import AgentState, Frame
from nbody_review.errors import EmptyTrajectoryError, MalformedFrameError


@dataclass
class AxisSeries:
    """Paired x/y samples for one agent and one channel pair."""

    xs: list[float] = field(default_factory=list)
    ys: list[float] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.xs)


@dataclass
class ReshapedTrajectory:
    """Position and velocity series keyed by agent id."""

    position_series: dict[str, AxisSeries]
    velocity_series: dict[str, AxisSeries]

    @property
    def agent_ids(self) -> tuple[str, ...]:
        return tuple(self.position_series)

    @property
    def length(self) -> int:
        first = next(iter(self.position_series.values()), None)
        return 0 if first is None else len(first)


def _channel_value(state: AgentState, channel: str, frame_index: int, agent_id: str) -> float:
    if channel not in state:
        raise MalformedFrameError(frame_index, "missing channel", agent_id, channel)
    value = state[channel]
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise MalformedFrameError(
            frame_index, f"value must be a finite number, got {value!r}", agent_id, channel
        )
    return float(value)


def reshape(trajectory: Sequence[Frame]) -> ReshapedTrajectory:
    """Split a trajectory into per-agent position (x, y) and velocity (vx, vy) series.

    Raises :exc:`EmptyTrajectoryError` for zero frames. Raises
    :exc:`MalformedFrameError` when a later frame drops an agent from frame
    0, introduces an agent frame 0 did not have, or carries a missing or
    non-finite channel value. Partial frames are never skipped.
    """
    if not trajectory:
        raise EmptyTrajectoryError()

    agent_ids = tuple(trajectory[0].agents)
    known = set(agent_ids)
    positions = {agent_id: AxisSeries() for agent_id in agent_ids}
    velocities = {agent_id: AxisSeries() for agent_id in agent_ids}

    for frame_index, frame in enumerate(trajectory):
        agents = frame.agents
        for agent_id in agents:
            if agent_id not in known:
                raise MalformedFrameError(frame_index, "agent not present in frame 0", agent_id)
        for agent_id in agent_ids:
            state = agents.get(agent_id)
            if state is None:
                raise MalformedFrameError(frame_index, "agent missing from frame", agent_id)
            for pair, target in ((POSITION_CHANNELS, positions), (VELOCITY_CHANNELS, velocities)):
                series = target[agent_id]
                series.xs.append(_channel_value(state, pair[0], frame_index, agent_id))
                series.ys.append(_channel_value(state, pair[1], frame_index, agent_id))

    return ReshapedTrajectory(position_series=positions, velocity_series=velocities)


def extract_initial(trajectory: Sequence[Frame]) -> Mapping[str, AgentState]:
    """Return the read-only agent states of frame 0, the canonical initial conditions."""
    if not trajectory:
        raise EmptyTrajectoryError()
    return trajectory[0].agents
