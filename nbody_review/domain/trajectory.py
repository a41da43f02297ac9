"""Frame and trajectory types plus decoding of the service's trajectory payload.

Wire format: an ordered array of ``[t0, t1, {agent_id: {channel: number}}]``
entries. Entries are taken in the order received; nothing is re-sorted.
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType
from typing import TypeAlias

from nbody_review.errors import EmptyTrajectoryError, MalformedFrameError

AgentState: TypeAlias = Mapping[str, float]
"""Channel name (``x``, ``vy``, ``mass`` ...) -> value for one body at one instant."""


@dataclass(frozen=True)
class Frame:
    """One time-stamped snapshot of every agent's state.

    ``agents`` is stored as a read-only copy, down to each agent's channels.
    """

    t0: float
    t1: float
    agents: Mapping[str, AgentState]

    def __post_init__(self) -> None:
        if not self.t1 > self.t0:
            raise ValueError(f"t1 must be > t0, got t0={self.t0!r}, t1={self.t1!r}")
        frozen = MappingProxyType(
            {agent_id: MappingProxyType(dict(state)) for agent_id, state in self.agents.items()}
        )
        object.__setattr__(self, "agents", frozen)


Trajectory: TypeAlias = tuple[Frame, ...]
"""Non-empty, ordered by non-decreasing ``t0``; index 0 is the initial condition."""


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _parse_agents(raw: object, frame_index: int) -> dict[str, dict[str, float]]:
    if not isinstance(raw, Mapping):
        raise MalformedFrameError(frame_index, "agents must be a mapping of agent id to state")
    agents: dict[str, dict[str, float]] = {}
    for agent_id, raw_state in raw.items():
        if not isinstance(agent_id, str):
            raise MalformedFrameError(frame_index, f"agent id must be a string, got {agent_id!r}")
        if not isinstance(raw_state, Mapping):
            raise MalformedFrameError(
                frame_index, "agent state must be a mapping of channel to number", agent_id
            )
        state: dict[str, float] = {}
        for channel, value in raw_state.items():
            if not _is_number(value):
                raise MalformedFrameError(
                    frame_index, f"value must be a number, got {value!r}", agent_id, channel
                )
            state[channel] = float(value)
        agents[agent_id] = state
    return agents


def parse_frame(entry: object, frame_index: int) -> Frame:
    """Decode one ``[t0, t1, agents]`` entry."""
    if isinstance(entry, (str, bytes)) or not isinstance(entry, Sequence) or len(entry) != 3:
        raise MalformedFrameError(frame_index, "entry must be a [t0, t1, agents] triple")
    t0, t1, raw_agents = entry
    if not _is_number(t0) or not _is_number(t1):
        raise MalformedFrameError(frame_index, "t0 and t1 must be numbers")
    if not (math.isfinite(t0) and math.isfinite(t1)):
        raise MalformedFrameError(frame_index, "t0 and t1 must be finite")
    if not t1 > t0:
        raise MalformedFrameError(frame_index, f"t1 must be > t0 (t0={t0}, t1={t1})")
    return Frame(t0=float(t0), t1=float(t1), agents=_parse_agents(raw_agents, frame_index))


def parse_trajectory(payload: object) -> Trajectory:
    """Decode a fetched trajectory body into an immutable tuple of frames.

    Raises :exc:`EmptyTrajectoryError` for an empty array and
    :exc:`MalformedFrameError` for any structural violation, including a
    ``t0`` that decreases relative to the previous frame.
    """
    if isinstance(payload, (str, bytes, Mapping)) or not isinstance(payload, Sequence):
        raise MalformedFrameError(0, "trajectory payload must be an array of frames")
    if not payload:
        raise EmptyTrajectoryError()

    frames: list[Frame] = []
    for index, entry in enumerate(payload):
        frame = parse_frame(entry, index)
        if frames and frame.t0 < frames[-1].t0:
            raise MalformedFrameError(
                index, f"t0 decreases from {frames[-1].t0} to {frame.t0}"
            )
        frames.append(frame)
    return tuple(frames)
