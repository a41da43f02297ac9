"""Domain layer: trajectory types, reshaping, request building, playback, and form input."""

from nbody_review.domain.debounce import TrailingDebouncer
from nbody_review.domain.form import FormState
from nbody_review.domain.playback import PlaybackController, PlaybackState, PlaybackStatus
from nbody_review.domain.request import (
    SimulationRequest,
    build_request,
    deserialize_request,
    serialize_request,
)
from nbody_review.domain.reshape import (
    AxisSeries,
    ReshapedTrajectory,
    extract_initial,
    reshape,
)
from nbody_review.domain.trajectory import (
    AgentState,
    Frame,
    Trajectory,
    parse_frame,
    parse_trajectory,
)

__all__ = [
    "AgentState",
    "AxisSeries",
    "Frame",
    "FormState",
    "PlaybackController",
    "PlaybackState",
    "PlaybackStatus",
    "ReshapedTrajectory",
    "SimulationRequest",
    "TrailingDebouncer",
    "Trajectory",
    "build_request",
    "deserialize_request",
    "extract_initial",
    "parse_frame",
    "parse_trajectory",
    "reshape",
    "serialize_request",
]
