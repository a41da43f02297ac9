"""Trajectory ingestion, reshaping, and playback for N-body simulation review."""

from nbody_review.errors import (
    EmptyTrajectoryError,
    FetchError,
    InvalidSpeedError,
    MalformedFrameError,
    NBodyReviewError,
    ValidationError,
)

__all__ = [
    "EmptyTrajectoryError",
    "FetchError",
    "InvalidSpeedError",
    "MalformedFrameError",
    "NBodyReviewError",
    "ValidationError",
]
