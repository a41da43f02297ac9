"""Error taxonomy for request building, trajectory ingestion, and playback."""

from __future__ import annotations


class NBodyReviewError(Exception):
    """Base class for all package errors."""


class ValidationError(NBodyReviewError, ValueError):
    """A user-entered initial condition is missing or not a finite number."""

    def __init__(self, body: str, channel: str | None, reason: str) -> None:
        self.body = body
        self.channel = channel
        self.reason = reason
        field_name = body if channel is None else f"{body}.{channel}"
        super().__init__(f"{field_name}: {reason}")


class InvalidSpeedError(NBodyReviewError, ValueError):
    """Playback speed must be a finite number > 0."""

    def __init__(self, speed: object) -> None:
        self.speed = speed
        super().__init__(f"speed must be a finite number > 0, got {speed!r}")


class EmptyTrajectoryError(NBodyReviewError, ValueError):
    """A trajectory with zero frames was supplied."""

    def __init__(self, message: str = "trajectory has no frames") -> None:
        super().__init__(message)


class MalformedFrameError(NBodyReviewError, ValueError):
    """A frame violates the frame/agent/channel shape contract."""

    def __init__(
        self,
        frame_index: int,
        reason: str,
        agent_id: str | None = None,
        channel: str | None = None,
    ) -> None:
        self.frame_index = frame_index
        self.agent_id = agent_id
        self.channel = channel
        self.reason = reason
        where = f"frame {frame_index}"
        if agent_id is not None:
            where += f", agent {agent_id!r}"
        if channel is not None:
            where += f", channel {channel!r}"
        super().__init__(f"{where}: {reason}")


class FetchError(NBodyReviewError, RuntimeError):
    """The simulation service answered with a non-success status or was unreachable.

    ``status`` is ``None`` when no HTTP status is available (connection
    failure, timeout, or an unreadable response body).
    """

    def __init__(self, status: int | None, message: str) -> None:
        self.status = status
        prefix = "transport failure" if status is None else f"HTTP {status}"
        super().__init__(f"{prefix}: {message}")
