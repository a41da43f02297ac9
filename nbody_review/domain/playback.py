"""Cursor state machine for reviewing an already-fetched trajectory.

States: IDLE (cursor 0, stopped), PLAYING, PAUSED. The host drives time by
calling :meth:`PlaybackController.tick`; the controller owns no timer.
Reaching the last frame pauses playback; trajectories do not loop.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from nbody_review.config.constants import DEFAULT_SPEED, FRAME_RATE
from nbody_review.domain.trajectory import Frame
from nbody_review.errors import EmptyTrajectoryError, InvalidSpeedError


class PlaybackStatus(Enum):
    """Derived playback mode."""

    IDLE = "idle"
    PLAYING = "playing"
    PAUSED = "paused"


@dataclass(frozen=True)
class PlaybackState:
    """Snapshot of the controller: cursor in ``[0, length - 1]`` and speed > 0."""

    cursor: int = 0
    playing: bool = False
    speed: float = DEFAULT_SPEED
    started: bool = False

    @property
    def status(self) -> PlaybackStatus:
        if self.playing:
            return PlaybackStatus.PLAYING
        return PlaybackStatus.PAUSED if self.started else PlaybackStatus.IDLE


def _validate_speed(speed: float) -> float:
    if isinstance(speed, bool) or not isinstance(speed, (int, float)):
        raise InvalidSpeedError(speed)
    if not math.isfinite(speed) or speed <= 0:
        raise InvalidSpeedError(speed)
    return float(speed)


class PlaybackController:
    """Advance a cursor through ``trajectory`` at ``speed * frame_rate`` frames per second."""

    def __init__(
        self,
        trajectory: Sequence[Frame],
        frame_rate: float = FRAME_RATE,
        speed: float = DEFAULT_SPEED,
    ) -> None:
        if not trajectory:
            raise EmptyTrajectoryError()
        if not math.isfinite(frame_rate) or frame_rate <= 0:
            raise ValueError("frame_rate must be > 0")
        self._trajectory = trajectory
        self._frame_rate = float(frame_rate)
        self._state = PlaybackState(speed=_validate_speed(speed))

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def length(self) -> int:
        return len(self._trajectory)

    @property
    def frame_rate(self) -> float:
        return self._frame_rate

    @property
    def frame(self) -> Frame:
        """Frame under the cursor."""
        return self._trajectory[self._state.cursor]

    def play(self) -> PlaybackState:
        if not self._state.playing:
            self._state = PlaybackState(
                cursor=self._state.cursor, playing=True, speed=self._state.speed, started=True
            )
        return self._state

    def pause(self) -> PlaybackState:
        if self._state.playing:
            self._state = PlaybackState(
                cursor=self._state.cursor, playing=False, speed=self._state.speed, started=True
            )
        return self._state

    def toggle(self) -> PlaybackState:
        """Single play/pause control."""
        return self.pause() if self._state.playing else self.play()

    def reset(self) -> PlaybackState:
        """Return to IDLE at cursor 0; speed is kept."""
        self._state = PlaybackState(speed=self._state.speed)
        return self._state

    def set_speed(self, speed: float) -> PlaybackState:
        self._state = PlaybackState(
            cursor=self._state.cursor,
            playing=self._state.playing,
            speed=_validate_speed(speed),
            started=self._state.started,
        )
        return self._state

    def tick(self, delta_time: float) -> PlaybackState:
        """Advance by ``floor(delta_time * speed * frame_rate)`` frames while playing.

        No-op unless PLAYING. Each tick depends only on the current state and
        ``delta_time``; fractional frames are dropped. The cursor is clamped to
        the last frame, at which point the controller pauses.
        """
        if not self._state.playing:
            return self._state
        if not math.isfinite(delta_time) or delta_time < 0:
            raise ValueError(f"delta_time must be a finite number >= 0, got {delta_time!r}")

        last = self.length - 1
        remaining = last - self._state.cursor
        # The product can overflow to inf for huge finite deltas.
        frames = delta_time * self._state.speed * self._frame_rate
        if not math.isfinite(frames) or frames >= remaining:
            cursor = last
        else:
            cursor = self._state.cursor + math.floor(frames)
        if cursor >= last:
            self._state = PlaybackState(
                cursor=last, playing=False, speed=self._state.speed, started=True
            )
        else:
            self._state = PlaybackState(
                cursor=cursor, playing=True, speed=self._state.speed, started=True
            )
        return self._state
