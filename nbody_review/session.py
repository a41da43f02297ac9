"""Owned review-session state: the current trajectory, its series, and playback.

Lifecycle: :meth:`ReviewSession.init` at session start, :meth:`replace` on each
successful fetch, :meth:`reset` when the viewer is torn down. A fetch that
resumes after :meth:`reset` is discarded without touching any state.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from typing import Protocol

from nbody_review.config.types import PlaybackConfig
from nbody_review.domain.playback import PlaybackController
from nbody_review.domain.request import SimulationRequest
from nbody_review.domain.reshape import ReshapedTrajectory, extract_initial, reshape
from nbody_review.domain.trajectory import AgentState, Trajectory
from nbody_review.errors import NBodyReviewError

logger = logging.getLogger(__name__)


class TrajectorySource(Protocol):
    def fetch_trajectory(self) -> Trajectory: ...

    def start_simulation(self, request: SimulationRequest) -> None: ...


class ReviewSession:
    """Holds everything the viewer shows for one loaded trajectory."""

    def __init__(self, playback_config: PlaybackConfig | None = None) -> None:
        self._playback_config = playback_config or PlaybackConfig()
        self._cancelled = threading.Event()
        self._trajectory: Trajectory | None = None
        self._series: ReshapedTrajectory | None = None
        self._initial: Mapping[str, AgentState] | None = None
        self._playback: PlaybackController | None = None
        self.init()

    # -- lifecycle ---------------------------------------------------------

    def init(self) -> None:
        """Start a fresh session with nothing loaded; earlier loads become stale."""
        self._cancelled.set()
        self._cancelled = threading.Event()
        self._clear()

    def replace(self, trajectory: Trajectory) -> None:
        """Swap in a new trajectory wholesale.

        Derived data is computed before anything is assigned, so a shape error
        leaves the previous trajectory in place.
        """
        series = reshape(trajectory)
        initial = extract_initial(trajectory)
        playback = PlaybackController(
            trajectory,
            frame_rate=self._playback_config.frame_rate,
            speed=self._playback_config.initial_speed,
        )
        self._trajectory = trajectory
        self._series = series
        self._initial = initial
        self._playback = playback
        logger.info(
            "Loaded trajectory: %d frames, agents=%s", len(trajectory), ", ".join(series.agent_ids)
        )

    def reset(self) -> None:
        """Tear down: cancel outstanding loads and drop all state."""
        self._cancelled.set()
        self._clear()
        logger.debug("Session reset")

    def _clear(self) -> None:
        self._trajectory = None
        self._series = None
        self._initial = None
        self._playback = None

    # -- service exchange --------------------------------------------------

    def submit(self, source: TrajectorySource, request: SimulationRequest) -> None:
        source.start_simulation(request)

    def load(self, source: TrajectorySource) -> bool:
        """Fetch and apply a trajectory; returns ``False`` if cancelled meanwhile.

        A fetch that finishes after :meth:`reset` is discarded, whether it
        returned a trajectory or raised. Otherwise
        :exc:`~nbody_review.errors.FetchError` propagates and leaves the
        current trajectory untouched. After :meth:`reset`, loads stay
        cancelled until :meth:`init` starts a new session.
        """
        token = self._cancelled
        try:
            trajectory = source.fetch_trajectory()
        except NBodyReviewError as exc:
            if token.is_set():
                self._log_discard(token, f"failed fetch ({exc})")
                return False
            raise
        if token.is_set():
            self._log_discard(token, "trajectory")
            return False
        self.replace(trajectory)
        return True

    def _log_discard(self, token: threading.Event, what: str) -> None:
        if token is self._cancelled:
            logger.info("Discarding %s: session was reset and init() has not been called", what)
        else:
            logger.debug("Discarding %s fetched before the session was re-initialised", what)

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    # -- read access -------------------------------------------------------

    @property
    def loaded(self) -> bool:
        return self._trajectory is not None

    @property
    def trajectory(self) -> Trajectory | None:
        return self._trajectory

    @property
    def series(self) -> ReshapedTrajectory | None:
        return self._series

    @property
    def initial(self) -> Mapping[str, AgentState] | None:
        return self._initial

    @property
    def playback(self) -> PlaybackController | None:
        return self._playback
