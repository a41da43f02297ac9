"""HTTP client for the simulation service."""

from __future__ import annotations

import logging

import requests

from nbody_review.config.types import ClientConfig
from nbody_review.domain.request import SimulationRequest, serialize_request
from nbody_review.domain.trajectory import Trajectory, parse_trajectory
from nbody_review.errors import FetchError

logger = logging.getLogger(__name__)


class SimulationClient:
    """Start simulations and fetch their trajectories over HTTP.

    Any non-2xx status, transport failure, or undecodable body is raised as
    :exc:`FetchError`. A caller-supplied ``requests.Session`` is used as-is and
    never closed by this client.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.config = config or ClientConfig()
        self._owns_session = session is None
        self._session = session if session is not None else requests.Session()

    def close(self) -> None:
        if self._owns_session:
            self._session.close()

    def __enter__(self) -> SimulationClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _checked(self, response: requests.Response, action: str) -> requests.Response:
        if not 200 <= response.status_code < 300:
            logger.warning("%s failed with HTTP %s", action, response.status_code)
            raise FetchError(response.status_code, f"{action} was not successful")
        return response

    def start_simulation(self, request: SimulationRequest) -> None:
        """POST the serialized initial conditions."""
        url = self.config.simulation_url
        logger.debug("POST %s bodies=%s", url, ", ".join(request.body_names))
        try:
            response = self._session.post(
                url, json=serialize_request(request), timeout=self.config.timeout_s
            )
        except requests.RequestException as exc:
            raise FetchError(None, f"POST {url}: {exc}") from exc
        self._checked(response, "start simulation")
        logger.info("Simulation started (HTTP %s)", response.status_code)

    def fetch_trajectory(self) -> Trajectory:
        """GET the trajectory of the most recent simulation and decode it."""
        url = self.config.simulation_url
        logger.debug("GET %s", url)
        try:
            response = self._session.get(url, timeout=self.config.timeout_s)
        except requests.RequestException as exc:
            raise FetchError(None, f"GET {url}: {exc}") from exc
        self._checked(response, "fetch trajectory")
        try:
            payload = response.json()
        except ValueError as exc:
            raise FetchError(response.status_code, "response body is not valid JSON") from exc
        trajectory = parse_trajectory(payload)
        logger.info("Fetched trajectory with %d frames", len(trajectory))
        return trajectory
