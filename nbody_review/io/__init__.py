"""I/O layer: simulation service client and Arrow schemas."""

from nbody_review.io.client import SimulationClient
from nbody_review.io.schemas import TRAJECTORY_SCHEMA, trajectory_table

__all__ = ["SimulationClient", "TRAJECTORY_SCHEMA", "trajectory_table"]
