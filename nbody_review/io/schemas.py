"""Arrow schema and long-format table for trajectories.

One row per (frame, agent); agent order within a frame follows frame 0.
"""

from __future__ import annotations

from collections.abc import Sequence

import pyarrow as pa

from nbody_review.domain.reshape import reshape
from nbody_review.domain.trajectory import Frame

TRAJECTORY_SCHEMA_VERSION = 1

TRAJECTORY_SCHEMA = pa.schema(
    [
        ("frame_index", pa.int64()),
        ("t0", pa.float64()),
        ("t1", pa.float64()),
        ("agent_id", pa.string()),
        ("x", pa.float64()),
        ("y", pa.float64()),
        ("vx", pa.float64()),
        ("vy", pa.float64()),
    ]
)


def trajectory_table(trajectory: Sequence[Frame]) -> pa.Table:
    """Flatten ``trajectory`` into a :data:`TRAJECTORY_SCHEMA` table.

    Goes through :func:`reshape`, so the same shape errors apply.
    """
    series = reshape(trajectory)
    columns: dict[str, list[object]] = {name: [] for name in TRAJECTORY_SCHEMA.names}
    for frame_index, frame in enumerate(trajectory):
        for agent_id in series.agent_ids:
            position = series.position_series[agent_id]
            velocity = series.velocity_series[agent_id]
            columns["frame_index"].append(frame_index)
            columns["t0"].append(frame.t0)
            columns["t1"].append(frame.t1)
            columns["agent_id"].append(agent_id)
            columns["x"].append(position.xs[frame_index])
            columns["y"].append(position.ys[frame_index])
            columns["vx"].append(velocity.xs[frame_index])
            columns["vy"].append(velocity.ys[frame_index])
    return pa.Table.from_pydict(
        columns,
        schema=TRAJECTORY_SCHEMA.with_metadata(
            {"schema_version": str(TRAJECTORY_SCHEMA_VERSION)}
        ),
    )
