"""Tests for matplotlib renderers."""

from __future__ import annotations

from pathlib import Path

import pytest

from nbody_review.domain.reshape import reshape
from nbody_review.domain.trajectory import Trajectory, parse_trajectory
from nbody_review.viz.render import (
    initial_conditions_rows,
    playback_cursors,
    render_initial_conditions_table,
    render_playback_animation,
    render_series_charts,
)
from nbody_review.viz.theme import PAPER_THEME


def _orbit(n: int) -> Trajectory:
    return parse_trajectory(
        [
            [
                i * 0.1,
                (i + 1) * 0.1,
                {
                    "Planet": {"x": 0.0, "y": 0.1, "vx": 0.1, "vy": 0.0},
                    "Satellite": {"x": float(i), "y": 1.0 - i, "vx": 1.0, "vy": -1.0},
                },
            ]
            for i in range(n)
        ]
    )


def test_initial_conditions_rows_three_decimals() -> None:
    rows = initial_conditions_rows(
        {"Planet": {"x": 0.0, "y": 0.1, "vx": 0.12345, "vy": -2.0}}
    )
    assert rows == [("Planet", "(0.000, 0.100)", "(0.123, -2.000)")]


def test_render_series_charts_writes_png(tmp_path: Path) -> None:
    output = render_series_charts(reshape(_orbit(6)), tmp_path / "out" / "series.png", cursor=3)
    assert output.exists()
    assert output.stat().st_size > 0


def test_render_series_charts_rejects_bad_cursor(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="cursor"):
        render_series_charts(reshape(_orbit(3)), tmp_path / "series.png", cursor=3)


def test_render_initial_conditions_table(tmp_path: Path) -> None:
    output = render_initial_conditions_table(
        _orbit(2)[0].agents, tmp_path / "table.png", theme=PAPER_THEME
    )
    assert output.exists()


def test_playback_cursors_end_at_last_frame() -> None:
    cursors = playback_cursors(_orbit(10), fps=10, speed=1.0, frame_rate=20.0)
    assert cursors == [0, 2, 4, 6, 8, 9]


def test_playback_cursors_single_frame() -> None:
    assert playback_cursors(_orbit(1)) == [0]


def test_playback_cursors_rejects_zero_fps() -> None:
    with pytest.raises(ValueError):
        playback_cursors(_orbit(3), fps=0)


def test_playback_cursors_rejects_speed_below_one_frame_per_tick() -> None:
    with pytest.raises(ValueError, match="advances no frames"):
        playback_cursors(_orbit(3), fps=30, speed=0.1, frame_rate=60.0)


def test_render_playback_animation_gif(tmp_path: Path) -> None:
    output = tmp_path / "playback.gif"
    frames = render_playback_animation(_orbit(8), output, fps=4, frame_rate=8.0)
    assert output.exists()
    assert frames == 5
