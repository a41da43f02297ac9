"""Matplotlib-based rendering of trajectory series, initial conditions, and playback."""

from __future__ import annotations

import math
from collections.abc import Callable, Mapping, Sequence
from pathlib import Path
from typing import Any

import matplotlib.pyplot as plt
import numpy as np
from matplotlib import animation

from nbody_review.config.constants import ANIMATION_FPS, DEFAULT_SPEED, FRAME_RATE
from nbody_review.domain.playback import PlaybackController
from nbody_review.domain.reshape import AxisSeries, ReshapedTrajectory, reshape
from nbody_review.domain.trajectory import AgentState, Frame
from nbody_review.viz.theme import DEFAULT_THEME, Theme

INITIAL_CONDITIONS_HEADER = ("Agent", "Initial Position (x,y)", "Initial Velocity (x,y)")

# ---------------------------------------------------------------------------
# Axes helpers
# ---------------------------------------------------------------------------


def _style_axes(ax: plt.Axes, title: str, theme: Theme) -> None:
    ax.set_facecolor(theme.panel_color)
    ax.set_title(title, color=theme.text_color)
    ax.tick_params(colors=theme.text_color)
    for spine in ax.spines.values():
        spine.set_color(theme.grid_color)
    ax.grid(True, color=theme.grid_color, linewidth=0.5)
    ax.set_aspect("equal", adjustable="datalim")


def _padded_limits(
    series: Mapping[str, AxisSeries],
) -> tuple[tuple[float, float], tuple[float, float]]:
    """Shared x/y limits covering every series with a 5% margin."""
    xs = np.concatenate([np.asarray(s.xs, dtype=float) for s in series.values()])
    ys = np.concatenate([np.asarray(s.ys, dtype=float) for s in series.values()])

    def pad(values: np.ndarray) -> tuple[float, float]:
        lo, hi = float(values.min()), float(values.max())
        margin = max(0.05 * (hi - lo), 1e-6)
        return lo - margin, hi + margin

    return pad(xs), pad(ys)


def _plot_panel(
    ax: plt.Axes,
    series: Mapping[str, AxisSeries],
    color_for: Callable[[int], str],
    title: str,
    theme: Theme,
    cursor: int | None,
) -> None:
    _style_axes(ax, title, theme)
    for index, agent_series in enumerate(series.values()):
        color = color_for(index)
        ax.plot(
            agent_series.xs,
            agent_series.ys,
            color=color,
            linewidth=theme.line_width,
            label=theme.agent_label(index),
        )
        if cursor is not None:
            ax.plot(
                [agent_series.xs[cursor]],
                [agent_series.ys[cursor]],
                marker="o",
                color=color,
                markersize=6,
            )
    legend = ax.legend(loc="upper center", ncol=max(1, len(series)), frameon=False)
    for text in legend.get_texts():
        text.set_color(theme.text_color)


# ---------------------------------------------------------------------------
# Static charts
# ---------------------------------------------------------------------------


def render_series_charts(
    series: ReshapedTrajectory,
    output_path: Path,
    theme: Theme = DEFAULT_THEME,
    cursor: int | None = None,
) -> Path:
    """Draw side-by-side position and velocity plots, one line per agent.

    When ``cursor`` is given, each agent's sample at that frame index is marked.
    """
    if not series.agent_ids:
        raise ValueError("series contains no agents")
    if cursor is not None and not 0 <= cursor < series.length:
        raise ValueError(f"cursor must be in [0, {series.length - 1}], got {cursor}")

    fig, (ax_pos, ax_vel) = plt.subplots(1, 2, figsize=(12, 5))
    fig.patch.set_facecolor(theme.background_color)
    _plot_panel(
        ax_pos, series.position_series, theme.position_color, "Position Plot", theme, cursor
    )
    _plot_panel(
        ax_vel, series.velocity_series, theme.velocity_color, "Velocity Plot", theme, cursor
    )
    fig.tight_layout()

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=150, facecolor=fig.get_facecolor())
    plt.close(fig)
    return output_path


def initial_conditions_rows(initial: Mapping[str, AgentState]) -> list[tuple[str, str, str]]:
    """Format frame-0 states as ``(agent, "(x, y)", "(vx, vy)")`` rows with 3 decimals."""
    rows: list[tuple[str, str, str]] = []
    for agent_id, state in initial.items():
        rows.append(
            (
                agent_id,
                f"({state['x']:.3f}, {state['y']:.3f})",
                f"({state['vx']:.3f}, {state['vy']:.3f})",
            )
        )
    return rows


def render_initial_conditions_table(
    initial: Mapping[str, AgentState],
    output_path: Path,
    theme: Theme = DEFAULT_THEME,
) -> Path:
    """Render the initial-conditions table as an image."""
    rows = initial_conditions_rows(initial)
    if not rows:
        raise ValueError("initial conditions contain no agents")

    fig, ax = plt.subplots(figsize=(8, 0.6 + 0.4 * (len(rows) + 1)))
    fig.patch.set_facecolor(theme.background_color)
    ax.axis("off")
    table = ax.table(
        cellText=[list(row) for row in rows],
        colLabels=list(INITIAL_CONDITIONS_HEADER),
        loc="center",
        cellLoc="left",
    )
    for cell in table.get_celld().values():
        cell.set_facecolor(theme.panel_color)
        cell.set_edgecolor(theme.grid_color)
        cell.get_text().set_color(theme.text_color)
    ax.set_title("Initial Conditions", color=theme.text_color)

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(output_path, dpi=150, facecolor=fig.get_facecolor())
    plt.close(fig)
    return output_path


# ---------------------------------------------------------------------------
# Playback animation
# ---------------------------------------------------------------------------


def playback_cursors(
    trajectory: Sequence[Frame],
    fps: int = ANIMATION_FPS,
    speed: float = DEFAULT_SPEED,
    frame_rate: float = FRAME_RATE,
) -> list[int]:
    """Cursor positions seen when playing from the start at ``fps`` ticks per second.

    The list starts at 0 and ends at the last frame, where playback pauses.
    Raises :exc:`ValueError` when a single tick would advance less than one
    frame, since playback would then never reach the end.
    """
    if fps < 1:
        raise ValueError("fps must be >= 1")
    if math.floor((1.0 / fps) * speed * frame_rate) < 1:
        raise ValueError(
            f"speed {speed} at frame_rate {frame_rate} advances no frames per tick at {fps} fps"
        )
    controller = PlaybackController(trajectory, frame_rate=frame_rate, speed=speed)
    cursors = [controller.state.cursor]
    state = controller.play()
    while state.playing:
        state = controller.tick(1.0 / fps)
        if state.cursor != cursors[-1]:
            cursors.append(state.cursor)
    return cursors


def render_playback_animation(
    trajectory: Sequence[Frame],
    output_path: Path,
    fps: int = ANIMATION_FPS,
    speed: float = DEFAULT_SPEED,
    frame_rate: float = FRAME_RATE,
    theme: Theme = DEFAULT_THEME,
) -> int:
    """Animate agent positions as playback advances; returns the number of frames written."""
    series = reshape(trajectory)
    cursors = playback_cursors(trajectory, fps=fps, speed=speed, frame_rate=frame_rate)
    positions = {
        agent_id: (np.asarray(s.xs, dtype=float), np.asarray(s.ys, dtype=float))
        for agent_id, s in series.position_series.items()
    }

    fig, ax = plt.subplots(figsize=(6, 6))
    fig.patch.set_facecolor(theme.background_color)
    _style_axes(ax, "Position Plot", theme)
    xlim, ylim = _padded_limits(series.position_series)
    ax.set_xlim(*xlim)
    ax.set_ylim(*ylim)

    trails: list[Any] = []
    heads: list[Any] = []
    for index in range(len(positions)):
        color = theme.position_color(index)
        (trail,) = ax.plot(
            [], [], color=color, linewidth=theme.line_width, label=theme.agent_label(index)
        )
        (head,) = ax.plot([], [], marker="o", color=color, markersize=7)
        trails.append(trail)
        heads.append(head)
    ax.legend(loc="upper right", frameon=False, labelcolor=theme.text_color)
    fig.tight_layout()

    def update(anim_index: int) -> tuple[Any, ...]:
        cursor = cursors[anim_index]
        for trail, head, (xs, ys) in zip(trails, heads, positions.values(), strict=True):
            trail.set_data(xs[: cursor + 1], ys[: cursor + 1])
            head.set_data(xs[cursor : cursor + 1], ys[cursor : cursor + 1])
        ax.set_title(f"t = {trajectory[cursor].t0:.3f}", color=theme.text_color)
        return (*trails, *heads)

    anim = animation.FuncAnimation(
        fig, update, frames=len(cursors), interval=max(1, int(1000 / fps)), blit=False
    )

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    writer: animation.PillowWriter | animation.FFMpegWriter
    if output_path.suffix.lower() == ".gif":
        writer = animation.PillowWriter(fps=fps)
    else:
        writer = animation.FFMpegWriter(fps=fps)
    anim.save(output_path, writer=writer, savefig_kwargs={"facecolor": fig.get_facecolor()})
    plt.close(fig)
    return len(cursors)
