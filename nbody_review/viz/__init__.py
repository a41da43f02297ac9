"""Visualization layer: themes, renderers, and CLI."""

from nbody_review.viz.cli import main
from nbody_review.viz.render import (
    initial_conditions_rows,
    playback_cursors,
    render_initial_conditions_table,
    render_playback_animation,
    render_series_charts,
)
from nbody_review.viz.theme import (
    DEFAULT_THEME,
    PAPER_THEME,
    REGISTERED_THEMES,
    Theme,
    get_theme,
)

__all__ = [
    "DEFAULT_THEME",
    "PAPER_THEME",
    "REGISTERED_THEMES",
    "Theme",
    "get_theme",
    "initial_conditions_rows",
    "main",
    "playback_cursors",
    "render_initial_conditions_table",
    "render_playback_animation",
    "render_series_charts",
]
