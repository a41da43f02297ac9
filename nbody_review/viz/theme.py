"""Visualization theme presets for trajectory charts and tables.

Colors are assigned by agent index (first appearance in frame 0), never by
agent id, so the same body keeps its color across reloads.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Theme:
    """Complete collection of visualization style tokens."""

    position_colors: tuple[str, ...] = ("#3b82f6", "#10b981", "#f59e0b", "#a855f7")
    velocity_colors: tuple[str, ...] = ("#06b6d4", "#f43f5e", "#eab308", "#8b5cf6")
    label_format: str = "Body{n}"

    background_color: str = "#020617"
    panel_color: str = "#0f172a"
    text_color: str = "#94a3b8"
    grid_color: str = "#1e293b"
    line_width: float = 2.0

    def position_color(self, index: int) -> str:
        return self.position_colors[index % len(self.position_colors)]

    def velocity_color(self, index: int) -> str:
        return self.velocity_colors[index % len(self.velocity_colors)]

    def agent_label(self, index: int) -> str:
        """1-based display label for the agent at ``index``."""
        return self.label_format.format(n=index + 1)


# ---------------------------------------------------------------------------
# Built-in presets
# ---------------------------------------------------------------------------

DEFAULT_THEME = Theme()

PAPER_THEME = Theme(
    position_colors=("#1f77b4", "#2ca02c", "#ff7f0e", "#9467bd"),
    velocity_colors=("#17becf", "#d62728", "#bcbd22", "#8c564b"),
    background_color="#FFFFFF",
    panel_color="#FFFFFF",
    text_color="#222222",
    grid_color="#E0E0E0",
    line_width=1.5,
)

REGISTERED_THEMES: dict[str, Theme] = {
    "default": DEFAULT_THEME,
    "paper": PAPER_THEME,
}


def get_theme(name: str) -> Theme:
    """Look up a theme by name (case-insensitive)."""
    key = name.lower()
    if key not in REGISTERED_THEMES:
        valid = ", ".join(sorted(REGISTERED_THEMES))
        raise ValueError(f"Unknown theme {name!r}; available: {valid}")
    return REGISTERED_THEMES[key]
