"""Editable initial-conditions form backed by a trailing debounce."""

from __future__ import annotations

import copy
from collections.abc import Mapping

from nbody_review.config.constants import DEBOUNCE_WINDOW_S, DEFAULT_BODIES
from nbody_review.config.types import ChannelSchema
from nbody_review.domain.debounce import TrailingDebouncer
from nbody_review.domain.request import SimulationRequest, build_request
from nbody_review.errors import ValidationError

RawValue = float | str
"""A form cell: a number, or the text typed so far (``''`` when cleared)."""


def split_field_path(path: str) -> tuple[str, str]:
    """Split ``"Planet.vx"`` into ``("Planet", "vx")``."""
    body, sep, channel = path.rpartition(".")
    if not sep or not body or not channel:
        raise ValueError(f"Expected body.channel field path, got: {path!r}")
    return body, channel


class FormState:
    """Raw per-body values with debounced edits.

    Only settled edits are visible through :meth:`values`; :meth:`build`
    flushes pending edits first so a submit always sees the latest input.
    """

    def __init__(
        self,
        initial: Mapping[str, Mapping[str, RawValue]] | None = None,
        window: float = DEBOUNCE_WINDOW_S,
    ) -> None:
        source = DEFAULT_BODIES if initial is None else initial
        self._values: dict[str, dict[str, RawValue]] = {}
        for body, channels in source.items():
            if not isinstance(channels, Mapping):
                raise ValidationError(str(body), None, "expected a mapping of channel to value")
            self._values[body] = dict(channels)
        self._debouncer: TrailingDebouncer[tuple[str, str], RawValue] = TrailingDebouncer(
            window, self._apply
        )

    def _apply(self, key: tuple[str, str], value: RawValue) -> None:
        body, channel = key
        self._values[body][channel] = value

    def edit(self, path: str, raw: RawValue, now: float | None = None) -> None:
        """Queue an edit to ``body.channel``; unknown bodies are rejected."""
        body, channel = split_field_path(path)
        if body not in self._values:
            raise ValueError(f"Unknown body {body!r}; available: {', '.join(self._values)}")
        self._debouncer.submit((body, channel), raw, now)

    def poll(self, now: float | None = None) -> list[str]:
        """Apply settled edits; returns the field paths that changed."""
        return [f"{body}.{channel}" for body, channel in self._debouncer.poll(now)]

    def flush(self) -> list[str]:
        return [f"{body}.{channel}" for body, channel in self._debouncer.flush()]

    @property
    def has_pending(self) -> bool:
        return bool(self._debouncer.pending_keys())

    def values(self) -> dict[str, dict[str, RawValue]]:
        return copy.deepcopy(self._values)

    def build(self, schema: ChannelSchema) -> SimulationRequest:
        self.flush()
        return build_request(self._values, schema)
