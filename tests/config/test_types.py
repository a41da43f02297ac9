"""Tests for configuration dataclasses."""

from __future__ import annotations

import pytest

from nbody_review.config.types import (
    PLANAR_SCHEMA,
    SPATIAL_SCHEMA,
    ChannelSchema,
    ClientConfig,
    PlaybackConfig,
    get_schema,
)


def test_client_config_url() -> None:
    assert ClientConfig().simulation_url == "http://localhost:8000/simulation"
    assert ClientConfig(base_url="https://sim.example/").simulation_url == (
        "https://sim.example/simulation"
    )


@pytest.mark.parametrize(
    "kwargs",
    [
        {"base_url": "localhost:8000"},
        {"simulation_path": "simulation"},
        {"timeout_s": 0.0},
        {"timeout_s": float("inf")},
    ],
)
def test_client_config_rejects(kwargs: dict[str, object]) -> None:
    with pytest.raises(ValueError):
        ClientConfig(**kwargs)  # type: ignore[arg-type]


@pytest.mark.parametrize("kwargs", [{"frame_rate": 0.0}, {"initial_speed": -1.0}])
def test_playback_config_rejects(kwargs: dict[str, float]) -> None:
    with pytest.raises(ValueError):
        PlaybackConfig(**kwargs)


def test_schema_lookup_is_case_insensitive() -> None:
    assert get_schema("PLANAR") is PLANAR_SCHEMA
    assert get_schema("spatial") is SPATIAL_SCHEMA


def test_unknown_schema() -> None:
    with pytest.raises(ValueError, match="available: planar, spatial"):
        get_schema("polar")


def test_schema_channels() -> None:
    assert PLANAR_SCHEMA.channels == ("x", "y", "vx", "vy")
    assert SPATIAL_SCHEMA.channels == ("x", "y", "z", "vx", "vy", "vz", "mass")


@pytest.mark.parametrize("channels", [(), ("x", "x")])
def test_channel_schema_rejects(channels: tuple[str, ...]) -> None:
    with pytest.raises(ValueError):
        ChannelSchema(name="bad", channels=channels)
