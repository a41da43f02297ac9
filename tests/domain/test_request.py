"""Tests for request building and payload mapping."""

from __future__ import annotations

import json
import math

import pytest

from nbody_review.config.types import PLANAR_SCHEMA, SPATIAL_SCHEMA
from nbody_review.domain.request import (
    SimulationRequest,
    build_request,
    deserialize_request,
    serialize_request,
)
from nbody_review.errors import ValidationError


class TestBuildRequest:
    def test_planar_request_from_numbers_and_strings(self) -> None:
        raw = {
            "Planet": {"x": 0, "y": "0.1", "vx": 0.1, "vy": "0"},
            "Satellite": {"x": "0", "y": 1, "vx": " 1 ", "vy": -0.0},
        }
        request = build_request(raw, PLANAR_SCHEMA)
        assert request.bodies == {
            "Planet": {"x": 0.0, "y": 0.1, "vx": 0.1, "vy": 0.0},
            "Satellite": {"x": 0.0, "y": 1.0, "vx": 1.0, "vy": -0.0},
        }
        assert request.body_names == ("Planet", "Satellite")

    def test_missing_channel_names_body_and_channel(self) -> None:
        with pytest.raises(ValidationError) as excinfo:
            build_request({"Planet": {"x": 0, "y": 0.1, "vx": 0.1}}, PLANAR_SCHEMA)
        assert excinfo.value.body == "Planet"
        assert excinfo.value.channel == "vy"
        assert "Planet.vy" in str(excinfo.value)

    def test_cleared_field_is_missing(self) -> None:
        with pytest.raises(ValidationError, match="Satellite.vx"):
            build_request(
                {
                    "Planet": {"x": 0, "y": 0, "vx": 0, "vy": 0},
                    "Satellite": {"x": 0, "y": 1, "vx": "", "vy": 0},
                },
                PLANAR_SCHEMA,
            )

    @pytest.mark.parametrize("bad", ["abc", "nan", "inf", math.inf, math.nan, True, None, [1]])
    def test_invalid_values_rejected(self, bad: object) -> None:
        with pytest.raises(ValidationError) as excinfo:
            build_request({"Planet": {"x": bad, "y": 0, "vx": 0, "vy": 0}}, PLANAR_SCHEMA)
        assert excinfo.value.channel == "x"

    def test_reports_first_failure_only(self) -> None:
        raw = {"A": {"x": "bad", "y": 0, "vx": 0}, "B": {}}
        with pytest.raises(ValidationError) as excinfo:
            build_request(raw, PLANAR_SCHEMA)
        assert (excinfo.value.body, excinfo.value.channel) == ("A", "x")

    def test_ignores_channels_outside_schema(self) -> None:
        raw = {"Planet": {"x": 1, "y": 2, "vx": 3, "vy": 4, "z": 5, "color": "red"}}
        request = build_request(raw, PLANAR_SCHEMA)
        assert request.bodies["Planet"] == {"x": 1.0, "y": 2.0, "vx": 3.0, "vy": 4.0}

    def test_channel_order_follows_schema(self) -> None:
        raw = {"Planet": {"mass": 1, "vz": 0, "vy": 0, "vx": 0, "z": 0, "y": 0, "x": 0}}
        request = build_request(raw, SPATIAL_SCHEMA)
        assert tuple(request.bodies["Planet"]) == SPATIAL_SCHEMA.channels

    def test_spatial_schema_requires_mass(self) -> None:
        raw = {"Star": {"x": 0, "y": 0, "z": 0, "vx": 0, "vy": 0, "vz": 0}}
        with pytest.raises(ValidationError, match="Star.mass"):
            build_request(raw, SPATIAL_SCHEMA)

    def test_no_bodies_rejected(self) -> None:
        with pytest.raises(ValidationError):
            build_request({}, PLANAR_SCHEMA)

    def test_validation_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            build_request({"Planet": {}}, PLANAR_SCHEMA)


class TestSerialize:
    def test_serialize_is_plain_mapping(self) -> None:
        request = SimulationRequest(bodies={"Planet": {"x": 0.0, "y": 0.1, "vx": 0.1, "vy": 0.0}})
        payload = serialize_request(request)
        assert payload == {"Planet": {"x": 0.0, "y": 0.1, "vx": 0.1, "vy": 0.0}}
        payload["Planet"]["x"] = 99.0
        assert request.bodies["Planet"]["x"] == 0.0

    def test_serialize_preserves_order(self) -> None:
        request = build_request(
            {
                "Satellite": {"x": 0, "y": 1, "vx": 1, "vy": 0},
                "Planet": {"x": 0, "y": 0, "vx": 0, "vy": 0},
            },
            PLANAR_SCHEMA,
        )
        payload = serialize_request(request)
        assert list(payload) == ["Satellite", "Planet"]
        assert list(payload["Planet"]) == ["x", "y", "vx", "vy"]

    @pytest.mark.parametrize(
        "value",
        ["0.1", "1e-308", "-2.5e300", "0.30000000000000004", "123456789.123456789", "5e-324"],
    )
    def test_json_round_trip_is_bit_exact(self, value: str) -> None:
        raw = {"Planet": {"x": value, "y": 0, "vx": 0, "vy": 0}}
        request = build_request(raw, PLANAR_SCHEMA)
        wire = json.dumps(serialize_request(request))
        restored = deserialize_request(json.loads(wire))
        assert restored == request
        assert restored.bodies["Planet"]["x"].hex() == float(value).hex()

    def test_deserialize_rejects_non_numbers(self) -> None:
        with pytest.raises(ValidationError, match="Planet.x"):
            deserialize_request({"Planet": {"x": "1"}})
