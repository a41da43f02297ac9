"""CLI entrypoint: submit initial conditions and review the resulting trajectory.

Settings resolve as CLI flag > ``--config`` JSON file > built-in default.
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

import pyarrow.parquet as pq

from nbody_review.config.constants import (
    ANIMATION_FPS,
    DEFAULT_BASE_URL,
    DEFAULT_SPEED,
    FRAME_RATE,
    REQUEST_TIMEOUT_S,
)
from nbody_review.config.types import ClientConfig, PlaybackConfig, get_schema
from nbody_review.domain.form import FormState
from nbody_review.domain.trajectory import parse_trajectory
from nbody_review.errors import NBodyReviewError
from nbody_review.io.client import SimulationClient
from nbody_review.io.schemas import trajectory_table
from nbody_review.session import ReviewSession
from nbody_review.viz.render import (
    render_initial_conditions_table,
    render_playback_animation,
    render_series_charts,
)
from nbody_review.viz.theme import get_theme

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Setting resolution helpers
# ---------------------------------------------------------------------------


def _coerce_int(raw: object, key: str) -> int:
    """Coerce raw value to int; rejects booleans and non-integer floats."""
    if isinstance(raw, bool):
        raise ValueError(f"{key} must be an integer value")
    if isinstance(raw, float):
        if raw != int(raw):
            raise ValueError(f"{key} must be an integer value, got {raw!r}")
        return int(raw)
    if isinstance(raw, (int, str)):
        return int(raw)
    raise ValueError(f"{key} must be an integer value")


def _coerce_float(raw: object, key: str) -> float:
    """Coerce raw value to float; rejects booleans."""
    if isinstance(raw, bool):
        raise ValueError(f"{key} must be a float value")
    if isinstance(raw, (int, float, str)):
        return float(raw)
    raise ValueError(f"{key} must be a float value")


def _coerce_str(raw: object, key: str) -> str:
    if isinstance(raw, bool) or not isinstance(raw, (str, int, float)):
        raise ValueError(f"{key} must be a string value")
    return str(raw)


def _get_val(cli_val: object, key: str, file_cfg: dict[str, object], default: object) -> object:
    """CLI > file > default resolution."""
    if cli_val is not None:
        return cli_val
    return file_cfg.get(key, default)


def _load_config_file(path: Path | None) -> dict[str, object]:
    if path is None:
        return {}
    raw = json.loads(Path(path).read_text())
    if not isinstance(raw, dict):
        raise ValueError("config file must contain a JSON object")
    return raw


def _client_config(args: argparse.Namespace, file_cfg: dict[str, object]) -> ClientConfig:
    return ClientConfig(
        base_url=_coerce_str(
            _get_val(args.base_url, "base_url", file_cfg, DEFAULT_BASE_URL), "base_url"
        ),
        timeout_s=_coerce_float(
            _get_val(args.timeout, "timeout_s", file_cfg, REQUEST_TIMEOUT_S), "timeout_s"
        ),
    )


# ---------------------------------------------------------------------------
# Subcommand parsers
# ---------------------------------------------------------------------------


def _build_submit_parser(sub: argparse._SubParsersAction) -> None:
    p = sub.add_parser("submit", help="Validate initial conditions and start a simulation")
    p.set_defaults(func=_handle_submit)
    p.add_argument(
        "--values",
        type=Path,
        default=None,
        help="JSON object of body -> {channel: value}; defaults to the built-in bodies",
    )
    p.add_argument("--schema", type=str, default=None, help="Channel schema (planar, spatial)")


def _build_view_parser(sub: argparse._SubParsersAction) -> None:
    p = sub.add_parser("view", help="Fetch a trajectory and render its charts")
    p.set_defaults(func=_handle_view)
    p.add_argument(
        "--trajectory-json",
        type=Path,
        default=None,
        help="Read the trajectory from a file instead of the service",
    )
    p.add_argument("--output-dir", type=Path, required=True)
    p.add_argument("--animation", type=str, default=None, help="Animation file name (.gif/.mp4)")
    p.add_argument("--parquet", action="store_true", help="Also write trajectory.parquet")
    p.add_argument("--fps", type=int, default=None)
    p.add_argument("--speed", type=float, default=None)
    p.add_argument("--frame-rate", type=float, default=None)


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


def _handle_submit(args: argparse.Namespace, file_cfg: dict[str, object]) -> dict[str, object]:
    schema = get_schema(
        _coerce_str(_get_val(args.schema, "schema", file_cfg, "planar"), "schema")
    )
    initial = json.loads(args.values.read_text()) if args.values is not None else None
    if initial is not None and not isinstance(initial, dict):
        raise ValueError("values file must contain a JSON object of body -> {channel: value}")
    request = FormState(initial=initial).build(schema)
    with SimulationClient(_client_config(args, file_cfg)) as client:
        ReviewSession().submit(client, request)
    return {"submitted": list(request.body_names), "schema": schema.name}


def _handle_view(args: argparse.Namespace, file_cfg: dict[str, object]) -> dict[str, object]:
    theme = get_theme(_coerce_str(_get_val(args.theme, "theme", file_cfg, "default"), "theme"))
    fps = _coerce_int(_get_val(args.fps, "fps", file_cfg, ANIMATION_FPS), "fps")
    playback_config = PlaybackConfig(
        frame_rate=_coerce_float(
            _get_val(args.frame_rate, "frame_rate", file_cfg, FRAME_RATE), "frame_rate"
        ),
        initial_speed=_coerce_float(
            _get_val(args.speed, "speed", file_cfg, DEFAULT_SPEED), "speed"
        ),
    )

    session = ReviewSession(playback_config)
    if args.trajectory_json is not None:
        session.replace(parse_trajectory(json.loads(args.trajectory_json.read_text())))
    else:
        with SimulationClient(_client_config(args, file_cfg)) as client:
            session.load(client)

    trajectory = session.trajectory
    series = session.series
    initial = session.initial
    if trajectory is None or series is None or initial is None:
        raise ValueError("no trajectory loaded")

    output_dir = Path(args.output_dir)
    outputs = [
        render_series_charts(series, output_dir / "series.png", theme=theme),
        render_initial_conditions_table(
            initial, output_dir / "initial_conditions.png", theme=theme
        ),
    ]
    if args.animation is not None:
        animation_path = output_dir / args.animation
        render_playback_animation(
            trajectory,
            animation_path,
            fps=fps,
            speed=playback_config.initial_speed,
            frame_rate=playback_config.frame_rate,
            theme=theme,
        )
        outputs.append(animation_path)
    if args.parquet:
        parquet_path = output_dir / "trajectory.parquet"
        pq.write_table(trajectory_table(trajectory), parquet_path)
        outputs.append(parquet_path)

    return {
        "frames": len(trajectory),
        "agents": list(series.agent_ids),
        "outputs": [str(path) for path in outputs],
    }


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint with subcommands."""
    parser = argparse.ArgumentParser(description="Submit and review N-body simulations")
    parser.add_argument("--config", type=Path, default=None, help="JSON settings file")
    parser.add_argument("--base-url", type=str, default=None)
    parser.add_argument("--timeout", type=float, default=None)
    parser.add_argument(
        "--theme",
        type=str,
        default=None,
        help="Theme preset name (default, paper)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    sub = parser.add_subparsers(dest="command", required=True)
    _build_submit_parser(sub)
    _build_view_parser(sub)
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        file_cfg = _load_config_file(args.config)
        summary = args.func(args, file_cfg)
    except (NBodyReviewError, ValueError) as exc:
        logger.error("%s", exc)
        parser.exit(1, f"error: {exc}\n")
    print(json.dumps(summary, ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
