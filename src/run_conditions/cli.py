"""Command-line interface for running condition evaluations.

Weather values are given in imperial units; the runner profile defaults come
from ``Settings`` and can be overridden per call. Results are printed as JSON.

Example:
    ```
    run-conditions score --temp 72 --apparent 74 --humidity 80 --wind 6
    run-conditions outfit --temp 28 --apparent 20 --wind 15 --activity long_run
    run-conditions tips --temp 84 --humidity 70 --activity workout --boldness 1
    run-conditions best-time hourly.json --activity workout
    ```
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pydantic import BaseModel, TypeAdapter, ValidationError

from run_conditions.config import Settings, get_settings
from run_conditions.evaluation import (
    evaluate_all,
    evaluate_approach,
    evaluate_dew_point,
    evaluate_heat_stress,
    evaluate_outfit,
    evaluate_score,
)
from run_conditions.models.profile import ActivityKind, Gender, RunProfile
from run_conditions.models.weather import ForecastPoint, WeatherSample
from run_conditions.recommendations.road import calculate_road_conditions
from run_conditions.recommendations.time_slots import BestRunTimeFinder

logger = logging.getLogger(__name__)

EXIT_INVALID_INPUT = 2


def _weather_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(add_help=False)
    group = parser.add_argument_group("weather")
    group.add_argument("--temp", type=float, required=True, help="Air temperature (°F)")
    group.add_argument(
        "--apparent", type=float, help="Feels-like temperature (°F, default: --temp)"
    )
    group.add_argument("--humidity", type=float, default=50.0, help="Relative humidity (%%)")
    group.add_argument("--wind", type=float, default=0.0, help="Wind speed (mph)")
    group.add_argument(
        "--precip-prob", type=float, default=0.0, help="Precipitation probability (%%)"
    )
    group.add_argument(
        "--precip-in", type=float, default=0.0, help="Precipitation amount (inches)"
    )
    group.add_argument("--uv", type=float, default=0.0, help="UV index")
    group.add_argument("--cloud", type=float, help="Cloud cover (%%)")
    group.add_argument("--pressure", type=float, help="Barometric pressure (hPa)")
    group.add_argument("--night", action="store_true", help="Sun is down")
    return parser


def _profile_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(add_help=False)
    group = parser.add_argument_group("runner")
    group.add_argument(
        "--activity",
        choices=[kind.value for kind in ActivityKind],
        help="Kind of run (default from settings)",
    )
    group.add_argument(
        "--gender",
        choices=[gender.value for gender in Gender],
        help="Runner gender (default from settings)",
    )
    group.add_argument(
        "--cold-hands",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Hands get cold easily (default from settings)",
    )
    group.add_argument(
        "--sensitivity", type=float, help="Temperature sensitivity offset (default from settings)"
    )
    group.add_argument(
        "--boldness",
        type=int,
        choices=range(-2, 3),
        help="Coaching boldness, -2 cautious to 2 bold (default from settings)",
    )
    return parser


def _forecast_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(add_help=False)
    parser.add_argument(
        "--forecast",
        type=Path,
        help="JSON array of upcoming hourly weather samples, nearest first (long runs)",
    )
    return parser


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="run-conditions",
        description="Running conditions - score, heat stress and what to wear",
    )
    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s 0.1.0",
    )

    weather = _weather_parser()
    profile = _profile_parser()
    forecast = _forecast_parser()
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser(
        "dewpoint", parents=[weather], help="Dew point and humidity comfort"
    )
    subparsers.add_parser(
        "heat", parents=[weather, profile], help="WBGT, heat index and risk tier"
    )
    subparsers.add_parser(
        "score", parents=[weather, profile], help="Running score with breakdown"
    )
    subparsers.add_parser(
        "outfit", parents=[weather, profile, forecast], help="Performance and comfort outfits"
    )
    subparsers.add_parser("road", parents=[weather], help="Road surface hazards")
    subparsers.add_parser(
        "tips", parents=[weather, profile, forecast], help="Coaching tips and pace guidance"
    )
    subparsers.add_parser(
        "all", parents=[weather, profile, forecast], help="Every evaluation for one sample"
    )

    best_time = subparsers.add_parser(
        "best-time", parents=[profile], help="Best hour to run on each forecast day"
    )
    best_time.add_argument(
        "forecast_file",
        type=Path,
        help="JSON array of hourly weather samples (each with a 'time')",
    )

    return parser


def sample_from_args(args: argparse.Namespace) -> WeatherSample:
    return WeatherSample(
        temp_f=args.temp,
        apparent_f=args.temp if args.apparent is None else args.apparent,
        humidity=args.humidity,
        wind_mph=args.wind,
        precip_prob=args.precip_prob,
        precip_in=args.precip_in,
        uv_index=args.uv,
        cloud_cover=args.cloud,
        pressure_hpa=args.pressure,
        is_day=not args.night,
    )


def profile_from_args(args: argparse.Namespace, settings: Settings) -> RunProfile:
    """Settings defaults overridden by any profile flags given."""
    defaults = settings.default_profile()
    overrides = {
        "activity": args.activity,
        "gender": args.gender,
        "cold_hands": args.cold_hands,
        "temp_sensitivity": args.sensitivity,
        "boldness": args.boldness,
    }
    given = {key: value for key, value in overrides.items() if value is not None}
    return RunProfile.model_validate({**defaults.model_dump(), **given})


def read_samples(path: Path) -> list[WeatherSample]:
    """Load a JSON array of weather samples."""
    return TypeAdapter(list[WeatherSample]).validate_json(path.read_bytes())


def forecast_from_args(args: argparse.Namespace) -> list[ForecastPoint]:
    """Look-ahead points from the optional --forecast file."""
    if args.forecast is None:
        return []
    return [ForecastPoint.from_sample(sample) for sample in read_samples(args.forecast)]


def run_command(args: argparse.Namespace, settings: Settings) -> BaseModel:
    if args.command == "best-time":
        samples = read_samples(args.forecast_file)
        profile = profile_from_args(args, settings)
        finder = BestRunTimeFinder(
            run_hours_start=settings.run_hours_start,
            run_hours_end=settings.run_hours_end,
        )
        return finder.find(samples, profile.activity)

    sample = sample_from_args(args)
    if args.command == "dewpoint":
        return evaluate_dew_point(sample.temp_f, sample.humidity)
    if args.command == "road":
        return calculate_road_conditions(sample)

    profile = profile_from_args(args, settings)
    if args.command == "heat":
        return evaluate_heat_stress(
            sample.temp_f,
            sample.humidity,
            sample.wind_mph,
            profile.activity,
            pressure_hpa=sample.pressure_hpa,
            cloud_cover=sample.cloud_cover,
        )
    if args.command == "score":
        return evaluate_score(sample, profile.activity)
    forecast = forecast_from_args(args)
    if args.command == "outfit":
        return evaluate_outfit(sample, profile, forecast)
    if args.command == "tips":
        return evaluate_approach(sample, profile, forecast)
    return evaluate_all(sample, profile, forecast)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    try:
        settings = get_settings()
    except ValidationError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return EXIT_INVALID_INPUT

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        result = run_command(args, settings)
    except ValidationError as e:
        logger.debug(f"Rejected input for '{args.command}': {e}")
        print(f"Invalid input: {e.error_count()} error(s)\n{e}", file=sys.stderr)
        return EXIT_INVALID_INPUT
    except OSError as e:
        print(f"Cannot read forecast file: {e}", file=sys.stderr)
        return EXIT_INVALID_INPUT

    print(result.model_dump_json(indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
