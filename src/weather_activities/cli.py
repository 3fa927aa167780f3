"""Command-line interface for weather activity recommendations."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from weather_activities import __version__
from weather_activities.config import Settings, get_settings
from weather_activities.models.activity import ActivityRanking
from weather_activities.models.location import Coordinates
from weather_activities.models.weather import Forecast
from weather_activities.providers.base import LocationNotFoundError, ProviderError
from weather_activities.providers.openmeteo import OpenMeteoGeocoder, OpenMeteoProvider
from weather_activities.recommendations.aggregator import InvalidInputError
from weather_activities.recommendations.recommender import ActivityRecommender

logger = logging.getLogger(__name__)

LOCATION_COMMANDS = ("forecast", "rank")
LOCATION_HELP = (
    "Coordinates as 'lat,lon' or 'lat:lon'; southern and western values "
    "such as '-33.9249:18.4241' are accepted as-is"
)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="weather-activities",
        description="Weather Activity Recommendations - Pick an activity based on the forecast",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default=None, help="Bind address")
    serve_parser.add_argument("--port", type=int, default=None, help="Bind port")
    serve_parser.add_argument(
        "--reload", action="store_true", help="Reload on code changes"
    )

    # Search command
    search_parser = subparsers.add_parser("search", help="Search cities by name")
    search_parser.add_argument("query", help="City name")

    # Forecast command
    forecast_parser = subparsers.add_parser(
        "forecast", help="Get the daily forecast for a location"
    )
    forecast_parser.add_argument("location", nargs="?", help=LOCATION_HELP)

    # Rank command
    rank_parser = subparsers.add_parser(
        "rank", help="Rank activities for a location"
    )
    rank_parser.add_argument("location", nargs="?", help=LOCATION_HELP)

    return parser


def parse_args(
    parser: argparse.ArgumentParser, argv: list[str] | None = None
) -> argparse.Namespace:
    """Parse arguments, accepting locations that start with '-'.

    argparse only treats plain negative numbers as values, so a location like
    '-33.9249:18.4241' comes back as an unrecognized option and is claimed
    here as the positional location.
    """
    args, extras = parser.parse_known_args(argv)

    if args.command in LOCATION_COMMANDS:
        if args.location is None and len(extras) == 1:
            args.location = extras.pop()
        if args.location is None:
            parser.error(f"{args.command}: the following arguments are required: location")

    if extras:
        parser.error(f"unrecognized arguments: {' '.join(extras)}")
    return args


def _make_provider(settings: Settings) -> OpenMeteoProvider:
    return OpenMeteoProvider(
        forecast_days=settings.forecast_days,
        base_url=settings.openmeteo_forecast_url,
        user_agent=settings.user_agent,
        timeout=settings.request_timeout_seconds,
        max_attempts=settings.request_max_attempts,
    )


def format_forecast(forecast: Forecast) -> str:
    """Render a forecast as a plain-text table with its period average."""
    lines = [
        f"{'Date':<12}{'Max °C':>9}{'Min °C':>9}{'Rain mm':>9}{'Wind km/h':>11}",
    ]
    for day in forecast.daily:
        lines.append(
            f"{day.date.isoformat():<12}"
            f"{day.temperature_max_c:>9.1f}"
            f"{day.temperature_min_c:>9.1f}"
            f"{day.precipitation_mm:>9.1f}"
            f"{day.wind_speed_max_kmh:>11.1f}"
        )
    summary = forecast.summarize()
    lines.append(
        f"{'Average':<12}"
        f"{summary.temperature_max_c:>9.1f}"
        f"{summary.temperature_min_c:>9.1f}"
        f"{summary.precipitation_mm:>9.1f}"
        f"{summary.wind_speed_max_kmh:>11.1f}"
    )
    return "\n".join(lines)


def format_ranking(ranking: ActivityRanking) -> str:
    """Render a ranking as plain text, best first."""
    lines = []
    for position, entry in enumerate(ranking.scores, start=1):
        lines.append(
            f"{position}. {entry.activity.display_name:<22}{entry.score:>4}  {entry.reason}"
        )
    lines.append(f"Recommended: {ranking.recommended.display_name}")
    return "\n".join(lines)


async def _search(settings: Settings, query: str) -> str:
    async with OpenMeteoGeocoder(
        count=settings.search_result_count,
        language=settings.search_language,
        base_url=settings.openmeteo_geocoding_url,
        user_agent=settings.user_agent,
        timeout=settings.request_timeout_seconds,
        max_attempts=settings.request_max_attempts,
    ) as geocoder:
        cities = await geocoder.search(query)
    return "\n".join(f"{c.name}, {c.country}  ({c.id})" for c in cities)


async def _forecast(settings: Settings, coordinates: Coordinates) -> str:
    async with _make_provider(settings) as provider:
        forecast = await provider.get_forecast(coordinates)
    return format_forecast(forecast)


async def _rank(settings: Settings, coordinates: Coordinates) -> str:
    async with _make_provider(settings) as provider:
        ranking = await ActivityRecommender(provider).rank_for_coordinates(coordinates)
    return format_ranking(ranking)


def _serve(settings: Settings, args: argparse.Namespace) -> None:
    import uvicorn

    uvicorn.run(
        "weather_activities.api.app:create_app",
        factory=True,
        host=args.host or settings.host,
        port=args.port or settings.port,
        reload=args.reload,
        log_level=settings.log_level.lower(),
    )


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parse_args(parser, argv)

    if args.command is None:
        parser.print_help()
        return 0

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "serve":
        _serve(settings, args)
        return 0

    try:
        if args.command == "search":
            output = asyncio.run(_search(settings, args.query))
        else:
            coordinates = Coordinates.parse(args.location)
            if args.command == "forecast":
                output = asyncio.run(_forecast(settings, coordinates))
            else:
                output = asyncio.run(_rank(settings, coordinates))
    except (InvalidInputError, LocationNotFoundError, ProviderError, ValueError) as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
