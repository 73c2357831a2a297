"""CLI entry point for point-weather."""

import argparse
import json
import logging
import os
import sys
from datetime import date
from pathlib import Path

from point_weather.config import EXPORT_DIR


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="point-weather",
        description="Exact and climatology weather for a point, date and hour",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command")

    # serve subcommand
    subparsers.add_parser("serve", help="Start the FastAPI server")

    # resolve subcommand
    resolve_parser = subparsers.add_parser("resolve", help="Weather at a point, date and hour")
    _add_point_args(resolve_parser)
    resolve_parser.add_argument("--date", required=True, help="Date (YYYY-MM-DD)")
    resolve_parser.add_argument("--hour", required=True, type=int, help="UTC hour (0-23)")

    # range subcommand
    range_parser = subparsers.add_parser("range", help="Daily series between two dates")
    _add_point_args(range_parser)
    range_parser.add_argument("--start-date", required=True, help="Start date (YYYY-MM-DD)")
    range_parser.add_argument("--end-date", required=True, help="End date (YYYY-MM-DD)")

    # export subcommand
    export_parser = subparsers.add_parser("export", help="Write an export file")
    _add_point_args(export_parser)
    export_parser.add_argument("--date", required=True, help="Date (YYYY-MM-DD)")
    export_parser.add_argument("--hour", required=True, help="UTC hour (0-23)")
    export_parser.add_argument("--format", choices=["json", "csv"], default="json")
    export_parser.add_argument(
        "--output-dir", default=str(EXPORT_DIR), help=f"Output directory (default: {EXPORT_DIR})",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 1

    if args.command == "serve":
        return _serve()
    if args.command == "resolve":
        return _resolve(args)
    if args.command == "range":
        return _range(args)
    return _export(args)


def _add_point_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--lat", required=True, type=float, help="Latitude")
    parser.add_argument("--lng", required=True, type=float, help="Longitude")


def _parse_date(value: str) -> date | None:
    try:
        return date.fromisoformat(value)
    except ValueError:
        print(f"Error: Invalid date {value!r}. Use YYYY-MM-DD format.", file=sys.stderr)
        return None


def _serve() -> int:
    try:
        import uvicorn
    except ImportError as e:
        print(f"Missing dependency: {e}", file=sys.stderr)
        return 1

    port = int(os.environ.get("PORT", "8000"))
    uvicorn.run("point_weather.api.app:create_app", factory=True, host="0.0.0.0", port=port)
    return 0


def _resolve(args: argparse.Namespace) -> int:
    from point_weather.api.schemas import ResolveResponse
    from point_weather.compute.resolver import resolve_weather
    from point_weather.ingest.sources import OpenDataWeatherSource
    from point_weather.models import GeoPoint

    target = _parse_date(args.date)
    if target is None:
        return 2
    if not 0 <= args.hour <= 23:
        print("Error: --hour must be within 0-23", file=sys.stderr)
        return 2

    resolution = resolve_weather(OpenDataWeatherSource(), GeoPoint(args.lat, args.lng), target, args.hour)
    print(json.dumps(ResolveResponse.from_resolution(resolution).to_dict(), indent=2, ensure_ascii=False))
    return 0


def _range(args: argparse.Namespace) -> int:
    from point_weather.compute.range_series import build_range_series
    from point_weather.ingest.sources import OpenDataWeatherSource
    from point_weather.models import GeoPoint

    start = _parse_date(args.start_date)
    end = _parse_date(args.end_date)
    if start is None or end is None:
        return 2
    if start > end:
        print("Error: Start date must be before end date", file=sys.stderr)
        return 2

    series = build_range_series(OpenDataWeatherSource(), GeoPoint(args.lat, args.lng), start, end)
    print(json.dumps([p.to_dict() for p in series], indent=2))
    return 0


def _export(args: argparse.Namespace) -> int:
    from point_weather.export import (
        InvalidExportRequest,
        build_export_document,
        export_filename,
        parse_export_request,
        to_csv,
        to_json,
    )
    from point_weather.ingest.sources import NominatimGeocoder, OpenDataWeatherSource

    try:
        point, target, hour = parse_export_request(args.lat, args.lng, args.date, args.hour)
    except InvalidExportRequest as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    document = build_export_document(
        OpenDataWeatherSource(), NominatimGeocoder(), point, target, hour,
    )
    content = to_csv(document) if args.format == "csv" else to_json(document)

    output_dir = Path(args.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / export_filename(document, args.format)
    path.write_text(content, encoding="utf-8")
    print(path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
