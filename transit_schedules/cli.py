"""Command-line interface for transit-schedules."""

import argparse
import logging
import sys
from pathlib import Path

from transit_schedules.api import benchmark, load, run_query
from transit_schedules.gtfs.models import Dataset, LoadConfig, ServeConfig, Strategy
from transit_schedules.output.json import trip_responses_to_json, write_json_file
from transit_schedules.server.app import serve
from transit_schedules.version import VERSION

DEFAULT_GTFS_PATH = "../MBTA_GTFS"


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _load(args: argparse.Namespace) -> Dataset:
    config = LoadConfig(gtfs_path=args.gtfs, jobs=args.jobs)
    return load(args.gtfs, config)


def _count(args: argparse.Namespace, strategy: Strategy) -> int:
    try:
        dataset = _load(args)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        logging.exception("Loading failed")
        return 1

    print(f"Finding schedules for {args.route_id}")
    result = run_query(dataset, args.route_id, strategy)

    if strategy is Strategy.SCAN:
        elapsed = f"{int(result.elapsed_seconds * 1_000)}ms"
    else:
        elapsed = f"{int(result.elapsed_seconds * 1_000_000)}µs"
    print(f"Found {result.count} schedules for {args.route_id} in {elapsed}")
    return 0


def cmd_count(args: argparse.Namespace) -> int:
    """Execute count command."""
    setup_logging(args.verbose)
    return _count(args, Strategy.INDEXED_COUNT)


def cmd_scan(args: argparse.Namespace) -> int:
    """Execute scan command."""
    setup_logging(args.verbose)
    return _count(args, Strategy.SCAN)


def cmd_show(args: argparse.Namespace) -> int:
    """Execute show command."""
    setup_logging(args.verbose)

    try:
        dataset = _load(args)
        result = run_query(dataset, args.route_id, Strategy.INDEXED_MATERIALIZE)
        if args.output:
            write_json_file(Path(args.output), result.trips)
            print(f"Wrote {len(result.trips)} trips ({result.count} schedules) to {args.output}")
        else:
            print(trip_responses_to_json(result.trips, indent=2))
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        logging.exception("Show failed")
        return 1


def cmd_serve(args: argparse.Namespace) -> int:
    """Execute serve command."""
    setup_logging(args.verbose)

    try:
        dataset = _load(args)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        logging.exception("Loading failed")
        return 1

    serve(dataset, ServeConfig(host=args.host, port=args.port))
    return 0


def cmd_bench(args: argparse.Namespace) -> int:
    """Execute bench command."""
    setup_logging(args.verbose)

    try:
        dataset = _load(args)
        totals = benchmark(dataset, args.route or None, repeat=args.repeat)
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        logging.exception("Benchmark failed")
        return 1

    print("\nBenchmark results:")
    for strategy, seconds in totals.items():
        print(f"  {strategy}: {seconds * 1_000:.3f} ms")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="transit-schedules",
        description="Query GTFS trip schedules by route",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    # Options shared by every command
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--gtfs",
        default=DEFAULT_GTFS_PATH,
        help=f"Path to GTFS directory (default: {DEFAULT_GTFS_PATH})",
    )
    common.add_argument(
        "--jobs",
        type=int,
        default=1,
        help="Load trips and stop times in parallel when > 1 (default: 1)",
    )
    common.add_argument("-v", "--verbose", action="store_true", default=argparse.SUPPRESS)

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    # Count command
    count_parser = subparsers.add_parser(
        "count", parents=[common], help="Count schedules using the indices"
    )
    count_parser.add_argument("route_id", help="GTFS route_id")
    count_parser.set_defaults(func=cmd_count)

    # Scan command
    scan_parser = subparsers.add_parser(
        "scan", parents=[common], help="Count schedules with a full table scan"
    )
    scan_parser.add_argument("route_id", help="GTFS route_id")
    scan_parser.set_defaults(func=cmd_scan)

    # Show command
    show_parser = subparsers.add_parser(
        "show", parents=[common], help="Print the trips and schedules of a route as JSON"
    )
    show_parser.add_argument("route_id", help="GTFS route_id")
    show_parser.add_argument("--output", help="Write JSON to this file instead of stdout")
    show_parser.set_defaults(func=cmd_show)

    # Serve command
    serve_parser = subparsers.add_parser(
        "serve", parents=[common], help="Serve schedules over HTTP"
    )
    serve_parser.add_argument("--host", default="0.0.0.0", help="Bind address (default: 0.0.0.0)")
    serve_parser.add_argument("--port", type=int, default=4000, help="Port (default: 4000)")
    serve_parser.set_defaults(func=cmd_serve)

    # Bench command
    bench_parser = subparsers.add_parser(
        "bench", parents=[common], help="Compare query strategies"
    )
    bench_parser.add_argument(
        "--route",
        action="append",
        default=[],
        help="Route to query, may be repeated (default: every route)",
    )
    bench_parser.add_argument(
        "--repeat",
        type=int,
        default=1,
        help="Passes over the route list (default: 1)",
    )
    bench_parser.set_defaults(func=cmd_bench)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = build_parser()

    # Parse and execute
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    sys.exit(args.func(args))


def count_main() -> None:
    """Entry point for transit-count."""
    main(["count", *sys.argv[1:]])


def scan_main() -> None:
    """Entry point for transit-scan."""
    main(["scan", *sys.argv[1:]])


def serve_main() -> None:
    """Entry point for transit-serve."""
    main(["serve", *sys.argv[1:]])


if __name__ == "__main__":
    main()
