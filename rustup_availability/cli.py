"""
Command-line interface for the rustup packages availability monitor.
"""

import argparse
import logging
import sys
from pathlib import Path

from .availability import AvailabilityData
from .cache import FsCache
from .config import Config, ConfigError
from .downloader import Downloader
from .errors import AvailabilityError, LocalIOError
from .reporting import export_worksheets, generate_fs_tree, generate_html, print_table
from .table import Table


logger = logging.getLogger(__name__)

CONFIG_HEADER = """\
# This file was auto-generated by the print-config command:
# $ rustup-available-packages print-config -c config.yaml
"""


def setup_logging(level: int) -> None:
    logging.basicConfig(
        level=level,
        format="[%(name)s][%(levelname)s] %(message)s",
        stream=sys.stderr,
        force=True,
    )


def verbosity_to_level(verbosity: int) -> int:
    if verbosity <= 0:
        return logging.WARNING
    if verbosity == 1:
        return logging.INFO
    return logging.DEBUG


def make_cache(path) -> FsCache:
    if path is None:
        return FsCache.noop()
    return FsCache(Path(path))


def check_target(target: str, availability: AvailabilityData) -> bool:
    """Check that a target exists within loaded manifests, listing the ones that do."""
    targets = availability.get_available_targets()
    if target in targets:
        return True
    print(f"Target [{target}] is unavailable", file=sys.stderr)
    if not targets:
        print("Actually, there are no targets available.", file=sys.stderr)
    else:
        print("Please use one of the following:", file=sys.stderr)
        for available in sorted(targets):
            print(f"  {available}", file=sys.stderr)
    return False


def run_term(args) -> int:
    setup_logging(verbosity_to_level(args.verbose))

    downloader = Downloader.with_default_source(args.channel, progress=args.verbose > 0)
    downloader.set_cache(make_cache(args.cache)).skip_missing(args.skip_missing_days)
    manifests = downloader.get_last_manifests(args.days)
    dates = [manifest.date for manifest in manifests]

    availability = AvailabilityData()
    availability.add_manifests(manifests)

    if not check_target(args.target, availability):
        return 1

    table = Table.builder(availability, args.target).dates(dates).build()
    print_table(table)
    return 0


def run_render(args) -> int:
    config = Config.load(args.config)
    setup_logging(config.log_level)

    downloader = Downloader.with_default_source(config.channel)
    downloader.set_cache(make_cache(config.cache_path)).skip_missing(config.skip_missing_days)
    manifests = downloader.get_last_manifests(config.days_in_past + config.additional_lookup_days)
    dates = [manifest.date for manifest in manifests][: config.days_in_past]

    availability = AvailabilityData()
    availability.add_manifests(manifests)
    logger.info("Available targets: %s", sorted(availability.get_available_targets()))
    logger.info("Available packages: %s", sorted(availability.get_available_packages()))

    if config.output_pattern:
        generate_html(availability, dates, config)
    if config.file_tree_output is not None:
        generate_fs_tree(availability, dates, config.file_tree_output)
    if args.worksheets:
        tables = [
            Table.builder(availability, target).first_cell("package").dates(dates).build()
            for target in sorted(availability.get_available_targets())
        ]
        if tables:
            excel_file = export_worksheets(tables, Path(args.worksheets))
            logger.info("Worksheets saved to: %s", excel_file)
    return 0


def run_print_config(args) -> int:
    text = CONFIG_HEADER + "\n" + Config.default_with_comments()
    if args.config:
        path = Path(args.config)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text)
        except OSError as e:
            raise LocalIOError(path, "writing to", str(e)) from e
    else:
        sys.stdout.write(text)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rustup-available-packages",
        description="Rust tools per-release availability monitor",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    term = subparsers.add_parser("term", help="Print an availability table to the terminal")
    term.add_argument(
        "-c", "--channel",
        default="nightly",
        help="Override default release channel. Default: nightly"
    )
    term.add_argument(
        "-t", "--target",
        required=True,
        help="Target host architecture, like x86_64-unknown-linux-gnu"
    )
    term.add_argument(
        "-d", "--days",
        type=int,
        default=8,
        help="How deep into the past should we take a look. Default: 8"
    )
    term.add_argument(
        "-v", "--verbose",
        action="count",
        default=0,
        help="Verbosity level: the more 'v's, the more details you'll get"
    )
    term.add_argument(
        "--cache",
        default=None,
        help="Path to a cache directory"
    )
    term.add_argument(
        "--skip-missing-days",
        type=int,
        default=7,
        help="How many missing daily manifests may be skipped. Default: 7"
    )
    term.set_defaults(func=run_term)

    render = subparsers.add_parser("render", help="Render pages using provided configuration")
    render.add_argument(
        "-c", "--config",
        required=True,
        help="Path to a configuration file"
    )
    render.add_argument(
        "--worksheets",
        default=None,
        help="Also export the tables to an Excel file at this path"
    )
    render.set_defaults(func=run_render)

    print_config = subparsers.add_parser(
        "print-config", help="Print the default configuration to stdout"
    )
    print_config.add_argument(
        "-c", "--config",
        default=None,
        help="Write the configuration to this path instead"
    )
    print_config.set_defaults(func=run_print_config)

    return parser


def main(argv=None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if getattr(args, "days", 1) < 0:
        parser.error("--days must not be negative")
    if getattr(args, "skip_missing_days", 0) < 0:
        parser.error("--skip-missing-days must not be negative")

    try:
        return args.func(args)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except AvailabilityError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
