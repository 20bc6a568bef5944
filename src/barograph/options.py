"""
Command-line options.

    barograph [options] QUERY...

Flags map one-to-one onto Configuration fields. The query is every
positional word joined with spaces.
"""

import argparse
import re
import sys
from datetime import datetime
from typing import List, Optional, Sequence, Tuple

from . import __version__
from .config import (
    SOURCES,
    DEFAULT_SOURCE,
    DEFAULT_TIMEOUT,
    DEFAULT_WET_THRESHOLD,
    DEFAULT_WINDY_THRESHOLD,
    Configuration,
    Units,
    dedupe_sources,
)


# Flags that consume the next token as their value
VALUE_FLAGS = frozenset({"--timeout", "-t", "--pop", "-p", "--wind", "-w", "--at", "-a"})

# Query words that argparse would otherwise take for options, e.g. -33.87,151.21
NEGATIVE_WORD = re.compile(r"^-[\d.]")

TIMESTAMP_FORMATS = ("%Y-%m-%d %H:%M:%S", "%Y-%m-%d %H:%M", "%Y-%m-%d")


def parse_timestamp(value: str) -> datetime:
    """argparse type for --at. Accepts ISO-8601 dates and datetimes."""
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        pass
    for fmt in TIMESTAMP_FORMATS:
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue
    raise argparse.ArgumentTypeError(f"invalid timestamp: '{value}'")


def positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a whole number: '{value}'")
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be greater than zero: {number}")
    return number


def percent(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a whole number: '{value}'")
    if not 0 <= number <= 100:
        raise argparse.ArgumentTypeError(f"must be between 0 and 100: {number}")
    return number


def non_negative_float(value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: '{value}'")
    if number < 0:
        raise argparse.ArgumentTypeError(f"must not be negative: {value}")
    return number


def arrange_argv(argv: Sequence[str]) -> List[str]:
    """
    Move query words after a "--" so that coordinates such as
    -33.87,151.21 reach the query instead of being read as flags.

    Flag values (the token after --timeout, --pop, ...) stay where they are.
    """
    options, words = [], []
    tokens = iter(argv)
    for token in tokens:
        if token == "--":
            words.extend(tokens)
            break
        if token in VALUE_FLAGS:
            options.append(token)
            value = next(tokens, None)
            if value is not None:
                options.append(value)
        elif token.startswith("-") and not NEGATIVE_WORD.match(token):
            options.append(token)
        else:
            words.append(token)
    return options + ["--"] + words


def build_parser() -> argparse.ArgumentParser:
    """The barograph argument parser."""
    parser = argparse.ArgumentParser(
        prog="barograph",
        description="Current conditions and forecast for a place, from one or more weather sources",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "examples:\n"
            "  barograph Paris, France\n"
            "  barograph --imperial --met-no --openweathermap 'New York'\n"
            "  barograph --pop 30 --at 2026-10-20T08:00 90210\n"
            "  barograph -33.87,151.21"
        ),
    )
    parser.add_argument("query", nargs="*", metavar="QUERY",
                        help="Place to look up: city, postal code, coordinates...")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--verbose", "-V",
        action="store_true",
        help="Show debug output and ask the library for verbose measurements",
    )
    parser.add_argument(
        "--timeout", "-t",
        type=positive_int,
        default=DEFAULT_TIMEOUT,
        metavar="SECONDS",
        help=f"Give up on a source after this many seconds (default: {DEFAULT_TIMEOUT})",
    )
    parser.add_argument(
        "--timezone", "-z",
        dest="force_timezone",
        action="store_true",
        help="Always resolve the timezone of the location",
    )

    units = parser.add_mutually_exclusive_group()
    units.add_argument(
        "--metric", "-m",
        dest="units",
        action="store_const",
        const=Units.METRIC,
        help="Metric units (default)",
    )
    units.add_argument(
        "--imperial", "-i",
        dest="units",
        action="store_const",
        const=Units.IMPERIAL,
        help="Imperial units",
    )
    parser.set_defaults(units=Units.METRIC)

    sources = parser.add_argument_group(
        "sources", f"Any of these replaces the default source ({DEFAULT_SOURCE})"
    )
    for spec in SOURCES.values():
        sources.add_argument(
            spec.flag,
            dest="sources",
            action="append_const",
            const=spec.name,
            help=spec.description,
        )

    parser.add_argument(
        "--pop", "-p",
        dest="wet_threshold",
        type=percent,
        default=DEFAULT_WET_THRESHOLD,
        metavar="PERCENT",
        help=f"Chance of precipitation that counts as wet (default: {DEFAULT_WET_THRESHOLD})",
    )
    parser.add_argument(
        "--wind", "-w",
        dest="windy_threshold",
        type=non_negative_float,
        default=DEFAULT_WINDY_THRESHOLD,
        metavar="SPEED",
        help=f"Wind speed that counts as windy (default: {DEFAULT_WINDY_THRESHOLD:g})",
    )
    parser.add_argument(
        "--at", "-a",
        type=parse_timestamp,
        metavar="TIMESTAMP",
        help="Answer the summary questions for this time instead of now",
    )
    return parser


def parse_options(argv: Optional[Sequence[str]] = None,
                  parser: Optional[argparse.ArgumentParser] = None) -> Tuple[str, Configuration]:
    """
    Parse arguments into (query, configuration).

    Exits through argparse with status 2 and a usage message when the
    arguments are invalid or no query was given.
    """
    parser = parser or build_parser()
    if argv is None:
        argv = sys.argv[1:]
    args = parser.parse_args(arrange_argv(argv))

    query = " ".join(args.query or []).strip()
    if not query:
        parser.error("a query is required, e.g. 'barograph Paris'")

    config = Configuration(
        units=args.units,
        timeout=args.timeout,
        sources=selected_sources(args.sources),
        verbose=args.verbose,
        wet_threshold=args.wet_threshold,
        windy_threshold=args.windy_threshold,
        at=args.at,
        force_timezone=args.force_timezone,
    )
    return query, config


def selected_sources(flags: Optional[List[str]]) -> Tuple[str, ...]:
    """Sources named by flags, or just the default when none were."""
    if not flags:
        return (DEFAULT_SOURCE,)
    return dedupe_sources(flags)
