"""
Barograph CLI - weather for a place, from the sources you pick.

Usage:
    barograph Paris                       Default source, metric units
    barograph --imperial 'New York'       Imperial units
    barograph --met-no --weatherapi Oslo  Pick sources (replaces the default)
    barograph --pop 30 --wind 20 Leeds    Thresholds for "wet?" and "windy?"
    barograph --verbose Paris             Debug output on stderr
"""

import logging
import sys
from dataclasses import replace

from . import library
from .errors import LibraryNotFoundError, MissingKeysError
from .keys import KeyFile
from .options import parse_options
from .printer import Colors, print_apology, print_result

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool):
    """Log to stderr; debug level with --verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def print_missing_keys(error: MissingKeysError):
    """Explain which keys to add, and where."""
    print()
    print(f"  {Colors.YELLOW}Some sources you picked need an API key.{Colors.RESET}")
    print()
    for source, keys in error.missing.items():
        print(f"    {source}: {', '.join(keys)}")
    print()
    if error.created:
        print(f"  A key file template was written to {error.path}")
    else:
        print(f"  Add them to {error.path}")
    print("  Replace each placeholder with your key, then run barograph again.")
    print()


def main(argv=None):
    """Main CLI entry point."""
    query, config = parse_options(argv)
    setup_logging(config.verbose)
    logger.debug("Configuration: %s", config.to_dict())

    try:
        keys = KeyFile().require(config.sources)
    except MissingKeysError as e:
        print_missing_keys(e)
        return 1
    config = replace(config, keys=keys)

    try:
        measure_fn = library.get_measure()
    except LibraryNotFoundError as e:
        print(f"barograph: {e}", file=sys.stderr)
        return 1

    result = library.measure(query, config, measure_fn)
    if result is None:
        print_apology(query, config)
        return 0

    print_result(result, query, config)
    return 0


if __name__ == '__main__':
    sys.exit(main())
