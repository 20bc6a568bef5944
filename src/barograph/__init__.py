"""
Barograph: weather at the command line.

Turns command-line flags into a configuration, hands the query to a
weather-aggregation library and prints what comes back.
"""

__version__ = "0.3.0"

from .config import Configuration, Units, SOURCES
from .errors import BarographError, MissingKeysError, LibraryNotFoundError

__all__ = [
    "Configuration",
    "Units",
    "SOURCES",
    "BarographError",
    "MissingKeysError",
    "LibraryNotFoundError",
]
