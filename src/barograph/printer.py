"""
Text rendering of a weather result.

The result comes from the weather library and is read by attribute name
(or by key, for plain dicts). Anything missing is skipped, and a section
with nothing in it is not printed at all.

    Summary -> Query -> Sources (one block per source) -> Info
"""

import sys
from contextlib import contextmanager
from datetime import date, datetime, time as dt_time
from types import SimpleNamespace
from typing import Any, Iterable, List, Mapping, Optional, Sequence, TextIO, Tuple

from . import __version__
from .config import Configuration


# === Terminal Colors ===

class Colors:
    """ANSI color codes for terminal output."""
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    CYAN = "\033[36m"

    @classmethod
    def disable(cls):
        """Disable colors (for non-TTY output)."""
        for attr in dir(cls):
            if not attr.startswith('_') and attr.isupper():
                setattr(cls, attr, "")


if not sys.stdout.isatty():
    Colors.disable()


# === Field tables: (attribute, label) ===

Fields = Sequence[Tuple[str, str]]

QUERY_FIELDS: Fields = [
    ("q", "Query"),
    ("format", "Format"),
    ("country_code", "Country code"),
]

GEO_FIELDS: Fields = [
    ("latitude", "Latitude"),
    ("longitude", "Longitude"),
]

PLACE_FIELDS: Fields = [
    ("id", "ID"),
    ("name", "Name"),
    ("city", "City"),
    ("state", "State"),
    ("country", "Country"),
    ("country_code", "Country code"),
    ("zip_code", "Zip code"),
    ("latitude", "Latitude"),
    ("longitude", "Longitude"),
]

TIMEZONE_FIELDS: Fields = [
    ("code", "Code"),
    ("name", "Name"),
    ("key", "Zone"),
    ("offset", "UTC offset"),
]

CONDITION_FIELDS: Fields = [
    ("observed_at", "Observed at"),
    ("date", "Date"),
    ("starts_at", "Starts at"),
    ("ends_at", "Ends at"),
    ("temperature", "Temperature"),
    ("apparent_temperature", "Feels like"),
    ("high", "High"),
    ("low", "Low"),
    ("dew_point", "Dew point"),
    ("heat_index", "Heat index"),
    ("wind_chill", "Wind chill"),
    ("humidity", "Humidity"),
    ("pop", "Chance of precipitation"),
    ("wind", "Wind"),
    ("wind_direction", "Wind direction"),
    ("wind_gust", "Wind gust"),
    ("pressure", "Pressure"),
    ("visibility", "Visibility"),
    ("condition", "Condition"),
    ("icon", "Icon"),
]

SUN_FIELDS: Fields = [
    ("rise", "Rise"),
    ("set", "Set"),
]

RESPONSE_FIELDS: Fields = [
    ("status", "Status"),
    ("error", "Error"),
    ("start_at", "Started"),
    ("end_at", "Finished"),
]


def get(obj: Any, name: str) -> Any:
    """Read `name` from an object or a mapping; None when absent."""
    if obj is None:
        return None
    if isinstance(obj, Mapping):
        return obj.get(name)
    return getattr(obj, name, None)


def format_value(value: Any) -> Optional[str]:
    """Render a field value, or None when there is nothing to show."""
    if value is None:
        return None
    if isinstance(value, bool):
        return "yes" if value else "no"
    if isinstance(value, (datetime, date, dt_time)):
        return value.isoformat()
    if isinstance(value, float):
        return f"{value:g}"
    if isinstance(value, str):
        return value.strip() or None
    if isinstance(value, (list, tuple)):
        parts = [p for p in (format_value(v) for v in value) if p]
        return ", ".join(parts) or None
    return str(value)


def field_lines(obj: Any, fields: Fields) -> List[Tuple[str, str]]:
    """(label, text) for every present field of obj."""
    lines = []
    for attr, label in fields:
        text = format_value(get(obj, attr))
        if text is not None:
            lines.append((label, text))
    return lines


class ResultPrinter:
    """Writes indented, labeled sections to a stream."""

    INDENT = "  "
    RULE = "═" * 55

    def __init__(self, config: Configuration, out: Optional[TextIO] = None):
        self.config = config
        self.out = out or sys.stdout
        self.depth = 0

    # --- low-level output ---

    def line(self, text: str = ""):
        if text:
            print(f"{self.INDENT * self.depth}{text}", file=self.out)
        else:
            print(file=self.out)

    def field(self, label: str, text: str):
        self.line(f"{label}: {text}")

    @contextmanager
    def section(self, title: str):
        self.line(f"{Colors.BOLD}{title}{Colors.RESET}")
        self.depth += 1
        try:
            yield
        finally:
            self.depth -= 1

    def block(self, title: str, obj: Any, fields: Fields) -> bool:
        """A titled section of plain fields. Prints nothing if all are absent."""
        lines = field_lines(obj, fields)
        if not lines:
            return False
        with self.section(title):
            for label, text in lines:
                self.field(label, text)
        return True

    # --- whole result ---

    def print_result(self, result: Any, query: str):
        """Print every section of a successful result."""
        self.print_banner(query)
        self.print_summary(result)
        self.print_query(get(result, "query"), query)
        self.print_responses(get(result, "responses") or [])
        self.print_info(result)

    def print_apology(self, query: str):
        """What to say when no source produced anything."""
        self.line(f"{Colors.YELLOW}Sorry, no weather source had anything for '{query}'.{Colors.RESET}")
        self.line("Try a different spelling, or enable more sources (see --help).")

    def print_banner(self, query: str):
        self.line(f"{Colors.CYAN}{self.RULE}{Colors.RESET}")
        self.line(f"{Colors.BOLD}Weather for {query}{Colors.RESET}")
        self.line(f"{Colors.CYAN}{self.RULE}{Colors.RESET}")

    # --- sections ---

    def print_summary(self, result: Any):
        current = get(result, "current")
        lines = field_lines(current, CONDITION_FIELDS)
        answers = self.summary_answers(result)
        sun = get(current, "sun")
        if not lines and not answers and not field_lines(sun, SUN_FIELDS):
            return
        with self.section("Summary"):
            for label, text in lines + answers:
                self.field(label, text)
            self.print_sun(sun)

    def summary_answers(self, result: Any) -> List[Tuple[str, str]]:
        """Ask the result's yes/no questions, where it offers them."""
        at = self.config.at
        questions = [
            ("wet", "Wet?", (self.config.wet_threshold, at)),
            ("windy", "Windy?", (self.config.windy_threshold, at)),
            ("day", "Day?", (at,)),
            ("sunny", "Sunny?", (at,)),
        ]
        answers = []
        for attr, label, args in questions:
            method = get(result, attr)
            if not callable(method):
                continue
            text = format_value(method(*args))
            if text is not None:
                answers.append((label, text))
        return answers

    def print_query(self, query_obj: Any, query: str):
        lines = field_lines(query_obj, QUERY_FIELDS)
        lines += field_lines(get(query_obj, "geo"), GEO_FIELDS)
        if not any(label == "Query" for label, _ in lines):
            lines.insert(0, ("Query", query))
        with self.section("Query"):
            for label, text in lines:
                self.field(label, text)

    def print_responses(self, responses: Iterable[Any]):
        responses = list(responses)
        if not responses:
            return
        with self.section("Sources"):
            for response in responses:
                self.print_response(response)

    def print_response(self, response: Any):
        name = format_value(get(response, "source")) or "unknown source"
        ok = get(response, "success")
        if ok is None:
            status = ""
        elif ok:
            status = f" {Colors.GREEN}[ok]{Colors.RESET}"
        else:
            status = f" {Colors.RED}[failed]{Colors.RESET}"

        with self.section(f"{name}{status}"):
            for label, text in field_lines(response, RESPONSE_FIELDS):
                self.field(label, text)
            self.block("Location", get(response, "location"), PLACE_FIELDS)
            self.block("Station", get(response, "station"), PLACE_FIELDS)
            self.print_timezone(get(response, "timezone"))
            self.print_conditions("Current", get(response, "current"))
            self.print_forecast(get(response, "forecast") or [])

    def print_timezone(self, tz: Any):
        if tz is None:
            return
        if isinstance(tz, str):
            if tz.strip():
                self.field("Timezone", tz.strip())
            return
        if self.block("Timezone", tz, TIMEZONE_FIELDS):
            return
        # bare zone objects print as themselves; empty records print nothing
        if not isinstance(tz, (Mapping, SimpleNamespace)):
            text = format_value(str(tz))
            if text is not None:
                self.field("Timezone", text)

    def print_conditions(self, title: str, conditions: Any) -> bool:
        lines = field_lines(conditions, CONDITION_FIELDS)
        sun = get(conditions, "sun")
        if not lines and not field_lines(sun, SUN_FIELDS):
            return False
        with self.section(title):
            for label, text in lines:
                self.field(label, text)
            self.print_sun(sun)
        return True

    def print_sun(self, sun: Any):
        self.block("Sun", sun, SUN_FIELDS)

    def print_forecast(self, forecast: Iterable[Any]):
        """One section per entry, in the order the library gave them."""
        for i, entry in enumerate(forecast, 1):
            if not self.print_conditions(f"Forecast {i}", entry):
                # keep numbering honest even for an empty entry
                self.line(f"{Colors.BOLD}Forecast {i}{Colors.RESET}")

    def print_info(self, result: Any):
        start = get(result, "start_at")
        end = get(result, "end_at")
        with self.section("Info"):
            self.field("Sources", ", ".join(self.config.sources))
            self.field("Units", self.config.units.value)
            for label, value in (("Started", start), ("Finished", end)):
                text = format_value(value)
                if text is not None:
                    self.field(label, text)
            if isinstance(start, datetime) and isinstance(end, datetime):
                self.field("Took", f"{(end - start).total_seconds():.2f}s")
            self.field("Version", f"barograph {__version__}")


def print_result(result: Any, query: str, config: Configuration, out: Optional[TextIO] = None):
    """Print a measurement result."""
    ResultPrinter(config, out).print_result(result, query)


def print_apology(query: str, config: Configuration, out: Optional[TextIO] = None):
    """Print the no-results message."""
    ResultPrinter(config, out).print_apology(query)
