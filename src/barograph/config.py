"""
Configuration handed to the weather library.

One Configuration is built per invocation from the defaults below plus
whatever flags were given. It is frozen once built.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple


class Units(str, Enum):
    """Measurement system the library should report in."""
    METRIC = "metric"
    IMPERIAL = "imperial"


@dataclass(frozen=True)
class SourceSpec:
    """A weather source the CLI knows how to enable."""
    name: str
    flag: str
    description: str
    required_keys: Tuple[str, ...] = ()


# Order here is the order sources are listed in --help
SOURCES: Dict[str, SourceSpec] = {
    "open_meteo": SourceSpec(
        name="open_meteo",
        flag="--open-meteo",
        description="Open-Meteo (default, no key needed)",
    ),
    "met_no": SourceSpec(
        name="met_no",
        flag="--met-no",
        description="MET Norway (no key needed)",
    ),
    "openweathermap": SourceSpec(
        name="openweathermap",
        flag="--openweathermap",
        description="OpenWeatherMap (needs api_key)",
        required_keys=("api_key",),
    ),
    "weatherapi": SourceSpec(
        name="weatherapi",
        flag="--weatherapi",
        description="WeatherAPI.com (needs key)",
        required_keys=("key",),
    ),
}

DEFAULT_SOURCE = "open_meteo"
DEFAULT_TIMEOUT = 15
DEFAULT_WET_THRESHOLD = 50
DEFAULT_WINDY_THRESHOLD = 10.0


def dedupe_sources(names: Iterable[str]) -> Tuple[str, ...]:
    """Drop repeated source names, keeping first-seen order."""
    seen = []
    for name in names:
        if name not in seen:
            seen.append(name)
    return tuple(seen)


@dataclass(frozen=True)
class Configuration:
    """Resolved options for a single measurement."""
    units: Units = Units.METRIC
    timeout: int = DEFAULT_TIMEOUT
    sources: Tuple[str, ...] = (DEFAULT_SOURCE,)
    verbose: bool = False
    wet_threshold: int = DEFAULT_WET_THRESHOLD
    windy_threshold: float = DEFAULT_WINDY_THRESHOLD
    at: Optional[datetime] = None
    force_timezone: bool = False
    keys: Mapping[str, Mapping[str, str]] = field(default_factory=dict)

    def __post_init__(self):
        unknown = [name for name in self.sources if name not in SOURCES]
        if unknown:
            raise ValueError(f"unknown source(s): {', '.join(unknown)}")
        if not self.sources:
            raise ValueError("at least one source must be enabled")

        object.__setattr__(self, "units", Units(self.units))
        object.__setattr__(self, "sources", dedupe_sources(self.sources))
        object.__setattr__(self, "keys", MappingProxyType({
            source: MappingProxyType(dict(values))
            for source, values in self.keys.items()
        }))

    @property
    def metric(self) -> bool:
        return self.units is Units.METRIC

    def key_for(self, source: str, name: str) -> Optional[str]:
        """Credential `name` for `source`, or None."""
        return self.keys.get(source, {}).get(name)

    def to_dict(self) -> Dict[str, Any]:
        """Plain-data form, for libraries that take a mapping."""
        return {
            "units": self.units.value,
            "timeout": self.timeout,
            "sources": list(self.sources),
            "verbose": self.verbose,
            "wet_threshold": self.wet_threshold,
            "windy_threshold": self.windy_threshold,
            "at": self.at.isoformat() if self.at else None,
            "force_timezone": self.force_timezone,
            "keys": {source: dict(values) for source, values in self.keys.items()},
        }
