"""
Binding to the weather-aggregation library.

barograph does not fetch weather itself. It calls one function,

    measure(query: str, configuration: Configuration) -> result or None

found either through the BAROGRAPH_MEASURE environment variable
("package.module:function") or through the first installed entry point in
the "barograph.measure" group.
"""

import importlib
import logging
import os
import time
from importlib.metadata import entry_points
from typing import Any, Callable, Optional

from .config import Configuration
from .errors import LibraryNotFoundError

logger = logging.getLogger(__name__)

ENV_VAR = "BAROGRAPH_MEASURE"
ENTRY_POINT_GROUP = "barograph.measure"

Measure = Callable[[str, Configuration], Any]

# Cached after the first lookup
_measure: Optional[Measure] = None


def load_callable(spec: str) -> Measure:
    """Import "package.module:function" and return the function."""
    module_path, sep, attr = spec.partition(":")
    if not sep or not module_path or not attr:
        raise LibraryNotFoundError(
            f"{ENV_VAR} must look like 'package.module:function', got '{spec}'"
        )
    try:
        module = importlib.import_module(module_path)
    except ImportError as e:
        raise LibraryNotFoundError(f"cannot import '{module_path}' from {ENV_VAR}: {e}") from e

    obj = module
    for part in attr.split("."):
        obj = getattr(obj, part, None)
        if obj is None:
            raise LibraryNotFoundError(f"'{module_path}' has no attribute '{attr}'")
    if not callable(obj):
        raise LibraryNotFoundError(f"{spec} is not callable")
    return obj


def find_measure() -> Measure:
    """Locate the library's measure function, environment first."""
    spec = os.environ.get(ENV_VAR, "").strip()
    if spec:
        logger.debug("Using %s=%s", ENV_VAR, spec)
        return load_callable(spec)

    for ep in entry_points(group=ENTRY_POINT_GROUP):
        logger.debug("Using entry point %s = %s", ep.name, ep.value)
        return ep.load()

    raise LibraryNotFoundError(
        "no weather library found. Install one that provides a "
        f"'{ENTRY_POINT_GROUP}' entry point, or set {ENV_VAR}=package.module:function"
    )


def get_measure() -> Measure:
    """find_measure(), loaded once per process."""
    global _measure
    if _measure is None:
        _measure = find_measure()
    return _measure


def reset():
    """Forget the cached measure function (for testing)."""
    global _measure
    _measure = None


def succeeded(result: Any) -> bool:
    """False when the library signalled that no source produced data."""
    if result is None:
        return False
    if isinstance(result, dict):
        return bool(result.get("success", True))
    return bool(getattr(result, "success", True))


def measure(query: str, config: Configuration, measure_fn: Optional[Measure] = None) -> Optional[Any]:
    """
    Run one measurement.

    Returns the library's result, or None when no source succeeded.
    Anything the library raises propagates unchanged.
    """
    fn = measure_fn or get_measure()
    logger.debug("Measuring '%s' with sources %s", query, ", ".join(config.sources))

    start = time.monotonic()
    result = fn(query, config)
    logger.debug("Library returned in %.2fs", time.monotonic() - start)

    if not succeeded(result):
        logger.debug("No source produced a result for '%s'", query)
        return None
    return result
