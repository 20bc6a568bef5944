"""
API key file.

Keys live in ~/.barograph/keys.yaml as a two-level mapping:

    openweathermap:
      api_key: 0123abcd
    weatherapi:
      key: 4567efgh

Only sources that need a key have to appear. The file is never rewritten
once it exists; when it is missing and a key is needed, a template is
written for the user to fill in.
"""

import logging
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional

import yaml

from .config import SOURCES
from .errors import MissingKeysError

logger = logging.getLogger(__name__)

PLACEHOLDER = "PLACE_KEY_HERE"


class KeyFile:
    """Per-source credentials read from the user's key file."""

    DEFAULT_PATH = Path.home() / ".barograph" / "keys.yaml"

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path else self.DEFAULT_PATH
        self._keys: Dict[str, Dict[str, str]] = {}
        self._load()

    def _load(self):
        """Load keys from YAML, if the file exists."""
        if not self.path.exists():
            logger.debug("No key file at %s", self.path)
            return

        with open(self.path) as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError(f"{self.path}: expected a mapping of source -> keys")

        for source, values in data.items():
            if not isinstance(values, dict):
                raise ValueError(f"{self.path}: entry '{source}' must be a mapping")
            self._keys[str(source)] = {
                str(name): str(value)
                for name, value in values.items()
                if value is not None
            }
        logger.debug("Loaded keys for %s from %s", sorted(self._keys), self.path)

    @property
    def exists(self) -> bool:
        return self.path.exists()

    def get(self, source: str, name: str) -> Optional[str]:
        """Return a usable key, treating blanks and the placeholder as absent."""
        value = self._keys.get(source, {}).get(name)
        if not value or not value.strip() or value == PLACEHOLDER:
            return None
        return value

    def missing(self, sources: Iterable[str]) -> Dict[str, List[str]]:
        """Keys the given sources need but the file does not supply."""
        result = {}
        for source in sources:
            absent = [name for name in SOURCES[source].required_keys
                      if self.get(source, name) is None]
            if absent:
                result[source] = absent
        return result

    def keys_for(self, sources: Iterable[str]) -> Dict[str, Dict[str, str]]:
        """Usable keys for the given sources, ready for a Configuration."""
        result = {}
        for source in sources:
            values = {name: self.get(source, name)
                      for name in SOURCES[source].required_keys}
            values = {name: value for name, value in values.items() if value}
            if values:
                result[source] = values
        return result

    def require(self, sources: Iterable[str]) -> Dict[str, Dict[str, str]]:
        """
        Check that every key the sources need is present.

        Returns the keys when they are all there. Otherwise writes the
        template (only if there is no file yet) and raises MissingKeysError.
        """
        sources = list(sources)
        missing = self.missing(sources)
        if not missing:
            return self.keys_for(sources)

        created = False
        if not self.exists:
            self.write_template()
            created = True
        raise MissingKeysError(self.path, missing, created=created)

    def write_template(self, sources: Optional[Iterable[str]] = None):
        """Write a key file with placeholders for every keyed source."""
        wanted = list(sources) if sources is not None else list(SOURCES)
        template = template_for(wanted)

        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w") as f:
            f.write("# barograph API keys: replace each placeholder with your key\n")
            yaml.safe_dump(template, f, default_flow_style=False, sort_keys=False)
        logger.info("Wrote key file template to %s", self.path)


def template_for(sources: Iterable[str]) -> Mapping[str, Dict[str, str]]:
    """Placeholder entries for the sources that take keys."""
    return {
        source: {name: PLACEHOLDER for name in SOURCES[source].required_keys}
        for source in sources
        if SOURCES[source].required_keys
    }
