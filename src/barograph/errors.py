"""Errors barograph raises itself. Library failures are not wrapped."""

from pathlib import Path
from typing import Dict, List


class BarographError(Exception):
    """Base class for conditions the CLI reports and exits on."""


class MissingKeysError(BarographError):
    """A selected source needs credentials the key file does not hold."""

    def __init__(self, path: Path, missing: Dict[str, List[str]], created: bool = False):
        self.path = path
        self.missing = missing
        self.created = created
        names = ", ".join(
            f"{source}.{key}" for source, keys in missing.items() for key in keys
        )
        super().__init__(f"missing keys in {path}: {names}")


class LibraryNotFoundError(BarographError):
    """No weather library could be located."""
