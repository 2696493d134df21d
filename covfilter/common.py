"""Shared constants and error types for covfilter."""

from __future__ import annotations

import errno
import os
from collections.abc import Mapping

# Blacklist group that always exists and that queries consult by default.
DEFAULT_GROUP = "DEFAULT"

DEFAULT_SUFFIX = ".py"

# Substrings marking code that has no file of its own on disk.
SYNTHETIC_MARKERS: tuple[str, ...] = (
    "eval()'d code",
    "runtime-created function",
    "assert code",
    "regexp code",
)

# Environment variable that switches plugin-built filters into strict mode
COVFILTER_STRICT_ENV = "COVFILTER_STRICT"

_TRUTHY = frozenset({"1", "true", "yes", "on"})


class FilterError(Exception):
    """Base class for every error raised by covfilter."""


class PathNotFoundError(FilterError, FileNotFoundError):
    """Raised in strict mode when a file or directory does not exist.

    ``exc.filename`` holds the path exactly as the caller supplied it.
    """

    def __init__(self, path: str) -> None:
        super().__init__(errno.ENOENT, "does not exist", path)


class InvalidArgumentError(FilterError, TypeError):
    """Raised when a flag is not a bool or ``groups`` is a bare string."""


class CanonicalizationError(FilterError, OSError):
    """Raised when a queried path cannot be resolved against the filesystem."""


def strict_from_env(environ: Mapping[str, str] | None = None) -> bool:
    """Return True if ``COVFILTER_STRICT`` asks for strict mode."""
    if environ is None:
        environ = os.environ
    return environ.get(COVFILTER_STRICT_ENV, "").strip().lower() in _TRUTHY
