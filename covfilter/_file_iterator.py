"""Recursive file enumeration for directory-level filter registrations.

``iter_files(directory, suffix, prefix)`` yields the absolute path of every
regular file beneath *directory* whose name ends with one of the suffixes and
starts with one of the prefixes.  The filter canonicalizes each result
itself; this module only walks.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Iterator

from covfilter._paths import StrPath

logger = logging.getLogger(__name__)

NameFilter = str | Iterable[str]


def _as_tuple(value: NameFilter) -> tuple[str, ...]:
    if isinstance(value, str):
        return (value,)
    return tuple(value)


def _matches(name: str, suffixes: tuple[str, ...], prefixes: tuple[str, ...]) -> bool:
    # An empty tuple or an empty string accepts everything.
    if suffixes and not name.endswith(suffixes):
        return False
    if prefixes and not name.startswith(prefixes):
        return False
    return True


def iter_files(directory: StrPath, suffix: NameFilter = "", prefix: NameFilter = "") -> Iterator[str]:
    """Yield matching files below *directory* in a stable, sorted order.

    A missing directory yields nothing.  Symlinked directories are not
    descended into, which keeps the walk finite on cyclic trees; symlinked
    files are yielded and later resolved by canonicalization.
    """
    root = os.path.abspath(os.fspath(directory))
    suffixes = _as_tuple(suffix)
    prefixes = _as_tuple(prefix)

    if not os.path.isdir(root):
        logger.debug("%s is not a directory; nothing to enumerate", root)
        return

    for dirpath, dirnames, filenames in os.walk(root):
        dirnames.sort()
        for name in sorted(filenames):
            if _matches(name, suffixes, prefixes):
                yield os.path.join(dirpath, name)


def list_files(directory: StrPath, suffix: NameFilter = "", prefix: NameFilter = "") -> list[str]:
    """Eager form of :func:`iter_files`."""
    files = list(iter_files(directory, suffix, prefix))
    logger.debug("enumerated %d file(s) under %s", len(files), directory)
    return files
