"""
Blacklist/whitelist filter deciding which source files get coverage recorded.

The filter holds two collections of canonical absolute paths:

- a **blacklist** split into named groups (``"DEFAULT"`` always exists), and
- a flat **whitelist**.

While the whitelist is empty the filter runs in *blacklist mode*: a file is
filtered when it belongs to one of the queried groups.  As soon as the
whitelist holds an entry the filter switches to *whitelist mode*: every file
that is not whitelisted is filtered, and blacklist groups are ignored unless
the caller passes ``ignore_whitelist=True``.

Typical setup::

    from covfilter.filter import Filter

    coverage_filter = Filter(strict=True)
    coverage_filter.add_directory_to_whitelist("src")
    coverage_filter.add_directory_to_blacklist("src/generated", group="GENERATED")

    if not coverage_filter.is_filtered(code.co_filename):
        record(...)

All operations on one instance are serialized by an internal lock, so a
single filter can be shared by concurrent collection workers.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable

from covfilter._file_iterator import NameFilter, list_files
from covfilter._paths import StrPath, canonicalize, exists
from covfilter.common import (
    DEFAULT_GROUP,
    DEFAULT_SUFFIX,
    SYNTHETIC_MARKERS,
    InvalidArgumentError,
    PathNotFoundError,
)

logger = logging.getLogger(__name__)


class Filter:
    """Grouped blacklist plus whitelist of canonical source file paths."""

    def __init__(self, strict: bool = False) -> None:
        self._lock = threading.Lock()
        # group name -> canonical paths
        self._blacklist: dict[str, set[str]] = {DEFAULT_GROUP: set()}
        self._whitelist: set[str] = set()
        self._strict = False
        self.set_strict(strict)

    def __repr__(self) -> str:
        with self._lock:
            groups = {name: len(paths) for name, paths in self._blacklist.items()}
            return f"Filter(strict={self._strict!r}, blacklist={groups!r}, whitelist={len(self._whitelist)})"

    # -- configuration -----------------------------------------------------

    @property
    def strict(self) -> bool:
        """Whether add/remove operations check that paths exist first."""
        return self._strict

    @strict.setter
    def strict(self, flag: bool) -> None:
        self.set_strict(flag)

    def set_strict(self, flag: bool) -> None:
        """Set whether ``{add,remove}_*`` check that the directory or file exists."""
        if not isinstance(flag, bool):
            raise InvalidArgumentError(f"strict flag must be a bool, not {type(flag).__name__}")
        self._strict = flag

    def _check_exists(self, path: StrPath) -> None:
        if self._strict and not exists(path):
            raise PathNotFoundError(str(path))

    # -- blacklist ---------------------------------------------------------

    def add_file_to_blacklist(self, filename: StrPath, group: str = DEFAULT_GROUP) -> None:
        """Add a file to the blacklist *group*, creating the group if needed."""
        self._check_exists(filename)
        path = canonicalize(filename)
        with self._lock:
            self._blacklist.setdefault(group, set()).add(path)
        logger.debug("blacklisted %s in group %s", path, group)

    def add_directory_to_blacklist(
        self,
        directory: StrPath,
        suffix: NameFilter = DEFAULT_SUFFIX,
        prefix: NameFilter = "",
        group: str = DEFAULT_GROUP,
    ) -> None:
        """Recursively add every matching file under *directory* to *group*."""
        self._check_exists(directory)
        for filename in list_files(directory, suffix, prefix):
            self.add_file_to_blacklist(filename, group)

    def remove_file_from_blacklist(self, filename: StrPath, group: str = DEFAULT_GROUP) -> None:
        """Remove a file from the blacklist *group*; unknown entries are ignored."""
        self._check_exists(filename)
        path = canonicalize(filename)
        with self._lock:
            paths = self._blacklist.get(group)
            if paths is not None:
                paths.discard(path)

    def remove_directory_from_blacklist(
        self,
        directory: StrPath,
        suffix: NameFilter = DEFAULT_SUFFIX,
        prefix: NameFilter = "",
        group: str = DEFAULT_GROUP,
    ) -> None:
        """Recursively remove every matching file under *directory* from *group*."""
        self._check_exists(directory)
        for filename in list_files(directory, suffix, prefix):
            self.remove_file_from_blacklist(filename, group)

    # -- whitelist ---------------------------------------------------------

    def add_file_to_whitelist(self, filename: StrPath) -> None:
        """Add a file to the whitelist.

        While the whitelist is empty (the default) blacklisting is used; once
        it holds an entry, whitelisting is used.
        """
        self._check_exists(filename)
        path = canonicalize(filename)
        with self._lock:
            self._whitelist.add(path)
        logger.debug("whitelisted %s", path)

    def add_directory_to_whitelist(
        self,
        directory: StrPath,
        suffix: NameFilter = DEFAULT_SUFFIX,
        prefix: NameFilter = "",
    ) -> None:
        """Recursively add every matching file under *directory* to the whitelist."""
        self._check_exists(directory)
        for filename in list_files(directory, suffix, prefix):
            self.add_file_to_whitelist(filename)

    def remove_file_from_whitelist(self, filename: StrPath) -> None:
        """Remove a file from the whitelist; unknown entries are ignored."""
        self._check_exists(filename)
        path = canonicalize(filename)
        with self._lock:
            self._whitelist.discard(path)

    def remove_directory_from_whitelist(
        self,
        directory: StrPath,
        suffix: NameFilter = DEFAULT_SUFFIX,
        prefix: NameFilter = "",
    ) -> None:
        """Recursively remove every matching file under *directory* from the whitelist."""
        self._check_exists(directory)
        for filename in list_files(directory, suffix, prefix):
            self.remove_file_from_whitelist(filename)

    # -- queries -----------------------------------------------------------

    @staticmethod
    def is_file(filename: str) -> bool:
        """Return False for synthetic code locations (eval, assert, ...)."""
        return not any(marker in filename for marker in SYNTHETIC_MARKERS)

    def is_filtered(
        self,
        filename: StrPath,
        groups: Iterable[str] = (DEFAULT_GROUP,),
        ignore_whitelist: bool = False,
    ) -> bool:
        """Return True if coverage for *filename* should not be recorded.

        Args:
            filename: Path of the source file.  It must exist; a path that
                cannot be resolved raises ``CanonicalizationError``.
            groups: Blacklist groups to consult in blacklist mode.  Unknown
                names contribute nothing.  Ignored in whitelist mode.
            ignore_whitelist: Consult the blacklist even when the whitelist
                is non-empty.
        """
        if not isinstance(ignore_whitelist, bool):
            raise InvalidArgumentError(f"ignore_whitelist must be a bool, not {type(ignore_whitelist).__name__}")
        if isinstance(groups, str):
            raise InvalidArgumentError("groups must be an iterable of group names, not a single string")

        path = canonicalize(filename, must_exist=True)

        with self._lock:
            if not ignore_whitelist and self._whitelist:
                return path not in self._whitelist

            for group in groups:
                paths = self._blacklist.get(group)
                if paths is not None and path in paths:
                    return True
            return False

    def get_blacklist(self) -> dict[str, frozenset[str]]:
        """Snapshot of the blacklist, keyed by group name."""
        with self._lock:
            return {group: frozenset(paths) for group, paths in self._blacklist.items()}

    def get_whitelist(self) -> frozenset[str]:
        """Snapshot of the whitelist."""
        with self._lock:
            return frozenset(self._whitelist)

    def has_whitelist(self) -> bool:
        """Return True if the filter is in whitelist mode."""
        with self._lock:
            return bool(self._whitelist)


# ---------------------------------------------------------------------------
# Shared default instance
# ---------------------------------------------------------------------------

_instance: Filter | None = None
_instance_lock = threading.Lock()


def get_instance() -> Filter:
    """Return the process-wide shared filter, creating it on first use.

    Prefer constructing a :class:`Filter` and passing it to collaborators;
    this accessor exists for the outermost composition point only.
    """
    global _instance  # noqa: PLW0603
    with _instance_lock:
        if _instance is None:
            _instance = Filter()
        return _instance


def reset_instance() -> None:
    """Drop the shared filter so the next :func:`get_instance` builds a new one."""
    global _instance  # noqa: PLW0603
    with _instance_lock:
        _instance = None
