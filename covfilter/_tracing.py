"""Per-file recording decision for coverage tracers.

A tracer sees ``code.co_filename`` for every frame.  Before asking the
filter, it has to drop locations that are not files at all: the markers
recognised by :meth:`Filter.is_file` and Python's own pseudo-filenames such
as ``<string>``, ``<stdin>`` or ``<frozen importlib._bootstrap>``.  This
module keeps that rule in one place.
"""

from __future__ import annotations

import os
from collections.abc import Iterable

from covfilter.common import DEFAULT_GROUP, DEFAULT_SUFFIX
from covfilter.filter import Filter

# Group holding covfilter's own sources
SELF_GROUP = "COVFILTER"

# Skip the entire covfilter package directory
COVFILTER_DIR = os.path.dirname(os.path.abspath(__file__))


def is_pseudo_filename(filename: str) -> bool:
    """Return True for names like ``<string>`` that Python gives exec'd code."""
    return filename.startswith("<") and filename.endswith(">")


def should_record_file(
    coverage_filter: Filter,
    filename: str,
    groups: Iterable[str] = (DEFAULT_GROUP, SELF_GROUP),
) -> bool:
    """Return True if coverage for *filename* should be recorded.

    Synthetic locations are rejected without touching the filesystem.  For
    real paths the filter decides; a path that cannot be resolved raises
    :class:`~covfilter.common.CanonicalizationError`.
    """
    if not filename or is_pseudo_filename(filename):
        return False
    if not Filter.is_file(filename):
        return False
    return not coverage_filter.is_filtered(filename, groups)


def blacklist_package(coverage_filter: Filter, package_dir: str, group: str) -> None:
    """Blacklist every Python source file of *package_dir* under *group*."""
    coverage_filter.add_directory_to_blacklist(package_dir, DEFAULT_SUFFIX, "", group)


def blacklist_self(coverage_filter: Filter) -> None:
    """Keep covfilter's own modules out of coverage data (group ``COVFILTER``)."""
    blacklist_package(coverage_filter, COVFILTER_DIR, SELF_GROUP)
