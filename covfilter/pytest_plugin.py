"""Pytest plugin that builds the session's coverage filter from the command line.

Register via the ``pytest11`` entry point; the plugin auto-registers once
covfilter is installed.  It constructs one :class:`~covfilter.filter.Filter`
per test session in ``pytest_configure`` and hands it to tests and
coverage collaborators through the session-scoped ``coverage_filter``
fixture.

Usage::

    pytest --covfilter-whitelist src
    pytest --covfilter-blacklist tests --covfilter-blacklist src/gen=GENERATED
    pytest --covfilter-strict --covfilter-whitelist src   # or COVFILTER_STRICT=1

``--covfilter-blacklist`` takes ``DIR`` or ``DIR=GROUP``; without a group
the directory goes to ``DEFAULT``.  The separator is ``=`` rather than ``:``
so Windows paths such as ``C:\\src`` keep their drive letter.  covfilter's own
modules always land in the ``COVFILTER`` group.
"""

from __future__ import annotations

from collections.abc import Sequence

import pytest

from covfilter._tracing import blacklist_self
from covfilter.common import DEFAULT_GROUP, DEFAULT_SUFFIX, PathNotFoundError, strict_from_env
from covfilter.filter import Filter

filter_key = pytest.StashKey[Filter]()


def pytest_addoption(parser: pytest.Parser) -> None:
    group = parser.getgroup("covfilter", "Coverage file filtering")
    group.addoption(
        "--covfilter-whitelist",
        action="append",
        default=[],
        metavar="DIR",
        help="Record coverage only for files under DIR (repeatable). "
        "Any whitelist entry switches the filter to whitelist mode.",
    )
    group.addoption(
        "--covfilter-blacklist",
        action="append",
        default=[],
        metavar="DIR[=GROUP]",
        help=f"Exclude files under DIR from coverage, in blacklist GROUP (default {DEFAULT_GROUP}; repeatable).",
    )
    group.addoption(
        "--covfilter-suffix",
        action="append",
        default=[],
        metavar="SUFFIX",
        help=f"File name suffix picked up from directories (repeatable, default {DEFAULT_SUFFIX}).",
    )
    group.addoption(
        "--covfilter-strict",
        action="store_true",
        default=False,
        help="Fail if a whitelisted or blacklisted directory does not exist. Also enabled by COVFILTER_STRICT=1.",
    )


def parse_blacklist_entry(entry: str) -> tuple[str, str]:
    """Split ``DIR=GROUP`` into ``(DIR, GROUP)``; a bare ``DIR`` maps to DEFAULT."""
    directory, sep, group = entry.rpartition("=")
    if not sep or not directory or not group:
        return entry, DEFAULT_GROUP
    return directory, group


def build_filter(
    whitelist: Sequence[str],
    blacklist: Sequence[str],
    suffixes: Sequence[str],
    strict: bool,
) -> Filter:
    """Construct a filter from plugin options."""
    coverage_filter = Filter(strict=strict)
    blacklist_self(coverage_filter)
    suffix = tuple(suffixes) or DEFAULT_SUFFIX
    for entry in blacklist:
        directory, group = parse_blacklist_entry(entry)
        coverage_filter.add_directory_to_blacklist(directory, suffix, "", group)
    for directory in whitelist:
        coverage_filter.add_directory_to_whitelist(directory, suffix)
    return coverage_filter


def pytest_configure(config: pytest.Config) -> None:
    strict = config.getoption("--covfilter-strict", default=False) or strict_from_env()
    try:
        coverage_filter = build_filter(
            config.getoption("--covfilter-whitelist", default=[]),
            config.getoption("--covfilter-blacklist", default=[]),
            config.getoption("--covfilter-suffix", default=[]),
            strict,
        )
    except PathNotFoundError as exc:
        raise pytest.UsageError(f"covfilter: {exc.filename} does not exist") from exc
    config.stash[filter_key] = coverage_filter


def pytest_report_header(config: pytest.Config) -> list[str] | None:
    coverage_filter = config.stash.get(filter_key, None)
    if coverage_filter is None:
        return None
    return [describe_filter(coverage_filter)]


def describe_filter(coverage_filter: Filter) -> str:
    """One-line summary shown in the pytest header."""
    whitelist = coverage_filter.get_whitelist()
    blacklist = coverage_filter.get_blacklist()
    strict = ", strict" if coverage_filter.strict else ""
    if whitelist:
        return f"covfilter: whitelist mode, {len(whitelist)} file(s){strict}"
    groups = ", ".join(f"{name}={len(paths)}" for name, paths in sorted(blacklist.items()))
    return f"covfilter: blacklist mode ({groups}){strict}"


@pytest.fixture(scope="session")
def coverage_filter(pytestconfig: pytest.Config) -> Filter:
    """The coverage filter configured for this test session."""
    return pytestconfig.stash[filter_key]
