"""Path canonicalization shared by every filter operation.

Stored paths and queried paths must compare equal whenever they denote the
same file, so both go through :func:`canonicalize`.

Two policies are supported:

- ``must_exist=True``: the path is fully resolved against the filesystem
  (``os.path.realpath(..., strict=True)``).  A path that does not resolve
  raises :class:`~covfilter.common.CanonicalizationError`.
- ``must_exist=False``: best effort.  The path is made absolute, symlinks in
  the leading components that do exist are resolved, and the remainder is
  normalized lexically.  This never touches anything beyond ``lstat`` and
  never fails for a missing path.
"""

from __future__ import annotations

import os

from covfilter.common import CanonicalizationError

StrPath = str | os.PathLike[str]


def canonicalize(path: StrPath, *, must_exist: bool = False) -> str:
    """Return the canonical absolute form of *path*."""
    raw = os.fspath(path)
    absolute = os.path.abspath(raw)
    if not must_exist:
        return os.path.realpath(absolute)
    try:
        return os.path.realpath(absolute, strict=True)
    except OSError as exc:
        raise CanonicalizationError(exc.errno, exc.strerror, raw) from exc


def exists(path: StrPath) -> bool:
    """Existence check used by strict mode (follows symlinks)."""
    return os.path.exists(os.fspath(path))
