"""
Shared fixtures for covfilter tests.

``source_tree`` lays out a small project on disk::

    project/
        app/
            __init__.py
            core.py
            test_core.py
            notes.txt
            sub/
                helpers.py
        tests/
            test_app.py
"""

import threading
from pathlib import Path

import pytest

from covfilter.filter import Filter, reset_instance


@pytest.fixture(autouse=True)
def _reset_shared_filter():
    """Every test starts without a shared filter instance."""
    reset_instance()
    yield
    reset_instance()


@pytest.fixture
def source_tree(tmp_path: Path) -> Path:
    root = tmp_path / "project"
    files = [
        "app/__init__.py",
        "app/core.py",
        "app/test_core.py",
        "app/notes.txt",
        "app/sub/helpers.py",
        "tests/test_app.py",
    ]
    for rel in files:
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("# placeholder\n")
    return root


@pytest.fixture
def empty_filter() -> Filter:
    return Filter()


@pytest.fixture(autouse=True)
def _check_thread_cleanup(request):
    """Fail tests that leave worker threads running.

    Concurrency tests hammer a shared filter from several threads; every one
    of them must be joined before the test ends.
    """
    initial_threads = set(threading.enumerate())

    yield

    main_thread = threading.main_thread()
    alive_threads = [
        t for t in set(threading.enumerate()) - initial_threads if t is not main_thread and t.is_alive()
    ]
    if alive_threads:
        thread_info = ", ".join(
            f"{t.name} ({'daemon' if t.daemon else 'NON-DAEMON'}, ident={t.ident})" for t in alive_threads
        )
        pytest.fail(
            f"Test {request.node.nodeid} left {len(alive_threads)} thread(s) running: {thread_info}. "
            f"All threads must be joined before test completion."
        )
