"""
covfilter: blacklist/whitelist filtering of source files for code coverage.

Filter (the decision point)::

    from covfilter.filter import Filter

    coverage_filter = Filter()
    coverage_filter.add_directory_to_blacklist("tests")
    coverage_filter.is_filtered("tests/test_app.py")   # True

Errors::

    from covfilter.common import PathNotFoundError, InvalidArgumentError, CanonicalizationError

Pytest integration (auto-registered)::

    pytest --covfilter-whitelist src
"""

__version__ = "0.1.0"
