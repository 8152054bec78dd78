"""
Shared pytest fixtures for query-filter tests.
"""

import os
import sys
from pathlib import Path

import pytest

# filter_server builds its app from these at import time
for _name in ("QUERY_FILTER_PARAMETER", "QUERY_FILTER_ALLOW", "QUERY_FILTER_DENY"):
    os.environ.pop(_name, None)

# Add parent directory to path so filter_server is importable
sys.path.insert(0, str(Path(__file__).parent.parent))

from query_filter.log_manager import configure_logging


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    """Keep loggers file-less regardless of the developer's environment."""
    monkeypatch.delenv('QUERY_FILTER_LOG_DIR', raising=False)
    monkeypatch.delenv('QUERY_FILTER_DEBUG', raising=False)
    configure_logging()
    yield
    configure_logging()


@pytest.fixture
def or_filter():
    """A filter using only default operators."""
    return {"$or": [{"a": 1}, {"a": {"$gte": 2}}]}


class Continuation:
    """Records how a middleware continuation was invoked."""

    def __init__(self):
        self.calls = []

    def __call__(self, *args):
        self.calls.append(args)

    @property
    def error(self):
        assert len(self.calls) == 1
        return self.calls[0][0] if self.calls[0] else None


@pytest.fixture
def next_():
    return Continuation()
