import logging
from datetime import timedelta, timezone

import pytest

from timeline_renamer.config import RenamerSettings
from timeline_renamer.l10n import Messages

UTC_PLUS_3 = timezone(timedelta(hours=3))


class FakeReader:
    """Metadata session stand-in: canned tag mappings keyed by file name."""

    def __init__(self, tags_by_name=None):
        self.tags_by_name = tags_by_name or {}
        self.calls = []
        self.close_calls = 0

    def read(self, path):
        self.calls.append(path)
        return dict(self.tags_by_name.get(path.name, {}))

    def close(self):
        self.close_calls += 1


@pytest.fixture
def local_zone():
    return UTC_PLUS_3


@pytest.fixture
def settings():
    """Default tables without the post-run deletions."""
    return RenamerSettings(delete_on_complete=())


@pytest.fixture
def messages():
    return Messages('en')


@pytest.fixture
def fake_reader():
    """Returns a factory building FakeReader instances."""
    return FakeReader


@pytest.fixture
def restore_logging():
    """Puts the root logger back after tests that call setup_logging."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    try:
        yield
    finally:
        for h in root.handlers:
            if h not in handlers:
                h.close()
        root.handlers[:] = handlers
        root.setLevel(level)
