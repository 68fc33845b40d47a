"""
Custom exception hierarchy for the timeline media renamer.

Per-file failures end up as skip outcomes; only the naming step signals one
by raising.
"""


class TimelineRenamerError(Exception):
    """Base exception for all timeline renamer errors."""
    pass


class SuffixExhaustedError(TimelineRenamerError):
    """Raised when every _N suffix up to the configured limit is taken."""

    def __init__(self, path, attempts: int):
        super().__init__(f"No free name for {path} after {attempts} attempts")
        self.path = path
        self.attempts = attempts
