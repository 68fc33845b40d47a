"""
Run transcript: banners, one line per processed file and the closing summary.

Every line goes through the logging module, so the console and the optional
log file receive the same text. Colors are added by ColorFormatter on the
console handler only.
"""
import logging
from pathlib import Path
from typing import Optional

from . import l10n
from .l10n import Messages
from .models import (
    RenameOutcome, RunStats,
    RENAMED, SKIPPED_UNSUPPORTED, SKIPPED_NO_DATE, SKIPPED_ALREADY_NAMED,
    SKIPPED_EXHAUSTED, FAILED_RENAME,
)

ANSI_COLORS = {
    'cyan': '\x1b[96m',
    'green': '\x1b[92m',
    'yellow': '\x1b[93m',
    'red': '\x1b[91m',
    'magenta': '\x1b[95m',
}
ANSI_RESET = '\x1b[0m'

LEVEL_COLORS = {
    logging.WARNING: 'yellow',
    logging.ERROR: 'red',
    logging.CRITICAL: 'red',
}

RULE = '-' * 100

HEADER_BANNER = """\
╔═══════════════════════════════╗
║     Timeline Media Renamer    ║
╚═══════════════════════════════╝"""

FOOTER_BANNER = """\
╔═══════════════════════════════╗
║      Thank You For Using      ║
║    Timeline Media Renamer     ║
╚═══════════════════════════════╝"""

# outcome status -> (level, color, message key)
OUTCOME_LINES = {
    RENAMED: (logging.INFO, 'green', l10n.RENAMED),
    SKIPPED_UNSUPPORTED: (logging.WARNING, 'yellow', l10n.UNSUPPORTED_EXT),
    SKIPPED_NO_DATE: (logging.ERROR, 'red', l10n.MISSING_DATE),
    SKIPPED_ALREADY_NAMED: (logging.WARNING, 'yellow', l10n.ALREADY_RENAMED),
    SKIPPED_EXHAUSTED: (logging.ERROR, 'red', l10n.SUFFIX_EXHAUSTED),
    FAILED_RENAME: (logging.ERROR, 'red', l10n.ERROR_RENAMING),
}


class ColorFormatter(logging.Formatter):
    """Wraps the message in an ANSI color taken from record.color or the level."""

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        color = getattr(record, 'color', None) or LEVEL_COLORS.get(record.levelno)
        if not color or not text:
            return text
        return f"{ANSI_COLORS[color]}{text}{ANSI_RESET}"


def format_elapsed(ms: float) -> str:
    """
    Formats a duration adaptively:
    '01.02.03:004 (h.m.s:ms)', '02.03:004 (m.s:ms)', '3:004 (s:ms)', '4 (ms)'.
    """
    ms = int(ms)
    hours, ms = divmod(ms, 3_600_000)
    minutes, ms = divmod(ms, 60_000)
    seconds, milliseconds = divmod(ms, 1000)

    if hours:
        return f"{hours:02d}.{minutes:02d}.{seconds:02d}:{milliseconds:03d} (h.m.s:ms)"
    if minutes:
        return f"{minutes:02d}.{seconds:02d}:{milliseconds:03d} (m.s:ms)"
    if seconds:
        return f"{seconds}:{milliseconds:03d} (s:ms)"
    return f"{milliseconds} (ms)"


class RunReport:
    def __init__(self, messages: Optional[Messages] = None):
        self.messages = messages or Messages()

    def header(self, root: Path):
        logging.info(HEADER_BANNER, extra={'color': 'magenta'})
        logging.info('')
        logging.info(f"{self.messages.get(l10n.SCANNED_DIR)}: {root}", extra={'color': 'cyan'})
        logging.info(RULE)

    def outcome(self, outcome: RenameOutcome):
        level, color, key = OUTCOME_LINES[outcome.status]
        line = f"{self.messages.get(key)}: {outcome.source}"
        if outcome.status == RENAMED:
            line = f"{line} -> {outcome.target.name}"
        elif outcome.error is not None:
            line = f"{line}:\n{outcome.error}"
        logging.log(level, line, extra={'color': color})

    def fatal(self, error: BaseException):
        logging.error(f"{self.messages.get(l10n.FATAL_ERROR)}: {error}", exc_info=error)

    def summary(self, stats: RunStats, elapsed_ms: float):
        logging.info(RULE)
        logging.info(f"{self.messages.get(l10n.RENAMED)}: {stats.renamed}", extra={'color': 'cyan'})
        logging.info(f"{self.messages.get(l10n.SKIPPED)}: {stats.skipped}", extra={'color': 'cyan'})
        logging.info(f"{self.messages.get(l10n.OPERATION_TIME)}: {format_elapsed(elapsed_ms)}",
                     extra={'color': 'cyan'})
        logging.info(RULE)

    def footer(self):
        logging.info('')
        logging.info(FOOTER_BANNER, extra={'color': 'magenta'})
        logging.info('')
