import logging
from pathlib import Path

import pytest

from timeline_renamer.l10n import Messages
from timeline_renamer.models import (
    RenameOutcome, RunStats, RENAMED, SKIPPED_NO_DATE, FAILED_RENAME, SKIPPED_UNSUPPORTED,
)
from timeline_renamer.reporting import ColorFormatter, RunReport, format_elapsed, ANSI_RESET


@pytest.mark.parametrize('ms, expected', [
    (0, "0 (ms)"),
    (42.9, "42 (ms)"),
    (1005, "1:005 (s:ms)"),
    (61_005, "01.01:005 (m.s:ms)"),
    (3_723_004, "01.02.03:004 (h.m.s:ms)"),
])
def test_format_elapsed(ms, expected):
    assert format_elapsed(ms) == expected


def make_record(msg, level=logging.INFO, color=None):
    record = logging.LogRecord("test", level, __file__, 1, msg, None, None)
    if color:
        record.color = color
    return record


def test_color_formatter():
    fmt = ColorFormatter("%(message)s")

    assert fmt.format(make_record("plain")) == "plain"
    assert fmt.format(make_record("ok", color='green')) == f"\x1b[92mok{ANSI_RESET}"
    assert fmt.format(make_record("careful", level=logging.WARNING)) == f"\x1b[93mcareful{ANSI_RESET}"
    assert fmt.format(make_record("", color='cyan')) == ""


def test_outcome_lines(caplog, messages):
    caplog.set_level(logging.INFO)
    report = RunReport(messages)

    report.outcome(RenameOutcome(RENAMED, Path("/media/a.jpg"), Path("/media/IMG_2024-01-01_00-00-00.jpg")))
    report.outcome(RenameOutcome(SKIPPED_NO_DATE, Path("/media/b.jpg")))
    report.outcome(RenameOutcome(FAILED_RENAME, Path("/media/c.jpg"), error=PermissionError("denied")))

    lines = [r.getMessage() for r in caplog.records]
    assert lines[0] == f"Renamed: {Path('/media/a.jpg')} -> IMG_2024-01-01_00-00-00.jpg"
    assert lines[1] == f"Failed to extract date: {Path('/media/b.jpg')}"
    assert lines[2] == f"Error renaming: {Path('/media/c.jpg')}:\ndenied"
    assert [r.levelno for r in caplog.records] == [logging.INFO, logging.ERROR, logging.ERROR]
    assert caplog.records[0].color == 'green'


def test_summary_in_russian(caplog):
    caplog.set_level(logging.INFO)
    stats = RunStats()
    stats.record(RenameOutcome(RENAMED, Path("a.jpg"), Path("b.jpg")))
    stats.record(RenameOutcome(SKIPPED_UNSUPPORTED, Path("c.txt")))

    RunReport(Messages('ru')).summary(stats, 1005)

    assert "Переименовано: 1" in caplog.text
    assert "Пропущено: 1" in caplog.text
    assert "Время выполнения: 1:005 (s:ms)" in caplog.text


def test_header_names_root(caplog, messages, tmp_path):
    caplog.set_level(logging.INFO)

    RunReport(messages).header(tmp_path)

    assert f"Scanned Directory: {tmp_path}" in caplog.text
    assert "Timeline Media Renamer" in caplog.text
