import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone, UTC
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from . import config

# Trailing "+HH:MM" / "-HH:MM" on a raw date string
OFFSET_SUFFIX = re.compile(r'[+-]\d{2}:\d{2}$')

UTC_ZONE_NAME = 'UTC'


@dataclass(frozen=True)
class ExifDateTime:
    """
    A date value read from a metadata tag, normalized into calendar fields.

    tz_offset_minutes / zone_name describe the zone the fields are expressed in.
    inferred_zone is True when the zone was guessed (companion tag, container
    convention or machine zone) rather than written next to the value.
    """
    year: int
    month: int
    day: int
    hour: int = 0
    minute: int = 0
    second: int = 0
    millisecond: Optional[int] = None
    tz_offset_minutes: Optional[int] = None
    zone_name: Optional[str] = None
    raw_value: str = ''
    inferred_zone: bool = False

    def has_explicit_offset(self) -> bool:
        return (
            bool(OFFSET_SUFFIX.search(self.raw_value))
            or bool(self.tz_offset_minutes)
            or (self.zone_name is not None and self.zone_name != UTC_ZONE_NAME)
        )

    def tzinfo(self):
        """Zone for the calendar fields, or None when nothing is known."""
        if self.zone_name == UTC_ZONE_NAME:
            return UTC
        if self.zone_name:
            try:
                return ZoneInfo(self.zone_name)
            except (ZoneInfoNotFoundError, ValueError):
                pass
        if self.tz_offset_minutes is not None:
            return timezone(timedelta(minutes=self.tz_offset_minutes))
        return None

    def to_datetime(self) -> Optional[datetime]:
        try:
            return datetime(
                self.year, self.month, self.day,
                self.hour, self.minute, self.second,
                (self.millisecond or 0) * 1000,
                tzinfo=self.tzinfo(),
            )
        except ValueError:
            return None


@dataclass(frozen=True)
class ResolvedCaptureMoment:
    """Calendar time used for the new file name. No zone is kept."""
    year: int
    month: int
    day: int
    hour: int
    minute: int
    second: int

    @classmethod
    def from_datetime(cls, dt: datetime) -> 'ResolvedCaptureMoment':
        return cls(dt.year, dt.month, dt.day, dt.hour, dt.minute, dt.second)

    def to_datetime(self) -> datetime:
        return datetime(self.year, self.month, self.day, self.hour, self.minute, self.second)

    def format(self) -> str:
        return self.to_datetime().strftime(config.TARGET_DATE_FORMAT)


# --- Rename outcomes ---
RENAMED = 'renamed'
SKIPPED_UNSUPPORTED = 'skipped_unsupported'
SKIPPED_NO_DATE = 'skipped_no_date'
SKIPPED_ALREADY_NAMED = 'skipped_already_named'
SKIPPED_EXHAUSTED = 'skipped_exhausted'
FAILED_RENAME = 'failed_rename'


@dataclass(frozen=True)
class RenameOutcome:
    status: str             # one of the constants above
    source: Path
    target: Optional[Path] = None
    error: Optional[BaseException] = None

    @property
    def is_renamed(self) -> bool:
        return self.status == RENAMED


@dataclass
class RunStats:
    """
    Run-scoped counters for the summary.

    outcomes keeps one small record per walked file, alongside the path list
    the driver already builds, so callers can inspect what happened per file.
    """
    renamed: int = 0
    skipped: int = 0
    outcomes: list = field(default_factory=list)

    def record(self, outcome: RenameOutcome):
        self.outcomes.append(outcome)
        if outcome.is_renamed:
            self.renamed += 1
        else:
            self.skipped += 1
