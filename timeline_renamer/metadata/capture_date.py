"""
Capture date resolution.

Picks the first usable date tag in priority order (local tags before zoned
tags) and turns it into the calendar time that goes into the file name.

Local tags hold the camera wall clock and are never converted. Zoned tags
without any offset information are UTC and get converted to the machine zone.
"""
import logging
import re
from datetime import datetime, UTC
from typing import Optional, Mapping, Any

from dateutil import parser as date_parser
from tzlocal import get_localzone

from ..config import RenamerSettings, DEFAULT_SETTINGS
from ..models import ExifDateTime, ResolvedCaptureMoment, UTC_ZONE_NAME

EXIF_DATE_PREFIX = re.compile(r'^(\d{4}):(\d{2}):(\d{2})')
YEAR_PREFIX = re.compile(r'^\d{4}')

# Fills calendar parts a partial date string leaves out
PARSE_DEFAULT = datetime(1900, 1, 1)


def normalize_candidate(value: Any, local_zone) -> Optional[ExifDateTime]:
    """
    Turns any tag value into an ExifDateTime.

    ExifDateTime passes through. datetime objects and strings are read as an
    absolute instant: an offset in the value is kept, a value without one is
    taken as machine-local time.
    """
    if isinstance(value, ExifDateTime):
        return value
    if isinstance(value, datetime):
        return _from_datetime(value, str(value), local_zone)
    if not isinstance(value, str):
        return None

    text = value.strip()
    if not YEAR_PREFIX.match(text) or text.startswith('0000'):
        return None
    try:
        dt = date_parser.parse(EXIF_DATE_PREFIX.sub(r'\1-\2-\3', text), default=PARSE_DEFAULT)
    except (ValueError, OverflowError):
        return None
    return _from_datetime(dt, text, local_zone)


def _from_datetime(dt: datetime, raw_value: str, local_zone) -> ExifDateTime:
    inferred = dt.tzinfo is None
    if inferred:
        dt = dt.replace(tzinfo=local_zone)
    offset = int(dt.utcoffset().total_seconds() // 60)

    if inferred:
        zone_name = str(local_zone)
    else:
        zone_name = UTC_ZONE_NAME if offset == 0 else None

    return ExifDateTime(
        year=dt.year, month=dt.month, day=dt.day,
        hour=dt.hour, minute=dt.minute, second=dt.second,
        millisecond=dt.microsecond // 1000 or None,
        tz_offset_minutes=offset,
        zone_name=zone_name,
        raw_value=raw_value,
        inferred_zone=inferred,
    )


def _parse_iso(raw_value: str) -> Optional[datetime]:
    try:
        return datetime.fromisoformat(raw_value)
    except ValueError:
        return None


class CaptureDateResolver:
    def __init__(self, settings: RenamerSettings = DEFAULT_SETTINGS, local_zone=None):
        self.settings = settings
        self.local_zone = local_zone or get_localzone()

    def resolve(self, metadata: Optional[Mapping[str, Any]]) -> Optional[ResolvedCaptureMoment]:
        """
        Returns the capture moment of the first usable tag, or None when no
        tag in the priority lists holds a valid date.
        """
        if not metadata:
            return None

        for tag in self.settings.date_priority:
            value = metadata.get(tag)
            if value is None:
                continue

            candidate = normalize_candidate(value, self.local_zone)
            if candidate is None:
                logging.debug(f"Ignoring unparsable {tag}: {value!r}")
                continue

            moment = self._to_moment(tag, candidate)
            if moment is None:
                logging.debug(f"Ignoring invalid {tag}: {candidate.raw_value!r}")
                continue

            logging.debug(f"Capture date from {tag}: {moment.format()}")
            return moment

        return None

    def _to_moment(self, tag: str, candidate: ExifDateTime) -> Optional[ResolvedCaptureMoment]:
        dt = _parse_iso(candidate.raw_value) or candidate.to_datetime()
        if dt is None:
            return None

        try:
            if self.settings.is_zoned(tag) and not candidate.has_explicit_offset():
                if dt.tzinfo is None:
                    dt = dt.replace(tzinfo=UTC)
                dt = dt.astimezone(self.local_zone)
            return ResolvedCaptureMoment.from_datetime(dt)
        except (OverflowError, ValueError):
            # Conversion pushed the value past year 1 or 9999
            return None
