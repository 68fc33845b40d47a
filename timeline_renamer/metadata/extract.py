import logging
import re
from dataclasses import replace
from pathlib import Path
from typing import Optional, Dict, Any

import exifread
import exiftool
from exiftool.exceptions import ExifToolException
from pymediainfo import MediaInfo
from tzlocal import get_localzone

from .. import config
from ..config import RenamerSettings, DEFAULT_SETTINGS
from ..models import ExifDateTime, UTC_ZONE_NAME

# ExifTool date layout: "YYYY:MM:DD HH:MM:SS[.sss][Z|+HH:MM]", time part optional
EXIF_DATETIME = re.compile(
    r'^(\d{4})[:-](\d{2})[:-](\d{2})'
    r'(?:[ T](\d{2}):(\d{2})(?::(\d{2}))?(?:\.(\d+))?)?'
    r'\s*(Z|[+-]\d{2}:?\d{2})?(?:\s*DST)?$'
)
OFFSET_VALUE = re.compile(r'^([+-])(\d{2}):?(\d{2})$')


def parse_offset(text) -> Optional[int]:
    """'+02:00' -> 120, 'Z' -> 0, anything else -> None."""
    if text is None:
        return None
    text = str(text).strip()
    if text == 'Z':
        return 0
    m = OFFSET_VALUE.match(text)
    if not m:
        return None
    minutes = int(m.group(2)) * 60 + int(m.group(3))
    return -minutes if m.group(1) == '-' else minutes


def parse_exif_datetime(raw: str) -> Optional[ExifDateTime]:
    """
    Parses an ExifTool style date string into an ExifDateTime.
    Only a zone written in the value itself is filled in here.
    Returns None for other layouts and for impossible dates ("0000:00:00 ...").
    """
    m = EXIF_DATETIME.match(raw.strip())
    if not m:
        return None
    year, month, day, hour, minute, second, fraction, offset = m.groups()
    millisecond = int(fraction[:3].ljust(3, '0')) if fraction else None

    value = ExifDateTime(
        year=int(year), month=int(month), day=int(day),
        hour=int(hour or 0), minute=int(minute or 0), second=int(second or 0),
        millisecond=millisecond,
        raw_value=raw.strip(),
    )
    if offset is not None:
        value = replace(
            value,
            tz_offset_minutes=parse_offset(offset),
            zone_name=UTC_ZONE_NAME if offset == 'Z' else None,
        )
    if value.to_datetime() is None:
        return None
    return value


class MetadataReader:
    """
    Reads the date tags of media files for one run.

    Strategies:
      - ExifTool: one persistent '-stay_open' process (PyExifTool), started on
        the first read and stopped by close().
      - Images: 'exifread' when ExifTool is missing or fails on the file.
      - Video: 'pymediainfo' when ExifTool is missing or fails on the file.

    read() returns {tag name: ExifDateTime | str}. Values ExifTool reports in a
    layout parse_exif_datetime does not know are passed on as plain strings.
    """

    def __init__(self,
                 settings: RenamerSettings = DEFAULT_SETTINGS,
                 local_zone=None,
                 executable: Optional[str] = None):
        self.settings = settings
        self.local_zone = local_zone or get_localzone()
        self._executable = executable
        self._helper = None
        self._exiftool_missing = False
        self._requested_tags = list(settings.date_priority) + list(config.EXIF_OFFSET_TAGS.values())

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def read(self, path: Path) -> Dict[str, Any]:
        helper = self._session()
        if helper is not None:
            try:
                tags = self._read_exiftool(helper, path)
                if tags:
                    return tags
            except Exception as e:
                logging.debug(f"ExifTool failed for {path}: {e}")

        try:
            if self.settings.kind_of(path) == config.VIDEO:
                return self._read_mediainfo(path)
            return self._read_exifread(path)
        except Exception as e:
            logging.debug(f"Fallback metadata read failed for {path}: {e}")
            return {}

    def close(self):
        """Ends the ExifTool session. Safe to call more than once."""
        if self._helper is None:
            return
        try:
            self._helper.terminate()
        except (OSError, ExifToolException) as e:
            logging.debug(f"ExifTool did not shut down cleanly: {e}")
        finally:
            self._helper = None

    # --- Strategies ---

    def _session(self):
        if self._helper is not None or self._exiftool_missing:
            return self._helper

        kwargs: Dict[str, Any] = {'common_args': ['-G', '-n']}
        if self._executable:
            kwargs['executable'] = self._executable
        try:
            helper = exiftool.ExifToolHelper(**kwargs)
            helper.run()
        except (OSError, ExifToolException) as e:
            logging.warning(f"ExifTool not available, using exifread/pymediainfo: {e}")
            self._exiftool_missing = True
            return None

        self._helper = helper
        return helper

    def _read_exiftool(self, helper, path: Path) -> Dict[str, Any]:
        records = helper.get_tags([str(path)], tags=self._requested_tags)
        if not records:
            return {}

        # -G prefixes every tag with its group; the first group reporting a tag wins
        raw: Dict[str, Any] = {}
        groups: Dict[str, str] = {}
        for key, value in records[0].items():
            group, _, name = key.rpartition(':')
            if name == 'SourceFile' or name in raw:
                continue
            raw[name] = value
            groups[name] = group
        return self._to_date_values(raw, groups)

    def _read_exifread(self, path: Path) -> Dict[str, Any]:
        with path.open('rb') as f:
            found = exifread.process_file(f, details=False)

        raw = {}
        for tag, name in config.EXIFREAD_TAG_NAMES.items():
            if tag in found:
                raw[name] = str(found[tag]).strip()
        return self._to_date_values(raw, {})

    def _read_mediainfo(self, path: Path) -> Dict[str, Any]:
        """Container dates come back as text; MediaInfo marks UTC ones with 'UTC'."""
        mi = MediaInfo.parse(str(path))
        tags: Dict[str, Any] = {}
        for track in mi.tracks:
            if track.track_type != "General":
                continue
            for field, name in config.MEDIAINFO_DATE_FIELDS.items():
                val = getattr(track, field, None)
                if not val or name in tags:
                    continue
                text = str(val).strip()
                if 'UTC' in text:
                    text = text.replace('UTC', '').strip() + 'Z'
                tags[name] = text
        return tags

    # --- Zone inference ---

    def _to_date_values(self, raw: Dict[str, Any], groups: Dict[str, str]) -> Dict[str, Any]:
        tags: Dict[str, Any] = {}
        for tag in self.settings.date_priority:
            value = raw.get(tag)
            if value is None or value == '':
                continue
            parsed = parse_exif_datetime(str(value))
            if parsed is None:
                tags[tag] = str(value)
                continue
            tags[tag] = self._infer_zone(parsed, tag, groups.get(tag, ''), raw)
        return tags

    def _infer_zone(self, value: ExifDateTime, tag: str, group: str, raw: Dict[str, Any]) -> ExifDateTime:
        """
        Fills in a zone for values written without one:
        the EXIF OffsetTime* companion tag, then UTC for QuickTime containers,
        then the machine zone (cameras write their own wall clock).
        """
        if value.tz_offset_minutes is not None:
            return value

        offset = parse_offset(raw.get(config.EXIF_OFFSET_TAGS.get(tag, '')))
        if offset is not None:
            return replace(value, tz_offset_minutes=offset, inferred_zone=True)

        if group in config.UTC_TAG_GROUPS:
            return replace(value, tz_offset_minutes=0, zone_name=UTC_ZONE_NAME, inferred_zone=True)

        wall_clock = value.to_datetime().replace(tzinfo=self.local_zone)
        return replace(
            value,
            tz_offset_minutes=int(wall_clock.utcoffset().total_seconds() // 60),
            zone_name=str(self.local_zone),
            inferred_zone=True,
        )
