"""
Configuration constants for the timeline media renamer.
"""
from dataclasses import dataclass
from pathlib import Path

# --- File Type Definitions ---
PHOTO_EXTENSIONS = frozenset({
    '.jpg', '.jpeg', '.png', '.gif', '.bmp', '.tiff', '.tif', '.heic', '.heif',
    '.webp', '.raw', '.arw', '.cr2', '.nef', '.orf', '.sr2', '.dng', '.rw2', '.raf',
    '.psd', '.xcf', '.ai', '.indd', '.svg', '.eps', '.pdf', '.lrtemplate', '.xmp',
})
VIDEO_EXTENSIONS = frozenset({
    '.3gp', '.mp4', '.mov', '.avi', '.mkv', '.webm', '.flv', '.wmv', '.mpeg', '.mpg',
    '.m4v', '.mts', '.m2ts', '.vob', '.rm', '.rmvb', '.asf', '.divx', '.xvid', '.ogv',
    '.ts', '.mxf', '.f4v', '.m2v', '.mpv', '.qt', '.mng', '.yuv', '.y4m', '.drc',
    '.f4p', '.f4a', '.f4b',
})

# Kinds returned by RenamerSettings.kind_of
PHOTO = 'photo'
VIDEO = 'video'
OTHER = 'other'

TYPE_PREFIXES = {PHOTO: 'IMG_', VIDEO: 'VID_'}

# --- Scan Filters ---
# Matched case-insensitively against the entry name
IGNORED_DIRECTORIES = (
    '#Ignored',
    '__pycache__',
)

LOG_FILE_NAME = '#TimelineMediaRenamerLogs.txt'

IGNORED_FILES = (
    '#TimelineMediaRenamer.bat',
    '#TimelineMediaRenamer.cmd',
    '#TimelineMediaRenamer.sh',
    LOG_FILE_NAME,
)

# Removed from the scanned root once the run is over
DELETE_ON_COMPLETE = (
    '__pycache__',
)

# --- Metadata Parsing ---
# Tags written without timezone information (camera wall clock).
# Tried first, in this order.
EXIF_DATES_LOCAL = (
    'DateTimeOriginal',
    'DateTimeCreated',
    'DateCreated',
    'DigitalCreationDateTime',
)

# Tags that may carry an offset or are UTC based (QuickTime containers).
# 'FileModifyDate' and 'FileCreateDate' are filesystem times and stay disabled.
EXIF_DATES_ZONED = (
    'CreationDate',
    'CreateDate',
    'ContentCreateDate',
    'MediaCreateDate',
    'ModifyDate',
)

# EXIF 2.31 offset companions for the plain EXIF date tags
EXIF_OFFSET_TAGS = {
    'DateTimeOriginal': 'OffsetTimeOriginal',
    'CreateDate': 'OffsetTimeDigitized',
    'ModifyDate': 'OffsetTime',
}

# ExifTool family 0 groups whose dates are stored in UTC
UTC_TAG_GROUPS = frozenset({'QuickTime'})

# --- Naming ---
TARGET_DATE_FORMAT = '%Y-%m-%d_%H-%M-%S'

# Upper bound for the _N collision suffix search
MAX_SUFFIX_ATTEMPTS = 9999


@dataclass(frozen=True)
class RenamerSettings:
    """Immutable set of tables driving a rename run."""
    photo_extensions: frozenset = PHOTO_EXTENSIONS
    video_extensions: frozenset = VIDEO_EXTENSIONS
    ignored_directories: tuple = IGNORED_DIRECTORIES
    ignored_files: tuple = IGNORED_FILES
    delete_on_complete: tuple = DELETE_ON_COMPLETE
    exif_dates_local: tuple = EXIF_DATES_LOCAL
    exif_dates_zoned: tuple = EXIF_DATES_ZONED
    save_logs: bool = False
    log_file_name: str = LOG_FILE_NAME
    max_suffix_attempts: int = MAX_SUFFIX_ATTEMPTS

    @property
    def date_priority(self) -> tuple:
        return tuple(self.exif_dates_local) + tuple(self.exif_dates_zoned)

    def kind_of(self, path: Path) -> str:
        # Videos win when an extension sits in both tables
        ext = path.suffix.lower()
        if ext in self.video_extensions:
            return VIDEO
        if ext in self.photo_extensions:
            return PHOTO
        return OTHER

    def is_zoned(self, tag: str) -> bool:
        return tag in self.exif_dates_zoned


DEFAULT_SETTINGS = RenamerSettings()

# --- Fallback Readers ---
# exifread tag -> ExifTool tag name
EXIFREAD_TAG_NAMES = {
    'EXIF DateTimeOriginal': 'DateTimeOriginal',
    'EXIF DateTimeDigitized': 'CreateDate',
    'Image DateTime': 'ModifyDate',
    'EXIF OffsetTimeOriginal': 'OffsetTimeOriginal',
    'EXIF OffsetTimeDigitized': 'OffsetTimeDigitized',
    'EXIF OffsetTime': 'OffsetTime',
}

# MediaInfo "General" track attribute -> ExifTool tag name
MEDIAINFO_DATE_FIELDS = {
    'recorded_date': 'CreationDate',
    'encoded_date': 'CreateDate',
    'tagged_date': 'ModifyDate',
}
