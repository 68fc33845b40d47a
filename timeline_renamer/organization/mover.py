import logging
from pathlib import Path

from ..models import RenameOutcome, RENAMED, FAILED_RENAME


class FileMover:
    def apply(self, src: Path, dest: Path) -> RenameOutcome:
        """
        Renames src to dest in place (same directory, so a plain rename).
        Filesystem errors come back as a failed_rename outcome; nothing is raised.
        """
        try:
            src.rename(dest)
        except OSError as e:
            logging.debug(f"Failed to rename {src} -> {dest}: {e}")
            return RenameOutcome(FAILED_RENAME, src, dest, error=e)
        return RenameOutcome(RENAMED, src, dest)
