import logging
import os
from pathlib import Path
from typing import Optional

from .. import config
from ..config import RenamerSettings, DEFAULT_SETTINGS
from ..exceptions import SuffixExhaustedError
from ..models import ResolvedCaptureMoment


class TargetNameGenerator:
    def __init__(self, settings: RenamerSettings = DEFAULT_SETTINGS):
        self.settings = settings

    def build_name(self, moment: ResolvedCaptureMoment, kind: str, ext: str, suffix: int = 0) -> str:
        """IMG_2024-01-01_00-00-00.jpg, then IMG_2024-01-01_00-00-00_1.jpg, ..."""
        suffix_str = f"_{suffix}" if suffix > 0 else ''
        return f"{config.TYPE_PREFIXES[kind]}{moment.format()}{suffix_str}{ext.lower()}"

    def next_available_name(self,
                            moment: ResolvedCaptureMoment,
                            kind: str,
                            original_path: Path) -> Optional[Path]:
        """
        Returns the first free target name in the original's directory, or None
        when the file already carries its target name.

        An existing entry counts as "already named" when it is the original
        itself, compared by text and by canonical (symlink-resolved) path.
        Any other existing entry moves the search to the next _N suffix.

        Raises:
            SuffixExhaustedError: every suffix up to settings.max_suffix_attempts is taken.
        """
        directory = original_path.parent
        original_resolved = os.path.realpath(original_path)

        for suffix in range(self.settings.max_suffix_attempts + 1):
            candidate = directory / self.build_name(moment, kind, original_path.suffix, suffix)

            if not os.path.lexists(candidate):
                return candidate

            if candidate == original_path or os.path.realpath(candidate) == original_resolved:
                return None

            logging.debug(f"Name taken, trying next suffix: {candidate}")

        raise SuffixExhaustedError(original_path, self.settings.max_suffix_attempts)
