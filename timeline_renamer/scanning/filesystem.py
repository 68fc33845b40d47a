import os
import logging
from pathlib import Path
from typing import Iterator, Optional

from .. import l10n
from ..config import RenamerSettings, DEFAULT_SETTINGS
from ..l10n import Messages


class TreeWalker:
    def __init__(self, settings: RenamerSettings = DEFAULT_SETTINGS, messages: Optional[Messages] = None):
        self.settings = settings
        self.messages = messages or Messages()
        self._ignored_dirs = {name.lower() for name in settings.ignored_directories}
        self._ignored_files = {name.lower() for name in settings.ignored_files}

    def walk(self, root: Path) -> Iterator[Path]:
        """
        Depth-first walker using os.scandir, in directory-entry order (unsorted).

        Skips ignored and hidden ('.') directories and ignored file names.
        A directory that cannot be listed is logged and left out.
        """
        try:
            with os.scandir(root) as it:
                entries = list(it)
        except OSError as e:
            logging.error(f"{self.messages.get(l10n.ERROR_RD_DIR)}: {root}:\n{e}")
            return

        for e in entries:
            if e.is_dir(follow_symlinks=False):
                if self._is_ignored_dir(e.name):
                    continue
                yield from self.walk(Path(e.path))
            elif e.name.lower() not in self._ignored_files:
                yield Path(e.path)

    def _is_ignored_dir(self, name: str) -> bool:
        return name.startswith('.') or name.lower() in self._ignored_dirs
