import logging
import shutil
from pathlib import Path
from typing import Optional

from .. import l10n
from ..config import RenamerSettings, DEFAULT_SETTINGS
from ..l10n import Messages


class ArtifactCleaner:
    """Deletes the settings.delete_on_complete entries below the scanned root."""

    def __init__(self, settings: RenamerSettings = DEFAULT_SETTINGS, messages: Optional[Messages] = None):
        self.settings = settings
        self.messages = messages or Messages()

    def cleanup(self, root: Path) -> list:
        """Returns the paths actually removed. Errors other than 'not found' are logged only."""
        removed = []
        for entry in self.settings.delete_on_complete:
            target = root / entry
            try:
                if target.is_dir() and not target.is_symlink():
                    shutil.rmtree(target)
                else:
                    target.unlink()
            except FileNotFoundError:
                continue
            except OSError as e:
                logging.error(f"{self.messages.get(l10n.ERROR_DELETE)}: {target}:\n{e}")
                continue
            logging.debug(f"{self.messages.get(l10n.DELETED)}: {target}")
            removed.append(target)
        return removed
