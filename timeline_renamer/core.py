import logging
import time
from contextlib import nullcontext
from pathlib import Path
from typing import Optional

from tqdm import tqdm
from tqdm.contrib.logging import logging_redirect_tqdm
from tzlocal import get_localzone

from . import config
from .config import RenamerSettings, DEFAULT_SETTINGS
from .exceptions import SuffixExhaustedError
from .l10n import Messages
from .metadata.capture_date import CaptureDateResolver
from .metadata.extract import MetadataReader
from .models import (
    RenameOutcome, RunStats,
    SKIPPED_UNSUPPORTED, SKIPPED_NO_DATE, SKIPPED_ALREADY_NAMED, SKIPPED_EXHAUSTED,
)
from .organization.cleanup import ArtifactCleaner
from .organization.mover import FileMover
from .organization.naming import TargetNameGenerator
from .reporting import RunReport
from .scanning.filesystem import TreeWalker


class TimelineRenamerApp:
    def __init__(self,
                 settings: RenamerSettings = DEFAULT_SETTINGS,
                 reader=None,
                 messages: Optional[Messages] = None,
                 local_zone=None,
                 show_progress: bool = False):
        self.settings = settings
        self.messages = messages or Messages()
        local_zone = local_zone or get_localzone()

        # Anything with read(path) -> mapping and close() works as a reader
        self.reader = reader or MetadataReader(settings, local_zone=local_zone)
        self.walker = TreeWalker(settings, self.messages)
        self.resolver = CaptureDateResolver(settings, local_zone=local_zone)
        self.namer = TargetNameGenerator(settings)
        self.mover = FileMover()
        self.cleaner = ArtifactCleaner(settings, self.messages)
        self.report = RunReport(self.messages)
        self.show_progress = show_progress

    def rename(self, root: Path) -> RunStats:
        """
        Renames every supported file below root, one file at a time.

        1. Walk the tree
        2. Per file: classify -> read metadata -> resolve date -> pick name -> rename
        3. Close the metadata session, delete leftover artifacts
        4. Summary

        Per-file problems become skip outcomes. An error escaping the pipeline
        ends the run early and is logged, never raised.
        """
        stats = RunStats()
        self.report.header(root)
        start = time.perf_counter()

        try:
            self._rename_files(root, stats)
        except Exception as e:
            self.report.fatal(e)

        elapsed_ms = (time.perf_counter() - start) * 1000
        self.report.summary(stats, elapsed_ms)
        self.report.footer()
        return stats

    def _rename_files(self, root: Path, stats: RunStats):
        files = list(self.walker.walk(root))
        logging.debug(f"Found {len(files)} files under {root}")

        redirect = logging_redirect_tqdm() if self.show_progress else nullcontext()
        try:
            with redirect:
                for path in tqdm(files, desc="Renaming", unit="file", disable=not self.show_progress):
                    outcome = self.process_file(path)
                    stats.record(outcome)
                    self.report.outcome(outcome)
        finally:
            self.reader.close()

        self.cleaner.cleanup(root)

    def process_file(self, path: Path) -> RenameOutcome:
        kind = self.settings.kind_of(path)
        if kind == config.OTHER:
            return RenameOutcome(SKIPPED_UNSUPPORTED, path)

        try:
            metadata = self.reader.read(path)
        except Exception as e:
            logging.debug(f"Metadata read failed for {path}: {e}")
            metadata = {}

        moment = self.resolver.resolve(metadata)
        if moment is None:
            return RenameOutcome(SKIPPED_NO_DATE, path)

        try:
            target = self.namer.next_available_name(moment, kind, path)
        except SuffixExhaustedError as e:
            return RenameOutcome(SKIPPED_EXHAUSTED, path, error=e)

        if target is None:
            return RenameOutcome(SKIPPED_ALREADY_NAMED, path)

        return self.mover.apply(path, target)
