"""
Main orchestrator for recipe extraction.
Drives archives through the reader and parser and commits recipes to the store in batches.
"""

import logging
import threading
from datetime import datetime
from typing import List, Optional, Sequence

from extractor.archive_reader import ArchiveReader
from extractor.config import ExtractorConfig
from extractor.database_storage import RecipeStore
from extractor.errors import ExtractorError
from extractor.folder_scanner import FolderScanner
from extractor.models import ExtractionProgress, ExtractionResult, ParsedRecipe
from extractor.recipe_parser import parse_recipe
from extractor.resilience.progress_tracker import ProgressTracker
from extractor.resilience.retry_handler import RetryHandler
from extractor.utils import mod_display_name

logger = logging.getLogger(__name__)


class ExtractionController:
    """Coordinates reader, parser, store and progress channel for one store."""

    def __init__(
        self,
        store: RecipeStore,
        config: Optional[ExtractorConfig] = None,
        reader: Optional[ArchiveReader] = None,
        progress: Optional[ProgressTracker] = None,
        retry_handler: Optional[RetryHandler] = None
    ):
        """
        Initialize controller.

        Args:
            store: Open recipe store; the controller does not close it
            config: ExtractorConfig instance, uses defaults if None
            reader: Archive reader, a default one if None
            progress: Progress channel, a new bounded one if None
            retry_handler: Retry policy for batch commits, built from config if None
        """
        self.config = config or ExtractorConfig()
        self.store = store
        self.reader = reader or ArchiveReader()
        self.scanner = FolderScanner(self.config.archive_extensions)
        self.progress = progress or ProgressTracker(self.config.progress_buffer)
        self.retry_handler = retry_handler or RetryHandler(config=self.config.retry)
        self._cancel = threading.Event()
        self._run_lock = threading.Lock()

    def extract_all(
        self,
        archive_paths: Sequence[str],
        cancel_event: Optional[threading.Event] = None,
        clear_existing: Optional[bool] = None
    ) -> ExtractionResult:
        """
        Extract recipes from every archive, in input order.

        Failures of single entries or archives are recorded in the result's
        errors and do not stop the run. Failing to clear the store is fatal.

        Args:
            archive_paths: Archive files to process
            cancel_event: Checked between archives; set it to stop early
            clear_existing: Wipe the store first; defaults to config.clear_before_extract

        Returns:
            ExtractionResult with counts and errors
        """
        if clear_existing is None:
            clear_existing = self.config.clear_before_extract

        with self._run_lock:
            self._cancel.clear()
            self.progress.reset()
            run = _ExtractionRun(self, list(archive_paths), cancel_event)
            try:
                if clear_existing:
                    removed = self.store.clear()
                    logger.info(f"Cleared {removed} existing recipes")
                return run.execute()
            finally:
                self.progress.close()

    def scan_and_extract(self, directory_path: str, **kwargs) -> ExtractionResult:
        """Scan a mods folder and extract every archive found in it."""
        archives = self.scanner.scan(directory_path)
        return self.extract_all([a.path for a in archives], **kwargs)

    def stop(self):
        """Stop after the archive currently in flight."""
        logger.info("Stopping extraction after current archive...")
        self._cancel.set()

    def is_cancelled(self, cancel_event: Optional[threading.Event]) -> bool:
        return self._cancel.is_set() or (cancel_event is not None and cancel_event.is_set())

    def get_status(self) -> dict:
        """
        Get current extraction status and statistics.

        Returns:
            Dict with status info
        """
        return {
            'progress': self.progress.get_stats(),
            'retry': self.retry_handler.get_stats(),
            'stopped': self._cancel.is_set(),
        }


class _ExtractionRun:
    """State of a single extract_all call."""

    def __init__(
        self,
        controller: ExtractionController,
        archive_paths: List[str],
        cancel_event: Optional[threading.Event]
    ):
        self.controller = controller
        self.config = controller.config
        self.archive_paths = archive_paths
        self.cancel_event = cancel_event
        self.total = len(archive_paths)
        self.result = ExtractionResult(started_at=datetime.now().isoformat())
        self._pending: List[ParsedRecipe] = []
        self._finished = 0

    def execute(self) -> ExtractionResult:
        logger.info(f"Extracting recipes from {self.total} archives...")

        for archive_path in self.archive_paths:
            if self.controller.is_cancelled(self.cancel_event):
                logger.info("Extraction cancelled")
                self.result.cancelled = True
                break

            name = mod_display_name(archive_path)
            self._emit(name)
            self._process_archive(archive_path, name)
            self._flush()
            self._finished += 1
            self._emit(name)

        self._flush()
        return self._finish()

    def _process_archive(self, archive_path: str, name: str):
        parsed_in_archive = 0
        try:
            with self.controller.reader.open(archive_path) as archive:
                entries = archive.entries()
                self.result.archives_processed += 1
                if not entries:
                    logger.info(f"{name}: no recipe entries")

                for entry in entries:
                    try:
                        raw = archive.read_raw(entry.name)
                        recipe = parse_recipe(raw.archive_name, raw.entry_path, raw.data)
                    except ExtractorError as e:
                        self._record_error(f"{name}: {entry.name}: {e}")
                        continue
                    except Exception as e:
                        # Whatever else goes wrong stays confined to this entry
                        self._record_error(f"{name}: {entry.name}: {type(e).__name__}: {e}")
                        continue

                    self._pending.append(recipe)
                    parsed_in_archive += 1

                    if len(self._pending) >= self.config.batch_size:
                        self._flush()
                    if parsed_in_archive % self.config.progress_every == 0:
                        self._emit(name)
        except ExtractorError as e:
            self._record_error(f"{name}: {e}")
            return

        logger.info(f"{name}: parsed {parsed_in_archive} recipes")

    def _flush(self):
        """Commit pending rows as one batch."""
        if not self._pending:
            return
        batch, self._pending = self._pending, []

        success, outcome = self.controller.retry_handler.execute_with_retry(
            self.controller.store.insert_batch, batch
        )
        if success:
            self.result.recipes_extracted += len(outcome)
        else:
            mods = sorted({row.mod_name for row in batch})
            self._record_error(f"{', '.join(mods)}: batch of {len(batch)} recipes not saved: {outcome}")

    def _emit(self, name: str):
        self.controller.progress.publish(ExtractionProgress(
            current=self._finished,
            total=self.total,
            current_archive=name
        ))

    def _record_error(self, message: str):
        logger.warning(message)
        self.result.errors.append(message)

    def _finish(self) -> ExtractionResult:
        """Fill in timing fields."""
        completed_at = datetime.now()
        start = datetime.fromisoformat(self.result.started_at)
        self.result.completed_at = completed_at.isoformat()
        self.result.duration_seconds = (completed_at - start).total_seconds()

        logger.info(
            f"Extraction done: {self.result.archives_processed}/{self.total} archives, "
            f"{self.result.recipes_extracted} recipes, {len(self.result.errors)} errors"
        )
        return self.result
