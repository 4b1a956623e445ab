"""
Unified command orchestrator for a cleanup run.
Single source of business logic for the CLI and for library callers.
"""
import logging
from typing import List, Optional

from clup.core.deduplicator import DeduplicatorImpl
from clup.core.interfaces import ProgressCallback
from clup.core.models import CleanupParams, DuplicateGroup, File, RunStatistics, Stage
from clup.core.scanner import FileScannerImpl
from clup.core.statistics import StatisticsAggregator
from clup.services.action_service import ActionDispatcher, DuplicateAction

logger = logging.getLogger(__name__)


class CleanupCommand:
    """
    Orchestrates a cleanup run:
    1. Scan the source directory
    2. Filter by size, hash candidates, group by detection key
    3. Resolve every group to one survivor, applying the action to the rest
    4. Stop the statistics timer and return the snapshot

    Usage:
        params = CleanupParams(source_dir="/data", hash_mode=HashMode.CONTENT)
        command = CleanupCommand()
        stats = command.execute(params, DuplicateAction.record())
    """

    def __init__(self, deduplicator: DeduplicatorImpl = None):
        self._deduplicator = deduplicator or DeduplicatorImpl()
        self._files: List[File] = []
        self._groups: List[DuplicateGroup] = []
        self.phase: Optional[Stage] = None
        self.dispatcher: Optional[ActionDispatcher] = None

    def execute(
            self,
            params: CleanupParams,
            action: DuplicateAction,
            progress_callback: Optional[ProgressCallback] = None
    ) -> RunStatistics:
        """
        Execute a run with validated parameters.

        Returns:
            RunStatistics snapshot; empty when fewer than two files were found.

        Raises:
            ConfigurationError: If the source directory is invalid
        """
        statistics = StatisticsAggregator()
        self.dispatcher = ActionDispatcher(action)

        self.phase = Stage.SCAN
        scanner = FileScannerImpl(root_dir=params.source_dir, extensions=params.include_extensions)
        self._files = scanner.scan(progress_callback=progress_callback)

        if len(self._files) < 2:
            logger.info("No files found")
            self._groups = []
            statistics.stop()
            self.phase = Stage.REPORT
            return statistics.snapshot()

        self.phase = Stage.HASH
        self._groups = self._deduplicator.find_duplicates(
            self._files,
            params,
            progress_callback=progress_callback
        )

        self.phase = Stage.RESOLVE
        self._deduplicator.resolve(
            self._groups,
            self.dispatcher,
            statistics,
            max_workers=params.max_workers,
            progress_callback=progress_callback
        )

        statistics.stop()
        self.phase = Stage.REPORT
        return statistics.snapshot()

    def get_files(self) -> List[File]:
        """Get scanned files after execution."""
        return self._files.copy()

    def get_groups(self) -> List[DuplicateGroup]:
        """Duplicate groups found by the last run, members in discovery order."""
        return self._groups.copy()
