"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

deduplicator.py
Pipeline-based duplicate detection and resolution:
    size filter → content hash → group → select survivor
"""
import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import List, Optional

from clup.core.grouper import FileGrouperImpl
from clup.core.hasher import HASH_ALGORITHMS, HasherImpl
from clup.core.interfaces import Deduplicator, DuplicateHandler, Hasher, ProgressCallback
from clup.core.models import File, DuplicateGroup, CleanupParams, Stage
from clup.core.selector import resolve_group
from clup.core.stages import SizeStageImpl, HashStageImpl
from clup.core.statistics import StatisticsAggregator

logger = logging.getLogger(__name__)


class DeduplicatorImpl(Deduplicator):
    """
    Runs the detection phases in order, each one finishing before the next starts.
    An injected hasher takes precedence over the algorithm named in the params.
    """
    def __init__(self, grouper: FileGrouperImpl = None, hasher: Hasher = None):
        self.grouper = grouper or FileGrouperImpl()
        self.hasher = hasher
        self.hash_failures = []

    def find_duplicates(
        self,
        files: List[File],
        params: CleanupParams,
        progress_callback: Optional[ProgressCallback] = None
    ) -> List[DuplicateGroup]:
        """
        Args:
            files: Scanned files, in discovery order
            params: Size limits, exclusion list, hash mode, hash algorithm and worker count
            progress_callback: Reports progress per stage.
        Returns:
            Groups of 2+ files sharing a detection key, members in discovery order
        """
        size_stage = SizeStageImpl(
            self.grouper,
            min_size=params.min_size,
            max_size=params.max_size,
            excluded_extensions=params.exclude_extensions,
        )
        buckets = size_stage.process(files, progress_callback=progress_callback)
        logger.debug(f"Size grouping: {len(buckets)} buckets, "
                     f"{sum(len(b) for b in buckets.values())} candidates")

        hasher = self.hasher or HasherImpl(HASH_ALGORITHMS[params.hash_algorithm]())
        hash_stage = HashStageImpl(hasher, mode=params.hash_mode, max_workers=params.max_workers)
        groups = hash_stage.process(buckets, progress_callback=progress_callback)
        self.hash_failures = hash_stage.failures
        logger.debug(f"Content hashing: {len(groups)} duplicate groups")

        return groups

    @staticmethod
    def resolve(
        groups: List[DuplicateGroup],
        handler: DuplicateHandler,
        statistics: StatisticsAggregator,
        max_workers: Optional[int] = None,
        progress_callback: Optional[ProgressCallback] = None
    ) -> None:
        """
        Resolves groups in parallel. Each group is handled by exactly one worker,
        so the survivor scan inside a group stays sequential.
        """
        total = len(groups)
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures = [executor.submit(resolve_group, group, handler, statistics) for group in groups]
            for processed, future in enumerate(as_completed(futures), 1):
                future.result()
                if progress_callback:
                    progress_callback(Stage.RESOLVE.value, processed, total)
