"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/stages.py
Detection pipeline stages.

STAGE CONTRACTS
---------------
SizeStageImpl  : Applies the exclusion list and size range, buckets by exact size
                 and drops singleton buckets. Files of unique size cannot have a
                 byte-identical twin, so they never reach the hasher.
HashStageImpl  : Hashes every remaining candidate in a thread pool and groups by
                 detection key. Unreadable files are logged and left out.

Both stages report progress via callback (stage name, processed count, total count).
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Dict, List, Optional

from clup.core.errors import HashingError
from clup.core.grouper import ConcurrentBuckets, FileGrouperImpl
from clup.core.hasher import HasherImpl, build_detection_key
from clup.core.interfaces import Hasher, ProgressCallback
from clup.core.models import File, DuplicateGroup, HashMode, Stage

logger = logging.getLogger(__name__)


class SizeStageImpl:
    def __init__(
            self,
            grouper: FileGrouperImpl,
            min_size: int = 0,
            max_size: Optional[int] = None,
            excluded_extensions: Optional[List[str]] = None
    ):
        self.grouper = grouper
        self.min_size = min_size
        self.max_size = max_size
        self.excluded_extensions = set(excluded_extensions or [])

    def process(
            self,
            files: List[File],
            progress_callback: Optional[ProgressCallback] = None
    ) -> Dict[int, List[File]]:
        """
        Group by file size.
        Returns size → files buckets holding 2+ files each.
        """
        candidates = [f for f in files if self._passes(f)]
        logger.debug(f"{len(candidates)}/{len(files)} files passed size and extension filters")

        buckets = self.grouper.group_by_size(candidates)

        if progress_callback:
            total_files = len(files)
            progress_callback(Stage.SIZE.value, total_files, total_files)

        return buckets

    def _passes(self, file: File) -> bool:
        if file.extension in self.excluded_extensions:
            return False
        if file.size < self.min_size:
            return False
        if self.max_size is not None and file.size > self.max_size:
            return False
        return True


class HashStageImpl:
    def __init__(
            self,
            hasher: Hasher = None,
            mode: HashMode = HashMode.CONTENT,
            max_workers: Optional[int] = None
    ):
        self.hasher = hasher or HasherImpl()
        self.mode = mode
        self.max_workers = max_workers
        self.failures: List[HashingError] = []

    def process(
            self,
            buckets: Dict[int, List[File]],
            progress_callback: Optional[ProgressCallback] = None
    ) -> List[DuplicateGroup]:
        """
        Hashes all files of the given size buckets and returns the groups
        of files sharing a detection key.
        """
        files = [f for bucket in buckets.values() for f in bucket]
        total_files = len(files)
        key_buckets: ConcurrentBuckets[str] = ConcurrentBuckets()
        self.failures = []

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            futures = {executor.submit(self._hash_into, file, key_buckets): file for file in files}
            for processed, future in enumerate(as_completed(futures), 1):
                error = future.result()
                if error is not None:
                    self.failures.append(error)
                if progress_callback:
                    progress_callback(Stage.HASH.value, processed, total_files)

        if self.failures:
            logger.warning(f"Skipped {len(self.failures)} files that could not be read")

        return FileGrouperImpl.to_duplicate_groups(key_buckets.to_dict())

    def _hash_into(self, file: File, key_buckets: ConcurrentBuckets) -> Optional[HashingError]:
        try:
            digest = self.hasher.compute_full_hash(file)
        except HashingError as e:
            logger.debug(str(e))
            return e
        key_buckets.add(build_detection_key(file, digest, self.mode), file)
        return None
