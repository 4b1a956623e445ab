"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/grouper.py
File grouping by size and by detection key.
Workers append concurrently through ConcurrentBuckets; singleton groups are
always dropped before results leave the grouper.
"""

import threading
from typing import Any, Callable, Dict, Generic, Hashable, Iterable, List, TypeVar

from clup.core.models import File, DuplicateGroup

K = TypeVar("K", bound=Hashable)


class ConcurrentBuckets(Generic[K]):
    """
    Key → list map with an atomic get-or-create-then-append.
    Safe to share between worker threads.
    """

    def __init__(self):
        self._buckets: Dict[K, List[File]] = {}
        self._lock = threading.Lock()

    def add(self, key: K, file: File) -> None:
        with self._lock:
            bucket = self._buckets.get(key)
            if bucket is None:
                self._buckets[key] = [file]
            else:
                bucket.append(file)

    def __len__(self) -> int:
        with self._lock:
            return len(self._buckets)

    def to_dict(self) -> Dict[K, List[File]]:
        with self._lock:
            return {key: list(files) for key, files in self._buckets.items()}


class FileGrouperImpl:
    """Groups files by size or by precomputed detection keys."""

    def group_by_size(self, files: Iterable[File]) -> Dict[int, List[File]]:
        """Groups files by their exact size, dropping buckets with a single file."""
        return self._group_by(files, lambda f: f.size)

    @staticmethod
    def to_duplicate_groups(buckets: Dict[str, List[File]]) -> List[DuplicateGroup]:
        """
        Turns key → files buckets into DuplicateGroups.
        Members are put back into discovery order; singletons are discarded.
        """
        groups = []
        for key, files in buckets.items():
            if len(files) < 2:
                continue
            ordered = sorted(files, key=lambda f: f.order)
            groups.append(DuplicateGroup(key=key, size=ordered[0].size, files=ordered))
        groups.sort(key=lambda g: g.files[0].order)
        return groups

    @staticmethod
    def _group_by(files: Iterable[File], key_func: Callable[[File], Any]) -> Dict[Any, List[File]]:
        """
        Helper method to group files by any computed key.
        Args:
            files: Files to group
            key_func: Function that computes a hashable key from a File
        Returns:
            Dict[key, List[File]] containing only groups with 2+ files
        """
        buckets = ConcurrentBuckets()
        for file in files:
            buckets.add(key_func(file), file)

        return {key: group for key, group in buckets.to_dict().items() if len(group) >= 2}
