"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/statistics.py
Thread-safe statistics for a cleanup run.
"""

import threading
import time
from typing import Dict, List, Sequence, Tuple

from clup.core.models import File, ExtensionStats, RunStatistics
from clup.utils.convert_utils import ConvertUtils


class StatisticsAggregator:
    """
    Accumulates duplicate counts and bytes, overall and per extension,
    plus the survivor-first ordering of every resolved group.

    One instance is created per run and shared by all workers. The timer
    starts on creation and stops with stop().
    """

    TOP_EXTENSIONS = 5

    def __init__(self):
        self._lock = threading.Lock()
        self._start = time.perf_counter()
        self._end = None
        self._duplicates = 0
        self._bytes = 0
        self._extensions: Dict[str, Tuple[int, int]] = {}
        self._groups: Dict[str, Tuple[File, ...]] = {}

    def record_group(self, files: Sequence[File]) -> None:
        """Adds one group of identical files; the survivor is files[0]."""
        if not files:
            raise ValueError("The duplicates list can't be empty")
        if len(files) == 1:
            return

        pending = len(files) - 1
        size = files[0].size * pending
        ext = files[0].extension
        with self._lock:
            self._duplicates += pending
            self._bytes += size
            count, total = self._extensions.get(ext, (0, 0))
            self._extensions[ext] = (count + pending, total + size)

    def record_resolved_group(self, key: str, ordered_files: Sequence[File]) -> None:
        """Stores the final ordering of a group, survivor first."""
        with self._lock:
            if key in self._groups:
                raise ValueError(f"Group already recorded: {key}")
            self._groups[key] = tuple(ordered_files)

    def stop(self) -> None:
        with self._lock:
            if self._end is None:
                self._end = time.perf_counter()

    @property
    def elapsed(self) -> float:
        end = self._end if self._end is not None else time.perf_counter()
        return end - self._start

    def snapshot(self) -> RunStatistics:
        """Frozen copy of the counters; groups ordered by their first discovered member."""
        with self._lock:
            return RunStatistics(
                elapsed=self.elapsed,
                duplicate_count=self._duplicates,
                duplicate_bytes=self._bytes,
                extensions={ext: ExtensionStats(count, total)
                            for ext, (count, total) in self._extensions.items()},
                groups=dict(sorted(self._groups.items(), key=lambda item: min(f.order for f in item[1]))),
            )


def summary_lines(stats: RunStatistics, verbose: bool = False) -> List[str]:
    """Human-readable summary of a finished run."""
    lines = [
        f"Elapsed time:\t\t{ConvertUtils.seconds_to_human(stats.elapsed)}",
        f"Duplicates found:\t{stats.duplicate_count}",
    ]
    if verbose:
        lines.append(f"Bytes identified:\t{stats.duplicate_bytes}")
    lines.append(f"Approximate size:\t{ConvertUtils.bytes_to_human(stats.duplicate_bytes)}")

    if verbose and stats.extensions:
        frequent = sorted(stats.extensions.items(), key=lambda item: item[1].count, reverse=True)
        heaviest = sorted(stats.extensions.items(), key=lambda item: item[1].bytes, reverse=True)
        top = StatisticsAggregator.TOP_EXTENSIONS
        lines.append("Frequent extensions:\t" + ", ".join(
            f"{ext or '{none}'}: {data.count}" for ext, data in frequent[:top]))
        lines.append("Heaviest extensions:\t" + ", ".join(
            f"{ext or '{none}'}: {ConvertUtils.bytes_to_human(data.bytes)}" for ext, data in heaviest[:top]))
    return lines
