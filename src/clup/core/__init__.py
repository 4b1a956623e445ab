"""
Core detection engine — scanner, size filter, hasher, grouper, survivor selection
and statistics.

- FileScannerImpl: worklist-based directory traversal with per-directory error isolation
- SizeStageImpl: size/extension filters and size bucketing
- HasherImpl + MD5AlgorithmImpl/XXHashAlgorithmImpl: streamed full-content hashing
- HashStageImpl: concurrent hashing and grouping by detection key
- select_original: earliest-created survivor, first-encountered on ties
- StatisticsAggregator: thread-safe counters shared by all workers
- DeduplicatorImpl: runs the phases in order

All components are pure Python and free of console I/O.
"""

from .errors import ClupError, ConfigurationError, EnumerationError, HashingError, ActionError
from .models import (
    File, DuplicateGroup, HashMode, ActionKind, Stage, ExtensionPreset,
    ExtensionStats, RunStatistics, CleanupParams)
from .scanner import FileScannerImpl
from .grouper import FileGrouperImpl, ConcurrentBuckets
from .hasher import HasherImpl, MD5AlgorithmImpl, XXHashAlgorithmImpl, build_detection_key
from .stages import SizeStageImpl, HashStageImpl
from .selector import select_original, resolve_group
from .statistics import StatisticsAggregator, summary_lines
from .deduplicator import DeduplicatorImpl

__all__ = [
    "ClupError",
    "ConfigurationError",
    "EnumerationError",
    "HashingError",
    "ActionError",
    "File",
    "DuplicateGroup",
    "HashMode",
    "ActionKind",
    "Stage",
    "ExtensionPreset",
    "ExtensionStats",
    "RunStatistics",
    "CleanupParams",
    "FileScannerImpl",
    "FileGrouperImpl",
    "ConcurrentBuckets",
    "HasherImpl",
    "MD5AlgorithmImpl",
    "XXHashAlgorithmImpl",
    "build_detection_key",
    "SizeStageImpl",
    "HashStageImpl",
    "select_original",
    "resolve_group",
    "StatisticsAggregator",
    "summary_lines",
    "DeduplicatorImpl",
]
