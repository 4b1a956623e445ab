"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

interfaces.py

Defines core interfaces (Protocols) used throughout the cleanup engine.

Key Components:
---------------
- HashAlgorithm: Factory for incremental digest objects (MD5, xxHash, ...).
- Hasher: Computes the full-content digest of a file.
- FileScanner: Scans directories and returns discovered files.
- DuplicateHandler: Callable invoked once per non-surviving file.
- Deduplicator: Runs the filtering, hashing and resolving phases.
"""

from typing import Protocol, List, Optional, Callable

from clup.core.models import File, DuplicateGroup, CleanupParams


ProgressCallback = Callable[[str, int, Optional[int]], None]


class Digest(Protocol):
    """Incremental digest object (hashlib and xxhash share this API)."""
    def update(self, data: bytes) -> None: ...
    def hexdigest(self) -> str: ...


class HashAlgorithm(Protocol):
    """
    Interface for generic hash algorithms.

    Allows plugging in different hashing functions like MD5 or xxHash
    without affecting the rest of the detection logic.
    """
    name: str

    def new(self) -> Digest:
        """Returns a fresh incremental digest."""
        ...


class Hasher(Protocol):
    """Interface for hashing the whole content of a file."""
    def compute_full_hash(self, file: File) -> str: ...


class FileScanner(Protocol):
    def scan(self, progress_callback: Optional[ProgressCallback] = None) -> List[File]:
        """
        Scan files from the configured directory.

        Returns:
            Files matching the inclusion list, in discovery order.
        """
        ...


class DuplicateHandler(Protocol):
    def __call__(self, file: File) -> None: ...


class Deduplicator(Protocol):
    """
    Interface for the detection engine.

    Reduces scanned files to duplicate groups, then resolves every group
    to a single survivor.
    """
    def find_duplicates(
        self,
        files: List[File],
        params: CleanupParams,
        progress_callback: Optional[ProgressCallback] = None
    ) -> List[DuplicateGroup]:
        ...
