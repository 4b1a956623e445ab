"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/scanner.py
Recursive file discovery with per-directory error containment.
Features:
- Explicit worklist instead of recursion: a failing directory only drops its own subtree
- Deterministic discovery order (entries sorted by name)
- Case-insensitive extension allow-list
- Symbolic links are never followed
"""

import os
import sys
import logging
from pathlib import Path
from typing import List, Optional

from clup.core.errors import ConfigurationError, EnumerationError
from clup.core.interfaces import FileScanner, ProgressCallback
from clup.core.models import File, Stage

logger = logging.getLogger(__name__)


def creation_time_of(stat_result: os.stat_result) -> float:
    """
    Best available creation timestamp for a stat result.
    Uses st_birthtime when the platform provides it; on Windows st_ctime is the
    creation time; elsewhere the earlier of change and modification time.
    """
    birthtime = getattr(stat_result, "st_birthtime", None)
    if birthtime is not None:
        return birthtime
    if sys.platform == "win32":
        return stat_result.st_ctime
    return min(stat_result.st_ctime, stat_result.st_mtime)


class FileScannerImpl(FileScanner):
    """
    Scans a directory tree and returns matching files in discovery order.

    Attributes:
        root_dir: Root directory to scan
        extensions: Allowed file extensions (e.g., [".txt", ".jpg"]); empty means all files
    """

    progress_interval = 5000  # Update every 5,000 files

    def __init__(self, root_dir: str, extensions: Optional[List[str]] = None):
        self.root_dir = root_dir
        self.extensions = [ext.lower() for ext in extensions] if extensions else []
        self.skipped_dirs: List[EnumerationError] = []

    def scan(self, progress_callback: Optional[ProgressCallback] = None) -> List[File]:
        root_path = Path(self.root_dir)
        if not root_path.exists():
            raise ConfigurationError(f"Directory does not exist: {self.root_dir}")
        if not root_path.is_dir():
            raise ConfigurationError(f"Not a directory: {self.root_dir}")

        logger.debug(f"Scanning directory: {self.root_dir}, extensions={self.extensions}")

        found_files: List[File] = []
        self.skipped_dirs = []
        pending = [str(root_path)]

        while pending:
            directory = pending.pop()
            try:
                files, subdirs = self._list_directory(directory)
            except EnumerationError as e:
                self.skipped_dirs.append(e)
                logger.debug(f"Skipping subtree: {e}")
                continue

            for path in files:
                file = self._process_file(path, order=len(found_files))
                if file is not None:
                    found_files.append(file)
                    if progress_callback and len(found_files) % self.progress_interval == 0:
                        progress_callback(Stage.SCAN.value, len(found_files), None)

            # Reverse so the stack pops subdirectories in name order
            pending.extend(reversed(subdirs))

        if progress_callback:
            progress_callback(Stage.SCAN.value, len(found_files), None)

        logger.debug(f"Scan completed. Found {len(found_files)} matching files, "
                     f"skipped {len(self.skipped_dirs)} directories.")
        return found_files

    def _list_directory(self, directory: str):
        """
        Lists one directory level.
        Returns (matching file paths, subdirectory paths), both sorted by name.
        Raises EnumerationError if the directory cannot be read.
        """
        files = []
        subdirs = []
        try:
            with os.scandir(directory) as entries:
                for entry in sorted(entries, key=lambda e: e.name):
                    try:
                        if entry.is_symlink():
                            logger.debug(f"Skipping symbolic link: {entry.path}")
                            continue
                        if entry.is_dir(follow_symlinks=False):
                            subdirs.append(entry.path)
                        elif entry.is_file(follow_symlinks=False) and self._extension_passes(entry.name):
                            files.append(entry.path)
                    except OSError as e:
                        logger.debug(f"Could not inspect {entry.path}: {e}")
        except PermissionError as e:
            raise EnumerationError(directory, f"permission denied ({e.strerror})") from e
        except FileNotFoundError as e:
            raise EnumerationError(directory, "directory vanished") from e
        except OSError as e:
            raise EnumerationError(directory, e.strerror or str(e)) from e
        return files, subdirs

    @staticmethod
    def _process_file(path: str, order: int) -> Optional[File]:
        """Stat a single file; returns None if it can no longer be read."""
        try:
            stat_result = os.stat(path, follow_symlinks=False)
        except OSError as e:
            logger.debug(f"Could not stat {path}: {e}")
            return None

        return File(
            path=path,
            size=stat_result.st_size,
            creation_time=creation_time_of(stat_result),
            order=order,
        )

    def _extension_passes(self, filename: str) -> bool:
        """True if the file has one of the allowed extensions (or no allow-list is set)."""
        if not self.extensions:
            return True
        ext = os.path.splitext(filename)[1].lower()
        return ext in self.extensions
