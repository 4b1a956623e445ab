"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models and configuration objects for duplicate detection and cleanup.
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from clup.core.errors import ConfigurationError
from clup.utils.convert_utils import ConvertUtils


DEFAULT_MAX_SIZE = 104_857_600  # 100MB
DEFAULT_HASH_ALGORITHM = "md5"


# =============================
# Enums
# =============================

class HashMode(Enum):
    """
    Controls which file attributes take part in the detection key
    alongside the content digest.
    """
    CONTENT = "content"
    CONTENT_AND_EXTENSION = "extension"
    CONTENT_AND_FILENAME = "filename"

    @property
    def display_name(self) -> str:
        """Human-readable name for reports."""
        mapping = {
            HashMode.CONTENT: "Content",
            HashMode.CONTENT_AND_EXTENSION: "Content + Extension",
            HashMode.CONTENT_AND_FILENAME: "Content + Filename",
        }
        return mapping.get(self, self.value)

    def __repr__(self) -> str:
        return self.value


class ActionKind(Enum):
    """What happens to every non-surviving file of a duplicate group."""
    DELETE = "delete"
    MOVE = "move"
    RECORD = "record"


class Stage(str, Enum):
    SCAN = "Scanning"
    SIZE = "Size grouping"
    HASH = "Content hashing"
    RESOLVE = "Resolving duplicates"
    REPORT = "Reporting"


class ExtensionPreset(Enum):
    """Quick filters for common file families."""
    IMAGES = "images"
    AUDIO = "audio"
    VIDEO = "video"
    DOCUMENTS = "documents"
    ARCHIVES = "archives"

    @property
    def extensions(self) -> List[str]:
        mapping = {
            ExtensionPreset.IMAGES: [".jpg", ".jpeg", ".png", ".gif", ".bmp", ".tif", ".tiff", ".webp", ".heic", ".raw"],
            ExtensionPreset.AUDIO: [".mp3", ".wav", ".flac", ".aac", ".ogg", ".m4a", ".wma"],
            ExtensionPreset.VIDEO: [".mp4", ".mkv", ".avi", ".mov", ".wmv", ".webm", ".m4v", ".mpg", ".mpeg"],
            ExtensionPreset.DOCUMENTS: [".pdf", ".doc", ".docx", ".xls", ".xlsx", ".ppt", ".pptx", ".txt", ".odt", ".rtf"],
            ExtensionPreset.ARCHIVES: [".zip", ".rar", ".7z", ".tar", ".gz", ".bz2", ".xz"],
        }
        return list(mapping[self])


# ======================
#  Core Data Models
# ======================

@dataclass(frozen=True)
class File:
    """
    A single file discovered during enumeration.
    Immutable: metadata is read once from the filesystem and never refreshed.
    """
    path: str
    size: int  # in bytes
    creation_time: float = 0.0  # POSIX timestamp
    order: int = 0  # discovery index, used to keep groups in discovery order
    name: Optional[str] = None
    extension: Optional[str] = None

    def __post_init__(self):
        """Extract basename and lower-cased extension from path if not provided."""
        if self.name is None:
            object.__setattr__(self, "name", os.path.basename(self.path))

        if self.extension is None:
            _, ext = os.path.splitext(self.name)
            object.__setattr__(self, "extension", ext.lower())  # ".JPG" → ".jpg"

    def __repr__(self):
        return f"<File path={self.path}, size={self.size}>"


@dataclass
class DuplicateGroup:
    """
    Files sharing one detection key, in discovery order.
    A group always holds at least two files.
    """
    key: str
    size: int
    files: List[File]

    def __post_init__(self):
        if len(self.files) < 2:
            raise ValueError("A duplicate group needs at least two files")

    @property
    def duplicate_count(self) -> int:
        """How many files would be removed: everything but the survivor."""
        return len(self.files) - 1

    def __repr__(self):
        return f"<DuplicateGroup key={self.key}, size={self.size}, count={len(self.files)}>"


@dataclass(frozen=True)
class ExtensionStats:
    count: int = 0
    bytes: int = 0


@dataclass(frozen=True)
class RunStatistics:
    """
    Read-only result of a run, produced once the timer is stopped.
    `groups` maps each detection key to its files, survivor first.
    """
    elapsed: float = 0.0
    duplicate_count: int = 0
    duplicate_bytes: int = 0
    extensions: Dict[str, ExtensionStats] = field(default_factory=dict)
    groups: Dict[str, Tuple[File, ...]] = field(default_factory=dict)

    @property
    def survivors(self) -> List[File]:
        return [files[0] for files in self.groups.values()]

    @property
    def duplicates(self) -> List[File]:
        return [f for files in self.groups.values() for f in files[1:]]


# =============================
# Configuration
# =============================

def normalize_extensions(extensions: Optional[List[str]]) -> List[str]:
    """Lower-case, strip, and prefix each extension with a dot."""
    normalized = []
    for ext in extensions or []:
        ext = ext.strip().lower()
        if ext and not ext.startswith('.'):
            ext = f".{ext}"
        if ext and ext not in normalized:
            normalized.append(ext)
    return normalized


@dataclass
class CleanupParams:
    """
    Validated configuration for a cleanup run.
    Interface-agnostic; the CLI builds it from arguments.
    """
    source_dir: str
    include_extensions: List[str] = field(default_factory=list)
    exclude_extensions: List[str] = field(default_factory=list)
    min_size: int = 0
    max_size: int = DEFAULT_MAX_SIZE
    hash_mode: HashMode = HashMode.CONTENT
    verbose: bool = False
    max_workers: Optional[int] = None
    hash_algorithm: str = DEFAULT_HASH_ALGORITHM

    def __post_init__(self):
        """Validate parameters immediately after creation."""
        if not self.source_dir:
            raise ConfigurationError("The source directory can't be empty")
        if not os.path.exists(self.source_dir):
            raise ConfigurationError(f"The source directory doesn't exist: {self.source_dir}")
        if not os.path.isdir(self.source_dir):
            raise ConfigurationError(f"The source path is not a directory: {self.source_dir}")

        if self.min_size < 0:
            raise ConfigurationError("The minimum file size must be a positive number")
        if self.max_size <= self.min_size:
            raise ConfigurationError("The maximum size must be greater than the minimum size")

        if self.max_workers is not None and self.max_workers < 1:
            raise ConfigurationError("The number of workers must be at least 1")

        from clup.core.hasher import HASH_ALGORITHMS  # hasher imports this module
        if self.hash_algorithm not in HASH_ALGORITHMS:
            raise ConfigurationError(
                f"Unknown hash algorithm: '{self.hash_algorithm}' "
                f"(expected one of: {', '.join(HASH_ALGORITHMS)})"
            )

        self.include_extensions = normalize_extensions(self.include_extensions)
        self.exclude_extensions = normalize_extensions(self.exclude_extensions)

        for ext in self.include_extensions + self.exclude_extensions:
            if any(c in ext for c in ("/", "\\", "\0", os.sep)):
                raise ConfigurationError(f"Invalid file extension: '{ext}'")

        if self.include_extensions and self.exclude_extensions:
            raise ConfigurationError(
                "The list of extensions to exclude must be empty when "
                "other extensions to look for are specified"
            )

    @staticmethod
    def from_human_readable(
            source_dir: str,
            min_size_str: str = "0",
            max_size_str: str = str(DEFAULT_MAX_SIZE),
            include_str: str = "",
            exclude_str: str = "",
            preset: Optional[ExtensionPreset] = None,
            hash_mode: HashMode = HashMode.CONTENT,
            verbose: bool = False,
            max_workers: Optional[int] = None,
            hash_algorithm: str = DEFAULT_HASH_ALGORITHM,
    ) -> 'CleanupParams':
        """
        Factory method to create params from human-readable inputs.
        Sizes accept suffixes (500K, 10MB); extension lists are comma separated.
        """
        try:
            min_size = ConvertUtils.human_to_bytes(min_size_str)
            max_size = ConvertUtils.human_to_bytes(max_size_str)
        except ValueError as e:
            raise ConfigurationError(f"Invalid size format: {e}") from e

        include = [ext.strip() for ext in include_str.split(",") if ext.strip()] if include_str else []
        exclude = [ext.strip() for ext in exclude_str.split(",") if ext.strip()] if exclude_str else []

        if preset is not None:
            if include or exclude:
                raise ConfigurationError("The preset option cannot be used with --include or --exclude")
            include = preset.extensions

        return CleanupParams(
            source_dir=source_dir,
            include_extensions=include,
            exclude_extensions=exclude,
            min_size=min_size,
            max_size=max_size,
            hash_mode=hash_mode,
            verbose=verbose,
            max_workers=max_workers,
            hash_algorithm=hash_algorithm,
        )
