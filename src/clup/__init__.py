"""
clup — keep one copy of every duplicate file.

Core features:
- Two-phase detection: size bucketing, then full-content hashing (MD5 or xxHash64)
- Three hash modes: content, content + extension, content + filename
- The oldest copy of every group survives; the others are deleted, moved, or listed
- CLI interface for headless/server usage
"""

# Get version
try:
    from importlib.metadata import version as _version
    __version__ = _version("clup")
except Exception:
    try:
        import tomllib  # Python 3.11+
    except ImportError:
        import tomli as tomllib  # Python < 3.11: pip install tomli

    from pathlib import Path

    _pyproject = Path(__file__).resolve().parents[2] / "pyproject.toml"  # src/clup/__init__.py
    if _pyproject.is_file():
        with open(_pyproject, "rb") as f:
            __version__ = tomllib.load(f)["project"]["version"]
    else:
        __version__ = "unknown"

# Public API: only what users should import directly
from clup.commands import CleanupCommand
from clup.core import (
    CleanupParams, HashMode, ActionKind, File, DuplicateGroup, RunStatistics,
    ClupError, ConfigurationError, ActionError,
)
from clup.services import DuplicateAction, ActionDispatcher, FileService, ReportService
from clup.utils.convert_utils import ConvertUtils

__all__ = [
    "CleanupCommand",
    "CleanupParams",
    "HashMode",
    "ActionKind",
    "File",
    "DuplicateGroup",
    "RunStatistics",
    "ClupError",
    "ConfigurationError",
    "ActionError",
    "DuplicateAction",
    "ActionDispatcher",
    "FileService",
    "ReportService",
    "ConvertUtils",
    "__version__",
]
