"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/errors.py
Exception hierarchy for clup.

Only ConfigurationError is fatal. The other errors describe per-directory,
per-file or per-duplicate failures that are logged and skipped.
"""


class ClupError(Exception):
    """Base class for all clup errors."""


class ConfigurationError(ClupError, ValueError):
    """Invalid option combination or value. Raised before any filesystem access."""


class EnumerationError(ClupError):
    """A directory could not be listed (permission, path length, vanished)."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot enumerate {path}: {reason}")


class HashingError(ClupError):
    """A candidate file became unreadable between enumeration and hashing."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot hash {path}: {reason}")


class ActionError(ClupError):
    """Delete/move failed for a single duplicate."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot process {path}: {reason}")
