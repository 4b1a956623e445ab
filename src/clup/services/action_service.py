"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/action_service.py
Per-duplicate actions (delete, move, record) and the dispatcher that applies
them from the resolving workers.
"""
import logging
import threading
from dataclasses import dataclass
from typing import List, Optional

from clup.core.errors import ActionError, ConfigurationError
from clup.core.models import ActionKind, File
from clup.services.file_service import FileService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DuplicateAction:
    """
    What to do with a non-surviving file. Selected once per run.

    Usage:
        DuplicateAction.delete()                  # os.remove
        DuplicateAction.delete(use_trash=True)    # send2trash
        DuplicateAction.move("/backup/dupes")     # move into directory
        DuplicateAction.record()                  # report only
    """
    kind: ActionKind
    target_dir: Optional[str] = None
    use_trash: bool = False

    def __post_init__(self):
        if self.kind == ActionKind.MOVE and not self.target_dir:
            raise ConfigurationError("The move action requires a target directory")

    @classmethod
    def delete(cls, use_trash: bool = False) -> 'DuplicateAction':
        return cls(ActionKind.DELETE, use_trash=use_trash)

    @classmethod
    def move(cls, target_dir: str) -> 'DuplicateAction':
        return cls(ActionKind.MOVE, target_dir=target_dir)

    @classmethod
    def record(cls) -> 'DuplicateAction':
        return cls(ActionKind.RECORD)

    def apply(self, path: str) -> None:
        """Applies the action to one path. Raises ActionError on failure."""
        try:
            if self.kind == ActionKind.DELETE:
                if self.use_trash:
                    FileService.move_to_trash(path)
                else:
                    FileService.delete_file(path)
            elif self.kind == ActionKind.MOVE:
                FileService.move_to_directory(path, self.target_dir)
        except (OSError, RuntimeError) as e:
            raise ActionError(path, str(e)) from e


class ActionDispatcher:
    """
    Invoked once per duplicate from the resolving workers.
    Failures are logged and collected; they never stop other files or groups.
    """

    def __init__(self, action: DuplicateAction):
        self.action = action
        self._lock = threading.Lock()
        self.handled: List[str] = []
        self.failures: List[ActionError] = []

    def __call__(self, file: File) -> None:
        try:
            self.action.apply(file.path)
        except ActionError as e:
            logger.warning(str(e))
            with self._lock:
                self.failures.append(e)
            return

        logger.debug(f"{self.action.kind.value}: {file.path}")
        with self._lock:
            self.handled.append(file.path)
