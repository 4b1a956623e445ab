"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/file_service.py
Filesystem mutations applied to duplicates: permanent delete, move to trash,
and move into a target directory.
"""
import os
import shutil
import threading
from pathlib import Path
from send2trash import send2trash


class FileService:
    """
    Cross-platform file operations.
    Every method raises RuntimeError (or FileNotFoundError/FileExistsError)
    with a readable message; callers decide whether to continue.
    """

    # Held across the collision check and the move so concurrent moves of
    # same-named files cannot overwrite each other
    _move_lock = threading.Lock()

    @staticmethod
    def delete_file(file_path: str):
        """Permanently removes a file."""
        path = Path(file_path)

        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        try:
            os.remove(path)
        except OSError as e:
            raise RuntimeError(f"Failed to delete file: {e}") from e

    @staticmethod
    def move_to_trash(file_path: str):
        """Moves a file to the system trash."""
        path = Path(file_path).resolve()

        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        try:
            send2trash(str(path))
        except Exception as e:
            raise RuntimeError(f"Failed to move to trash: {e}") from e

    @staticmethod
    def move_to_directory(file_path: str, target_dir: str) -> str:
        """
        Moves a file into target_dir, keeping its name. Creates target_dir if absent.
        An existing file with the same name is never overwritten.
        Returns the new path.
        """
        path = Path(file_path)

        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        target = Path(target_dir)
        try:
            target.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise RuntimeError(f"Cannot create target directory {target}: {e}") from e

        destination = target / path.name
        with FileService._move_lock:
            if destination.exists():
                raise FileExistsError(f"Target already exists: {destination}")

            try:
                shutil.move(str(path), str(destination))
            except OSError as e:
                raise RuntimeError(f"Failed to move file: {e}") from e
        return str(destination)
