"""
Shared fixtures for clup tests.
Creates isolated temporary directories with controlled test files.
"""
import os
import pytest
import tempfile
from pathlib import Path
from typing import Dict
import sys

# Add src/ to sys.path so 'clup' is importable without installation
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from clup.core import scanner  # noqa: E402


@pytest.fixture
def temp_dir():
    """Creates isolated temporary directory, auto-cleanup after test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def mtime_as_creation(monkeypatch):
    """
    Makes the scanner read creation time from st_mtime, which tests can set
    with os.utime on every platform.
    """
    monkeypatch.setattr(scanner, "creation_time_of", lambda st: st.st_mtime)


def write_file(path: Path, content: bytes, created: float = None) -> Path:
    """Writes content to path; optionally sets mtime (see mtime_as_creation)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)
    if created is not None:
        os.utime(path, (created, created))
    return path


@pytest.fixture
def test_files(temp_dir, mtime_as_creation) -> Dict[str, Path]:
    """
    Creates controlled test files:
    - 3 identical 1KB files (one in a subdirectory), oldest is dup1_a
    - 2 identical 2KB files, oldest is dup2_b
    - 2 unique files, one sharing a size with the 1KB group
    - 1 .tmp file with the 1KB content
    """
    files = {}
    content_a = b"A" * 1024
    content_b = b"B" * 2048

    files["dup1_a"] = write_file(temp_dir / "dup1_a.txt", content_a, created=1_000)
    files["dup1_b"] = write_file(temp_dir / "dup1_b.txt", content_a, created=3_000)
    files["sub_dup"] = write_file(temp_dir / "subdir" / "dup_in_subdir.txt", content_a, created=2_000)

    files["dup2_a"] = write_file(temp_dir / "dup2_a.txt", content_b, created=5_000)
    files["dup2_b"] = write_file(temp_dir / "dup2_b.txt", content_b, created=4_000)

    files["unique1"] = write_file(temp_dir / "unique1.txt", b"C" * 1024, created=1_000)
    files["unique2"] = write_file(temp_dir / "unique2.txt", b"D" * 2500, created=1_000)

    files["tmp_dup"] = write_file(temp_dir / "ignore.tmp", content_a, created=6_000)

    return files
