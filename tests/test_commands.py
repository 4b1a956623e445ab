"""
Integration tests for CleanupCommand — scanner → size filter → hasher → resolver.
"""
import shutil
import time
import pytest
from pathlib import Path
from clup import CleanupCommand, CleanupParams, HashMode, DuplicateAction
from clup.core.errors import ConfigurationError
from clup.core.models import Stage
from conftest import write_file


def run(params, action=None):
    command = CleanupCommand()
    stats = command.execute(params, action or DuplicateAction.record())
    return command, stats


def paths(files):
    return [Path(f.path).name for f in files]


class TestCleanupCommandRecord:
    def test_groups_and_statistics(self, test_files, temp_dir):
        command, stats = run(CleanupParams(source_dir=str(temp_dir)))

        groups = sorted(stats.groups.values(), key=lambda g: g[0].size)
        assert paths(groups[0]) == ["dup1_a.txt", "dup1_b.txt", "ignore.tmp", "dup_in_subdir.txt"]
        assert paths(groups[1]) == ["dup2_b.txt", "dup2_a.txt"]
        assert stats.duplicate_count == 4
        assert stats.duplicate_bytes == 3 * 1024 + 2048
        assert list(stats.groups) == [g.key for g in command.get_groups()]
        assert stats.extensions[".txt"].count == 4
        assert command.phase == Stage.REPORT

    def test_counts_match_group_sizes(self, test_files, temp_dir):
        _, stats = run(CleanupParams(source_dir=str(temp_dir)))

        assert stats.duplicate_count == sum(len(g) - 1 for g in stats.groups.values())
        assert stats.duplicate_bytes == sum((len(g) - 1) * g[0].size for g in stats.groups.values())
        assert all(len(g) >= 2 for g in stats.groups.values())

    def test_record_leaves_files_in_place(self, test_files, temp_dir):
        command, _ = run(CleanupParams(source_dir=str(temp_dir)))

        assert all(p.exists() for p in test_files.values())
        assert len(command.dispatcher.handled) == 4

    def test_include_list(self, test_files, temp_dir):
        _, stats = run(CleanupParams(source_dir=str(temp_dir), include_extensions=["txt"]))
        assert stats.duplicate_count == 3

    def test_exclude_list(self, test_files, temp_dir):
        _, stats = run(CleanupParams(source_dir=str(temp_dir), exclude_extensions=["tmp"]))
        assert stats.duplicate_count == 3
        assert all(f.extension != ".tmp" for g in stats.groups.values() for f in g)

    def test_size_limits(self, test_files, temp_dir):
        _, stats = run(CleanupParams(source_dir=str(temp_dir), min_size=2000, max_size=3000))
        assert [paths(g) for g in stats.groups.values()] == [["dup2_b.txt", "dup2_a.txt"]]

    def test_oldest_survives_scenario(self, temp_dir, mtime_as_creation):
        """A(t=1), B(t=3), C(t=2) with identical content → A survives, B and C are duplicates."""
        write_file(temp_dir / "A.bin", b"same", created=1)
        write_file(temp_dir / "B.bin", b"same", created=3)
        write_file(temp_dir / "C.bin", b"same", created=2)

        command, stats = run(CleanupParams(source_dir=str(temp_dir)))

        assert [paths(g) for g in stats.groups.values()] == [["A.bin", "B.bin", "C.bin"]]
        assert sorted(Path(p).name for p in command.dispatcher.handled) == ["B.bin", "C.bin"]

    def test_equal_creation_time_keeps_first_discovered(self, temp_dir, mtime_as_creation):
        write_file(temp_dir / "b.bin", b"same", created=10)
        write_file(temp_dir / "a.bin", b"same", created=10)

        _, stats = run(CleanupParams(source_dir=str(temp_dir)))

        assert stats.survivors[0].name == "a.bin"


class TestHashModes:
    def test_different_extensions_with_extension_mode(self, temp_dir):
        write_file(temp_dir / "a.txt", b"same content")
        write_file(temp_dir / "b.md", b"same content")

        _, stats = run(CleanupParams(source_dir=str(temp_dir), hash_mode=HashMode.CONTENT_AND_EXTENSION))

        assert stats.duplicate_count == 0
        assert stats.groups == {}

    def test_extension_mode_only_splits_groups(self, test_files, temp_dir):
        _, content = run(CleanupParams(source_dir=str(temp_dir)))
        _, by_ext = run(CleanupParams(source_dir=str(temp_dir), hash_mode=HashMode.CONTENT_AND_EXTENSION))

        content_sets = [set(f.path for f in g) for g in content.groups.values()]
        for group in by_ext.groups.values():
            members = set(f.path for f in group)
            assert any(members <= s for s in content_sets)
        assert by_ext.duplicate_count == 3

    def test_filename_mode(self, temp_dir):
        write_file(temp_dir / "one" / "song.mp3", b"music")
        write_file(temp_dir / "two" / "song.mp3", b"music")
        write_file(temp_dir / "two" / "copy of song.mp3", b"music")

        _, stats = run(CleanupParams(source_dir=str(temp_dir), hash_mode=HashMode.CONTENT_AND_FILENAME))

        assert stats.duplicate_count == 1
        assert [f.name for g in stats.groups.values() for f in g] == ["song.mp3", "song.mp3"]

    def test_xxhash_algorithm_finds_the_same_groups(self, test_files, temp_dir):
        _, md5 = run(CleanupParams(source_dir=str(temp_dir)))
        _, xxh = run(CleanupParams(source_dir=str(temp_dir), hash_algorithm="xxh64"))

        assert xxh.duplicate_count == md5.duplicate_count
        assert xxh.duplicate_bytes == md5.duplicate_bytes
        assert sorted(paths(g) for g in xxh.groups.values()) == sorted(paths(g) for g in md5.groups.values())
        assert all(len(key) == 16 for key in xxh.groups)
        assert all(len(key) == 32 for key in md5.groups)


class TestEdgeCases:
    def test_empty_source_directory(self, temp_dir):
        command, stats = run(CleanupParams(source_dir=str(temp_dir)))
        assert stats.duplicate_count == 0
        assert command.get_files() == []
        assert command.get_groups() == []

    def test_single_file(self, temp_dir):
        write_file(temp_dir / "only.txt", b"x")
        command, stats = run(CleanupParams(source_dir=str(temp_dir)))
        assert stats.duplicate_count == 0
        assert len(command.get_files()) == 1

    def test_no_duplicates(self, temp_dir):
        write_file(temp_dir / "a.txt", b"aaa")
        write_file(temp_dir / "b.txt", b"bbb")
        write_file(temp_dir / "c.txt", b"cccc")
        _, stats = run(CleanupParams(source_dir=str(temp_dir)))
        assert stats.duplicate_count == 0

    def test_source_removed_after_validation(self, temp_dir):
        source = temp_dir / "sub"
        source.mkdir()
        params = CleanupParams(source_dir=str(source))
        source.rmdir()

        with pytest.raises(ConfigurationError):
            run(params)


class TestCleanupCommandMutations:
    def test_delete_removes_all_but_oldest(self, test_files, temp_dir):
        command, stats = run(CleanupParams(source_dir=str(temp_dir)), DuplicateAction.delete())

        for key in ("dup1_a", "dup2_b", "unique1", "unique2"):
            assert test_files[key].exists(), key
        for key in ("dup1_b", "sub_dup", "dup2_a", "tmp_dup"):
            assert not test_files[key].exists(), key
        assert command.dispatcher.failures == []
        assert stats.duplicate_count == 4

    def test_move_relocates_duplicates(self, test_files, temp_dir, tmp_path):
        target = tmp_path / "moved"

        run(CleanupParams(source_dir=str(temp_dir)), DuplicateAction.move(str(target)))

        assert sorted(p.name for p in target.iterdir()) == [
            "dup1_b.txt", "dup2_a.txt", "dup_in_subdir.txt", "ignore.tmp"
        ]
        assert test_files["dup1_a"].exists()
        assert test_files["dup2_b"].exists()

    def test_move_collision_does_not_abort_other_files(self, test_files, temp_dir, tmp_path):
        target = tmp_path / "moved"
        write_file(target / "dup2_a.txt", b"already here")

        command, stats = run(CleanupParams(source_dir=str(temp_dir)), DuplicateAction.move(str(target)))

        assert [Path(e.path).name for e in command.dispatcher.failures] == ["dup2_a.txt"]
        assert test_files["dup2_a"].exists()
        assert not test_files["dup1_b"].exists()
        assert (target / "dup2_a.txt").read_bytes() == b"already here"
        assert stats.duplicate_count == 4

    def test_concurrent_moves_of_same_named_files_never_overwrite(self, temp_dir, tmp_path, monkeypatch,
                                                                   mtime_as_creation):
        write_file(temp_dir / "a" / "same.txt", b"AAAA", created=1_000)
        write_file(temp_dir / "b" / "same.txt", b"AAAA", created=2_000)
        write_file(temp_dir / "c" / "same.txt", b"BBBB", created=1_000)
        write_file(temp_dir / "d" / "same.txt", b"BBBB", created=2_000)
        target = tmp_path / "moved"

        real_move = shutil.move

        def slow_move(src, dst):
            time.sleep(0.3)
            return real_move(src, dst)

        monkeypatch.setattr(shutil, "move", slow_move)

        command, stats = run(
            CleanupParams(source_dir=str(temp_dir), max_workers=2),
            DuplicateAction.move(str(target)),
        )

        assert len(command.dispatcher.handled) == 1
        assert len(command.dispatcher.failures) == 1
        assert [p.name for p in target.iterdir()] == ["same.txt"]
        assert (temp_dir / "a" / "same.txt").exists()
        assert (temp_dir / "c" / "same.txt").exists()
        remaining = [(temp_dir / d / "same.txt").exists() for d in ("b", "d")]
        assert sorted(remaining) == [False, True]
        assert stats.duplicate_count == 2

    def test_record_and_delete_produce_identical_statistics(self, test_files, temp_dir):
        _, recorded = run(CleanupParams(source_dir=str(temp_dir)), DuplicateAction.record())
        _, deleted = run(CleanupParams(source_dir=str(temp_dir)), DuplicateAction.delete())

        assert recorded.duplicate_count == deleted.duplicate_count
        assert recorded.duplicate_bytes == deleted.duplicate_bytes
        assert recorded.extensions == deleted.extensions
        assert recorded.groups == deleted.groups

    def test_progress_callback_reports_every_phase(self, test_files, temp_dir):
        stages = set()
        CleanupCommand().execute(
            CleanupParams(source_dir=str(temp_dir)),
            DuplicateAction.record(),
            progress_callback=lambda stage, current, total: stages.add(stage),
        )
        assert stages == {Stage.SCAN.value, Stage.SIZE.value, Stage.HASH.value, Stage.RESOLVE.value}
