"""
Tests for data models and CleanupParams validation.
"""
import dataclasses
import pytest
from clup.core.errors import ConfigurationError
from clup.core.models import (
    File, DuplicateGroup, CleanupParams, HashMode, ExtensionPreset, RunStatistics, DEFAULT_MAX_SIZE
)


class TestFile:
    def test_name_and_extension_derived_from_path(self):
        file = File(path="/photos/Holiday.JPG", size=10)
        assert file.name == "Holiday.JPG"
        assert file.extension == ".jpg"

    def test_file_without_extension(self):
        assert File(path="/bin/Makefile", size=1).extension == ""

    def test_file_is_immutable(self):
        file = File(path="/a.txt", size=1)
        with pytest.raises(dataclasses.FrozenInstanceError):
            file.size = 2


class TestDuplicateGroup:
    def test_requires_two_files(self):
        with pytest.raises(ValueError):
            DuplicateGroup(key="k", size=1, files=[File("/a", 1)])

    def test_duplicate_count_excludes_survivor(self):
        group = DuplicateGroup(key="k", size=1, files=[File("/a", 1), File("/b", 1), File("/c", 1)])
        assert group.duplicate_count == 2


class TestRunStatistics:
    def test_survivors_and_duplicates(self):
        a, b, c = File("/a", 1), File("/b", 1), File("/c", 1)
        stats = RunStatistics(groups={"k": (b, a, c)})
        assert stats.survivors == [b]
        assert stats.duplicates == [a, c]


class TestCleanupParams:
    def test_defaults(self, temp_dir):
        params = CleanupParams(source_dir=str(temp_dir))
        assert params.min_size == 0
        assert params.max_size == DEFAULT_MAX_SIZE
        assert params.hash_mode == HashMode.CONTENT
        assert params.hash_algorithm == "md5"

    def test_extensions_are_normalized(self, temp_dir):
        params = CleanupParams(source_dir=str(temp_dir), include_extensions=["JPG", " .Png ", "jpg", ""])
        assert params.include_extensions == [".jpg", ".png"]

    @pytest.mark.parametrize("kwargs, message", [
        ({"min_size": -1}, "positive"),
        ({"min_size": 100, "max_size": 100}, "greater than"),
        ({"min_size": 200, "max_size": 100}, "greater than"),
        ({"include_extensions": ["jpg"], "exclude_extensions": ["png"]}, "must be empty"),
        ({"include_extensions": ["a/b"]}, "Invalid file extension"),
        ({"max_workers": 0}, "workers"),
        ({"hash_algorithm": "sha1"}, "Unknown hash algorithm"),
    ])
    def test_invalid_values_raise_configuration_error(self, temp_dir, kwargs, message):
        with pytest.raises(ConfigurationError, match=message):
            CleanupParams(source_dir=str(temp_dir), **kwargs)

    def test_missing_source_directory(self, temp_dir):
        with pytest.raises(ConfigurationError, match="doesn't exist"):
            CleanupParams(source_dir=str(temp_dir / "nope"))

    def test_empty_source_directory(self):
        with pytest.raises(ConfigurationError, match="can't be empty"):
            CleanupParams(source_dir="")

    def test_source_must_be_directory(self, temp_dir):
        file = temp_dir / "f.txt"
        file.write_text("x")
        with pytest.raises(ConfigurationError, match="not a directory"):
            CleanupParams(source_dir=str(file))

    def test_configuration_error_is_value_error(self):
        assert issubclass(ConfigurationError, ValueError)


class TestFromHumanReadable:
    def test_parses_sizes_and_extension_lists(self, temp_dir):
        params = CleanupParams.from_human_readable(
            source_dir=str(temp_dir),
            min_size_str="1K",
            max_size_str="10MB",
            include_str="jpg, png",
            hash_mode=HashMode.CONTENT_AND_EXTENSION,
        )
        assert params.min_size == 1024
        assert params.max_size == 10 * 1024 * 1024
        assert params.include_extensions == [".jpg", ".png"]
        assert params.hash_mode == HashMode.CONTENT_AND_EXTENSION

    def test_hash_algorithm_is_passed_through(self, temp_dir):
        params = CleanupParams.from_human_readable(str(temp_dir), hash_algorithm="xxh64")
        assert params.hash_algorithm == "xxh64"

    def test_preset_fills_include_list(self, temp_dir):
        params = CleanupParams.from_human_readable(str(temp_dir), preset=ExtensionPreset.IMAGES)
        assert ".jpg" in params.include_extensions

    def test_preset_with_include_is_rejected(self, temp_dir):
        with pytest.raises(ConfigurationError, match="preset"):
            CleanupParams.from_human_readable(str(temp_dir), include_str="txt", preset=ExtensionPreset.AUDIO)

    def test_invalid_size_is_configuration_error(self, temp_dir):
        with pytest.raises(ConfigurationError, match="Invalid size"):
            CleanupParams.from_human_readable(str(temp_dir), min_size_str="lots")
