"""Tests for builds/staleness.py module.

Timestamps are pinned with os.utime so comparisons are deterministic.
"""

import os
from pathlib import Path

import pytest

from forge_resource.builds.staleness import needs_rebuild, resolve_path
from forge_resource.errors import InvalidSourceTypeError, SourceNotFoundError
from forge_resource.types import ResourceSpec, SourceSpec

TARGET_TIME = 1_700_000_000


def touch(path: Path, mtime: int) -> Path:
    """Create path (if needed) and set its modification time."""
    path.parent.mkdir(parents=True, exist_ok=True)
    if not path.exists():
        path.write_text("x")
    os.utime(path, (mtime, mtime))
    return path


def make_spec(target: Path, sources: SourceSpec | None = None) -> ResourceSpec:
    return ResourceSpec(
        binding_name="CORE_EXE",
        target_path=target,
        source_spec=sources or SourceSpec.none(),
        verbose=True,
    )


@pytest.fixture
def target(tmp_path: Path) -> Path:
    """An existing target file with a known mtime."""
    return touch(tmp_path / "out" / "app", TARGET_TIME)


class TestMissingTarget:
    """A missing target is always stale."""

    @pytest.mark.parametrize(
        "sources",
        [SourceSpec.none(), SourceSpec.always(), SourceSpec.of_paths("missing-src")],
    )
    def test_missing_target_is_stale(self, tmp_path, sources):
        """Should not even look at sources when the target is missing."""
        assert needs_rebuild(make_spec(tmp_path / "absent", sources)) is True


class TestNoSources:
    """Existing targets without sources are fresh."""

    def test_existing_target_is_fresh(self, target):
        assert needs_rebuild(make_spec(target)) is False

    def test_existing_directory_target_is_fresh(self, tmp_path):
        out = tmp_path / "outdir"
        out.mkdir()
        assert needs_rebuild(make_spec(out)) is False


class TestAlways:
    """{always: true} bypasses timestamps."""

    def test_always_rebuilds_even_when_newer(self, tmp_path):
        target = touch(tmp_path / "app", TARGET_TIME + 10_000)
        source = touch(tmp_path / "src.c", TARGET_TIME)
        spec = ResourceSpec(
            binding_name="X",
            target_path=target,
            source_spec=SourceSpec.always(),
        )
        assert source.stat().st_mtime < target.stat().st_mtime
        assert needs_rebuild(spec) is True


class TestSourceFiles:
    """Single-file source comparisons."""

    def test_newer_source_is_stale(self, tmp_path, target):
        source = touch(tmp_path / "src.c", TARGET_TIME + 1)
        assert needs_rebuild(make_spec(target, SourceSpec.of_paths(source))) is True

    def test_equal_timestamp_is_fresh(self, tmp_path, target):
        source = touch(tmp_path / "src.c", TARGET_TIME)
        assert needs_rebuild(make_spec(target, SourceSpec.of_paths(source))) is False

    def test_older_source_is_fresh(self, tmp_path, target):
        source = touch(tmp_path / "src.c", TARGET_TIME - 1)
        assert needs_rebuild(make_spec(target, SourceSpec.of_paths(source))) is False

    def test_any_newer_source_in_list(self, tmp_path, target):
        old = touch(tmp_path / "old.c", TARGET_TIME - 5)
        new = touch(tmp_path / "new.c", TARGET_TIME + 5)
        assert needs_rebuild(make_spec(target, SourceSpec.of_paths(old, new))) is True

    def test_short_circuits_before_missing_source(self, tmp_path, target):
        """A newer source earlier in the list wins before a later missing one."""
        new = touch(tmp_path / "new.c", TARGET_TIME + 5)
        spec = make_spec(target, SourceSpec.of_paths(new, tmp_path / "missing"))
        assert needs_rebuild(spec) is True


class TestSourceDirectories:
    """Directory sources are scanned one level deep."""

    def test_empty_directory_is_fresh(self, tmp_path, target):
        src = tmp_path / "src"
        src.mkdir()
        assert needs_rebuild(make_spec(target, SourceSpec.of_paths(src))) is False

    def test_directory_with_newer_file_is_stale(self, tmp_path, target):
        src = tmp_path / "src"
        touch(src / "old.cs", TARGET_TIME - 10)
        touch(src / "new.cs", TARGET_TIME + 10)
        assert needs_rebuild(make_spec(target, SourceSpec.of_paths(src))) is True

    def test_directory_with_only_older_files_is_fresh(self, tmp_path, target):
        src = tmp_path / "src"
        touch(src / "a.cs", TARGET_TIME - 10)
        touch(src / "b.cs", TARGET_TIME)
        assert needs_rebuild(make_spec(target, SourceSpec.of_paths(src))) is False

    def test_nested_files_are_not_scanned(self, tmp_path, target):
        """Only immediate entries count; subdirectories are not descended."""
        src = tmp_path / "src"
        touch(src / "nested" / "deep.cs", TARGET_TIME + 10)
        os.utime(src / "nested", (TARGET_TIME - 10, TARGET_TIME - 10))
        assert needs_rebuild(make_spec(target, SourceSpec.of_paths(src))) is False

    def test_subdirectory_mtime_ignored(self, tmp_path, target):
        """A newer subdirectory entry is not a file and does not count."""
        src = tmp_path / "src"
        (src / "nested").mkdir(parents=True)
        os.utime(src / "nested", (TARGET_TIME + 10, TARGET_TIME + 10))
        assert needs_rebuild(make_spec(target, SourceSpec.of_paths(src))) is False

    def test_broken_entry_is_skipped(self, tmp_path, target):
        """An entry that cannot be stat'd is logged and skipped."""
        src = tmp_path / "src"
        src.mkdir()
        (src / "dangling").symlink_to(tmp_path / "nowhere")
        touch(src / "old.cs", TARGET_TIME - 1)
        assert needs_rebuild(make_spec(target, SourceSpec.of_paths(src))) is False


class TestSourceErrors:
    """Configuration errors in sources are fatal."""

    def test_missing_source_raises(self, tmp_path, target):
        with pytest.raises(SourceNotFoundError, match="Source path not found"):
            needs_rebuild(make_spec(target, SourceSpec.of_paths(tmp_path / "nope")))

    def test_dangling_symlink_source_raises_not_found(self, tmp_path, target):
        link = tmp_path / "link"
        link.symlink_to(tmp_path / "nowhere")
        with pytest.raises(SourceNotFoundError):
            needs_rebuild(make_spec(target, SourceSpec.of_paths(link)))

    def test_special_file_raises_invalid_type(self, tmp_path, target):
        fifo = tmp_path / "pipe"
        if not hasattr(os, "mkfifo"):
            pytest.skip("mkfifo not available")
        os.mkfifo(fifo)
        with pytest.raises(InvalidSourceTypeError, match="neither a file nor a directory"):
            needs_rebuild(make_spec(target, SourceSpec.of_paths(fifo)))


class TestBaseDir:
    """Relative paths resolve against the working directory."""

    def test_resolve_path_relative(self, tmp_path):
        assert resolve_path(Path("out/app"), tmp_path) == tmp_path / "out/app"

    def test_resolve_path_absolute(self, tmp_path):
        assert resolve_path(tmp_path / "x", Path("/elsewhere")) == tmp_path / "x"

    def test_resolve_path_without_base(self):
        assert resolve_path(Path("out/app")) == Path("out/app")

    def test_relative_spec_uses_base_dir(self, tmp_path):
        touch(tmp_path / "out" / "app", TARGET_TIME)
        touch(tmp_path / "src" / "main.cs", TARGET_TIME + 1)
        spec = make_spec(Path("out/app"), SourceSpec.of_paths("src"))
        assert needs_rebuild(spec, tmp_path) is True


class TestDiagnostics:
    """Diagnostic lines depend on the verbose flag."""

    def test_verbose_logs(self, tmp_path, caplog):
        caplog.set_level("INFO")
        needs_rebuild(make_spec(tmp_path / "absent"))
        assert "does not exist" in caplog.text
        assert "ResourcePlugin:" in caplog.text

    def test_quiet_does_not_log(self, tmp_path, caplog):
        caplog.set_level("DEBUG")
        spec = ResourceSpec(binding_name="X", target_path=tmp_path / "absent")
        needs_rebuild(spec)
        assert "does not exist" not in caplog.text
