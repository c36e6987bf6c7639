"""Tests for shared types module."""

from pathlib import Path

import pytest

from forge_resource.types import (
    LifecycleState,
    PublicationState,
    ResourceSpec,
    RunMode,
    SourceKind,
    SourceSpec,
)


class TestEnums:
    """Test enum definitions."""

    def test_run_mode_values(self) -> None:
        assert RunMode.DEV.value == "dev"
        assert RunMode.PACKAGE.value == "package"

    def test_lifecycle_state_values(self) -> None:
        assert LifecycleState.UNINITIALIZED.value == "uninitialized"
        assert LifecycleState.STAGED.value == "staged"

    def test_source_kind_values(self) -> None:
        assert SourceKind.NONE.value == "none"
        assert SourceKind.ALWAYS.value == "always"
        assert SourceKind.PATHS.value == "paths"


class TestSourceSpec:
    """Test SourceSpec constructors."""

    def test_default_is_none(self) -> None:
        assert SourceSpec().kind is SourceKind.NONE
        assert SourceSpec().paths == ()

    def test_always(self) -> None:
        assert SourceSpec.always().kind is SourceKind.ALWAYS

    def test_of_paths_keeps_order(self) -> None:
        spec = SourceSpec.of_paths("b", Path("a"))
        assert spec.kind is SourceKind.PATHS
        assert spec.paths == (Path("b"), Path("a"))


class TestResourceSpec:
    """Test ResourceSpec dataclass."""

    def test_minimal(self) -> None:
        spec = ResourceSpec(binding_name="CORE_EXE", target_path=Path("out/app"))
        assert spec.build_command is None
        assert spec.source_spec.kind is SourceKind.NONE
        assert spec.stage_as_directory is False
        assert spec.staging_dir_name is None
        assert spec.verbose is False

    def test_is_immutable(self) -> None:
        spec = ResourceSpec(binding_name="CORE_EXE", target_path=Path("out/app"))
        with pytest.raises(AttributeError):
            spec.binding_name = "OTHER"  # type: ignore[misc]

    def test_staged_source_file_mode(self) -> None:
        spec = ResourceSpec(binding_name="X", target_path=Path("out/bin/app"))
        assert spec.staged_source == Path("out/bin/app")

    def test_staged_source_directory_mode(self) -> None:
        spec = ResourceSpec(
            binding_name="X",
            target_path=Path("out/bin/app"),
            stage_as_directory=True,
        )
        assert spec.staged_source == Path("out/bin")

    def test_configured_target_defaults_to_path(self) -> None:
        spec = ResourceSpec(binding_name="X", target_path=Path("./out/bin/app"))
        assert spec.configured_target == str(Path("out/bin/app"))

    def test_configured_target_keeps_raw_string(self) -> None:
        spec = ResourceSpec(
            binding_name="X",
            target_path=Path("./out/bin/app"),
            configured_path="./out/bin/app",
        )
        assert spec.configured_target == "./out/bin/app"


class TestPublicationState:
    """Test PublicationState."""

    def test_starts_unpublished(self) -> None:
        assert PublicationState().published is False

    def test_mark_published_is_sticky(self) -> None:
        state = PublicationState()
        state.mark_published()
        state.mark_published()
        assert state.published is True
