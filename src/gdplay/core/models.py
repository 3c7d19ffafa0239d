"""Core data models for gdplay."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from gdplay.build.dependency import DependencyReference, resolve_dependency
from gdplay.build.fingerprint import workspace_name
from gdplay.core.errors import ConfigError
from gdplay.core.logging import Verbosity

TARGET_NAME = "SwiftGodotBuilderPlayground"


class ViewKind(Enum):
    """Shape of the user's root type."""

    GVIEW = "gview"  # declarative view, wrapped in a synthesized root node
    GODOT_CLASS = "godot_class"  # @Godot class, registered directly


class BuildProfile(Enum):
    """Swift build configuration."""

    DEBUG = "debug"
    RELEASE = "release"


def absolute_path(path: str | Path, base_directory: Path) -> Path:
    """Resolve ``path`` against ``base_directory``, normalizing ``..`` lexically."""
    candidate = Path(path).expanduser()
    if not candidate.is_absolute():
        candidate = base_directory / candidate
    return Path(os.path.normpath(candidate))


def existing_directories(paths: list[str] | tuple[str, ...], base_directory: Path, label: str) -> tuple[Path, ...]:
    """Resolve each path and require it to be a directory."""
    resolved = []
    for raw in paths:
        path = absolute_path(raw, base_directory)
        if not path.is_dir():
            raise ConfigError(f"{label} directory not found at {path}")
        resolved.append(path)
    return tuple(resolved)


@dataclass(frozen=True)
class BuildConfig:
    """Everything a single invocation needs, validated up front.

    All paths are absolute. ``from_options`` checks every input path before
    constructing the object, so a BuildConfig is never partially valid.
    """

    view_file: Path
    view_source: str
    view_type: str
    view_kind: ViewKind
    asset_directories: tuple[Path, ...]
    include_directories: tuple[Path, ...]
    swift_command: str
    godot_command: str
    run_godot: bool
    cache_root: Path
    builder_dependency: DependencyReference
    swiftgodot_rev: str
    build_configuration: BuildProfile
    workspace_directory: Path
    verbosity: Verbosity = Verbosity.DEFAULT
    codesign: bool = False
    custom_project_godot: Path | None = None

    @property
    def quiet(self) -> bool:
        return self.verbosity == Verbosity.QUIET

    @property
    def verbose(self) -> bool:
        return self.verbosity >= Verbosity.VERBOSE

    @property
    def target_name(self) -> str:
        return TARGET_NAME

    @classmethod
    def from_options(
        cls,
        *,
        view_file: str,
        base_directory: Path,
        cache_root: Path,
        swift_command: str,
        godot_command: str,
        root: str | None = None,
        assets: tuple[str, ...] = (),
        include: tuple[str, ...] = (),
        run_godot: bool = True,
        builder_path: str | None = None,
        builder_rev: str | None = None,
        builder_env_path: str | None = None,
        swiftgodot_rev: str | None = None,
        project: str | None = None,
        release: bool = False,
        verbosity: Verbosity = Verbosity.DEFAULT,
        codesign: bool = False,
    ) -> BuildConfig:
        """Validate raw command-line values and build the config.

        Raises ConfigError for missing files or directories and when no
        root type can be detected.
        """
        view_path = absolute_path(view_file, base_directory)
        if not view_path.is_file():
            raise ConfigError(f"View file not found at {view_path}")

        asset_directories = existing_directories(assets, base_directory, "Assets")
        include_directories = existing_directories(include, base_directory, "Include")

        custom_project = None
        if project is not None:
            custom_project = absolute_path(project, base_directory)
            if not custom_project.is_file():
                raise ConfigError(f"Project file not found at {custom_project}")

        try:
            view_source = view_path.read_bytes().decode("utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigError(f"Unable to read view file {view_path}: {e}") from e

        from gdplay.core.detect import resolve_component

        view_type, view_kind = resolve_component(view_source, root)
        cache_root = absolute_path(cache_root, base_directory)

        return cls(
            view_file=view_path,
            view_source=view_source,
            view_type=view_type,
            view_kind=view_kind,
            asset_directories=asset_directories,
            include_directories=include_directories,
            swift_command=swift_command,
            godot_command=godot_command,
            run_godot=run_godot,
            cache_root=cache_root,
            builder_dependency=resolve_dependency(
                override_path=absolute_path(builder_path, base_directory) if builder_path else None,
                rev=builder_rev,
                base_directory=base_directory,
                env_path=builder_env_path,
            ),
            swiftgodot_rev=swiftgodot_rev or "main",
            build_configuration=BuildProfile.RELEASE if release else BuildProfile.DEBUG,
            workspace_directory=cache_root / workspace_name(view_path, view_type),
            verbosity=verbosity,
            codesign=codesign,
            custom_project_godot=custom_project,
        )
