"""Workspace scaffolding — Swift package, Godot project and asset links.

Every step converges on the state implied by the current BuildConfig, so
``prepare()`` can run against a fresh or an existing workspace. Generated
text goes through write_if_changed, which keeps unchanged files (and
their mtimes) untouched and lets ``swift build`` stay incremental.
"""

from __future__ import annotations

import shutil
from pathlib import Path

from gdplay.build import templates
from gdplay.build.writer import write_if_changed
from gdplay.core.errors import ScaffoldError
from gdplay.core.logging import PlaygroundLogger
from gdplay.core.models import BuildConfig

SOURCE_SUFFIX = ".swift"


class Scaffold:
    """Lays out and refreshes one playground workspace."""

    def __init__(self, config: BuildConfig, logger: PlaygroundLogger):
        self.config = config
        self.logger = logger
        self.target_name = config.target_name

    # -- Layout --

    @property
    def package_directory(self) -> Path:
        return self.config.workspace_directory / "SwiftPackage"

    @property
    def sources_directory(self) -> Path:
        return self.package_directory / "Sources" / self.target_name

    @property
    def godot_directory(self) -> Path:
        return self.config.workspace_directory / "GodotProject"

    @property
    def godot_bin_directory(self) -> Path:
        return self.godot_directory / "bin"

    @property
    def godot_hidden_directory(self) -> Path:
        return self.godot_directory / ".godot"

    @property
    def checksum_file(self) -> Path:
        return self.config.workspace_directory / ".asset-checksum"

    # -- Entry point --

    def prepare(self) -> None:
        """Bring the workspace in line with the config. Any OSError aborts."""
        self.logger.stage_start("scaffold")
        try:
            self.ensure_directories()
            self.write_swift_sources()
            self.write_package_manifest()
            self.write_godot_files()
            self.link_asset_directories()
        except OSError as e:
            target = e.filename or self.config.workspace_directory
            raise ScaffoldError(f"Failed to prepare workspace at {target}: {e.strerror or e}") from e
        self.logger.stage_finish("scaffold")

    # -- Steps --

    def ensure_directories(self) -> None:
        for directory in (
            self.config.cache_root,
            self.config.workspace_directory,
            self.package_directory,
            self.sources_directory,
            self.godot_directory,
            self.godot_bin_directory,
            self.godot_hidden_directory,
        ):
            directory.mkdir(parents=True, exist_ok=True)

    def plan_swift_sources(self) -> dict[str, str]:
        """File name -> content for every source the package should hold.

        The view file comes first and include-directory files never replace
        a name already planned. The generated entry point always wins.
        """
        plan = {self.config.view_file.name: self.config.view_source}

        for include_dir in self.config.include_directories:
            for source in sorted(include_dir.iterdir()):
                if source.suffix != SOURCE_SUFFIX or not source.is_file():
                    continue
                if source.name in plan:
                    self.logger.debug(f"Skipping {source.name} (already exists)")
                    continue
                try:
                    plan[source.name] = source.read_bytes().decode("utf-8")
                except UnicodeDecodeError as e:
                    raise ScaffoldError(f"Include file {source} is not valid UTF-8") from e
                self.logger.debug(f"Copied: {source.name}")

        plan[templates.ENTRY_POINT_FILENAME] = templates.render_entry_point(
            self.config.view_type, self.config.view_kind
        )
        return plan

    def clear_stale_sources(self, keep: set[str]) -> None:
        """Delete generated .swift files that are no longer part of the plan."""
        for existing in sorted(self.sources_directory.iterdir()):
            if existing.suffix == SOURCE_SUFFIX and existing.name not in keep:
                existing.unlink()
                self.logger.file_removed(existing)

    def write_swift_sources(self) -> None:
        plan = self.plan_swift_sources()
        self.clear_stale_sources(set(plan))
        for name, content in plan.items():
            self._write(self.sources_directory / name, content)

    def write_package_manifest(self) -> None:
        manifest = templates.render_package_manifest(
            self.target_name,
            self.config.builder_dependency,
            self.config.swiftgodot_rev,
        )
        self._write(self.package_directory / "Package.swift", manifest)

    def write_godot_files(self) -> None:
        project_godot = self.godot_directory / templates.PROJECT_FILENAME
        custom = self.config.custom_project_godot
        if custom is not None:
            if project_godot.exists() or project_godot.is_symlink():
                project_godot.unlink()
            shutil.copyfile(custom, project_godot)
            self.logger.file_written(project_godot)
            self.logger.debug(f"Using custom project.godot from {custom}")
        else:
            self._write(project_godot, templates.render_project_godot(self.target_name))

        root_type = templates.scene_root_type(self.config.view_type, self.config.view_kind)
        self._write(self.godot_directory / templates.SCENE_FILENAME, templates.render_scene(root_type))
        self._write(
            self.godot_directory / f"{self.target_name}.gdextension",
            templates.render_gdextension(self.target_name),
        )
        self._write(
            self.godot_hidden_directory / templates.EXTENSION_LIST_FILENAME,
            templates.render_extension_list(self.target_name),
        )

    def link_asset_directories(self) -> None:
        for directory in self.config.asset_directories:
            destination = self.godot_directory / directory.name
            if destination.is_symlink() or destination.is_file():
                destination.unlink()
            elif destination.is_dir():
                shutil.rmtree(destination)
            destination.symlink_to(directory, target_is_directory=True)
            self.logger.debug(f"Symlinked assets directory '{directory.name}' -> {directory}")

    def _write(self, path: Path, content: str) -> None:
        if write_if_changed(content, path):
            self.logger.file_written(path)
        else:
            self.logger.file_unchanged(path)
