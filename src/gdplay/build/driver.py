"""Build driver — swift build, bin path discovery, library sync, asset import."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from gdplay.build.assets import maybe_import
from gdplay.build.scaffold import Scaffold
from gdplay.build.sync import sync_libraries
from gdplay.build.toolchain import run_process
from gdplay.core.errors import BuildError
from gdplay.core.logging import PlaygroundLogger
from gdplay.core.models import BuildConfig


@dataclass
class BuildOutcome:
    """What a build produced."""

    bin_directory: Path
    libraries: list[Path] = field(default_factory=list)
    imported: bool = False


class BuildDriver:
    """Compiles the playground package and wires its output into the project."""

    def __init__(self, config: BuildConfig, logger: PlaygroundLogger, scaffold: Scaffold):
        self.config = config
        self.logger = logger
        self.scaffold = scaffold

    def _swift_build_command(self, *extra: str) -> list[str]:
        return [self.config.swift_command, "build", "-c", self.config.build_configuration.value, *extra]

    def compile(self) -> None:
        """``swift build``; output is shown only in verbose mode."""
        run_process(
            self._swift_build_command(),
            self.scaffold.package_directory,
            self.logger,
            suppress_output=not self.config.verbose,
        )

    def resolve_bin_directory(self) -> Path:
        """Ask swift where it put the build products."""
        output = run_process(
            self._swift_build_command("--show-bin-path"),
            self.scaffold.package_directory,
            self.logger,
            capture_output=True,
        )
        bin_path = (output or "").strip()
        if not bin_path:
            raise BuildError("Unable to determine Swift build output path")
        # swift may print progress lines before the path
        return Path(bin_path.splitlines()[-1].strip())

    def build(self) -> BuildOutcome:
        self.logger.info(f"Building Swift package in {self.scaffold.package_directory}...")
        self.logger.stage_start("build")
        self.compile()
        bin_directory = self.resolve_bin_directory()
        self.logger.stage_finish("build")

        self.logger.stage_start("sync")
        libraries = sync_libraries(
            bin_directory,
            self.scaffold.godot_bin_directory,
            self.logger,
            codesign=self.config.codesign,
            quiet=self.config.quiet,
        )
        self.logger.stage_finish("sync")

        imported = False
        if self.config.asset_directories:
            imported = maybe_import(
                self.config.asset_directories,
                self.config.godot_command,
                self.scaffold.godot_directory,
                self.scaffold.checksum_file,
                self.logger,
                quiet=self.config.quiet,
            )

        return BuildOutcome(bin_directory=bin_directory, libraries=libraries, imported=imported)
