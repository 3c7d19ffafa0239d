"""Library sync — copy freshly built dylibs into the Godot project's bin/."""

from __future__ import annotations

import shutil
import sys
from pathlib import Path

from gdplay.build.toolchain import library_extension, run_process
from gdplay.core.errors import BuildError, SyncError
from gdplay.core.logging import PlaygroundLogger


def sync_libraries(
    bin_directory: Path,
    godot_bin_directory: Path,
    logger: PlaygroundLogger,
    *,
    codesign: bool = False,
    quiet: bool = False,
    platform: str | None = None,
) -> list[Path]:
    """Replace the project's libraries with the ones in ``bin_directory``.

    Every existing library in the project is removed before copying, so two
    builds of the same library never coexist. Returns the copied paths.
    """
    platform = platform or sys.platform
    extension = f".{library_extension(platform)}"

    if not bin_directory.is_dir():
        raise SyncError(f"Build artifacts not found at {bin_directory}")

    libraries = sorted(p for p in bin_directory.iterdir() if p.suffix == extension and p.is_file())
    if not libraries:
        raise SyncError(f"No dynamic libraries produced by swift build (looked for *{extension} in {bin_directory})")

    try:
        for existing in sorted(godot_bin_directory.iterdir()):
            if existing.name.startswith(".") or existing.suffix != extension:
                continue
            existing.unlink()
            logger.file_removed(existing)

        copied = []
        for library in libraries:
            destination = godot_bin_directory / library.name
            shutil.copy2(library, destination)
            logger.file_written(destination)
            copied.append(destination)
    except OSError as e:
        raise SyncError(f"Failed to copy libraries into {godot_bin_directory}: {e}") from e

    if codesign and platform == "darwin":
        for library in copied:
            try:
                run_process(
                    ["codesign", "--force", "--deep", "--sign", "-", str(library)],
                    godot_bin_directory,
                    logger,
                    suppress_output=quiet,
                )
            except BuildError:
                logger.warn(f"Failed to codesign {library.name}")

    return copied
