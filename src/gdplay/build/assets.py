"""Headless asset import, skipped while the asset trees are unchanged."""

from __future__ import annotations

from pathlib import Path

from gdplay.build.fingerprint import compute_asset_checksum
from gdplay.build.toolchain import run_process
from gdplay.core.errors import atomic_write
from gdplay.core.logging import PlaygroundLogger


def read_cached_checksum(checksum_file: Path) -> str | None:
    try:
        return checksum_file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None


def maybe_import(
    asset_directories: tuple[Path, ...] | list[Path],
    godot_command: str,
    godot_directory: Path,
    checksum_file: Path,
    logger: PlaygroundLogger,
    *,
    quiet: bool = False,
) -> bool:
    """Run ``godot --headless --import`` unless the assets match the cached checksum.

    The checksum file is only rewritten after a successful import, so a
    failed import is retried on the next run. Returns True if Godot ran.
    """
    logger.stage_start("import")
    current = compute_asset_checksum(asset_directories)

    if read_cached_checksum(checksum_file) == current:
        logger.stage_skipped("import", "Assets unchanged, skipping import")
        logger.stage_finish("import")
        return False

    logger.info("Importing Godot resources (headless)...")
    run_process(
        [godot_command, "--headless", "--path", str(godot_directory), "--import"],
        checksum_file.parent,
        logger,
        suppress_output=quiet,
    )
    atomic_write(checksum_file, current)
    logger.file_written(checksum_file)
    logger.stage_finish("import")
    return True
