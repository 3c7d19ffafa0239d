"""Godot launcher — run the engine against the generated project."""

from __future__ import annotations

import signal
import subprocess
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path

from gdplay.build.toolchain import format_command
from gdplay.core.errors import LaunchError
from gdplay.core.logging import PlaygroundLogger
from gdplay.core.models import BuildConfig


@contextmanager
def signal_ownership() -> Generator[list[subprocess.Popen], None, None]:
    """Own SIGINT while a child runs: forward Ctrl-C as terminate().

    Yields an empty list; append the child process once spawned. The
    previous handler is restored on every exit path.
    """
    slot: list[subprocess.Popen] = []

    def _forward(signum, frame):
        for child in slot:
            if child.poll() is None:
                child.terminate()

    previous = signal.signal(signal.SIGINT, _forward)
    try:
        yield slot
    finally:
        signal.signal(signal.SIGINT, previous)


def launch_godot(config: BuildConfig, godot_directory: Path, logger: PlaygroundLogger) -> int:
    """Start Godot, wait for it and return its exit code as-is."""
    logger.info(f"Launching Godot from {godot_directory}...")
    arguments = [config.godot_command, "--path", str(godot_directory), "--disable-crash-handler"]
    logger.stage_start("launch")
    logger.command(format_command(arguments), config.workspace_directory)

    with signal_ownership() as slot:
        try:
            process = subprocess.Popen(arguments, cwd=str(config.workspace_directory))
        except OSError as e:
            raise LaunchError(f"Unable to run command: {config.godot_command} ({e})") from e
        slot.append(process)
        returncode = process.wait()

    logger.stage_finish("launch")
    return returncode
