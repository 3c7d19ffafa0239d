"""Platform details and external tool invocation — swift, godot, codesign."""

from __future__ import annotations

import logging
import shlex
import shutil
import subprocess
import sys
from pathlib import Path
from typing import Callable

from gdplay.core.errors import BuildError, ToolchainError
from gdplay.core.logging import PlaygroundLogger

logger = logging.getLogger(__name__)

GODOT_BUNDLE_ID = "org.godotengine.godot"


def library_extension(platform: str | None = None) -> str:
    """File extension of dynamic libraries built for ``platform``."""
    platform = platform or sys.platform
    if platform.startswith("win"):
        return "dll"
    if platform == "darwin":
        return "dylib"
    return "so"


def format_command(arguments: list[str]) -> str:
    return shlex.join(arguments)


def run_process(
    arguments: list[str],
    cwd: Path,
    log: PlaygroundLogger,
    *,
    capture_output: bool = False,
    suppress_output: bool = False,
) -> str | None:
    """Run a command to completion; raise BuildError on failure.

    Returns captured stdout when ``capture_output`` is set. stderr is
    always inherited so compiler diagnostics stay visible.
    """
    command_line = format_command(arguments)
    log.command(command_line, cwd)

    if capture_output:
        stdout = subprocess.PIPE
    elif suppress_output:
        stdout = subprocess.DEVNULL
    else:
        stdout = None

    try:
        result = subprocess.run(arguments, cwd=str(cwd), stdout=stdout, text=capture_output)
    except OSError as e:
        raise BuildError(f"Unable to run command: {arguments[0]} ({e})") from e

    if result.returncode != 0:
        raise BuildError(f"Command failed: {command_line}")

    return result.stdout if capture_output else None


def command_succeeds(arguments: list[str]) -> bool:
    """True when the command runs and exits 0; all output discarded."""
    try:
        result = subprocess.run(arguments, stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)
    except OSError:
        logger.debug("cannot execute %s", arguments[0])
        return False
    return result.returncode == 0


def ensure_swift_available(swift_command: str) -> None:
    if not command_succeeds([swift_command, "--version"]):
        raise ToolchainError(
            "Swift toolchain not found.\n"
            "Install Xcode from the App Store or run: xcode-select --install"
        )


def ensure_godot_available(godot_command: str) -> None:
    if not command_succeeds([godot_command, "--version"]):
        raise ToolchainError(
            f"Godot not found at '{godot_command}'.\n"
            "Install Godot 4.x from https://godotengine.org or specify path with --godot"
        )


# -- Engine discovery --


def _locate_on_path() -> str | None:
    return shutil.which("godot")


def _locate_macos_bundle() -> str | None:
    """Ask Spotlight for the Godot app bundle and return its executable."""
    try:
        result = subprocess.run(
            ["mdfind", f'kMDItemCFBundleIdentifier = "{GODOT_BUNDLE_ID}"'],
            capture_output=True,
            text=True,
        )
    except OSError:
        return None
    if result.returncode != 0:
        return None

    lines = result.stdout.strip().splitlines()
    if not lines:
        return None
    executable = Path(lines[0]) / "Contents" / "MacOS" / "Godot"
    if executable.exists():
        return str(executable)
    return None


_PLATFORM_LOCATORS: dict[str, list[Callable[[], str | None]]] = {
    "darwin": [_locate_on_path, _locate_macos_bundle],
}


def locate_engine_executable(platform: str | None = None) -> str | None:
    """Find a Godot executable; PATH lookup first, then platform probes."""
    for locator in _PLATFORM_LOCATORS.get(platform or sys.platform, [_locate_on_path]):
        found = locator()
        if found:
            logger.debug("located godot at %s", found)
            return found
    return None


def resolve_godot_command(explicit: str | None = None) -> str:
    """The --godot value, else a discovered executable, else plain ``godot``."""
    if explicit:
        return explicit
    return locate_engine_executable() or "godot"
