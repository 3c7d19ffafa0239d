"""gdplay error types and utilities."""

from __future__ import annotations

import os
import stat
import tempfile
from pathlib import Path


def _target_mode(path: Path) -> int:
    """Permissions the written file should carry: the existing file's, else 0666 minus umask."""
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def atomic_write(path: Path, content: str | bytes) -> None:
    """Write content to a file atomically using temp file + rename.

    Writes to a temporary file in the same directory, fsyncs it,
    then atomically replaces the target path. A reader never sees a
    truncated file.
    """
    data = content.encode() if isinstance(content, str) else content
    mode = _target_mode(path)
    fd, tmp = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    closed = False
    try:
        os.write(fd, data)
        os.chmod(tmp, mode)
        os.fsync(fd)
        os.close(fd)
        closed = True
        os.replace(tmp, str(path))
    except BaseException:
        if not closed:
            os.close(fd)
        try:
            os.unlink(tmp)
        except OSError:
            pass
        raise


class GdplayError(Exception):
    """Base exception for gdplay. Carries a human-readable message."""

    pass


class ConfigError(GdplayError):
    """Invalid input paths, failed type detection or conflicting flags."""

    pass


class ToolchainError(GdplayError):
    """Swift or Godot could not be found or run."""

    pass


class ScaffoldError(GdplayError):
    """Filesystem failure while preparing the workspace."""

    pass


class BuildError(GdplayError):
    """Compiler failure or unresolvable build output."""

    pass


class SyncError(GdplayError):
    """Build artifacts missing or not copyable into the project."""

    pass


class LaunchError(GdplayError):
    """The engine process could not be started."""

    pass
