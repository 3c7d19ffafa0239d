"""Stable hashing — workspace identity and asset-tree checksums.

The hash is DJB2 over UTF-8 bytes with unsigned 64-bit wraparound. It is
non-cryptographic: it names tool-local cache directories, it is not a
security boundary. Python's built-in hash() is unsuitable because
PYTHONHASHSEED randomizes it across sessions.
"""

from __future__ import annotations

import os
import stat
from pathlib import Path

_MASK64 = 0xFFFFFFFFFFFFFFFF
_DJB2_SEED = 5381

PLACEHOLDER_NAME = "Playground"


def stable_hash(value: str) -> str:
    """DJB2 64-bit hash of ``value`` as 16 lowercase hex digits."""
    h = _DJB2_SEED
    for byte in value.encode("utf-8"):
        h = (h * 33 + byte) & _MASK64
    return f"{h:016x}"


def sanitize(component: str) -> str:
    """Reduce a file stem to ``[A-Za-z0-9_-]``, never returning ''."""
    replaced = component.replace(" ", "_")
    allowed = "".join(ch for ch in replaced if (ch.isascii() and ch.isalnum()) or ch in "_-")
    return allowed or PLACEHOLDER_NAME


def workspace_name(view_file: Path, view_type: str) -> str:
    """Content-addressed workspace directory name for a view file + root type."""
    base = sanitize(view_file.stem)
    return f"{base}-{stable_hash(f'{view_file}:{view_type}')}"


def _asset_entries(directory: Path) -> list[str]:
    """``<dir name>/<relative path>:<mtime seconds>`` for each visible regular file."""
    entries = []
    for current, dirnames, filenames in os.walk(directory):
        dirnames[:] = [d for d in dirnames if not d.startswith(".")]
        for filename in filenames:
            if filename.startswith("."):
                continue
            path = Path(current) / filename
            try:
                st = os.lstat(path)
            except OSError:
                continue
            if not stat.S_ISREG(st.st_mode):
                continue
            relative = path.relative_to(directory).as_posix()
            entries.append(f"{directory.name}/{relative}:{int(st.st_mtime)}")
    return entries


def compute_asset_checksum(asset_directories: list[Path] | tuple[Path, ...]) -> str:
    """Order-independent checksum of every asset file's path and mtime."""
    entries: list[str] = []
    for directory in asset_directories:
        entries.extend(_asset_entries(directory))
    entries.sort()
    return stable_hash("\n".join(entries))
