"""Change-detecting file writes for generated workspace files."""

from __future__ import annotations

from pathlib import Path

from gdplay.core.errors import atomic_write


def write_if_changed(content: str | bytes, path: Path) -> bool:
    """Atomically write ``content`` to ``path`` unless it already holds it.

    Returns True when the file was (re)written, False when the bytes on disk
    already matched and nothing was touched. A missing file counts as changed.
    """
    data = content.encode() if isinstance(content, str) else content
    try:
        if path.read_bytes() == data:
            return False
    except FileNotFoundError:
        pass
    atomic_write(path, data)
    return True
