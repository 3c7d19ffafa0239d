"""Root type detection — find the GView or @Godot class a source file defines."""

from __future__ import annotations

import re

from gdplay.core.errors import ConfigError
from gdplay.core.models import ViewKind

_MODIFIERS = r"(?:(?:public|internal|fileprivate|open|final)\s+)*"
_IDENT = r"[A-Za-z_][A-Za-z0-9_]*"

GVIEW_PATTERN = re.compile(_MODIFIERS + r"(?:struct|class)\s+(?P<name>" + _IDENT + r")\s*:\s*[^{]*\bG?View\b")
GODOT_CLASS_PATTERN = re.compile(r"@Godot\s*(?:\([^)]*\))?\s*" + _MODIFIERS + r"class\s+(?P<name>" + _IDENT + r")")


def detect_view_type(source: str) -> tuple[str, ViewKind]:
    """Return the first GView conformer, else the first @Godot class.

    Raises ConfigError when neither is present.
    """
    match = GVIEW_PATTERN.search(source)
    if match:
        return match.group("name"), ViewKind.GVIEW

    match = GODOT_CLASS_PATTERN.search(source)
    if match:
        return match.group("name"), ViewKind.GODOT_CLASS

    raise ConfigError("Unable to detect a GView or @Godot class. Pass --root <TypeName> explicitly.")


def detect_kind(type_name: str, source: str) -> ViewKind | None:
    """Classify a named type, or None if it matches neither pattern."""
    escaped = re.escape(type_name)
    gview = _MODIFIERS + r"(?:struct|class)\s+" + escaped + r"\s*:\s*[^{]*\bG?View\b"
    if re.search(gview, source):
        return ViewKind.GVIEW

    godot = r"@Godot\s*(?:\([^)]*\))?\s*" + _MODIFIERS + r"class\s+" + escaped + r"\b"
    if re.search(godot, source):
        return ViewKind.GODOT_CLASS

    return None


def resolve_component(source: str, root: str | None = None) -> tuple[str, ViewKind]:
    """Pick the root type name and kind, honoring an explicit ``--root``.

    An explicit root whose kind cannot be read from the source falls back
    to the kind found by the default scan.
    """
    if root is None:
        return detect_view_type(source)

    kind = detect_kind(root, source)
    if kind is not None:
        return root, kind

    _, detected_kind = detect_view_type(source)
    return root, detected_kind
