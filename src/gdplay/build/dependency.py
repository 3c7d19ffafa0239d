"""SwiftGodotBuilder dependency resolution — local checkout or git branch."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Union

BUILDER_REPOSITORY_URL = "https://github.com/johnsusek/SwiftGodotBuilder"
DEFAULT_REVISION = "main"
MANIFEST_FILENAME = "Package.swift"


@dataclass(frozen=True)
class LocalDependency:
    """A SwiftGodotBuilder checkout on this machine."""

    path: Path


@dataclass(frozen=True)
class RemoteDependency:
    """A branch, tag or commit of the upstream repository."""

    rev: str = DEFAULT_REVISION


DependencyReference = Union[LocalDependency, RemoteDependency]


def resolve_dependency(
    override_path: Path | None,
    rev: str | None,
    base_directory: Path,
    env_path: str | None = None,
) -> DependencyReference:
    """Pick the dependency source.

    Precedence: explicit override, then ``env_path`` when it points at a
    directory holding a Package.swift, then the remote repository at ``rev``
    (default ``main``). Nothing here touches the network.
    """
    if override_path is not None:
        return LocalDependency(override_path)

    if env_path:
        candidate = Path(os.path.normpath(base_directory / Path(env_path).expanduser()))
        if (candidate / MANIFEST_FILENAME).is_file():
            return LocalDependency(candidate)

    return RemoteDependency(rev or DEFAULT_REVISION)


def swift_string(value: str) -> str:
    """Escape ``value`` for use inside a Swift string literal."""
    return value.replace("\\", "\\\\").replace('"', '\\"')


def manifest_entry(dependency: DependencyReference) -> str:
    """Render the ``.package(...)`` line for Package.swift."""
    if isinstance(dependency, LocalDependency):
        return f'.package(name: "SwiftGodotBuilder", path: "{swift_string(str(dependency.path))}")'
    if isinstance(dependency, RemoteDependency):
        return f'.package(url: "{BUILDER_REPOSITORY_URL}", branch: "{swift_string(dependency.rev)}")'
    raise TypeError(f"unknown dependency reference: {dependency!r}")
