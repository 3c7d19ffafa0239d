"""gdplay - build and run a single SwiftGodotBuilder view file in Godot.

Usage:
    from pathlib import Path
    from gdplay import BuildConfig, PlaygroundLogger, run

    config = BuildConfig.from_options(
        view_file="Counter.swift",
        base_directory=Path.cwd(),
        cache_root=Path("~/.swiftgodotbuilder/playgrounds").expanduser(),
        swift_command="swift",
        godot_command="godot",
    )
    result = run(config, PlaygroundLogger())
"""

from gdplay.build.dependency import LocalDependency, RemoteDependency
from gdplay.build.fingerprint import compute_asset_checksum, stable_hash, workspace_name
from gdplay.build.runner import RunResult, run
from gdplay.core.errors import GdplayError
from gdplay.core.logging import PlaygroundLogger, Verbosity
from gdplay.core.models import BuildConfig, BuildProfile, ViewKind

__all__ = [
    "BuildConfig",
    "BuildProfile",
    "GdplayError",
    "LocalDependency",
    "PlaygroundLogger",
    "RemoteDependency",
    "RunResult",
    "Verbosity",
    "ViewKind",
    "compute_asset_checksum",
    "run",
    "stable_hash",
    "workspace_name",
]

__version__ = "0.1.0"
