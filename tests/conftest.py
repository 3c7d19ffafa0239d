"""Shared test fixtures for gdplay."""

from __future__ import annotations

import os
import stat
import sys
from dataclasses import dataclass
from pathlib import Path

import pytest
from rich.console import Console

from gdplay.build.dependency import RemoteDependency
from gdplay.build.toolchain import library_extension
from gdplay.config import reset_settings
from gdplay.core.logging import PlaygroundLogger, Verbosity
from gdplay.core.models import BuildConfig, BuildProfile, ViewKind

GVIEW_SOURCE = """\
import SwiftGodot
import SwiftGodotBuilder

struct CounterView: GView {
  var body: some GView {
    Label().text("Hello")
  }
}
"""

GODOT_CLASS_SOURCE = """\
import SwiftGodot

@Godot
final class Player: CharacterBody2D {
  override func _ready() {}
}
"""

requires_posix = pytest.mark.skipif(sys.platform == "win32", reason="fake toolchain uses sh scripts")


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch):
    """Keep GDPLAY_* from the developer's shell out of tests."""
    for key in list(os.environ):
        if key.startswith("GDPLAY_"):
            monkeypatch.delenv(key)
    reset_settings()
    yield
    reset_settings()


@pytest.fixture
def view_file(tmp_path):
    path = tmp_path / "src" / "CounterView.swift"
    path.parent.mkdir()
    path.write_text(GVIEW_SOURCE)
    return path


@pytest.fixture
def memory_logger():
    """Logger that renders into memory instead of the terminal."""
    return PlaygroundLogger(
        Verbosity.VERBOSE,
        console=Console(file=_Sink(), highlight=False),
        err_console=Console(file=_Sink(), highlight=False),
    )


class _Sink:
    def __init__(self):
        self.parts: list[str] = []

    def write(self, text: str) -> int:
        self.parts.append(text)
        return len(text)

    def flush(self) -> None:
        pass

    def getvalue(self) -> str:
        return "".join(self.parts)


@pytest.fixture
def make_config(tmp_path, view_file):
    """Factory for BuildConfig objects rooted in tmp_path."""

    def _make(**overrides) -> BuildConfig:
        cache_root = overrides.pop("cache_root", tmp_path / "cache")
        fields = dict(
            view_file=view_file,
            view_source=view_file.read_text(),
            view_type="CounterView",
            view_kind=ViewKind.GVIEW,
            asset_directories=(),
            include_directories=(),
            swift_command="swift",
            godot_command="godot",
            run_godot=False,
            cache_root=cache_root,
            builder_dependency=RemoteDependency("main"),
            swiftgodot_rev="main",
            build_configuration=BuildProfile.DEBUG,
            workspace_directory=cache_root / "CounterView-0000000000000000",
            verbosity=Verbosity.VERBOSE,
        )
        fields.update(overrides)
        return BuildConfig(**fields)

    return _make


@dataclass
class FakeToolchain:
    """Shell-script stand-ins for swift and godot that record their calls."""

    swift: str
    godot: str
    bin_directory: Path
    swift_log: Path
    godot_log: Path

    def swift_calls(self) -> list[str]:
        return self.swift_log.read_text().splitlines() if self.swift_log.exists() else []

    def godot_calls(self) -> list[str]:
        return self.godot_log.read_text().splitlines() if self.godot_log.exists() else []

    def import_count(self) -> int:
        return sum(1 for call in self.godot_calls() if "--import" in call.split())


def _write_script(path: Path, body: str) -> str:
    path.write_text("#!/bin/sh\n" + body)
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return str(path)


@pytest.fixture
def fake_toolchain(tmp_path):
    """Build fake swift/godot executables.

    ``fake_toolchain(libraries=..., show_bin_path=..., import_exit=..., run_exit=...)``
    """

    def _make(
        libraries: tuple[str, ...] = ("SwiftGodotBuilderPlayground", "SwiftGodot"),
        show_bin_path: bool = True,
        build_exit: int = 0,
        import_exit: int = 0,
        run_exit: int = 3,
    ) -> FakeToolchain:
        tools = tmp_path / "tools"
        tools.mkdir(exist_ok=True)
        bin_directory = tmp_path / "swift-out" / "debug"
        swift_log = tools / "swift.log"
        godot_log = tools / "godot.log"
        ext = library_extension()
        touches = "\n".join(f'  touch "{bin_directory}/lib{name}.{ext}"' for name in libraries)
        bin_path_line = f'echo "{bin_directory}"' if show_bin_path else "echo"

        swift = _write_script(
            tools / "swift",
            f'echo "$*" >> "{swift_log}"\n'
            'if [ "$1" = "--version" ]; then exit 0; fi\n'
            'for arg in "$@"; do\n'
            '  if [ "$arg" = "--show-bin-path" ]; then\n'
            f"    {bin_path_line}\n"
            "    exit 0\n"
            "  fi\n"
            "done\n"
            f"if [ {build_exit} -ne 0 ]; then exit {build_exit}; fi\n"
            f'mkdir -p "{bin_directory}"\n'
            f"{touches}\n"
            "true\n",
        )
        godot = _write_script(
            tools / "godot",
            f'echo "$*" >> "{godot_log}"\n'
            'if [ "$1" = "--version" ]; then exit 0; fi\n'
            'for arg in "$@"; do\n'
            f'  if [ "$arg" = "--import" ]; then exit {import_exit}; fi\n'
            "done\n"
            f"exit {run_exit}\n",
        )
        return FakeToolchain(swift, godot, bin_directory, swift_log, godot_log)

    return _make
