"""Structured logging and verbosity levels for gdplay runs."""

from __future__ import annotations

import json
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import IntEnum
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape


class Verbosity(IntEnum):
    """Verbosity levels for console output."""

    QUIET = 0     # warnings and errors only
    DEFAULT = 1   # + stage progress
    VERBOSE = 2   # + every command, copy, skip and symlink


@dataclass
class StageLog:
    """Per-stage statistics."""

    name: str
    files_written: list[str] = field(default_factory=list)
    files_unchanged: list[str] = field(default_factory=list)
    files_removed: list[str] = field(default_factory=list)
    commands: list[str] = field(default_factory=list)
    skipped: bool = False
    time_seconds: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "files_written": list(self.files_written),
            "files_unchanged": list(self.files_unchanged),
            "files_removed": list(self.files_removed),
            "commands": list(self.commands),
            "skipped": self.skipped,
            "time_seconds": self.time_seconds,
        }


@dataclass
class RunLog:
    """Structured log of one invocation.

    The dict format is::

        {
            "run_id": "20260101T120000Z",
            "stages": {
                "scaffold": {"files_written": [...], "files_unchanged": [...], ...},
                "build": {"commands": ["swift build -c debug", ...], ...},
                "import": {"skipped": true, ...},
            },
            "total_time": 4.2,
            "total_commands": 3,
            "total_files_written": 7,
        }
    """

    run_id: str = ""
    stages: dict[str, StageLog] = field(default_factory=dict)
    total_time: float = 0.0
    total_commands: int = 0
    total_files_written: int = 0

    def get_or_create_stage(self, name: str) -> StageLog:
        """Get existing stage log or create a new one."""
        if name not in self.stages:
            self.stages[name] = StageLog(name=name)
        return self.stages[name]

    def finalize(self) -> None:
        """Compute totals from stage data."""
        self.total_commands = sum(len(s.commands) for s in self.stages.values())
        self.total_files_written = sum(len(s.files_written) for s in self.stages.values())

    def to_dict(self) -> dict[str, Any]:
        return {
            "run_id": self.run_id,
            "stages": {name: stage.to_dict() for name, stage in self.stages.items()},
            "total_time": self.total_time,
            "total_commands": self.total_commands,
            "total_files_written": self.total_files_written,
        }


class PlaygroundLogger:
    """Console and JSONL logger for a gdplay run.

    Console output goes through Rich and is filtered by verbosity;
    warnings always reach stderr. When ``log_dir`` is set, every event is
    also appended to ``log_dir/<run_id>.jsonl``.
    """

    def __init__(
        self,
        verbosity: Verbosity = Verbosity.DEFAULT,
        log_dir: Path | None = None,
        console: Console | None = None,
        err_console: Console | None = None,
    ):
        self.verbosity = verbosity
        self.log_dir = log_dir
        self.console = console or Console(highlight=False)
        self.err_console = err_console or Console(stderr=True, highlight=False)
        self.run_log = RunLog(
            run_id=datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ"),
        )
        self._log_file = None
        self._current_stage: str | None = None
        self._stage_start: float = 0.0
        self._run_start = time.time()

    def _write_event(self, event: dict[str, Any]) -> None:
        """Write a JSON event to the JSONL log file, opening it on first use."""
        if self.log_dir is None:
            return
        if self._log_file is None:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            self._log_file = open(self.log_dir / f"{self.run_log.run_id}.jsonl", "a")
        event["timestamp"] = datetime.now(timezone.utc).isoformat()
        self._log_file.write(json.dumps(event) + "\n")
        self._log_file.flush()

    @property
    def _stage(self) -> StageLog:
        return self.run_log.get_or_create_stage(self._current_stage or "run")

    # -- Console --

    def info(self, message: str) -> None:
        if self.verbosity >= Verbosity.DEFAULT:
            self.console.print(escape(message))

    def debug(self, message: str) -> None:
        if self.verbosity >= Verbosity.VERBOSE:
            self.console.print(f"[dim]{escape(message)}[/dim]")

    def warn(self, message: str) -> None:
        self._write_event({"event": "warning", "message": message})
        self.err_console.print(f"[yellow]warning:[/yellow] {escape(message)}")

    # -- Stage events --

    def stage_start(self, name: str) -> None:
        self._current_stage = name
        self._stage_start = time.time()
        self.run_log.get_or_create_stage(name)
        self._write_event({"event": "stage_start", "stage": name})

    def stage_finish(self, name: str) -> None:
        elapsed = time.time() - self._stage_start
        stage = self.run_log.get_or_create_stage(name)
        stage.time_seconds = elapsed
        self._write_event({
            "event": "stage_finish",
            "stage": name,
            "time_seconds": round(elapsed, 3),
        })
        self._current_stage = None

    def stage_skipped(self, name: str, reason: str) -> None:
        self.run_log.get_or_create_stage(name).skipped = True
        self._write_event({"event": "stage_skipped", "stage": name, "reason": reason})
        self.debug(reason)

    # -- File and command events --

    def file_written(self, path: Path) -> None:
        self._stage.files_written.append(str(path))
        self._write_event({"event": "file_written", "path": str(path)})

    def file_unchanged(self, path: Path) -> None:
        self._stage.files_unchanged.append(str(path))
        self._write_event({"event": "file_unchanged", "path": str(path)})

    def file_removed(self, path: Path) -> None:
        self._stage.files_removed.append(str(path))
        self._write_event({"event": "file_removed", "path": str(path)})
        self.debug(f"Removed stale {path.name}")

    def command(self, command_line: str, cwd: Path) -> None:
        self._stage.commands.append(command_line)
        self._write_event({"event": "command", "command": command_line, "cwd": str(cwd)})
        self.debug(f"Running: {command_line} (cwd: {cwd})")

    # -- Run lifecycle --

    def run_finish(self) -> RunLog:
        """Finalize totals and close the log file."""
        self.run_log.total_time = time.time() - self._run_start
        self.run_log.finalize()
        self._write_event({
            "event": "run_finish",
            "total_time": round(self.run_log.total_time, 3),
            "total_commands": self.run_log.total_commands,
            "total_files_written": self.run_log.total_files_written,
        })
        self.close()
        return self.run_log

    def close(self) -> None:
        """Close the log file if open."""
        if self._log_file is not None:
            self._log_file.close()
            self._log_file = None
