"""Run orchestration — scaffold, build, sync, import, launch, in that order."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from gdplay.build.driver import BuildDriver, BuildOutcome
from gdplay.build.launcher import launch_godot
from gdplay.build.scaffold import Scaffold
from gdplay.core.logging import PlaygroundLogger
from gdplay.core.models import BuildConfig

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    """Result of one gdplay invocation."""

    workspace_directory: Path
    godot_project: Path
    outcome: BuildOutcome | None = None
    godot_exit_code: int | None = None
    run_log: dict[str, Any] = field(default_factory=dict)


def run(config: BuildConfig, log: PlaygroundLogger) -> RunResult:
    """Execute every stage for ``config``; the first hard failure propagates.

    Godot's exit code is recorded in the result, never raised.
    """
    scaffold = Scaffold(config, log)
    result = RunResult(
        workspace_directory=config.workspace_directory,
        godot_project=scaffold.godot_directory,
    )
    logger.debug("workspace %s", config.workspace_directory)

    try:
        scaffold.prepare()
        result.outcome = BuildDriver(config, log, scaffold).build()
        if config.run_godot:
            result.godot_exit_code = launch_godot(config, scaffold.godot_directory, log)
    finally:
        result.run_log = log.run_finish().to_dict()

    return result
