"""Tests for launching Godot and SIGINT ownership."""

from __future__ import annotations

import signal

import pytest

from gdplay.build.launcher import launch_godot, signal_ownership
from gdplay.core.errors import LaunchError
from tests.conftest import requires_posix


class TestSignalOwnership:
    def test_handler_installed_and_restored(self):
        before = signal.getsignal(signal.SIGINT)
        with signal_ownership() as slot:
            assert slot == []
            assert signal.getsignal(signal.SIGINT) is not before
        assert signal.getsignal(signal.SIGINT) is before

    def test_handler_restored_on_error(self):
        before = signal.getsignal(signal.SIGINT)
        with pytest.raises(RuntimeError):
            with signal_ownership():
                raise RuntimeError("boom")
        assert signal.getsignal(signal.SIGINT) is before

    def test_forwarding_terminates_live_children(self):
        class _Child:
            terminated = False

            def __init__(self, running):
                self.running = running

            def poll(self):
                return None if self.running else 0

            def terminate(self):
                self.terminated = True

        live, finished = _Child(True), _Child(False)
        with signal_ownership() as slot:
            slot.extend([live, finished])
            signal.getsignal(signal.SIGINT)(signal.SIGINT, None)
        assert live.terminated
        assert not finished.terminated


class TestLaunchGodot:
    @requires_posix
    def test_exit_code_returned(self, make_config, memory_logger, fake_toolchain):
        tc = fake_toolchain(run_exit=3)
        config = make_config(godot_command=tc.godot, run_godot=True)
        godot_directory = config.workspace_directory / "GodotProject"
        godot_directory.mkdir(parents=True)

        assert launch_godot(config, godot_directory, memory_logger) == 3
        assert tc.godot_calls() == [f"--path {godot_directory} --disable-crash-handler"]
        assert memory_logger.run_log.stages["launch"].commands

    def test_missing_executable(self, make_config, memory_logger, tmp_path):
        before = signal.getsignal(signal.SIGINT)
        config = make_config(godot_command=str(tmp_path / "no-godot"), run_godot=True)
        config.workspace_directory.mkdir(parents=True)

        with pytest.raises(LaunchError, match="Unable to run command"):
            launch_godot(config, config.workspace_directory / "GodotProject", memory_logger)
        assert signal.getsignal(signal.SIGINT) is before
