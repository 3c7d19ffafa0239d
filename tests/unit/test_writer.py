"""Tests for atomic and change-detecting writes."""

from __future__ import annotations

import os
import stat

import pytest

from gdplay.build import writer
from gdplay.build.writer import write_if_changed
from gdplay.core.errors import atomic_write
from tests.conftest import requires_posix


@pytest.fixture
def counted_writes(monkeypatch):
    """Count calls that reach the atomic writer."""
    calls = []
    real = writer.atomic_write

    def _counting(path, data):
        calls.append(path)
        real(path, data)

    monkeypatch.setattr(writer, "atomic_write", _counting)
    return calls


class TestWriteIfChanged:
    def test_missing_file_is_written(self, tmp_path, counted_writes):
        target = tmp_path / "Package.swift"
        assert write_if_changed("let x = 1\n", target) is True
        assert target.read_text() == "let x = 1\n"
        assert len(counted_writes) == 1

    def test_identical_content_is_not_written(self, tmp_path, counted_writes):
        target = tmp_path / "Package.swift"
        write_if_changed("same", target)
        os.utime(target, (1_000, 1_000))

        assert write_if_changed("same", target) is False
        assert len(counted_writes) == 1
        assert target.stat().st_mtime == 1_000

    def test_changed_content_is_written_once(self, tmp_path, counted_writes):
        target = tmp_path / "Package.swift"
        write_if_changed("old", target)
        assert write_if_changed("new", target) is True
        assert write_if_changed("new", target) is False
        assert target.read_text() == "new"
        assert len(counted_writes) == 2

    def test_bytes_content(self, tmp_path):
        target = tmp_path / "blob.bin"
        assert write_if_changed(b"\x00\x01", target) is True
        assert write_if_changed(b"\x00\x01", target) is False


class TestAtomicWrite:
    def test_no_temp_files_left(self, tmp_path):
        target = tmp_path / "main.tscn"
        atomic_write(target, "[gd_scene format=3]\n")
        assert [p.name for p in tmp_path.iterdir()] == ["main.tscn"]

    def test_failed_replace_keeps_original(self, tmp_path, monkeypatch):
        target = tmp_path / "main.tscn"
        target.write_text("original")

        def _boom(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr(os, "replace", _boom)
        with pytest.raises(OSError, match="disk full"):
            atomic_write(target, "replacement")

        assert target.read_text() == "original"
        assert [p.name for p in tmp_path.iterdir()] == ["main.tscn"]

    @requires_posix
    def test_new_file_honors_umask(self, tmp_path):
        previous = os.umask(0o022)
        try:
            atomic_write(tmp_path / "Package.swift", "// manifest\n")
        finally:
            os.umask(previous)
        assert stat.S_IMODE((tmp_path / "Package.swift").stat().st_mode) == 0o644

    @requires_posix
    def test_existing_mode_preserved(self, tmp_path):
        target = tmp_path / "project.godot"
        target.write_text("old")
        target.chmod(0o640)
        atomic_write(target, "new")
        assert stat.S_IMODE(target.stat().st_mode) == 0o640
