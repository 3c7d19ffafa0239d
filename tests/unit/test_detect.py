"""Tests for GView / @Godot class detection."""

from __future__ import annotations

import pytest

from gdplay.core.detect import detect_kind, detect_view_type, resolve_component
from gdplay.core.errors import ConfigError
from gdplay.core.models import ViewKind
from tests.conftest import GODOT_CLASS_SOURCE, GVIEW_SOURCE


class TestDetectViewType:
    def test_gview_struct(self):
        assert detect_view_type(GVIEW_SOURCE) == ("CounterView", ViewKind.GVIEW)

    def test_plain_view_conformance(self):
        source = "public final class Menu: SomeBase, View {}"
        assert detect_view_type(source) == ("Menu", ViewKind.GVIEW)

    def test_godot_class(self):
        assert detect_view_type(GODOT_CLASS_SOURCE) == ("Player", ViewKind.GODOT_CLASS)

    def test_godot_class_with_arguments(self):
        source = "@Godot(.tool)\npublic class Spinner: Node2D {}"
        assert detect_view_type(source) == ("Spinner", ViewKind.GODOT_CLASS)

    def test_gview_preferred_over_godot_class(self):
        source = GODOT_CLASS_SOURCE + "\nstruct HUD: GView {}\n"
        assert detect_view_type(source) == ("HUD", ViewKind.GVIEW)

    def test_nothing_found(self):
        with pytest.raises(ConfigError, match="--root"):
            detect_view_type("let x = 1\n")

    def test_view_suffix_in_other_name_not_matched(self):
        with pytest.raises(ConfigError):
            detect_view_type("struct A: Preview {}")


class TestDetectKind:
    def test_named_gview(self):
        source = GVIEW_SOURCE + "\nstruct Other: GView {}\n"
        assert detect_kind("Other", source) is ViewKind.GVIEW

    def test_named_godot_class(self):
        assert detect_kind("Player", GODOT_CLASS_SOURCE) is ViewKind.GODOT_CLASS

    def test_unknown_name(self):
        assert detect_kind("Missing", GVIEW_SOURCE) is None

    def test_prefix_of_longer_name_is_not_a_match(self):
        assert detect_kind("Play", GODOT_CLASS_SOURCE) is None


class TestResolveComponent:
    def test_no_root(self):
        assert resolve_component(GVIEW_SOURCE) == ("CounterView", ViewKind.GVIEW)

    def test_root_with_detectable_kind(self):
        source = GVIEW_SOURCE + GODOT_CLASS_SOURCE
        assert resolve_component(source, "Player") == ("Player", ViewKind.GODOT_CLASS)

    def test_root_absent_from_patterns_uses_default_scan_kind(self):
        """An unmatched --root keeps its name and borrows the scanned kind."""
        assert resolve_component(GODOT_CLASS_SOURCE, "Generated") == ("Generated", ViewKind.GODOT_CLASS)

    def test_root_with_undetectable_source(self):
        with pytest.raises(ConfigError):
            resolve_component("let x = 1\n", "Anything")
