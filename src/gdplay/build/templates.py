"""Generated workspace files — pure functions of the build config."""

from __future__ import annotations

from gdplay.build.dependency import DependencyReference, manifest_entry, swift_string
from gdplay.core.models import ViewKind

ENTRY_SYMBOL = "swift_entry_point"
ENTRY_POINT_FILENAME = "PlaygroundRoot.swift"
SCENE_FILENAME = "main.tscn"
PROJECT_FILENAME = "project.godot"
EXTENSION_LIST_FILENAME = "extension_list.cfg"
ENGINE_FEATURE_VERSION = "4.4"
COMPATIBILITY_MINIMUM = "4.2"
SWIFTGODOT_REPOSITORY_URL = "https://github.com/migueldeicaza/SwiftGodot"


def root_class_name(view_type: str) -> str:
    """Name of the synthesized Node2D that hosts a GView."""
    cleaned = "".join(ch for ch in view_type if ch.isascii() and ch.isalnum())
    return f"{cleaned or 'View'}RootNode"


def scene_root_type(view_type: str, view_kind: ViewKind) -> str:
    if view_kind is ViewKind.GODOT_CLASS:
        return view_type
    return root_class_name(view_type)


def render_entry_point(view_type: str, view_kind: ViewKind) -> str:
    """PlaygroundRoot.swift: registers the root type with the extension entry symbol."""
    if view_kind is ViewKind.GODOT_CLASS:
        return (
            "import SwiftGodot\n"
            "import SwiftGodotBuilder\n"
            "\n"
            "#initSwiftExtension(\n"
            f'  cdecl: "{ENTRY_SYMBOL}",\n'
            f"  types: [{view_type}.self] + BuilderRegistry.types\n"
            ")\n"
        )

    root = root_class_name(view_type)
    return (
        "import SwiftGodot\n"
        "import SwiftGodotBuilder\n"
        "\n"
        "#initSwiftExtension(\n"
        f'  cdecl: "{ENTRY_SYMBOL}",\n'
        f"  types: [{root}.self] + BuilderRegistry.types\n"
        ")\n"
        "\n"
        "@Godot\n"
        f"final class {root}: Node2D {{\n"
        "  override func _ready() {\n"
        f"    let node = {view_type}().toNode()\n"
        "    addChild(node: node)\n"
        "  }\n"
        "}\n"
    )


def render_package_manifest(target_name: str, dependency: DependencyReference, swiftgodot_rev: str) -> str:
    """Package.swift building the playground as a dynamic library."""
    return f"""// swift-tools-version: 6.2
import PackageDescription

let package = Package(
  name: "{target_name}",
  products: [
    .library(name: "{target_name}", type: .dynamic, targets: ["{target_name}"])
  ],
  dependencies: [
    {manifest_entry(dependency)},
    .package(url: "{SWIFTGODOT_REPOSITORY_URL}", branch: "{swift_string(swiftgodot_rev)}")
  ],
  targets: [
    .target(
      name: "{target_name}",
      dependencies: [
        "SwiftGodotBuilder",
        .product(name: "SwiftGodot", package: "SwiftGodot")
      ],
      path: "Sources"
    )
  ]
)
"""


def render_project_godot(target_name: str) -> str:
    """Default project.godot: small pixel-art viewport scaled 2x."""
    return f"""config_version=5

[application]
config/name="{target_name}"
run/main_scene="res://{SCENE_FILENAME}"
config/features=PackedStringArray("{ENGINE_FEATURE_VERSION}")

[display]
window/size/viewport_width=320
window/size/viewport_height=180
window/size/window_width_override=640
window/size/window_height_override=360
window/stretch/mode="viewport"
window/stretch/scale_mode="integer"
"""


def render_scene(root_type: str) -> str:
    return f"""[gd_scene format=3]

[node name="Root" type="{root_type}"]
"""


# (platform key, library file pattern, runtime dependency target dir)
_PLATFORMS = (
    ("macos", "lib{name}.dylib", "Contents/Frameworks"),
    ("windows.{profile}.x86_64", "{name}.dll", ""),
    ("linux.{profile}.x86_64", "lib{name}.so", ""),
)


def _platform_key(pattern: str, profile: str) -> str:
    if "{profile}" in pattern:
        return pattern.format(profile=profile)
    return f"{pattern}.{profile}"


def render_gdextension(target_name: str) -> str:
    """The .gdextension descriptor for all three supported platforms."""
    libraries = []
    dependencies = []
    for key, filename, runtime_dir in _PLATFORMS:
        for profile in ("debug", "release"):
            platform = _platform_key(key, profile)
            library = filename.format(name=target_name)
            runtime = filename.format(name="SwiftGodot")
            libraries.append(f'{platform} = "res://bin/{library}"')
            dependencies.append(f'{platform} = {{ "res://bin/{runtime}": "{runtime_dir}" }}')

    return (
        "[configuration]\n"
        f'entry_symbol = "{ENTRY_SYMBOL}"\n'
        f"compatibility_minimum = {COMPATIBILITY_MINIMUM}\n"
        "\n"
        "[libraries]\n" + "\n".join(libraries) + "\n"
        "\n"
        "[dependencies]\n" + "\n".join(dependencies) + "\n"
    )


def render_extension_list(target_name: str) -> str:
    return f"res://{target_name}.gdextension\n"
