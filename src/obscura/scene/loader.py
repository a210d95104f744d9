"""Scene description file loader.

Scene files are line oriented. ``//`` starts a comment and blank lines are
ignored. An unindented line opens an entry, ``type [name]``; each following
line indented by two spaces is a ``key value`` property of that entry:

    scene
      index 1.0
    camera
      position (0, 0, 5)
      direction (1, 0, 0)
      fov 90
    lambertian chalk
      color #CCCCCC
    sphere
      material chalk
      position (6, 0, 1)
      radius 1

Entry types:
    scene: index (required), sky (optional #RRGGBB)
    camera: position, direction, fov (required), up (optional)
    lambertian NAME: color
    metallic NAME: color, fuzz (optional, default 0)
    dielectric NAME: color, index
    plane: material, position, normal
    sphere: material, position, radius
    quadric: material, position, equation (A, B, C, D, E, F, G, H, I, J)

Materials must be defined before the shapes that use them, and the scene
entry before any shape.

Example:
    >>> from obscura.config import RenderSettings
    >>> from obscura.scene.loader import load_scene
    >>> loaded = load_scene("examples/example.scene", RenderSettings(width=320, height=160))  # doctest: +SKIP
    >>> buffer = loaded.camera.capture(loaded.scene, rng)  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path

from obscura.camera.hooks import CaptureHooks
from obscura.camera.pinhole import DEFAULT_UP, Camera
from obscura.config import RenderSettings
from obscura.core.color import DEFAULT_SKY, Color
from obscura.core.vector import Vector
from obscura.geometry.plane import Plane
from obscura.geometry.quadric import Quadric, QuadricEquation
from obscura.geometry.sphere import Sphere
from obscura.geometry.surface import Surface
from obscura.materials.dielectric import Dielectric
from obscura.materials.lambertian import Lambertian
from obscura.materials.material import Material
from obscura.materials.metallic import Metallic
from obscura.scene.manager import Scene

logger = logging.getLogger(__name__)

COMMENT = "//"
PROPERTY_INDENT = "  "

TUPLE_PATTERN = re.compile(r"^\(\s*(.*?)\s*\)$")

MATERIAL_TYPES = ("lambertian", "metallic", "dielectric")
SHAPE_TYPES = ("plane", "sphere", "quadric")


class SceneFormattingError(ValueError):
    """Raised when a scene description cannot be parsed or built."""


@dataclass
class Entry:
    """One entry of a scene file.

    Attributes:
        type: Entry type, e.g. "sphere".
        name: Optional name, used to reference materials.
        line: 1-based line number where the entry starts.
        properties: Property values keyed by property name, unparsed.
    """

    type: str
    name: str = ""
    line: int = 0
    properties: dict[str, str] = field(default_factory=dict)

    def describe(self) -> str:
        label = f"{self.type} {self.name}".strip()
        return f"'{label}' (line {self.line})"

    def require(self, key: str) -> str:
        try:
            return self.properties[key]
        except KeyError:
            raise SceneFormattingError(
                f"Entry {self.describe()} is missing property '{key}'."
            ) from None


@dataclass
class LoadedScene:
    """A scene and the camera described alongside it."""

    scene: Scene
    camera: Camera


# =============================================================================
# Parsing
# =============================================================================


def parse_entries(text: str) -> list[Entry]:
    """Split a scene description into entries and their raw properties.

    Raises:
        SceneFormattingError: If a property appears before any entry or has
            no value.
    """
    entries: list[Entry] = []
    for number, raw in enumerate(text.splitlines(), start=1):
        line = raw.split(COMMENT, 1)[0].rstrip()
        if not line.strip():
            continue

        if line.startswith(PROPERTY_INDENT):
            if not entries:
                raise SceneFormattingError(
                    f"Improper scene file formatting: property on line {number} "
                    "does not belong to an entry."
                )
            parts = line.strip().split(None, 1)
            if len(parts) != 2:
                raise SceneFormattingError(
                    f"Property '{parts[0]}' on line {number} has no value."
                )
            entries[-1].properties[parts[0]] = parts[1].strip()
        else:
            parts = line.strip().split(None, 1)
            name = parts[1].strip() if len(parts) == 2 else ""
            entries.append(Entry(parts[0].lower(), name, number))

    return entries


def parse_float(text: str, entry: Entry, key: str) -> float:
    try:
        return float(text)
    except ValueError:
        raise SceneFormattingError(
            f"Property '{key}' of {entry.describe()}: {text!r} is not a number."
        ) from None


def parse_tuple(text: str, count: int, entry: Entry, key: str) -> tuple[float, ...]:
    """Parse a parenthesized, comma separated list of numbers."""
    match = TUPLE_PATTERN.match(text)
    parts = match.group(1).split(",") if match else []
    if len(parts) != count:
        raise SceneFormattingError(
            f"Property '{key}' of {entry.describe()}: unknown format {text!r}. "
            f"Expected {count} comma separated numbers in parentheses."
        )
    return tuple(parse_float(part.strip(), entry, key) for part in parts)


def parse_vector(text: str, entry: Entry, key: str) -> Vector:
    return Vector(*parse_tuple(text, 3, entry, key))


def parse_color(text: str, entry: Entry, key: str) -> Color:
    try:
        return Color.from_hex(text)
    except ValueError as exc:
        raise SceneFormattingError(
            f"Property '{key}' of {entry.describe()}: {exc}"
        ) from None


# =============================================================================
# Building
# =============================================================================


def build_material(entry: Entry) -> Material:
    color = parse_color(entry.require("color"), entry, "color")
    try:
        if entry.type == "lambertian":
            return Lambertian(color)
        if entry.type == "metallic":
            fuzz = parse_float(entry.properties.get("fuzz", "0"), entry, "fuzz")
            return Metallic(color, fuzz)
        index = parse_float(entry.require("index"), entry, "index")
        return Dielectric(color, index)
    except SceneFormattingError:
        raise
    except ValueError as exc:
        raise SceneFormattingError(f"Entry {entry.describe()}: {exc}") from None


def build_shape(entry: Entry, materials: dict[str, Material]) -> Surface:
    material_name = entry.require("material")
    material = materials.get(material_name)
    if material is None:
        raise SceneFormattingError(
            f"Undefined material: {material_name!r} in {entry.describe()}."
        )
    position = parse_vector(entry.require("position"), entry, "position")

    try:
        if entry.type == "plane":
            normal = parse_vector(entry.require("normal"), entry, "normal")
            return Plane(material, position, normal)
        if entry.type == "sphere":
            radius = parse_float(entry.require("radius"), entry, "radius")
            return Sphere(material, position, radius)
        coefficients = parse_tuple(entry.require("equation"), 10, entry, "equation")
        return Quadric(material, position, QuadricEquation.from_sequence(coefficients))
    except SceneFormattingError:
        raise
    except ValueError as exc:
        raise SceneFormattingError(f"Entry {entry.describe()}: {exc}") from None


def build_camera(
    entry: Entry,
    settings: RenderSettings,
    hooks: CaptureHooks | None = None,
) -> Camera:
    position = parse_vector(entry.require("position"), entry, "position")
    direction = parse_vector(entry.require("direction"), entry, "direction")
    fov = parse_float(entry.require("fov"), entry, "fov")
    up = DEFAULT_UP
    if "up" in entry.properties:
        up = parse_vector(entry.properties["up"], entry, "up")

    camera = Camera.from_settings(position, settings, hooks)
    try:
        camera.aim(fov, direction, up)
    except ValueError as exc:
        raise SceneFormattingError(f"Entry {entry.describe()}: {exc}") from None
    return camera


def build_scene(
    entries: list[Entry],
    settings: RenderSettings | None = None,
    hooks: CaptureHooks | None = None,
) -> LoadedScene:
    """Turn parsed entries into a Scene and an aimed Camera.

    Args:
        entries: Entries from :func:`parse_entries`.
        settings: Resolution and sampling for the camera.
        hooks: Capture hooks to install on the camera.

    Returns:
        The scene and its camera.

    Raises:
        SceneFormattingError: On unknown types, undefined materials, missing
            or malformed properties, or a missing scene or camera entry.
    """
    settings = settings if settings is not None else RenderSettings()
    scene: Scene | None = None
    camera: Camera | None = None
    materials: dict[str, Material] = {}

    for entry in entries:
        if entry.type == "scene":
            if scene is not None:
                raise SceneFormattingError(f"Duplicate scene entry {entry.describe()}.")
            index = parse_float(entry.require("index"), entry, "index")
            sky = DEFAULT_SKY
            if "sky" in entry.properties:
                sky = parse_color(entry.properties["sky"], entry, "sky")
            try:
                scene = Scene(refraction_index=index, sky=sky)
            except ValueError as exc:
                raise SceneFormattingError(f"Entry {entry.describe()}: {exc}") from None
        elif entry.type == "camera":
            if camera is not None:
                raise SceneFormattingError(f"Duplicate camera entry {entry.describe()}.")
            camera = build_camera(entry, settings, hooks)
        elif entry.type in MATERIAL_TYPES:
            if not entry.name:
                raise SceneFormattingError(f"Material {entry.describe()} needs a name.")
            materials[entry.name] = build_material(entry)
        elif entry.type in SHAPE_TYPES:
            if scene is None:
                raise SceneFormattingError(
                    f"Shape {entry.describe()} appears before the scene entry."
                )
            scene.add(build_shape(entry, materials))
        else:
            raise SceneFormattingError(f"Unknown type: {entry.type!r} on line {entry.line}.")

    if scene is None:
        raise SceneFormattingError("Scene file has no scene entry.")
    if camera is None:
        raise SceneFormattingError("Scene file has no camera entry.")

    logger.info(
        "Loaded scene with %d surfaces and %d materials under a %s sky",
        len(scene),
        len(materials),
        scene.sky.to_hex(),
    )
    return LoadedScene(scene, camera)


def load_scene(
    path: str | Path,
    settings: RenderSettings | None = None,
    hooks: CaptureHooks | None = None,
) -> LoadedScene:
    """Read and build a scene description file.

    Raises:
        OSError: If the file cannot be read.
        SceneFormattingError: If the description is invalid.
    """
    path = Path(path)
    logger.debug("Reading scene file %s", path)
    return build_scene(parse_entries(path.read_text(encoding="utf-8")), settings, hooks)


__all__ = [
    "Entry",
    "LoadedScene",
    "SceneFormattingError",
    "build_scene",
    "load_scene",
    "parse_entries",
]
