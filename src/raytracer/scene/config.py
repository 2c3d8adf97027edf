"""Scene descriptions as plain dictionaries.

A ``SceneConfig`` describes a light, a camera and a tree of shapes using only
JSON-compatible values, so scenes can be stored in files and rebuilt into a
``World`` and ``PinholeCamera``.

Shape entries::

    {
        "type": "sphere" | "plane" | "group",
        "transform": [{"scale": [2, 2, 2]}, {"translate": [0, 1, 0]}],
        "material": {"pattern": {"type": "flat", "color": [1, 0, 0]}, "diffuse": 0.7},
        "children": [...]  # groups only
    }

Transform operations are applied in list order (the first entry is applied
to the shape first). Supported operations: ``translate``, ``scale``,
``rotate_x``, ``rotate_y``, ``rotate_z`` (radians) and ``shear`` (six
values, see ``shearing``).

Example:
    >>> from raytracer.scene.config import SceneConfig, build_camera, build_world
    >>> config = SceneConfig.from_dict({
    ...     "light": {"position": [-10, 10, -10], "intensity": [1, 1, 1]},
    ...     "camera": {"width": 100, "height": 50, "field_of_view": 1.047,
    ...                "from": [0, 1.5, -5], "to": [0, 1, 0], "up": [0, 1, 0]},
    ...     "shapes": [{"type": "sphere"}],
    ... })
    >>> world = build_world(config)
    >>> camera = build_camera(config)
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from raytracer.camera.pinhole import PinholeCamera
from raytracer.core.transforms import (
    Matrix,
    identity,
    rotation_x,
    rotation_y,
    rotation_z,
    scaling,
    shearing,
    translation,
    view_transform,
)
from raytracer.core.tuples import color, point, vector
from raytracer.geometry.group import Group
from raytracer.geometry.plane import Plane
from raytracer.geometry.shape import IdAllocator, Shape
from raytracer.geometry.sphere import Sphere
from raytracer.materials.material import Material
from raytracer.materials.patterns import FlatPattern, Pattern, RingPattern, StripePattern
from raytracer.scene.light import PointLight
from raytracer.scene.world import World

_MATERIAL_SCALARS = (
    "ambient",
    "diffuse",
    "specular",
    "shininess",
    "reflective",
    "transparency",
    "refractive_index",
)


@dataclass
class SceneConfig:
    """Configuration for a complete scene.

    Attributes:
        light: Light configuration (``position``, ``intensity``).
        camera: Camera configuration (``width``, ``height``,
            ``field_of_view``, ``from``, ``to``, ``up``).
        shapes: Top-level shape configurations.
    """

    light: dict[str, Any] = field(default_factory=dict)
    camera: dict[str, Any] = field(default_factory=dict)
    shapes: list[dict[str, Any]] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SceneConfig:
        return cls(
            light=data.get("light", {}),
            camera=data.get("camera", {}),
            shapes=data.get("shapes", []),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"light": self.light, "camera": self.camera, "shapes": self.shapes}


def load_scene_config(path: str | Path) -> SceneConfig:
    """Read a SceneConfig from a JSON file."""
    with open(path, encoding="utf-8") as f:
        return SceneConfig.from_dict(json.load(f))


# =============================================================================
# Builders
# =============================================================================


def build_transform(operations: list[dict[str, Any]]) -> Matrix:
    """Compose a list of transform operations into one matrix.

    Raises:
        ValueError: If an operation is unknown or malformed.
    """
    matrix = identity()
    for operation in operations:
        if len(operation) != 1:
            raise ValueError(f"Transform operation must have exactly one key: {operation}")
        name, args = next(iter(operation.items()))

        if name == "translate":
            step = translation(*args)
        elif name == "scale":
            step = scaling(*args)
        elif name == "rotate_x":
            step = rotation_x(args)
        elif name == "rotate_y":
            step = rotation_y(args)
        elif name == "rotate_z":
            step = rotation_z(args)
        elif name == "shear":
            step = shearing(*args)
        else:
            raise ValueError(f"Unknown transform operation: {name}")

        matrix = step @ matrix
    return matrix


def build_pattern(data: dict[str, Any]) -> Pattern:
    """Build a pattern from its configuration.

    Raises:
        ValueError: If the pattern type is unknown.
    """
    pattern_type = data.get("type", "flat").lower()
    transform = build_transform(data.get("transform", []))

    if pattern_type == "flat":
        return FlatPattern(*data.get("color", [1.0, 1.0, 1.0]), transform=transform)
    if pattern_type == "stripe":
        return StripePattern(
            color(*data.get("a", [1.0, 1.0, 1.0])),
            color(*data.get("b", [0.0, 0.0, 0.0])),
            transform=transform,
        )
    if pattern_type == "ring":
        return RingPattern(
            color(*data.get("a", [1.0, 1.0, 1.0])),
            color(*data.get("b", [0.0, 0.0, 0.0])),
            transform=transform,
        )
    raise ValueError(f"Unknown pattern type: {pattern_type}")


def build_material(data: dict[str, Any]) -> Material:
    material = Material()
    if "pattern" in data:
        material.pattern = build_pattern(data["pattern"])
    elif "color" in data:
        material.pattern = FlatPattern(*data["color"])
    for name in _MATERIAL_SCALARS:
        if name in data:
            setattr(material, name, float(data[name]))
    return material


def build_shape(data: dict[str, Any], id_allocator: IdAllocator | None = None) -> Shape:
    """Build a shape (and, for groups, its children) from its configuration.

    Raises:
        ValueError: If the shape type is unknown or a group has a material.
    """
    shape_type = data.get("type", "").lower()
    transform = build_transform(data.get("transform", []))

    if shape_type == "group":
        if "material" in data:
            raise ValueError("Groups cannot have a material; set it on the children")
        group = Group(transform, id_allocator=id_allocator)
        for child in data.get("children", []):
            group.add_child(build_shape(child, id_allocator))
        return group

    material = build_material(data.get("material", {}))
    if shape_type == "sphere":
        return Sphere(transform, material, id_allocator=id_allocator)
    if shape_type == "plane":
        return Plane(transform, material, id_allocator=id_allocator)
    raise ValueError(f"Unknown shape type: {shape_type!r}")


def build_world(config: SceneConfig, id_allocator: IdAllocator | None = None) -> World:
    light = PointLight(
        position=point(*config.light.get("position", [-10.0, 10.0, -10.0])),
        intensity=color(*config.light.get("intensity", [1.0, 1.0, 1.0])),
    )
    shapes = [build_shape(data, id_allocator) for data in config.shapes]
    return World(shapes=shapes, light=light)


def build_camera(config: SceneConfig) -> PinholeCamera:
    camera = config.camera
    return PinholeCamera(
        int(camera.get("width", 100)),
        int(camera.get("height", 50)),
        float(camera.get("field_of_view", math.pi / 3)),
        view_transform(
            point(*camera.get("from", [0.0, 0.0, -5.0])),
            point(*camera.get("to", [0.0, 0.0, 0.0])),
            vector(*camera.get("up", [0.0, 1.0, 0.0])),
        ),
    )
