"""Sample scene exercising every part of the shading pipeline.

The scene is a room built from planes with a striped floor, a mirror on the
back wall, a glass sphere in front of two opaque spheres, and a small group
of spheres sharing one transform.

Example:
    >>> from raytracer.scene.demo import create_demo_scene
    >>> world, camera = create_demo_scene(width=160, height=90)
    >>> image = camera.render(world)
"""

import math
from dataclasses import dataclass

from raytracer.camera.pinhole import PinholeCamera
from raytracer.core.transforms import (
    rotation_x,
    rotation_y,
    scaling,
    translation,
    view_transform,
)
from raytracer.core.tuples import color, point, vector
from raytracer.geometry.group import Group
from raytracer.geometry.plane import Plane
from raytracer.geometry.shape import IdAllocator
from raytracer.geometry.sphere import Sphere
from raytracer.materials.material import Material
from raytracer.materials.patterns import FlatPattern, RingPattern, StripePattern
from raytracer.scene.light import PointLight
from raytracer.scene.world import World


@dataclass
class DemoSceneParams:
    """Tunable parts of the demo scene.

    Attributes:
        light_position: World-space light position.
        light_color: RGB light intensity.
        glass_index: Refractive index of the glass sphere.
        mirror_reflectivity: Reflective coefficient of the back wall.
    """

    light_position: tuple[float, float, float] = (-10.0, 10.0, -10.0)
    light_color: tuple[float, float, float] = (1.0, 1.0, 1.0)
    glass_index: float = 1.5
    mirror_reflectivity: float = 0.6


def create_demo_scene(
    width: int = 200,
    height: int = 100,
    params: DemoSceneParams | None = None,
    id_allocator: IdAllocator | None = None,
) -> tuple[World, PinholeCamera]:
    """Create the demo world and a camera looking into it.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        params: Optional overrides; defaults to DemoSceneParams().
        id_allocator: Optional id source for the created shapes.

    Returns:
        Tuple of (world, camera).
    """
    if params is None:
        params = DemoSceneParams()

    floor = Plane(
        material=Material(
            pattern=StripePattern(
                color(0.9, 0.9, 0.9),
                color(0.3, 0.3, 0.35),
                transform=rotation_y(math.pi / 4) @ scaling(0.5, 0.5, 0.5),
            ),
            specular=0.0,
            reflective=0.1,
        ),
        id_allocator=id_allocator,
    )

    back_wall = Plane(
        transform=translation(0.0, 0.0, 8.0) @ rotation_x(math.pi / 2),
        material=Material(
            pattern=FlatPattern(0.2, 0.2, 0.25),
            specular=0.0,
            reflective=params.mirror_reflectivity,
        ),
        id_allocator=id_allocator,
    )

    middle = Sphere(
        transform=translation(-0.5, 1.0, 0.5),
        material=Material(
            pattern=RingPattern(
                color(0.1, 1.0, 0.5),
                color(0.05, 0.5, 0.25),
                transform=scaling(0.2, 0.2, 0.2),
            ),
            diffuse=0.7,
            specular=0.3,
        ),
        id_allocator=id_allocator,
    )

    glass = Sphere(
        transform=translation(1.2, 0.6, -1.2) @ scaling(0.6, 0.6, 0.6),
        material=Material(
            pattern=FlatPattern(0.05, 0.05, 0.05),
            diffuse=0.1,
            specular=1.0,
            shininess=300.0,
            reflective=0.9,
            transparency=0.9,
            refractive_index=params.glass_index,
        ),
        id_allocator=id_allocator,
    )

    cluster = Group(
        transform=translation(-2.2, 0.0, 1.5) @ rotation_y(math.pi / 6),
        id_allocator=id_allocator,
    )
    for i, offset in enumerate((-0.6, 0.0, 0.6)):
        cluster.add_child(
            Sphere(
                transform=translation(offset, 0.25 + 0.25 * i, 0.0) @ scaling(0.25, 0.25, 0.25),
                material=Material(pattern=FlatPattern(1.0, 0.8 - 0.3 * i, 0.1), diffuse=0.7),
                id_allocator=id_allocator,
            )
        )

    world = World(
        shapes=[floor, back_wall, middle, glass, cluster],
        light=PointLight(position=point(*params.light_position), intensity=color(*params.light_color)),
    )

    camera = PinholeCamera(
        width,
        height,
        math.pi / 3,
        view_transform(point(0.0, 1.5, -5.0), point(0.0, 1.0, 0.0), vector(0.0, 1.0, 0.0)),
    )
    return world, camera
