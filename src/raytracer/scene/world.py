"""World: the shapes of a scene, its light, and the shading pipeline.

The world answers the question "what color does this ray see?" by

1. intersecting the ray with every shape (a flat linear scan; groups recurse),
2. picking the nearest non-negative hit,
3. computing Phong lighting with a shadow test toward the light,
4. recursing for reflection and refraction, blending the two with Schlick's
   Fresnel approximation when a material has both.

Recursion is bounded by an explicit ``depth`` argument that decreases by one
per nested call; at zero the reflected and refracted contributions are black.
This terminates even for scenes such as two facing mirrors.

The world is built once and then only read, so it can be shared with (or
pickled to) any number of rendering workers.

Example:
    >>> from raytracer.core.ray import Ray
    >>> from raytracer.core.tuples import point, vector
    >>> from raytracer.scene.world import default_world
    >>> world = default_world()
    >>> seen = world.color_at(Ray(point(0.0, 0.0, -5.0), vector(0.0, 0.0, 1.0)), depth=5)
    >>> # seen is approximately (0.38066, 0.47583, 0.2855)
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from raytracer.core.intersection import Intersection, IntersectionState, sorted_intersections
from raytracer.core.ray import Ray
from raytracer.core.render import DEFAULT_MAX_DEPTH
from raytracer.core.transforms import scaling
from raytracer.core.tuples import EPSILON, Color, Tuple4, approx_zero, black, dot, magnitude, point, white
from raytracer.geometry.shape import Shape
from raytracer.geometry.sphere import Sphere
from raytracer.materials.material import Material, lighting
from raytracer.materials.patterns import FlatPattern
from raytracer.scene.light import PointLight


@dataclass
class World:
    """A collection of shapes lit by a single point light.

    Attributes:
        shapes: Top-level shapes, intersected in list order. A top-level
            shape must not belong to a group: its parent transforms would be
            skipped by intersections but applied by normals, and the parent
            link is not carried to rendering workers.
        light: The light source.
    """

    shapes: list[Shape] = field(default_factory=list)
    light: PointLight = field(default_factory=PointLight)

    def __post_init__(self) -> None:
        for shape in self.shapes:
            _check_top_level(shape)

    def add(self, shape: Shape) -> Shape:
        """Append a top-level shape and return it.

        Raises:
            ValueError: If the shape already belongs to a group.
        """
        _check_top_level(shape)
        self.shapes.append(shape)
        return shape

    # =========================================================================
    # Intersection queries
    # =========================================================================

    def intersections(self, ray: Ray) -> tuple[Intersection | None, list[Intersection]]:
        """Intersect a ray with every shape.

        Negative ``t`` values are discarded. The hit is tracked in the same
        pass: shapes are visited in list order and on an exactly equal ``t``
        the first one found is kept.

        Returns:
            Tuple of (hit, intersections) where hit is the nearest
            non-negative intersection (or None) and intersections are all the
            retained intersections sorted by ``t``.
        """
        retained: list[Intersection] = []
        nearest: Intersection | None = None

        for shape in self.shapes:
            for intersection in shape.intersections(ray):
                if intersection.t < 0.0:
                    continue
                retained.append(intersection)
                if nearest is None or intersection.t < nearest.t:
                    nearest = intersection

        return nearest, sorted_intersections(retained)

    def is_ray_obstructed(self, ray: Ray, distance: float) -> bool:
        """Return True as soon as any intersection lies in ``[0, distance)``.

        Considers the same intersections as intersections(), but stops at the
        first one found instead of collecting and sorting them all.
        """
        for shape in self.shapes:
            for intersection in shape.intersections(ray):
                if 0.0 <= intersection.t < distance:
                    return True
        return False

    def is_shadowed(self, world_point: Tuple4) -> bool:
        """Check whether something lies between a point and the light."""
        lightv = self.light.position - world_point
        distance = magnitude(lightv)
        if distance < EPSILON:
            return False
        ray = Ray(world_point, lightv / distance)
        return self.is_ray_obstructed(ray, distance)

    # =========================================================================
    # Shading
    # =========================================================================

    def color_at(self, ray: Ray, depth: int = DEFAULT_MAX_DEPTH) -> Color:
        """Return the color seen along a ray (black on a miss)."""
        nearest, intersections = self.intersections(ray)
        if nearest is None:
            return black()
        state = ray.intersection_state(nearest, intersections)
        return self.shade_hit(state, depth)

    def shade_hit(self, state: IntersectionState, depth: int = DEFAULT_MAX_DEPTH) -> Color:
        """Combine surface, reflected and refracted color for a hit."""
        material = state.shape.material
        in_shadow = self.is_shadowed(state.over_point)

        surface = lighting(
            material,
            state.shape,
            self.light,
            state.point,
            state.eyev,
            state.normalv,
            in_shadow,
        )
        reflected = self.reflected_color(state, depth)
        refracted = self.refracted_color(state, depth)

        if material.reflective > 0.0 and material.transparency > 0.0:
            reflectance = state.schlick()
            return surface + reflected * reflectance + refracted * (1.0 - reflectance)
        return surface + reflected + refracted

    def reflected_color(self, state: IntersectionState, depth: int = DEFAULT_MAX_DEPTH) -> Color:
        """Color contributed by the mirror reflection at a hit."""
        reflective = state.shape.material.reflective
        if depth <= 0 or approx_zero(reflective):
            return black()

        reflect_ray = Ray(state.over_point, state.reflectv)
        return self.color_at(reflect_ray, depth - 1) * reflective

    def refracted_color(self, state: IntersectionState, depth: int = DEFAULT_MAX_DEPTH) -> Color:
        """Color contributed by light refracted through a hit.

        Uses Snell's law to bend the ray; returns black under total internal
        reflection, when there is no refracted ray.
        """
        transparency = state.shape.material.transparency
        if depth <= 0 or approx_zero(transparency):
            return black()

        n_ratio = state.n1 / state.n2
        cos_i = dot(state.eyev, state.normalv)
        sin2_t = n_ratio * n_ratio * (1.0 - cos_i * cos_i)
        if sin2_t > 1.0:
            return black()

        cos_t = math.sqrt(1.0 - sin2_t)
        direction = state.normalv * (n_ratio * cos_i - cos_t) - state.eyev * n_ratio
        refract_ray = Ray(state.under_point, direction)
        return self.color_at(refract_ray, depth - 1) * transparency


def _check_top_level(shape: Shape) -> None:
    if shape.parent is not None:
        raise ValueError(f"Shape {shape.id} belongs to a group and cannot be added to the world directly")

def default_world() -> World:
    """Create the two-sphere reference world.

    Contains a unit sphere with a light green flat pattern (diffuse 0.7,
    specular 0.2) and a concentric sphere of radius 0.5 with the default
    material, lit by a white light at (-10, 10, -10).
    """
    outer = Sphere(
        material=Material(
            pattern=FlatPattern(0.8, 1.0, 0.6),
            diffuse=0.7,
            specular=0.2,
        )
    )
    inner = Sphere(transform=scaling(0.5, 0.5, 0.5))

    return World(
        shapes=[outer, inner],
        light=PointLight(position=point(-10.0, 10.0, -10.0), intensity=white()),
    )
