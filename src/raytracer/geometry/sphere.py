"""Unit sphere primitive.

The sphere is centered at the object-space origin with radius 1; position and
size come from its transform. Intersection uses the numerically robust
quadratic formulation (Ray Tracing Gems, chapter 7) to avoid catastrophic
cancellation when ``b^2`` is close to ``4ac``.

Example:
    >>> from raytracer.core.ray import Ray
    >>> from raytracer.core.tuples import point, vector
    >>> from raytracer.geometry.sphere import Sphere
    >>> ray = Ray(point(0.0, 0.0, -5.0), vector(0.0, 0.0, 1.0))
    >>> sorted(i.t for i in Sphere().intersections(ray))
    [4.0, 6.0]
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from raytracer.core.intersection import Intersection
from raytracer.core.tuples import Tuple4, dot, point
from raytracer.geometry.shape import Shape
from raytracer.materials.material import Material

if TYPE_CHECKING:
    from raytracer.core.ray import Ray

_ORIGIN = point(0.0, 0.0, 0.0)


def solve_quadratic(a: float, b: float, c: float) -> tuple[float, float] | None:
    """Solve ``a*t^2 + b*t + c = 0`` for real roots.

    Uses ``q = -(b + sign(b) * sqrt(d)) / 2`` so that neither root is computed
    by subtracting nearly equal values.

    Returns:
        Tuple of (t0, t1) with t0 <= t1, or None if there are no real roots.
        A tangent yields two equal roots.
    """
    discriminant = b * b - 4.0 * a * c
    if discriminant < 0.0:
        return None

    sqrt_d = math.sqrt(discriminant)
    sign_b = -1.0 if b < 0.0 else 1.0
    q = -0.5 * (b + sign_b * sqrt_d)

    if abs(q) < 1e-12:
        # Fall back to the textbook formula for the degenerate case
        t0 = (-b - sqrt_d) / (2.0 * a)
        t1 = (-b + sqrt_d) / (2.0 * a)
    else:
        t0 = q / a
        t1 = c / q

    if t0 > t1:
        t0, t1 = t1, t0
    return t0, t1


class Sphere(Shape):
    """A unit sphere at the object-space origin."""

    def local_intersections(self, local_ray: Ray) -> list[Intersection]:
        sphere_to_ray = local_ray.origin - _ORIGIN
        direction = local_ray.direction

        a = dot(direction, direction)
        b = 2.0 * dot(direction, sphere_to_ray)
        c = dot(sphere_to_ray, sphere_to_ray) - 1.0

        roots = solve_quadratic(a, b, c)
        if roots is None:
            return []
        return [Intersection(roots[0], self), Intersection(roots[1], self)]

    def local_normal_at(self, local_point: Tuple4) -> Tuple4:
        return local_point - _ORIGIN


def glass_sphere(**kwargs) -> Sphere:
    """Create a fully transparent sphere with the refractive index of glass."""
    return Sphere(material=Material(transparency=1.0, refractive_index=1.5), **kwargs)
