"""Infinite plane primitive.

The plane is the object-space xz plane (y = 0) with its normal along +y. Rays
parallel to the plane, or lying in it, produce no intersections.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from raytracer.core.intersection import Intersection
from raytracer.core.tuples import EPSILON, Tuple4, vector
from raytracer.geometry.shape import Shape

if TYPE_CHECKING:
    from raytracer.core.ray import Ray

_NORMAL = vector(0.0, 1.0, 0.0)


class Plane(Shape):
    """The xz plane in object space."""

    def local_intersections(self, local_ray: Ray) -> list[Intersection]:
        if abs(local_ray.direction[1]) < EPSILON:
            return []
        t = -local_ray.origin[1] / local_ray.direction[1]
        return [Intersection(t, self)]

    def local_normal_at(self, local_point: Tuple4) -> Tuple4:
        return _NORMAL.copy()
