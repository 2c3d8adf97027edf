"""Ray data structure and hit preparation.

A ray is an origin point and a direction vector. The direction is not
normalized by the type: transforming a ray into a scaled object space changes
its length on purpose, so that ``t`` values stay comparable between world and
object space. Call sites normalize where a unit step is required (light and
camera rays).

Example:
    >>> from raytracer.core.ray import Ray
    >>> from raytracer.core.tuples import point, vector
    >>> ray = Ray(point(0.0, 0.0, -5.0), vector(0.0, 0.0, 1.0))
    >>> ray.position(4.0)
    array([ 0.,  0., -1.,  1.])
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from raytracer.core.intersection import (
    Intersection,
    IntersectionState,
    refractive_indices,
)
from raytracer.core.transforms import Matrix
from raytracer.core.tuples import EPSILON, Tuple4, dot, reflect

if TYPE_CHECKING:
    from raytracer.geometry.shape import Shape


class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction vector of the ray.
    """

    __slots__ = ("origin", "direction")

    def __init__(self, origin: Tuple4, direction: Tuple4):
        self.origin = origin
        self.direction = direction

    def __repr__(self) -> str:
        return f"Ray(origin={self.origin[:3].tolist()}, direction={self.direction[:3].tolist()})"

    def position(self, t: float) -> Tuple4:
        """Compute the point along the ray at parameter t."""
        return self.origin + self.direction * t

    def transform(self, matrix: Matrix) -> Ray:
        """Return a new ray with origin and direction multiplied by ``matrix``."""
        return Ray(matrix @ self.origin, matrix @ self.direction)

    def hit(self, shape: Shape) -> float | None:
        """Return the smallest non-negative ``t`` at which this ray meets ``shape``.

        The shape's intersections are not assumed to be ordered.
        """
        result = None
        for intersection in shape.intersections(self):
            if intersection.t >= 0.0 and (result is None or intersection.t < result):
                result = intersection.t
        return result

    def intersection_state(
        self,
        target: Intersection,
        intersections: Sequence[Intersection] | None = None,
    ) -> IntersectionState:
        """Precompute the shading state for a hit.

        Args:
            target: The intersection being shaded.
            intersections: All intersections along this ray, sorted by ``t``.
                Used to determine the refractive indices on either side of the
                surface. Defaults to ``[target]``.

        Returns:
            The IntersectionState for ``target``.
        """
        if intersections is None:
            intersections = [target]

        point = self.position(target.t)
        eyev = -self.direction
        normalv = target.shape.normal_at(point)

        inside = dot(normalv, eyev) < 0.0
        if inside:
            normalv = -normalv

        n1, n2 = refractive_indices(target, intersections)

        return IntersectionState(
            t=target.t,
            shape=target.shape,
            point=point,
            eyev=eyev,
            normalv=normalv,
            inside=inside,
            over_point=point + normalv * EPSILON,
            under_point=point - normalv * EPSILON,
            reflectv=reflect(self.direction, normalv),
            n1=n1,
            n2=n2,
        )
