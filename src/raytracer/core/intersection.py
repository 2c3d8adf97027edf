"""Intersection records and per-hit shading state.

An ``Intersection`` ties a ray parameter ``t`` to the leaf shape it belongs to.
Intersections order by ``t`` and compare equal when their ``t`` values agree to
within ``EPSILON`` on the same shape, so near-duplicate roots (for example the
double root of a tangent ray) collapse when collected into a sorted set.

``IntersectionState`` holds everything the shading pipeline needs about one
hit: the point, the eye and normal vectors, the offset points used to launch
shadow and refraction rays, the reflection direction and the refractive
indices on either side of the surface.
"""

from __future__ import annotations

import functools
import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from raytracer.core.tuples import EPSILON, Tuple4, dot

if TYPE_CHECKING:
    from raytracer.geometry.shape import Shape

# Refractive index of the medium outside every shape
VACUUM_REFRACTIVE_INDEX = 1.0


@functools.total_ordering
class Intersection:
    """A ray parameter paired with the shape it hits.

    Attributes:
        t: Distance parameter along the ray.
        shape: The (leaf) shape that was hit. Not owned.
        u: Optional surface parameterization, for non-implicit surfaces.
        v: Optional surface parameterization, for non-implicit surfaces.
    """

    __slots__ = ("t", "shape", "u", "v")

    def __init__(self, t: float, shape: Shape, u: float | None = None, v: float | None = None):
        self.t = float(t)
        self.shape = shape
        self.u = u
        self.v = v

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Intersection):
            return NotImplemented
        return self.shape is other.shape and abs(self.t - other.t) < EPSILON

    def __lt__(self, other: Intersection) -> bool:
        return self.t < other.t

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Intersection(t={self.t!r}, shape={self.shape!r})"


def hit(intersections: Iterable[Intersection]) -> Intersection | None:
    """Select the intersection with the smallest non-negative ``t``.

    The input need not be sorted. On an exact tie the earliest entry wins.

    Returns:
        The visible intersection, or None if every ``t`` is negative.
    """
    result = None
    for intersection in intersections:
        if intersection.t >= 0.0 and (result is None or intersection.t < result.t):
            result = intersection
    return result


def sorted_intersections(intersections: Iterable[Intersection]) -> list[Intersection]:
    """Sort by ``t`` and drop entries equal to one already kept.

    Entries of different shapes are always kept, even at the same ``t``.
    """
    result: list[Intersection] = []
    for intersection in sorted(intersections):
        # Only the tail can be within EPSILON of a sorted newcomer
        duplicate = False
        for kept in reversed(result):
            if intersection.t - kept.t >= EPSILON:
                break
            if kept == intersection:
                duplicate = True
                break
        if not duplicate:
            result.append(intersection)
    return result


@dataclass
class IntersectionState:
    """Precomputed shading values for a single hit.

    Attributes:
        t: The ray parameter of the hit.
        shape: The shape that was hit.
        point: World-space hit point.
        eyev: Vector toward the eye (negated ray direction).
        normalv: World-space unit normal, flipped to face the eye.
        inside: True when the ray started inside the shape.
        over_point: ``point`` nudged along the normal; origin for shadow and
            reflection rays.
        under_point: ``point`` nudged against the normal; origin for
            refraction rays.
        reflectv: The ray direction reflected about the normal.
        n1: Refractive index of the medium being exited.
        n2: Refractive index of the medium being entered.
    """

    t: float
    shape: Shape
    point: Tuple4
    eyev: Tuple4
    normalv: Tuple4
    inside: bool
    over_point: Tuple4
    under_point: Tuple4
    reflectv: Tuple4
    n1: float = VACUUM_REFRACTIVE_INDEX
    n2: float = VACUUM_REFRACTIVE_INDEX

    def schlick(self) -> float:
        """Approximate the Fresnel reflectance at this hit.

        Returns:
            A value in [0, 1]; 1.0 under total internal reflection.
        """
        cos = dot(self.eyev, self.normalv)
        if self.n1 > self.n2:
            n = self.n1 / self.n2
            sin2_t = n * n * (1.0 - cos * cos)
            if sin2_t > 1.0:
                return 1.0
            cos = math.sqrt(1.0 - sin2_t)
        r0 = ((self.n1 - self.n2) / (self.n1 + self.n2)) ** 2
        return r0 + (1.0 - r0) * (1.0 - cos) ** 5


def refractive_indices(
    target: Intersection, intersections: Sequence[Intersection]
) -> tuple[float, float]:
    """Find the refractive indices on either side of ``target``.

    Walks the intersections in order, tracking which shapes the ray is
    currently inside. ``target`` is matched by identity.

    Returns:
        Tuple of (n1, n2): the index being exited and the index being entered.
    """
    containers: list[Shape] = []
    n1 = n2 = VACUUM_REFRACTIVE_INDEX

    for intersection in intersections:
        if intersection is target:
            n1 = containers[-1].material.refractive_index if containers else VACUUM_REFRACTIVE_INDEX

        for i, shape in enumerate(containers):
            if shape is intersection.shape:
                del containers[i]
                break
        else:
            containers.append(intersection.shape)

        if intersection is target:
            n2 = containers[-1].material.refractive_index if containers else VACUUM_REFRACTIVE_INDEX
            break

    return n1, n2
