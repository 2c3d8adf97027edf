"""Procedural patterns that color a material point by point.

A pattern lives in its own pattern space, placed relative to the object it
decorates by ``transform``. ``color_at_shape`` converts a world-space point
into object space (through every parent group) and then into pattern space
before evaluating ``color_at``.

Available patterns:
    FlatPattern: a single color everywhere
    StripePattern: alternates two colors along x
    RingPattern: alternates two colors in concentric rings around the y axis
    TestPattern: returns the pattern-space coordinates as a color
"""

from __future__ import annotations

import abc
import math
from typing import TYPE_CHECKING

import numpy.typing as npt

from raytracer.core.transforms import Matrix, as_matrix, identity, invert
from raytracer.core.tuples import Color, Tuple4, black, color, white

if TYPE_CHECKING:
    from raytracer.geometry.shape import Shape

# Distance from an integer below which a coordinate is snapped to it
_SNAP_EPSILON = 1e-9


class Pattern(abc.ABC):
    """Base class for patterns.

    Attributes:
        transform: Pattern-to-object transform (must be invertible).
    """

    def __init__(self, transform: npt.ArrayLike | None = None) -> None:
        self.transform = identity() if transform is None else transform

    @property
    def transform(self) -> Matrix:
        return self._transform

    @transform.setter
    def transform(self, value: npt.ArrayLike) -> None:
        matrix = as_matrix(value)
        self._inverse = invert(matrix)
        self._transform = matrix

    @abc.abstractmethod
    def color_at(self, pattern_point: Tuple4) -> Color:
        """Evaluate the pattern at a point in pattern space."""

    def color_at_shape(self, shape: Shape, world_point: Tuple4) -> Color:
        """Evaluate the pattern at a world-space point on ``shape``."""
        object_point = shape.world_to_object(world_point)
        return self.color_at(self._inverse @ object_point)


class FlatPattern(Pattern):
    """A single color everywhere."""

    def __init__(self, r: float = 1.0, g: float = 1.0, b: float = 1.0, **kwargs) -> None:
        super().__init__(**kwargs)
        self.color = color(r, g, b)

    def color_at(self, pattern_point: Tuple4) -> Color:
        return self.color.copy()


class StripePattern(Pattern):
    """Stripes one unit wide, ``color_a`` where ``floor(x)`` is even."""

    def __init__(
        self,
        color_a: Color | None = None,
        color_b: Color | None = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.color_a = white() if color_a is None else color_a
        self.color_b = black() if color_b is None else color_b

    def color_at(self, pattern_point: Tuple4) -> Color:
        if math.floor(pattern_point[0]) % 2 == 0:
            return self.color_a.copy()
        return self.color_b.copy()


class RingPattern(Pattern):
    """Concentric rings in the xz plane, ``color_a`` on even rings.

    The ring index is the floor of the distance from the y axis; distances
    within a tiny tolerance of an integer are snapped to it first so that
    points on a ring boundary do not flicker between colors.
    """

    def __init__(
        self,
        color_a: Color | None = None,
        color_b: Color | None = None,
        **kwargs,
    ) -> None:
        super().__init__(**kwargs)
        self.color_a = white() if color_a is None else color_a
        self.color_b = black() if color_b is None else color_b

    def color_at(self, pattern_point: Tuple4) -> Color:
        distance = math.hypot(pattern_point[0], pattern_point[2])
        nearest = round(distance)
        if abs(distance - nearest) < _SNAP_EPSILON:
            distance = nearest
        if math.floor(distance) % 2 == 0:
            return self.color_a.copy()
        return self.color_b.copy()


class TestPattern(Pattern):
    """Maps a point's coordinates straight to a color. Handy for checking transforms."""

    __test__ = False

    def color_at(self, pattern_point: Tuple4) -> Color:
        return color(pattern_point[0], pattern_point[1], pattern_point[2])
