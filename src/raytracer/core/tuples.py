"""Point, vector and color helpers backed by NumPy arrays.

Points and vectors are homogeneous 4-element ``float64`` arrays so they can be
multiplied directly by 4x4 transform matrices:

- point: ``w = 1`` (affected by translation)
- vector: ``w = 0`` (unaffected by translation)

Colors are 3-element ``float64`` arrays (r, g, b). Components are not clamped;
values above 1.0 are legal until the image is exported.

Example:
    >>> from raytracer.core.tuples import point, vector, normalize
    >>> p = point(1.0, 2.0, 3.0)
    >>> v = normalize(vector(0.0, 3.0, 4.0))
    >>> p + v * 5.0
    array([1., 5., 7., 1.])
"""

import math

import numpy as np
import numpy.typing as npt

# Tolerance used for offsets along normals and for approximate comparisons
EPSILON = 1e-5

Tuple4 = npt.NDArray[np.float64]
Color = npt.NDArray[np.float64]


def point(x: float, y: float, z: float) -> Tuple4:
    """Create a point (w = 1)."""
    return np.array([x, y, z, 1.0], dtype=np.float64)


def vector(x: float, y: float, z: float) -> Tuple4:
    """Create a vector (w = 0)."""
    return np.array([x, y, z, 0.0], dtype=np.float64)


def color(r: float, g: float, b: float) -> Color:
    """Create an RGB color."""
    return np.array([r, g, b], dtype=np.float64)


BLACK = color(0.0, 0.0, 0.0)
WHITE = color(1.0, 1.0, 1.0)


def black() -> Color:
    """Return a fresh black color (safe to mutate)."""
    return BLACK.copy()


def white() -> Color:
    return WHITE.copy()


def is_point(t: Tuple4) -> bool:
    return bool(t[3] == 1.0)


def is_vector(t: Tuple4) -> bool:
    return bool(t[3] == 0.0)


def dot(a: Tuple4, b: Tuple4) -> float:
    """Dot product of two vectors (the w components are included, and are 0)."""
    return float(np.dot(a, b))


def cross(a: Tuple4, b: Tuple4) -> Tuple4:
    """Cross product of the xyz parts of two vectors."""
    x, y, z = np.cross(a[:3], b[:3])
    return vector(x, y, z)


def magnitude(v: Tuple4) -> float:
    return math.sqrt(dot(v, v))


def normalize(v: Tuple4) -> Tuple4:
    """Scale a vector to unit length.

    Raises:
        ValueError: If the vector has zero length.
    """
    length = magnitude(v)
    if length == 0.0:
        raise ValueError("Cannot normalize a zero-length vector")
    return v / length


def reflect(incoming: Tuple4, normal: Tuple4) -> Tuple4:
    """Reflect a vector about a (unit) normal."""
    return incoming - normal * 2.0 * dot(incoming, normal)


def approx_equal(a: float, b: float, epsilon: float = EPSILON) -> bool:
    """Epsilon-tolerant scalar comparison."""
    return abs(a - b) < epsilon


def approx_zero(value: float, epsilon: float = EPSILON) -> bool:
    return abs(value) < epsilon
