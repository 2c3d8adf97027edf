"""4x4 affine transform constructors.

Every constructor returns a new ``float64`` matrix. Transforms compose by matrix
multiplication and apply right-to-left, so ``translation(...) @ scaling(...)``
scales first and then translates.

Example:
    >>> import math
    >>> from raytracer.core.transforms import rotation_y, scaling, translation
    >>> transform = translation(0.0, 1.0, 0.0) @ rotation_y(math.pi / 4) @ scaling(2.0, 2.0, 2.0)
"""

import math

import numpy as np
import numpy.typing as npt

from raytracer.core.tuples import Tuple4, cross, normalize

Matrix = npt.NDArray[np.float64]

# Determinant magnitude below which a matrix is treated as singular
_SINGULAR_DETERMINANT = 1e-12


def identity() -> Matrix:
    return np.identity(4, dtype=np.float64)


def translation(x: float, y: float, z: float) -> Matrix:
    m = identity()
    m[0, 3] = x
    m[1, 3] = y
    m[2, 3] = z
    return m


def scaling(x: float, y: float, z: float) -> Matrix:
    return np.diag([x, y, z, 1.0]).astype(np.float64)


def rotation_x(radians: float) -> Matrix:
    c, s = math.cos(radians), math.sin(radians)
    m = identity()
    m[1, 1] = c
    m[1, 2] = -s
    m[2, 1] = s
    m[2, 2] = c
    return m


def rotation_y(radians: float) -> Matrix:
    c, s = math.cos(radians), math.sin(radians)
    m = identity()
    m[0, 0] = c
    m[0, 2] = s
    m[2, 0] = -s
    m[2, 2] = c
    return m


def rotation_z(radians: float) -> Matrix:
    c, s = math.cos(radians), math.sin(radians)
    m = identity()
    m[0, 0] = c
    m[0, 1] = -s
    m[1, 0] = s
    m[1, 1] = c
    return m


def shearing(xy: float, xz: float, yx: float, yz: float, zx: float, zy: float) -> Matrix:
    """Shear each axis in proportion to the other two.

    Args:
        xy: x moved in proportion to y.
        xz: x moved in proportion to z.
        yx: y moved in proportion to x.
        yz: y moved in proportion to z.
        zx: z moved in proportion to x.
        zy: z moved in proportion to y.
    """
    m = identity()
    m[0, 1] = xy
    m[0, 2] = xz
    m[1, 0] = yx
    m[1, 2] = yz
    m[2, 0] = zx
    m[2, 1] = zy
    return m


def view_transform(from_point: Tuple4, to_point: Tuple4, up: Tuple4) -> Matrix:
    """Build the world-to-camera transform for an eye looking at a target.

    Args:
        from_point: Eye position in world space.
        to_point: Point the eye looks at.
        up: Approximate up vector; it need not be perpendicular to the view
            direction.

    Returns:
        The orientation matrix combined with a translation that moves the eye
        to the origin.
    """
    forward = normalize(to_point - from_point)
    left = cross(forward, normalize(up))
    true_up = cross(left, forward)

    orientation = np.array(
        [
            [left[0], left[1], left[2], 0.0],
            [true_up[0], true_up[1], true_up[2], 0.0],
            [-forward[0], -forward[1], -forward[2], 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ],
        dtype=np.float64,
    )
    return orientation @ translation(-from_point[0], -from_point[1], -from_point[2])


def invert(matrix: Matrix) -> Matrix:
    """Invert a transform, failing fast on singular input.

    Raises:
        ValueError: If the matrix is not invertible or the inverse is not finite.
    """
    if abs(np.linalg.det(matrix)) < _SINGULAR_DETERMINANT:
        raise ValueError(f"Transform is not invertible:\n{matrix}")
    inverse = np.linalg.inv(matrix)
    if not np.all(np.isfinite(inverse)):
        raise ValueError(f"Transform inverse is not finite:\n{matrix}")
    return inverse


def as_matrix(value: npt.ArrayLike) -> Matrix:
    """Coerce a nested sequence into a 4x4 ``float64`` matrix.

    Raises:
        ValueError: If the value is not 4x4.
    """
    matrix = np.array(value, dtype=np.float64)
    if matrix.shape != (4, 4):
        raise ValueError(f"Transform must be 4x4, got shape {matrix.shape}")
    return matrix
