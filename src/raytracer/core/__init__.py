"""Core rendering module.

Components:
    tuples: Points, vectors and colors as NumPy arrays
    transforms: 4x4 affine transform constructors and view transform
    ray: Ray data structure and hit preparation
    intersection: Intersection records and per-hit shading state
    render: Row-parallel rendering loop
"""

from .intersection import (
    Intersection,
    IntersectionState,
    hit,
    refractive_indices,
    sorted_intersections,
)
from .ray import Ray
from .render import DEFAULT_MAX_DEPTH, RenderConfig, render_image
from .transforms import (
    identity,
    invert,
    rotation_x,
    rotation_y,
    rotation_z,
    scaling,
    shearing,
    translation,
    view_transform,
)
from .tuples import (
    BLACK,
    EPSILON,
    WHITE,
    color,
    cross,
    dot,
    magnitude,
    normalize,
    point,
    reflect,
    vector,
)

__all__ = [
    "Ray",
    "RenderConfig",
    "render_image",
    "DEFAULT_MAX_DEPTH",
    "Intersection",
    "IntersectionState",
    "hit",
    "refractive_indices",
    "sorted_intersections",
    "identity",
    "invert",
    "translation",
    "scaling",
    "rotation_x",
    "rotation_y",
    "rotation_z",
    "shearing",
    "view_transform",
    "EPSILON",
    "BLACK",
    "WHITE",
    "point",
    "vector",
    "color",
    "dot",
    "cross",
    "magnitude",
    "normalize",
    "reflect",
]
