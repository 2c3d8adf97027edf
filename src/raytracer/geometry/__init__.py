"""Geometry module for shape primitives.

Components:
    shape: Abstract Shape (transform, material, parent link) and IdAllocator
    sphere: Unit sphere primitive
    plane: Infinite xz plane primitive
    group: Composite shape with owned children

Every shape intersects in its own object space:
    intersections = shape.intersections(ray)   # ray in parent space
    normal = shape.normal_at(world_point)      # world-space unit normal
"""

from .group import Group
from .plane import Plane
from .shape import DEFAULT_ID_ALLOCATOR, IdAllocator, Shape
from .sphere import Sphere, glass_sphere, solve_quadratic

__all__ = [
    "Shape",
    "IdAllocator",
    "DEFAULT_ID_ALLOCATOR",
    "Sphere",
    "glass_sphere",
    "solve_quadratic",
    "Plane",
    "Group",
]
