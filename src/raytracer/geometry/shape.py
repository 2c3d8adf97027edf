"""Abstract shape with transform, material and parent link.

Every concrete shape works in its own object space: a unit sphere at the
origin, the xz plane, and so on. ``Shape`` converts between world space and
object space so subclasses only implement two local operations:

    local_intersections(local_ray) -> list[Intersection]
    local_normal_at(local_point) -> vector

Shapes nested in a ``Group`` see the composition of every ancestor transform:
world points are converted top-down through each parent, and normals are
converted bottom-up back to world space.

Shape ids come from an ``IdAllocator``. Each constructor accepts one so that
scenes and tests can use isolated id sequences; ``DEFAULT_ID_ALLOCATOR`` is
used otherwise.
"""

from __future__ import annotations

import abc
import itertools
import threading
import weakref
from typing import TYPE_CHECKING, Any

import numpy.typing as npt

from raytracer.core.intersection import Intersection
from raytracer.core.transforms import Matrix, as_matrix, identity, invert
from raytracer.core.tuples import Tuple4, normalize
from raytracer.materials.material import Material

if TYPE_CHECKING:
    from raytracer.core.ray import Ray
    from raytracer.geometry.group import Group


class IdAllocator:
    """Thread-safe source of increasing shape ids.

    Attributes:
        start: The first id handed out (and the value restored by reset()).
    """

    def __init__(self, start: int = 1) -> None:
        self.start = start
        self._lock = threading.Lock()
        self._counter = itertools.count(start)

    def next_id(self) -> int:
        with self._lock:
            return next(self._counter)

    def reset(self) -> None:
        """Restart the sequence at ``start``."""
        with self._lock:
            self._counter = itertools.count(self.start)


DEFAULT_ID_ALLOCATOR = IdAllocator()


class Shape(abc.ABC):
    """Base class for everything that can be placed in a world.

    Attributes:
        id: Unique id from the allocator used at construction.
        transform: Object-to-parent transform. Must be invertible; the inverse
            and inverse-transpose are cached when it is assigned.
        material: Surface material.
        parent: The Group this shape belongs to, or None.
    """

    # Groups have no surface and therefore no material
    has_surface = True

    def __init__(
        self,
        transform: npt.ArrayLike | None = None,
        material: Material | None = None,
        *,
        id_allocator: IdAllocator | None = None,
    ) -> None:
        allocator = id_allocator if id_allocator is not None else DEFAULT_ID_ALLOCATOR
        self.id = allocator.next_id()
        self._parent: weakref.ref[Group] | None = None
        self.transform = identity() if transform is None else transform
        self._material = (material if material is not None else Material()) if self.has_surface else None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id})"

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def transform(self) -> Matrix:
        return self._transform

    @transform.setter
    def transform(self, value: npt.ArrayLike) -> None:
        matrix = as_matrix(value)
        inverse = invert(matrix)
        self._transform = matrix
        self._inverse = inverse
        self._inverse_transpose = inverse.T.copy()

    @property
    def inverse_transform(self) -> Matrix:
        return self._inverse

    @property
    def material(self) -> Material:
        return self._material

    @material.setter
    def material(self, value: Material) -> None:
        self._material = value

    @property
    def parent(self) -> Group | None:
        if self._parent is None:
            return None
        return self._parent()

    def _attach_to(self, group: Group) -> None:
        self._parent = weakref.ref(group)

    # =========================================================================
    # World/object space conversion
    # =========================================================================

    def world_to_object(self, world_point: Tuple4) -> Tuple4:
        """Convert a world-space point into this shape's object space."""
        parent = self.parent
        if parent is not None:
            world_point = parent.world_to_object(world_point)
        return self._inverse @ world_point

    def normal_to_world(self, object_normal: Tuple4) -> Tuple4:
        """Convert an object-space normal into a world-space unit normal."""
        normal = self._inverse_transpose @ object_normal
        normal[3] = 0.0
        normal = normalize(normal)
        parent = self.parent
        if parent is not None:
            normal = parent.normal_to_world(normal)
        return normal

    # =========================================================================
    # Intersection and normals
    # =========================================================================

    def intersections(self, ray: Ray) -> list[Intersection]:
        """Intersect a ray given in parent space with this shape.

        Returns:
            The intersections in no particular order, each tagged with the
            leaf shape that was hit.
        """
        return self.local_intersections(ray.transform(self._inverse))

    def normal_at(self, world_point: Tuple4) -> Tuple4:
        """Compute the world-space unit normal at a world-space point."""
        local_point = self.world_to_object(world_point)
        return self.normal_to_world(self.local_normal_at(local_point))

    @abc.abstractmethod
    def local_intersections(self, local_ray: Ray) -> list[Intersection]:
        """Intersect a ray already transformed into object space."""

    @abc.abstractmethod
    def local_normal_at(self, local_point: Tuple4) -> Tuple4:
        """Object-space normal at an object-space point."""

    # =========================================================================
    # Pickling (used by the parallel renderer)
    # =========================================================================

    def __getstate__(self) -> dict[str, Any]:
        # Weak references cannot be pickled; Group restores the link.
        state = self.__dict__.copy()
        state["_parent"] = None
        return state
