"""Composite shape that owns an ordered list of children.

A group has no surface of its own. Intersecting a group transforms the ray
into group space and hands it to every child, each of which applies its own
transform in turn, so a group can stand in for a whole sub-scene (for example
an imported mesh). Children keep a weak reference back to their group, which
is how their normals and object-space points pick up every ancestor
transform.

Example:
    >>> import math
    >>> from raytracer.core.transforms import rotation_y, scaling, translation
    >>> from raytracer.geometry.group import Group
    >>> from raytracer.geometry.sphere import Sphere
    >>> outer = Group(transform=rotation_y(math.pi / 2))
    >>> inner = Group(transform=scaling(2.0, 2.0, 2.0))
    >>> outer.add_child(inner)
    >>> sphere = Sphere(transform=translation(5.0, 0.0, 0.0))
    >>> inner.add_child(sphere)
    >>> sphere.parent is inner
    True
"""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING, Any

import numpy.typing as npt

from raytracer.core.intersection import Intersection
from raytracer.core.tuples import Tuple4
from raytracer.geometry.shape import IdAllocator, Shape

if TYPE_CHECKING:
    from raytracer.core.ray import Ray
    from raytracer.materials.material import Material


class Group(Shape):
    """A shape made of child shapes.

    Attributes:
        children: The child shapes, in attachment order.
    """

    has_surface = False

    def __init__(
        self,
        transform: npt.ArrayLike | None = None,
        children: list[Shape] | None = None,
        *,
        id_allocator: IdAllocator | None = None,
    ) -> None:
        super().__init__(transform, id_allocator=id_allocator)
        self._children: list[Shape] = []
        self._lock = threading.Lock()
        for child in children or []:
            self.add_child(child)

    @property
    def children(self) -> list[Shape]:
        return list(self._children)

    @property
    def material(self) -> Material:
        raise NotImplementedError("Group has no material; materials belong to leaf shapes")

    @material.setter
    def material(self, value: Material) -> None:
        raise NotImplementedError("Group has no material; materials belong to leaf shapes")

    def add_child(self, child: Shape) -> None:
        """Append ``child`` and point its parent reference at this group.

        Raises:
            ValueError: If the child already belongs to a group, or if it is
                this group.
        """
        if child is self:
            raise ValueError("A group cannot contain itself")
        with self._lock:
            if child.parent is not None:
                raise ValueError(f"{child!r} already belongs to {child.parent!r}")
            self._children.append(child)
            child._attach_to(self)

    def local_intersections(self, local_ray: Ray) -> list[Intersection]:
        result: list[Intersection] = []
        for child in self._children:
            result.extend(child.intersections(local_ray))
        return result

    def local_normal_at(self, local_point: Tuple4) -> Tuple4:
        raise NotImplementedError("Local normal is not meaningful for Group")

    def __getstate__(self) -> dict[str, Any]:
        state = super().__getstate__()
        del state["_lock"]
        return state

    def __setstate__(self, state: dict[str, Any]) -> None:
        self.__dict__.update(state)
        self._lock = threading.Lock()
        for child in self._children:
            child._attach_to(self)
