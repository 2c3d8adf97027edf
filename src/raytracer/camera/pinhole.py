"""Pinhole camera: pixel-to-ray mapping and rendering.

The camera sits at the origin of camera space looking toward -z, with a
canvas one unit in front of it. Its ``transform`` is the world-to-camera
view transform (see ``raytracer.core.transforms.view_transform``); the
inverse is cached and used to carry canvas points and the eye position back
into world space.

Canvas size follows from the field of view:

    pixel_size  = 2 * tan(field_of_view / 2) / max(hsize, vsize)
    half_width  = hsize * pixel_size / 2
    half_height = vsize * pixel_size / 2

so the field of view spans the longer image dimension.

Example:
    >>> import math
    >>> from raytracer.camera.pinhole import PinholeCamera
    >>> from raytracer.core.transforms import view_transform
    >>> from raytracer.core.tuples import point, vector
    >>> camera = PinholeCamera(160, 120, math.pi / 3)
    >>> camera.transform = view_transform(
    ...     point(0.0, 1.5, -5.0), point(0.0, 1.0, 0.0), vector(0.0, 1.0, 0.0)
    ... )
    >>> ray = camera.ray_for_pixel(80, 60)
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt

from raytracer.core.ray import Ray
from raytracer.core.render import DEFAULT_MAX_DEPTH, ProgressCallback, RenderConfig, render_image
from raytracer.core.transforms import Matrix, as_matrix, identity, invert, view_transform
from raytracer.core.tuples import normalize, point

if TYPE_CHECKING:
    from raytracer.scene.world import World


class PinholeCamera:
    """A perspective camera producing one ray per pixel center.

    Attributes:
        hsize: Image width in pixels.
        vsize: Image height in pixels.
        field_of_view: Angle (radians) spanned by the longer image dimension.
        transform: World-to-camera view transform (must be invertible).
        pixel_size: Width of one pixel on the canvas.
        half_width: Half the canvas width.
        half_height: Half the canvas height.
    """

    def __init__(
        self,
        hsize: int,
        vsize: int,
        field_of_view: float,
        transform: npt.ArrayLike | None = None,
    ) -> None:
        """Initialize the camera.

        Args:
            hsize: Image width in pixels.
            vsize: Image height in pixels.
            field_of_view: Field of view in radians, in (0, pi).
            transform: Optional view transform; identity by default.

        Raises:
            ValueError: If a dimension is not positive, the field of view is
                out of range, or the transform is not invertible.
        """
        if hsize < 1 or vsize < 1:
            raise ValueError(f"Image dimensions must be positive, got {hsize}x{vsize}")
        if not 0.0 < field_of_view < math.pi:
            raise ValueError(f"Field of view must be in (0, pi), got {field_of_view}")

        self.hsize = hsize
        self.vsize = vsize
        self.field_of_view = field_of_view

        # TODO: aspect-correct non-square canvases once existing renders no longer
        # depend on the longer-dimension convention.
        self.pixel_size = 2.0 * math.tan(field_of_view / 2.0) / max(hsize, vsize)
        self.half_width = hsize * self.pixel_size / 2.0
        self.half_height = vsize * self.pixel_size / 2.0

        self.transform = identity() if transform is None else transform

    @property
    def transform(self) -> Matrix:
        return self._transform

    @transform.setter
    def transform(self, value: npt.ArrayLike) -> None:
        matrix = as_matrix(value)
        self._inverse = invert(matrix)
        self._transform = matrix

    @classmethod
    def looking_at(
        cls,
        hsize: int,
        vsize: int,
        field_of_view: float,
        from_point: npt.NDArray[np.float64],
        to_point: npt.NDArray[np.float64],
        up: npt.NDArray[np.float64],
    ) -> PinholeCamera:
        """Create a camera positioned with a view transform."""
        return cls(hsize, vsize, field_of_view, view_transform(from_point, to_point, up))

    def ray_for_pixel(self, px: int, py: int) -> Ray:
        """Build the world-space ray through the center of pixel (px, py).

        Pixel (0, 0) is the top-left corner of the image.
        """
        xoffset = (px + 0.5) * self.pixel_size
        yoffset = (py + 0.5) * self.pixel_size

        # The camera looks toward -z, so +x is to the left
        world_x = self.half_width - xoffset
        world_y = self.half_height - yoffset

        pixel = self._inverse @ point(world_x, world_y, -1.0)
        origin = self._inverse @ point(0.0, 0.0, 0.0)
        return Ray(origin, normalize(pixel - origin))

    def render(
        self,
        world: World,
        max_depth: int = DEFAULT_MAX_DEPTH,
        workers: int | None = 1,
        progress: ProgressCallback | None = None,
    ) -> npt.NDArray[np.float64]:
        """Render ``world`` into a (vsize, hsize, 3) linear RGB array.

        Args:
            world: The scene to render. Must not change during the render.
            max_depth: Recursion budget for reflection and refraction.
            workers: Worker processes to use; None for every CPU.
            progress: Optional callback receiving (rows_completed, total_rows).
        """
        config = RenderConfig(max_depth=max_depth, workers=workers)
        return render_image(self, world, config, progress)
