"""Image export utilities for rendered images.

The renderer produces linear RGB floats with no upper bound. Export clamps
each channel to [0, 1], optionally applies gamma correction, scales to 8 bits
and writes the result with Pillow.

Example:
    >>> from raytracer.preview.export import save_png
    >>> from raytracer.scene.demo import create_demo_scene
    >>>
    >>> world, camera = create_demo_scene(width=100, height=50)
    >>> save_png(camera.render(world), "demo.png")
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage


def image_to_uint8(
    image: npt.NDArray[np.floating],
    *,
    gamma: float = 1.0,
) -> npt.NDArray[np.uint8]:
    """Convert a linear float image to 8-bit.

    Channels are clamped to [0, 1] and rounded to the nearest level.

    Args:
        image: Image array of shape (H, W, 3).
        gamma: Gamma correction value; 1.0 leaves values linear, 2.2
            approximates sRGB.

    Returns:
        Array of shape (H, W, 3) with dtype uint8.

    Raises:
        ValueError: If the image is not (H, W, 3) or gamma is not positive.
    """
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"Expected an (H, W, 3) image, got shape {image.shape}")
    if gamma <= 0.0:
        raise ValueError(f"Gamma must be positive, got {gamma}")

    clamped = np.clip(image, 0.0, 1.0)
    if gamma != 1.0:
        clamped = np.power(clamped, 1.0 / gamma)
    return np.rint(clamped * 255.0).astype(np.uint8)


def save_png(
    image: npt.NDArray[np.floating],
    filepath: str,
    *,
    gamma: float = 1.0,
) -> None:
    """Save a rendered image as an 8-bit PNG file.

    Args:
        image: Linear image array of shape (H, W, 3).
        filepath: Output file path (should end in .png).
        gamma: Gamma correction value (see image_to_uint8).
    """
    pil_image = PILImage.fromarray(image_to_uint8(image, gamma=gamma))
    pil_image.save(filepath)
