"""Camera module for primary ray generation and rendering.

Components:
    pinhole: Pinhole (perspective) camera with a view transform

Pixel (0, 0) is the top-left corner; rays pass through pixel centers.
"""

from .pinhole import PinholeCamera

__all__ = ["PinholeCamera"]
