"""Preview module for image output.

Components:
    export: 8-bit conversion and PNG export via Pillow
"""

from .export import image_to_uint8, save_png

__all__ = ["image_to_uint8", "save_png"]
