"""Preview module for image output.

Components:
    export: Save rendered images to disk via Pillow
"""

from .export import image_to_rgb, load_image, save_image

__all__ = [
    "image_to_rgb",
    "save_image",
    "load_image",
]
