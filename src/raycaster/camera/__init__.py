"""Camera module for primary ray generation.

Components:
    pinhole: Fixed camera at the origin looking down -z

Ray generation uses pixel coordinates with (0, 0) at the top-left corner
of the image and maps each pixel center onto a unit-distance canvas.
"""

from .pinhole import HALF_PIXEL, create_prime, fov_adjustment, get_camera_origin

__all__ = [
    "HALF_PIXEL",
    "create_prime",
    "fov_adjustment",
    "get_camera_origin",
]
