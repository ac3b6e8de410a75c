"""Pinhole camera generating one primary ray per pixel.

The camera sits at the world origin and looks down -z through an image
plane at unit distance. Pixel (x, y), with (0, 0) at the top-left corner,
maps to the canvas point:

    canvas_x = (((x + 0.5) / (width / 2)) - 1) * aspect_ratio * fov_scale
    canvas_y = (1 - (y + 0.5) / (height / 2)) * fov_scale

and the ray direction is normalize(canvas_x, canvas_y, -1).

By default fov_scale is 1, so the canvas spans [-1, 1] vertically no matter
what field of view the scene stores. fov_adjustment() returns
tan(fov / 2) when field of view scaling is requested; at 90 degrees both
mappings agree.
"""

import math

import taichi as ti
import taichi.math as tm

from src.raycaster.core.ray import Ray, make_ray, vec3

# Offset from a pixel's corner to its center
HALF_PIXEL = 0.5


def fov_adjustment(fov: float, apply_fov: bool) -> float:
    """Compute the canvas scale for a vertical field of view.

    Args:
        fov: Field of view in degrees.
        apply_fov: Whether the field of view takes part in ray generation.

    Returns:
        tan(radians(fov) / 2) if apply_fov is set, otherwise 1.0.
    """
    if not apply_fov:
        return 1.0
    return math.tan(math.radians(fov) / 2.0)


@ti.func
def get_camera_origin() -> vec3:
    """Get the camera position, which is always the world origin."""
    return tm.vec3(0.0, 0.0, 0.0)


@ti.func
def create_prime(
    x: ti.i32,
    y: ti.i32,
    width: ti.i32,
    height: ti.i32,
    fov_scale: ti.f32,
) -> Ray:
    """Build the primary ray through the center of pixel (x, y).

    Args:
        x: Pixel column (0 = left).
        y: Pixel row (0 = top).
        width: Image width in pixels.
        height: Image height in pixels.
        fov_scale: Canvas scale from fov_adjustment().

    Returns:
        A Ray from the world origin with unit-length direction.
    """
    w = ti.cast(width, ti.f32)
    h = ti.cast(height, ti.f32)
    aspect_ratio = w / h

    canvas_x = (((ti.cast(x, ti.f32) + HALF_PIXEL) / (w / 2.0)) - 1.0) * aspect_ratio
    canvas_y = 1.0 - ((ti.cast(y, ti.f32) + HALF_PIXEL) / (h / 2.0))

    direction = vec3(canvas_x * fov_scale, canvas_y * fov_scale, -1.0)
    return make_ray(get_camera_origin(), direction)
