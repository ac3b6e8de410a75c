"""Core rendering module.

Components:
    ray: Ray data structure and vector helpers
    color: 0-255 color arithmetic and 8-bit conversion
    integrator: Shading, compositing and the render kernels

All per-pixel operations are Taichi functions called from render kernels,
one primary ray per pixel with no bounces.
"""

from .color import (
    COLOR_MAX,
    OPAQUE_ALPHA,
    channel_to_u8,
    clamp_channel,
    color_mul_color,
    color_mul_const,
    color_to_rgba8,
)
from .ray import Ray, dot, length, make_ray, normalize, ray_at, vec3

# Note: integrator is NOT imported here to avoid circular imports.
# Import directly from src.raycaster.core.integrator when needed.

__all__ = [
    "Ray",
    "ray_at",
    "make_ray",
    "vec3",
    "length",
    "normalize",
    "dot",
    "COLOR_MAX",
    "OPAQUE_ALPHA",
    "clamp_channel",
    "color_mul_const",
    "color_mul_color",
    "channel_to_u8",
    "color_to_rgba8",
]
