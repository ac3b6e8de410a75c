"""Lambertian (ideal diffuse) reflectance.

A Lambertian surface reflects incident light equally in all directions, so
the reflected brightness depends only on the cosine of the angle between
the surface normal and the direction toward the light:

    f_r = albedo / pi
    lambert = f_r * intensity * max(0, normal . -normalize(light_direction))

The light direction is the direction the light travels in; it does not
need to be normalized by the caller.
"""

import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors
vec3 = tm.vec3


@ti.func
def eval_lambertian(albedo: ti.f32) -> ti.f32:
    """Evaluate the Lambertian BRDF, albedo / pi."""
    return albedo / tm.pi


@ti.func
def cosine_term(normal: vec3, light_direction: vec3) -> ti.f32:
    """Cosine between the normal and the direction toward the light, clamped at 0.

    Args:
        normal: The unit surface normal.
        light_direction: The direction the light travels (any length).

    Returns:
        max(0, normal . -normalize(light_direction)).
    """
    return tm.max(tm.dot(normal, -tm.normalize(light_direction)), 0.0)


@ti.func
def lambert_factor(
    albedo: ti.f32,
    intensity: ti.f32,
    normal: vec3,
    light_direction: vec3,
) -> ti.f32:
    """Compute the scalar light factor for a diffuse surface.

    Args:
        albedo: The surface albedo in (0, 1].
        intensity: The light intensity (non-negative).
        normal: The unit surface normal at the hit point.
        light_direction: The direction the light travels.

    Returns:
        albedo / pi * intensity * max(0, normal . -normalize(light_direction)).
    """
    return eval_lambertian(albedo) * intensity * cosine_term(normal, light_direction)
