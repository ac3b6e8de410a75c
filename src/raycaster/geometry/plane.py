"""Infinite plane primitive with one-sided ray-plane intersection.

A plane is defined by a point on it and a unit normal. The stored normal
points *away* from the side the camera looks at it from: a ray counts as
hitting the plane only when it travels along the normal, i.e.
dot(normal, direction) > PLANE_EPSILON. Rays reaching the other face are
culled.

The shading normal is the negated stored normal, so it faces back toward
the incoming rays.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.raycaster.geometry.plane import Plane, intersect_plane
    >>> # Floor two units below the camera, seen from above
    >>> floor = Plane(
    ...     point=ti.math.vec3(0, -2, 0),
    ...     normal=ti.math.vec3(0, -1, 0),
    ... )
    >>> # Use intersect_plane within a Taichi kernel
"""

import taichi as ti
import taichi.math as tm

from src.raycaster.core.ray import Ray

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3

# Minimum value of dot(normal, direction) for a ray to count as a hit
PLANE_EPSILON = 1e-6


@ti.dataclass
class Plane:
    """An infinite plane.

    Attributes:
        point: Any point lying on the plane (vec3).
        normal: The unit normal of the plane (vec3), pointing away from
            the visible side.
    """

    point: vec3
    normal: vec3


@ti.func
def intersect_plane(ray: Ray, plane: Plane):
    """Test a ray against a plane.

    The plane is hit when denom = normal . direction exceeds PLANE_EPSILON,
    at distance ((point - origin) . normal) / denom. Hits behind the ray
    origin (negative distance) are rejected.

    Args:
        ray: The ray to test (direction must be unit length).
        plane: The plane to test against.

    Returns:
        A tuple (hit, distance) where hit is 1 on intersection and 0
        otherwise. distance is only meaningful when hit == 1.
    """
    denom = tm.dot(plane.normal, ray.direction)

    hit = 0
    distance = 0.0
    if denom > PLANE_EPSILON:
        v = plane.point - ray.origin
        t = tm.dot(v, plane.normal) / denom
        if t >= 0.0:
            hit = 1
            distance = t

    return hit, distance


@ti.func
def plane_normal(plane: Plane) -> vec3:
    """Return the shading normal of the plane (the negated stored normal)."""
    return -plane.normal


@ti.func
def make_plane(point: vec3, normal: vec3) -> Plane:
    """Create a plane from a point and a unit normal.

    Args:
        point: A point on the plane.
        normal: The unit normal, pointing away from the visible side.

    Returns:
        A new Plane instance.
    """
    return Plane(point=point, normal=normal)
