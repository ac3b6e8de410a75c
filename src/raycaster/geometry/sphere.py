"""Sphere primitive with geometric ray-sphere intersection.

The intersection uses the geometric method rather than the quadratic
formula: project the vector from the ray origin to the sphere center onto
the ray direction, then compare the squared distance between the center
and the ray line against the squared radius.

Only the near root is reported. A ray starting inside the sphere, or a
sphere lying behind the ray origin, still yields the near root, which is
then negative or behind the camera. Rendering with the camera inside an
object is therefore not supported.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.raycaster.geometry.sphere import Sphere, intersect_sphere
    >>> sphere = Sphere(center=ti.math.vec3(0, 0, -7), radius=2.0)
    >>> # Use intersect_sphere within a Taichi kernel
"""

import taichi as ti
import taichi.math as tm

from src.raycaster.core.ray import Ray

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


@ti.dataclass
class Sphere:
    """A sphere defined by center point and radius.

    Attributes:
        center: The center point of the sphere (vec3).
        radius: The radius of the sphere (strictly positive float).
    """

    center: vec3
    radius: ti.f32


@ti.func
def intersect_sphere(ray: Ray, sphere: Sphere):
    """Test a ray against a sphere.

    With L = center - origin and adj = L . direction, the squared distance
    from the center to the ray line is d2 = L . L - adj^2. The ray hits if
    radius^2 > d2, at distance adj - sqrt(radius^2 - d2).

    Args:
        ray: The ray to test (direction must be unit length).
        sphere: The sphere to test against.

    Returns:
        A tuple (hit, distance) where hit is 1 on intersection and 0
        otherwise. distance is only meaningful when hit == 1.
    """
    center_l = sphere.center - ray.origin
    adj = tm.dot(center_l, ray.direction)
    r_squared = sphere.radius * sphere.radius
    d_squared = tm.dot(center_l, center_l) - adj * adj

    hit = 0
    distance = 0.0
    if r_squared > d_squared:
        hit = 1
        distance = adj - ti.sqrt(r_squared - d_squared)

    return hit, distance


@ti.func
def sphere_normal(sphere: Sphere, hit_point: vec3) -> vec3:
    """Compute the outward unit normal at a point on the sphere surface.

    Args:
        sphere: The sphere.
        hit_point: A point on the sphere surface.

    Returns:
        normalize(hit_point - center).
    """
    return tm.normalize(hit_point - sphere.center)


@ti.func
def make_sphere(center: vec3, radius: ti.f32) -> Sphere:
    """Create a sphere from center and radius.

    Args:
        center: The center point of the sphere.
        radius: The radius of the sphere (should be positive).

    Returns:
        A new Sphere instance.
    """
    return Sphere(center=center, radius=radius)
