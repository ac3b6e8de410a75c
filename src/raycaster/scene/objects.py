"""Scene objects and the GPU object table.

A scene object is either a sphere or a plane, plus the material data every
object carries: a color (RGB channels in [0, 255]) and an albedo.

Objects are stored in one Structure-of-Arrays table in Taichi fields, in
the order they were added, with an ObjectKind tag per row. Render kernels
use the dispatch functions below (intersect_object, object_normal,
object_color, object_albedo), which select the sphere or plane routine from
the tag and otherwise add no logic of their own.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.raycaster.scene.objects import SphereObject, add_object, clear_objects
    >>> clear_objects()
    >>> add_object(SphereObject(center=(0, 0, -7), radius=2.0, color=(255, 255, 0)))
    >>> # Use intersect_object(i, ray) within a Taichi kernel
"""

import math
from dataclasses import dataclass
from enum import IntEnum
from typing import Union

import taichi as ti
import taichi.math as tm

from src.raycaster.core.ray import Ray
from src.raycaster.geometry.plane import Plane, intersect_plane, plane_normal
from src.raycaster.geometry.sphere import Sphere, intersect_sphere, sphere_normal

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3

# Albedo used when none is given
ALBEDO_DEFAULT = 0.99

# Tolerance on the length of a plane normal
NORMAL_TOLERANCE = 1e-6


class ObjectKind(IntEnum):
    """Tag identifying the geometry of a row in the object table."""

    SPHERE = 0
    PLANE = 1


@dataclass(frozen=True)
class SphereObject:
    """A sphere with its material data.

    Attributes:
        center: The center of the sphere as (x, y, z).
        radius: The radius of the sphere, strictly positive.
        color: The surface color as (R, G, B), channels in [0, 255].
        albedo: Fraction of incident light reflected, in (0, 1].
    """

    center: tuple[float, float, float]
    radius: float
    color: tuple[float, float, float]
    albedo: float = ALBEDO_DEFAULT

    kind = ObjectKind.SPHERE

    def validate(self) -> None:
        """Check the sphere's preconditions.

        Raises:
            ValueError: If the radius or the material data is invalid.
        """
        if not self.radius > 0.0:
            raise ValueError(f"Sphere radius must be positive, got {self.radius}")
        _validate_material(self.color, self.albedo)


@dataclass(frozen=True)
class PlaneObject:
    """An infinite plane with its material data.

    Attributes:
        point: Any point on the plane as (x, y, z).
        normal: The unit normal as (x, y, z), pointing away from the
            visible side of the plane.
        color: The surface color as (R, G, B), channels in [0, 255].
        albedo: Fraction of incident light reflected, in (0, 1].
    """

    point: tuple[float, float, float]
    normal: tuple[float, float, float]
    color: tuple[float, float, float]
    albedo: float = ALBEDO_DEFAULT

    kind = ObjectKind.PLANE

    def validate(self) -> None:
        """Check the plane's preconditions.

        Raises:
            ValueError: If the normal is not unit length or the material
                data is invalid.
        """
        norm = math.sqrt(sum(c * c for c in self.normal))
        if abs(norm - 1.0) > NORMAL_TOLERANCE:
            raise ValueError(f"Plane normal must be unit length, got length {norm}")
        _validate_material(self.color, self.albedo)


SceneObject = Union[SphereObject, PlaneObject]


def _validate_material(color: tuple[float, float, float], albedo: float) -> None:
    """Validate the material data shared by all objects."""
    if len(color) != 3:
        raise ValueError(f"Color must have 3 channels, got {len(color)}")
    for i, channel in enumerate(color):
        if not 0.0 <= channel <= 255.0:
            raise ValueError(f"Color channel {i} = {channel} is outside [0, 255].")
    if not 0.0 < albedo <= 1.0:
        raise ValueError(f"Albedo = {albedo} is outside (0, 1].")


# Maximum number of objects supported in the scene
MAX_OBJECTS = 1024

# Object storage: Structure of Arrays layout, one row per object
# object_positions holds the sphere center or a point on the plane
object_kinds = ti.field(dtype=ti.i32, shape=MAX_OBJECTS)
object_positions = ti.Vector.field(3, dtype=ti.f32, shape=MAX_OBJECTS)
object_normals = ti.Vector.field(3, dtype=ti.f32, shape=MAX_OBJECTS)
object_radii = ti.field(dtype=ti.f32, shape=MAX_OBJECTS)
object_colors = ti.Vector.field(3, dtype=ti.f32, shape=MAX_OBJECTS)
object_albedos = ti.field(dtype=ti.f32, shape=MAX_OBJECTS)
num_objects = ti.field(dtype=ti.i32, shape=())


def clear_objects() -> None:
    """Remove all objects from the table.

    Resets the object count to zero. The field data is overwritten when
    new objects are added.
    """
    num_objects[None] = 0


def add_object(obj: SceneObject) -> int:
    """Append an object to the table.

    Args:
        obj: The sphere or plane to add.

    Returns:
        The index of the added object.

    Raises:
        RuntimeError: If the maximum number of objects is exceeded.
        ValueError: If obj is neither a SphereObject nor a PlaneObject.
    """
    idx = num_objects[None]
    if idx >= MAX_OBJECTS:
        raise RuntimeError(f"Maximum number of objects ({MAX_OBJECTS}) exceeded")

    if isinstance(obj, SphereObject):
        object_positions[idx] = list(obj.center)
        object_normals[idx] = [0.0, 0.0, 0.0]
        object_radii[idx] = obj.radius
    elif isinstance(obj, PlaneObject):
        object_positions[idx] = list(obj.point)
        object_normals[idx] = list(obj.normal)
        object_radii[idx] = 0.0
    else:
        raise ValueError(f"Unknown object type: {type(obj).__name__}")

    object_kinds[idx] = int(obj.kind)
    object_colors[idx] = list(obj.color)
    object_albedos[idx] = obj.albedo
    num_objects[None] = idx + 1
    return idx


def get_object_count() -> int:
    """Get the number of objects in the table."""
    return int(num_objects[None])


@ti.func
def _sphere_at(i: ti.i32) -> Sphere:
    return Sphere(center=object_positions[i], radius=object_radii[i])


@ti.func
def _plane_at(i: ti.i32) -> Plane:
    return Plane(point=object_positions[i], normal=object_normals[i])


@ti.func
def intersect_object(i: ti.i32, ray: Ray):
    """Test a ray against object i.

    Args:
        i: Row of the object table.
        ray: The ray to test.

    Returns:
        A tuple (hit, distance) from the sphere or plane routine.
    """
    hit = 0
    distance = 0.0
    kind = object_kinds[i]
    if kind == int(ObjectKind.SPHERE):
        hit, distance = intersect_sphere(ray, _sphere_at(i))
    elif kind == int(ObjectKind.PLANE):
        hit, distance = intersect_plane(ray, _plane_at(i))
    return hit, distance


@ti.func
def object_normal(i: ti.i32, hit_point: vec3) -> vec3:
    """Compute the shading normal of object i at a hit point."""
    normal = vec3(0.0, 0.0, 0.0)
    kind = object_kinds[i]
    if kind == int(ObjectKind.SPHERE):
        normal = sphere_normal(_sphere_at(i), hit_point)
    elif kind == int(ObjectKind.PLANE):
        normal = plane_normal(_plane_at(i))
    return normal


@ti.func
def object_color(i: ti.i32) -> vec3:
    """Get the color of object i."""
    return object_colors[i]


@ti.func
def object_albedo(i: ti.i32) -> ti.f32:
    """Get the albedo of object i."""
    return object_albedos[i]
