"""Geometry module for shape primitives.

This module provides the geometric primitives of the ray caster:

Components:
    sphere: Sphere primitive with geometric ray-sphere intersection
    plane: Infinite one-sided plane with ray-plane intersection

All intersection routines are Taichi functions (@ti.func) and follow the
pattern:
    hit, distance = intersect_shape(ray, shape)
"""

from .plane import PLANE_EPSILON, Plane, intersect_plane, make_plane, plane_normal
from .sphere import Sphere, intersect_sphere, make_sphere, sphere_normal

__all__ = [
    "Sphere",
    "intersect_sphere",
    "sphere_normal",
    "make_sphere",
    "Plane",
    "intersect_plane",
    "plane_normal",
    "make_plane",
    "PLANE_EPSILON",
]
