"""Unit tests for sphere intersection.

Tests cover:
- Ray hitting sphere head-on from outside
- Ray missing sphere
- Tangent rays (strict comparison, reported as a miss)
- Near-root-only behaviour for a sphere behind the ray origin
- Unit-length surface normals
"""

import math

import pytest
import taichi as ti


def _intersect(origin, direction, center, radius):
    """Run intersect_sphere in a kernel and return (hit, distance)."""
    from src.raycaster.core.ray import make_ray, vec3
    from src.raycaster.geometry.sphere import Sphere, intersect_sphere

    hit = ti.field(dtype=ti.i32, shape=())
    t_val = ti.field(dtype=ti.f32, shape=())

    @ti.kernel
    def test_kernel(
        ox: ti.f32, oy: ti.f32, oz: ti.f32,
        dx: ti.f32, dy: ti.f32, dz: ti.f32,
        cx: ti.f32, cy: ti.f32, cz: ti.f32,
        r: ti.f32,
    ):
        ray = make_ray(vec3(ox, oy, oz), vec3(dx, dy, dz))
        sphere = Sphere(center=vec3(cx, cy, cz), radius=r)
        h, t = intersect_sphere(ray, sphere)
        hit[None] = h
        t_val[None] = t

    test_kernel(*origin, *direction, *center, radius)
    return hit[None], t_val[None]


class TestSphereBasics:
    """Tests for Sphere dataclass and basic operations."""

    def test_make_sphere(self):
        """Test make_sphere convenience function."""
        from src.raycaster.geometry.sphere import make_sphere, vec3

        center_result = ti.field(dtype=ti.math.vec3, shape=())
        radius_result = ti.field(dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            sphere = make_sphere(vec3(1.0, 2.0, 3.0), 0.5)
            center_result[None] = sphere.center
            radius_result[None] = sphere.radius

        test_kernel()
        c = center_result[None]
        assert abs(c[0] - 1.0) < 1e-6
        assert abs(c[1] - 2.0) < 1e-6
        assert abs(c[2] - 3.0) < 1e-6
        assert abs(radius_result[None] - 0.5) < 1e-6


class TestSphereIntersection:
    """Tests for ray-sphere intersection."""

    def test_direct_hit_distance(self):
        """Ray from the origin along -z hits the demo sphere at distance 5."""
        hit, t = _intersect((0.0, 0.0, 0.0), (0.0, 0.0, -1.0), (0.0, 0.0, -7.0), 2.0)
        assert hit == 1
        assert abs(t - 5.0) < 1e-5

    def test_unnormalized_direction_is_normalized(self):
        """The ray direction is normalized before intersecting."""
        hit, t = _intersect((0.0, 0.0, 0.0), (0.0, 0.0, -10.0), (0.0, 0.0, -7.0), 2.0)
        assert hit == 1
        assert abs(t - 5.0) < 1e-5

    def test_offset_hit(self):
        """Ray offset from the center hits at adj - sqrt(r^2 - d^2)."""
        # Perpendicular distance 1 from a radius 2 sphere: t = 7 - sqrt(3)
        hit, t = _intersect((1.0, 0.0, 0.0), (0.0, 0.0, -1.0), (0.0, 0.0, -7.0), 2.0)
        assert hit == 1
        assert abs(t - (7.0 - math.sqrt(3.0))) < 1e-4

    def test_miss(self):
        """Ray passing beside the sphere reports no hit."""
        hit, _ = _intersect((5.0, 0.0, 0.0), (0.0, 0.0, -1.0), (0.0, 0.0, -7.0), 2.0)
        assert hit == 0

    def test_tangent_ray_is_a_miss(self):
        """A ray grazing the sphere (d^2 == r^2) is not a hit."""
        hit, _ = _intersect((2.0, 0.0, 0.0), (0.0, 0.0, -1.0), (0.0, 0.0, -7.0), 2.0)
        assert hit == 0

    def test_sphere_behind_origin_reports_negative_distance(self):
        """Only the near root is computed, so a sphere behind the ray still 'hits'."""
        hit, t = _intersect((0.0, 0.0, 0.0), (0.0, 0.0, -1.0), (0.0, 0.0, 7.0), 2.0)
        assert hit == 1
        assert abs(t - (-9.0)) < 1e-5

    def test_origin_inside_sphere_reports_near_root(self):
        """With the origin inside, the reported root lies behind the origin."""
        hit, t = _intersect((0.0, 0.0, -7.0), (0.0, 0.0, -1.0), (0.0, 0.0, -7.0), 2.0)
        assert hit == 1
        assert abs(t - (-2.0)) < 1e-5


class TestSphereNormal:
    """Tests for sphere surface normals."""

    @pytest.mark.parametrize(
        "theta,phi",
        [(0.0, 0.0), (0.3, 1.2), (1.1, -2.5), (2.0, 0.7), (3.0, 3.0)],
    )
    def test_normal_is_unit_length(self, theta, phi):
        """The normal at any surface point has length 1."""
        from src.raycaster.geometry.sphere import Sphere, sphere_normal, vec3

        center = (1.0, -2.0, -7.0)
        radius = 2.5
        point = (
            center[0] + radius * math.sin(theta) * math.cos(phi),
            center[1] + radius * math.sin(theta) * math.sin(phi),
            center[2] + radius * math.cos(theta),
        )

        result = ti.Vector.field(3, dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel(px: ti.f32, py: ti.f32, pz: ti.f32):
            sphere = Sphere(center=vec3(1.0, -2.0, -7.0), radius=2.5)
            result[None] = sphere_normal(sphere, vec3(px, py, pz))

        test_kernel(*point)
        n = result[None]
        assert abs(math.sqrt(n[0] ** 2 + n[1] ** 2 + n[2] ** 2) - 1.0) < 1e-5
        # Normal points outward, from the center to the point
        for axis in range(3):
            assert abs(n[axis] - (point[axis] - center[axis]) / radius) < 1e-5

    def test_normal_facing_camera(self):
        """The normal at the front of the demo sphere points toward the camera."""
        from src.raycaster.geometry.sphere import Sphere, sphere_normal, vec3

        result = ti.Vector.field(3, dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            sphere = Sphere(center=vec3(0.0, 0.0, -7.0), radius=2.0)
            result[None] = sphere_normal(sphere, vec3(0.0, 0.0, -5.0))

        test_kernel()
        n = result[None]
        assert abs(n[0]) < 1e-6
        assert abs(n[1]) < 1e-6
        assert abs(n[2] - 1.0) < 1e-6
