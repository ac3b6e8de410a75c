"""Unit tests for plane intersection.

Tests cover:
- Ray travelling along the normal (front-facing hit)
- Perpendicular and back-facing rays (culled)
- Rays whose intersection lies behind the origin
- The epsilon threshold on the denominator
- The negated shading normal
"""

import math

import taichi as ti


def _intersect(origin, direction, point, normal):
    """Run intersect_plane in a kernel and return (hit, distance).

    The direction is used as given, without normalization.
    """
    from src.raycaster.core.ray import Ray, vec3
    from src.raycaster.geometry.plane import Plane, intersect_plane

    hit = ti.field(dtype=ti.i32, shape=())
    t_val = ti.field(dtype=ti.f32, shape=())

    @ti.kernel
    def test_kernel(
        ox: ti.f32, oy: ti.f32, oz: ti.f32,
        dx: ti.f32, dy: ti.f32, dz: ti.f32,
        px: ti.f32, py: ti.f32, pz: ti.f32,
        nx: ti.f32, ny: ti.f32, nz: ti.f32,
    ):
        ray = Ray(origin=vec3(ox, oy, oz), direction=vec3(dx, dy, dz))
        plane = Plane(point=vec3(px, py, pz), normal=vec3(nx, ny, nz))
        h, t = intersect_plane(ray, plane)
        hit[None] = h
        t_val[None] = t

    test_kernel(*origin, *direction, *point, *normal)
    return hit[None], t_val[None]


FLOOR_POINT = (0.0, -2.0, 0.0)
FLOOR_NORMAL = (0.0, -1.0, 0.0)


class TestPlaneIntersection:
    """Tests for ray-plane intersection."""

    def test_hit_straight_down(self):
        """A ray pointing down hits a floor two units below."""
        hit, t = _intersect((0.0, 0.0, 0.0), (0.0, -1.0, 0.0), FLOOR_POINT, FLOOR_NORMAL)
        assert hit == 1
        assert abs(t - 2.0) < 1e-6

    def test_hit_oblique(self):
        """An oblique ray hits at distance / cos(angle)."""
        s = 1.0 / math.sqrt(2.0)
        hit, t = _intersect((0.0, 0.0, 0.0), (0.0, -s, -s), FLOOR_POINT, FLOOR_NORMAL)
        assert hit == 1
        assert abs(t - 2.0 * math.sqrt(2.0)) < 1e-5

    def test_parallel_ray_is_a_miss(self):
        """A ray perpendicular to the normal (denom == 0) does not hit."""
        hit, _ = _intersect((0.0, 0.0, 0.0), (0.0, 0.0, -1.0), FLOOR_POINT, FLOOR_NORMAL)
        assert hit == 0

    def test_back_facing_ray_is_a_miss(self):
        """A ray travelling against the normal is culled."""
        # Camera below the floor looking up at it
        hit, _ = _intersect((0.0, -5.0, 0.0), (0.0, 1.0, 0.0), FLOOR_POINT, FLOOR_NORMAL)
        assert hit == 0

    def test_intersection_behind_origin_is_a_miss(self):
        """A plane behind the ray origin is rejected (negative distance)."""
        # Ray travels along the normal but the plane lies above the origin
        hit, _ = _intersect((0.0, 0.0, 0.0), (0.0, -1.0, 0.0), (0.0, 3.0, 0.0), FLOOR_NORMAL)
        assert hit == 0

    def test_origin_on_plane_hits_at_zero(self):
        """An origin lying on the plane gives distance 0, which is accepted."""
        hit, t = _intersect((0.0, -2.0, 0.0), (0.0, -1.0, 0.0), FLOOR_POINT, FLOOR_NORMAL)
        assert hit == 1
        assert abs(t) < 1e-6

    def test_denominator_below_epsilon_is_a_miss(self):
        """denom <= 1e-6 is treated as no intersection."""
        # denom = 5e-7
        hit, _ = _intersect((0.0, 0.0, 0.0), (0.0, -5e-7, -1.0), FLOOR_POINT, FLOOR_NORMAL)
        assert hit == 0

    def test_denominator_above_epsilon_is_a_hit(self):
        """denom just above 1e-6 is a hit, however far away."""
        # denom = 1e-4, distance = 2 / 1e-4
        hit, t = _intersect((0.0, 0.0, 0.0), (0.0, -1e-4, -1.0), FLOOR_POINT, FLOOR_NORMAL)
        assert hit == 1
        assert abs(t - 2e4) / 2e4 < 1e-4


class TestPlaneNormal:
    """Tests for the plane shading normal."""

    def test_normal_is_negated(self):
        """The shading normal is the negated stored normal."""
        from src.raycaster.geometry.plane import make_plane, plane_normal, vec3

        result = ti.Vector.field(3, dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            plane = make_plane(vec3(0.0, -2.0, 0.0), vec3(0.0, -1.0, 0.0))
            result[None] = plane_normal(plane)

        test_kernel()
        n = result[None]
        assert abs(n[0]) < 1e-6
        assert abs(n[1] - 1.0) < 1e-6
        assert abs(n[2]) < 1e-6
