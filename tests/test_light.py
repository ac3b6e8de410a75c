"""Unit tests for lights.

Tests cover:
- Light kind detection and the unsupported-light error
- Light validation
- Uploading the active light
"""

from dataclasses import dataclass

import pytest
import taichi as ti


@dataclass(frozen=True)
class PointLight:
    """A light kind the renderer does not support."""

    position: tuple[float, float, float]
    intensity: float
    color: tuple[float, float, float]


class TestLightKind:
    """Tests for light kind detection."""

    def test_directional(self, demo_light):
        """A DirectionalLight is recognized."""
        from src.raycaster.scene.light import LightKind, light_kind

        assert light_kind(demo_light) == LightKind.DIRECTIONAL

    def test_unsupported_light_raises(self):
        """Any other light kind raises UnsupportedLightError."""
        from src.raycaster.scene.light import UnsupportedLightError, light_kind

        with pytest.raises(UnsupportedLightError, match="PointLight"):
            light_kind(PointLight(position=(0, 5, 0), intensity=1.0, color=(255, 255, 255)))

    def test_unsupported_light_is_not_implemented(self):
        """UnsupportedLightError is a NotImplementedError."""
        from src.raycaster.scene.light import UnsupportedLightError

        assert issubclass(UnsupportedLightError, NotImplementedError)


class TestLightValidation:
    """Tests for DirectionalLight preconditions."""

    def test_negative_intensity(self):
        """Intensity must be non-negative."""
        from src.raycaster.scene.light import DirectionalLight

        with pytest.raises(ValueError, match="negative"):
            DirectionalLight(direction=(0, -1, 0), intensity=-1.0, color=(255, 255, 255)).validate()

    def test_zero_direction(self):
        """The direction cannot be the zero vector."""
        from src.raycaster.scene.light import DirectionalLight

        with pytest.raises(ValueError, match="zero vector"):
            DirectionalLight(direction=(0, 0, 0), intensity=1.0, color=(255, 255, 255)).validate()

    def test_unnormalized_direction_accepted(self, demo_light):
        """Directions need not be normalized."""
        demo_light.validate()


class TestSetupLight:
    """Tests for uploading the active light."""

    def test_setup_light_writes_fields(self, demo_light):
        """setup_light makes the light visible to kernels."""
        from src.raycaster.scene.light import (
            get_light_color,
            get_light_direction,
            get_light_intensity,
            get_light_kind,
            is_light_enabled,
            setup_light,
        )

        setup_light(demo_light)
        assert is_light_enabled()

        direction = ti.Vector.field(3, dtype=ti.f32, shape=())
        color = ti.Vector.field(3, dtype=ti.f32, shape=())
        intensity = ti.field(dtype=ti.f32, shape=())
        kind = ti.field(dtype=ti.i32, shape=())

        @ti.kernel
        def test_kernel():
            direction[None] = get_light_direction()
            color[None] = get_light_color()
            intensity[None] = get_light_intensity()
            kind[None] = get_light_kind()

        test_kernel()
        assert tuple(float(c) for c in direction[None]) == (-8.0, -10.0, -9.0)
        assert tuple(float(c) for c in color[None]) == (230.0, 230.0, 230.0)
        assert intensity[None] == 1000.0
        assert kind[None] == 0

    def test_setup_unsupported_light_leaves_light_disabled(self):
        """A rejected light is never uploaded."""
        from src.raycaster.scene.light import UnsupportedLightError, is_light_enabled, setup_light

        with pytest.raises(UnsupportedLightError):
            setup_light(PointLight(position=(0, 5, 0), intensity=1.0, color=(255, 255, 255)))
        assert not is_light_enabled()

    def test_disable_light(self, demo_light):
        """disable_light turns the light off."""
        from src.raycaster.scene.light import disable_light, is_light_enabled, setup_light

        setup_light(demo_light)
        disable_light()
        assert not is_light_enabled()
