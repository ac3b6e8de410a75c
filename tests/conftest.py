"""Pytest configuration for ray caster tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts.
    """
    ti.init(arch=ti.cpu, random_seed=42)
    yield


@pytest.fixture(autouse=True)
def clear_all_scene_data():
    """Clear the object table, the light and the render target around each test.

    This ensures tests are isolated from each other.
    """
    # Import here to avoid circular imports and ensure Taichi is initialized
    from src.raycaster.core.integrator import clear_render_target
    from src.raycaster.scene.light import disable_light
    from src.raycaster.scene.objects import clear_objects

    def _clear_all():
        clear_objects()
        disable_light()
        clear_render_target()

    _clear_all()

    yield

    _clear_all()


@pytest.fixture
def demo_light():
    """The directional light of the demo scene."""
    from src.raycaster.scene.light import DirectionalLight

    return DirectionalLight(direction=(-8.0, -10.0, -9.0), intensity=1000.0, color=(230.0, 230.0, 230.0))


@pytest.fixture
def yellow_sphere():
    """The sphere of the demo scene."""
    from src.raycaster.scene.objects import SphereObject

    return SphereObject(center=(0.0, 0.0, -7.0), radius=2.0, color=(255.0, 255.0, 0.0), albedo=0.99)
