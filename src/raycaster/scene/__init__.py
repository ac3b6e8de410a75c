"""Scene module for scene description and the GPU object tables.

Components:
    objects: Sphere and plane objects, the object table and its dispatch
    light: Directional light and the active light fields
    scene: Scene container, rendering entry point and serialization
    demo: Small ready-made scenes

Scene data is organized for efficient GPU access:
    - Structure-of-Arrays layout for object data, one row per object
    - An ObjectKind tag per row selecting the sphere or plane routines
    - Objects kept in scene order, which decides compositing
"""

from .light import (
    DirectionalLight,
    Light,
    LightKind,
    UnsupportedLightError,
    disable_light,
    is_light_enabled,
    light_kind,
    setup_light,
)
from .objects import (
    ALBEDO_DEFAULT,
    MAX_OBJECTS,
    ObjectKind,
    PlaneObject,
    SceneObject,
    SphereObject,
    add_object,
    clear_objects,
    get_object_count,
    intersect_object,
    object_albedo,
    object_color,
    object_normal,
)

# Note: scene and demo are NOT imported here to avoid circular imports
# (they depend on core.integrator, which depends on this package).
# Import directly from src.raycaster.scene.scene or src.raycaster.scene.demo.

__all__ = [
    # Objects module
    "ObjectKind",
    "SphereObject",
    "PlaneObject",
    "SceneObject",
    "ALBEDO_DEFAULT",
    "MAX_OBJECTS",
    "add_object",
    "clear_objects",
    "get_object_count",
    "intersect_object",
    "object_normal",
    "object_color",
    "object_albedo",
    # Light module
    "DirectionalLight",
    "Light",
    "LightKind",
    "UnsupportedLightError",
    "light_kind",
    "setup_light",
    "disable_light",
    "is_light_enabled",
]
