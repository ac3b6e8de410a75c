"""Demo scene configurations.

Factory functions for the small scenes used by the example script and the
end-to-end tests:

- create_demo_scene(): a single yellow sphere seven units in front of the
  camera, lit from the upper right by a bright light-gray directional light.
- create_floor_scene(): the same sphere resting above a gray floor plane.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.raycaster.scene.demo import create_demo_scene
    >>> scene = create_demo_scene()
    >>> image = scene.render()
"""

from dataclasses import dataclass

from src.raycaster.scene.light import DirectionalLight
from src.raycaster.scene.objects import ALBEDO_DEFAULT, PlaneObject, SphereObject
from src.raycaster.scene.scene import Scene

# =============================================================================
# Demo Scene Parameters
# =============================================================================


@dataclass
class DemoParams:
    """Parameters for configuring the demo scene.

    Attributes:
        width: Image width in pixels. Default is 800.
        height: Image height in pixels. Default is 600.
        fov: Field of view in degrees. Default is 90.
        light_intensity: Intensity of the directional light. Default is 1000.
        light_color: RGB color of the light, channels in [0, 255].
            Default is light gray (230, 230, 230).
        sphere_color: RGB color of the sphere. Default is yellow (255, 255, 0).

    Example:
        >>> params = DemoParams(width=320, height=240)
        >>> scene = create_demo_scene(params)
    """

    width: int = 800
    height: int = 600
    fov: float = 90.0
    light_intensity: float = 1000.0
    light_color: tuple[float, float, float] = (230.0, 230.0, 230.0)
    sphere_color: tuple[float, float, float] = (255.0, 255.0, 0.0)


# =============================================================================
# Demo Scene Constants
# =============================================================================

SPHERE_CENTER = (0.0, 0.0, -7.0)
SPHERE_RADIUS = 2.0

LIGHT_DIRECTION = (-8.0, -10.0, -9.0)

# Floor two units below the sphere, seen from above
FLOOR_POINT = (0.0, -4.0, 0.0)
FLOOR_NORMAL = (0.0, -1.0, 0.0)
FLOOR_COLOR = (128.0, 128.0, 128.0)
FLOOR_ALBEDO = 0.5


# =============================================================================
# Demo Scene Factories
# =============================================================================


def _demo_sphere(params: DemoParams) -> SphereObject:
    return SphereObject(
        center=SPHERE_CENTER,
        radius=SPHERE_RADIUS,
        color=params.sphere_color,
        albedo=ALBEDO_DEFAULT,
    )


def _demo_light(params: DemoParams) -> DirectionalLight:
    return DirectionalLight(
        direction=LIGHT_DIRECTION,
        intensity=params.light_intensity,
        color=params.light_color,
    )


def create_demo_scene(params: DemoParams | None = None) -> Scene:
    """Create the single-sphere demo scene.

    Args:
        params: Optional DemoParams. If None, uses default DemoParams().

    Returns:
        A Scene with one yellow sphere at (0, 0, -7), radius 2, and a
        directional light shining along (-8, -10, -9).
    """
    if params is None:
        params = DemoParams()

    return Scene(
        width=params.width,
        height=params.height,
        fov=params.fov,
        objects=(_demo_sphere(params),),
        light=_demo_light(params),
    )


def create_floor_scene(params: DemoParams | None = None) -> Scene:
    """Create the demo scene with a floor plane.

    The floor is listed first and the sphere last, so with the default
    compositing every pixel the sphere misses shows the background.

    Args:
        params: Optional DemoParams. If None, uses default DemoParams().

    Returns:
        A Scene with a gray floor plane followed by the demo sphere.
    """
    if params is None:
        params = DemoParams()

    floor = PlaneObject(
        point=FLOOR_POINT,
        normal=FLOOR_NORMAL,
        color=FLOOR_COLOR,
        albedo=FLOOR_ALBEDO,
    )
    return Scene(
        width=params.width,
        height=params.height,
        fov=params.fov,
        objects=(floor, _demo_sphere(params)),
        light=_demo_light(params),
    )
