"""Scene description and rendering entry point.

A Scene is the whole renderable world: image dimensions, a field of view,
an ordered list of objects and a single light. It is validated once at
construction and never mutated afterwards. render() uploads the objects and
the light to the GPU tables, runs the render kernel and returns the image.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.raycaster.scene.scene import Scene
    >>> from src.raycaster.scene.objects import SphereObject
    >>> from src.raycaster.scene.light import DirectionalLight
    >>> scene = Scene(
    ...     width=800,
    ...     height=600,
    ...     fov=90.0,
    ...     objects=(SphereObject(center=(0, 0, -7), radius=2.0, color=(255, 255, 0)),),
    ...     light=DirectionalLight(direction=(-8, -10, -9), intensity=1000.0,
    ...                            color=(230, 230, 230)),
    ... )
    >>> image = scene.render()  # (600, 800, 4) uint8
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import numpy as np
import numpy.typing as npt

from src.raycaster.core.integrator import (
    MAX_IMAGE_HEIGHT,
    MAX_IMAGE_WIDTH,
    RenderOptions,
    get_image_numpy,
    render_image,
    setup_render_target,
)
from src.raycaster.core.integrator import render_pixel as _render_pixel
from src.raycaster.scene.light import (
    DirectionalLight,
    Light,
    UnsupportedLightError,
    light_kind,
    setup_light,
)
from src.raycaster.scene.objects import (
    ALBEDO_DEFAULT,
    MAX_OBJECTS,
    PlaneObject,
    SceneObject,
    SphereObject,
    add_object,
    clear_objects,
)


@dataclass
class SceneConfig:
    """Configuration for scene serialization.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        fov: Field of view in degrees.
        objects: List of object configurations, in scene order.
        light: The light configuration.
    """

    width: int = 800
    height: int = 600
    fov: float = 90.0
    objects: list[dict[str, Any]] = field(default_factory=list)
    light: dict[str, Any] = field(default_factory=dict)


def _vec(values: Any) -> tuple[float, float, float]:
    return (float(values[0]), float(values[1]), float(values[2]))


@dataclass(frozen=True)
class Scene:
    """The renderable world.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        fov: Field of view in degrees. Only used by the camera when
            RenderOptions.apply_fov is set.
        objects: The scene objects, in compositing order. May be empty.
        light: The single light of the scene.
    """

    width: int
    height: int
    fov: float
    objects: tuple[SceneObject, ...]
    light: Light

    def __post_init__(self) -> None:
        """Validate the scene.

        Raises:
            ValueError: If the dimensions, an object or the light is invalid.
        """
        # Accept any sequence but store an immutable tuple
        object.__setattr__(self, "objects", tuple(self.objects))

        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Image dimensions must be positive, got {self.width}x{self.height}")
        if self.width > MAX_IMAGE_WIDTH or self.height > MAX_IMAGE_HEIGHT:
            raise ValueError(
                f"Image dimensions ({self.width}x{self.height}) exceed maximum supported "
                f"({MAX_IMAGE_WIDTH}x{MAX_IMAGE_HEIGHT})"
            )
        if len(self.objects) > MAX_OBJECTS:
            raise ValueError(f"Scene has {len(self.objects)} objects, maximum is {MAX_OBJECTS}")
        for obj in self.objects:
            if not isinstance(obj, (SphereObject, PlaneObject)):
                raise ValueError(f"Unknown object type: {type(obj).__name__}")
            obj.validate()
        if isinstance(self.light, DirectionalLight):
            self.light.validate()

    # =========================================================================
    # Rendering
    # =========================================================================

    def _upload(self) -> None:
        """Write the objects and the light into the GPU tables."""
        # Fail before touching any GPU state
        light_kind(self.light)

        clear_objects()
        for obj in self.objects:
            add_object(obj)
        setup_light(self.light)
        setup_render_target(self.width, self.height)

    def render(self, options: RenderOptions | None = None) -> npt.NDArray[np.uint8]:
        """Render the scene.

        Args:
            options: Render options (defaults to RenderOptions()).

        Returns:
            Array of shape (height, width, 4) with dtype uint8 holding RGBA
            pixels, row-major with (0, 0) at the top-left corner.

        Raises:
            UnsupportedLightError: If the scene light is not a supported kind.
        """
        self._upload()
        render_image(options, fov=self.fov)
        return get_image_numpy()

    def render_pixel(
        self,
        x: int,
        y: int,
        options: RenderOptions | None = None,
    ) -> tuple[int, int, int, int]:
        """Render a single pixel of the scene.

        Args:
            x: Pixel column (0 = left).
            y: Pixel row (0 = top).
            options: Render options (defaults to RenderOptions()).

        Returns:
            Tuple of (R, G, B, A) channel values.

        Raises:
            UnsupportedLightError: If the scene light is not a supported kind.
            ValueError: If the pixel lies outside the image.
        """
        self._upload()
        return _render_pixel(x, y, options, fov=self.fov)

    # =========================================================================
    # Scene Serialization
    # =========================================================================

    def to_config(self) -> SceneConfig:
        """Export the scene to a configuration object.

        Returns:
            A SceneConfig describing the scene.

        Raises:
            UnsupportedLightError: If the scene light is not a supported kind.
        """
        light_kind(self.light)
        config = SceneConfig(width=self.width, height=self.height, fov=self.fov)

        for obj in self.objects:
            if isinstance(obj, SphereObject):
                config.objects.append(
                    {
                        "type": "sphere",
                        "center": list(obj.center),
                        "radius": obj.radius,
                        "color": list(obj.color),
                        "albedo": obj.albedo,
                    }
                )
            else:
                config.objects.append(
                    {
                        "type": "plane",
                        "point": list(obj.point),
                        "normal": list(obj.normal),
                        "color": list(obj.color),
                        "albedo": obj.albedo,
                    }
                )

        config.light = {
            "type": "directional",
            "direction": list(self.light.direction),
            "intensity": self.light.intensity,
            "color": list(self.light.color),
        }
        return config

    @classmethod
    def from_config(cls, config: SceneConfig) -> Scene:
        """Build a scene from a configuration object.

        Args:
            config: The scene configuration to load.

        Returns:
            A new, validated Scene.

        Raises:
            ValueError: If the configuration contains invalid data.
            UnsupportedLightError: If the light type is not supported.
        """
        objects: list[SceneObject] = []
        for obj_config in config.objects:
            obj_type = obj_config.get("type", "").lower()
            color = _vec(obj_config.get("color", [255, 255, 255]))
            albedo = obj_config.get("albedo", ALBEDO_DEFAULT)
            if obj_type == "sphere":
                objects.append(
                    SphereObject(
                        center=_vec(obj_config.get("center", [0, 0, 0])),
                        radius=obj_config.get("radius", 1.0),
                        color=color,
                        albedo=albedo,
                    )
                )
            elif obj_type == "plane":
                objects.append(
                    PlaneObject(
                        point=_vec(obj_config.get("point", [0, 0, 0])),
                        normal=_vec(obj_config.get("normal", [0, -1, 0])),
                        color=color,
                        albedo=albedo,
                    )
                )
            else:
                raise ValueError(f"Unknown object type: {obj_type}")

        light_type = config.light.get("type", "directional").lower()
        if light_type != "directional":
            raise UnsupportedLightError(f"Unsupported light kind: {light_type}")
        light = DirectionalLight(
            direction=_vec(config.light.get("direction", [0, -1, 0])),
            intensity=config.light.get("intensity", 1.0),
            color=_vec(config.light.get("color", [255, 255, 255])),
        )

        return cls(
            width=config.width,
            height=config.height,
            fov=config.fov,
            objects=tuple(objects),
            light=light,
        )

    def to_dict(self) -> dict[str, Any]:
        """Export the scene to a dictionary (for JSON serialization).

        Returns:
            A dictionary representation of the scene.
        """
        config = self.to_config()
        return {
            "width": config.width,
            "height": config.height,
            "fov": config.fov,
            "objects": config.objects,
            "light": config.light,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Scene:
        """Build a scene from a dictionary.

        Args:
            data: Dictionary with 'width', 'height', 'fov', 'objects' and
                'light' keys.

        Returns:
            A new, validated Scene.
        """
        config = SceneConfig(
            width=data.get("width", 800),
            height=data.get("height", 600),
            fov=data.get("fov", 90.0),
            objects=data.get("objects", []),
            light=data.get("light", {}),
        )
        return cls.from_config(config)
