"""Light sources.

The renderer supports exactly one kind of light: a directional light, which
has no position, only the direction its light travels in, an intensity and
a color. The Light union is kept open for future kinds; any light that is
not a DirectionalLight is rejected with UnsupportedLightError before a
render kernel is launched.

The active light lives in Taichi fields written by setup_light() and read
by the shading function through the get_light_* accessors.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Union

import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors
vec3 = tm.vec3


class UnsupportedLightError(NotImplementedError):
    """Raised when a scene uses a light kind the renderer cannot shade."""


class LightKind(IntEnum):
    """Tag identifying the kind of the active light."""

    DIRECTIONAL = 0


@dataclass(frozen=True)
class DirectionalLight:
    """A light infinitely far away, shining along one direction.

    Attributes:
        direction: The direction the light travels, as (x, y, z). Need not
            be normalized; shading normalizes it.
        intensity: The light intensity, non-negative.
        color: The light color as (R, G, B), channels in [0, 255].
    """

    direction: tuple[float, float, float]
    intensity: float
    color: tuple[float, float, float]

    def validate(self) -> None:
        """Check the light's preconditions.

        Raises:
            ValueError: If the intensity is negative, the direction is the
                zero vector or a color channel is outside [0, 255].
        """
        if self.intensity < 0.0:
            raise ValueError(f"Light intensity = {self.intensity} is negative.")
        if all(c == 0.0 for c in self.direction):
            raise ValueError("Light direction must not be the zero vector")
        for i, channel in enumerate(self.color):
            if not 0.0 <= channel <= 255.0:
                raise ValueError(f"Light color channel {i} = {channel} is outside [0, 255].")


Light = Union[DirectionalLight]


def light_kind(light: Any) -> LightKind:
    """Determine the kind of a light.

    Args:
        light: The scene light.

    Returns:
        The LightKind tag of the light.

    Raises:
        UnsupportedLightError: If the light is not a supported kind.
    """
    if isinstance(light, DirectionalLight):
        return LightKind.DIRECTIONAL
    raise UnsupportedLightError(f"Unsupported light kind: {type(light).__name__}")


# Active light fields (configured by setup_light)
_light_enabled = ti.field(dtype=ti.i32, shape=())
_light_kind = ti.field(dtype=ti.i32, shape=())
_light_direction = ti.Vector.field(3, dtype=ti.f32, shape=())
_light_intensity = ti.field(dtype=ti.f32, shape=())
_light_color = ti.Vector.field(3, dtype=ti.f32, shape=())


def setup_light(light: Any) -> None:
    """Make a light the active light for rendering.

    Args:
        light: The light to activate.

    Raises:
        UnsupportedLightError: If the light is not a supported kind.
    """
    kind = light_kind(light)
    _light_kind[None] = int(kind)
    _light_direction[None] = list(light.direction)
    _light_intensity[None] = light.intensity
    _light_color[None] = list(light.color)
    _light_enabled[None] = 1


def disable_light() -> None:
    """Deactivate the light."""
    _light_enabled[None] = 0


def is_light_enabled() -> bool:
    """Check if a light has been set up."""
    return bool(_light_enabled[None])


@ti.func
def get_light_kind() -> ti.i32:
    """Get the LightKind tag of the active light."""
    return _light_kind[None]


@ti.func
def get_light_direction() -> vec3:
    """Get the direction the active light travels in (not normalized)."""
    return _light_direction[None]


@ti.func
def get_light_intensity() -> ti.f32:
    """Get the intensity of the active light."""
    return _light_intensity[None]


@ti.func
def get_light_color() -> vec3:
    """Get the color of the active light."""
    return _light_color[None]
