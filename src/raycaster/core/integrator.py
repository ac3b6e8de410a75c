"""Direct lighting integrator and render kernels.

This module implements the render loop of the ray caster: one primary ray
per pixel, tested against every object in the scene, shaded with a single
directional light and a Lambertian term. There are no shadows, bounces or
anti-aliasing.

Compositing follows one of two policies (see CompositingMode):

    LAST_OBJECT: objects are visited in scene order and each one overwrites
        the pixel, with its shaded color on a hit or with the background on
        a miss. The final pixel is decided by the last object in the list,
        so a later object that misses hides a nearer one that hit.
    NEAREST_HIT: the object with the smallest non-negative hit distance is
        shaded, so objects behind the camera are ignored; the background is
        used only if no object is hit in front of the camera.

LAST_OBJECT is the default.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.raycaster.core.integrator import (
    ...     RenderOptions, render_image, setup_render_target, get_image_numpy
    ... )
    >>> # Objects and light must be uploaded first (see scene.Scene.render)
    >>> setup_render_target(800, 600)
    >>> render_image(RenderOptions())
    >>> image = get_image_numpy()  # (600, 800, 4) uint8
"""

from dataclasses import dataclass
from enum import IntEnum

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

from src.raycaster.camera.pinhole import create_prime, fov_adjustment
from src.raycaster.core.color import color_mul_color, color_mul_const, color_to_rgba8
from src.raycaster.core.ray import Ray, ray_at
from src.raycaster.materials.lambertian import lambert_factor
from src.raycaster.scene.light import (
    LightKind,
    get_light_color,
    get_light_direction,
    get_light_intensity,
    get_light_kind,
    is_light_enabled,
)
from src.raycaster.scene.objects import (
    intersect_object,
    num_objects,
    object_albedo,
    object_color,
    object_normal,
)

# Type alias for 3D vectors
vec3 = tm.vec3
ivec4 = tm.ivec4

# =============================================================================
# Rendering Configuration
# =============================================================================

# Background pixel for rays that miss (dark gray, alpha 1)
BACKGROUND_COLOR = (70, 70, 70, 1)


class CompositingMode(IntEnum):
    """How the results of several objects are combined into one pixel."""

    LAST_OBJECT = 0
    NEAREST_HIT = 1


@dataclass
class RenderOptions:
    """Options controlling the render loop.

    The defaults keep the historical output, including its known
    defects; each flag corrects one of them.

    Attributes:
        compositing: The compositing policy.
        fix_blue_channel: Multiply the blue channel of the object color by
            the blue channel of the light color instead of the green one.
        apply_fov: Scale the camera canvas by the scene's field of view.
        background: RGBA value written for rays that miss.
    """

    compositing: CompositingMode = CompositingMode.LAST_OBJECT
    fix_blue_channel: bool = False
    apply_fov: bool = False
    background: tuple[int, int, int, int] = BACKGROUND_COLOR


# =============================================================================
# Render Target (Image Buffer)
# =============================================================================

# Maximum supported image dimensions (preallocated to avoid kernel recompilation)
MAX_IMAGE_WIDTH = 2048
MAX_IMAGE_HEIGHT = 2048

# Image dimensions (actual active size)
_image_width = ti.field(dtype=ti.i32, shape=())
_image_height = ti.field(dtype=ti.i32, shape=())

# RGBA pixel buffer indexed [x, y] with (0, 0) at the top-left corner
_pixel_buffer = ti.Vector.field(4, dtype=ti.i32, shape=(MAX_IMAGE_WIDTH, MAX_IMAGE_HEIGHT))

# Background written for misses during the current render
_background = ti.Vector.field(4, dtype=ti.i32, shape=())

# Flag to track if render target is initialized
_render_target_initialized = ti.field(dtype=ti.i32, shape=())


def setup_render_target(width: int, height: int) -> None:
    """Initialize the render target.

    Sets the active image dimensions and clears the pixel buffer.

    Args:
        width: Image width in pixels (1..MAX_IMAGE_WIDTH).
        height: Image height in pixels (1..MAX_IMAGE_HEIGHT).

    Raises:
        ValueError: If the dimensions are not positive or exceed the
            maximum supported size.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
    if width > MAX_IMAGE_WIDTH or height > MAX_IMAGE_HEIGHT:
        raise ValueError(
            f"Image dimensions ({width}x{height}) exceed maximum supported "
            f"({MAX_IMAGE_WIDTH}x{MAX_IMAGE_HEIGHT})"
        )

    _image_width[None] = width
    _image_height[None] = height
    _render_target_initialized[None] = 1

    clear_render_target()


def clear_render_target() -> None:
    """Clear the pixel buffer to zero."""
    _pixel_buffer.fill(0)


def get_image_dimensions() -> tuple[int, int]:
    """Get the current render target dimensions.

    Returns:
        Tuple of (width, height).
    """
    return int(_image_width[None]), int(_image_height[None])


def _check_render_target_initialized() -> None:
    """Check if render target is initialized and raise if not."""
    if _render_target_initialized[None] == 0:
        raise RuntimeError("Render target not set up. Call setup_render_target() first.")


def _check_light_enabled() -> None:
    """Check if a light is set up and raise if not."""
    if not is_light_enabled():
        raise RuntimeError("Light not set up. Call setup_light() first.")


# =============================================================================
# Shading
# =============================================================================


@ti.func
def shade(object_index: ti.i32, ray: Ray, distance: ti.f32, fix_blue: ti.i32) -> ivec4:
    """Shade a hit on an object with the active light.

    The object color is multiplied by the light color, then scaled by the
    Lambertian factor albedo / pi * intensity * max(0, n . -l), and the
    result is rounded to 8-bit channels.

    Args:
        object_index: Row of the hit object in the object table.
        ray: The primary ray.
        distance: Distance along the ray to the hit.
        fix_blue: Passed through to color_mul_color().

    Returns:
        The opaque RGBA pixel.
    """
    pixel = ivec4(0, 0, 0, 0)

    # Unsupported light kinds are rejected on the host before launch
    if get_light_kind() == int(LightKind.DIRECTIONAL):
        hit_point = ray_at(ray, distance)
        normal = object_normal(object_index, hit_point)
        light_power = lambert_factor(
            object_albedo(object_index),
            get_light_intensity(),
            normal,
            get_light_direction(),
        )
        color = color_mul_const(
            color_mul_color(object_color(object_index), get_light_color(), fix_blue),
            light_power,
        )
        pixel = color_to_rgba8(color)

    return pixel


@ti.func
def trace_pixel(
    x: ti.i32,
    y: ti.i32,
    width: ti.i32,
    height: ti.i32,
    fov_scale: ti.f32,
    compositing: ti.i32,
    fix_blue: ti.i32,
) -> ivec4:
    """Compute the color of one pixel.

    Args:
        x: Pixel column (0 = left).
        y: Pixel row (0 = top).
        width: Image width in pixels.
        height: Image height in pixels.
        fov_scale: Canvas scale for the camera.
        compositing: A CompositingMode value.
        fix_blue: Passed through to the shading function.

    Returns:
        The RGBA pixel.
    """
    ray = create_prime(x, y, width, height, fov_scale)
    background = _background[None]
    pixel = background

    n = num_objects[None]
    if compositing == int(CompositingMode.NEAREST_HIT):
        found = 0
        nearest = 0
        closest = 0.0
        for i in range(n):
            hit, distance = intersect_object(i, ray)
            # Spheres behind the camera report a negative near root
            if hit == 1 and distance >= 0.0 and (found == 0 or distance < closest):
                found = 1
                nearest = i
                closest = distance
        if found == 1:
            pixel = shade(nearest, ray, closest, fix_blue)
    else:
        for i in range(n):
            hit, distance = intersect_object(i, ray)
            if hit == 1:
                pixel = shade(i, ray, distance, fix_blue)
            else:
                pixel = background

    return pixel


# =============================================================================
# Rendering Kernels
# =============================================================================


@ti.kernel
def _render_kernel(
    width: ti.i32,
    height: ti.i32,
    fov_scale: ti.f32,
    compositing: ti.i32,
    fix_blue: ti.i32,
):
    """Render every pixel into the pixel buffer.

    Pixels are independent, so the outer loop is parallelized; the objects
    of one pixel are always visited in scene order.
    """
    for x, y in ti.ndrange(width, height):
        _pixel_buffer[x, y] = trace_pixel(x, y, width, height, fov_scale, compositing, fix_blue)


@ti.kernel
def _render_single_pixel(
    x: ti.i32,
    y: ti.i32,
    width: ti.i32,
    height: ti.i32,
    fov_scale: ti.f32,
    compositing: ti.i32,
    fix_blue: ti.i32,
) -> ivec4:
    """Render a single pixel, for testing and debugging."""
    return trace_pixel(x, y, width, height, fov_scale, compositing, fix_blue)


@ti.kernel
def _copy_to_array(out: ti.types.ndarray(), width: ti.i32, height: ti.i32):
    """Copy the active region of the pixel buffer into a (height, width, 4) array."""
    for x, y in ti.ndrange(width, height):
        for c in ti.static(range(4)):
            out[y, x, c] = _pixel_buffer[x, y][c]


# =============================================================================
# Public Rendering API
# =============================================================================


def _apply_options(options: RenderOptions, fov: float) -> tuple[float, int, int]:
    """Upload per-render state and return the scalar kernel arguments."""
    _background[None] = list(options.background)
    fov_scale = fov_adjustment(fov, options.apply_fov)
    return fov_scale, int(options.compositing), int(options.fix_blue_channel)


def render_pixel(
    x: int,
    y: int,
    options: RenderOptions | None = None,
    fov: float = 90.0,
) -> tuple[int, int, int, int]:
    """Render a single pixel.

    Objects and the light must already be uploaded.

    Args:
        x: Pixel column (0 = left).
        y: Pixel row (0 = top).
        options: Render options (defaults to RenderOptions()).
        fov: Field of view in degrees, used when options.apply_fov is set.

    Returns:
        Tuple of (R, G, B, A) channel values.

    Raises:
        RuntimeError: If the render target or the light has not been set up.
        ValueError: If the pixel lies outside the image.
    """
    _check_render_target_initialized()
    _check_light_enabled()
    if options is None:
        options = RenderOptions()

    width, height = get_image_dimensions()
    if not (0 <= x < width and 0 <= y < height):
        raise ValueError(f"Pixel ({x}, {y}) is outside the {width}x{height} image")

    fov_scale, compositing, fix_blue = _apply_options(options, fov)
    pixel = _render_single_pixel(x, y, width, height, fov_scale, compositing, fix_blue)
    return (int(pixel[0]), int(pixel[1]), int(pixel[2]), int(pixel[3]))


def render_image(options: RenderOptions | None = None, fov: float = 90.0) -> None:
    """Render every pixel of the render target.

    Objects and the light must already be uploaded.

    Args:
        options: Render options (defaults to RenderOptions()).
        fov: Field of view in degrees, used when options.apply_fov is set.

    Raises:
        RuntimeError: If the render target or the light has not been set up.
    """
    _check_render_target_initialized()
    _check_light_enabled()
    if options is None:
        options = RenderOptions()

    width, height = get_image_dimensions()
    fov_scale, compositing, fix_blue = _apply_options(options, fov)
    _render_kernel(width, height, fov_scale, compositing, fix_blue)


def get_image_numpy() -> npt.NDArray[np.uint8]:
    """Get the rendered image as a NumPy array.

    Returns:
        Array of shape (height, width, 4) with dtype uint8, row-major with
        (0, 0) at the top-left corner.

    Raises:
        RuntimeError: If render target has not been set up.
    """
    _check_render_target_initialized()

    width, height = get_image_dimensions()
    out = np.zeros((height, width, 4), dtype=np.int32)
    _copy_to_array(out, width, height)
    return out.astype(np.uint8)
