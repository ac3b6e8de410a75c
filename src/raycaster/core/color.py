"""Color arithmetic on 0-255 RGB channels.

Colors are stored as vec3 with each channel in [0, 255]. Combining two
colors or scaling a color divides by 255 so the result stays in the same
range, and every result is clamped to [0, 255].

The component-wise product keeps a historical channel mix-up:
the blue output channel is computed from the *green* channel of the second
color. Pass fix_blue=1 to use the blue channel instead.

Example:
    >>> # Inside a Taichi kernel:
    >>> # mixed = color_mul_color(object_color, light_color, 0)
    >>> # shaded = color_mul_const(mixed, lambert)
    >>> # rgba = color_to_rgba8(shaded)
"""

import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors
vec3 = tm.vec3

# Upper bound of a color channel
COLOR_MAX = 255.0

# Alpha of a shaded (opaque) pixel
OPAQUE_ALPHA = 255


@ti.func
def clamp_channel(value: ti.f32) -> ti.f32:
    """Clamp a single channel to [0, COLOR_MAX]."""
    return tm.clamp(value, 0.0, COLOR_MAX)


@ti.func
def color_mul_const(color: vec3, constant: ti.f32) -> vec3:
    """Scale a color by a scalar.

    Each channel becomes clamp(channel * constant / 255, 0, 255).

    Args:
        color: The color to scale (channels in [0, 255]).
        constant: The scale factor.

    Returns:
        The scaled, clamped color.
    """
    result = vec3(0.0, 0.0, 0.0)
    for c in ti.static(range(3)):
        result[c] = clamp_channel((color[c] * constant) / COLOR_MAX)
    return result


@ti.func
def color_mul_color(color: vec3, other: vec3, fix_blue: ti.i32) -> vec3:
    """Multiply two colors channel by channel.

    Each channel becomes clamp(a_i * b_i / 255, 0, 255), except that the
    blue channel uses the green channel of `other` unless fix_blue is set.

    Args:
        color: The first color (channels in [0, 255]).
        other: The second color (channels in [0, 255]).
        fix_blue: 1 to multiply blue by other.z, 0 to keep other.y.

    Returns:
        The combined, clamped color.
    """
    blue_factor = other.y
    if fix_blue == 1:
        blue_factor = other.z
    return vec3(
        clamp_channel((color.x * other.x) / COLOR_MAX),
        clamp_channel((color.y * other.y) / COLOR_MAX),
        clamp_channel((color.z * blue_factor) / COLOR_MAX),
    )


@ti.func
def channel_to_u8(value: ti.f32) -> ti.i32:
    """Round a non-negative channel to the nearest integer, halves away from zero.

    No clamping happens here; callers pass already clamped channels.
    """
    return ti.cast(ti.floor(value + 0.5), ti.i32)


@ti.func
def color_to_rgba8(color: vec3) -> ti.math.ivec4:
    """Convert a float color to an opaque 8-bit RGBA value."""
    return ti.math.ivec4(
        channel_to_u8(color.x),
        channel_to_u8(color.y),
        channel_to_u8(color.z),
        OPAQUE_ALPHA,
    )
