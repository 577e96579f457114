"""Exposure tone mapping and sRGB encoding for traced colors.

Traced colors are unbounded linear values. Exposure maps each sample into
[0, 1) with 1 - exp(-c * exposure); sRGB encoding then turns the averaged
linear pixel into display values. The two steps do not commute: exposure
is applied per sample before averaging, encoding once per pixel after.
"""

import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors
vec3 = tm.vec3

# Linear segment threshold and slope of the sRGB transfer curve
SRGB_LINEAR_THRESHOLD = 0.0031308
SRGB_LINEAR_SLOPE = 12.92
SRGB_EXPONENT = 0.4166667  # 1 / 2.4


@ti.func
def expose(color: vec3, exposure: ti.f32) -> vec3:
    """Apply exposure tone mapping: 1 - exp(-c * exposure) per channel."""
    return 1.0 - ti.exp(-color * exposure)


@ti.func
def srgb_encode_channel(c: ti.f32) -> ti.f32:
    """Encode one linear channel with the sRGB transfer function."""
    result = SRGB_LINEAR_SLOPE * c
    if c > SRGB_LINEAR_THRESHOLD:
        result = 1.055 * c**SRGB_EXPONENT - 0.055
    return result


@ti.func
def srgb_encode(color: vec3) -> vec3:
    """Encode a linear color with the sRGB transfer function."""
    return vec3(
        srgb_encode_channel(color.x),
        srgb_encode_channel(color.y),
        srgb_encode_channel(color.z),
    )
