"""Diffuse plus specular material model.

Each material carries a Lambertian diffuse color, a specular highlight
color with its exponent, and a reflection coefficient that scales what the
next bounce contributes.

The specular term is the renderer's own variant of Blinn-Phong: the
shadow-ray direction minus the view direction is used only through its
length, and the highlight is

    coef * (max(cos_light - cos_view, 0) / |light_dir - view_dir|) ** power
"""

import taichi as ti
import taichi.math as tm

from orthotrace.core.ray import dot, length

# Type alias for 3D vectors
vec3 = tm.vec3


@ti.dataclass
class Material:
    """Material parameters as stored on the device.

    Attributes:
        diffuse: Diffuse color.
        specular: Specular color.
        power: Specular exponent.
        reflection: Reflection coefficient in [0, 1].
    """

    diffuse: vec3
    specular: vec3
    power: ti.f32
    reflection: ti.f32


@ti.func
def lambert(light_dir: vec3, normal: vec3, coef: ti.f32) -> ti.f32:
    """Cosine-weighted diffuse factor scaled by the path attenuation."""
    return dot(light_dir, normal) * coef


@ti.func
def blinn_phong(
    light_dir: vec3,
    view_dir: vec3,
    normal: vec3,
    light_projection: ti.f32,
    power: ti.f32,
    coef: ti.f32,
):
    """Specular highlight factor for one light.

    Args:
        light_dir: Unit direction from the hit point toward the light.
        view_dir: Unit direction of the incoming ray.
        normal: Unit surface normal.
        light_projection: Cosine between the light direction and the normal.
        power: Specular exponent.
        coef: Path attenuation so far.

    Returns:
        A tuple (factor, ok). ok is 0 when light_dir equals view_dir, in
        which case there is no highlight and factor is 0.
    """
    factor = 0.0
    ok = 0
    norm = length(light_dir - view_dir)
    if norm != 0.0:
        view_projection = dot(view_dir, normal)
        term = ti.max(light_projection - view_projection, 0.0) / norm
        factor = coef * term**power
        ok = 1
    return factor, ok
