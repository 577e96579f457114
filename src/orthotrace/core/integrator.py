"""Recursive (Whitted-style) ray tracing integrator.

This module implements the per-ray and per-pixel rendering logic:

    - trace_path: follows one camera ray through up to MAX_BOUNCES mirror
      reflections, adding direct lighting at every surface it hits
    - sample_pixel: 2x2 supersampling of one pixel with an orthographic
      camera, exposure tone mapping per sample and sRGB encoding per pixel

Both are Taichi functions; the frame kernel lives on the Renderer.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from orthotrace.core.integrator import sample_pixel
    >>> from orthotrace.scene.buffers import SceneBuffers
    >>> # Use sample_pixel(scene_buffers, x, y, exposure, camera_z) in a kernel
"""

import taichi as ti
import taichi.math as tm

from orthotrace.core.color import expose, srgb_encode
from orthotrace.core.ray import Ray, make_ray, ray_at, reflect, try_normalize
from orthotrace.core.shading import shade

# Type alias for 3D vectors
vec3 = tm.vec3

# =============================================================================
# Rendering Constants
# =============================================================================

# Hard cap on bounces per camera ray
MAX_BOUNCES = 10

# Camera position along z; the camera looks toward +z
CAMERA_Z = -1000.0

# Direction shared by all orthographic camera rays
VIEW_DIRECTION = (0.0, 0.0, 1.0)

# Sub-pixel offsets along each axis (2x2 supersampling)
SUBPIXEL_OFFSETS = (0.0, 0.5)

# Each sample's share of the pixel color
SAMPLE_WEIGHT = 0.25


@ti.func
def trace_path(scene: ti.template(), ray: Ray):
    """Trace one ray through the scene, following mirror reflections.

    Each bounce finds the nearest sphere, adds its direct lighting scaled by
    the running attenuation coef, multiplies coef by the sphere's reflection
    coefficient and continues along the mirrored direction from the hit
    point. The path ends when nothing is hit, the surface normal is
    undefined, coef reaches zero, or MAX_BOUNCES bounces have been taken.

    Args:
        scene: SceneBuffers holding the spheres and lights.
        ray: The camera ray (unit direction).

    Returns:
        A tuple (color, bounces) where:
        - color: The accumulated, unclamped color.
        - bounces: The number of surfaces that were shaded.
    """
    color = vec3(0.0, 0.0, 0.0)
    coef = 1.0
    bounces = 0

    # Local copy advanced bounce by bounce
    current = make_ray(ray.origin, ray.direction)

    # Active flag for path continuation
    active = 1

    for _ in range(MAX_BOUNCES):
        if active == 1:
            rec = scene.nearest_hit(current.origin, current.direction)

            if rec.hit == 0:
                active = 0
            else:
                hit_point = ray_at(current, rec.t)
                sphere = scene.sphere(rec.sphere_id)
                normal, ok = try_normalize(hit_point - sphere.center)

                if ok == 0:
                    # Hit point at the sphere center: no usable normal
                    active = 0
                else:
                    material = scene.material(sphere.material_id)
                    color += shade(scene, current, hit_point, normal, material, coef)
                    bounces += 1

                    coef *= material.reflection
                    current = make_ray(hit_point, reflect(current.direction, normal))

                    if coef <= 0.0:
                        active = 0

    return color, bounces


@ti.func
def sample_pixel(
    scene: ti.template(),
    x: ti.i32,
    y: ti.i32,
    exposure: ti.f32,
    camera_z: ti.f32,
) -> vec3:
    """Compute the display color of pixel (x, y).

    Casts one orthographic ray from each of the four sub-pixel positions
    (x, y), (x, y + 0.5), (x + 0.5, y), (x + 0.5, y + 0.5), tone maps each
    sample, averages them and sRGB-encodes the average.

    Args:
        scene: SceneBuffers holding the spheres and lights.
        x: Pixel column (0 = left).
        y: Pixel row (0 = bottom).
        exposure: Exposure factor for tone mapping.
        camera_z: z coordinate of the camera plane.

    Returns:
        The sRGB-encoded pixel color, not yet clamped.
    """
    pixel = vec3(0.0, 0.0, 0.0)
    direction = vec3(VIEW_DIRECTION[0], VIEW_DIRECTION[1], VIEW_DIRECTION[2])

    for dx in ti.static(SUBPIXEL_OFFSETS):
        for dy in ti.static(SUBPIXEL_OFFSETS):
            origin = vec3(ti.cast(x, ti.f32) + dx, ti.cast(y, ti.f32) + dy, camera_z)
            sample, _ = trace_path(scene, make_ray(origin, direction))
            pixel += SAMPLE_WEIGHT * expose(sample, exposure)

    return srgb_encode(pixel)
