"""Sphere primitive with ray-sphere intersection.

The intersection solves the quadratic obtained by substituting the ray
equation into the sphere equation. With a unit-length ray direction and
d = center - origin the roots are

    t = a -/+ sqrt(a^2 - d.d + r^2),   a = direction . d

A root only counts when it lies strictly inside (t_min, t_max). The lower
bound keeps secondary rays from re-hitting the surface they start on.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from orthotrace.geometry.sphere import Sphere, hit_sphere
    >>> sphere = Sphere(center=ti.math.vec3(0, 0, 0), radius=1.0, material_id=0)
    >>> # Use hit_sphere within a Taichi kernel
"""

import taichi as ti
import taichi.math as tm

from orthotrace.core.ray import dot

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3

# Smallest accepted ray parameter; guards against self-intersection acne
HIT_EPSILON = 0.1


@ti.dataclass
class Sphere:
    """A sphere defined by center point, radius and material.

    Attributes:
        center: The center point of the sphere (vec3).
        radius: The radius of the sphere (positive float).
        material_id: Index of the sphere's material in the scene buffers.
    """

    center: vec3
    radius: ti.f32
    material_id: ti.i32


@ti.dataclass
class SphereHit:
    """Result of a ray-sphere intersection test.

    Attributes:
        hit: 1 if an accepted root was found, 0 otherwise.
        t: The accepted ray parameter. On a miss this is the t_max that was
            passed in, so callers can keep it as their running bound.
    """

    hit: ti.i32
    t: ti.f32


@ti.func
def hit_sphere(
    ray_origin: vec3,
    ray_direction: vec3,
    sphere: Sphere,
    t_min: ti.f32,
    t_max: ti.f32,
) -> SphereHit:
    """Test for ray-sphere intersection, nearest root first.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The direction of the ray (must be unit length).
        sphere: The sphere to test intersection against.
        t_min: Exclusive lower bound for an accepted root.
        t_max: Exclusive upper bound for an accepted root.

    Returns:
        A SphereHit. The smaller root wins whenever it is inside the bounds;
        the larger root is only used when the smaller one is rejected.
    """
    d = sphere.center - ray_origin
    a = dot(ray_direction, d)
    delta = a * a - dot(d, d) + sphere.radius * sphere.radius

    did_hit = 0
    hit_t = t_max

    if delta >= 0.0:
        sqrt_delta = ti.sqrt(delta)
        root0 = a - sqrt_delta
        root1 = a + sqrt_delta

        if root0 > t_min and root0 < t_max:
            did_hit = 1
            hit_t = root0
        elif root1 > t_min and root1 < t_max:
            did_hit = 1
            hit_t = root1

    return SphereHit(hit=did_hit, t=hit_t)
