"""Ray data structure and vector utilities for the orthographic ray tracer.

This module provides the Ray dataclass and the small set of vector helpers
used by the intersection, shading and tracing code. All helpers are Taichi
functions so they can be called from inside rendering kernels.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> origin = ti.math.vec3(0.0, 0.0, -1000.0)
    >>> direction = ti.math.vec3(0.0, 0.0, 1.0)
    >>> ray = Ray(origin=origin, direction=direction)
    >>> point = ray_at(ray, 5.0)  # Point 5 units along the ray
"""

import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3


@ti.dataclass
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray (vec3).
        direction: The direction vector of the ray (vec3). Intersection code
            assumes unit length.
    """

    origin: vec3
    direction: vec3


@ti.func
def ray_at(ray: Ray, t: ti.f32) -> vec3:
    """Compute the point along the ray at parameter t.

    Args:
        ray: The ray to evaluate.
        t: The parameter value. Positive values are in front of the origin.

    Returns:
        The point ray.origin + t * ray.direction.
    """
    return ray.origin + t * ray.direction


@ti.func
def make_ray(origin: vec3, direction: vec3) -> Ray:
    """Create a ray from origin and direction."""
    return Ray(origin=origin, direction=direction)


# =============================================================================
# Vector Utility Functions
# =============================================================================


@ti.func
def dot(a: vec3, b: vec3) -> ti.f32:
    """Compute the dot product of two vectors."""
    return tm.dot(a, b)


@ti.func
def length(v: vec3) -> ti.f32:
    """Compute the Euclidean length (norm) of a vector."""
    return tm.length(v)


@ti.func
def try_normalize(v: vec3):
    """Normalize a vector, reporting whether the result is well defined.

    A zero-length vector has no direction. Instead of raising, the caller
    gets a flag and decides what to do with the path (the tracer stops it).

    Args:
        v: The input vector.

    Returns:
        A tuple (unit, ok) where:
        - unit: v scaled to unit length, or the zero vector.
        - ok: 1 if v had a non-zero length, 0 otherwise.
    """
    n = length(v)
    unit = vec3(0.0, 0.0, 0.0)
    ok = 0
    if n != 0.0:
        unit = v / n
        ok = 1
    return unit, ok


@ti.func
def reflect(incident: vec3, normal: vec3) -> vec3:
    """Reflect an incident vector about a normal.

    For an incident direction i and unit normal n the mirrored direction
    is i - 2 * (i . n) * n.

    Args:
        incident: The incoming direction vector (pointing toward the surface).
        normal: The surface normal (should be normalized).

    Returns:
        The reflected direction vector.
    """
    return incident - 2.0 * dot(incident, normal) * normal
