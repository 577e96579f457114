"""Core rendering module.

This module contains the building blocks of the ray tracer:

Components:
    ray: Ray data structure and vector utilities
    color: Exposure tone mapping and sRGB encoding
    shading: Direct lighting with shadow rays
    integrator: Recursive tracing and per-pixel supersampling
    renderer: Frame renderer and render settings

All per-ray operations are Taichi functions; the frame kernel runs on the
Renderer.
"""

from .color import expose, srgb_encode, srgb_encode_channel
from .ray import Ray, dot, length, make_ray, ray_at, reflect, try_normalize, vec3

# Note: integrator and renderer are NOT imported here to avoid circular imports.
# Import directly from orthotrace.core.integrator or orthotrace.core.renderer.

__all__ = [
    "Ray",
    "ray_at",
    "make_ray",
    "vec3",
    "dot",
    "length",
    "try_normalize",
    "reflect",
    "expose",
    "srgb_encode",
    "srgb_encode_channel",
]
