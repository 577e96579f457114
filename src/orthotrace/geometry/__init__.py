"""Geometry module for shape primitives.

Components:
    sphere: Sphere primitive with ray-sphere intersection

Intersection routines are Taichi functions (@ti.func) and serve both
closest-hit queries and shadow-ray occlusion tests.
"""

from .sphere import HIT_EPSILON, Sphere, SphereHit, hit_sphere

__all__ = [
    "Sphere",
    "SphereHit",
    "hit_sphere",
    "HIT_EPSILON",
]
