"""Scene module for scene description and device-side storage.

Components:
    description: Immutable, validated scene values (materials, spheres,
        lights, image size)
    default: The default demo scene
    buffers: Taichi fields for one scene plus nearest-hit and shadow queries
"""

from .buffers import MAX_DISTANCE, SceneBuffers, SceneHit
from .default import create_default_scene
from .description import LightInfo, MaterialInfo, Scene, SphereInfo

__all__ = [
    "Scene",
    "MaterialInfo",
    "SphereInfo",
    "LightInfo",
    "create_default_scene",
    "SceneBuffers",
    "SceneHit",
    "MAX_DISTANCE",
]
