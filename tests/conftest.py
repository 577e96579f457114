"""Pytest configuration for orthotrace tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts.
    """
    ti.init(arch=ti.cpu)
    yield


@pytest.fixture
def red_material():
    """A half-reflective red material with a white highlight."""
    from orthotrace.scene.description import MaterialInfo

    return MaterialInfo(diffuse=(1.0, 0.0, 0.0), reflection=0.5, specular=(1.0, 1.0, 1.0), power=60.0)


@pytest.fixture
def matte_material():
    """A red material that does not reflect (single bounce paths)."""
    from orthotrace.scene.description import MaterialInfo

    return MaterialInfo(diffuse=(1.0, 0.0, 0.0), reflection=0.0, specular=(1.0, 1.0, 1.0), power=1.0)


@pytest.fixture
def single_sphere_scene(matte_material):
    """One matte sphere at the origin lit by a light in front of it.

    Camera rays along +z at x = y = 0 hit the sphere at z = -10 with
    normal (0, 0, -1); the light sits straight in front at z = -100.
    """
    from orthotrace.scene.description import LightInfo, Scene, SphereInfo

    return Scene(
        width=4,
        height=4,
        spheres=[SphereInfo(center=(0.0, 0.0, 0.0), radius=10.0, material=matte_material)],
        lights=[LightInfo(origin=(0.0, 0.0, -100.0), intensity=(1.0, 1.0, 1.0))],
    )
