"""Tests for scene description values and the default scene.

Tests cover:
- Validation of materials, spheres, lights and image size
- Immutability of scenes
- Material de-duplication
- The default scene contents
"""

import dataclasses

import pytest

from orthotrace.scene.default import LIGHTS, SPHERES, create_default_scene
from orthotrace.scene.description import LightInfo, MaterialInfo, Scene, SphereInfo


class TestMaterialInfo:
    """Test material validation."""

    def test_defaults(self):
        material = MaterialInfo(diffuse=(0.5, 0.5, 0.5))
        assert material.reflection == 0.0
        assert material.specular == (1.0, 1.0, 1.0)
        assert material.power == 60.0

    def test_sequences_become_float_tuples(self):
        material = MaterialInfo(diffuse=[1, 0, 0], specular=[1, 1, 1])
        assert material.diffuse == (1.0, 0.0, 0.0)
        assert isinstance(material.diffuse, tuple)

    @pytest.mark.parametrize("reflection", [-0.1, 1.5])
    def test_reflection_out_of_range(self, reflection):
        with pytest.raises(ValueError, match="Reflection"):
            MaterialInfo(diffuse=(1.0, 1.0, 1.0), reflection=reflection)

    @pytest.mark.parametrize("reflection", [0.0, 1.0])
    def test_reflection_bounds_are_inclusive(self, reflection):
        assert MaterialInfo(diffuse=(1.0, 1.0, 1.0), reflection=reflection).reflection == reflection

    def test_power_below_one(self):
        with pytest.raises(ValueError, match="power"):
            MaterialInfo(diffuse=(1.0, 1.0, 1.0), power=0.5)

    def test_negative_color(self):
        with pytest.raises(ValueError, match="non-negative"):
            MaterialInfo(diffuse=(1.0, -0.2, 1.0))

    def test_wrong_component_count(self):
        with pytest.raises(ValueError, match="3 components"):
            MaterialInfo(diffuse=(1.0, 1.0))


class TestSphereAndLight:
    """Test sphere and light validation."""

    @pytest.mark.parametrize("radius", [0.0, -5.0, float("nan"), float("inf")])
    def test_invalid_radius(self, radius):
        with pytest.raises(ValueError, match="radius"):
            SphereInfo(center=(0.0, 0.0, 0.0), radius=radius, material=MaterialInfo(diffuse=(1, 1, 1)))

    def test_non_finite_center(self):
        with pytest.raises(ValueError, match="finite"):
            SphereInfo(center=(0.0, float("nan"), 0.0), radius=1.0, material=MaterialInfo(diffuse=(1, 1, 1)))

    def test_light_intensity_above_one_allowed(self):
        light = LightInfo(origin=(0.0, 0.0, 0.0), intensity=(2.0, 2.0, 2.0))
        assert light.intensity == (2.0, 2.0, 2.0)

    def test_negative_light_intensity(self):
        with pytest.raises(ValueError, match="non-negative"):
            LightInfo(origin=(0.0, 0.0, 0.0), intensity=(-1.0, 0.0, 0.0))


class TestScene:
    """Test scene construction."""

    @pytest.mark.parametrize("width,height", [(0, 10), (10, 0), (-1, 10), (10, -3)])
    def test_non_positive_dimensions(self, width, height):
        with pytest.raises(ValueError, match="positive integer"):
            Scene(width=width, height=height)

    @pytest.mark.parametrize("width", [10.0, True, "10"])
    def test_non_integer_dimensions(self, width):
        with pytest.raises(ValueError):
            Scene(width=width, height=10)

    def test_rejects_foreign_objects(self):
        with pytest.raises(ValueError, match="SphereInfo"):
            Scene(width=10, height=10, spheres=[(0.0, 0.0, 0.0)])

    def test_sequences_frozen_to_tuples(self):
        spheres = [SphereInfo(center=(0, 0, 0), radius=1.0, material=MaterialInfo(diffuse=(1, 1, 1)))]
        scene = Scene(width=10, height=10, spheres=spheres)
        spheres.clear()
        assert isinstance(scene.spheres, tuple)
        assert len(scene.spheres) == 1

    def test_scene_is_immutable(self):
        scene = Scene(width=10, height=10)
        with pytest.raises(dataclasses.FrozenInstanceError):
            scene.width = 20

    def test_empty_scene_allowed(self):
        scene = Scene(width=1, height=1)
        assert scene.spheres == ()
        assert scene.lights == ()
        assert scene.materials() == []

    def test_materials_are_deduplicated_in_first_use_order(self):
        a = MaterialInfo(diffuse=(1.0, 0.0, 0.0))
        b = MaterialInfo(diffuse=(0.0, 1.0, 0.0))
        scene = Scene(
            width=10,
            height=10,
            spheres=[
                SphereInfo(center=(0, 0, 0), radius=1.0, material=b),
                SphereInfo(center=(5, 0, 0), radius=1.0, material=a),
                SphereInfo(center=(9, 0, 0), radius=1.0, material=b),
            ],
        )
        assert scene.materials() == [b, a]


class TestDefaultScene:
    """Test the default scene."""

    def test_dimensions(self):
        scene = create_default_scene()
        assert (scene.width, scene.height) == (800, 600)

    def test_counts(self):
        scene = create_default_scene()
        assert len(scene.spheres) == 10
        assert len(scene.lights) == 3
        assert len(scene.materials()) == 8

    def test_custom_size_keeps_geometry(self):
        scene = create_default_scene(width=80, height=60)
        assert (scene.width, scene.height) == (80, 60)
        assert scene.spheres == SPHERES
        assert scene.lights == LIGHTS

    def test_white_sphere(self):
        white = create_default_scene().spheres[0]
        assert white.center == (400.0, 300.0, 0.0)
        assert white.radius == 200.0
        assert white.material.reflection == 1.0

    def test_brightest_light(self):
        assert max(light.intensity[0] for light in create_default_scene().lights) == 2.0
