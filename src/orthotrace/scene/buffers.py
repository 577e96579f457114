"""Device-side scene storage and scene-level intersection queries.

SceneBuffers uploads an immutable Scene into Taichi fields (Structure of
Arrays layout) and exposes the two queries the tracer needs: the nearest
sphere along a ray, and whether anything blocks a shadow ray. Each Scene
gets its own SceneBuffers instance; nothing is stored at module level.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from orthotrace.scene.buffers import SceneBuffers
    >>> from orthotrace.scene.default import create_default_scene
    >>> buffers = SceneBuffers(create_default_scene())
    >>> buffers.sphere_count
    10
"""

import logging

import taichi as ti
import taichi.math as tm

from orthotrace.geometry.sphere import HIT_EPSILON, Sphere, hit_sphere
from orthotrace.materials.phong import Material
from orthotrace.scene.description import Scene

logger = logging.getLogger(__name__)

# Type alias for 3D vectors
vec3 = tm.vec3

# Far bound for primary and reflected rays
MAX_DISTANCE = 2000.0


@ti.dataclass
class SceneHit:
    """Record of the nearest ray-scene intersection.

    Attributes:
        hit: 1 if any sphere was hit, 0 otherwise.
        t: Distance along the ray to the hit. Only valid if hit == 1.
        sphere_id: Index of the hit sphere. -1 on a miss.
    """

    hit: ti.i32
    t: ti.f32
    sphere_id: ti.i32


@ti.data_oriented
class SceneBuffers:
    """Taichi fields holding one scene's spheres, materials and lights.

    Fields are sized to the scene (at least one slot each, since Taichi
    fields cannot be empty); the active counts live in 0-d fields.

    Attributes:
        scene: The Scene the buffers were built from.
    """

    def __init__(self, scene: Scene) -> None:
        self.scene = scene
        materials = scene.materials()
        material_ids = {material: i for i, material in enumerate(materials)}

        n_spheres = max(len(scene.spheres), 1)
        n_materials = max(len(materials), 1)
        n_lights = max(len(scene.lights), 1)

        self.num_spheres = ti.field(dtype=ti.i32, shape=())
        self.sphere_centers = ti.Vector.field(3, dtype=ti.f32, shape=n_spheres)
        self.sphere_radii = ti.field(dtype=ti.f32, shape=n_spheres)
        self.sphere_material_ids = ti.field(dtype=ti.i32, shape=n_spheres)

        self.num_materials = ti.field(dtype=ti.i32, shape=())
        self.material_diffuse = ti.Vector.field(3, dtype=ti.f32, shape=n_materials)
        self.material_specular = ti.Vector.field(3, dtype=ti.f32, shape=n_materials)
        self.material_power = ti.field(dtype=ti.f32, shape=n_materials)
        self.material_reflection = ti.field(dtype=ti.f32, shape=n_materials)

        self.num_lights = ti.field(dtype=ti.i32, shape=())
        self.light_origins = ti.Vector.field(3, dtype=ti.f32, shape=n_lights)
        self.light_intensities = ti.Vector.field(3, dtype=ti.f32, shape=n_lights)

        for i, sphere in enumerate(scene.spheres):
            self.sphere_centers[i] = list(sphere.center)
            self.sphere_radii[i] = sphere.radius
            self.sphere_material_ids[i] = material_ids[sphere.material]
        self.num_spheres[None] = len(scene.spheres)

        for i, material in enumerate(materials):
            self.material_diffuse[i] = list(material.diffuse)
            self.material_specular[i] = list(material.specular)
            self.material_power[i] = material.power
            self.material_reflection[i] = material.reflection
        self.num_materials[None] = len(materials)

        for i, light in enumerate(scene.lights):
            self.light_origins[i] = list(light.origin)
            self.light_intensities[i] = list(light.intensity)
        self.num_lights[None] = len(scene.lights)

        logger.info(
            "Uploaded scene: %d spheres, %d materials, %d lights",
            len(scene.spheres),
            len(materials),
            len(scene.lights),
        )

    @property
    def sphere_count(self) -> int:
        """Get the number of spheres in the scene."""
        return int(self.num_spheres[None])

    @property
    def material_count(self) -> int:
        """Get the number of distinct materials in the scene."""
        return int(self.num_materials[None])

    @property
    def light_count(self) -> int:
        """Get the number of lights in the scene."""
        return int(self.num_lights[None])

    @ti.func
    def sphere(self, i: ti.i32) -> Sphere:
        """Assemble sphere i from the field arrays."""
        return Sphere(
            center=self.sphere_centers[i],
            radius=self.sphere_radii[i],
            material_id=self.sphere_material_ids[i],
        )

    @ti.func
    def material(self, i: ti.i32) -> Material:
        """Assemble material i from the field arrays."""
        return Material(
            diffuse=self.material_diffuse[i],
            specular=self.material_specular[i],
            power=self.material_power[i],
            reflection=self.material_reflection[i],
        )

    @ti.func
    def nearest_hit(self, ray_origin: vec3, ray_direction: vec3) -> SceneHit:
        """Find the closest sphere along a ray.

        Every sphere is tested against a bound that shrinks to the best
        distance found so far, so a later sphere only wins when it is
        strictly closer.

        Args:
            ray_origin: The starting point of the ray.
            ray_direction: The unit direction of the ray.

        Returns:
            A SceneHit for the nearest sphere, or a miss record.
        """
        closest_t = MAX_DISTANCE
        closest_id = -1

        for i in range(self.num_spheres[None]):
            rec = hit_sphere(ray_origin, ray_direction, self.sphere(i), HIT_EPSILON, closest_t)
            if rec.hit == 1:
                closest_t = rec.t
                closest_id = i

        did_hit = 0
        if closest_id >= 0:
            did_hit = 1
        return SceneHit(hit=did_hit, t=closest_t, sphere_id=closest_id)

    @ti.func
    def occluded(self, ray_origin: vec3, ray_direction: vec3, max_distance: ti.f32) -> ti.i32:
        """Test whether any sphere blocks a shadow ray before max_distance.

        Args:
            ray_origin: The surface point the shadow ray starts from.
            ray_direction: Unit direction toward the light.
            max_distance: Distance to the light.

        Returns:
            1 if any sphere is hit strictly before the light, 0 otherwise.
        """
        blocked = 0

        # Early exit on first hit
        for i in range(self.num_spheres[None]):
            if blocked == 0:
                rec = hit_sphere(ray_origin, ray_direction, self.sphere(i), HIT_EPSILON, max_distance)
                if rec.hit == 1:
                    blocked = 1

        return blocked
