"""Direct lighting at a surface point.

For each point light the hit point is shaded with a Lambertian diffuse
term and a specular highlight, unless the light is behind the surface or
another sphere blocks the way. Shadow rays reuse the scene's sphere
intersection test, bounded by the distance to the light.
"""

import taichi as ti
import taichi.math as tm

from orthotrace.core.ray import Ray, dot, length
from orthotrace.materials.phong import Material, blinn_phong, lambert

# Type alias for 3D vectors
vec3 = tm.vec3


@ti.func
def shade(
    scene: ti.template(),
    ray: Ray,
    hit_point: vec3,
    normal: vec3,
    material: Material,
    coef: ti.f32,
) -> vec3:
    """Sum the diffuse and specular contribution of every visible light.

    Args:
        scene: SceneBuffers holding the spheres and lights.
        ray: The incoming ray (unit direction).
        hit_point: The surface point being shaded.
        normal: Unit outward normal at hit_point.
        material: Material of the hit sphere.
        coef: Path attenuation accumulated before this bounce.

    Returns:
        The unclamped color contributed by direct lighting.
    """
    color = vec3(0.0, 0.0, 0.0)

    for k in range(scene.num_lights[None]):
        intensity = scene.light_intensities[k]
        to_light = scene.light_origins[k] - hit_point

        # Lights behind the surface contribute nothing
        light_projection = dot(to_light, normal)
        if light_projection > 0.0:
            light_distance = length(to_light)
            light_dir = to_light / light_distance
            light_projection /= light_distance

            if scene.occluded(hit_point, light_dir, light_distance) == 0:
                diffuse = lambert(light_dir, normal, coef)
                color += diffuse * intensity * material.diffuse

                specular, has_highlight = blinn_phong(
                    light_dir,
                    ray.direction,
                    normal,
                    light_projection,
                    material.power,
                    coef,
                )
                if has_highlight == 1:
                    color += specular * material.specular * intensity

    return color
