"""Material models.

Components:
    phong: Lambertian diffuse plus specular highlight, with a reflection
        coefficient for mirror bounces
"""

from .phong import Material, blinn_phong, lambert

__all__ = [
    "Material",
    "lambert",
    "blinn_phong",
]
