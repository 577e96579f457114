"""Orthographic ray tracer for reflective spheres and point lights.

This package renders a scene of spheres lit by point lights with recursive
(Whitted-style) ray tracing, running the per-pixel work in Taichi kernels:
- Ray-sphere intersection with nearest-root selection
- Lambertian diffuse and specular highlights with hard shadows
- Mirror reflections up to a fixed bounce limit
- 2x2 supersampling, exposure tone mapping and sRGB encoding
- 24-bit BMP output

Subpackages:
    core: Ray and vector utilities, shading, the integrator and the renderer
    geometry: Sphere primitive and ray-sphere intersection
    materials: Diffuse plus specular material model
    scene: Scene description values, the default scene and device buffers
    output: Raster encoding and BMP export
"""

__version__ = "0.1.0"
