"""Python implementation of a Taichi-based direct lighting ray caster.

This package renders a static scene of spheres and planes lit by a single
directional light, using Taichi kernels for the per-pixel work:
- Primary ray generation from a unit-square camera
- Analytic ray-sphere and ray-plane intersection
- Lambertian shading with 8-bit color arithmetic

Subpackages:
    core: Ray structure, color arithmetic and the render kernels
    geometry: Sphere and plane primitives with intersection routines
    materials: Lambertian reflectance term
    scene: Object table, light, scene description and demo scenes
    camera: Primary ray generation
    preview: Image export utilities
"""

__version__ = "0.1.0"
