"""Materials module.

Components:
    lambertian: Diffuse reflectance term used by the shading function

Every scene object is Lambertian; its material data is a color and an
albedo carried on the object itself.
"""

from .lambertian import cosine_term, eval_lambertian, lambert_factor

__all__ = [
    "eval_lambertian",
    "cosine_term",
    "lambert_factor",
]
