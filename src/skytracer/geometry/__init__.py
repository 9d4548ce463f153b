"""Geometry module for the sphere primitive.

Components:
    sphere: Sphere primitive with ray-sphere intersection

Intersection is a Taichi function (@ti.func) returning a HitRecord by value:
    rec = hit_sphere(ray, sphere, distance_min, distance_max)
"""

from .sphere import (
    SCENE_SPHERE_CENTER,
    SCENE_SPHERE_RADIUS,
    HitRecord,
    Sphere,
    hit_sphere,
    make_sphere,
)

__all__ = [
    "Sphere",
    "HitRecord",
    "hit_sphere",
    "make_sphere",
    "SCENE_SPHERE_CENTER",
    "SCENE_SPHERE_RADIUS",
]
