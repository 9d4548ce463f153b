"""Sphere primitive with ray-sphere intersection.

This module provides the Sphere dataclass, the HitRecord returned by a
successful intersection test, and the intersection function itself.

The intersection solves the half-b form of the ray-sphere quadratic:

    a*t^2 + 2*half_b*t + c = 0

where:
    a = |direction|^2
    half_b = dot(oc, direction)
    c = |oc|^2 - radius^2
    oc = origin - center

The nearer root is tried first; the farther root is used only when the nearer
one falls outside the requested distance interval.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.skytracer.geometry.sphere import Sphere, hit_sphere
    >>> sphere = Sphere(center=ti.math.vec3(0, 0, -1), radius=0.5)
    >>> # Use hit_sphere within a Taichi kernel
"""

import taichi as ti
import taichi.math as tm

from src.skytracer.core.ray import Ray, dot, length_squared, ray_at

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3

# The hard-coded scene: a single sphere in front of the camera
SCENE_SPHERE_CENTER = (0.0, 0.0, -1.0)
SCENE_SPHERE_RADIUS = 0.5


@ti.dataclass
class Sphere:
    """A sphere defined by center point and radius.

    Attributes:
        center: The center point of the sphere (vec3).
        radius: The radius of the sphere. Must be positive; this is checked
            on the host before dispatch, not inside the kernel.
    """

    center: vec3
    radius: ti.f32


@ti.dataclass
class HitRecord:
    """Result of a ray-sphere intersection test.

    Taichi functions cannot return an optional value, so a miss is encoded as
    a record with hit == 0 and every other field zeroed.

    Attributes:
        hit: 1 if the ray intersected the sphere within the interval, else 0.
        distance: The ray parameter of the intersection. Only valid if hit == 1.
        hit_point: The intersection point, equal to ray_at(ray, distance).
            Only valid if hit == 1.
        normal: Unit surface normal, always facing against the ray direction
            (dot(direction, normal) <= 0). Only valid if hit == 1.
        front_face: 1 if the outward normal already faced against the ray
            (the ray arrives from outside), 0 otherwise. Only valid if hit == 1.
    """

    hit: ti.i32
    distance: ti.f32
    hit_point: vec3
    normal: vec3
    front_face: ti.i32


@ti.func
def _in_interval(t: ti.f32, distance_min: ti.f32, distance_max: ti.f32) -> ti.i32:
    return (t >= distance_min) and (t <= distance_max)


@ti.func
def hit_sphere(
    ray: Ray,
    sphere: Sphere,
    distance_min: ti.f32,
    distance_max: ti.f32,
) -> HitRecord:
    """Test a ray against a sphere.

    Args:
        ray: The ray to test. Its direction must be non-zero but need not be
            normalized.
        sphere: The sphere to test against (radius > 0).
        distance_min: Smallest accepted ray parameter (inclusive).
        distance_max: Largest accepted ray parameter (inclusive).

    Returns:
        A HitRecord. Check the hit field to determine whether the ray
        intersected the sphere inside [distance_min, distance_max].
    """
    oc = ray.origin - sphere.center
    a = length_squared(ray.direction)
    half_b = dot(oc, ray.direction)
    c = length_squared(oc) - sphere.radius * sphere.radius
    discriminant = half_b * half_b - a * c

    # Taichi requires outer-scope declaration
    did_hit = 0
    hit_distance = 0.0
    hit_point = vec3(0.0, 0.0, 0.0)
    hit_normal = vec3(0.0, 0.0, 0.0)
    is_front_face = 0

    if discriminant >= 0.0:
        sqrtd = ti.sqrt(discriminant)

        root = (-half_b - sqrtd) / a
        valid = _in_interval(root, distance_min, distance_max)
        if not valid:
            root = (-half_b + sqrtd) / a
            valid = _in_interval(root, distance_min, distance_max)

        if valid:
            did_hit = 1
            hit_distance = root
            hit_point = ray_at(ray, root)

            outward_normal = (hit_point - sphere.center) / sphere.radius

            # Flip the normal so it always opposes the incoming ray
            if dot(ray.direction, outward_normal) < 0.0:
                is_front_face = 1
                hit_normal = outward_normal
            else:
                is_front_face = 0
                hit_normal = -outward_normal

    return HitRecord(
        hit=did_hit,
        distance=hit_distance,
        hit_point=hit_point,
        normal=hit_normal,
        front_face=is_front_face,
    )


@ti.func
def make_sphere(center: vec3, radius: ti.f32) -> Sphere:
    """Create a sphere from center and radius."""
    return Sphere(center=center, radius=radius)
