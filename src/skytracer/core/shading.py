"""Pixel colorizer for the single-sphere normal visualization.

Every primary ray ends in one of two states:
    - hit: the sphere is hit within [0, max_distance]; the color is the
      surface normal remapped from [-1, 1] to [0, 1] per channel.
    - miss: the color is a vertical white-to-sky-blue gradient driven by the
      normalized ray direction's y component.

There are no secondary rays and no light sources.
"""

import taichi as ti
import taichi.math as tm

from src.skytracer.core.ray import Ray, normalize
from src.skytracer.geometry.sphere import Sphere, hit_sphere

vec3 = tm.vec3

# Effectively no far clip for primary rays
T_MIN = 0.0
T_MAX = 1e10

WHITE = (1.0, 1.0, 1.0)
SKY_BLUE = (0.5, 0.7, 1.0)


@ti.func
def normal_color(normal: vec3) -> vec3:
    """Visualize a unit normal as an RGB color: 0.5 * (normal + 1)."""
    return 0.5 * (normal + vec3(1.0, 1.0, 1.0))


@ti.func
def background_color(direction: vec3) -> vec3:
    """Sky gradient for rays that escape the scene.

    Args:
        direction: Ray direction. Must be non-zero; it is normalized here.

    Returns:
        Linear blend between white (looking down) and sky blue (looking up).
    """
    unit_direction = normalize(direction)
    t = 0.5 * (unit_direction.y + 1.0)
    white = vec3(WHITE[0], WHITE[1], WHITE[2])
    sky_blue = vec3(SKY_BLUE[0], SKY_BLUE[1], SKY_BLUE[2])
    return (1.0 - t) * white + t * sky_blue


@ti.func
def ray_color(ray: Ray, sphere: Sphere, max_distance: ti.f32) -> vec3:
    """Shade one primary ray against the sphere.

    Args:
        ray: The primary ray.
        sphere: The scene sphere.
        max_distance: Far end of the accepted hit interval.

    Returns:
        The linear RGB color for the pixel.
    """
    rec = hit_sphere(ray, sphere, T_MIN, max_distance)
    color = background_color(ray.direction)
    if rec.hit == 1:
        color = normal_color(rec.normal)
    return color
