"""Pinhole camera model for primary ray generation.

The camera sits at the world origin looking down -z with +y up. Its viewport
is two units tall, one unit in front of the origin, and as wide as the image
aspect ratio requires. Nothing is stored between invocations: every call to
get_ray re-derives the viewport from the image dimensions it is given.

Pixel coordinates use a bottom-left origin:
    i = 0: left column,  i = width - 1: right column
    j = 0: bottom row,   j = height - 1: top row

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.skytracer.camera.pinhole import get_ray
    >>>
    >>> @ti.kernel
    ... def render(width: ti.i32, height: ti.i32):
    ...     for i, j in ti.ndrange(width, height):
    ...         ray = get_ray(i, j, width, height)
"""

import taichi as ti
import taichi.math as tm

from src.skytracer.core.ray import Ray, make_ray, vec3

# =============================================================================
# Camera Constants
# =============================================================================

VIEWPORT_HEIGHT = 2.0
FOCAL_LENGTH = 1.0
CAMERA_ORIGIN = (0.0, 0.0, 0.0)


# =============================================================================
# Ray Generation (Taichi-compatible, GPU-callable)
# =============================================================================


@ti.func
def pixel_to_uv(i: ti.i32, j: ti.i32, width: ti.i32, height: ti.i32) -> tm.vec2:
    """Map a pixel coordinate to normalized viewport coordinates in [0, 1]."""
    return tm.vec2(
        ti.cast(i, ti.f32) / ti.cast(width - 1, ti.f32),
        ti.cast(j, ti.f32) / ti.cast(height - 1, ti.f32),
    )


@ti.func
def get_ray(i: ti.i32, j: ti.i32, width: ti.i32, height: ti.i32) -> Ray:
    """Generate the primary ray through pixel (i, j).

    Args:
        i: Pixel column (0 = left).
        j: Pixel row (0 = bottom).
        width: Image width in pixels. Must be greater than 1.
        height: Image height in pixels. Must be greater than 1.

    Returns:
        A Ray from the camera origin through the pixel's point on the
        viewport. The direction is not normalized.
    """
    aspect_ratio = ti.cast(width, ti.f32) / ti.cast(height, ti.f32)
    viewport_width = aspect_ratio * VIEWPORT_HEIGHT

    origin = vec3(CAMERA_ORIGIN[0], CAMERA_ORIGIN[1], CAMERA_ORIGIN[2])
    horizontal = vec3(viewport_width, 0.0, 0.0)
    vertical = vec3(0.0, VIEWPORT_HEIGHT, 0.0)
    lower_left_corner = (
        origin - horizontal / 2.0 - vertical / 2.0 - vec3(0.0, 0.0, FOCAL_LENGTH)
    )

    uv = pixel_to_uv(i, j, width, height)
    direction = lower_left_corner + uv.x * horizontal + uv.y * vertical - origin
    return make_ray(origin, direction)


# =============================================================================
# Utility Functions
# =============================================================================


def get_camera_info(width: int, height: int) -> dict[str, tuple[float, float, float]]:
    """Get the derived camera vectors for an image size.

    Mirrors the computation in get_ray on the Python side so the camera
    setup can be inspected without launching a kernel.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        Dictionary with origin, horizontal, vertical and lower_left, plus the
        viewport size as (viewport_width, viewport_height, focal_length).
    """
    aspect_ratio = width / height
    viewport_width = aspect_ratio * VIEWPORT_HEIGHT

    ox, oy, oz = CAMERA_ORIGIN
    lower_left = (
        ox - viewport_width / 2.0,
        oy - VIEWPORT_HEIGHT / 2.0,
        oz - FOCAL_LENGTH,
    )

    return {
        "origin": CAMERA_ORIGIN,
        "horizontal": (viewport_width, 0.0, 0.0),
        "vertical": (0.0, VIEWPORT_HEIGHT, 0.0),
        "lower_left": lower_left,
        "viewport": (viewport_width, VIEWPORT_HEIGHT, FOCAL_LENGTH),
    }
