"""Tile-grid dispatch of the per-pixel tracing kernel.

The image is covered by a grid of fixed-size tiles. Every invocation in the
grid maps to exactly one pixel coordinate:

    x = tile_x * tile_width + local_x
    y = tile_y * tile_height + local_y

and runs ray generation, sphere intersection and shading for that pixel
before writing RGBA into the output surface. When the image size is not a
multiple of the tile size the last row and column of tiles overshoot the
image; those invocations do nothing.

Two output surface shapes are supported, both float32 RGBA with a bottom-left
origin (y = 0 is the bottom row):

    image:  shape (width, height, 4), addressed surface[x, y]
    buffer: shape (width * height, 4), addressed buffer[x + y * width]

The surfaces are passed in explicitly and owned by the dispatch call until it
returns. The host waits on ti.sync() before returning, so callers can read
the surface immediately.

Example:
    >>> import numpy as np
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.skytracer.core.kernel import render_to_image
    >>> surface = np.zeros((256, 256, 4), dtype=np.float32)
    >>> render_to_image(surface, 256, 256)
"""

import logging

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

from src.skytracer.camera.pinhole import get_ray
from src.skytracer.config import (
    DEFAULT_TILE_SIZE,
    validate_dimensions,
    validate_sphere,
    validate_tile_size,
)
from src.skytracer.core.shading import T_MAX, ray_color
from src.skytracer.geometry.sphere import SCENE_SPHERE_CENTER, SCENE_SPHERE_RADIUS, Sphere

logger = logging.getLogger(__name__)

vec3 = tm.vec3

# Alpha written to every pixel
OPAQUE = 1.0


def dispatch_size(
    width: int,
    height: int,
    tile_width: int = DEFAULT_TILE_SIZE,
    tile_height: int = DEFAULT_TILE_SIZE,
) -> tuple[int, int]:
    """Number of tiles needed to cover the image along x and y.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        tile_width: Tile width in invocations.
        tile_height: Tile height in invocations.

    Returns:
        Tuple of (tiles_x, tiles_y), rounded up.
    """
    validate_tile_size(tile_width, tile_height)
    tiles_x = (width + tile_width - 1) // tile_width
    tiles_y = (height + tile_height - 1) // tile_height
    return tiles_x, tiles_y


# =============================================================================
# Per-invocation Work
# =============================================================================


@ti.func
def shade_pixel(x: ti.i32, y: ti.i32, width: ti.i32, height: ti.i32, sphere: Sphere, t_max: ti.f32) -> vec3:
    """Generate, intersect and shade the primary ray of one pixel."""
    ray = get_ray(x, y, width, height)
    return ray_color(ray, sphere, t_max)


# =============================================================================
# Rendering Kernels
# =============================================================================


@ti.kernel
def _render_tiles_image(
    surface: ti.types.ndarray(dtype=ti.f32, ndim=3),
    width: ti.i32,
    height: ti.i32,
    tiles_x: ti.i32,
    tiles_y: ti.i32,
    tile_width: ti.i32,
    tile_height: ti.i32,
    center_x: ti.f32,
    center_y: ti.f32,
    center_z: ti.f32,
    radius: ti.f32,
    t_max: ti.f32,
):
    """Shade every pixel into a (width, height, 4) surface."""
    sphere = Sphere(center=vec3(center_x, center_y, center_z), radius=radius)
    for tx, ty, lx, ly in ti.ndrange(tiles_x, tiles_y, tile_width, tile_height):
        x = tx * tile_width + lx
        y = ty * tile_height + ly
        if x < width and y < height:
            color = shade_pixel(x, y, width, height, sphere, t_max)
            for c in ti.static(range(3)):
                surface[x, y, c] = color[c]
            surface[x, y, 3] = OPAQUE


@ti.kernel
def _render_tiles_buffer(
    buffer: ti.types.ndarray(dtype=ti.f32, ndim=2),
    width: ti.i32,
    height: ti.i32,
    tiles_x: ti.i32,
    tiles_y: ti.i32,
    tile_width: ti.i32,
    tile_height: ti.i32,
    center_x: ti.f32,
    center_y: ti.f32,
    center_z: ti.f32,
    radius: ti.f32,
    t_max: ti.f32,
):
    """Shade every pixel into a flat (width * height, 4) row-major buffer."""
    sphere = Sphere(center=vec3(center_x, center_y, center_z), radius=radius)
    for tx, ty, lx, ly in ti.ndrange(tiles_x, tiles_y, tile_width, tile_height):
        x = tx * tile_width + lx
        y = ty * tile_height + ly
        if x < width and y < height:
            color = shade_pixel(x, y, width, height, sphere, t_max)
            index = x + y * width
            for c in ti.static(range(3)):
                buffer[index, c] = color[c]
            buffer[index, 3] = OPAQUE


@ti.kernel
def _render_single_pixel(
    x: ti.i32,
    y: ti.i32,
    width: ti.i32,
    height: ti.i32,
    center_x: ti.f32,
    center_y: ti.f32,
    center_z: ti.f32,
    radius: ti.f32,
    t_max: ti.f32,
) -> vec3:
    """Shade a single pixel. Used for testing and debugging."""
    sphere = Sphere(center=vec3(center_x, center_y, center_z), radius=radius)
    return shade_pixel(x, y, width, height, sphere, t_max)


# =============================================================================
# Public Rendering API
# =============================================================================


def _check_surface(surface: npt.NDArray[np.float32], expected: tuple[int, ...]) -> None:
    if surface.shape != expected:
        raise ValueError(f"Surface shape {surface.shape} does not match expected {expected}")
    if surface.dtype != np.float32:
        raise ValueError(f"Surface dtype must be float32, got {surface.dtype}")


def render_to_image(
    surface: npt.NDArray[np.float32],
    width: int,
    height: int,
    *,
    tile_width: int = DEFAULT_TILE_SIZE,
    tile_height: int = DEFAULT_TILE_SIZE,
    sphere_center: tuple[float, float, float] = SCENE_SPHERE_CENTER,
    sphere_radius: float = SCENE_SPHERE_RADIUS,
    t_max: float = T_MAX,
) -> None:
    """Render one frame into a 2-D RGBA surface.

    Args:
        surface: float32 array of shape (width, height, 4), written in place.
            Index [x, y] with y = 0 at the bottom row.
        width: Image width in pixels (> 1).
        height: Image height in pixels (> 1).
        tile_width: Tile width in invocations.
        tile_height: Tile height in invocations.
        sphere_center: Center of the scene sphere.
        sphere_radius: Radius of the scene sphere (> 0).
        t_max: Far end of the accepted hit interval.

    Raises:
        ValueError: If the dimensions, tile shape, sphere or surface are invalid.
    """
    validate_dimensions(width, height)
    validate_sphere(sphere_radius)
    _check_surface(surface, (width, height, 4))
    tiles_x, tiles_y = dispatch_size(width, height, tile_width, tile_height)

    logger.debug(
        "Dispatching %dx%d tiles of %dx%d for a %dx%d image",
        tiles_x, tiles_y, tile_width, tile_height, width, height,
    )
    _render_tiles_image(
        surface,
        width,
        height,
        tiles_x,
        tiles_y,
        tile_width,
        tile_height,
        *sphere_center,
        sphere_radius,
        t_max,
    )
    # Frame fence: all invocations complete before the surface is read
    ti.sync()


def render_to_buffer(
    buffer: npt.NDArray[np.float32],
    width: int,
    height: int,
    *,
    tile_width: int = DEFAULT_TILE_SIZE,
    tile_height: int = DEFAULT_TILE_SIZE,
    sphere_center: tuple[float, float, float] = SCENE_SPHERE_CENTER,
    sphere_radius: float = SCENE_SPHERE_RADIUS,
    t_max: float = T_MAX,
) -> None:
    """Render one frame into a flat row-major RGBA buffer.

    Args:
        buffer: float32 array of shape (width * height, 4), written in place.
            Pixel (x, y) lives at index x + y * width, y = 0 being the bottom row.
        width: Image width in pixels (> 1).
        height: Image height in pixels (> 1).
        tile_width: Tile width in invocations.
        tile_height: Tile height in invocations.
        sphere_center: Center of the scene sphere.
        sphere_radius: Radius of the scene sphere (> 0).
        t_max: Far end of the accepted hit interval.

    Raises:
        ValueError: If the dimensions, tile shape, sphere or buffer are invalid.
    """
    validate_dimensions(width, height)
    validate_sphere(sphere_radius)
    _check_surface(buffer, (width * height, 4))
    tiles_x, tiles_y = dispatch_size(width, height, tile_width, tile_height)

    logger.debug(
        "Dispatching %dx%d tiles of %dx%d for a %d-pixel buffer",
        tiles_x, tiles_y, tile_width, tile_height, width * height,
    )
    _render_tiles_buffer(
        buffer,
        width,
        height,
        tiles_x,
        tiles_y,
        tile_width,
        tile_height,
        *sphere_center,
        sphere_radius,
        t_max,
    )
    ti.sync()


def trace_pixel(
    x: int,
    y: int,
    width: int,
    height: int,
    *,
    sphere_center: tuple[float, float, float] = SCENE_SPHERE_CENTER,
    sphere_radius: float = SCENE_SPHERE_RADIUS,
    t_max: float = T_MAX,
) -> tuple[float, float, float]:
    """Shade a single pixel and return its color.

    This is a Python-callable function for testing. For production rendering,
    use render_to_image() or render_to_buffer(), which process all pixels in
    parallel.

    Args:
        x: Pixel column (0 = left).
        y: Pixel row (0 = bottom).
        width: Image width in pixels (> 1).
        height: Image height in pixels (> 1).
        sphere_center: Center of the scene sphere.
        sphere_radius: Radius of the scene sphere (> 0).
        t_max: Far end of the accepted hit interval.

    Returns:
        Tuple of (R, G, B) color values.

    Raises:
        ValueError: If the configuration is invalid or (x, y) is outside the image.
    """
    validate_dimensions(width, height)
    validate_sphere(sphere_radius)
    if not (0 <= x < width and 0 <= y < height):
        raise ValueError(f"Pixel ({x}, {y}) is outside a {width}x{height} image")

    color = _render_single_pixel(x, y, width, height, *sphere_center, sphere_radius, t_max)
    return (float(color[0]), float(color[1]), float(color[2]))
