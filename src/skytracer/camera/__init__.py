"""Camera module for primary ray generation.

Components:
    pinhole: Fixed pinhole camera at the origin looking down -z

Ray generation uses normalized viewport coordinates:
    u in [0, 1]: left to right across image
    v in [0, 1]: bottom to top across image
"""

from .pinhole import (
    FOCAL_LENGTH,
    VIEWPORT_HEIGHT,
    get_camera_info,
    get_ray,
    pixel_to_uv,
)

__all__ = [
    "get_ray",
    "pixel_to_uv",
    "get_camera_info",
    "VIEWPORT_HEIGHT",
    "FOCAL_LENGTH",
]
