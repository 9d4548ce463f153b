"""Preview module for frame conversion and export.

Components:
    export: Row reordering, 8-bit conversion and PNG export

Example:
    >>> from src.skytracer.preview import save_png_from_array
    >>> save_png_from_array(surface, "out.png")
"""

from src.skytracer.preview.export import (
    buffer_to_top_left,
    compute_rmse,
    save_png_from_array,
    surface_to_top_left,
    to_rgba8,
)

__all__ = [
    "surface_to_top_left",
    "buffer_to_top_left",
    "to_rgba8",
    "save_png_from_array",
    "compute_rmse",
]
