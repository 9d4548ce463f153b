"""Core rendering module.

Components:
    ray: Ray data structure and vector utilities
    shading: Normal-visualization and sky-gradient colorizer
    kernel: Tile-grid dispatch with bounds-checked surface writes
    renderer: Frame renderer owning the output surface

All per-pixel work runs in Taichi kernels; each invocation is independent
and writes exactly one output cell.
"""

from .ray import (
    Ray,
    dot,
    length,
    length_squared,
    make_ray,
    normalize,
    ray_at,
    vec3,
)

# Note: kernel and renderer are NOT imported here to avoid circular imports
# with src.skytracer.config. Import them directly when needed:
#   from src.skytracer.core.renderer import RaytracingRenderer

__all__ = [
    "Ray",
    "ray_at",
    "make_ray",
    "vec3",
    "length",
    "length_squared",
    "normalize",
    "dot",
]
