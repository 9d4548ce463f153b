"""Render configuration and host-side validation.

Degenerate inputs cannot be handled inside the kernel, which has no failure
branch. They are rejected here, once, before anything is dispatched:

    - width or height <= 1 (pixel normalization divides by dimension - 1)
    - sphere radius <= 0
    - tile width or height < 1

Example:
    >>> from src.skytracer.config import RenderConfig, init_backend
    >>> init_backend("cpu")
    'cpu'
    >>> config = RenderConfig(width=256, height=256)
    >>> config.validate()
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal

import taichi as ti

from src.skytracer.core.shading import T_MAX
from src.skytracer.geometry.sphere import SCENE_SPHERE_CENTER, SCENE_SPHERE_RADIUS

logger = logging.getLogger(__name__)

# Type alias for backend selection
Backend = Literal["auto", "gpu", "cpu"]

# Default tile (workgroup) shape
DEFAULT_TILE_SIZE = 8

# Default output size used by the example script
DEFAULT_DIMENSION = 1024


def validate_dimensions(width: int, height: int) -> None:
    """Reject image sizes the camera cannot normalize.

    Raises:
        ValueError: If width or height is not greater than 1.
    """
    if width <= 1 or height <= 1:
        raise ValueError(
            f"Image dimensions must both be greater than 1, got {width}x{height}"
        )


def validate_tile_size(tile_width: int, tile_height: int) -> None:
    """Reject empty tile shapes.

    Raises:
        ValueError: If either tile dimension is smaller than 1.
    """
    if tile_width < 1 or tile_height < 1:
        raise ValueError(
            f"Tile dimensions must be at least 1x1, got {tile_width}x{tile_height}"
        )


def validate_sphere(radius: float) -> None:
    """Reject spheres without a positive radius.

    Raises:
        ValueError: If radius is not positive.
    """
    if not radius > 0.0:
        raise ValueError(f"Sphere radius must be positive, got {radius}")


@dataclass
class RenderConfig:
    """Configuration for one frame.

    Attributes:
        width: Image width in pixels (> 1).
        height: Image height in pixels (> 1).
        tile_width: Invocations per tile along x. Scheduling only.
        tile_height: Invocations per tile along y. Scheduling only.
        sphere_center: Center of the scene sphere.
        sphere_radius: Radius of the scene sphere (> 0).
        t_max: Far end of the accepted hit interval.
    """

    width: int = DEFAULT_DIMENSION
    height: int = DEFAULT_DIMENSION
    tile_width: int = DEFAULT_TILE_SIZE
    tile_height: int = DEFAULT_TILE_SIZE
    sphere_center: tuple[float, float, float] = SCENE_SPHERE_CENTER
    sphere_radius: float = SCENE_SPHERE_RADIUS
    t_max: float = T_MAX

    @property
    def aspect_ratio(self) -> float:
        """Width divided by height."""
        return self.width / self.height

    def validate(self) -> None:
        """Check every precondition of the kernel.

        Raises:
            ValueError: If any setting would make the kernel ill-defined.
        """
        validate_dimensions(self.width, self.height)
        validate_tile_size(self.tile_width, self.tile_height)
        validate_sphere(self.sphere_radius)
        if self.t_max < 0.0:
            raise ValueError(f"t_max must be non-negative, got {self.t_max}")


def init_backend(arch: Backend = "auto") -> str:
    """Initialize the Taichi runtime.

    Args:
        arch: "gpu", "cpu", or "auto" to try the GPU and fall back to the CPU.

    Returns:
        The name of the backend that was requested successfully.

    Raises:
        ValueError: If arch is not a known backend name.
    """
    if arch == "cpu":
        ti.init(arch=ti.cpu)
    elif arch == "gpu":
        ti.init(arch=ti.gpu)
    elif arch == "auto":
        try:
            ti.init(arch=ti.gpu)
            arch = "gpu"
        except Exception as e:
            logger.warning("GPU backend unavailable (%s), falling back to CPU", e)
            ti.init(arch=ti.cpu)
            arch = "cpu"
    else:
        raise ValueError(f"Unknown backend: {arch}")

    logger.info("Taichi initialized with %s backend", arch)
    return arch
