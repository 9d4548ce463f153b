"""Frame renderer wrapping the tile-dispatch kernel.

This module provides a small stateful wrapper around the kernel functions:
- Validated configuration up front
- Ownership of the output surface for the duration of a frame
- Readback as float RGBA, 8-bit RGBA, raw bytes or a PNG file

Each call to render() allocates a fresh surface and only publishes it once
the dispatch has synchronized, so a frame is either complete or absent.

Example:
    >>> from src.skytracer.config import RenderConfig, init_backend
    >>> from src.skytracer.core.renderer import RaytracingRenderer
    >>> init_backend("auto")
    >>> renderer = RaytracingRenderer(RenderConfig(width=512, height=512))
    >>> renderer.render()
    >>> renderer.save_png("out.png")
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt

from src.skytracer.config import RenderConfig
from src.skytracer.core.kernel import render_to_buffer, render_to_image
from src.skytracer.preview.export import (
    buffer_to_top_left,
    save_png_from_array,
    surface_to_top_left,
    to_rgba8,
)


class RaytracingRenderer:
    """Renders the single-sphere scene one frame at a time.

    Attributes:
        config: The validated frame configuration.
    """

    def __init__(self, config: RenderConfig | None = None) -> None:
        """Initialize the renderer.

        Args:
            config: Frame configuration. Defaults to RenderConfig().

        Raises:
            ValueError: If the configuration is invalid.
        """
        self.config = config if config is not None else RenderConfig()
        self.config.validate()
        self._surface: npt.NDArray[np.float32] | None = None

    @property
    def width(self) -> int:
        """Get the image width."""
        return self.config.width

    @property
    def height(self) -> int:
        """Get the image height."""
        return self.config.height

    @property
    def has_frame(self) -> bool:
        """Whether a completed frame is available for readback."""
        return self._surface is not None

    def _dispatch_kwargs(self) -> dict:
        return {
            "tile_width": self.config.tile_width,
            "tile_height": self.config.tile_height,
            "sphere_center": self.config.sphere_center,
            "sphere_radius": self.config.sphere_radius,
            "t_max": self.config.t_max,
        }

    def render(self) -> npt.NDArray[np.float32]:
        """Render a frame into a new 2-D surface.

        Returns:
            float32 surface of shape (width, height, 4), bottom-left origin.
        """
        surface = np.zeros((self.width, self.height, 4), dtype=np.float32)
        render_to_image(surface, self.width, self.height, **self._dispatch_kwargs())
        self._surface = surface
        return surface

    def render_buffer(self) -> npt.NDArray[np.float32]:
        """Render a frame into a new flat row-major buffer.

        The buffer variant does not replace the frame held for readback.

        Returns:
            float32 buffer of shape (width * height, 4), index x + y * width.
        """
        buffer = np.zeros((self.width * self.height, 4), dtype=np.float32)
        render_to_buffer(buffer, self.width, self.height, **self._dispatch_kwargs())
        return buffer

    def get_surface(self) -> npt.NDArray[np.float32]:
        """Get the last completed surface.

        Raises:
            RuntimeError: If no frame has been rendered yet.
        """
        if self._surface is None:
            raise RuntimeError("No frame rendered. Call render() first.")
        return self._surface

    def get_image_numpy(self) -> npt.NDArray[np.float32]:
        """Get the last frame as (height, width, 4) float rows, top row first."""
        return surface_to_top_left(self.get_surface())

    def get_image_rgba8(self) -> npt.NDArray[np.uint8]:
        """Get the last frame as (height, width, 4) 8-bit RGBA, top row first."""
        return to_rgba8(self.get_image_numpy())

    def render_as_rgba8unorm_bytes(self) -> bytes:
        """Render a frame and return it as tightly packed RGBA8 bytes.

        Rows are ordered top to bottom with a stride of 4 * width bytes,
        ready for image encoders that take raw RGBA input.
        """
        self.render()
        return self.get_image_rgba8().tobytes()

    def save_png(self, filepath: str) -> None:
        """Save the last frame as an RGBA PNG.

        Raises:
            RuntimeError: If no frame has been rendered yet.
        """
        save_png_from_array(self.get_surface(), filepath)

    @staticmethod
    def buffer_to_image(buffer: npt.NDArray[np.float32], width: int, height: int) -> npt.NDArray[np.float32]:
        """Reorder a flat buffer from render_buffer() into top-left image rows."""
        return buffer_to_top_left(buffer, width, height)

    def __repr__(self) -> str:
        """Return a string representation of the renderer state."""
        return (
            f"RaytracingRenderer(width={self.width}, height={self.height}, "
            f"tile={self.config.tile_width}x{self.config.tile_height})"
        )
