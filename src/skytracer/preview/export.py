"""Conversion and export of rendered frames.

Kernel surfaces are float32 RGBA with a bottom-left origin. Image files and
most image libraries expect rows from the top, so every conversion here flips
the rows on the way out.

Supported formats:
    - PNG (8-bit RGBA via Pillow)

Example:
    >>> from src.skytracer.preview.export import save_png_from_array
    >>> save_png_from_array(surface, "out.png")
"""

from __future__ import annotations

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage


def surface_to_top_left(surface: npt.NDArray[np.float32]) -> npt.NDArray[np.float32]:
    """Reorder a (width, height, 4) surface into (height, width, 4) image rows.

    Args:
        surface: Surface indexed [x, y] with y = 0 at the bottom row.

    Returns:
        Array indexed [row, column] with row 0 at the top of the image.
    """
    # Transpose from (width, height, 4) to (height, width, 4)
    image = np.transpose(surface, (1, 0, 2))
    return np.ascontiguousarray(np.flipud(image))


def buffer_to_top_left(
    buffer: npt.NDArray[np.float32],
    width: int,
    height: int,
) -> npt.NDArray[np.float32]:
    """Reorder a flat (width * height, 4) buffer into (height, width, 4) image rows.

    Args:
        buffer: Buffer indexed x + y * width with y = 0 at the bottom row.
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        Array indexed [row, column] with row 0 at the top of the image.

    Raises:
        ValueError: If the buffer does not hold width * height pixels.
    """
    if buffer.shape != (width * height, 4):
        raise ValueError(
            f"Buffer shape {buffer.shape} does not match a {width}x{height} RGBA image"
        )
    return np.ascontiguousarray(np.flipud(buffer.reshape(height, width, 4)))


def to_rgba8(image: npt.NDArray[np.float32]) -> npt.NDArray[np.uint8]:
    """Convert float RGBA to 8-bit normalized RGBA.

    Values are clamped to [0, 1] and rounded to the nearest of the 256
    levels, the same conversion a GPU applies when storing to an
    rgba8unorm texture.

    Args:
        image: Float image of any shape whose last axis is RGBA.

    Returns:
        uint8 array of the same shape.
    """
    clamped = np.clip(image, 0.0, 1.0)
    return np.round(clamped * 255.0).astype(np.uint8)


def save_png_from_array(surface: npt.NDArray[np.float32], filepath: str) -> None:
    """Save a (width, height, 4) float surface as an RGBA PNG.

    Args:
        surface: Kernel output surface with a bottom-left origin.
        filepath: Output file path (should end in .png).
    """
    image_uint8 = to_rgba8(surface_to_top_left(surface))

    # Save using Pillow; (H, W, 4) uint8 is read as RGBA
    pil_image = PILImage.fromarray(image_uint8)
    pil_image.save(filepath)


def compute_rmse(
    image_a: npt.NDArray[np.floating[npt.NBitBase]],
    image_b: npt.NDArray[np.floating[npt.NBitBase]],
) -> float:
    """Compute root mean squared error between two images.

    Args:
        image_a: First image array.
        image_b: Second image array (must have same shape as image_a).

    Returns:
        RMSE value (lower is more similar).

    Raises:
        ValueError: If image shapes don't match.
    """
    if image_a.shape != image_b.shape:
        raise ValueError(
            f"Image shapes must match: {image_a.shape} vs {image_b.shape}"
        )

    diff = image_a.astype(np.float64) - image_b.astype(np.float64)
    return float(np.sqrt(np.mean(diff**2)))
