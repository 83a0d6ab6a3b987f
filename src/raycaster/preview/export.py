"""Image export utilities for rendered frames.

This module turns the three flat channel buffers delivered by the producer
into an (H, W, 3) image and writes it to disk.

Supported formats:
    - PNG (8-bit RGB via Pillow)

Example:
    >>> from src.raycaster.preview.export import PngObserver
    >>> observer = PngObserver("spheres.png", width=320, height=240)
    >>> producer.produce(..., 320, 240, request_id=1, observer=observer)
    >>> observer.last_request_id
    1
"""

from __future__ import annotations

from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage


def buffers_to_image(
    red: npt.NDArray[np.uint8],
    green: npt.NDArray[np.uint8],
    blue: npt.NDArray[np.uint8],
    width: int,
    height: int,
) -> npt.NDArray[np.uint8]:
    """Assemble flat channel buffers into an RGB image array.

    Args:
        red: Red channel, row-major, length width * height.
        green: Green channel, same layout.
        blue: Blue channel, same layout.
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        Array of shape (height, width, 3) with dtype uint8.

    Raises:
        ValueError: If a buffer length does not equal width * height.
    """
    expected = width * height
    for name, channel in (("red", red), ("green", green), ("blue", blue)):
        if len(channel) != expected:
            raise ValueError(
                f"{name} buffer has {len(channel)} values, expected {expected} "
                f"for a {width}x{height} image"
            )

    image = np.stack([red, green, blue], axis=-1).astype(np.uint8)
    return image.reshape(height, width, 3)


def save_png_from_buffers(
    red: npt.NDArray[np.uint8],
    green: npt.NDArray[np.uint8],
    blue: npt.NDArray[np.uint8],
    width: int,
    height: int,
    filepath: str | Path,
) -> None:
    """Save flat channel buffers as an 8-bit RGB PNG file."""
    image_uint8 = buffers_to_image(red, green, blue, width, height)
    pil_image = PILImage.fromarray(image_uint8)
    pil_image.save(filepath)


def compute_rmse(
    image_a: npt.NDArray[np.generic],
    image_b: npt.NDArray[np.generic],
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


class PngObserver:
    """Result observer that writes every delivered frame to a PNG file.

    Attributes:
        filepath: Destination of the image; overwritten by each delivery.
        width: Image width the frames are expected to have.
        height: Image height the frames are expected to have.
        last_request_id: Request ID of the most recent delivery, or None.
    """

    def __init__(self, filepath: str | Path, width: int, height: int) -> None:
        self.filepath = Path(filepath)
        self.width = width
        self.height = height
        self.last_request_id: int | None = None

    def accept_result(
        self,
        red: npt.NDArray[np.uint8],
        green: npt.NDArray[np.uint8],
        blue: npt.NDArray[np.uint8],
        request_id: int,
    ) -> None:
        save_png_from_buffers(red, green, blue, self.width, self.height, self.filepath)
        self.last_request_id = request_id
