"""Preview module for rendered output.

Components:
    export: Frame buffer to image conversion and PNG export

Example:
    >>> from src.raycaster.preview import PngObserver
    >>> observer = PngObserver("output.png", width=320, height=240)
"""

from src.raycaster.preview.export import (
    PngObserver,
    buffers_to_image,
    compute_rmse,
    save_png_from_buffers,
)

__all__ = [
    "PngObserver",
    "buffers_to_image",
    "save_png_from_buffers",
    "compute_rmse",
]
