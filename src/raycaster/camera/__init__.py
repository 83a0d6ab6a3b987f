"""Camera module for primary ray generation.

Components:
    viewport: Look-at camera description and the screen basis built from it
"""

from .viewport import CameraView, Viewport, setup_viewport, validate_dimensions

__all__ = [
    "CameraView",
    "Viewport",
    "setup_viewport",
    "validate_dimensions",
]
