"""Render configuration.

RenderConfig gathers every tunable of the renderer in one frozen dataclass.
The defaults reproduce the classic ray caster: an ambient term of 15 per
channel, a 1e-2 shadow tolerance, and leaves of 16 rows.

Example:
    >>> from src.raycaster.core.config import RenderConfig
    >>> RenderConfig(multithreading=False).leaf_rows
    16
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass

from src.raycaster.core.errors import RenderConfigurationError

# =============================================================================
# Rendering Constants
# =============================================================================

# Ambient intensity added to every channel of every lit-or-not hit
AMBIENT_INTENSITY = 15.0

# Tolerance when comparing the hit-to-light and occluder-to-light distances.
# Absorbs the shadow ray finding the shaded surface itself.
SHADOW_EPSILON = 1e-2

# Rows at or below which the scheduler stops splitting
LEAF_ROWS = 16

# Color of pixels whose primary ray hits nothing
BACKGROUND_COLOR = (0, 0, 0)


@dataclass(frozen=True)
class RenderConfig:
    """Configuration for a RayCasterProducer.

    Attributes:
        multithreading: If True, the row partition tree runs on a shared
            thread pool; otherwise every span runs in the calling thread.
        workers: Thread pool size. None means os.cpu_count().
        leaf_rows: Maximum number of rows a leaf task computes directly.
        ambient: Ambient intensity seeded into every channel of a hit.
        shadow_epsilon: Distance tolerance for the shadow test.
        background: Color of pixels whose primary ray misses everything.
    """

    multithreading: bool = True
    workers: int | None = None
    leaf_rows: int = LEAF_ROWS
    ambient: float = AMBIENT_INTENSITY
    shadow_epsilon: float = SHADOW_EPSILON
    background: tuple[int, int, int] = BACKGROUND_COLOR

    def __post_init__(self) -> None:
        if self.leaf_rows < 1:
            raise RenderConfigurationError(f"leaf_rows must be at least 1, got {self.leaf_rows}")
        if self.workers is not None and self.workers < 1:
            raise RenderConfigurationError(f"workers must be at least 1, got {self.workers}")
        if not math.isfinite(self.ambient) or self.ambient < 0.0:
            raise RenderConfigurationError(f"ambient must be non-negative, got {self.ambient}")
        if not math.isfinite(self.shadow_epsilon) or self.shadow_epsilon < 0.0:
            raise RenderConfigurationError(
                f"shadow_epsilon must be non-negative, got {self.shadow_epsilon}"
            )
        if len(self.background) != 3 or any(not 0 <= c <= 255 for c in self.background):
            raise RenderConfigurationError(
                f"background must be three values in [0, 255], got {self.background}"
            )

    def resolved_workers(self) -> int:
        """Return the thread pool size this configuration asks for."""
        return self.workers if self.workers is not None else (os.cpu_count() or 1)
