"""Frame producer driving a complete render request.

This module provides RayCasterProducer, which turns a render request into
three channel buffers:

- Builds the viewport basis from eye, view, and view-up
- Allocates fresh frame buffers sized width x height
- Runs the row scheduler, sequentially or on a shared thread pool
- Hands the buffers and the request ID to the observer exactly once

A failed render never reaches the observer. One producer serves one request
at a time; an overlapping produce() call on the same instance is rejected.
render() takes no such guard, and concurrent render() calls share one pool.

Per-pixel work is pure Python, so the global interpreter lock serializes the
pool's threads. Multithreaded mode produces the same image as single-threaded
mode but should not be expected to render faster on CPython.

Example:
    >>> from src.raycaster.core.producer import RayCasterProducer
    >>> from src.raycaster.scene.demo import create_demo_scene
    >>>
    >>> manager, camera = create_demo_scene()
    >>> with RayCasterProducer(manager.build()) as producer:
    ...     producer.produce(
    ...         camera.eye, camera.view, camera.view_up,
    ...         camera.horizontal, camera.vertical,
    ...         320, 240, request_id=1, observer=observer,
    ...     )
"""

from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Protocol

import numpy as np
import numpy.typing as npt

from src.raycaster.camera.viewport import CameraView, Viewport, setup_viewport, validate_dimensions
from src.raycaster.core.config import RenderConfig
from src.raycaster.core.errors import RaycasterError, RenderError
from src.raycaster.core.integrator import trace_pixel
from src.raycaster.core.scheduler import BufferSlice, FrameBuffers, RowScheduler
from src.raycaster.core.vector import Point3D, Vector3
from src.raycaster.scene.intersection import SceneLike

logger = logging.getLogger(__name__)


class ResultObserver(Protocol):
    """Receiver of finished frames."""

    def accept_result(
        self,
        red: npt.NDArray[np.uint8],
        green: npt.NDArray[np.uint8],
        blue: npt.NDArray[np.uint8],
        request_id: int,
    ) -> None:
        """Accept the channel buffers of the render identified by request_id."""


class RayCasterProducer:
    """Renders a fixed scene for any camera on request.

    Attributes:
        scene: The scene rendered by every request.
        config: Shading and scheduling configuration.
    """

    def __init__(self, scene: SceneLike, config: RenderConfig | None = None) -> None:
        """Initialize the producer.

        Args:
            scene: The scene to render. It must not change while a render
                is in progress.
            config: Render configuration; defaults to RenderConfig().
        """
        self.scene = scene
        self.config = config if config is not None else RenderConfig()
        self._pool: ThreadPoolExecutor | None = None
        self._busy = threading.Lock()
        self._pool_lock = threading.Lock()

    @property
    def multithreading(self) -> bool:
        return self.config.multithreading

    def _get_pool(self) -> ThreadPoolExecutor:
        # render() may be called from several threads at once
        with self._pool_lock:
            if self._pool is None:
                self._pool = ThreadPoolExecutor(
                    max_workers=self.config.resolved_workers(),
                    thread_name_prefix="raycaster",
                )
            return self._pool

    def produce(
        self,
        eye: Point3D,
        view: Point3D,
        view_up: Vector3,
        horizontal: float,
        vertical: float,
        width: int,
        height: int,
        request_id: int,
        observer: ResultObserver,
    ) -> None:
        """Render one frame and deliver it to the observer.

        Args:
            eye: Observer position.
            view: Point at the center of the screen.
            view_up: Approximate up direction.
            horizontal: Screen width in world units.
            vertical: Screen height in world units.
            width: Image width in pixels (at least 2).
            height: Image height in pixels (at least 2).
            request_id: Identifier echoed back to the observer unchanged.
            observer: Receives the (red, green, blue) buffers on success.

        Raises:
            RenderConfigurationError: If the dimensions or extents are invalid.
            DegenerateGeometryError: If the camera or scene geometry is degenerate.
            RenderError: If another render is running on this producer, or a
                leaf task failed for any other reason.
        """
        validate_dimensions(width, height)
        if not self._busy.acquire(blocking=False):
            raise RenderError("A render is already in progress on this producer")
        try:
            buffers = self.render(
                CameraView(eye=eye, view=view, view_up=view_up, horizontal=horizontal, vertical=vertical),
                width,
                height,
            )
        finally:
            self._busy.release()

        observer.accept_result(buffers.red, buffers.green, buffers.blue, request_id)
        logger.debug("Observer notified for request %s", request_id)

    def render(self, camera: CameraView, width: int, height: int) -> FrameBuffers:
        """Render one frame and return its buffers.

        This is the part of produce() that does not involve the observer.

        Raises:
            RenderConfigurationError: If the dimensions or extents are invalid.
            DegenerateGeometryError: If the camera or scene geometry is degenerate.
            RenderError: If a leaf task failed for any other reason.
        """
        viewport = setup_viewport(camera, width, height)
        buffers = FrameBuffers(width, height)
        mode = "multithreaded" if self.multithreading else "single-threaded"
        logger.info("Starting %s render of %dx%d pixels", mode, width, height)
        start_time = time.perf_counter()

        scheduler = RowScheduler(
            leaf_rows=self.config.leaf_rows,
            executor=self._get_pool() if self.multithreading else None,
        )

        def render_slice(buffer_slice: BufferSlice) -> None:
            self._render_slice(buffer_slice, viewport)

        try:
            scheduler.run(buffers, render_slice, 0, height)
        except RaycasterError:
            raise
        except Exception as e:
            raise RenderError(f"Render of {width}x{height} frame failed: {e}") from e

        elapsed = time.perf_counter() - start_time
        logger.info("Finished %s render in %.3fs", mode, elapsed)
        return buffers

    def _render_slice(self, buffer_slice: BufferSlice, viewport: Viewport) -> None:
        """Compute every pixel of one leaf span."""
        scene = self.scene
        config = self.config
        eye = viewport.eye
        for y in range(buffer_slice.span.y_min, buffer_slice.span.y_max):
            row = [
                trace_pixel(scene, viewport.primary_ray(x, y), eye, config)
                for x in range(viewport.width)
            ]
            buffer_slice.write_row(y, row)

    def close(self) -> None:
        """Shut down the thread pool, if one was started."""
        with self._pool_lock:
            pool, self._pool = self._pool, None
        if pool is not None:
            pool.shutdown(wait=True)

    def __enter__(self) -> RayCasterProducer:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def __repr__(self) -> str:
        return (
            f"RayCasterProducer(primitives={len(self.scene.primitives)}, "
            f"lights={len(self.scene.lights)}, multithreading={self.multithreading})"
        )
