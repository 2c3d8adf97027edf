"""Parallel rendering loop.

Every pixel's color depends only on the (read-only) camera and world, so the
image is split into contiguous row chunks that are rendered independently:

- ``workers == 1``: chunks are rendered in this process, in order.
- ``workers > 1``: a ``multiprocessing.Pool`` is started whose initializer
  receives the camera, world and depth once per worker; chunks are handed out
  with ``imap_unordered`` and each finished block is copied into its own row
  range of the output buffer.

Since each chunk runs the same floating-point operations in either mode, the
output is bit-identical regardless of the number of workers or the order in
which chunks complete.

Example:
    >>> from raytracer.camera.pinhole import PinholeCamera
    >>> from raytracer.core.render import RenderConfig, render_image
    >>> from raytracer.scene.world import default_world
    >>> camera = PinholeCamera(64, 48, 1.0)
    >>> image = render_image(camera, default_world(), RenderConfig(workers=4))
    >>> image.shape
    (48, 64, 3)
"""

from __future__ import annotations

import logging
import os
import time
from collections.abc import Callable
from dataclasses import dataclass
from multiprocessing import Pool
from typing import TYPE_CHECKING, Any

import numpy as np
import numpy.typing as npt

if TYPE_CHECKING:
    from raytracer.camera.pinhole import PinholeCamera
    from raytracer.scene.world import World

logger = logging.getLogger(__name__)

# Default recursion budget for reflection and refraction
DEFAULT_MAX_DEPTH = 5

# Callback receives (rows_completed, total_rows)
ProgressCallback = Callable[[int, int], None]

# Chunks handed to each worker, for load balancing between cheap and costly rows
CHUNKS_PER_WORKER = 4


@dataclass
class RenderConfig:
    """Settings for a render.

    Attributes:
        max_depth: Recursion budget for reflection and refraction.
        workers: Number of worker processes. 1 renders in-process; None uses
            every available CPU.
        rows_per_chunk: Rows per unit of work. None picks a size that gives
            each worker about CHUNKS_PER_WORKER chunks.
    """

    max_depth: int = DEFAULT_MAX_DEPTH
    workers: int | None = 1
    rows_per_chunk: int | None = None

    def __post_init__(self) -> None:
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be non-negative, got {self.max_depth}")
        if self.workers is not None and self.workers < 1:
            raise ValueError(f"workers must be at least 1, got {self.workers}")
        if self.rows_per_chunk is not None and self.rows_per_chunk < 1:
            raise ValueError(f"rows_per_chunk must be at least 1, got {self.rows_per_chunk}")

    def resolved_workers(self) -> int:
        if self.workers is None:
            return os.cpu_count() or 1
        return self.workers


def row_chunks(height: int, rows_per_chunk: int) -> list[tuple[int, int]]:
    """Split ``range(height)`` into ``(start, end)`` row ranges."""
    return [(start, min(start + rows_per_chunk, height)) for start in range(0, height, rows_per_chunk)]


def render_rows(
    camera: PinholeCamera,
    world: World,
    row_start: int,
    row_end: int,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> npt.NDArray[np.float64]:
    """Render rows ``[row_start, row_end)`` of the image.

    Returns:
        Array of shape (row_end - row_start, camera.hsize, 3).
    """
    block = np.zeros((row_end - row_start, camera.hsize, 3), dtype=np.float64)
    for y in range(row_start, row_end):
        for x in range(camera.hsize):
            ray = camera.ray_for_pixel(x, y)
            block[y - row_start, x] = world.color_at(ray, max_depth)
    return block


# =============================================================================
# Worker process state (set by the pool initializer)
# =============================================================================

_worker_state: dict[str, Any] = {}


def _init_worker(camera: PinholeCamera, world: World, max_depth: int) -> None:
    _worker_state["camera"] = camera
    _worker_state["world"] = world
    _worker_state["max_depth"] = max_depth


def _render_chunk(chunk: tuple[int, int]) -> tuple[int, int, npt.NDArray[np.float64]]:
    start, end = chunk
    block = render_rows(
        _worker_state["camera"],
        _worker_state["world"],
        start,
        end,
        _worker_state["max_depth"],
    )
    return start, end, block


def render_image(
    camera: PinholeCamera,
    world: World,
    config: RenderConfig | None = None,
    progress: ProgressCallback | None = None,
) -> npt.NDArray[np.float64]:
    """Render the full image seen by ``camera``.

    The world and camera must not be modified while this runs.

    Args:
        camera: The camera producing primary rays.
        world: The scene to render.
        config: Render settings; defaults to RenderConfig().
        progress: Optional callback invoked after each chunk with
            (rows_completed, total_rows).

    Returns:
        Linear RGB image of shape (camera.vsize, camera.hsize, 3) where
        ``image[y, x]`` is the color of pixel (x, y).
    """
    if config is None:
        config = RenderConfig()

    height = camera.vsize
    workers = config.resolved_workers()
    rows_per_chunk = config.rows_per_chunk or max(1, height // (workers * CHUNKS_PER_WORKER))
    chunks = row_chunks(height, rows_per_chunk)

    logger.debug(
        "Rendering %dx%d with %d worker(s), %d chunk(s) of up to %d row(s)",
        camera.hsize,
        height,
        workers,
        len(chunks),
        rows_per_chunk,
    )

    image = np.zeros((height, camera.hsize, 3), dtype=np.float64)
    completed = 0
    start_time = time.perf_counter()

    if workers == 1:
        for start, end in chunks:
            image[start:end] = render_rows(camera, world, start, end, config.max_depth)
            completed += end - start
            if progress is not None:
                progress(completed, height)
    else:
        with Pool(
            processes=workers,
            initializer=_init_worker,
            initargs=(camera, world, config.max_depth),
        ) as pool:
            for start, end, block in pool.imap_unordered(_render_chunk, chunks):
                image[start:end] = block
                completed += end - start
                if progress is not None:
                    progress(completed, height)

    logger.info(
        "Rendered %dx%d in %.2fs",
        camera.hsize,
        height,
        time.perf_counter() - start_time,
    )
    return image
