"""Multithreaded rendering by sample partitioning.

The total per-pixel sample budget is split evenly across N workers. Every
worker renders the complete image at ``samples_per_pixel_total / N``
samples per pixel into its own private buffer, and the N buffers are
averaged once all workers have finished. Workers share the scene and the
camera read-only and meet only at the progress tracker's lock.
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING

from spheretrace.core.integrator import sample_pixel
from spheretrace.core.progress import RenderProgress
from spheretrace.image.buffer import ImageBuffer, pixel_from_samples

if TYPE_CHECKING:
    from spheretrace.camera.thin_lens import ThinLensCamera
    from spheretrace.config import RenderConfig
    from spheretrace.scene.world import World

logger = logging.getLogger(__name__)


def render_worker(
    world: World,
    camera: ThinLensCamera,
    config: RenderConfig,
    worker_index: int,
    image: ImageBuffer,
    progress: RenderProgress,
) -> ImageBuffer:
    """Render the full image at this worker's share of the sample budget.

    Rows are scanned from ``height - 1`` (the top of the image, since v
    grows upward) down to 0, so pixels are appended to ``image`` top row
    first, left to right. Progress is reported after each row.

    Args:
        world: The scene, shared read-only.
        camera: The camera, shared read-only.
        config: Render settings.
        worker_index: Index of this worker, 0 <= worker_index < worker_count.
        image: Empty buffer owned by this worker.
        progress: Shared progress tracker.

    Returns:
        The filled ``image``.
    """
    width = config.image_width
    height = config.image_height
    samples = config.samples_per_worker

    if (image.width, image.height) != (width, height):
        raise ValueError(
            f"image buffer is {image.width}x{image.height}, expected {width}x{height}"
        )

    logger.debug("Worker %d started (%d samples per pixel)", worker_index, samples)
    for j in range(height - 1, -1, -1):
        for i in range(width):
            color_sum = sample_pixel(
                world, camera, i, j, width, height, samples, config.max_depth
            )
            image.push_pixel(pixel_from_samples(color_sum, samples))
        progress.update(worker_index, j)

    logger.debug("Worker %d finished", worker_index)
    return image


def render(
    world: World,
    camera: ThinLensCamera,
    config: RenderConfig,
    progress: RenderProgress | None = None,
) -> ImageBuffer:
    """Render the scene with ``config.worker_count`` threads.

    Args:
        world: The scene to render.
        camera: The camera to render through.
        config: Render settings.
        progress: Progress tracker for ``config.worker_count`` workers.
            A new one writing to stderr is created when omitted.

    Returns:
        The average of all worker images.

    Raises:
        ValueError: If the progress tracker was built for a different
            number of workers.
        Exception: Any exception raised inside a worker is re-raised here.
    """
    worker_count = config.worker_count
    if progress is None:
        progress = RenderProgress(worker_count)
    elif progress.worker_count != worker_count:
        raise ValueError(
            f"progress tracks {progress.worker_count} workers, config has {worker_count}"
        )

    logger.info(
        "Rendering %dx%d with %d workers, %d samples per pixel each",
        config.image_width,
        config.image_height,
        worker_count,
        config.samples_per_worker,
    )
    start_time = time.perf_counter()

    images = [ImageBuffer(config.image_width, config.image_height) for _ in range(worker_count)]
    with ThreadPoolExecutor(max_workers=worker_count, thread_name_prefix="render") as executor:
        futures = [
            executor.submit(render_worker, world, camera, config, k, images[k], progress)
            for k in range(worker_count)
        ]
        # Joining through result() re-raises worker exceptions
        for future in futures:
            future.result()

    result = ImageBuffer.average(images)
    logger.info("Render finished in %.2f s", time.perf_counter() - start_time)
    return result
