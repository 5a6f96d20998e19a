"""Parallel rendering of every frame of a render job."""

import logging
import os
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Callable

from ..errors import FrameError, FrameRenderFailed
from .config import RenderConfig
from .frame_renderer import FrameRenderer
from .progress import ProgressCallback, ProgressCounter
from .rasterizer import Rasterizer

logger = logging.getLogger(__name__)

RendererFactory = Callable[[RenderConfig, Rasterizer | None], FrameRenderer]


def default_worker_count() -> int:
    return os.cpu_count() or 1


def render_all(
    config: RenderConfig,
    rasterizer: Rasterizer | None = None,
    *,
    workers: int | None = None,
    on_progress: ProgressCallback | None = None,
    renderer_factory: RendererFactory = FrameRenderer,
) -> list[Path]:
    """
    Render frames ``[0, frame_count)`` concurrently into ``config.frames_dir``.

    Frames run on a thread pool in no particular order; output order comes
    from the file names alone. The first failure cancels every frame that has
    not started yet, frames already running are allowed to finish, and all
    failures collected by then are raised together.

    Args:
        config: The render job configuration; ``frames_dir`` must exist
        rasterizer: SVG backend shared by all workers
        workers: Worker threads; defaults to the CPU count
        on_progress: Called with ``(completed, total)`` after each rendered frame
        renderer_factory: Builds the frame renderer used by all workers

    Returns:
        Paths of the written frames, ordered by frame index

    Raises:
        FrameRenderFailed: If any frame failed; failures are sorted by frame index
    """
    total = config.frame_count
    max_workers = workers if workers and workers > 0 else default_worker_count()
    renderer = renderer_factory(config, rasterizer)
    counter = ProgressCounter(total, on_progress)
    paths: dict[int, Path] = {}
    failures: list[FrameError] = []

    logger.debug("Rendering %d frames with %d workers", total, max_workers)
    with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="frame") as pool:
        futures = {pool.submit(renderer.render_frame, index): index for index in range(total)}
        try:
            for future in as_completed(futures):
                if future.cancelled():
                    continue
                index = futures[future]
                try:
                    paths[index] = future.result()
                except FrameError as e:
                    if not failures:
                        logger.debug("Frame %d failed, cancelling pending frames", index)
                        _cancel_pending(futures)
                    failures.append(e)
                    continue
                counter.increment()
        except BaseException:
            _cancel_pending(futures)
            raise

    if failures:
        raise FrameRenderFailed(failures, total)
    return [paths[index] for index in range(total)]


def _cancel_pending(futures: dict[Future[Path], int]) -> None:
    for future in futures:
        future.cancel()
