"""Concurrent image warm-up.

Every distinct image is resolved (inspected, pulled if missing) by its own
task on a thread pool before any session factory referencing it is built.
The caller blocks until all tasks finish or one fails:

- the first failure (in submission order among finished tasks) is re-raised
  unchanged, pending tasks are cancelled, running ones are left to finish
  and their results are dropped;
- ``KeyboardInterrupt`` while waiting surfaces as
  :class:`~sessiongrid.core.errors.InterruptedOperationError`.

There is no timeout here; bounding a stalled pull is the driver's job.
"""

from __future__ import annotations

from collections.abc import Iterable
from concurrent.futures import FIRST_EXCEPTION, Executor, Future, ThreadPoolExecutor, wait

from sessiongrid.core.errors import InterruptedOperationError
from sessiongrid.core.logging import get_logger
from sessiongrid.docker.client import DockerDriver, Image

logger = get_logger(__name__)


def load_images(
    driver: DockerDriver,
    names: Iterable[str],
    executor: Executor | None = None,
) -> dict[str, Image]:
    """Resolve every image in ``names`` concurrently.

    Parameters
    ----------
    driver
        Driver whose ``get_image`` resolves one image.
    names
        Image names; duplicates are resolved once.
    executor
        Shared worker pool. A private pool sized to the number of images
        is used (and shut down) when omitted.

    Returns
    -------
    dict[str, Image]
        Resolved images keyed by name, in first-seen order.
    """
    unique = list(dict.fromkeys(names))
    if not unique:
        return {}

    pool = executor or ThreadPoolExecutor(
        max_workers=len(unique), thread_name_prefix="docker-image"
    )
    logger.info("docker.images.loading", images=unique)
    try:
        futures: dict[Future[Image], str] = {
            pool.submit(driver.get_image, name): name for name in unique
        }
        try:
            done, not_done = wait(futures, return_when=FIRST_EXCEPTION)
        except KeyboardInterrupt as e:
            for future in futures:
                future.cancel()
            raise InterruptedOperationError(
                "Interrupted while waiting for docker images", cause=e
            ) from e
    finally:
        if executor is None:
            pool.shutdown(wait=False, cancel_futures=True)

    failed = [f for f in futures if f in done and f.exception() is not None]
    if failed:
        for future in not_done:
            future.cancel()
        error = failed[0].exception()
        logger.error(
            "docker.images.failed",
            image=futures[failed[0]],
            error=str(error),
            pending=sorted(futures[f] for f in not_done),
        )
        raise error

    logger.info("docker.images.loaded", count=len(futures))
    return {name: future.result() for future, name in futures.items()}
