"""Running tasks in parallel with a bound on concurrency."""

from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Any, Callable, Sequence


def parallel_limit(tasks: Sequence[Callable[[], Any]], limit: int) -> list[Any]:
    """Run ``tasks`` on at most ``limit`` threads and return their results in order.

    The first exception raised by a task is re-raised once running tasks end;
    tasks not yet started are cancelled.
    """
    if not tasks:
        return []
    if limit < 1:
        raise ValueError(f"limit must be at least 1, got {limit}")

    with ThreadPoolExecutor(max_workers=min(limit, len(tasks))) as pool:
        futures = [pool.submit(task) for task in tasks]
        try:
            for future in as_completed(futures):
                future.result()
        except BaseException:
            for future in futures:
                future.cancel()
            raise
        return [future.result() for future in futures]