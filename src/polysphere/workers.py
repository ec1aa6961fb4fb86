"""Index-partitioned fan-out over a thread pool."""

from __future__ import annotations

import concurrent.futures
from typing import Callable, List, Optional, TypeVar

T = TypeVar("T")


def map_indexed(
    fn: Callable[[int], T],
    count: int,
    workers: Optional[int] = None,
) -> List[T]:
    """Return ``[fn(0), fn(1), …, fn(count - 1)]``.

    With *workers* > 1 the calls run on a thread pool; each result lands
    in its own slot of a pre-sized list, so the output order never
    depends on completion order.  The first exception raised by *fn*
    propagates.
    """
    if workers is None or workers <= 1 or count <= 1:
        return [fn(i) for i in range(count)]

    results: List[Optional[T]] = [None] * count
    with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as executor:
        futures = {executor.submit(fn, i): i for i in range(count)}
        for future in concurrent.futures.as_completed(futures):
            results[futures[future]] = future.result()
    return results  # type: ignore[return-value]
