from __future__ import annotations

"""Bounded-concurrency mapping over a known list of items.

`map_bounded` runs min(concurrency, len(items)) worker coroutines that pull indexes
from a shared cursor. The cursor is read and advanced with no await in
between, so two workers can never claim the same index on the event loop.
Results are stored by index, so output order always follows input order.

The mapper does not catch anything: a worker that raises fails the whole
call, and the remaining workers are cancelled and awaited before the error
propagates. Callers that need per-item isolation convert failures into
values inside `worker`.
"""

import asyncio
from typing import Awaitable, Callable, List, Sequence, TypeVar

T = TypeVar('T')
R = TypeVar('R')


async def map_bounded(
    items: Sequence[T],
    worker: Callable[[T], Awaitable[R]],
    concurrency: int = 10,
) -> List[R]:
    if concurrency < 1:
        raise ValueError(f'concurrency must be >= 1, got {concurrency}')

    results: List[R] = [None] * len(items)  # type: ignore[list-item]
    cursor = 0

    async def _run() -> None:
        nonlocal cursor
        while cursor < len(items):
            i = cursor
            cursor += 1
            results[i] = await worker(items[i])

    tasks = [asyncio.ensure_future(_run()) for _ in range(min(concurrency, len(items)))]
    try:
        await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise
    return results
