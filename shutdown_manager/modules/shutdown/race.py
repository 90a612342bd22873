"""First-to-settle primitive used to race a hook against its timers."""

import asyncio
from typing import Awaitable, List, TypeVar

T = TypeVar('T')


async def race(*aws: Awaitable[T]) -> T:
    """
    Wait for the first of ``aws`` to settle and return its result.

    If the winner completed with an exception, that exception is raised.
    When several participants are already settled, the earliest argument
    wins.

    Coroutines are wrapped in tasks owned by the race and cancelled once it
    resolves. Futures and tasks are owned by the caller and left untouched,
    so a shared timer can take part in many races.

    Args:
        aws: Participants of the race

    Returns:
        The result of the winning participant
    """
    if not aws:
        raise ValueError("race() needs at least one awaitable")

    futures: List[asyncio.Future] = [asyncio.ensure_future(aw) for aw in aws]
    owned = [future for future, aw in zip(futures, aws) if future is not aw]

    try:
        done, _ = await asyncio.wait(futures, return_when=asyncio.FIRST_COMPLETED)
        winner = next(future for future in futures if future in done)
        return winner.result()
    finally:
        for future in owned:
            if not future.done():
                future.cancel()
