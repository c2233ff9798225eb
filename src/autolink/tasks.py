"""Settle-all fan-out for independent asynchronous work."""

import asyncio
from collections.abc import Awaitable
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Generic
from typing import TypeVar

T = TypeVar("T")


@dataclass
class Outcome(Generic[T]):
    """Result of one settled task: either a value or the error it raised."""

    value: T | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


async def _capture(awaitable: Awaitable[T]) -> Outcome[T]:
    try:
        return Outcome(value=await awaitable)
    except Exception as e:
        return Outcome(error=e)


async def settle(awaitables: Iterable[Awaitable[T]]) -> list[Outcome[T]]:
    """Run awaitables concurrently and wait for every one of them.

    A failing task never cancels its siblings; its exception is captured in
    its Outcome instead.

    Args:
        awaitables: Independent units of work

    Returns:
        One Outcome per awaitable, in input order
    """
    async with asyncio.TaskGroup() as group:
        tasks = [group.create_task(_capture(a)) for a in awaitables]
    return [task.result() for task in tasks]
