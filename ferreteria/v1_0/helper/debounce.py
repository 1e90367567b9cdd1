import asyncio
from typing import Awaitable, Callable, Generic, Optional, TypeVar, Union

T = TypeVar("T")

Callback = Callable[[T], Union[None, Awaitable[None]]]


class Debouncer(Generic[T]):
    """
    Runs `callback(value)` once input has been quiet for `delay` seconds.

    Each `__call__` replaces the pending value and restarts the timer.
    `cancel()` drops the pending call; a cancelled value never fires.
    """

    def __init__(self, callback: Callback, delay: float) -> None:
        self._callback = callback
        self.delay = delay
        self._task: Optional[asyncio.Task] = None

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    def __call__(self, value: T) -> None:
        self.cancel()
        self._task = asyncio.get_running_loop().create_task(self._fire(value))

    async def _fire(self, value: T) -> None:
        await asyncio.sleep(self.delay)
        result = self._callback(value)
        if asyncio.iscoroutine(result):
            await result

    def cancel(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    async def flush(self) -> None:
        """Wait for the pending call, if any."""
        task = self._task
        if task is None:
            return
        try:
            await task
        except asyncio.CancelledError:
            if not task.cancelled():
                raise
