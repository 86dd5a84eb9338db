import asyncio
from typing import Awaitable, Callable

from loguru import logger


class Autosaver:
    """Debounces edits into a single save after a quiet period.

    Every ``touch()`` restarts the timer. When it fires, ``save`` runs in its
    own task; later edits never cancel a save that is already running. A
    failed save is not retried until the next edit fires the timer again.
    """

    def __init__(self, save: Callable[[], Awaitable[None]], delay: float = 1.0):
        self.save = save
        self.delay = delay
        self._timer: asyncio.Task | None = None
        self._inflight: set[asyncio.Task] = set()

    @property
    def pending(self) -> bool:
        return self._timer is not None and not self._timer.done()

    def touch(self) -> None:
        self.cancel()
        self._timer = asyncio.create_task(self._countdown())

    def cancel(self) -> None:
        if self._timer is not None and not self._timer.done():
            self._timer.cancel()
        self._timer = None

    async def _countdown(self) -> None:
        await asyncio.sleep(self.delay)
        self._timer = None
        task = asyncio.create_task(self._run())
        self._inflight.add(task)
        task.add_done_callback(self._inflight.discard)

    async def _run(self) -> None:
        try:
            await self.save()
        except Exception:
            logger.exception("autosave failed")

    async def flush(self) -> None:
        """Skip the remaining quiet period and save now."""
        self.cancel()
        await self.wait_idle()
        await self._run()

    async def wait_idle(self) -> None:
        while self.pending or self._inflight:
            if self.pending:
                try:
                    await self._timer
                except asyncio.CancelledError:
                    pass
            if self._inflight:
                await asyncio.gather(*list(self._inflight), return_exceptions=True)

    async def close(self) -> None:
        self.cancel()
        await self.wait_idle()
