"""Fixed-interval polling as an explicit, cancellable task.

Every tick spawns a fetch and goes back to sleep without waiting for it, so
a slow fetch can finish after a newer one and overwrite its result. Nothing
is retried: a failed fetch, or a result handler that raises, is reported
through on_error and the next tick tries again.
stop() cancels the timer together with any fetch still in flight.
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any

from storefront.config import get_settings


class StatusPoller:
    def __init__(
        self,
        fetch: Callable[[], Awaitable[Any]],
        on_result: Callable[[Any], None],
        on_error: Callable[[Exception], None],
        interval: float | None = None,
    ) -> None:
        self.fetch = fetch
        self.on_result = on_result
        self.on_error = on_error
        self.interval = interval if interval is not None else get_settings().poll_interval
        self._timer: asyncio.Task | None = None
        self._in_flight: set[asyncio.Task] = set()

    @property
    def running(self) -> bool:
        return self._timer is not None and not self._timer.done()

    def start(self) -> None:
        """Start polling; the first fetch fires immediately."""
        if self.running:
            return
        self._timer = asyncio.create_task(self._tick_forever())

    async def stop(self) -> None:
        tasks = [t for t in (self._timer, *self._in_flight) if t is not None and not t.done()]
        self._timer = None
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._in_flight.clear()

    async def __aenter__(self) -> "StatusPoller":
        self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.stop()

    async def _tick_forever(self) -> None:
        while True:
            task = asyncio.create_task(self._fetch_once())
            self._in_flight.add(task)
            task.add_done_callback(self._in_flight.discard)
            await asyncio.sleep(self.interval)

    async def _fetch_once(self) -> None:
        try:
            result = await self.fetch()
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            self.on_error(exc)
            return

        try:
            self.on_result(result)
        except Exception as exc:
            self.on_error(exc)
