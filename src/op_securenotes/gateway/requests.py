"""Pending request tracking.

Host triggers are plain synchronous callbacks. They hand engine coroutines
to a RequestTracker, which schedules them on the running loop, keys them by
an opaque id and forgets them once they complete.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import uuid
from functools import partial
from typing import Any, Awaitable, Callable, Optional

logger = logging.getLogger(__name__)

CompletionCallback = Callable[[Any], None]


class RequestTracker:
    """Registry of in-flight asynchronous requests.

    Completion order across requests is not guaranteed.

    Example:
        >>> tracker = RequestTracker()
        >>> request_id = tracker.submit(engine.save(document_id), callback=print)
        >>> await tracker.drain()
    """

    def __init__(self) -> None:
        self._pending: dict[str, asyncio.Future] = {}

    def submit(
        self,
        awaitable: Awaitable[Any],
        callback: Optional[CompletionCallback] = None,
    ) -> str:
        """Schedule an awaitable on the running loop.

        Args:
            awaitable: Coroutine or future to run
            callback: Called with the result on successful completion

        Returns:
            Opaque request id

        Raises:
            RuntimeError: If no event loop is running (a coroutine passed in
                is closed first)
        """
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            if inspect.iscoroutine(awaitable):
                awaitable.close()
            raise
        request_id = uuid.uuid4().hex
        future = asyncio.ensure_future(awaitable)
        self._pending[request_id] = future
        future.add_done_callback(partial(self._complete, request_id, callback))
        logger.debug(f"Request {request_id[:8]} submitted ({len(self._pending)} pending)")
        return request_id

    def _complete(
        self,
        request_id: str,
        callback: Optional[CompletionCallback],
        future: asyncio.Future,
    ) -> None:
        self._pending.pop(request_id, None)
        if future.cancelled():
            logger.debug(f"Request {request_id[:8]} cancelled")
            return
        exc = future.exception()
        if exc is not None:
            logger.error(f"Request {request_id[:8]} failed: {exc}", exc_info=exc)
            return
        if callback is not None:
            callback(future.result())

    def is_pending(self, request_id: str) -> bool:
        return request_id in self._pending

    @property
    def pending(self) -> list[str]:
        """Ids of requests that have not completed yet."""
        return list(self._pending)

    def __len__(self) -> int:
        return len(self._pending)

    async def drain(self) -> None:
        """Wait until every pending request, including ones submitted meanwhile, is done."""
        while self._pending:
            await asyncio.gather(*list(self._pending.values()), return_exceptions=True)
            # let done-callbacks run so completed ids leave the table
            await asyncio.sleep(0)


__all__ = ["CompletionCallback", "RequestTracker"]
