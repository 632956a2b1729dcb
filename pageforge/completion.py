"""Single-shot completion handles for callback-style async handlers."""

from __future__ import annotations

import asyncio
import inspect
import logging
import threading
from collections.abc import Callable
from typing import Any

from pageforge.errors import CompletionError, as_exception

_logger = logging.getLogger(__name__)

_UNSET = object()


class Completion:
    """Settles an asyncio future exactly once.

    Handlers receive an instance and call ``resolve(value)`` or
    ``reject(failure)``, or call it Node-style as ``done(failure, value)``
    where a falsy failure (``None``, ``""``, ``0``, ``False``) means success.
    Settling twice raises :class:`CompletionError` at the second call site;
    the first outcome stands. Safe to settle from another thread.
    """

    def __init__(
        self,
        label: str,
        loop: asyncio.AbstractEventLoop | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.label = label
        self._logger = logger or _logger
        self._loop = loop or asyncio.get_running_loop()
        self._future: asyncio.Future[Any] = self._loop.create_future()
        self._lock = threading.Lock()
        self._settled = False

    def __repr__(self) -> str:
        state = "settled" if self._settled else "pending"
        return f"Completion({self.label!r}, {state})"

    @property
    def settled(self) -> bool:
        return self._settled

    def __call__(self, failure: Any = None, value: Any = None) -> None:
        if failure:
            self.reject(failure)
        else:
            self.resolve(value)

    def resolve(self, value: Any = None) -> None:
        self._settle(value, _UNSET)

    def reject(self, failure: Any) -> None:
        self._settle(_UNSET, failure)

    def _settle(self, value: Any, failure: Any) -> None:
        with self._lock:
            if self._settled:
                self._logger.error("Completion for %s settled more than once", self.label)
                raise CompletionError(self.label)
            self._settled = True
        if _in_loop_thread(self._loop):
            self._apply(value, failure)
        else:
            self._loop.call_soon_threadsafe(self._apply, value, failure)

    def _apply(self, value: Any, failure: Any) -> None:
        if self._future.done():
            # wait() was cancelled before the outcome arrived
            return
        if failure is not _UNSET:
            self._future.set_exception(as_exception(failure))
        else:
            self._future.set_result(value)

    async def wait(self) -> Any:
        """Wait for the outcome; raises the rejection failure."""
        return await self._future


def _in_loop_thread(loop: asyncio.AbstractEventLoop) -> bool:
    try:
        return asyncio.get_running_loop() is loop
    except RuntimeError:
        return False


async def call_async_handler(
    label: str, handler: Callable[..., Any], *args: Any, logger: logging.Logger | None = None
) -> Any:
    """Invoke an async handler and return what it delivers.

    Coroutine functions are awaited with ``args``. Any other callable is
    treated as callback style and receives a :class:`Completion` as its
    last argument; if it happens to return an awaitable, that is awaited
    before waiting on the completion.
    """
    if inspect.iscoroutinefunction(handler):
        return await handler(*args)

    done = Completion(label, logger=logger)
    returned = handler(*args, done)
    if inspect.isawaitable(returned):
        await returned
    return await done.wait()
