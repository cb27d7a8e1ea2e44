"""Runs network coroutines off the UI thread and hands results back to it.

A single daemon thread owns an asyncio event loop for the lifetime of the
window. Callers submit a coroutine with a result callback; completion is
relayed through a Qt signal, so callbacks always execute on the thread that
owns the runner.
"""

from __future__ import annotations

import asyncio
from concurrent.futures import Future
import logging
from threading import Thread
from typing import Any, Callable, Coroutine

from PySide6.QtCore import QObject, Signal, Slot

logger = logging.getLogger(__name__)

ResultCallback = Callable[[Any], None]
ErrorCallback = Callable[[BaseException], None]


class AsyncRunner(QObject):
    _completed = Signal(object, object, object)

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._loop = asyncio.new_event_loop()
        self._thread = Thread(target=self._run_loop, name="CdbQuizzAsyncWorker", daemon=True)
        self._completed.connect(self._deliver)
        self._thread.start()

    def _run_loop(self) -> None:
        asyncio.set_event_loop(self._loop)
        self._loop.run_forever()

    def submit(
        self,
        coroutine: Coroutine[Any, Any, Any],
        on_result: ResultCallback,
        on_error: ErrorCallback | None = None,
    ) -> Future:
        future = asyncio.run_coroutine_threadsafe(coroutine, self._loop)

        def relay(done: Future) -> None:
            if done.cancelled():
                return
            error = done.exception()
            self._completed.emit((on_result, on_error), None if error else done.result(), error)

        future.add_done_callback(relay)
        return future

    @Slot(object, object, object)
    def _deliver(self, callbacks: tuple[ResultCallback, ErrorCallback | None], result: Any, error: Any) -> None:
        on_result, on_error = callbacks
        if error is None:
            on_result(result)
            return
        if on_error is not None:
            on_error(error)
        else:
            logger.error("Background task failed: %s", error)

    def shutdown(self) -> None:
        if self._loop.is_running():
            self._loop.call_soon_threadsafe(self._loop.stop)
        self._thread.join(timeout=2)
