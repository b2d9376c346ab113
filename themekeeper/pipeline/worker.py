"""Single-consumer event queue decoupling webhook acceptance from processing.

The HTTP resource submits events into a bounded FIFO queue; one daemon
thread drains it in arrival order. Because there is exactly one consumer,
mutations and commits for every shop are serialized and no per-shop locking
is needed. A full queue blocks ``submit``, which pushes back on webhook
callers.

Usage
-----
Run a worker around a processor::

    worker = EventWorker(processor, capacity=10)
    worker.start()
    worker.submit(event)
    worker.join()  # wait until everything submitted so far is processed
    worker.stop()

"""

from __future__ import annotations

import queue
import threading
import typing as typ

from themekeeper.logging import get_logger, log_info

from .observability import PipelineEventLogger

if typ.TYPE_CHECKING:
    from themekeeper.events import ThemeEvent

    from .processor import ProcessingResult

DEFAULT_QUEUE_CAPACITY = 10

logger = get_logger(__name__)

_STOP = object()


class EventHandler(typ.Protocol):
    """Anything that can process a dequeued event."""

    def process(self, event: ThemeEvent) -> ProcessingResult:
        """Process ``event`` to completion."""
        ...


class EventWorker:
    """Own the event queue and its single consumer thread."""

    def __init__(
        self,
        processor: EventHandler,
        *,
        capacity: int = DEFAULT_QUEUE_CAPACITY,
        event_logger: PipelineEventLogger | None = None,
    ) -> None:
        """Create a stopped worker with a queue of ``capacity`` events."""
        if capacity < 1:
            msg = f"queue capacity must be positive, got: {capacity}"
            raise ValueError(msg)
        self._processor = processor
        self._queue: queue.Queue[object] = queue.Queue(maxsize=capacity)
        self._event_logger = event_logger or PipelineEventLogger()
        self._thread: threading.Thread | None = None
        self._lock = threading.Lock()

    @property
    def is_running(self) -> bool:
        """Return ``True`` while the consumer thread is alive."""
        thread = self._thread
        return thread is not None and thread.is_alive()

    @property
    def pending(self) -> int:
        """Return the approximate number of queued events."""
        return self._queue.qsize()

    def start(self) -> None:
        """Start the consumer thread; calling it again is a no-op."""
        with self._lock:
            if self.is_running:
                return
            self._thread = threading.Thread(
                target=self._run, name="themekeeper-worker", daemon=True
            )
            self._thread.start()
        log_info(logger, "Event worker started (capacity=%d)", self._queue.maxsize)

    def submit(self, event: ThemeEvent) -> None:
        """Enqueue ``event``, blocking while the queue is full."""
        self._queue.put(event)
        self._event_logger.log_event_accepted(event)

    def join(self) -> None:
        """Block until every event submitted so far has been processed."""
        self._queue.join()

    def stop(self, timeout: float | None = None) -> None:
        """Ask the consumer to exit after draining queued events and wait."""
        thread = self._thread
        if thread is None or not thread.is_alive():
            return
        self._queue.put(_STOP)
        thread.join(timeout)
        log_info(logger, "Event worker stopped")

    def _run(self) -> None:
        while True:
            item = self._queue.get()
            try:
                if item is _STOP:
                    return
                self._process(typ.cast("ThemeEvent", item))
            finally:
                self._queue.task_done()

    def _process(self, event: ThemeEvent) -> None:
        try:
            self._processor.process(event)
        except Exception as exc:  # noqa: BLE001 - the consumer must outlive any event
            self._event_logger.log_unexpected_error(event, exc)


__all__ = ["DEFAULT_QUEUE_CAPACITY", "EventHandler", "EventWorker"]
