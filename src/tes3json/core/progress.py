"""Progress sinks: where the engine reports how far a conversion got.

The engine only ever calls ``send(value)``. Values are 33, 66 and 100 on the
way to success, or a single -1 when the conversion fails.
"""

import queue
from abc import ABC, abstractmethod
from typing import Callable, Iterator, Optional

from tes3json.core.errors import SinkError
from tes3json.core.models import PROGRESS_DONE, PROGRESS_FAILED, ConversionOutcome


class ProgressSink(ABC):
    @abstractmethod
    def send(self, value: float) -> None:
        """Deliver one progress value. Raise SinkError if it cannot be delivered."""
        pass


class QueueSink(ProgressSink):
    """Single-producer/single-consumer channel backed by ``queue.Queue``."""

    def __init__(self, q: Optional["queue.Queue[float]"] = None):
        self.queue: "queue.Queue[float]" = q if q is not None else queue.Queue()
        self._closed = False

    def send(self, value: float) -> None:
        if self._closed:
            raise SinkError("Progress channel is closed")
        self.queue.put(value)

    def close(self) -> None:
        self._closed = True

    def poll(self, timeout: Optional[float] = None) -> Optional[float]:
        """Next value, or None if nothing arrived in time (immediately if no timeout)."""
        try:
            if timeout is None:
                return self.queue.get_nowait()
            return self.queue.get(timeout=timeout)
        except queue.Empty:
            return None

    def drain(self, timeout: Optional[float] = None) -> Iterator[float]:
        """Yield values until a terminal one (100 or -1) arrives.

        ``timeout`` bounds the wait for each value; ``queue.Empty`` is raised
        when it runs out.
        """
        while True:
            value = self.queue.get(timeout=timeout)
            yield value
            if value in (PROGRESS_DONE, PROGRESS_FAILED):
                return


class CallbackSink(ProgressSink):
    def __init__(self, callback: Callable[[float], None]):
        self.callback = callback

    def send(self, value: float) -> None:
        try:
            self.callback(value)
        except Exception as e:
            raise SinkError(f"Progress callback failed: {e}") from e


class RecordingSink(ProgressSink):
    """Keeps every value it gets. Handy in tests and for batch summaries."""

    def __init__(self) -> None:
        self.outcome = ConversionOutcome()

    @property
    def values(self) -> list[float]:
        return list(self.outcome.signals)

    def send(self, value: float) -> None:
        self.outcome.signals.append(value)
