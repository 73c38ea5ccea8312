from __future__ import annotations

import logging
import queue
import threading
import time
import weakref
from dataclasses import dataclass
from datetime import timedelta
from typing import Callable, Optional, Union

logger = logging.getLogger(__name__)

Clock = Callable[[], float]
ReadLine = Callable[[], str]
TimeLimit = Union[int, float, timedelta]

# Reader threads left blocked after their question was abandoned. They are daemon
# threads and get reclaimed when the process exits.
_abandoned_readers: "weakref.WeakSet[threading.Thread]" = weakref.WeakSet()
_registry_lock = threading.Lock()

# Longest single block on the answer slot. Lock timeouts overflow well below
# float("inf"), so long budgets are waited out in slices of this size.
MAX_WAIT_SECONDS = min(threading.TIMEOUT_MAX, 86400.0)


def outstanding_reads() -> int:
    """Return how many abandoned reads are still blocked waiting for input."""
    with _registry_lock:
        return sum(1 for thread in list(_abandoned_readers) if thread.is_alive())


def limit_to_seconds(limit: TimeLimit) -> float:
    """Normalize a time limit to seconds, rejecting negative budgets."""
    seconds = limit.total_seconds() if isinstance(limit, timedelta) else float(limit)
    if seconds < 0:
        raise ValueError(f"time limit must be non-negative, got {seconds}")
    return seconds


class Deadline:
    """Single point in time bounding the whole session; armed once, never reset."""

    def __init__(self, limit: TimeLimit, clock: Clock = time.monotonic):
        self._clock = clock
        self.expires_at = clock() + limit_to_seconds(limit)

    def remaining(self) -> float:
        return max(0.0, self.expires_at - self._clock())

    def expired(self, at: Optional[float] = None) -> bool:
        """True once the deadline has fired, either now or at the instant `at`."""
        moment = self._clock() if at is None else at
        return moment >= self.expires_at


@dataclass(frozen=True)
class Arrival:
    """What the reader handed back, stamped with the clock reading at completion."""

    answer: Optional[str]  # None => the read failed
    arrived_at: float


class PendingAnswer:
    """
    One in-flight read of user input, tied to a single problem index.

    The read runs on a daemon thread and reports into a single-slot queue. The slot is
    written at most once, with a non-blocking put, and consumed at most once by `wait`.
    After `abandon`, a late result is dropped by the reader thread instead of being
    delivered, so it can never be scored.
    """

    def __init__(self, index: int, read_line: ReadLine, clock: Clock = time.monotonic):
        self.index = index
        self._read_line = read_line
        self._clock = clock
        self._slot: "queue.Queue[Arrival]" = queue.Queue(maxsize=1)
        self._abandoned = threading.Event()
        self._consumed = False
        self._thread = threading.Thread(
            target=self._read, name=f"quiz-answer-{index + 1}", daemon=True
        )

    @property
    def abandoned(self) -> bool:
        return self._abandoned.is_set()

    @property
    def done(self) -> bool:
        """True once the reader thread has returned."""
        return self._thread.ident is not None and not self._thread.is_alive()

    def start(self) -> "PendingAnswer":
        self._thread.start()
        return self

    def _read(self) -> None:
        answer: Optional[str]
        try:
            line = self._read_line()
            answer = None if line is None else str(line)
        except EOFError:
            logger.info("End of input while reading answer to problem %d", self.index + 1)
            answer = None
        except Exception:
            logger.warning("Failed to read answer to problem %d", self.index + 1, exc_info=True)
            answer = None

        arrival = Arrival(answer=answer, arrived_at=self._clock())
        if self._abandoned.is_set():
            logger.debug("Dropping late answer to abandoned problem %d", self.index + 1)
            return
        try:
            self._slot.put_nowait(arrival)
        except queue.Full:
            logger.debug("Answer slot for problem %d already filled", self.index + 1)

    def wait(self, timeout: float) -> Optional[Arrival]:
        """
        Block until the answer arrives or `timeout` seconds pass; None on timeout.

        A single call blocks for at most `MAX_WAIT_SECONDS`; callers with a longer
        budget call again while their deadline has not fired.
        """
        if self._consumed:
            raise RuntimeError(f"answer to problem {self.index + 1} was already consumed")
        try:
            arrival = self._slot.get(timeout=min(max(0.0, timeout), MAX_WAIT_SECONDS))
        except queue.Empty:
            return None
        self._consumed = True
        return arrival

    def abandon(self) -> None:
        """Stop caring about this read. A result arriving afterwards is discarded."""
        self._abandoned.set()
        self._consumed = True
        try:
            self._slot.get_nowait()
        except queue.Empty:
            pass
        if self._thread.is_alive():
            with _registry_lock:
                _abandoned_readers.add(self._thread)
            logger.info("Abandoned outstanding read for problem %d", self.index + 1)

    def join(self, timeout: Optional[float] = None) -> bool:
        """Wait for the reader thread to return; True when it has."""
        self._thread.join(timeout)
        return not self._thread.is_alive()
