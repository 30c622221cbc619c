"""
Search Channel
Request/acknowledge handshake between the command writer and the driver
"""

import logging
import queue
import threading
from typing import Optional

from .errors import EvaluatorError

logger = logging.getLogger(__name__)

_FAILED = object()
_CLOSED = object()


class ChannelClosed(EvaluatorError):
    """The driver stopped before acknowledging a search"""


class SearchChannel:
    """
    Single-slot handshake enforcing one outstanding search

    The writer announces each search it has sent and then blocks until the
    driver acknowledges it with the finished report. A writer failure is
    recorded here so the driver can raise it as a normal error.
    """

    def __init__(self):
        self._issued: queue.Queue = queue.Queue(maxsize=1)
        self._acks: queue.Queue = queue.Queue(maxsize=1)
        self._error: Optional[BaseException] = None
        self._lock = threading.Lock()

    # Writer side

    def search_issued(self, index: int):
        """Announce that the search for position `index` has been sent"""
        self._issued.put(index)

    def wait_for_ack(self, index: int):
        """
        Block until the driver has drained the search for `index`

        Returns:
            The report the driver built for that position

        Raises:
            ChannelClosed: if the driver gave up on the batch
        """
        item = self._acks.get()
        if item is _CLOSED:
            raise ChannelClosed(f"Driver stopped before acknowledging position {index}")

        ack_index, report = item
        if ack_index != index:
            raise RuntimeError(f"Acknowledgment for position {ack_index}, expected {index}")
        return report

    def fail(self, error: BaseException):
        """Record a writer failure and wake a driver waiting for a search"""
        with self._lock:
            if self._error is None:
                self._error = error
        try:
            self._issued.put_nowait(_FAILED)
        except queue.Full:
            # an announced search is still pending; the driver sees the error
            # once the engine output ends
            logger.debug("Writer failure queued behind a pending search")

    # Driver side

    def wait_for_search(self) -> int:
        """
        Block until the writer announces its next search

        Raises:
            The writer's error if it failed instead
        """
        item = self._issued.get()
        if item is _FAILED:
            self._issued.put_nowait(_FAILED)
            self.raise_if_failed()
        return item

    def acknowledge(self, index: int, report=None):
        """Release the writer after position `index` has been fully read"""
        self._acks.put((index, report))

    def close(self):
        """Release a writer blocked on an acknowledgment that will never come"""
        try:
            self._acks.put_nowait(_CLOSED)
        except queue.Full:
            logger.debug("Writer already has an acknowledgment pending")

    @property
    def error(self) -> Optional[BaseException]:
        with self._lock:
            return self._error

    def raise_if_failed(self):
        error = self.error
        if error is not None:
            raise error
