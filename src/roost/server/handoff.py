"""One-shot address handoff between the serving thread and the launcher.

Exactly one producer publishes exactly one outcome (a bound address or
the error that prevented binding); exactly one consumer blocks until it
arrives. Built on :class:`concurrent.futures.Future`, so waiting never polls.
"""

import threading
from concurrent.futures import Future, InvalidStateError
from typing import Generic, TypeVar

from roost.errors import RoostError

T = TypeVar("T")


class AddressHandoff(Generic[T]):
    """Single-producer/single-consumer, deliver-once channel.

    Usage::

        handoff: AddressHandoff[BoundAddress] = AddressHandoff()

        # serving thread
        handoff.publish(address)      # or handoff.fail(exc)

        # main thread
        address = handoff.wait()      # blocks; re-raises a published failure
    """

    __slots__ = ("_consumed", "_future", "_lock")

    def __init__(self) -> None:
        self._future: Future[T] = Future()
        self._consumed = False
        self._lock = threading.Lock()

    @property
    def published(self) -> bool:
        return self._future.done()

    def publish(self, value: T) -> None:
        """Deliver the value. A second publish (or fail) is a programming error."""
        try:
            self._future.set_result(value)
        except InvalidStateError:
            raise RoostError("address handoff already published") from None

    def fail(self, exc: BaseException) -> None:
        """Deliver a failure; :meth:`wait` re-raises it in the consumer."""
        try:
            self._future.set_exception(exc)
        except InvalidStateError:
            raise RoostError("address handoff already published") from None

    def wait(self) -> T:
        """Block until the producer publishes, then return the value once."""
        with self._lock:
            if self._consumed:
                raise RoostError("address handoff already consumed")
            self._consumed = True
        return self._future.result()
