"""Fan-out of serialized results to live feed subscribers."""

from __future__ import annotations

import logging
import queue
import threading

logger = logging.getLogger(__name__)


class Subscription:
    """Handle for one live connection.

    ``Broadcaster.publish`` only ever enqueues; the connection's own thread
    drains the queue and talks to the transport.

    ``dropped`` is a best-effort counter updated without a lock. Only the
    draw scheduler thread publishes, so ``offer`` has a single caller.
    """

    def __init__(self, maxsize: int = 256) -> None:
        self._queue: queue.Queue[str] = queue.Queue(maxsize=maxsize)
        self._closed = threading.Event()
        self.dropped = 0

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def offer(self, payload: str) -> bool:
        """Enqueue ``payload`` without blocking; ``False`` when it was dropped."""
        if self.closed:
            return False
        try:
            self._queue.put_nowait(payload)
        except queue.Full:
            self.dropped += 1
            logger.debug("Subscriber queue full, dropped message (%d so far)", self.dropped)
            return False
        return True

    def get(self, timeout: float | None = None) -> str | None:
        """Next payload, or ``None`` if nothing arrived within ``timeout``."""
        try:
            return self._queue.get(timeout=timeout)
        except queue.Empty:
            return None

    def close(self) -> None:
        self._closed.set()


class Broadcaster:
    """Set of live subscriptions with best-effort, non-blocking publish."""

    def __init__(self, queue_size: int = 256) -> None:
        self._queue_size = queue_size
        self._lock = threading.Lock()
        self._subscriptions: set[Subscription] = set()

    def subscribe(self) -> Subscription:
        subscription = Subscription(maxsize=self._queue_size)
        with self._lock:
            self._subscriptions.add(subscription)
        logger.debug("Subscriber connected (%d live)", len(self))
        return subscription

    def unsubscribe(self, subscription: Subscription) -> None:
        subscription.close()
        with self._lock:
            self._subscriptions.discard(subscription)
        logger.debug("Subscriber disconnected (%d live)", len(self))

    def publish(self, payload: str) -> int:
        """Offer ``payload`` to every current subscriber.

        Iterates over a snapshot, so subscribers may join or leave meanwhile.
        Never raises for a single subscriber; returns how many accepted it.
        """

        with self._lock:
            snapshot = tuple(self._subscriptions)

        delivered = 0
        for subscription in snapshot:
            if subscription.offer(payload):
                delivered += 1
        return delivered

    def __len__(self) -> int:
        with self._lock:
            return len(self._subscriptions)
