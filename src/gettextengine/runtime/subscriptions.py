"""Locale data change subscriptions.

Python 3.13+. Zero external dependencies.
"""

import logging

from gettextengine.types import SubscribeCallback, UnsubscribeCallback

__all__ = ["Subscribers"]

logger = logging.getLogger(__name__)


class Subscribers:
    """Set of callbacks to notify when locale data changes.

    Callbacks are identified by identity, never by equality, so unhashable
    callables subscribe fine and equal-but-distinct callables each get
    notified. Subscribing the same object twice registers it once.
    Notification runs callbacks synchronously in subscription order. A
    callback that raises is logged and skipped; the remaining callbacks
    still run and the error does not reach the code that changed the data.

    Example:
        >>> calls = []
        >>> subscribers = Subscribers()
        >>> unsubscribe = subscribers.subscribe(lambda: calls.append("changed"))
        >>> subscribers.notify()
        >>> unsubscribe()
        >>> subscribers.notify()
        >>> calls
        ['changed']
    """

    __slots__ = ("_callbacks",)

    def __init__(self) -> None:
        # id(callback) -> callback; the dict keeps subscription order
        self._callbacks: dict[int, SubscribeCallback] = {}

    def __len__(self) -> int:
        return len(self._callbacks)

    def __contains__(self, callback: object) -> bool:
        return self._callbacks.get(id(callback)) is callback

    def subscribe(self, callback: SubscribeCallback) -> UnsubscribeCallback:
        """Register callback and return a function that removes it again.

        Raises:
            TypeError: If callback is not callable
        """
        if not callable(callback):
            msg = f"Subscriber must be callable, got {type(callback).__name__}"
            raise TypeError(msg)

        key = id(callback)
        self._callbacks[key] = callback
        logger.debug("Subscriber added: %r (%d total)", callback, len(self._callbacks))

        def unsubscribe() -> None:
            if self._callbacks.get(key) is callback:
                del self._callbacks[key]
                logger.debug("Subscriber removed: %r (%d total)", callback, len(self._callbacks))

        return unsubscribe

    def notify(self) -> None:
        """Call every subscriber with no arguments."""
        # Snapshot: subscribers may unsubscribe themselves while notified.
        for callback in tuple(self._callbacks.values()):
            try:
                callback()
            except Exception:
                logger.exception("Locale data subscriber %r failed", callback)
