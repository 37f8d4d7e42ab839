"""Global pointer-activation observer.

The host application owns one ``PointerEvents`` and forwards every click to
``notify``; pickers subscribe for their lifetime to detect clicks outside
their own surface.
"""

from __future__ import annotations

from varpick.domain.protocols import PointerCallback
from varpick.logger import get_logger

logger = get_logger("pointer")


class PointerSubscription:
    """Handle for one registered callback."""

    def __init__(self, source: "PointerEvents", callback: PointerCallback) -> None:
        self._source = source
        self._callback = callback
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def cancel(self) -> None:
        """Stop receiving notifications. Safe to call more than once."""
        if not self._active:
            return
        self._active = False
        self._source._remove(self._callback)


class PointerEvents:
    """Registry of pointer-activation observers."""

    def __init__(self) -> None:
        self._callbacks: list[PointerCallback] = []

    def subscribe(self, callback: PointerCallback) -> PointerSubscription:
        self._callbacks.append(callback)
        logger.debug(f"Pointer observer subscribed ({len(self._callbacks)} active)")
        return PointerSubscription(self, callback)

    def notify(self, target: object) -> None:
        """Deliver a pointer activation on ``target`` to every observer."""
        for callback in list(self._callbacks):
            callback(target)

    @property
    def subscriber_count(self) -> int:
        return len(self._callbacks)

    def _remove(self, callback: PointerCallback) -> None:
        try:
            self._callbacks.remove(callback)
            logger.debug(f"Pointer observer removed ({len(self._callbacks)} active)")
        except ValueError:
            logger.debug("Pointer observer already removed")
