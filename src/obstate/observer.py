"""Observer — explicit subscriptions over a State.

An Observer owns an ordered list of zero-argument callbacks and fans out
notifications to them synchronously, in subscription order. There is no
dependency tracking: callbacks are registered with on_change()/on_bind()
and read the State through their own closures.

update() is always dirty. It writes the value and notifies even when the
new value equals the old one. force_update() notifies without writing.

Each notify walks a snapshot of the callback list taken when it starts.
Callbacks subscribed during a notify first fire on the next one; callbacks
removed during a notify still run if they were already in the snapshot.

Lifecycle is live -> destroyed. destroy() is idempotent and is also run
when the Observer is garbage collected.
"""

from __future__ import annotations

import logging
from typing import Callable, Generic, TypeVar

from obstate.state import State

T = TypeVar("T")

Callback = Callable[[], None]
Disposer = Callable[[], None]

logger = logging.getLogger("obstate.observer")


class UseAfterDestroy(RuntimeError):
    """An operation needed the State of an Observer that was destroyed."""


def _noop() -> None:
    pass


class Observer(Generic[T]):
    """Subscription manager bound to one State."""

    def __init__(self, state: State[T]) -> None:
        self._state: State[T] | None = state
        self._callbacks: list[Callback] | None = []
        self._force = False

    @property
    def state(self) -> State[T] | None:
        """The observed State, or None once destroyed."""
        return self._state

    @property
    def callbacks(self) -> tuple[Callback, ...]:
        return tuple(self._callbacks) if self._callbacks is not None else ()

    @property
    def force(self) -> bool:
        """True once force_update() has been called. Never reset."""
        return self._force

    @property
    def destroyed(self) -> bool:
        return self._callbacks is None

    def __len__(self) -> int:
        return len(self._callbacks) if self._callbacks is not None else 0

    # --- Subscription ---

    def on_change(self, callback: Callback) -> Disposer:
        """Register callback for future notifications. Returns a disposer.

        The disposer removes the first registered entry that *is* callback.
        It is safe to call more than once, after destroy(), or after the
        callback was already removed. Registering the same callable twice
        takes two slots, and each disposer removes one of them.
        """
        if self._callbacks is None:
            logger.debug("on_change() on destroyed %r ignored", self)
            return _noop
        self._callbacks.append(callback)
        logger.debug("Subscribed %r (%d callbacks)", callback, len(self._callbacks))

        def _unsubscribe() -> None:
            self._remove(callback)

        return _unsubscribe

    def on_bind(self, callback: Callback) -> Disposer:
        """Call callback once now, then subscribe it. Returns a disposer.

        Usage:
            health = State(100)
            observer = Observer(health)
            log = []

            observer.on_bind(lambda: log.append(health.get()))
            # log == [100]  (ran immediately)

            observer.update(200)
            # log == [100, 200]
        """
        if self._callbacks is None:
            logger.debug("on_bind() on destroyed %r ignored", self)
            return _noop
        callback()
        return self.on_change(callback)

    def _remove(self, callback: Callback) -> None:
        if self._callbacks is None:
            return
        for i, cb in enumerate(self._callbacks):
            if cb is callback:
                del self._callbacks[i]
                logger.debug(
                    "Unsubscribed %r (%d callbacks)", callback, len(self._callbacks)
                )
                return

    # --- Notification ---

    def update(self, value: T) -> None:
        """Write value into the State and notify every callback.

        No equality check: updating with the current value still notifies.
        Raises UseAfterDestroy once the Observer has been destroyed.
        """
        if self._state is None:
            raise UseAfterDestroy("update() called on a destroyed Observer")
        self._state._write(value)
        self._notify()

    def force_update(self) -> None:
        """Notify every callback without touching the State."""
        if self._callbacks is None:
            logger.debug("force_update() on destroyed %r ignored", self)
            return
        self._force = True
        self._notify()

    def _notify(self) -> None:
        if not self._callbacks:
            return
        for callback in list(self._callbacks):
            callback()

    # --- Teardown ---

    def destroy(self) -> None:
        """Drop all callbacks and the State reference. Idempotent.

        The State itself is left alone; other Observers and owners of it
        stay valid.
        """
        if self._callbacks is None:
            return
        self._release()
        logger.debug("Destroyed observer")

    def _release(self) -> None:
        if self._callbacks is not None:
            self._callbacks.clear()
        self._callbacks = None
        self._state = None

    def __enter__(self) -> Observer[T]:
        return self

    def __exit__(self, *exc_info) -> None:
        self.destroy()

    def __del__(self) -> None:
        # __init__ may not have run to completion.
        if getattr(self, "_callbacks", None) is not None:
            self._release()

    def __repr__(self) -> str:
        if self._callbacks is None:
            return "Observer(destroyed)"
        return f"Observer({self._state!r}, {len(self._callbacks)} callbacks)"
