"""
Observable Cells - Core Reactivity for LiveModel

🔄 Replay-latest value holders:
An observable cell holds one value and notifies its observers synchronously
whenever that value is set. A new observer is handed the current value as
soon as it subscribes, then every later value in order.

Key Features:
- Synchronous dispatch on the caller's thread, in registration order
- Version tracking so no observer sees the same value twice
- Reentrant sets restart the running dispatch with the newest value
- Owner tags for removing a whole group of observers at once
"""

from typing import Any, Callable, Generic, List, Optional, TypeVar
import logging

from ..config import get_config

logger = logging.getLogger(__name__)

T = TypeVar("T")

Observer = Callable[[Any], None]


class _Missing:
    """Marker for a cell that has never been given a value."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self):
        return False

    def __repr__(self):
        return "MISSING"


MISSING: Any = _Missing()


class Subscription:
    """
    Handle returned by Observable.subscribe().

    Unsubscribing is idempotent and has no effect on the observed value.
    Usable as a context manager that unsubscribes on exit.
    """

    def __init__(self, source: 'Observable', observer: Observer, owner: Any = None):
        self._source = source
        self.observer = observer
        self.owner = owner
        self.last_version = -1
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def unsubscribe(self) -> None:
        if self._active:
            self._source._detach(self)

    def _deliver(self, value: Any, version: int) -> None:
        if not self._active or self.last_version >= version:
            return
        self.last_version = version
        self.observer(value)

    def __enter__(self) -> 'Subscription':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.unsubscribe()

    def __repr__(self):
        state = "active" if self._active else "inactive"
        return f"Subscription({self.observer!r}, {state})"


class Observable(Generic[T]):
    """
    Read-only observable cell.

    Consumers receive this type; only the owner of the cell holds the
    MutableObservable that can set it.
    """

    def __init__(self, value: Any = MISSING):
        self._value = value
        self._version = 0 if value is MISSING else 1
        self._subscriptions: List[Subscription] = []
        self._dispatching = False
        self._dispatch_invalidated = False

    @property
    def value(self) -> Optional[T]:
        """The current value, or None if nothing was ever set."""
        if self._value is MISSING:
            return None
        return self._value

    def get(self) -> Optional[T]:
        return self.value

    @property
    def is_set(self) -> bool:
        return self._value is not MISSING

    @property
    def version(self) -> int:
        return self._version

    @property
    def observer_count(self) -> int:
        return len(self._subscriptions)

    def has_observers(self) -> bool:
        return bool(self._subscriptions)

    def subscribe(self, observer: Callable[[T], None], owner: Any = None) -> Subscription:
        """
        Register an observer and replay the current value to it.

        Args:
            observer: Callable taking the new value
            owner: Optional tag, see remove_observers()

        Returns:
            Subscription handle for this registration
        """
        if not callable(observer):
            raise TypeError(f"Observer must be callable, got {type(observer).__name__}")

        subscription = Subscription(self, observer, owner)
        self._subscriptions.append(subscription)
        logger.debug(f"Subscribed {observer!r} to {self!r}")

        if len(self._subscriptions) == 1:
            self.on_active()

        if self.is_set:
            self._dispatch(subscription)

        return subscription

    def remove_observer(self, observer: Callable[[T], None]) -> None:
        """Remove every subscription registered for `observer`."""
        for subscription in list(self._subscriptions):
            if subscription.observer == observer:
                subscription.unsubscribe()

    def remove_observers(self, owner: Any = None) -> None:
        """
        Remove every subscription tagged with `owner` (compared by identity).
        With no owner, remove all of them.
        """
        for subscription in list(self._subscriptions):
            if owner is None or subscription.owner is owner:
                subscription.unsubscribe()

    def on_active(self) -> None:
        """Called when the observer count goes from zero to one."""

    def on_inactive(self) -> None:
        """Called when the observer count drops back to zero."""

    def _set_value(self, value: T) -> None:
        self._value = value
        self._version += 1
        logger.debug(f"{type(self).__name__} set to {value!r} (version {self._version})")
        self._dispatch()

    def _detach(self, subscription: Subscription) -> None:
        subscription._active = False
        self._subscriptions.remove(subscription)
        logger.debug(f"Unsubscribed {subscription.observer!r} from {self!r}")
        if not self._subscriptions:
            self.on_inactive()

    def _dispatch(self, initiator: Optional[Subscription] = None) -> None:
        if self._dispatching:
            # The running dispatch picks up the newer value
            self._dispatch_invalidated = True
            return

        errors: List[Exception] = []
        self._dispatching = True
        try:
            while True:
                self._dispatch_invalidated = False
                if initiator is not None:
                    self._notify(initiator, errors)
                    initiator = None
                else:
                    for subscription in list(self._subscriptions):
                        self._notify(subscription, errors)
                        if self._dispatch_invalidated:
                            break
                if not self._dispatch_invalidated:
                    break
        finally:
            self._dispatching = False
            self._dispatch_invalidated = False

        # Every observer has been handed the value before a failure surfaces
        if errors:
            raise errors[0]

    def _notify(self, subscription: Subscription, errors: List[Exception]) -> None:
        try:
            subscription._deliver(self._value, self._version)
        except Exception as e:
            if get_config().observers.propagate_errors:
                errors.append(e)
            else:
                logger.exception(f"Observer {subscription.observer!r} failed on {self!r}")

    def __repr__(self):
        return f"{type(self).__name__}(value={self._value!r}, observers={len(self._subscriptions)})"


class MutableObservable(Observable[T]):
    """Observable cell whose value can be set. Setting an equal value still notifies."""

    @Observable.value.setter
    def value(self, new_value: T) -> None:
        self._set_value(new_value)

    def set(self, value: T) -> None:
        self._set_value(value)


__all__ = ["MISSING", "Observable", "MutableObservable", "Subscription", "Observer"]
