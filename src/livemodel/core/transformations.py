"""
Derived Observables

Cells computed from other cells. A MediatorObservable only listens to its
sources while somebody listens to it, so an unobserved derived cell keeps
whatever value it last emitted.
"""

from typing import Any, Callable, Dict, Optional, TypeVar

from .observable import MISSING, MutableObservable, Observable, Subscription

T = TypeVar("T")
R = TypeVar("R")


class _Source:
    def __init__(self, source: Observable, on_change: Callable[[Any], None]):
        self.source = source
        self.on_change = on_change
        self.subscription: Optional[Subscription] = None

    def plug(self):
        if self.subscription is None:
            self.subscription = self.source.subscribe(self.on_change)

    def unplug(self):
        if self.subscription is not None:
            self.subscription.unsubscribe()
            self.subscription = None


class MediatorObservable(MutableObservable[T]):
    """Observable fed by one or more source observables."""

    def __init__(self, value: Any = MISSING):
        super().__init__(value)
        self._sources: Dict[int, _Source] = {}

    def add_source(self, source: Observable, on_change: Callable[[Any], None]) -> None:
        """
        Start forwarding values of `source` to `on_change`.

        Raises:
            ValueError: If `source` was already added with a different callback
        """
        existing = self._sources.get(id(source))
        if existing is not None:
            if existing.on_change != on_change:
                raise ValueError("This source was already added with a different on_change callback")
            return

        entry = _Source(source, on_change)
        self._sources[id(source)] = entry
        if self.has_observers():
            entry.plug()

    def remove_source(self, source: Observable) -> None:
        entry = self._sources.pop(id(source), None)
        if entry is not None:
            entry.unplug()

    def on_active(self) -> None:
        for entry in list(self._sources.values()):
            entry.plug()

    def on_inactive(self) -> None:
        for entry in list(self._sources.values()):
            entry.unplug()


def map_observable(source: Observable[T], fn: Callable[[T], R]) -> Observable[R]:
    """Observable emitting fn(value) for every value of `source`."""
    result: MediatorObservable = MediatorObservable()
    result.add_source(source, lambda value: result.set(fn(value)))
    return result


def distinct_until_changed(source: Observable[T]) -> Observable[T]:
    """Observable that skips values equal to the one it emitted last."""
    result: MediatorObservable = MediatorObservable()

    def forward(value):
        if not result.is_set or result.value != value:
            result.set(value)

    result.add_source(source, forward)
    return result


__all__ = ["MediatorObservable", "map_observable", "distinct_until_changed"]
