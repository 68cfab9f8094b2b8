"""
LiveModel ViewModel Base

A ViewModel is a pydantic model whose declared fields are its UI state.
Every field is backed by an observable cell: assigning the field validates
the new value and then publishes it to the field's observers.

Example:
    class Profile(ViewModel):
        name: str = ""

    profile = Profile()
    profile.observable("name").subscribe(print)   # prints ""
    profile.name = "Ada"                          # prints "Ada"
    Profile.Sname                                 # "$Profile.name"
"""

from typing import Any, ClassVar, Coroutine, Dict, List, Optional, Set
import asyncio
import logging

from pydantic import BaseModel, ConfigDict, PrivateAttr

from ..exceptions import UnknownSignalError, ViewModelClearedError
from .observable import MutableObservable, Observable
from .signals import SignalDescriptor

logger = logging.getLogger(__name__)

_RUNTIME_ATTRS = ('_observables', '_closeables', '_tasks', '_cleared')


class ViewModel(BaseModel):
    """Base class for all view-models."""
    model_config = ConfigDict(validate_assignment=True, arbitrary_types_allowed=True)

    # Binding names are `$<signal_namespace or class name>.<field>` unless use_namespace is off
    signal_namespace: ClassVar[Optional[str]] = None
    use_namespace: ClassVar[bool] = True

    _observables: Dict[str, MutableObservable] = PrivateAttr(default_factory=dict)
    _closeables: List[Any] = PrivateAttr(default_factory=list)
    _tasks: Set[asyncio.Task] = PrivateAttr(default_factory=set)
    _cleared: bool = PrivateAttr(default=False)

    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs: Any) -> None:
        super().__pydantic_init_subclass__(**kwargs)

        # Create signal descriptors for all model fields
        for field_name in cls.model_fields:
            setattr(cls, f"S{field_name}", SignalDescriptor(field_name))

    def model_post_init(self, context: Any) -> None:
        for field_name in type(self).model_fields:
            self._observables[field_name] = MutableObservable(getattr(self, field_name))

    def _reset_runtime_state(self) -> None:
        self._observables = {
            field_name: MutableObservable(getattr(self, field_name))
            for field_name in type(self).model_fields
        }
        self._closeables = []
        self._tasks = set()
        self._cleared = False

    # A copy shares field values only; observers, tasks and closeables stay with the original

    def __copy__(self):
        copied = super().__copy__()
        copied._reset_runtime_state()
        return copied

    def __deepcopy__(self, memo: Optional[Dict[int, Any]] = None):
        private = self.__pydantic_private__
        stripped = {k: v for k, v in private.items() if k not in _RUNTIME_ATTRS}
        object.__setattr__(self, '__pydantic_private__', stripped)
        try:
            copied = super().__deepcopy__(memo)
        finally:
            object.__setattr__(self, '__pydantic_private__', private)
        copied._reset_runtime_state()
        return copied

    def model_copy(self, *, update: Optional[Dict[str, Any]] = None, deep: bool = False):
        copied = super().model_copy(update=update, deep=deep)
        if update:
            # Observables were built before the update was applied
            copied._reset_runtime_state()
        return copied

    def __setattr__(self, name: str, value: Any) -> None:
        # Validation happens here; a rejected value never reaches observers
        super().__setattr__(name, value)
        if name in type(self).model_fields:
            self._observables[name].set(getattr(self, name))

    def observable(self, name: str) -> Observable:
        """Read-only observable for the field `name`."""
        try:
            return self._observables[name]
        except KeyError:
            raise UnknownSignalError(type(self).__name__, name) from None

    @property
    def namespace(self) -> str:
        return type(self).signal_namespace or type(self).__name__

    @property
    def signals(self) -> Dict[str, Any]:
        """Current field values keyed the way a UI binding layer expects them."""
        if type(self).use_namespace:
            return {self.namespace: self.model_dump()}
        return self.model_dump()

    @property
    def cleared(self) -> bool:
        return self._cleared

    def add_closeable(self, closeable: Any) -> Any:
        """
        Register an object whose close() runs when this view-model is cleared.
        On an already cleared view-model it is closed right away.
        """
        if self._cleared:
            closeable.close()
        else:
            self._closeables.append(closeable)
        return closeable

    def launch(self, coro: Coroutine) -> asyncio.Task:
        """
        Run `coro` as a task on the running event loop.

        The task is cancelled if it is still pending when clear() runs.

        Raises:
            ViewModelClearedError: If this view-model was already cleared
            RuntimeError: If no event loop is running
        """
        if self._cleared:
            coro.close()
            raise ViewModelClearedError(f"{type(self).__name__} is cleared, cannot launch new work")

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            coro.close()
            raise

        task = loop.create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def on_cleared(self) -> None:
        """Hook for subclasses; called once, before resources are released."""

    def clear(self) -> None:
        """Tear the view-model down. Safe to call more than once."""
        if self._cleared:
            return
        self._cleared = True
        logger.debug(f"Clearing {type(self).__name__}")

        try:
            self.on_cleared()
        finally:
            for task in list(self._tasks):
                task.cancel()

            errors = []
            for closeable in self._closeables:
                try:
                    closeable.close()
                except Exception as e:
                    logger.error(f"Error closing {closeable!r}: {e}")
                    errors.append(e)
            self._closeables.clear()

            for observable in self._observables.values():
                observable.remove_observers()

        if errors:
            raise errors[0]
