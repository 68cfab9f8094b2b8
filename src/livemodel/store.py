"""
ViewModel Store and Provider

The store keeps view-models alive for as long as their owning screen exists,
even when the screen's widgets are rebuilt, and tears them all down together.
The provider resolves a view-model class to its cached instance, creating it
on first use.
"""

from typing import Callable, Dict, List, Optional, Type, TypeVar
import logging

from .core.viewmodel import ViewModel
from .exceptions import ViewModelCreationError

logger = logging.getLogger(__name__)

VM = TypeVar("VM", bound=ViewModel)

DEFAULT_KEY = "livemodel.ViewModelProvider.DefaultKey"


class ViewModelStore:
    """Keyed cache of view-model instances."""

    def __init__(self):
        self._view_models: Dict[str, ViewModel] = {}

    def put(self, key: str, view_model: ViewModel) -> None:
        """
        Store `view_model` under `key`.

        A different view-model previously stored under the same key is cleared.
        """
        previous = self._view_models.get(key)
        self._view_models[key] = view_model
        if previous is not None and previous is not view_model:
            logger.debug(f"Replacing {type(previous).__name__} under '{key}'")
            previous.clear()

    def get(self, key: str) -> Optional[ViewModel]:
        return self._view_models.get(key)

    def keys(self) -> List[str]:
        return list(self._view_models.keys())

    def clear(self) -> None:
        """Clear every stored view-model and empty the store."""
        view_models = list(self._view_models.values())
        self._view_models.clear()
        logger.debug(f"Clearing {len(view_models)} view-models")

        errors = []
        for view_model in view_models:
            try:
                view_model.clear()
            except Exception as e:
                logger.error(f"Error clearing {type(view_model).__name__}: {e}")
                errors.append(e)

        if errors:
            raise errors[0]

    def __contains__(self, key: str) -> bool:
        return key in self._view_models

    def __len__(self) -> int:
        return len(self._view_models)


def _default_factory(cls: Type[VM]) -> VM:
    return cls()


class ViewModelProvider:
    """
    Resolves view-model classes against a ViewModelStore.

    Args:
        store: Store holding the instances
        factory: Callable building a new instance from a class, defaults to cls()
    """

    def __init__(self, store: ViewModelStore, factory: Optional[Callable[[Type[ViewModel]], ViewModel]] = None):
        self.store = store
        self.factory = factory or _default_factory

    @staticmethod
    def default_key(vm_cls: Type[ViewModel]) -> str:
        return f"{DEFAULT_KEY}:{vm_cls.__module__}.{vm_cls.__qualname__}"

    def get(self, vm_cls: Type[VM], key: Optional[str] = None) -> VM:
        """
        Return the stored instance of `vm_cls`, creating and storing one if needed.

        Raises:
            ViewModelCreationError: If the factory returns something that is not a `vm_cls`
        """
        key = key or self.default_key(vm_cls)

        existing = self.store.get(key)
        if isinstance(existing, vm_cls):
            return existing

        view_model = self.factory(vm_cls)
        if not isinstance(view_model, vm_cls):
            raise ViewModelCreationError(
                f"Factory returned {type(view_model).__name__}, expected {vm_cls.__name__}"
            )

        logger.debug(f"Created {vm_cls.__name__} under '{key}'")
        self.store.put(key, view_model)
        return view_model
