"""
LiveModel - Observable View-Models

Pydantic view-models whose fields are published as replay-latest observable
cells, plus a store that keeps them alive across UI rebuilds.
"""

from .core import (
    MISSING, Observable, MutableObservable, Subscription,
    MediatorObservable, map_observable, distinct_until_changed,
    SignalDescriptor, signal_name,
    ViewModel,
)
from .counter import ObservableCounter
from .store import ViewModelStore, ViewModelProvider
from .config import (
    ApplicationConfig, Environment, LoggingConfig, ObserverConfig,
    get_config, set_config, reset_config, configure_logging,
)
from .exceptions import (
    LiveModelError, UnknownSignalError, ViewModelClearedError, ViewModelCreationError,
)

__version__ = "0.1.0"

__all__ = [
    # Observable cells
    'MISSING',
    'Observable',
    'MutableObservable',
    'Subscription',
    'MediatorObservable',
    'map_observable',
    'distinct_until_changed',

    # View-models
    'SignalDescriptor',
    'signal_name',
    'ViewModel',
    'ObservableCounter',
    'ViewModelStore',
    'ViewModelProvider',

    # Configuration
    'ApplicationConfig',
    'Environment',
    'LoggingConfig',
    'ObserverConfig',
    'get_config',
    'set_config',
    'reset_config',
    'configure_logging',

    # Errors
    'LiveModelError',
    'UnknownSignalError',
    'ViewModelClearedError',
    'ViewModelCreationError',
]
