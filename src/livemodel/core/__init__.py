from .observable import MISSING, Observable, MutableObservable, Subscription
from .transformations import MediatorObservable, map_observable, distinct_until_changed
from .signals import SignalDescriptor, signal_name
from .viewmodel import ViewModel

__all__ = [
    'MISSING', 'Observable', 'MutableObservable', 'Subscription',
    'MediatorObservable', 'map_observable', 'distinct_until_changed',
    'SignalDescriptor', 'signal_name',
    'ViewModel',
]
