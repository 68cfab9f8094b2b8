"""
LiveModel Exceptions

Error types raised by the observable and view-model layers.
"""


class LiveModelError(Exception):
    """Base class for all livemodel errors."""


class UnknownSignalError(LiveModelError, KeyError):
    """Raised when a view-model has no field with the requested name."""

    def __init__(self, owner: str, name: str):
        self.owner = owner
        self.name = name
        super().__init__(f"{owner} has no signal named '{name}'")

    def __str__(self):
        # KeyError quotes its message; keep it readable
        return self.args[0]


class ViewModelClearedError(LiveModelError):
    """Raised when work is scheduled on a view-model after clear()."""


class ViewModelCreationError(LiveModelError, TypeError):
    """Raised when a view-model factory returns something of the wrong type."""
