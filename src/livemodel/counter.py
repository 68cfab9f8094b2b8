"""
Counter ViewModel

An observable integer that starts at zero and only ever goes up by one.
"""

from typing import Any, Callable, Optional
import logging

from pydantic import Field

from .core.observable import Observable, Subscription
from .core.viewmodel import ViewModel

logger = logging.getLogger(__name__)


class ObservableCounter(ViewModel):
    """Counter whose value is published to observers on every increment."""

    count: int = Field(default=0, ge=0)

    @property
    def current_count(self) -> Observable[int]:
        return self.observable("count")

    def current_value(self) -> Optional[int]:
        return self.current_count.value

    def subscribe(self, observer: Callable[[int], None], owner: Any = None) -> Subscription:
        """Observe the count; `observer` is called with the current value right away."""
        return self.current_count.subscribe(observer, owner)

    def increment(self) -> None:
        """Add one and notify every subscriber. Never raises; observer failures are logged."""
        current = self.current_value()
        if current is None:
            return
        try:
            self.count = current + 1
        except Exception:
            # The new count is stored and delivered before an observer error surfaces
            logger.exception(f"Observer failed while publishing count {current + 1}")
