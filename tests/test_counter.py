"""
ObservableCounter behaviour: starts at zero, goes up by one, replays to subscribers.
"""

import pytest
from pydantic import ValidationError

from livemodel import MISSING, ObservableCounter, ViewModelProvider, ViewModelStore


def test_initial_value_is_zero():
    counter = ObservableCounter()
    assert counter.current_value() == 0
    assert counter.current_count.value == 0


@pytest.mark.parametrize("n", [1, 2, 10, 250])
def test_value_equals_number_of_increments(n):
    counter = ObservableCounter()
    previous = counter.current_value()
    for _ in range(n):
        counter.increment()
        assert counter.current_value() == previous + 1
        previous = counter.current_value()
    assert counter.current_value() == n


def test_late_subscriber_gets_current_value_immediately():
    counter = ObservableCounter()
    for _ in range(4):
        counter.increment()

    seen = []
    counter.subscribe(seen.append)
    assert seen == [4]


def test_subscriber_sees_every_value_in_order():
    counter = ObservableCounter()
    seen = []
    counter.subscribe(seen.append)

    for _ in range(5):
        counter.increment()

    assert seen == [0, 1, 2, 3, 4, 5]


def test_two_subscribers_receive_identical_sequences():
    counter = ObservableCounter()
    calls = []
    counter.subscribe(lambda v: calls.append(("a", v)))
    counter.subscribe(lambda v: calls.append(("b", v)))

    counter.increment()
    counter.increment()

    assert calls == [("a", 0), ("b", 0), ("a", 1), ("b", 1), ("a", 2), ("b", 2)]


def test_concrete_scenario():
    counter = ObservableCounter()
    assert counter.current_value() == 0

    observer_a = []
    counter.subscribe(observer_a.append)
    assert observer_a == [0]

    counter.increment()
    counter.increment()
    counter.increment()

    assert counter.current_value() == 3
    assert observer_a == [0, 1, 2, 3]


def test_unsubscribe_does_not_touch_the_value():
    counter = ObservableCounter()
    seen = []
    subscription = counter.subscribe(seen.append)
    counter.increment()
    subscription.unsubscribe()
    counter.increment()

    assert seen == [0, 1]
    assert counter.current_value() == 2


def test_increment_is_noop_when_value_absent():
    counter = ObservableCounter()
    # Simulate the pre-initialization window
    counter.observable("count")._value = MISSING
    counter.increment()
    assert counter.current_value() is None


def test_count_cannot_go_negative():
    counter = ObservableCounter()
    seen = []
    counter.subscribe(seen.append)

    with pytest.raises(ValidationError):
        counter.count = -1

    assert counter.current_value() == 0
    assert seen == [0]


def test_model_dump_is_counter_state():
    counter = ObservableCounter()
    counter.increment()
    assert counter.model_dump() == {"count": 1}
    assert counter.signals == {"ObservableCounter": {"count": 1}}
    assert ObservableCounter.Scount == "$ObservableCounter.count"


def test_counter_survives_provider_lookups():
    """A rebuilt screen asking the provider again gets the same counter back."""
    store = ViewModelStore()
    first = ViewModelProvider(store).get(ObservableCounter)
    first.increment()

    second = ViewModelProvider(store).get(ObservableCounter)
    assert second is first
    assert second.current_value() == 1

    seen = []
    second.subscribe(seen.append)
    store.clear()
    assert first.cleared
    assert not first.current_count.has_observers()
    assert seen == [1]


def test_increment_never_raises_when_an_observer_fails(caplog):
    """Observer failures are contained; every subscriber still sees every value."""
    counter = ObservableCounter()

    def failing(value):
        if value == 1:
            raise RuntimeError("render failed")

    later = []
    counter.subscribe(failing)
    counter.subscribe(later.append)

    with caplog.at_level("ERROR", logger="livemodel.counter"):
        counter.increment()
        counter.increment()

    assert counter.current_value() == 2
    assert counter.count == 2
    assert later == [0, 1, 2]
    assert any("count 1" in record.getMessage() for record in caplog.records)


def test_copied_counter_is_independent():
    counter = ObservableCounter()
    seen = []
    counter.subscribe(seen.append)

    copied = counter.model_copy()
    copied.increment()

    assert counter.count == 0
    assert counter.current_value() == 0
    assert copied.current_value() == 1
    assert seen == [0]
