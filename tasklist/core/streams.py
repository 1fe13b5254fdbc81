"""Push-based value streams with synchronous fan-out.

A ``StateStream`` always has a current value. Subscribing replays it, and
every ``publish`` reaches all subscribers, in subscription order, before
``publish`` returns.
"""

import logging
from collections.abc import Callable
from typing import Generic, TypeVar


logger = logging.getLogger(__name__)

T = TypeVar("T")
A = TypeVar("A")
B = TypeVar("B")
R = TypeVar("R")


class Subscription:
    """Handle returned by ``StateStream.subscribe``."""

    def __init__(self, stream: "StateStream", token: int) -> None:
        self._stream: StateStream | None = stream
        self._token = token

    @property
    def closed(self) -> bool:
        return self._stream is None

    def unsubscribe(self) -> None:
        if self._stream is None:
            return
        self._stream._remove(self._token)
        self._stream = None

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.unsubscribe()


class StateStream(Generic[T]):
    """Observer registry holding the latest published value."""

    def __init__(self, initial: T, *, name: str = "stream") -> None:
        self._value = initial
        self._name = name
        self._listeners: dict[int, Callable[[T], None]] = {}
        self._next_token = 0

    @property
    def value(self) -> T:
        return self._value

    @property
    def subscriber_count(self) -> int:
        return len(self._listeners)

    def subscribe(self, callback: Callable[[T], None]) -> Subscription:
        """Register ``callback`` and immediately deliver the current value."""
        token = self._next_token
        self._next_token += 1
        self._listeners[token] = callback
        self._deliver(callback, self._value)
        return Subscription(self, token)

    def publish(self, value: T) -> None:
        self._value = value
        for callback in list(self._listeners.values()):
            self._deliver(callback, value)

    def _remove(self, token: int) -> None:
        self._listeners.pop(token, None)

    def _deliver(self, callback: Callable[[T], None], value: T) -> None:
        try:
            callback(value)
        except Exception:
            logger.exception("Subscriber of %s failed", self._name)


class DerivedStream(StateStream[T]):
    """Stream computed from one or more upstream streams."""

    def __init__(self, initial: T, *, name: str = "derived") -> None:
        super().__init__(initial, name=name)
        self._upstream: list[Subscription] = []

    def dispose(self) -> None:
        """Release the upstream subscriptions; the last value stays readable."""
        for subscription in self._upstream:
            subscription.unsubscribe()
        self._upstream.clear()


def map_stream(source: StateStream[A], fn: Callable[[A], R], *, name: str = "mapped") -> DerivedStream[R]:
    """Derive a stream that applies ``fn`` to every value of ``source``."""
    derived: DerivedStream[R] = DerivedStream(fn(source.value), name=name)
    derived._upstream.append(source.subscribe(lambda value: derived.publish(fn(value))))
    return derived


def combine_latest(
    first: StateStream[A],
    second: StateStream[B],
    fn: Callable[[A, B], R],
    *,
    name: str = "combined",
) -> DerivedStream[R]:
    """Derive a stream recomputed whenever either upstream publishes."""
    derived: DerivedStream[R] = DerivedStream(fn(first.value, second.value), name=name)

    def recompute(_: object) -> None:
        derived.publish(fn(first.value, second.value))

    derived._upstream.append(first.subscribe(recompute))
    derived._upstream.append(second.subscribe(recompute))
    return derived
