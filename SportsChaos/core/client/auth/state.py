"""
Observable values and the per-screen UI state.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Generic, List, NoReturn, TypeVar, Union

from .models import AuthenticatedSession

logger = logging.getLogger(__name__)

T = TypeVar('T')


class ObservableValue(Generic[T]):
    """
    A value holder that pushes every change to its subscribers.

    A new subscriber is called with the current value right away, then
    once per ``set``. Callbacks run synchronously in subscription order.
    """

    def __init__(self, initial: T):
        self._value = initial
        self._subscribers: List[Callable[[T], None]] = []

    @property
    def value(self) -> T:
        return self._value

    def set(self, value: T) -> None:
        self._value = value
        for callback in list(self._subscribers):
            try:
                callback(value)
            except Exception:
                # One broken observer must not starve the others
                logger.exception("Observer %r failed", callback)

    def subscribe(self, callback: Callable[[T], None]) -> Callable[[], None]:
        """
        Register an observer.

        Returns:
            A function that removes the observer again
        """
        self._subscribers.append(callback)
        callback(self._value)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)


@dataclass(frozen=True)
class Idle:
    """Nothing submitted yet, or the last result was dismissed."""


@dataclass(frozen=True)
class Loading:
    """A submit is in flight."""


@dataclass(frozen=True)
class Success:
    session: AuthenticatedSession


@dataclass(frozen=True)
class Error:
    message: str


ScreenState = Union[Idle, Loading, Success, Error]


def assert_never(value: NoReturn) -> NoReturn:
    raise AssertionError(f"Unhandled screen state: {value!r}")


def describe(state: ScreenState) -> str:
    """Render a screen state as one line of text."""
    match state:
        case Idle():
            return ""
        case Loading():
            return "Please wait..."
        case Success(session=session):
            return f"Welcome, {session.name}!"
        case Error(message=message):
            return f"Error: {message}"
        case _:
            assert_never(state)


__all__ = [
    'ObservableValue',
    'Idle',
    'Loading',
    'Success',
    'Error',
    'ScreenState',
    'assert_never',
    'describe',
]
