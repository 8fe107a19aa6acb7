"""Pull/push state cell shared by the session components."""

from __future__ import annotations

import logging
from typing import Generic, TypeVar
from collections.abc import Callable

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Observable(Generic[T]):
    """Holds one value; listeners are called synchronously on every change.

    With ``distinct=False`` every ``set`` notifies, even when the value is
    equal to the current one.
    """

    def __init__(self, value: T, *, distinct: bool = True) -> None:
        self._value = value
        self._distinct = distinct
        self._listeners: list[Callable[[T], None]] = []

    @property
    def value(self) -> T:
        return self._value

    def set(self, value: T) -> None:
        if self._distinct and value == self._value:
            return
        self._value = value
        for listener in list(self._listeners):
            try:
                listener(value)
            except Exception:
                logger.exception("observable listener failed")

    def subscribe(self, listener: Callable[[T], None]) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe


__all__ = ["Observable"]
