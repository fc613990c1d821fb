"""Shallow reactive cells for router state.

``Ref`` holds one value and notifies subscribers when a *different* object is
assigned (identity check, no deep comparison). ``ReadonlyRef`` is the view
handed to consumers: it reads and subscribes but cannot assign.
"""

from __future__ import annotations

from typing import Any, Callable, Generic, List, TypeVar

__all__ = ["Ref", "ReadonlyRef"]

T = TypeVar("T")


class Ref(Generic[T]):
    __slots__ = ("_value", "_subscribers")

    def __init__(self, value: T):
        self._value = value
        self._subscribers: List[Callable[[T], Any]] = []

    @property
    def value(self) -> T:
        return self._value

    @value.setter
    def value(self, new_value: T) -> None:
        if new_value is self._value:
            return
        self._value = new_value
        for callback in list(self._subscribers):
            callback(new_value)

    def subscribe(self, callback: Callable[[T], Any]) -> Callable[[], None]:
        """Register ``callback(value)``; returns an unsubscribe function."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def readonly(self) -> "ReadonlyRef[T]":
        return ReadonlyRef(self)

    def __repr__(self) -> str:
        return f"Ref({self._value!r})"


class ReadonlyRef(Generic[T]):
    __slots__ = ("_ref",)

    def __init__(self, ref: Ref[T]):
        self._ref = ref

    @property
    def value(self) -> T:
        return self._ref.value

    def subscribe(self, callback: Callable[[T], Any]) -> Callable[[], None]:
        return self._ref.subscribe(callback)

    def __repr__(self) -> str:
        return f"ReadonlyRef({self._ref.value!r})"
