"""Lazily computed, memoized values for otherwise immutable objects."""
from __future__ import annotations

import threading
from typing import Callable, Generic, TypeVar

T = TypeVar("T")

_UNSET = object()


class LazyCell(Generic[T]):
    """Compute a value on first ``get()`` and keep it.

    Population happens under a lock, so concurrent callers all see the same
    fully built value. ``None`` is a valid cached result. If the compute
    function raises, nothing is cached and the next call tries again.
    """

    __slots__ = ("_compute", "_value", "_lock")

    def __init__(self, compute: Callable[[], T]):
        self._compute = compute
        self._value = _UNSET
        self._lock = threading.Lock()

    @property
    def is_set(self) -> bool:
        return self._value is not _UNSET

    def get(self) -> T:
        value = self._value
        if value is not _UNSET:
            return value  # type: ignore[return-value]
        with self._lock:
            if self._value is _UNSET:
                self._value = self._compute()
            return self._value  # type: ignore[return-value]


__all__ = ["LazyCell"]
