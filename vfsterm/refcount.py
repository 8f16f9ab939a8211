"""Reference counting with copy-on-write support."""

from __future__ import annotations

import copy
from typing import Generic, Optional, TypeVar


class RefCounted:
    """An object that tracks how many owners refer to it."""

    def __init__(self) -> None:
        self._refs = 0
        self._shareable = True

    def add_reference(self) -> None:
        self._refs += 1

    def remove_reference(self) -> None:
        if self._refs > 0:
            self._refs -= 1

    def mark_unshareable(self) -> None:
        self._shareable = False

    def is_shareable(self) -> bool:
        return self._shareable

    def is_shared(self) -> bool:
        return self._refs > 1

    @property
    def ref_count(self) -> int:
        return self._refs

    def clone(self) -> "RefCounted":
        """Return an independent copy with no owners that can be shared."""
        dup = copy.copy(self)
        dup._refs = 0
        dup._shareable = True
        return dup


T = TypeVar("T", bound=RefCounted)


class RCPtr(Generic[T]):
    """An owning handle to a reference-counted object."""

    def __init__(self, target: Optional[T] = None) -> None:
        self._target: Optional[T] = self._acquire(target)

    @staticmethod
    def _acquire(target: Optional[T]) -> Optional[T]:
        if target is None:
            return None
        if not target.is_shareable():
            target = target.clone()
        target.add_reference()
        return target

    @property
    def target(self) -> Optional[T]:
        return self._target

    def __bool__(self) -> bool:
        return self._target is not None

    def assign(self, other: "RCPtr[T]") -> "RCPtr[T]":
        """Point at what ``other`` points at, releasing the old object."""
        if self._target is not other._target:
            old = self._target
            self._target = self._acquire(other._target)
            if old is not None:
                old.remove_reference()
        return self

    def share(self) -> "RCPtr[T]":
        """Return a second handle to the same object (or a copy if unshareable)."""
        return RCPtr(self._target)

    def release(self) -> None:
        """Drop this handle's reference and point at nothing."""
        if self._target is not None:
            self._target.remove_reference()
        self._target = None