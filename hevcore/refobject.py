"""Reference-counted objects with an overridable destructor."""

from __future__ import annotations

import threading
from typing import Callable, Optional

DestructHook = Callable[["RefObject"], None]


class RefObject:
    """An object that is destructed when its reference count drops to zero.

    A new object starts with one reference. ``on_destruct``, when given, is
    called with the object once the last reference is dropped; subclasses
    may override :meth:`destruct` instead.
    """

    def __init__(self, on_destruct: Optional[DestructHook] = None) -> None:
        self.ref_count = 1
        self._on_destruct = on_destruct

    def __repr__(self) -> str:
        return f"{type(self).__name__}(ref_count={self.ref_count})"

    def _step(self, delta: int) -> int:
        if self.ref_count == 0:
            raise RuntimeError("object has already been destructed")
        self.ref_count += delta
        return self.ref_count

    def ref(self) -> RefObject:
        """Add a reference and return the object."""
        self._step(1)
        return self

    def unref(self) -> None:
        """Drop a reference; destruct the object when none are left."""
        if self._step(-1) == 0:
            self.destruct()

    def destruct(self) -> None:
        """Release the object's resources by running its destruct hook."""
        hook, self._on_destruct = self._on_destruct, None
        if hook is not None:
            hook(self)


class AtomicRefObject(RefObject):
    """A :class:`RefObject` whose count may be changed from several threads."""

    def __init__(self, on_destruct: Optional[DestructHook] = None) -> None:
        super().__init__(on_destruct)
        self._lock = threading.Lock()

    def ref(self) -> AtomicRefObject:
        """Add a reference atomically and return the object."""
        with self._lock:
            self._step(1)
        return self

    def unref(self) -> None:
        """Drop a reference atomically; destruct when it was the last one."""
        with self._lock:
            remaining = self._step(-1)
        if remaining == 0:
            self.destruct()