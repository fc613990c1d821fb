"""History adapters (source of truth).

The router never talks to a platform directly. It receives an adapter that
offers one small capability set:

- ``read_current_path()`` → raw path string to resolve;
- ``read_query()`` → opaque query string (``None`` when the adapter has no
  notion of one);
- ``write_path(path)`` → record a new location; does *not* notify;
- ``subscribe(on_change)`` → call ``on_change()`` on platform-driven moves
  (back/forward, fragment change); returns an unsubscribe function;
- ``href_prefix`` → prefix used when generating link targets.

Two in-memory adapters are provided:

``MemoryHistory``
    Path based. Keeps a stack of locations (``path`` plus optional
    ``?query``); ``write_path`` pushes and drops forward entries; ``back``,
    ``forward`` and ``go`` move within the stack and notify subscribers.
    ``href_prefix`` is ``""``.

``HashHistory``
    Fragment based. Stores a full location and reads the path from its
    fragment (``#`` stripped). ``write_path`` sets the fragment to
    ``"#" + path``; ``set_fragment`` simulates an external hash change and
    notifies. It keeps the same back/forward stack as ``MemoryHistory``.
    ``href_prefix`` is ``"#"``.
"""

from __future__ import annotations

from typing import Callable, List, Optional

__all__ = ["History", "MemoryHistory", "HashHistory"]


class History:
    """Capability set consumed by the router."""

    href_prefix: str = ""

    def __init__(self, initial: str = "/"):
        self._entries: List[str] = [initial]
        self._index = 0
        self._listeners: List[Callable[[], None]] = []

    @property
    def location(self) -> str:
        return self._entries[self._index]

    @property
    def length(self) -> int:
        return len(self._entries)

    def read_current_path(self) -> str:  # pragma: no cover - abstract
        raise NotImplementedError

    def read_query(self) -> Optional[str]:
        return None

    def write_path(self, path: str) -> None:
        self._push(path)

    def subscribe(self, on_change: Callable[[], None]) -> Callable[[], None]:
        self._listeners.append(on_change)

        def unsubscribe() -> None:
            if on_change in self._listeners:
                self._listeners.remove(on_change)

        return unsubscribe

    def back(self) -> None:
        self.go(-1)

    def forward(self) -> None:
        self.go(1)

    def go(self, delta: int) -> None:
        index = self._index + delta
        if delta == 0 or not 0 <= index < len(self._entries):
            return
        self._index = index
        self._notify()

    def _push(self, location: str) -> None:
        del self._entries[self._index + 1 :]
        self._entries.append(location)
        self._index += 1

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()


class MemoryHistory(History):
    """Path-based adapter backed by an in-memory stack."""

    def read_current_path(self) -> str:
        path, _, _ = self.location.partition("?")
        return path

    def read_query(self) -> str:
        _, sep, query = self.location.partition("?")
        return sep + query if sep else ""


class HashHistory(History):
    """Fragment-based adapter; the path lives after ``#``."""

    href_prefix = "#"

    def __init__(self, initial: str = ""):
        super().__init__(initial)

    @property
    def fragment(self) -> str:
        _, sep, fragment = self.location.partition("#")
        return sep + fragment if sep else ""

    def read_current_path(self) -> str:
        return self.fragment[1:]

    def write_path(self, path: str) -> None:
        self._push(self._with_fragment("#" + path))

    def set_fragment(self, fragment: str) -> None:
        """Change the fragment as the platform would and notify listeners."""
        if not fragment.startswith("#"):
            fragment = "#" + fragment
        self._push(self._with_fragment(fragment))
        self._notify()

    def _with_fragment(self, fragment: str) -> str:
        base, _, _ = self.location.partition("#")
        return base + fragment
