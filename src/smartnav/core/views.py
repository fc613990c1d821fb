"""Rendering and link contract helpers (source of truth).

Nothing here renders. These helpers give a view layer what it needs to draw
the matched chain, with the router passed explicitly instead of read from a
global.

View slots
----------
Nested view slots each render the matched route at their own depth (``0`` for
the outermost slot). ``resolve_view(router, depth)`` returns a ``ViewSlot`` or
``None`` when the chain is shorter than ``depth + 1`` or the route at that
depth has no component.

- ``ViewSlot.lazy`` is true when the component is a loader; the view layer
  shows ``ViewSlot.fallback`` (route fallback, else router fallback) until the
  loader completes.
- ``ViewSlot.load()`` invokes the loader; coroutine loaders are called
  through ``smartasync`` so sync callers get the loaded component.
- ``ViewSlot.child()`` is the slot one level deeper.

Links
-----
``Link(router, to)`` exposes ``href`` (history ``href_prefix`` + ``to``) and
``activate()``, which calls ``router.navigate(to)`` instead of a full page
load and ignores non-string targets.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import Any, Optional

from smartseeds.typeutils import safe_is_instance

from .compiler import CompiledRoute

__all__ = ["ViewSlot", "resolve_view", "Link"]


def _check_router(router: Any) -> None:
    if not safe_is_instance(router, "smartnav.core.base_router.BaseRouter"):
        raise TypeError("A smartnav router instance is required")


@dataclass(frozen=True)
class ViewSlot:
    router: Any
    route: CompiledRoute
    depth: int

    @property
    def component(self) -> Any:
        return self.route.component

    @property
    def lazy(self) -> bool:
        return self.route.is_lazy

    @property
    def fallback(self) -> Any:
        if not self.lazy:
            return None
        return self.route.fallback or self.router.fallback

    def load(self) -> Any:
        if not self.lazy:
            return self.component
        loader = self.component
        if inspect.iscoroutinefunction(loader):
            from smartasync import smartasync  # type: ignore

            loader = smartasync(loader)
        return loader()

    def child(self) -> Optional["ViewSlot"]:
        return resolve_view(self.router, self.depth + 1)


def resolve_view(router: Any, depth: int = 0) -> Optional[ViewSlot]:
    _check_router(router)
    if depth < 0:
        raise ValueError("depth cannot be negative")
    routes = router.current_routes.value
    if depth >= len(routes):
        return None
    route = routes[depth]
    if route.component is None:
        return None
    return ViewSlot(router, route, depth)


class Link:
    __slots__ = ("router", "to")

    def __init__(self, router: Any, to: Any):
        _check_router(router)
        self.router = router
        self.to = to

    @property
    def href(self) -> str:
        return self.router.href(self.to if isinstance(self.to, str) else "")

    def activate(self) -> bool:
        """Navigate to ``to``; returns False when there is nothing to follow."""
        if not isinstance(self.to, str):
            return False
        self.router.navigate(self.to)
        return True
