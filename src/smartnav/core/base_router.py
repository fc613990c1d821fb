"""Plugin-free navigation state machine (source of truth).

The module exposes :class:`BaseRouter`, which owns a compiled route tree and
the reactive state cells observed by the rendering layer. Subclasses add
middleware but must preserve these semantics.

Constructor
-----------
::

    BaseRouter(routes, *, fallback=None, history=None, hash=False,
               max_redirects=16)

- ``fallback`` (global lazy-route fallback) must be a renderable; a loader or
  any other object raises ``ConfigError``.
- ``history`` is the platform adapter; when omitted a ``HashHistory`` is used
  if ``hash`` is true, else a ``MemoryHistory``.
- Routes are compiled through ``_set_routes``; the router then subscribes to
  the adapter and runs an initial ``_refresh_route``.

State
-----
``path``, ``query_params``, ``params``, ``meta`` and ``current_routes`` are
``ReadonlyRef`` views; only the navigation pipeline writes the underlying
cells. ``state`` is ``RouterState.IDLE`` until the first commit.

Navigation pipeline
-------------------
``navigate(path)`` writes to the adapter and refreshes. ``_refresh_route``
reads the adapter's path and query; when the path differs from the last one
seen it calls ``_update_route`` through ``_wrap_update`` (identity here,
plugin middleware in ``Router``).

``_update_route(raw)``:

1. ``split_path`` + ``resolve`` against the compiled tree.
2. On a match, every hook runs in registration order with ``from`` (committed
   state) and ``to`` (candidate) ``RouteSnapshot`` objects. The first
   non-empty string wins. Exceptions become ``HookError`` and are logged on the
   ``smartnav`` logger; awaitables are not awaited (coroutines are closed) and
   count as no vote.
3. A hook redirect, else a static ``redirect`` on the first matched route,
   writes the target to the adapter and re-resolves it inline instead of
   committing, even when the target equals the path being resolved. More
   than ``max_redirects`` nested redirects raise ``RedirectLoopError``; the
   outermost refresh then restores ``path`` to its value before the failed
   navigation. Adapter entries pushed by the chain are kept.
4. Otherwise the match is committed (``{}``, ``{}``, ``[]`` when nothing
   matched).

Hooks
-----
``process_route(fn)`` appends ``fn(from_, to) -> str | None`` and returns it,
so it can be used as a decorator. Hooks cannot be removed.
"""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, List, Mapping, Optional, Sequence, Tuple

from .compiler import CompiledRoute, compile_routes
from .components import is_component
from .errors import ConfigError, HookError, RedirectLoopError
from .history import HashHistory, History, MemoryHistory
from .resolver import MatchResult, resolve
from .segments import split_path
from .state import Ref

__all__ = ["BaseRouter", "RouterState", "RouteSnapshot", "DEFAULT_MAX_REDIRECTS"]

logger = logging.getLogger("smartnav")

DEFAULT_MAX_REDIRECTS = 16

RouteHook = Callable[["RouteSnapshot", "RouteSnapshot"], Any]


class RouterState(str, Enum):
    IDLE = "idle"
    RESOLVED = "resolved"


@dataclass(frozen=True)
class RouteSnapshot:
    """Read-only view of a navigation result handed to hooks."""

    meta: Mapping[str, Any]
    params: Mapping[str, str]
    routes: Tuple[CompiledRoute, ...]

    @classmethod
    def build(
        cls, meta: Mapping[str, Any], params: Mapping[str, str], routes: Sequence[CompiledRoute]
    ) -> "RouteSnapshot":
        return cls(MappingProxyType(dict(meta)), MappingProxyType(dict(params)), tuple(routes))

    @classmethod
    def from_match(cls, match: MatchResult) -> "RouteSnapshot":
        return cls.build(match.meta, match.params, match.routes)


class BaseRouter:
    """Navigation state machine bound to a history adapter."""

    __slots__ = (
        "routes",
        "fallback",
        "history",
        "hooks",
        "state",
        "max_redirects",
        "_path",
        "_query_params",
        "_params",
        "_meta",
        "_current_routes",
        "_redirect_depth",
        "_unsubscribe",
        "path",
        "query_params",
        "params",
        "meta",
        "current_routes",
    )

    def __init__(
        self,
        routes: Sequence[Any],
        *,
        fallback: Any = None,
        history: Optional[History] = None,
        hash: bool = False,  # noqa: A002 - mirrors the router option name
        max_redirects: int = DEFAULT_MAX_REDIRECTS,
    ) -> None:
        if fallback is not None and not is_component(fallback):
            raise ConfigError("Router fallback must be a renderable component")
        if max_redirects < 0:
            raise ValueError("max_redirects cannot be negative")
        self.fallback = fallback
        self.max_redirects = max_redirects
        if history is None:
            history = HashHistory() if hash else MemoryHistory()
        self.history = history
        self.hooks: List[RouteHook] = []
        self.state = RouterState.IDLE
        self.routes: Tuple[CompiledRoute, ...] = ()
        self._redirect_depth = 0

        self._path: Ref[Optional[str]] = Ref(None)
        self._query_params: Ref[Optional[str]] = Ref(None)
        self._params: Ref[Mapping[str, str]] = Ref({})
        self._meta: Ref[Mapping[str, Any]] = Ref({})
        self._current_routes: Ref[List[CompiledRoute]] = Ref([])
        self.path = self._path.readonly()
        self.query_params = self._query_params.readonly()
        self.params = self._params.readonly()
        self.meta = self._meta.readonly()
        self.current_routes = self._current_routes.readonly()

        self._set_routes(routes)
        self._before_start()
        self._unsubscribe = self.history.subscribe(self._refresh_route)
        self._refresh_route()

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------
    def _set_routes(self, routes: Sequence[Any]) -> None:
        """Compile and replace the whole route tree."""
        self.routes = compile_routes(routes)

    def process_route(self, hook: RouteHook) -> RouteHook:
        """Register a hook consulted after every successful match."""
        if not callable(hook):
            raise TypeError("process_route() requires a callable")
        self.hooks.append(hook)
        return hook

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def navigate(self, path: str) -> None:
        if not isinstance(path, str):
            raise TypeError(f"navigate() expects a path string, got {type(path).__name__}")
        self.history.write_path(path)
        self._refresh_route()

    def resolve(self, path: str) -> Optional[MatchResult]:
        """Resolve ``path`` without running hooks or touching state."""
        return resolve(split_path(path), self.routes)

    def href(self, path: str) -> str:
        return (self.history.href_prefix or "") + path

    def snapshot(self) -> RouteSnapshot:
        return RouteSnapshot.build(self._meta.value, self._params.value, self._current_routes.value)

    def close(self) -> None:
        """Stop listening to the history adapter."""
        self._unsubscribe()

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------
    def _refresh_route(self, force: bool = False) -> None:
        new_path = self.history.read_current_path()
        self._query_params.value = self.history.read_query()
        if not force and self._path.value == new_path:
            return
        previous = self._path.value
        self._path.value = new_path
        try:
            self._wrap_update(self._update_route)(new_path)
        except RedirectLoopError:
            if not self._redirect_depth:
                self._path.value = previous
            raise

    def _before_start(self) -> None:
        """Hook for subclasses; runs once before the initial refresh."""

    def _wrap_update(self, call_next: Callable[[str], None]) -> Callable[[str], None]:
        """Hook for subclasses to add middleware around ``_update_route``."""
        return call_next

    def _update_route(self, raw_path: str) -> None:
        matched = resolve(split_path(raw_path), self.routes)

        if matched is not None:
            target = self._run_hooks(self.snapshot(), RouteSnapshot.from_match(matched))
            if target is None:
                target = matched.routes[0].redirect
            if target:
                logger.debug("Redirecting %r to %r", raw_path, target)
                self._redirect(target)
                return

        self._commit(matched)

    def _run_hooks(self, from_: RouteSnapshot, to: RouteSnapshot) -> Optional[str]:
        for hook in list(self.hooks):
            try:
                verdict = hook(from_, to)
            except Exception as exc:
                logger.error("%s", HookError(hook, exc), exc_info=exc)
                continue
            if inspect.isawaitable(verdict):
                if inspect.iscoroutine(verdict):
                    verdict.close()
                continue
            if isinstance(verdict, str) and verdict:
                return verdict
        return None

    def _redirect(self, target: str) -> None:
        if self._redirect_depth >= self.max_redirects:
            raise RedirectLoopError(target, self.max_redirects)
        self._redirect_depth += 1
        try:
            self.history.write_path(target)
            self._refresh_route(force=True)
        finally:
            self._redirect_depth -= 1

    def _commit(self, matched: Optional[MatchResult]) -> None:
        if matched is None:
            logger.debug("No route matches %r", self._path.value)
            self._meta.value = {}
            self._params.value = {}
            self._current_routes.value = []
        else:
            self._meta.value = matched.meta
            self._params.value = matched.params
            self._current_routes.value = matched.routes
        self.state = RouterState.RESOLVED
