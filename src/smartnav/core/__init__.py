"""Core runtime aggregator.

Exposes the runtime building blocks from a single module; importing it only
imports, it never registers plugins or builds routers.

- ``segments`` → path segments and ``compare_path`` (path matcher)
- ``compiler`` → ``RouteConfig``, ``CompiledRoute``, ``compile_routes``
- ``resolver`` → ``MatchResult``, ``resolve``
- ``base_router`` → ``BaseRouter`` (plugin-free state machine)
- ``router`` → ``Router`` (plugin-enabled)
- ``history`` → ``MemoryHistory``, ``HashHistory``
- ``views`` → ``ViewSlot``, ``resolve_view``, ``Link``
"""

from .base_router import BaseRouter, RouterState, RouteSnapshot
from .compiler import CompiledRoute, RouteConfig, compile_route, compile_routes
from .errors import ConfigError, HookError, RedirectLoopError
from .factory import create_router
from .history import HashHistory, History, MemoryHistory
from .resolver import MatchResult, resolve
from .router import Router
from .segments import Literal, Param, Wildcard, compare_path, compile_path, split_path
from .state import ReadonlyRef, Ref
from .views import Link, ViewSlot, resolve_view

__all__ = [
    "BaseRouter",
    "Router",
    "RouterState",
    "RouteSnapshot",
    "RouteConfig",
    "CompiledRoute",
    "compile_route",
    "compile_routes",
    "ConfigError",
    "HookError",
    "RedirectLoopError",
    "create_router",
    "History",
    "MemoryHistory",
    "HashHistory",
    "MatchResult",
    "resolve",
    "Literal",
    "Param",
    "Wildcard",
    "compare_path",
    "compile_path",
    "split_path",
    "Ref",
    "ReadonlyRef",
    "Link",
    "ViewSlot",
    "resolve_view",
]
