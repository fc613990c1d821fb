"""Exception taxonomy for SmartNav.

``ConfigError`` aborts router construction; ``HookError`` is built around a
failing hook and only logged; ``RedirectLoopError`` stops runaway redirect
chains. A path that matches nothing is not an error: the router commits empty
state instead.
"""

from __future__ import annotations

from typing import Any, Callable

__all__ = ["ConfigError", "HookError", "RedirectLoopError"]


class ConfigError(ValueError):
    """Invalid route configuration or router options."""


class HookError(RuntimeError):
    """A route hook raised while voting on a navigation."""

    def __init__(self, hook: Callable[..., Any], error: BaseException):
        self.hook = hook
        self.error = error
        name = getattr(hook, "__qualname__", None) or repr(hook)
        super().__init__(f"Route hook {name} failed: {error!r}")


class RedirectLoopError(RuntimeError):
    """Redirect chain exceeded the router's ``max_redirects``."""

    def __init__(self, path: str, limit: int):
        self.path = path
        self.limit = limit
        super().__init__(f"Redirect chain exceeded {limit} hops (last target {path!r})")
