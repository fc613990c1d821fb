"""Router factory.

``create_router(**options)`` builds a plugin-enabled ``Router`` from keyword
options and returns it; no global "current router" is kept. Options are
merged with defaults through ``SmartOptions``:

- ``routes`` (required), ``fallback=None``, ``hash=False``, ``history=None``,
  ``plugins=None`` (names or name → config mapping), ``max_redirects=16``.
"""

from __future__ import annotations

from typing import Any

from smartseeds import SmartOptions

from .base_router import DEFAULT_MAX_REDIRECTS
from .errors import ConfigError
from .router import Router

__all__ = ["create_router"]

_DEFAULTS = {
    "fallback": None,
    "hash": False,
    "history": None,
    "plugins": None,
    "max_redirects": DEFAULT_MAX_REDIRECTS,
}


def create_router(**options: Any) -> Router:
    opts = SmartOptions(options, defaults=_DEFAULTS)
    routes = getattr(opts, "routes", None)
    if routes is None:
        raise ConfigError("create_router() requires routes")
    return Router(
        routes,
        fallback=getattr(opts, "fallback", None),
        hash=bool(getattr(opts, "hash", False)),
        history=getattr(opts, "history", None),
        plugins=getattr(opts, "plugins", None),
        max_redirects=getattr(opts, "max_redirects", DEFAULT_MAX_REDIRECTS),
    )
