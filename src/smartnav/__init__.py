"""SmartNav public API surface.

- Public exports: ``Router``, ``BaseRouter``, ``create_router``, the history
  adapters, view helpers and the error types.
- Plugin registration: built-in plugins (``logging``, ``guard``) are imported
  for their side effect of calling ``Router.register_plugin``. Imports are done
  lazily via ``import_module`` to avoid cycles.
- Version string lives here as ``__version__``.
"""

from importlib import import_module

__version__ = "0.1.0"

from .core import (
    BaseRouter,
    ConfigError,
    HashHistory,
    HookError,
    Link,
    MemoryHistory,
    RedirectLoopError,
    RouteConfig,
    Router,
    RouterState,
    RouteSnapshot,
    create_router,
    resolve_view,
)

# Import plugins to trigger auto-registration (lazy to avoid cycles)
for _plugin in ("logging", "guard"):
    import_module(f"{__name__}.plugins.{_plugin}")
del _plugin

__all__ = [
    "Router",
    "BaseRouter",
    "RouterState",
    "RouteSnapshot",
    "RouteConfig",
    "create_router",
    "MemoryHistory",
    "HashHistory",
    "Link",
    "resolve_view",
    "ConfigError",
    "HookError",
    "RedirectLoopError",
]
