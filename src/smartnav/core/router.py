"""Router with plugin pipeline (source of truth).

``Router`` extends ``BaseRouter`` with a global plugin registry, per-router
plugin instances, navigation middleware and plugin state stored on the router
instance.

Internal state
--------------
- ``_plugin_specs``: list of ``_PluginSpec`` (factory, kwargs copy).
- ``_plugins``: instantiated plugins in the order they were attached.
- ``_plugins_by_name``: name → plugin instance.
- ``_plugin_info``: per-plugin store ``{"config": {...}, "locals": {...}}``.

Global registry
---------------
``Router.register_plugin(plugin_class, name=None)`` requires a ``BasePlugin``
subclass (``TypeError`` otherwise) with a ``plugin_code`` (``ValueError``
otherwise). Without an explicit ``name`` a collision with a different class
raises ``ValueError``; an explicit ``name`` overwrites. ``available_plugins``
returns a shallow copy of the registry.

Attaching plugins
-----------------
``plug(name, **config)`` instantiates the registered class, appends it to
``_plugins``, registers its ``process_route`` vote as a router hook when the
class overrides it, and returns ``self``. Plugging the same name twice raises
``ValueError``. ``__getattr__`` exposes attached plugins by name or raises
``AttributeError``. ``Router(routes, plugins=...)`` plugs before the initial
navigation; ``plugins`` is a sequence of names or a mapping of name → config.

Wrapping pipeline
-----------------
``_wrap_update`` wraps ``_update_route`` with every plugin's
``wrap_navigation``; the first plugin attached is the outermost layer. A
plugin that is disabled (``set_plugin_enabled(name, False)`` or config
``enabled=False``) is skipped both as middleware and as a voter.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import wraps
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Type, Union

from smartnav.core.base_router import BaseRouter, RouteSnapshot
from smartnav.plugins._base_plugin import BasePlugin

__all__ = ["Router"]

_PLUGIN_REGISTRY: Dict[str, Type[BasePlugin]] = {}

PluginsOption = Union[Sequence[str], Mapping[str, Mapping[str, Any]], None]


@dataclass
class _PluginSpec:
    factory: Type[BasePlugin]
    kwargs: Dict[str, Any]

    def instantiate(self, router: "Router") -> BasePlugin:
        return self.factory(router=router, **self.kwargs)


class Router(BaseRouter):
    """Router with plugin registry/pipeline support."""

    __slots__ = BaseRouter.__slots__ + (
        "_plugin_specs",
        "_plugins",
        "_plugins_by_name",
        "_plugin_info",
        "_initial_plugins",
    )

    def __init__(self, routes: Sequence[Any], *, plugins: PluginsOption = None, **kwargs: Any):
        self._plugin_specs: List[_PluginSpec] = []
        self._plugins: List[BasePlugin] = []
        self._plugins_by_name: Dict[str, BasePlugin] = {}
        self._plugin_info: Dict[str, Dict[str, Any]] = {}
        self._initial_plugins = plugins
        super().__init__(routes, **kwargs)

    # ------------------------------------------------------------------
    # Plugin registration
    # ------------------------------------------------------------------
    @classmethod
    def register_plugin(cls, plugin_class: Type[BasePlugin], name: Optional[str] = None) -> None:
        """Register a plugin class globally under its ``plugin_code`` (or ``name``)."""
        if not isinstance(plugin_class, type) or not issubclass(plugin_class, BasePlugin):
            raise TypeError("plugin_class must be a BasePlugin subclass")
        if not getattr(plugin_class, "plugin_code", None):
            raise ValueError(
                f"Plugin {plugin_class.__name__} not following standards: missing plugin_code"
            )
        code = name or plugin_class.plugin_code
        if name is None:
            existing = _PLUGIN_REGISTRY.get(code)
            if existing is not None and existing is not plugin_class:
                raise ValueError(f"Plugin '{code}' already registered")
        _PLUGIN_REGISTRY[code] = plugin_class

    @classmethod
    def available_plugins(cls) -> Dict[str, Type[BasePlugin]]:
        return dict(_PLUGIN_REGISTRY)

    def plug(self, plugin: str, **config: Any) -> "Router":
        """Attach a plugin by name (previously registered globally)."""
        if not isinstance(plugin, str):
            raise TypeError(
                f"Plugin must be referenced by name string, got {type(plugin).__name__}"
            )
        plugin_class = _PLUGIN_REGISTRY.get(plugin)
        if plugin_class is None:
            available = ", ".join(sorted(_PLUGIN_REGISTRY)) or "none"
            raise ValueError(
                f"Unknown plugin '{plugin}'. Register it first. Available plugins: {available}"
            )
        if plugin_class.plugin_code in self._plugins_by_name:
            raise ValueError(f"Plugin '{plugin_class.plugin_code}' already attached")
        spec = _PluginSpec(plugin_class, dict(config))
        self._plugin_specs.append(spec)
        instance = spec.instantiate(self)
        self._plugins.append(instance)
        self._plugins_by_name[instance.name] = instance
        if type(instance).process_route is not BasePlugin.process_route:
            self.process_route(self._plugin_vote(instance))
        return self

    def iter_plugins(self) -> List[BasePlugin]:
        """Return attached plugin instances in application order."""
        return list(self._plugins)

    def get_config(self, plugin_name: str) -> Dict[str, Any]:
        return self._require_plugin(plugin_name).configuration()

    def __getattr__(self, name: str) -> Any:
        plugin = self._plugins_by_name.get(name)
        if plugin is None:
            raise AttributeError(f"No plugin named '{name}' attached to router")
        return plugin

    # ------------------------------------------------------------------
    # Runtime flags
    # ------------------------------------------------------------------
    def set_plugin_enabled(self, plugin_name: str, enabled: bool = True) -> None:
        self._require_plugin(plugin_name)
        bucket = self._plugin_info.setdefault(plugin_name, {"config": {}, "locals": {}})
        bucket.setdefault("locals", {})["enabled"] = bool(enabled)

    def is_plugin_enabled(self, plugin_name: str) -> bool:
        self._require_plugin(plugin_name)
        bucket = self._plugin_info.get(plugin_name, {})
        plugin_locals = bucket.get("locals", {})
        if "enabled" in plugin_locals:
            return bool(plugin_locals["enabled"])
        return bool(bucket.get("config", {}).get("enabled", True))

    def _require_plugin(self, plugin_name: str) -> BasePlugin:
        plugin = self._plugins_by_name.get(plugin_name)
        if plugin is None:
            raise AttributeError(f"No plugin named '{plugin_name}' attached to router")
        return plugin

    # ------------------------------------------------------------------
    # Overrides/hooks
    # ------------------------------------------------------------------
    def _before_start(self) -> None:
        initial = self._initial_plugins
        if not initial:
            return
        if isinstance(initial, Mapping):
            for plugin_name, config in initial.items():
                self.plug(plugin_name, **dict(config or {}))
        else:
            for plugin_name in initial:
                self.plug(plugin_name)

    def _wrap_update(self, call_next: Callable[[str], None]) -> Callable[[str], None]:
        wrapped = call_next
        for plugin in reversed(self._plugins):
            plugin_call = plugin.wrap_navigation(self, wrapped)
            wrapped = self._create_wrapper(plugin, plugin_call, wrapped)
        return wrapped

    def _create_wrapper(
        self,
        plugin: BasePlugin,
        plugin_call: Callable[[str], None],
        next_call: Callable[[str], None],
    ) -> Callable[[str], None]:
        @wraps(next_call)
        def wrapper(raw_path: str) -> None:
            if not self.is_plugin_enabled(plugin.name):
                return next_call(raw_path)
            return plugin_call(raw_path)

        return wrapper

    def _plugin_vote(self, plugin: BasePlugin) -> Callable[[RouteSnapshot, RouteSnapshot], Any]:
        def vote(from_: RouteSnapshot, to: RouteSnapshot) -> Any:
            if not self.is_plugin_enabled(plugin.name):
                return None
            return plugin.process_route(self, from_, to)

        vote.__qualname__ = f"{type(plugin).__name__}.process_route"
        return vote
