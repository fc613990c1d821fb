"""Plugin contract used by the Router runtime.

Source of truth
---------------
``BasePlugin`` is the base class every plugin *must* subclass.

Required class attributes:

- ``plugin_code`` – unique identifier used for registration (e.g. "logging")
- ``plugin_description`` – human-readable description of the plugin

Constructor signature: ``BasePlugin(router, **config)``. ``router`` is the
owning ``Router``; ``**config`` goes through ``configure()``.

``configure(**config)``
    Subclasses declare accepted options through the method signature. The
    method is wrapped by ``__init_subclass__`` to:

    - parse ``flags`` (``"enabled,before:off"``) into booleans;
    - validate the remaining kwargs with pydantic's ``validate_call``;
    - write the validated options to the router's ``_plugin_info`` store.

``configuration()``
    Returns the stored options (read counterpart of ``configure()``).

Hooks (all optional):

``wrap_navigation(router, call_next)``
    Middleware around ``_update_route``; receives the next callable
    (``call_next(raw_path)``) and returns a callable with the same signature.

``process_route(router, from_, to)``
    A vote in the hook pipeline, registered when the plugin is plugged. Same
    contract as user hooks: return a non-empty string to redirect.

Configuration lives on the router, never on the plugin, so two routers
plugging the same plugin class never share state.
"""

from __future__ import annotations

from typing import Any, Callable, Dict, Optional

from pydantic import validate_call

__all__ = ["BasePlugin"]


def _wrap_configure(original_configure: Callable) -> Callable:
    """Wrap a plugin's configure() to parse flags, validate and store options."""
    validated = validate_call(original_configure)

    def wrapper(self: "BasePlugin", *, flags: Optional[str] = None, **kwargs: Any) -> None:
        if flags:
            kwargs.update(self._parse_flags(flags))
        validated(self, **kwargs)
        self._write_config(kwargs)

    return wrapper


class BasePlugin:
    """Hook interface + configuration helpers for router plugins."""

    __slots__ = ("name", "_router")

    plugin_code: str = ""
    plugin_description: str = ""

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if "configure" in cls.__dict__:
            cls.configure = _wrap_configure(cls.__dict__["configure"])

    def __init__(self, router: Any, **config: Any):
        self.name = self.plugin_code
        self._router = router
        self._get_store().setdefault(self.name, {"config": {"enabled": True}, "locals": {}})
        self.configure(**config)

    def configure(self, *, flags: Optional[str] = None) -> None:
        """Override in subclasses to declare accepted options."""
        if flags:
            self._write_config(self._parse_flags(flags))

    def configuration(self) -> Dict[str, Any]:
        bucket = self._get_store().get(self.name)
        if not bucket:
            return {}
        return dict(bucket.get("config", {}))

    def _write_config(self, config: Dict[str, Any]) -> None:
        if not config:
            return
        bucket = self._get_store().setdefault(self.name, {"config": {}, "locals": {}})
        bucket["config"].update(config)

    def _parse_flags(self, flags: str) -> Dict[str, bool]:
        mapping: Dict[str, bool] = {}
        for chunk in flags.split(","):
            chunk = chunk.strip()
            if not chunk:
                continue
            if ":" in chunk:
                name, value = chunk.split(":", 1)
                mapping[name.strip()] = value.strip().lower() != "off"
            else:
                mapping[chunk] = True
        return mapping

    def wrap_navigation(self, router: Any, call_next: Callable[[str], None]) -> Callable[[str], None]:
        """Wrap navigation resolution; default passthrough."""
        return call_next

    def process_route(self, router: Any, from_: Any, to: Any) -> Optional[str]:
        """Vote on a matched navigation; default abstains."""
        return None

    def _get_store(self) -> Dict[str, Any]:
        return getattr(self._router, "_plugin_info")
