"""Route compiler (source of truth).

Turns user-authored route configuration into immutable ``CompiledRoute``
trees. Compilation happens once per ``_set_routes`` call; compiled nodes are
never mutated afterwards.

Input
-----
``RouteConfig`` is a pydantic model. Plain mappings are validated into it and
unknown keys are rejected; any pydantic ``ValidationError`` surfaces as
``ConfigError`` chained to the original error.

Validation (in this order, all raise ``ConfigError``)
-----------------------------------------------------
1. ``component`` given but neither a renderable nor a callable loader.
2. none of ``component``, ``redirect``, ``children`` given.
3. ``redirect`` with ``children`` (even an empty list), or ``redirect`` on a
   route nested under a root-capable ancestor (``has_root``).
4. ``fallback`` given while ``component`` is not a loader, or ``fallback`` is
   itself a loader, or ``fallback`` is not a renderable.
5. path errors from ``compile_path`` (segment after wildcard, wildcard with
   children).

Children are compiled only after their parent passes every check above.

A route is root-capable (``is_root``) when it carries a component or a
redirect. Children are compiled with ``has_root`` set to the parent's
``is_root``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, ValidationError

from .components import is_component, is_loader
from .errors import ConfigError
from .segments import Segment, compile_path

__all__ = ["RouteConfig", "CompiledRoute", "compile_route", "compile_routes"]


class RouteConfig(BaseModel):
    """User-authored route definition."""

    model_config = ConfigDict(arbitrary_types_allowed=True, extra="forbid")

    path: str
    component: Any = None
    redirect: Optional[str] = None
    children: Optional[List["RouteConfig"]] = None
    fallback: Any = None
    meta: Optional[Dict[str, Any]] = None


RouteConfig.model_rebuild()


@dataclass(frozen=True)
class CompiledRoute:
    path: Tuple[Segment, ...]
    component: Any = None
    redirect: Optional[str] = None
    children: Optional[Tuple["CompiledRoute", ...]] = None
    fallback: Any = None
    meta: Optional[Dict[str, Any]] = None

    @property
    def is_root(self) -> bool:
        return self.component is not None or bool(self.redirect)

    @property
    def is_lazy(self) -> bool:
        return is_loader(self.component)


def _coerce(config: Any) -> RouteConfig:
    if isinstance(config, RouteConfig):
        return config
    if not isinstance(config, Mapping):
        raise ConfigError(f"Route must be a mapping or RouteConfig, got {type(config).__name__}")
    try:
        return RouteConfig.model_validate(dict(config))
    except ValidationError as exc:
        raise ConfigError(f"Invalid route configuration: {exc}") from exc


def compile_route(config: Any, has_root: bool = False) -> CompiledRoute:
    """Validate one route (and its subtree) and compile it."""
    route = _coerce(config)
    component = route.component
    has_children = route.children is not None

    if component is not None and not is_component(component) and not callable(component):
        raise ConfigError(f"Route {route.path!r}: component must be a renderable or a loader")
    if component is None and not route.redirect and not has_children:
        raise ConfigError(
            f"Route {route.path!r}: needs at least a component, a redirect or children"
        )
    if route.redirect and (has_children or has_root):
        raise ConfigError(
            f"Route {route.path!r}: a redirect cannot have children or live under a root route"
        )
    if route.fallback is not None:
        if not is_loader(component):
            raise ConfigError(f"Route {route.path!r}: fallback is only allowed on lazy routes")
        if is_loader(route.fallback):
            raise ConfigError(f"Route {route.path!r}: fallback cannot be a loader")
        if not is_component(route.fallback):
            raise ConfigError(f"Route {route.path!r}: fallback must be a renderable")

    path = compile_path(route.path, bool(route.children))
    is_root = component is not None or bool(route.redirect)
    children = None
    if has_children:
        children = tuple(compile_route(child, is_root) for child in route.children)

    return CompiledRoute(
        path=path,
        component=component,
        redirect=route.redirect or None,
        children=children,
        fallback=route.fallback,
        meta=dict(route.meta) if route.meta is not None else None,
    )


def compile_routes(configs: Sequence[Any]) -> Tuple[CompiledRoute, ...]:
    if isinstance(configs, (str, bytes, Mapping)) or not isinstance(configs, Sequence):
        raise ConfigError("routes must be a sequence of route definitions")
    return tuple(compile_route(config, False) for config in configs)
