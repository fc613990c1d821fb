"""Renderable/loader classification used by the compiler and views."""

from __future__ import annotations

from typing import Any

__all__ = ["is_component", "is_loader"]


def is_component(obj: Any) -> bool:
    """True for classes or instances exposing a callable ``render``."""
    return obj is not None and callable(getattr(obj, "render", None))


def is_loader(obj: Any) -> bool:
    """True for callables that load a component lazily (not renderables)."""
    return callable(obj) and not is_component(obj)
