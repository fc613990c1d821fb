"""Route resolver (source of truth).

``resolve(target, routes)`` walks siblings in declaration order and returns
the first successful ``MatchResult``; specificity never reorders siblings.

For a candidate whose path matches (see ``compare_path``):

- ``remaining`` is ``target`` without the consumed prefix (the length of the
  candidate's compiled path);
- the candidate must delegate to its children when any of these holds:
  (a) ``remaining`` is non-empty and the match did not end on a wildcard;
  (b) the candidate is a grouping node (not root-capable);
  (c) ``has_matching_child`` finds a child whose own path matches
  ``remaining`` and is no longer than it, so a lone ``*`` child does not
  claim an empty remainder. The probe never recurses, so a parent with a
  matching child delegates even when the deep resolution later fails;
- delegating fails the candidate (next sibling) when there are no children or
  the recursive resolution finds nothing. Otherwise params and meta are merged
  parent first, child keys winning, and the candidate is prepended to the
  child's chain only if it is root-capable;
- a terminal candidate yields its own params, ``meta or {}`` and ``[route]``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from .compiler import CompiledRoute
from .segments import compare_path

__all__ = ["MatchResult", "has_matching_child", "resolve"]


@dataclass
class MatchResult:
    params: Dict[str, str] = field(default_factory=dict)
    meta: Dict[str, Any] = field(default_factory=dict)
    routes: List[CompiledRoute] = field(default_factory=list)


def has_matching_child(remaining: Sequence[str], children: Optional[Sequence[CompiledRoute]]) -> bool:
    if not children:
        return False
    return any(
        len(child.path) <= len(remaining) and compare_path(child.path, remaining) is not None
        for child in children
    )


def resolve(target: Sequence[str], routes: Sequence[CompiledRoute]) -> Optional[MatchResult]:
    for route in routes:
        matched = compare_path(route.path, target)
        if matched is None:
            continue

        is_root = route.is_root
        remaining = target[len(route.path):]
        delegate = (
            (bool(remaining) and not matched.wildcard)
            or not is_root
            or has_matching_child(remaining, route.children)
        )

        if not delegate:
            return MatchResult(
                params=matched.params,
                meta=dict(route.meta or {}),
                routes=[route],
            )

        if not route.children:
            continue
        child = resolve(remaining, route.children)
        if child is None:
            continue

        return MatchResult(
            params={**matched.params, **child.params},
            meta={**(route.meta or {}), **child.meta},
            routes=[route, *child.routes] if is_root else child.routes,
        )

    return None
