"""Path segments and the path matcher (source of truth).

Segment kinds
-------------
A raw route path is split on ``/`` with empty chunks dropped, so leading,
trailing and duplicate slashes carry no meaning. Each chunk becomes:

- ``Param(name)`` when it starts with ``:`` (name is the remainder);
- ``Wildcard()`` when it starts with ``*`` (anything after ``*`` is ignored);
- ``Literal(value)`` otherwise.

``compile_path`` rejects a segment after a wildcard and a wildcard on a route
that also declares (non-empty) children; both raise ``ConfigError``.

Matching
--------
``compare_path(path, target)`` walks both sequences by index:

- returns ``None`` when ``path`` is longer than ``target``, except that a
  lone ``*`` matches a target of any length, including an empty one;
- ``Literal`` needs exact equality, ``Param`` binds the percent-decoded target
  segment, ``Wildcard`` stops the walk with ``wildcard=True`` no matter how
  much of ``target`` is left;
- a ``path`` shorter than ``target`` is a prefix match; the resolver decides
  what to do with the remainder.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple, Union
from urllib.parse import unquote

from .errors import ConfigError

__all__ = [
    "Literal",
    "Param",
    "Wildcard",
    "Segment",
    "PathMatch",
    "split_path",
    "compile_path",
    "compare_path",
]


@dataclass(frozen=True, slots=True)
class Literal:
    value: str


@dataclass(frozen=True, slots=True)
class Param:
    name: str


@dataclass(frozen=True, slots=True)
class Wildcard:
    pass


Segment = Union[Literal, Param, Wildcard]


@dataclass(slots=True)
class PathMatch:
    """Outcome of comparing one compiled path against target segments."""

    params: Dict[str, str] = field(default_factory=dict)
    wildcard: bool = False


def split_path(raw: str) -> List[str]:
    return [chunk for chunk in raw.split("/") if chunk]


def compile_path(raw: str, has_children: bool = False) -> Tuple[Segment, ...]:
    segments: List[Segment] = []
    has_wildcard = False
    for chunk in split_path(raw):
        if has_wildcard:
            raise ConfigError(f"Path {raw!r}: no segments allowed after a wildcard")
        if chunk.startswith(":"):
            segments.append(Param(chunk[1:]))
        elif chunk.startswith("*"):
            if has_children:
                raise ConfigError(f"Path {raw!r}: a wildcard route cannot have children")
            has_wildcard = True
            segments.append(Wildcard())
        else:
            segments.append(Literal(chunk))
    return tuple(segments)


def _fixed_length(path: Sequence[Segment]) -> int:
    if len(path) == 1 and isinstance(path[0], Wildcard):
        return 0
    return len(path)


def compare_path(path: Sequence[Segment], target: Sequence[str]) -> Optional[PathMatch]:
    if _fixed_length(path) > len(target):
        return None

    params: Dict[str, str] = {}
    for index, segment in enumerate(path):
        if isinstance(segment, Wildcard):
            return PathMatch(params, wildcard=True)
        if isinstance(segment, Param):
            params[segment.name] = unquote(target[index])
        elif target[index] != segment.value:
            return None
    return PathMatch(params, wildcard=False)
