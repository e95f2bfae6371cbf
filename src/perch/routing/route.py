"""Segment, RoutePattern, RouteMatch, and RouteInfo frozen dataclasses."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from perch.components import ComponentRef


class SegmentKind(Enum):
    STATIC = "static"
    PARAM = "param"
    CATCH_ALL = "catch_all"


@dataclass(frozen=True, slots=True)
class Segment:
    """A compiled segment of a route pattern.

    Static:    ``/users``   (kind=STATIC, value="users")
    Param:     ``/:id``     (kind=PARAM, name="id")
    Catch-all: ``/:path*``  (kind=CATCH_ALL, name="path")
    """

    kind: SegmentKind
    value: str
    name: str | None = None

    @property
    def is_param(self) -> bool:
        return self.kind is not SegmentKind.STATIC


@dataclass(frozen=True, slots=True)
class RoutePattern:
    """A compiled route. Created at registration time, never mutated."""

    raw_path: str
    segments: tuple[Segment, ...]
    component: ComponentRef
    props: Mapping[str, Any] = field(default_factory=dict)

    @property
    def is_root(self) -> bool:
        return self.raw_path == "/"

    @property
    def has_catch_all(self) -> bool:
        return any(seg.kind is SegmentKind.CATCH_ALL for seg in self.segments)


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    route: RoutePattern
    params: dict[str, str]


@dataclass(frozen=True, slots=True)
class RouteInfo:
    """Route context injected into a mounted component as ``route``."""

    path: str
    query: dict[str, str]
    full_url: str
    params: dict[str, str]
    matched_route: str
