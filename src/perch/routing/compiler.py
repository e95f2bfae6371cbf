"""Path pattern compilation.

Patterns are compiled once, at registration, into a tuple of typed
segments. Matching never looks at the raw pattern again except to
recognise the root route.
"""

import logging
from collections.abc import Mapping
from typing import Any
from urllib.parse import quote

from perch.components import as_component_ref
from perch.config import RouteDefinition
from perch.errors import InvalidPatternError, InvalidRouteError
from perch.routing.route import RoutePattern, Segment, SegmentKind

logger = logging.getLogger("perch.routing")


def compile_path(pattern: str) -> list[Segment]:
    """Parse a route pattern string into segments.

    Examples::

        "/"               -> []
        "/users"          -> [Segment(STATIC, "users")]
        "/users/:id"      -> [Segment(STATIC, "users"), Segment(PARAM, ":id", name="id")]
        "/files/:path*"   -> [Segment(STATIC, "files"), Segment(CATCH_ALL, ":path*", name="path")]

    Raises ``InvalidPatternError`` if *pattern* is empty or not a string.
    """
    if not pattern or not isinstance(pattern, str):
        msg = f"Route path must be a non-empty string, got {pattern!r}"
        raise InvalidPatternError(msg)

    segments: list[Segment] = []
    for part in pattern.split("/"):
        if not part:
            continue
        if part.startswith(":"):
            name = part[1:]
            if name.endswith("*"):
                segments.append(Segment(SegmentKind.CATCH_ALL, part, name=name[:-1]))
            else:
                segments.append(Segment(SegmentKind.PARAM, part, name=name))
        else:
            segments.append(Segment(SegmentKind.STATIC, part))

    for seg in segments[:-1]:
        if seg.kind is SegmentKind.CATCH_ALL:
            logger.debug(
                "Segments after catch-all %r in %r are unreachable",
                seg.value,
                pattern,
            )
            break

    return segments


def compile_route(route: RouteDefinition | Mapping[str, Any]) -> RoutePattern:
    """Validate a route definition and compile it into a ``RoutePattern``.

    Accepts a ``RouteDefinition`` or a mapping with ``path``, ``component``
    and optional ``props`` keys.

    Raises ``InvalidRouteError`` if ``path`` or ``component`` is missing.
    Raises ``InvalidPatternError`` if the path cannot be compiled.
    """
    if isinstance(route, RouteDefinition):
        path, component, props = route.path, route.component, route.props
    elif isinstance(route, Mapping):
        path = route.get("path")
        component = route.get("component")
        props = route.get("props") or {}
    else:
        path = component = None
        props = {}

    if not path or not component:
        msg = "Route must have both 'path' and 'component'"
        raise InvalidRouteError(msg)

    try:
        ref = as_component_ref(component)
    except TypeError as exc:
        raise InvalidRouteError(str(exc)) from exc

    return RoutePattern(
        raw_path=path,
        segments=tuple(compile_path(path)),
        component=ref,
        props=dict(props),
    )


def fill_params(path: str, params: Mapping[str, object] | None) -> str:
    """Substitute ``:name`` placeholders in *path* with URL-encoded values.

    Only the first occurrence of each placeholder is replaced. Keys with
    no placeholder in *path* are ignored::

        fill_params("/users/:id", {"id": "a b"}) -> "/users/a%20b"
    """
    if not params:
        return path
    for key, value in params.items():
        path = path.replace(f":{key}", quote(str(value), safe="!~*'()"), 1)
    return path
