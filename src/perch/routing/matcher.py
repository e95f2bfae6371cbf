"""Route matching.

Routes are tested in registration order and the first full match wins.
There is no specificity ranking: register ``/users/new`` before
``/users/:id`` or the parameter route will shadow it.
"""

import logging
from collections.abc import Sequence

from perch.routing.route import RouteMatch, RoutePattern, SegmentKind

logger = logging.getLogger("perch.routing")


def split_path(path: str) -> list[str]:
    """Split a URL path into its non-empty segments."""
    return [part for part in path.split("/") if part]


def match_route(routes: Sequence[RoutePattern], path: str) -> RouteMatch | None:
    """Return the first route in *routes* that matches *path*, or ``None``.

    ``"/"`` only ever matches a route registered as ``"/"``. A candidate
    that raises while being tested is logged and treated as a non-match.
    """
    if not path or not isinstance(path, str):
        logger.warning("Invalid path provided to match_route: %r", path)
        return None

    if path == "/":
        for route in routes:
            if route.is_root:
                return RouteMatch(route=route, params={})
        return None

    parts = split_path(path)

    for route in routes:
        if route.is_root:
            continue
        try:
            params = match_segments(route, parts)
        except Exception:
            logger.exception("Error matching route %r against %r", route.raw_path, path)
            continue
        if params is not None:
            return RouteMatch(route=route, params=params)

    return None


def match_segments(route: RoutePattern, parts: Sequence[str]) -> dict[str, str] | None:
    """Match one compiled route against split path *parts*.

    Returns the bound parameters, or ``None`` if the route does not match.
    """
    segments = route.segments

    # Catch-all routes may be shorter than the path
    if not route.has_catch_all and len(segments) != len(parts):
        return None

    params: dict[str, str] = {}
    for index, seg in enumerate(segments):
        # Path ran out before the pattern did
        if index >= len(parts):
            return None

        part = parts[index]
        if seg.kind is SegmentKind.STATIC:
            if seg.value != part:
                return None
        elif seg.kind is SegmentKind.CATCH_ALL:
            params[seg.name or ""] = "/".join(parts[index:])
            return params
        else:
            params[seg.name or ""] = part

    return params
