"""Router configuration.

RouterConfig is a frozen dataclass: immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from perch.components import ComponentDefinition, ComponentRef
    from perch.view import ViewHandle


class Mode(StrEnum):
    """How the current route is encoded in the URL."""

    HASH = "hash"  # /app#/users/42?tab=posts
    QUERY = "query"  # /app?page=/users/42&tab=posts
    HISTORY = "history"  # /users/42?tab=posts


@dataclass(frozen=True, slots=True)
class RouteDefinition:
    """A declarative route, as given in ``RouterConfig.routes``.

    ``component`` is a registered component name, an inline
    ``ComponentDefinition``, or a ``ComponentRef``.
    """

    path: str
    component: str | ComponentDefinition | ComponentRef
    props: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class RouterConfig:
    """Router configuration. Immutable after creation.

    Only ``layout`` is required. Override what you need::

        config = RouterConfig(
            layout=app_root,
            mode="history",
            routes=(
                RouteDefinition("/", "Home"),
                RouteDefinition("/users/:id", "UserDetail"),
            ),
        )
    """

    # Mount target (the router looks for a view element inside it)
    layout: ViewHandle | None = None
    view_selector: str = "view"  # Tried as #view, .view, view, [data-view]

    # URL encoding
    mode: str = Mode.HASH
    query_param: str = "page"  # Query mode only

    # Routes
    routes: tuple[RouteDefinition, ...] = ()
    default_route: RouteDefinition | None = None  # Mounted when nothing matches

    # Lifecycle
    auto_start: bool = True  # install() awaits router.start()
