"""The router: lifecycle controller for route resolution and mounting.

One ``Router`` owns the route table, the mode adapter, and the handle of
the currently mounted view. On every navigation event it reads the URL,
matches a route, unmounts the previous view, and mounts the next one.

Concurrency:
    Everything runs on one event loop. Mount and unmount suspend, so a
    new navigation event can arrive mid-transition. ``route_changed()``
    keeps a single transition in flight: a call that arrives while one
    is running marks the URL dirty and returns, and the running
    transition re-reads the URL once it settles. At most one view is
    ever attached to the mount target, and the last URL always wins.

    ``add_route()`` during a pending transition is safe for the same
    reason: both run on the same loop, turn by turn. The new route is
    visible to the next resolution.
"""

import logging
from collections.abc import Mapping
from enum import Enum
from typing import Any

import anyio

from perch.components import wrap_component
from perch.config import Mode, RouteDefinition, RouterConfig
from perch.errors import MissingLayoutError, NoRouteError, ResolutionError
from perch.host import Host, MountedInstance
from perch.location.modes import ModeAdapter, create_mode_adapter
from perch.location.port import LocationPort, Unsubscribe
from perch.routing.compiler import compile_route, fill_params
from perch.routing.matcher import match_route
from perch.routing.query import parse_query
from perch.routing.route import RouteInfo, RoutePattern
from perch.view import ViewHandle, resolve_view

logger = logging.getLogger("perch.router")


class RouterState(Enum):
    UNINITIALIZED = "uninitialized"
    STARTED = "started"
    STOPPED = "stopped"


class Router:
    """Client-side router.

    Usage::

        location = MemoryLocation("http://localhost/")
        router = Router(host, RouterConfig(layout=root, routes=routes), location=location)
        await router.start()
        await router.navigate("/users/:id", {"id": 42})
        await router.destroy()

    Raises ``ConfigurationError`` subclasses at construction time for a
    missing layout, an unknown mode, or a malformed route. Nothing raised
    while resolving a navigation escapes the router; it is logged instead.
    """

    __slots__ = (
        "_active",
        "_adapter",
        "_default_route",
        "_dirty",
        "_resolving",
        "_resolving_task",
        "_routes",
        "_state",
        "_unsubscribers",
        "config",
        "host",
        "location",
        "view",
    )

    def __init__(self, host: Host, config: RouterConfig, *, location: LocationPort) -> None:
        if config.layout is None:
            raise MissingLayoutError()

        self.host = host
        self.config = config
        self.location = location
        self.view: ViewHandle = resolve_view(config.layout, config.view_selector)

        self._adapter: ModeAdapter = create_mode_adapter(
            config.mode, location, query_param=config.query_param
        )
        self._routes: list[RoutePattern] = [compile_route(r) for r in config.routes]
        self._default_route: RoutePattern | None = (
            compile_route(config.default_route) if config.default_route is not None else None
        )

        self._state = RouterState.UNINITIALIZED
        self._unsubscribers: list[Unsubscribe] = []
        self._active: MountedInstance | None = None

        # Transition bookkeeping, see module docstring
        self._resolving: anyio.Event | None = None
        self._resolving_task: int | None = None
        self._dirty = False

    # -- Introspection --

    @property
    def mode(self) -> Mode:
        return self._adapter.mode

    @property
    def state(self) -> RouterState:
        return self._state

    @property
    def started(self) -> bool:
        return self._state is RouterState.STARTED

    @property
    def routes(self) -> tuple[RoutePattern, ...]:
        """Compiled routes in registration (and matching) order."""
        return tuple(self._routes)

    @property
    def default_route(self) -> RoutePattern | None:
        return self._default_route

    @property
    def active_instance(self) -> MountedInstance | None:
        """The currently mounted view, if any."""
        return self._active

    # -- Lifecycle --

    async def start(self) -> None:
        """Subscribe to navigation events and resolve the current URL.

        Calling ``start()`` on a started router logs a warning and
        returns. A stopped router can be started again.
        """
        if self.started:
            logger.warning("Router is already started")
            return

        try:
            unsubscribe = self.location.subscribe(self._adapter.event, self._on_location_change)
            self._unsubscribers.append(unsubscribe)
            self._state = RouterState.STARTED
            logger.debug("Router started in %s mode", self.mode)
            await self.route_changed()
        except Exception:
            logger.exception("Failed to start router")
            raise

    async def destroy(self) -> None:
        """Unsubscribe from navigation events and unmount the active view.

        Waits for an in-flight transition to settle before unmounting.
        Called from inside that transition (a component's setup), it
        returns at once and the transition unmounts its view when the
        mount completes. No-op unless the router is started.
        """
        if not self.started:
            return

        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()
        self._state = RouterState.STOPPED

        resolving = self._resolving
        if resolving is not None:
            if self._resolving_task == anyio.get_current_task().id:
                logger.debug("Router stopped during transition")
                return
            await resolving.wait()

        await self._unmount_active()
        logger.debug("Router stopped")

    async def _on_location_change(self) -> None:
        await self.route_changed()

    # -- Resolution --

    async def route_changed(self) -> None:
        """Resolve the current URL and mount the matching component.

        Invoked on every navigation event and once by ``start()``.
        Never raises: resolution misses are logged as warnings and
        unexpected failures with their traceback.
        """
        self._dirty = True
        if self._resolving is not None:
            logger.debug("Route change queued behind in-flight transition")
            return

        self._resolving = anyio.Event()
        self._resolving_task = anyio.get_current_task().id
        try:
            while self._dirty:
                self._dirty = False
                if not self.started:
                    logger.debug("Ignoring route change: router not started")
                    break
                try:
                    await self._transition()
                except ResolutionError as exc:
                    logger.warning("%s", exc)
                except Exception:
                    logger.exception("Error in route change")
        finally:
            self._resolving.set()
            self._resolving = None
            self._resolving_task = None

    async def _transition(self) -> None:
        url = self._adapter.read()
        query = parse_query(url.query_string)

        matched = match_route(self._routes, url.path)
        route: RoutePattern | None
        if matched is not None:
            route, params = matched.route, matched.params
        else:
            route, params = self._default_route, {}

        await self._unmount_active()

        if route is None:
            raise NoRouteError(url.path)

        info = RouteInfo(
            path=url.path,
            query=query,
            full_url=url.full_url,
            params=params,
            matched_route=route.raw_path,
        )
        wrapped = wrap_component(
            route.component, info, registry=self.host, navigate=self.navigate
        )
        self._active = await self.host.mount(self.view, wrapped, dict(route.props))
        logger.debug("Mounted %r for %s", route.raw_path, url.path)

        if not self.started:
            # destroy() ran while this view was mounting
            await self._unmount_active()

    async def _unmount_active(self) -> None:
        instance, self._active = self._active, None
        if instance is None:
            return
        try:
            await instance.unmount()
        except Exception:
            logger.warning("Error unmounting previous component", exc_info=True)

    # -- Navigation --

    async def navigate(self, path: str, params: Mapping[str, Any] | None = None) -> None:
        """Navigate to *path*, filling ``:name`` placeholders from *params*.

        In hash mode the fragment change raises ``hashchange`` and the
        router resolves when that event is delivered. Otherwise (query,
        history, and the hash-mode root) the router resolves before
        returning, unless another transition is already in flight: then
        the new URL is queued behind it and ``navigate`` returns before
        the view is mounted.
        """
        if not path or not isinstance(path, str):
            logger.error("Invalid path provided to navigate: %r", path)
            return

        try:
            target = fill_params(path, params)
            if self._adapter.write(target):
                await self.route_changed()
        except Exception:
            logger.exception("Error navigating to path %r", path)

    # -- Registration --

    def add_route(self, route: RouteDefinition | Mapping[str, Any]) -> RoutePattern:
        """Compile *route* and append it to the route table.

        Raises ``InvalidRouteError`` without touching the table if
        ``path`` or ``component`` is missing.
        """
        pattern = compile_route(route)
        self._routes.append(pattern)
        logger.debug("Added route %r", pattern.raw_path)
        return pattern
