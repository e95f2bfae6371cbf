"""Plugin install: wire a router into a host framework.

``install()`` is the usual entry point::

    router = await install(host, RouterConfig(layout=root, routes=routes), location=location)

It registers inline route components with the host, builds the router,
publishes it as ``host.router``, and starts it unless
``auto_start=False``.
"""

import logging
from dataclasses import replace

from perch.components import ByName, ComponentDefinition, Inline
from perch.config import RouteDefinition, RouterConfig
from perch.host import Host
from perch.location.port import LocationPort
from perch.router import Router

logger = logging.getLogger("perch.plugin")

AUTO_NAME_PREFIX = "AutoRegComponent_"


def register_route_components(host: Host, config: RouterConfig) -> RouterConfig:
    """Register inline route components and return a config that names them.

    Each inline definition is registered under its own ``name``, or under
    ``AutoRegComponent_<n>`` when it has none. The returned config refers
    to those components by name; *config* itself is left untouched.
    """
    counter = 0
    routes: list[RouteDefinition] = []

    for route in config.routes:
        component = route.component
        if isinstance(component, Inline):
            component = component.definition

        if isinstance(component, ComponentDefinition):
            name = component.name
            if not name:
                name = f"{AUTO_NAME_PREFIX}{counter}"
                counter += 1
            host.register_component(name, component)
            logger.debug("Registered route component %r for %r", name, route.path)
            route = replace(route, component=ByName(name))

        routes.append(route)

    return replace(config, routes=tuple(routes))


async def install(host: Host, config: RouterConfig, *, location: LocationPort) -> Router:
    """Install a router into *host* and return it.

    Configuration errors propagate. A failure while auto-starting is
    logged and the router is still returned, unstarted.
    """
    try:
        router = Router(host, register_route_components(host, config), location=location)
    except Exception:
        logger.exception("Failed to install router")
        raise

    host.router = router  # type: ignore[attr-defined]

    if config.auto_start:
        try:
            await router.start()
        except Exception:
            logger.exception("Failed to auto-start router")

    return router
