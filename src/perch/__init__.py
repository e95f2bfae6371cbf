"""Perch: a client-side route dispatcher for component frameworks.

Reads the active page from the URL (hash, query-parameter, or history
encoding), matches it against declared routes, and asks the host
framework to mount the matching component with the route injected.

Basic usage::

    from perch import MemoryLocation, RouteDefinition, RouterConfig, install

    config = RouterConfig(
        layout=app_root,
        mode="history",
        routes=(
            RouteDefinition("/", "Home"),
            RouteDefinition("/users/:id", "UserDetail"),
            RouteDefinition("/files/:path*", "FileBrowser"),
        ),
    )
    router = await install(host, config, location=MemoryLocation())
    await router.navigate("/users/:id", {"id": 42})
"""

__version__ = "0.1.0-dev"
__all__ = [
    "ComponentDefinition",
    "ConfigurationError",
    "InvalidModeError",
    "InvalidPatternError",
    "InvalidRouteError",
    "LocationSnapshot",
    "MemoryLocation",
    "Mode",
    "PerchError",
    "ResolutionError",
    "RouteDefinition",
    "RouteInfo",
    "Router",
    "RouterConfig",
    "UnregisteredComponentError",
    "WriteMode",
    "install",
]

# Public name -> defining module
_LAZY_IMPORTS: dict[str, str] = {
    "ComponentDefinition": "perch.components",
    "ConfigurationError": "perch.errors",
    "InvalidModeError": "perch.errors",
    "InvalidPatternError": "perch.errors",
    "InvalidRouteError": "perch.errors",
    "LocationSnapshot": "perch.location.port",
    "MemoryLocation": "perch.location.memory",
    "Mode": "perch.config",
    "PerchError": "perch.errors",
    "ResolutionError": "perch.errors",
    "RouteDefinition": "perch.config",
    "RouteInfo": "perch.routing.route",
    "Router": "perch.router",
    "RouterConfig": "perch.config",
    "UnregisteredComponentError": "perch.errors",
    "WriteMode": "perch.location.port",
    "install": "perch.plugin",
}


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import perch`` fast while providing a clean top-level API.
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)

    import importlib

    return getattr(importlib.import_module(module_name), name)
