"""Perch exception hierarchy.

Shared across the compiler, matcher, mode adapters, and router so every
module raises and catches the same types.

Three families:

- ``ConfigurationError``: fatal, raised at construction or registration.
- ``ResolutionError``: a navigation resolved to nothing mountable.
  The router logs these; they never escape a navigation.
- ``TransientError``: a local failure (one query pair, one candidate
  route, one unmount) that is logged and skipped.
"""


class PerchError(Exception):
    """Base for all perch-specific errors."""


# -- Configuration --


class ConfigurationError(PerchError):
    """Raised when router configuration is invalid.

    Raised synchronously from ``Router(...)`` or ``Router.add_route()``.
    """


class MissingLayoutError(ConfigurationError):
    """The router was constructed without a layout to mount into."""

    def __init__(self) -> None:
        super().__init__("Router requires a layout view handle in its config.")


class InvalidModeError(ConfigurationError):
    """The routing mode is not one of ``hash``, ``query``, ``history``."""

    def __init__(self, mode: object) -> None:
        self.mode = mode
        super().__init__(
            f"Invalid routing mode: {mode!r}. Must be 'hash', 'query', or 'history'."
        )


class InvalidRouteError(ConfigurationError):
    """A route definition is missing its ``path`` or ``component``."""


class InvalidPatternError(ConfigurationError):
    """A route path pattern is empty or not a string."""


# -- Resolution --


class ResolutionError(PerchError):
    """A navigation could not be resolved to a mountable component."""


class UnregisteredComponentError(ResolutionError):
    """A route references a component name the host does not know."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Component {name!r} not registered.")


class NoRouteError(ResolutionError):
    """No route matched the path and no default route is configured."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"No route found for path: {path}")


# -- Transient --


class TransientError(PerchError):
    """A local failure that is logged and skipped."""


class MalformedQueryError(TransientError):
    """A single query pair carries invalid percent-encoding."""

    def __init__(self, pair: str, detail: str = "") -> None:
        self.pair = pair
        message = f"Malformed query pair {pair!r}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
