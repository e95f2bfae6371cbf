"""Location port protocol and snapshot type.

The router never touches a global ``window.location``. Whatever owns the
address state (a browser bridge, a webview, or ``MemoryLocation``) is
injected as a ``LocationPort``.
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

# Event listeners are async callables with no arguments
type Listener = Callable[[], Awaitable[None]]

# Calling an Unsubscribe removes the listener it was returned for
type Unsubscribe = Callable[[], None]

HASHCHANGE = "hashchange"
POPSTATE = "popstate"


class WriteMode(Enum):
    PUSH = "push"
    REPLACE = "replace"


@dataclass(frozen=True, slots=True)
class LocationSnapshot:
    """The current address, split the way ``window.location`` splits it.

    ``search`` keeps its leading ``?`` and ``hash`` its leading ``#``;
    both are ``""`` when absent.
    """

    href: str
    pathname: str
    search: str = ""
    hash: str = ""


class LocationPort(Protocol):
    """Read and write access to the address state, plus change events.

    ``write`` is a history push/replace and never raises an event.
    ``set_hash`` behaves like assigning ``location.hash``: when the
    fragment changes it records a history entry and raises
    ``hashchange``.
    """

    def read(self) -> LocationSnapshot: ...

    def write(self, target: str, mode: WriteMode) -> None: ...

    def set_hash(self, fragment: str) -> None: ...

    def subscribe(self, event: str, listener: Listener) -> Unsubscribe: ...
