"""In-memory LocationPort.

Keeps a history stack and queues change events instead of firing them
synchronously. Call ``await location.dispatch()`` to deliver queued
events to subscribers, which gives tests (and headless hosts) control
over exactly when a navigation event reaches the router.

Usage::

    location = MemoryLocation("http://localhost/app")
    router = Router(host, config, location=location)
    await router.start()

    location.set_hash("/users/42")
    await location.dispatch()  # router resolves /users/42
"""

import logging
from collections import defaultdict
from urllib.parse import urldefrag, urljoin, urlsplit

from perch.location.port import (
    HASHCHANGE,
    POPSTATE,
    Listener,
    LocationSnapshot,
    Unsubscribe,
    WriteMode,
)

logger = logging.getLogger("perch.location")


class MemoryLocation:
    """A ``LocationPort`` backed by a list of URLs."""

    __slots__ = ("_entries", "_index", "_listeners", "_pending")

    def __init__(self, url: str = "http://localhost/") -> None:
        self._entries: list[str] = [url]
        self._index = 0
        self._listeners: defaultdict[str, list[Listener]] = defaultdict(list)
        self._pending: list[str] = []

    # -- LocationPort --

    def read(self) -> LocationSnapshot:
        parts = urlsplit(self.href)
        return LocationSnapshot(
            href=self.href,
            pathname=parts.path or "/",
            search=f"?{parts.query}" if parts.query else "",
            hash=f"#{parts.fragment}" if parts.fragment else "",
        )

    def write(self, target: str, mode: WriteMode) -> None:
        url = urljoin(self.href, target)
        if mode is WriteMode.REPLACE:
            self._entries[self._index] = url
        else:
            self._push(url)

    def set_hash(self, fragment: str) -> None:
        fragment = fragment.removeprefix("#")
        base, _ = urldefrag(self.href)
        url = f"{base}#{fragment}" if fragment else base
        if url == self.href:
            return
        self._push(url)
        self._pending.append(HASHCHANGE)

    def subscribe(self, event: str, listener: Listener) -> Unsubscribe:
        listeners = self._listeners[event]
        listeners.append(listener)

        def unsubscribe() -> None:
            if listener in listeners:
                listeners.remove(listener)

        return unsubscribe

    # -- History traversal --

    @property
    def href(self) -> str:
        return self._entries[self._index]

    @property
    def entries(self) -> tuple[str, ...]:
        return tuple(self._entries)

    @property
    def index(self) -> int:
        return self._index

    def listener_count(self, event: str) -> int:
        return len(self._listeners.get(event, ()))

    def back(self) -> None:
        """Step back one entry, like the browser back button."""
        self._traverse(-1)

    def forward(self) -> None:
        """Step forward one entry."""
        self._traverse(1)

    def _traverse(self, delta: int) -> None:
        target = self._index + delta
        if not 0 <= target < len(self._entries):
            return
        previous = self.href
        self._index = target
        self._pending.append(POPSTATE)
        if urlsplit(previous).fragment != urlsplit(self.href).fragment:
            self._pending.append(HASHCHANGE)

    def _push(self, url: str) -> None:
        del self._entries[self._index + 1 :]
        self._entries.append(url)
        self._index += 1

    # -- Event delivery --

    @property
    def pending(self) -> tuple[str, ...]:
        return tuple(self._pending)

    async def dispatch(self) -> int:
        """Deliver queued events to their listeners, oldest first.

        Returns the number of events delivered. Events nobody listens
        for are dropped.
        """
        delivered = 0
        while self._pending:
            event = self._pending.pop(0)
            listeners = list(self._listeners.get(event, ()))
            if not listeners:
                logger.debug("Dropping %s: no listeners", event)
                continue
            for listener in listeners:
                await listener()
            delivered += 1
        return delivered
