"""URL mode adapters.

Each adapter maps one browser-visible URL encoding onto the router's
canonical ``UrlState`` and back:

    hash:     http://host/app#/users/42?tab=posts
    query:    http://host/app?page=/users/42&tab=posts
    history:  http://host/users/42?tab=posts

All three yield ``UrlState("/users/42", "tab=posts", <href>)``.
"""

from dataclasses import dataclass
from typing import Protocol
from urllib.parse import quote, unquote

from perch.config import Mode
from perch.errors import InvalidModeError
from perch.location.port import HASHCHANGE, POPSTATE, LocationPort, WriteMode


@dataclass(frozen=True, slots=True)
class UrlState:
    """The route-relevant parts of the current URL."""

    path: str
    query_string: str
    full_url: str


class ModeAdapter(Protocol):
    """Reads and writes the logical path in one URL encoding.

    ``event`` names the location event that signals a route change.
    ``write`` returns ``True`` when the write raises no such event by
    itself and the router must resolve the new route explicitly.
    """

    mode: Mode
    event: str

    def read(self) -> UrlState: ...

    def write(self, path: str) -> bool: ...


def normalize_path(path: str) -> str:
    """Ensure *path* starts with ``/``; an empty path is the root."""
    if not path:
        return "/"
    if not path.startswith("/"):
        return f"/{path}"
    return path


def is_root(path: str) -> bool:
    return path in ("", "/")


def _split_pairs(search: str) -> list[str]:
    return [pair for pair in search.removeprefix("?").split("&") if pair]


class HashMode:
    """Route lives in the fragment: ``#/path?query``."""

    __slots__ = ("location",)

    mode = Mode.HASH
    event = HASHCHANGE

    def __init__(self, location: LocationPort) -> None:
        self.location = location

    def read(self) -> UrlState:
        snapshot = self.location.read()
        path, _, query_string = snapshot.hash.removeprefix("#").partition("?")
        return UrlState(normalize_path(path), query_string, snapshot.href)

    def write(self, path: str) -> bool:
        if is_root(path):
            # Drop the fragment entirely rather than leaving "#" or "#/".
            # A replace raises no hashchange, so the router re-resolves.
            snapshot = self.location.read()
            self.location.write(snapshot.pathname + snapshot.search, WriteMode.REPLACE)
            return True
        self.location.set_hash(path)
        return False


class QueryMode:
    """Route lives in one query parameter: ``?page=/path&other=1``."""

    __slots__ = ("location", "query_param")

    mode = Mode.QUERY
    event = POPSTATE

    def __init__(self, location: LocationPort, query_param: str = "page") -> None:
        self.location = location
        self.query_param = query_param

    def read(self) -> UrlState:
        snapshot = self.location.read()
        pairs = _split_pairs(snapshot.search)

        path = next(
            (unquote(pair.partition("=")[2]) for pair in pairs if self._is_route_pair(pair)),
            "",
        )
        # Other pairs pass through raw so the query parser sees them as written.
        query_string = "&".join(pair for pair in pairs if not self._is_route_pair(pair))
        return UrlState(normalize_path(path), query_string, snapshot.href)

    def write(self, path: str) -> bool:
        snapshot = self.location.read()
        route_pair = f"{quote(self.query_param)}={quote(path, safe='/')}"

        updated: list[str] = []
        placed = is_root(path)
        for pair in _split_pairs(snapshot.search):
            if not self._is_route_pair(pair):
                updated.append(pair)
            elif not placed:
                updated.append(route_pair)
                placed = True
        if not placed:
            updated.append(route_pair)

        query = "&".join(updated)
        self.location.write(
            snapshot.pathname + (f"?{query}" if query else ""), WriteMode.PUSH
        )
        return True

    def _is_route_pair(self, pair: str) -> bool:
        return unquote(pair.partition("=")[0]) == self.query_param


class HistoryMode:
    """Route is the real URL path: ``/path?query``."""

    __slots__ = ("location",)

    mode = Mode.HISTORY
    event = POPSTATE

    def __init__(self, location: LocationPort) -> None:
        self.location = location

    def read(self) -> UrlState:
        snapshot = self.location.read()
        return UrlState(
            normalize_path(snapshot.pathname),
            snapshot.search.removeprefix("?"),
            snapshot.href,
        )

    def write(self, path: str) -> bool:
        self.location.write(path, WriteMode.PUSH)
        return True


def create_mode_adapter(
    mode: str,
    location: LocationPort,
    *,
    query_param: str = "page",
) -> ModeAdapter:
    """Build the adapter for *mode*.

    Raises ``InvalidModeError`` if *mode* is not a ``Mode`` value.
    """
    try:
        resolved = Mode(mode)
    except ValueError:
        raise InvalidModeError(mode) from None

    if resolved is Mode.HASH:
        return HashMode(location)
    if resolved is Mode.QUERY:
        return QueryMode(location, query_param)
    return HistoryMode(location)
