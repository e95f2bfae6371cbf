"""Mount target resolution.

The router mounts routed components into a view element found inside
the configured layout. Selectors are tried from cheapest to most
expensive lookup; if none matches, the layout itself is the target.
"""

from typing import Protocol


class ViewHandle(Protocol):
    """An element-like handle the host framework can mount into."""

    def query_selector(self, selector: str) -> "ViewHandle | None": ...


def view_selectors(name: str) -> tuple[str, ...]:
    """Selectors tried for *name*, in priority order."""
    return (f"#{name}", f".{name}", name, f"[data-{name}]")


def resolve_view(layout: ViewHandle, name: str = "view") -> ViewHandle:
    """Return the view element inside *layout*, or *layout* itself."""
    for selector in view_selectors(name):
        found = layout.query_selector(selector)
        if found is not None:
            return found
    return layout
