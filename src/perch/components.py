"""Component definitions, references, and route-context wrapping.

A route points at its component either by name (resolved against the
host's registry when the route is mounted) or inline. Before mounting,
the router wraps the resolved definition so its ``setup`` receives the
current ``route`` and a ``navigate`` function. Wrapping is a pure
transform: the original definition graph is never mutated, so repeated
navigations to the same route always start from the same definitions.
"""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable, Mapping, MutableMapping
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any, Protocol

from perch.errors import UnregisteredComponentError

if TYPE_CHECKING:
    from perch.routing.route import RouteInfo

# setup(ctx) -> bindings, or an awaitable of bindings
type Setup = Callable[[MutableMapping[str, Any]], Any]

# navigate(path, params=None), the router's bound method
type Navigate = Callable[..., Awaitable[None]]


@dataclass(frozen=True, slots=True)
class ComponentDefinition:
    """A host-framework component definition.

    ``children`` maps a child selector to a child component, given by
    name, inline, or as a ``ComponentRef``.
    """

    name: str | None = None
    setup: Setup | None = None
    template: Any = None
    style: Any = None
    children: Mapping[str, ComponentRef | ComponentDefinition | str] = field(
        default_factory=dict
    )


@dataclass(frozen=True, slots=True)
class ByName:
    """A component referenced by its registered name."""

    name: str


@dataclass(frozen=True, slots=True)
class Inline:
    """A component given directly as a definition."""

    definition: ComponentDefinition


type ComponentRef = ByName | Inline


class ComponentRegistry(Protocol):
    """The slice of the host used to look components up by name."""

    def get_component(self, name: str) -> ComponentDefinition | None: ...


def as_component_ref(value: object) -> ComponentRef:
    """Coerce a raw component value into a ``ComponentRef``.

    Accepts a name, a ``ComponentDefinition``, or an existing ref.
    Raises ``TypeError`` for anything else.
    """
    if isinstance(value, ByName | Inline):
        return value
    if isinstance(value, str):
        return ByName(value)
    if isinstance(value, ComponentDefinition):
        return Inline(value)
    msg = f"Expected a component name or ComponentDefinition, got {type(value).__name__}"
    raise TypeError(msg)


def resolve_component(ref: ComponentRef, registry: ComponentRegistry) -> ComponentDefinition:
    """Return the concrete definition for *ref*.

    Raises ``UnregisteredComponentError`` if a name is not registered.
    """
    if isinstance(ref, Inline):
        return ref.definition
    definition = registry.get_component(ref.name)
    if definition is None:
        raise UnregisteredComponentError(ref.name)
    return definition


def wrap_component(
    component: ComponentRef | ComponentDefinition | str,
    route_info: RouteInfo,
    *,
    registry: ComponentRegistry,
    navigate: Navigate,
) -> ComponentDefinition:
    """Return a copy of *component* whose setup receives route context.

    The wrapped ``setup(ctx)`` sets ``ctx["route"]`` and ``ctx["navigate"]``,
    then delegates to the original setup (if any). Its bindings are merged
    over ``{"route": ..., "navigate": ...}``. Children are wrapped
    recursively with the same *route_info*.
    """
    definition = resolve_component(as_component_ref(component), registry)

    children = {
        key: wrap_component(child, route_info, registry=registry, navigate=navigate)
        for key, child in definition.children.items()
    }

    return replace(
        definition,
        setup=_route_setup(definition.setup, route_info, navigate),
        children=children,
    )


def _route_setup(original: Setup | None, route_info: RouteInfo, navigate: Navigate) -> Setup:
    def setup(ctx: MutableMapping[str, Any]) -> Any:
        ctx["route"] = route_info
        ctx["navigate"] = navigate
        injected = {"route": route_info, "navigate": navigate}

        result = original(ctx) if original is not None else None
        if inspect.isawaitable(result):
            return _merge_async(result, injected)
        return {**injected, **(result or {})}

    return setup


async def _merge_async(result: Awaitable[Any], injected: dict[str, Any]) -> dict[str, Any]:
    bindings = await result
    return {**injected, **(bindings or {})}
