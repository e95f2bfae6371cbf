"""Host framework protocols.

The router does not render anything itself. It resolves a component and
hands it to the host framework, which owns instantiation, templates, and
reactivity. Any object with this shape works as a host; no base class
required.
"""

from collections.abc import Mapping
from typing import Any, Protocol

from perch.components import ComponentDefinition
from perch.view import ViewHandle


class MountedInstance(Protocol):
    """Handle to a mounted component, returned by ``Host.mount``."""

    async def unmount(self) -> None: ...


class Host(Protocol):
    """The host framework contract consumed by the router.

    ``install()`` additionally assigns the router to ``host.router``.
    """

    def register_component(self, name: str, definition: ComponentDefinition) -> None: ...

    def get_component(self, name: str) -> ComponentDefinition | None: ...

    async def mount(
        self,
        target: ViewHandle,
        definition: ComponentDefinition,
        props: Mapping[str, Any],
    ) -> MountedInstance: ...
