"""In-process host framework double.

``RecordingHost`` satisfies the ``Host`` protocol without rendering
anything. It runs each mounted component's ``setup`` the way a real
host would, and records every mount and unmount so tests can assert
on ordering and overlap.
"""

import inspect
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import anyio

from perch.components import ComponentDefinition
from perch.view import ViewHandle


class StubElement:
    """A ``ViewHandle`` whose selector lookups come from a dict.

    Usage::

        view = StubElement("view")
        layout = StubElement("layout", {"#view": view})
        assert resolve_view(layout) is view
    """

    __slots__ = ("label", "selectors")

    def __init__(self, label: str = "layout", selectors: Mapping[str, "StubElement"] | None = None) -> None:
        self.label = label
        self.selectors = dict(selectors or {})

    def query_selector(self, selector: str) -> "StubElement | None":
        return self.selectors.get(selector)

    def __repr__(self) -> str:
        return f"<StubElement {self.label}>"


@dataclass(slots=True)
class RecordedInstance:
    """A component mounted by ``RecordingHost``."""

    host: "RecordingHost"
    target: ViewHandle
    definition: ComponentDefinition
    props: dict[str, Any]
    context: dict[str, Any] = field(default_factory=dict)
    bindings: dict[str, Any] = field(default_factory=dict)
    mounted: bool = True

    @property
    def route(self) -> Any:
        return self.context.get("route")

    async def unmount(self) -> None:
        await self.host._unmount(self)


class RecordingHost:
    """A ``Host`` that records mounts instead of rendering.

    Attributes:
        events: ``("mount", name)`` / ``("unmount", name)`` tuples in order.
        attached: Number of views currently attached.
        max_attached: Highest ``attached`` ever observed.
        mount_delay: Seconds each mount suspends for (simulates slow work).
        unmount_delay: Seconds each unmount suspends for.
        fail_mount: Component names whose mount raises ``RuntimeError``.
        fail_unmount: If True, every unmount raises ``RuntimeError``
            after detaching.
    """

    __test__ = False

    def __init__(self, *, mount_delay: float = 0.0, unmount_delay: float = 0.0) -> None:
        self.components: dict[str, ComponentDefinition] = {}
        self.instances: list[RecordedInstance] = []
        self.events: list[tuple[str, str | None]] = []
        self.attached = 0
        self.max_attached = 0
        self.mount_delay = mount_delay
        self.unmount_delay = unmount_delay
        self.fail_mount: set[str] = set()
        self.fail_unmount = False
        self.router: Any = None

    # -- Host protocol --

    def register_component(self, name: str, definition: ComponentDefinition) -> None:
        self.components[name] = definition

    def get_component(self, name: str) -> ComponentDefinition | None:
        return self.components.get(name)

    async def mount(
        self,
        target: ViewHandle,
        definition: ComponentDefinition,
        props: Mapping[str, Any],
    ) -> RecordedInstance:
        if definition.name in self.fail_mount:
            msg = f"mount failed for {definition.name!r}"
            raise RuntimeError(msg)

        self.attached += 1
        self.max_attached = max(self.max_attached, self.attached)
        self.events.append(("mount", definition.name))

        instance = RecordedInstance(self, target, definition, dict(props))
        instance.context["props"] = instance.props
        if self.mount_delay:
            await anyio.sleep(self.mount_delay)

        if definition.setup is not None:
            result = definition.setup(instance.context)
            if inspect.isawaitable(result):
                result = await result
            instance.bindings = dict(result or {})

        self.instances.append(instance)
        return instance

    # -- Inspection --

    @property
    def current(self) -> RecordedInstance | None:
        """The most recently mounted instance that is still mounted."""
        for instance in reversed(self.instances):
            if instance.mounted:
                return instance
        return None

    @property
    def mounted_names(self) -> list[str | None]:
        return [name for kind, name in self.events if kind == "mount"]

    async def _unmount(self, instance: RecordedInstance) -> None:
        if self.unmount_delay:
            await anyio.sleep(self.unmount_delay)
        if instance.mounted:
            instance.mounted = False
            self.attached -= 1
            self.events.append(("unmount", instance.definition.name))
        if self.fail_unmount:
            msg = f"unmount failed for {instance.definition.name!r}"
            raise RuntimeError(msg)
