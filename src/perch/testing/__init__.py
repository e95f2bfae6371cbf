"""Test utilities for perch routers.

Provides an in-process host framework double and a selector-driven
view handle. Pair them with ``perch.location.memory.MemoryLocation``::

    from perch.testing import RecordingHost, StubElement
"""

from perch.location.memory import MemoryLocation
from perch.testing.host import RecordedInstance, RecordingHost, StubElement

__all__ = [
    "MemoryLocation",
    "RecordedInstance",
    "RecordingHost",
    "StubElement",
]
