"""Package lifecycle events and the sources that deliver them."""

from mlagent.events.models import EventKind, EventPhase, LifecycleEvent
from mlagent.events.source import EventSource, JsonLinesEventSource

__all__ = [
    "EventKind",
    "EventPhase",
    "LifecycleEvent",
    "EventSource",
    "JsonLinesEventSource",
]
