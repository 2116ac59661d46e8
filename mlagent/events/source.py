"""Event sources — deliver package lifecycle events to a single subscriber.

A source is an owned handle: whoever subscribes to it is responsible for
closing it on shutdown.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Callable

from mlagent.events.models import LifecycleEvent

logger = logging.getLogger(__name__)

EventCallback = Callable[[LifecycleEvent], None]


class EventSource:
    """Base event source. Delivers each event to the subscribed callback."""

    def __init__(self) -> None:
        self._callback: EventCallback | None = None
        self.closed = False

    @property
    def subscribed(self) -> bool:
        return self._callback is not None

    def subscribe(self, callback: EventCallback) -> None:
        if self.closed:
            raise RuntimeError("Cannot subscribe to a closed event source")
        if self._callback is not None:
            raise RuntimeError("Event source already has a subscriber")
        self._callback = callback

    def emit(self, event: LifecycleEvent) -> None:
        """Deliver one event. Events emitted with no subscriber are dropped."""
        if self._callback is None:
            logger.debug("No subscriber, dropping event for %s", event.package_id)
            return
        self._callback(event)

    def close(self) -> None:
        self._callback = None
        self.closed = True


class JsonLinesEventSource(EventSource):
    """Replays events recorded one JSON object per line."""

    def __init__(self, path: str | Path) -> None:
        super().__init__()
        self.path = Path(path)

    def run(self) -> int:
        """Emit every well-formed event in the file. Returns the count emitted."""
        emitted = 0
        with open(self.path, encoding="utf-8") as f:
            for lineno, line in enumerate(f, start=1):
                line = line.strip()
                if not line:
                    continue
                try:
                    event = LifecycleEvent.from_dict(json.loads(line))
                except (ValueError, KeyError, TypeError, RecursionError) as e:
                    logger.error("Skipping bad event at %s:%d: %s", self.path, lineno, e)
                    continue
                self.emit(event)
                emitted += 1
        return emitted
