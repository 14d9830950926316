"""
hbwrapper.events
~~~~~~~~~~~~~~~~
Synchronous fan-out of supervisor lifecycle transitions.

Channels
--------
started(TranscodingEvent)     before HandBrakeCLI is spawned
completed(TranscodingEvent)   after a zero exit, status already idle
errored(TranscodingEvent)     after a failed launch or non-zero exit
progress(ConversionStatus)    every time a progress line changes the status

Handlers run on the thread that triggers the transition, in the order
they were connected. The supervisor is not reentrant while a handler runs:
starting another job from a ``completed`` handler works, starting one
from a ``started`` handler fails with AlreadyRunningError.
"""

from __future__ import annotations

import threading
from typing import Callable, Generic, TypeVar

from hbwrapper.models import ConversionStatus, TranscodingEvent

T = TypeVar("T")


class EventChannel(Generic[T]):

    def __init__(self, name: str):
        self.name = name
        self._handlers: list[Callable[[T], None]] = []
        self._lock = threading.Lock()

    def connect(self, handler: Callable[[T], None]) -> Callable[[T], None]:
        """Register *handler*; the return value is the handle for disconnect()."""
        with self._lock:
            self._handlers.append(handler)
        return handler

    def disconnect(self, handler: Callable[[T], None]) -> bool:
        """
        Remove the first registration of *handler*.
        Safe to call from inside a handler. Returns False if it wasn't connected.
        """
        with self._lock:
            try:
                self._handlers.remove(handler)
            except ValueError:
                return False
        return True

    def emit(self, payload: T) -> None:
        # Iterate a copy so handlers can (dis)connect while we deliver.
        with self._lock:
            handlers = tuple(self._handlers)
        for handler in handlers:
            handler(payload)

    def __len__(self) -> int:
        return len(self._handlers)


class TranscodeEvents:
    """The four channels a HandbrakeSupervisor publishes on."""

    def __init__(self):
        self.started:   EventChannel[TranscodingEvent] = EventChannel("started")
        self.completed: EventChannel[TranscodingEvent] = EventChannel("completed")
        self.errored:   EventChannel[TranscodingEvent] = EventChannel("errored")
        self.progress:  EventChannel[ConversionStatus] = EventChannel("progress")
