"""Adapters between XML text and event streams.

Key Components:
    XMLEventReader: Pull cursor over expat producing Event objects
    source_seq: Lazily read events, releasing the reader when done
    XMLStreamWriter: StAX-style writer with namespace bookkeeping
    emit_event: Write one event, resolving its names first
"""

from .emit import emit_event
from .reader import XMLEventReader, source_seq
from .writer import XMLStreamWriter

__all__ = [
    "XMLEventReader",
    "XMLStreamWriter",
    "emit_event",
    "source_seq",
]
