"""Document events and the flattening of node forests into event streams.

Key Components:
    Event: One unit of a flattened document
    EventType: Kinds of events
    ContentKind: Closed set of content kinds the flattener understands
    flatten_elements: Lazy pre-order flattening of a forest into events
"""

from .event import Event, EventType
from .generator import (
    ContentKind,
    content_kind,
    flatten_elements,
    gen_event,
    next_events,
)

__all__ = [
    "ContentKind",
    "Event",
    "EventType",
    "content_kind",
    "flatten_elements",
    "gen_event",
    "next_events",
]
