"""Flattening of heterogeneous content into an ordered event stream.

Content is one of a closed set of kinds (:class:`ContentKind`). For each
kind, :func:`gen_event` gives the event that opens it and
:func:`next_events` gives the work that must follow it. The driver,
:func:`flatten_elements`, walks a work list of pending iterators so that
output is strict pre-order and nothing is produced before it is requested.
"""

from collections.abc import Mapping
from enum import Enum, auto
from numbers import Number
from typing import Any, Iterable, Iterator, Optional, Tuple

from lazy_xml.tree.nodes import CData, Comment, Element, text_of

from .event import Event, EventType


class ContentKind(Enum):
    """Every kind of item that can appear in a forest being flattened."""

    ELEMENT = auto()
    EVENT = auto()
    SEQUENCE = auto()
    TEXT = auto()
    BOOLEAN = auto()
    NUMBER = auto()
    CDATA = auto()
    COMMENT = auto()
    ABSENT = auto()


# Persistent work list: (iterator of items, rest of the work list) or None.
Pending = Optional[Tuple[Iterator[Any], "Pending"]]

_END = object()


def content_kind(item: Any) -> ContentKind:
    """Classify ``item``.

    Raises:
        TypeError: For bytes, mappings and other values that have no event
            representation
    """
    if item is None:
        return ContentKind.ABSENT
    if isinstance(item, Element):
        return ContentKind.ELEMENT
    if isinstance(item, Event):
        return ContentKind.EVENT
    if isinstance(item, str):
        return ContentKind.TEXT
    if isinstance(item, bool):
        return ContentKind.BOOLEAN
    if isinstance(item, Number):
        return ContentKind.NUMBER
    if isinstance(item, CData):
        return ContentKind.CDATA
    if isinstance(item, Comment):
        return ContentKind.COMMENT
    if isinstance(item, (bytes, bytearray, Mapping)):
        raise TypeError(f"Cannot generate XML events for {type(item).__name__}")
    if hasattr(item, "__iter__"):
        return ContentKind.SEQUENCE
    raise TypeError(f"Cannot generate XML events for {type(item).__name__}")


def gen_event(item: Any) -> Event:
    """Return the event that opens ``item``.

    An absent item (None) produces an empty characters event so that it
    still occupies one slot of the stream without writing anything. A
    sequence delegates to its first item and must therefore be re-iterable.

    Raises:
        ValueError: For an empty sequence, which opens nothing.
            :func:`flatten_elements` splices sequences and never asks.
    """
    kind = content_kind(item)
    if kind is ContentKind.ELEMENT:
        return Event(EventType.START_ELEMENT, item.tag, item.attrs)
    if kind is ContentKind.EVENT:
        return item
    if kind in (ContentKind.TEXT, ContentKind.BOOLEAN, ContentKind.NUMBER):
        return Event(EventType.CHARACTERS, text=text_of(item))
    if kind is ContentKind.CDATA:
        return Event(EventType.CDATA, text=item.content)
    if kind is ContentKind.COMMENT:
        return Event(EventType.COMMENT, text=item.content)
    if kind is ContentKind.ABSENT:
        return Event(EventType.CHARACTERS, text="")
    head = next(iter(item), _END)
    if head is _END:
        raise ValueError("An empty sequence has no opening event")
    return gen_event(head)


def next_events(item: Any, pending: Pending) -> Pending:
    """Return the work list to process once ``item``'s own event is out.

    An element queues its content, then its end event, in front of
    ``pending``. A sequence continues with its head's own follow-up work,
    with the rest of the sequence queued right after it. Atomic items have
    no subtree and leave ``pending`` as it is.
    """
    kind = content_kind(item)
    if kind is ContentKind.ELEMENT:
        closing = iter((Event(EventType.END_ELEMENT, item.tag),))
        return (iter(item.content), (closing, pending))
    if kind is ContentKind.SEQUENCE:
        items = iter(item)
        head = next(items, _END)
        if head is _END:
            return pending
        return next_events(head, (items, pending))
    return pending


def flatten_elements(roots: Iterable[Any]) -> Iterator[Event]:
    """Lazily flatten a forest into events in document pre-order.

    Yields an element's start event, then its content (recursively
    flattened, nested sequences spliced in place), then its end event, then
    the following siblings. The result is single pass; element content is
    consumed through its iterator, so lazily parsed trees are re-emitted
    without being realized first. Empty sequences contribute no events.

    Example:
        >>> [e.type.name for e in flatten_elements([Element("a", {}, ["x"])])]
        ['START_ELEMENT', 'CHARACTERS', 'END_ELEMENT']
    """
    pending: Pending = (iter(roots), None)
    while pending is not None:
        items, tail = pending
        item = next(items, _END)
        if item is _END:
            pending = tail
        elif content_kind(item) is ContentKind.SEQUENCE:
            # the head of the sequence is handled next, its tail afterwards
            pending = (iter(item), pending)
        else:
            yield gen_event(item)
            pending = next_events(item, pending)
