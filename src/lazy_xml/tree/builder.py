"""Lazy reconstruction of trees from flat event streams.

:func:`seq_tree` is the generic algorithm: it is told how to recognise an
event that closes a subtree, how to wrap an opening event around its
children and how to turn any other event into a leaf. :func:`event_tree`
specializes it for :class:`~lazy_xml.events.Event` streams.

Nothing is read from the input before it is needed. Reading the first root
of a stream, including all of its content, stops at that root's end event.
"""

from typing import Any, Callable, Iterable, Iterator, List, Optional, Tuple

from lazy_xml.events.event import Event, EventType
from lazy_xml.namespace import name_equals
from lazy_xml.shared import get_logger

from .lazy import LazySequence
from .nodes import CData, Comment, Element, text_of

TryOpen = Callable[[Any, LazySequence], Any]
IsExit = Callable[[Any], bool]
ToLeaf = Callable[[Any], Any]

_END = object()

logger = get_logger(__name__, component="tree_builder")


class _TreeCursor:
    """Shared cursor feeding every level of one lazily built tree.

    ``_open`` holds the levels still accepting items, outermost first. Only
    the innermost one may receive the next event, so a request for items of
    an outer level first drives every deeper level to its exit event. This
    keeps forcing iterative regardless of depth or sibling count.
    """

    def __init__(self, events: Iterable[Any], try_open: TryOpen,
                 is_exit: IsExit, to_leaf: ToLeaf) -> None:
        self._events = iter(events)
        self._try_open = try_open
        self._is_exit = is_exit
        self._to_leaf = to_leaf
        self._open: List[LazySequence] = []

    def open_level(self) -> LazySequence:
        level = LazySequence(self)
        self._open.append(level)
        return level

    def pull(self, level: LazySequence) -> None:
        """Advance the input until ``level`` gains one item or is closed."""
        while not level.is_realized:
            event = next(self._events, _END)
            if event is _END:
                while self._open:
                    self._open.pop()._close()
                return

            active = self._open[-1]
            if self._is_exit(event):
                self._open.pop()._close()
                continue

            children = self.open_level()
            node = self._try_open(event, children)
            if node is None or node is False:
                self._open.pop()
                node = self._to_leaf(event)
            active._append(node)
            if active is level:
                return

    def remaining(self, level: LazySequence) -> Iterator[Any]:
        """Yield the events left once ``level`` has been closed."""
        while not level.is_realized:
            self.pull(level)
        yield from self._events


def seq_tree(try_open: TryOpen, is_exit: IsExit, to_leaf: ToLeaf,
             events: Iterable[Any]) -> Tuple[LazySequence, Iterator[Any]]:
    """Turn a flat stream of events into lazy nested subtrees.

    Args:
        try_open: Called with an event and the lazy sequence of children that
            follow it. Returns a node wrapping those children when the event
            opens a subtree, None or False otherwise. It must not iterate the
            children itself.
        is_exit: True for events that close the current subtree.
        to_leaf: Converts an event that neither opens nor closes a subtree.
        events: Flat, single-pass event iterable.

    Returns:
        ``(siblings, remaining)``: the lazy top-level sequence and an iterator
        over the events following the exit event of the top level.

    Example:
        >>> siblings, rest = seq_tree(
        ...     lambda e, kids: [kids] if e == "<" else None,
        ...     lambda e: e == ">", str,
        ...     [1, 2, "<", 3, "<", 4, ">", ">", 5, ">", 6])
        >>> list(siblings)[:2], list(rest)
        (['1', '2'], [6])
    """
    cursor = _TreeCursor(events, try_open, is_exit, to_leaf)
    siblings = cursor.open_level()
    return siblings, cursor.remaining(siblings)


def _open_element(event: Event, children: LazySequence) -> Optional[Element]:
    if event.type is EventType.START_ELEMENT:
        return Element(event.name, event.attrs or {}, children)
    return None


def _is_end_element(event: Event) -> bool:
    return event.type is EventType.END_ELEMENT


def _event_leaf(event: Event) -> Any:
    if event.type is EventType.CDATA:
        return CData(event.text)
    if event.type is EventType.COMMENT:
        return Comment(event.text)
    return event.text


def event_tree(events: Iterable[Event]) -> Optional[Element]:
    """Return the first root of a lazy Element tree built from ``events``.

    Top-level comments and text ahead of the root are skipped. Only the
    events of the root element itself are read, and only as its content is
    consumed.

    Returns:
        The first top-level Element, or None when the stream has none
    """
    siblings, _ = seq_tree(_open_element, _is_end_element, _event_leaf, events)
    for node in siblings:
        if isinstance(node, Element):
            return node
    logger.debug("Event stream produced no root element")
    return None


def tree_equals(a: Any, b: Any) -> bool:
    """Compare two trees with namespace-aware name equality.

    Tags and attribute keys are compared with
    :func:`~lazy_xml.namespace.name_equals`. Attribute values and scalar
    content are compared by their canonical string form, so a tree holding
    the number ``1`` equals the same tree read back with the text ``"1"``.
    Nested sequences in content are spliced and ``None`` is skipped, the
    same way they are when the tree is flattened into events.
    """
    pending = [(a, b)]
    while pending:
        left, right = pending.pop()
        if isinstance(left, Element) and isinstance(right, Element):
            if not name_equals(left.tag, right.tag):
                return False
            if not _attrs_equal(left.attrs, right.attrs):
                return False
            sentinel = object()
            lefts, rights = _spliced(left.content), _spliced(right.content)
            while True:
                l_item, r_item = next(lefts, sentinel), next(rights, sentinel)
                if l_item is sentinel or r_item is sentinel:
                    if l_item is not r_item:
                        return False
                    break
                pending.append((l_item, r_item))
        elif isinstance(left, (Element, CData, Comment)) or isinstance(
                right, (Element, CData, Comment)):
            if left != right:
                return False
        elif text_of(left) != text_of(right):
            return False
    return True


def _spliced(content: Iterable[Any]) -> Iterator[Any]:
    stack = [iter(content)]
    while stack:
        item = next(stack[-1], _END)
        if item is _END:
            stack.pop()
        elif item is None:
            continue
        elif isinstance(item, (str, bytes, Element, CData, Comment, Event)) or not hasattr(
                item, "__iter__"):
            yield item
        else:
            stack.append(iter(item))


def _attrs_equal(left: Any, right: Any) -> bool:
    if len(left) != len(right):
        return False
    unmatched = list(right.items())
    for key, value in left.items():
        for index, (other_key, other_value) in enumerate(unmatched):
            if name_equals(key, other_key) and text_of(value) == text_of(other_value):
                del unmatched[index]
                break
        else:
            return False
    return True
