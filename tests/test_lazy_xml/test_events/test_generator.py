"""Tests for flattening node forests into event streams."""

from itertools import islice, repeat

import pytest

from lazy_xml.events import (
    ContentKind,
    Event,
    EventType,
    content_kind,
    flatten_elements,
    gen_event,
    next_events,
)
from lazy_xml.tree import CData, Comment, Element


class TestContentKind:
    """Test classification of content items."""

    @pytest.mark.parametrize("item, kind", [
        (Element("a"), ContentKind.ELEMENT),
        (Event.characters("x"), ContentKind.EVENT),
        ("x", ContentKind.TEXT),
        (True, ContentKind.BOOLEAN),
        (1.5, ContentKind.NUMBER),
        (CData("x"), ContentKind.CDATA),
        (Comment("x"), ContentKind.COMMENT),
        (None, ContentKind.ABSENT),
        (["x"], ContentKind.SEQUENCE),
        ((n for n in range(2)), ContentKind.SEQUENCE),
    ])
    def test_classification(self, item, kind):
        """Test that each kind of content is recognised."""
        assert content_kind(item) is kind

    @pytest.mark.parametrize("item", [b"bytes", {"a": 1}, object()])
    def test_unsupported_content_raises_error(self, item):
        """Test that content without an event form is rejected."""
        with pytest.raises(TypeError, match="Cannot generate XML events"):
            content_kind(item)


class TestGenEvent:
    """Test the opening event of each kind."""

    def test_element(self):
        """Test that an element opens with its start event."""
        assert gen_event(Element("a", {"x": "1"})) == Event.start("a", {"x": "1"})

    def test_scalars(self):
        """Test text, booleans and numbers."""
        assert gen_event("x") == Event.characters("x")
        assert gen_event(False) == Event.characters("false")
        assert gen_event(42) == Event.characters("42")

    def test_cdata_and_comment(self):
        """Test CDATA and comment nodes."""
        assert gen_event(CData("x")) == Event.cdata("x")
        assert gen_event(Comment("x")) == Event.comment("x")

    def test_absent_gives_empty_characters(self):
        """Test that None still produces an event."""
        assert gen_event(None) == Event.characters("")

    def test_event_passes_through(self):
        """Test that events are their own opening event."""
        event = Event.end("a")

        assert gen_event(event) is event

    def test_sequence_delegates_to_first_item(self):
        """Test that a sequence opens with its first item's event."""
        assert gen_event([Element("a"), "x"]) == Event.start("a")

    def test_empty_sequence_has_no_opening_event(self):
        """Test that an empty sequence cannot be opened."""
        with pytest.raises(ValueError, match="empty sequence"):
            gen_event(())
        assert list(flatten_elements([(), Element("a")])) == [Event.start("a"), Event.end("a")]


class TestNextEvents:
    """Test the follow-up work of each kind."""

    def test_atomic_items_leave_pending_unchanged(self):
        """Test that leaves add no work."""
        pending = (iter(()), None)

        assert next_events("x", pending) is pending
        assert next_events(None, pending) is pending

    def test_element_queues_content_then_end(self):
        """Test the work queued by an element."""
        content, (closing, rest) = next_events(Element("a", {}, ["x"]), None)

        assert list(content) == ["x"]
        assert list(closing) == [Event.end("a")]
        assert rest is None

    def test_empty_sequence(self):
        """Test that an empty sequence adds no work."""
        assert next_events([], None) is None


class TestFlattenElements:
    """Test lazy pre-order flattening."""

    def test_pre_order(self):
        """Test document order for nested elements and text."""
        tree = Element("a", {}, [Element("b", {}, ["x"]), "y"])

        assert list(flatten_elements([tree])) == [
            Event.start("a"),
            Event.start("b"),
            Event.characters("x"),
            Event.end("b"),
            Event.characters("y"),
            Event.end("a"),
        ]

    def test_nested_sequences_are_spliced(self):
        """Test that sequences in content are spliced in place."""
        tree = Element("a", {}, [["x", ("y", [Element("b")])], "z"])

        assert [event.type for event in flatten_elements([tree])] == [
            EventType.START_ELEMENT,
            EventType.CHARACTERS,
            EventType.CHARACTERS,
            EventType.START_ELEMENT,
            EventType.END_ELEMENT,
            EventType.CHARACTERS,
            EventType.END_ELEMENT,
        ]

    def test_empty_sequences_emit_nothing(self):
        """Test that empty sequences contribute no events."""
        tree = Element("a", {}, [[], ()])

        assert list(flatten_elements([tree])) == [Event.start("a"), Event.end("a")]

    def test_forest(self):
        """Test several roots and mixed top-level content."""
        events = list(flatten_elements([Element("a"), Comment("c"), Element("b")]))

        assert events == [
            Event.start("a"),
            Event.end("a"),
            Event.comment("c"),
            Event.start("b"),
            Event.end("b"),
        ]

    def test_events_are_passed_through(self):
        """Test that pre-built events are emitted as they are."""
        tree = Element("a", {}, [Event.comment("raw")])

        assert list(flatten_elements([tree]))[1] == Event.comment("raw")

    def test_lazy_over_unbounded_input(self):
        """Test that events are produced only on demand."""
        events = flatten_elements(repeat(Element("a")))

        assert list(islice(events, 3)) == [
            Event.start("a"),
            Event.end("a"),
            Event.start("a"),
        ]

    def test_generator_content_is_consumed_once(self):
        """Test that generator content is flattened in a single pass."""
        tree = Element("a", {}, [(str(n) for n in range(3))])

        texts = [event.text for event in flatten_elements([tree])
                 if event.type is EventType.CHARACTERS]
        assert texts == ["0", "1", "2"]

    def test_deep_tree(self):
        """Test that flattening is iterative."""
        tree = None
        for _ in range(5000):
            tree = Element("n", {}, [tree])

        assert sum(1 for _ in flatten_elements([tree])) == 10000
