"""Tests for lazy tree building from event streams and tree equality."""

from typing import Iterable, Iterator, List

from lazy_xml.events import Event, flatten_elements
from lazy_xml.namespace import QualifiedName
from lazy_xml.tree import CData, Comment, Element, event_tree, seq_tree, tree_equals


def counted(events: Iterable[Event], seen: List[Event]) -> Iterator[Event]:
    """Yield ``events`` while recording every one that is consumed."""
    for event in events:
        seen.append(event)
        yield event


def unbounded_document(seen: List[Event]) -> Iterator[Event]:
    """A root element followed by an endless run of further events."""
    head = [
        Event.start("root"),
        Event.start("a"),
        Event.characters("x"),
        Event.end("a"),
        Event.end("root"),
    ]
    yield from counted(head, seen)
    while True:
        seen.append(Event.characters("more"))
        yield Event.characters("more")


class TestSeqTree:
    """Test the generic stream to tree algorithm."""

    def test_generic_nesting(self):
        """Test nesting with a custom open and exit vocabulary."""
        siblings, rest = seq_tree(
            lambda e, kids: [kids] if e == "<" else None,
            lambda e: e == ">",
            str,
            [1, 2, "<", 3, "<", 4, ">", ">", 5, ">", 6],
        )

        items = list(siblings)
        assert items[:2] == ["1", "2"]
        assert items[2][0] == ["3", [["4"]]]
        assert items[3] == "5"
        assert list(rest) == [6]

    def test_empty_subtree_returned_as_its_children(self):
        """Test a node that is its own empty child sequence."""
        siblings, rest = seq_tree(
            lambda e, kids: kids if e == "<" else None,
            lambda e: e == ">",
            str,
            ["<", ">", 1],
        )

        items = list(siblings)
        assert len(items) == 2
        assert list(items[0]) == []
        assert items[1] == "1"
        assert list(rest) == []

    def test_only_none_and_false_mean_no_subtree(self):
        """Test that other falsy nodes still open a subtree."""
        siblings, _ = seq_tree(
            lambda e, kids: 0 if e == "<" else None,
            lambda e: e == ">",
            str,
            ["<", 2, ">", 3],
        )

        assert list(siblings) == [0, "3"]

    def test_nothing_is_read_up_front(self):
        """Test that building the tree reads no events."""
        seen: List[Event] = []
        siblings, _ = seq_tree(lambda e, kids: None, lambda e: False, str,
                               counted([1, 2, 3], seen))

        assert seen == []
        assert siblings[0] == "1"
        assert len(seen) == 1

    def test_remaining_completes_the_level_first(self):
        """Test that the remaining events start after the level's exit."""
        siblings, rest = seq_tree(
            lambda e, kids: [kids] if e == "<" else None,
            lambda e: e == ">",
            str,
            ["<", 1, ">", 2, ">", 3, 4],
        )

        assert list(rest) == [3, 4]
        assert list(siblings) == [[["1"]], "2"]


class TestEventTree:
    """Test Element trees built from XML events."""

    def test_builds_nested_elements(self):
        """Test a small document."""
        root = event_tree([
            Event.start("root", {"id": "1"}),
            Event.start("child"),
            Event.characters("text"),
            Event.end("child"),
            Event.cdata("<raw>"),
            Event.comment("note"),
            Event.end("root"),
        ])

        assert root.tag == QualifiedName("root")
        assert root.get("id") == "1"
        child, raw, note = list(root.content)
        assert child.tag == QualifiedName("child")
        assert list(child.content) == ["text"]
        assert raw == CData("<raw>")
        assert note == Comment("note")

    def test_skips_leading_non_elements(self):
        """Test that comments and text before the root are skipped."""
        root = event_tree([
            Event.comment("prolog"),
            Event.characters("\n"),
            Event.start("a"),
            Event.end("a"),
        ])

        assert root.tag.local == "a"

    def test_no_root_element(self):
        """Test a stream without elements."""
        assert event_tree([Event.comment("only")]) is None
        assert event_tree([]) is None

    def test_first_root_does_not_read_past_its_end(self):
        """Test laziness against an unbounded stream."""
        seen: List[Event] = []
        root = event_tree(unbounded_document(seen))

        assert len(seen) == 1

        first = root.content[0]
        assert first.tag.local == "a"
        assert len(seen) == 2

        assert len(root.content) == 1
        assert len(seen) == 5

        assert list(first.content) == ["x"]
        assert len(seen) == 5

    def test_content_is_memoized(self):
        """Test that lazy content can be traversed repeatedly."""
        root = event_tree(flatten_elements([Element("a", {}, ["x", Element("b")])]))

        assert list(root.content)[0] == "x"
        assert list(root.content)[0] == "x"
        assert [child.tag.local for child in root.children] == ["b"]

    def test_deep_nesting(self):
        """Test that deep documents do not exhaust the call stack."""
        depth = 5000
        events = [Event.start("n")] * depth + [Event.end("n")] * depth
        root = event_tree(events)

        node = root
        levels = 1
        while len(node.content):
            node = node.content[0]
            levels += 1

        assert levels == depth


class TestTreeEquals:
    """Test namespace-aware tree comparison."""

    def test_round_trip_through_events(self):
        """Test that flattening and rebuilding preserves the tree."""
        tree = Element("root", {"id": "1"}, [
            Element("a", {}, ["x", CData("y"), Comment("z")]),
            "tail",
        ])

        assert tree_equals(event_tree(flatten_elements([tree])), tree)

    def test_scalars_compare_by_text(self):
        """Test that numbers and booleans equal their text."""
        assert tree_equals(Element("a", {"n": 1}, [True]),
                           Element("a", {"n": "1"}, ["true"]))

    def test_unresolved_equals_resolved(self):
        """Test name equality applied to tags and attributes."""
        resolved = Element(QualifiedName("a", "p", "urn:p"),
                           {QualifiedName("x", "p", "urn:p"): "1"})

        assert tree_equals(Element("p:a", {"p:x": "1"}), resolved)

    def test_different_uris_are_unequal(self):
        """Test that resolved names in different namespaces differ."""
        assert not tree_equals(Element(QualifiedName("a", None, "urn:x")),
                               Element(QualifiedName("a", None, "urn:y")))

    def test_differences_are_detected(self):
        """Test attribute, content and kind differences."""
        assert not tree_equals(Element("a", {"x": "1"}), Element("a", {"x": "2"}))
        assert not tree_equals(Element("a", {}, ["x"]), Element("a", {}, ["x", "y"]))
        assert not tree_equals(Element("a", {}, [CData("x")]), Element("a", {}, ["x"]))

    def test_nested_sequences_are_spliced(self):
        """Test that content sequences compare like their flattened form."""
        assert tree_equals(Element("a", {}, [["x", ("y",)]]),
                           Element("a", {}, ["x", "y"]))

    def test_deep_trees(self):
        """Test that comparison is iterative."""
        left = right = None
        for _ in range(5000):
            left = Element("n", {}, [left])
            right = Element("n", {}, [right])

        assert tree_equals(left, right)
