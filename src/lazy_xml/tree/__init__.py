"""Immutable node model and lazy tree building.

Key Components:
    Element, CData, Comment: Immutable XML nodes
    LazySequence: Memoizing on-demand sequence used for parsed content
    seq_tree: Generic lazy event stream to tree algorithm
    event_tree: seq_tree specialized for XML events
    tree_equals: Namespace-aware structural equality
"""

from .lazy import LazySequence
from .nodes import (
    CData,
    Comment,
    Element,
    Node,
    cdata,
    element,
    is_element,
    text_of,
    xml_comment,
)
from .builder import event_tree, seq_tree, tree_equals

__all__ = [
    "CData",
    "Comment",
    "Element",
    "LazySequence",
    "Node",
    "cdata",
    "element",
    "event_tree",
    "is_element",
    "seq_tree",
    "text_of",
    "tree_equals",
    "xml_comment",
]
