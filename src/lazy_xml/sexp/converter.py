"""Conversion of compact literal notation into Element trees.

The notation follows the hiccup/prxml style, expressed with Python lists::

    ["feed", {"xmlns": "http://www.w3.org/2005/Atom"},
        ["title", "Example"],
        ("entry-%d" % i for i in range(3)),   # spliced into the parent
        QualifiedName("br"),                  # empty element
        ["-cdata", "<raw/>"],
        ["-comment", "generated"]]

A list opens an element: its head is the tag, an optional mapping in second
position holds the attributes and everything after is content. Tuples,
generators and other iterables do not open an element; their items are
spliced into the parent. ``None`` contributes nothing.
"""

from collections.abc import Mapping
from typing import Any, List

from lazy_xml.namespace import QualifiedName, as_qname
from lazy_xml.shared import InvalidStructureError, get_logger
from lazy_xml.tree.nodes import CData, Comment, Element, text_of

CDATA_TAG = "-cdata"
COMMENT_TAG = "-comment"

logger = get_logger(__name__, component="sexp")


def _sexp_element(tag: Any, attrs: Mapping, content: List[Any]) -> Any:
    """Build the node for one bracketed expression."""
    if tag in (CDATA_TAG, COMMENT_TAG):
        if len(content) != 1:
            raise InvalidStructureError(
                f"{tag} takes exactly one content item, got {len(content)}",
                {"tag": tag, "content": content},
            )
        node_type = CData if tag == CDATA_TAG else Comment
        return node_type(text_of(content[0]))
    children: List[Any] = []
    for item in content:
        children.extend(as_elements(item))
    return Element(tag, attrs, children)


def _from_list(expr: List[Any]) -> Any:
    if not expr:
        raise InvalidStructureError("Empty literal element has no tag")
    tag, rest = expr[0], expr[1:]
    if not isinstance(tag, (str, QualifiedName)):
        raise InvalidStructureError(
            f"Literal element tag must be a name, got {type(tag).__name__}",
            {"tag": tag},
        )
    if isinstance(tag, str) and tag not in (CDATA_TAG, COMMENT_TAG):
        try:
            tag = as_qname(tag)
        except ValueError as e:
            raise InvalidStructureError(str(e), {"tag": tag}) from e
    attrs: Mapping = {}
    if rest and isinstance(rest[0], Mapping):
        attrs = {key: text_of(value) for key, value in rest[0].items()}
        rest = rest[1:]
    return _sexp_element(tag, attrs, rest)


def as_elements(expr: Any) -> List[Any]:
    """Return the nodes represented by one literal expression.

    Returns:
        A list of Element, CData, Comment nodes and strings; empty for None
    """
    if expr is None:
        return []
    if isinstance(expr, list):
        return [_from_list(expr)]
    if isinstance(expr, QualifiedName):
        return [Element(expr, {}, ())]
    if isinstance(expr, (str, Element, CData, Comment)):
        return [expr]
    if isinstance(expr, Mapping):
        raise InvalidStructureError(
            "Attribute mapping outside of an element literal", {"attrs": dict(expr)}
        )
    if isinstance(expr, (bytes, bytearray)):
        raise InvalidStructureError("Literal content must be text, not bytes")
    if not hasattr(expr, "__iter__"):
        return [text_of(expr)]
    nodes: List[Any] = []
    for item in expr:
        nodes.extend(as_elements(item))
    return nodes


def sexps_as_fragment(*exprs: Any) -> List[Any]:
    """Convert any number of literal expressions into a list of nodes.

    The result may hold several top-level nodes, or none at all; see
    :func:`sexp_as_element` when exactly one root is needed.
    """
    nodes: List[Any] = []
    for expr in exprs:
        nodes.extend(as_elements(expr))
    return nodes


def sexp_as_element(expr: Any) -> Any:
    """Convert a literal expression that must describe exactly one root.

    Raises:
        InvalidStructureError: If the expression yields no node or more than
            one
    """
    nodes = as_elements(expr)
    if len(nodes) != 1:
        logger.debug("Literal did not produce a single root",
                     extra={"root_count": len(nodes)})
        raise InvalidStructureError(
            f"Expected exactly one root element, got {len(nodes)}; "
            "use sexps_as_fragment for fragments",
            {"root_count": len(nodes)},
        )
    return nodes[0]
