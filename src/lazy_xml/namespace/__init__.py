"""Qualified names and namespace resolution.

Key Components:
    QualifiedName: Local name with optional prefix and namespace URI
    NamespaceContext: Nestable prefix to URI table
    resolve_tag / resolve_attribute: Resolution against a context
    name_equals: Equality that tolerates unresolved names
    with_xmlns: Static pre-resolution of a literal tree
"""

from .context import NamespaceContext
from .names import (
    NULL_NS_URI,
    XML_NS_URI,
    XMLNS_ATTRIBUTE,
    XMLNS_ATTRIBUTE_NS_URI,
    NameLike,
    QualifiedName,
    as_qname,
)
from .resolver import (
    element_context,
    name_equals,
    resolve_attribute,
    resolve_tag,
    split_attributes,
    with_xmlns,
)

__all__ = [
    "NULL_NS_URI",
    "XML_NS_URI",
    "XMLNS_ATTRIBUTE",
    "XMLNS_ATTRIBUTE_NS_URI",
    "NameLike",
    "NamespaceContext",
    "QualifiedName",
    "as_qname",
    "element_context",
    "name_equals",
    "resolve_attribute",
    "resolve_tag",
    "split_attributes",
    "with_xmlns",
]
