"""Literal notation for building Element trees.

Key Components:
    as_elements: Nodes for one literal expression
    sexps_as_fragment: Nodes for several expressions, no root required
    sexp_as_element: Exactly one root node
"""

from .converter import (
    CDATA_TAG,
    COMMENT_TAG,
    as_elements,
    sexp_as_element,
    sexps_as_fragment,
)

__all__ = [
    "CDATA_TAG",
    "COMMENT_TAG",
    "as_elements",
    "sexp_as_element",
    "sexps_as_fragment",
]
