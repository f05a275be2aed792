"""Immutable XML node types: Element, CData and Comment.

Elements built by the parser carry a :class:`~lazy_xml.tree.lazy.LazySequence`
as content so that children are only read from the input when demanded;
elements built directly carry a tuple.
"""

from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional, Sequence, Union

from lazy_xml.namespace import NameLike, QualifiedName, as_qname

from .lazy import LazySequence


def text_of(value: Any) -> str:
    """Canonical string form of a scalar content or attribute value.

    Booleans are spelled the XML Schema way, ``true`` and ``false``. None
    has no text and gives the empty string.
    """
    if isinstance(value, str):
        return value
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


@dataclass(frozen=True)
class CData:
    """Verbatim text written as a CDATA section."""

    content: str


@dataclass(frozen=True)
class Comment:
    """XML comment node."""

    content: str


@dataclass(frozen=True)
class Element:
    """XML element with a qualified tag, attributes and ordered content.

    String tags and attribute keys are parsed into :class:`QualifiedName`
    objects. ``None`` entries are dropped from eager content; lazily parsed
    content never contains them.
    """

    tag: QualifiedName
    attrs: Mapping[QualifiedName, Any] = field(default_factory=dict)
    content: Sequence[Any] = ()

    def __post_init__(self) -> None:
        """Normalize names and content."""
        object.__setattr__(self, "tag", as_qname(self.tag))
        object.__setattr__(
            self, "attrs", {as_qname(key): value for key, value in (self.attrs or {}).items()}
        )
        if not isinstance(self.content, LazySequence):
            object.__setattr__(
                self, "content", tuple(item for item in self.content if item is not None)
            )

    def __repr__(self) -> str:
        return f"Element({str(self.tag)!r}, {len(self.attrs)} attrs)"

    def get(self, name: NameLike, default: Optional[Any] = None) -> Any:
        """Get an attribute value by its spelled name."""
        return self.attrs.get(as_qname(name), default)

    @property
    def children(self) -> Iterable["Element"]:
        """Iterate over child elements, skipping text and other nodes."""
        return (item for item in self.content if isinstance(item, Element))

    @property
    def text(self) -> str:
        """Concatenated text of this element and all its descendants."""
        parts = []
        for item in self.content:
            if isinstance(item, Element):
                parts.append(item.text)
            elif isinstance(item, (str, CData)):
                parts.append(item if isinstance(item, str) else item.content)
        return "".join(parts)


Node = Union[Element, CData, Comment, str]


def element(tag: NameLike, attrs: Optional[Mapping[Any, Any]] = None,
            *content: Any) -> Element:
    """Build an Element; ``None`` content items are dropped."""
    return Element(tag, attrs or {}, content)


def cdata(content: str) -> CData:
    """Build a CDATA node."""
    return CData(content)


def xml_comment(content: str) -> Comment:
    """Build a comment node."""
    return Comment(content)


def is_element(node: Any) -> bool:
    """Check whether ``node`` can be treated as an element."""
    return isinstance(node, Element)
