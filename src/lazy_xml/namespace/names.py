"""Qualified XML names.

A :class:`QualifiedName` is a local part plus an optional prefix and an
optional namespace URI. A name whose ``uri`` is set is *resolved*; a name
without one is *unresolved* and only carries the prefix it was spelled with.
"""

from dataclasses import dataclass
from typing import Optional, Union

XML_NS_URI = "http://www.w3.org/XML/1998/namespace"
XMLNS_ATTRIBUTE_NS_URI = "http://www.w3.org/2000/xmlns/"
XMLNS_ATTRIBUTE = "xmlns"
NULL_NS_URI = ""
DEFAULT_NS_PREFIX = ""


@dataclass(frozen=True)
class QualifiedName:
    """Immutable XML name with optional prefix and namespace URI."""

    local: str
    prefix: Optional[str] = None
    uri: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate the local part and normalize an empty prefix to None."""
        if not self.local:
            raise ValueError("Local name cannot be empty")
        if ":" in self.local:
            raise ValueError(f"Local name cannot contain a colon: {self.local!r}")
        if self.prefix == DEFAULT_NS_PREFIX:
            object.__setattr__(self, "prefix", None)

    @classmethod
    def parse(cls, text: str) -> "QualifiedName":
        """Build a name from ``l``, ``p:l``, ``{uri}l`` or ``{uri}p:l``."""
        uri, rest = None, text
        if text.startswith("{"):
            uri, sep, rest = text[1:].partition("}")
            if not sep:
                raise ValueError(f"Unterminated namespace in name: {text!r}")
        prefix, sep, local = rest.partition(":")
        if not sep:
            return cls(rest, uri=uri)
        return cls(local, prefix or None, uri)

    @property
    def is_resolved(self) -> bool:
        """Check if the namespace URI of this name is known."""
        return self.uri is not None

    @property
    def clark(self) -> str:
        """Clark notation, ``{uri}local``, or just the local part."""
        if self.uri:
            return f"{{{self.uri}}}{self.local}"
        return self.local

    @property
    def is_namespace_declaration(self) -> bool:
        """Check if this attribute name declares a namespace binding."""
        if self.prefix == XMLNS_ATTRIBUTE:
            return True
        return self.prefix is None and self.local == XMLNS_ATTRIBUTE

    def with_uri(self, uri: str) -> "QualifiedName":
        """Return a resolved copy of this name."""
        return QualifiedName(self.local, self.prefix, uri)

    def __str__(self) -> str:
        if self.prefix:
            return f"{self.prefix}:{self.local}"
        return self.local


NameLike = Union[str, QualifiedName]


def as_qname(name: NameLike) -> QualifiedName:
    """Coerce a string or QualifiedName into a QualifiedName."""
    if isinstance(name, QualifiedName):
        return name
    if isinstance(name, str):
        return QualifiedName.parse(name)
    raise TypeError(f"Cannot use {type(name).__name__} as an XML name")
