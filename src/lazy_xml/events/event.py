"""Flat document events.

A well-formed event sequence is balanced: every START_ELEMENT is followed
later by an END_ELEMENT with the same name, nested last in, first out.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Mapping, Optional

from lazy_xml.namespace import NameLike, QualifiedName, as_qname


class EventType(Enum):
    """Kinds of document events."""

    START_ELEMENT = auto()  # name and attrs
    END_ELEMENT = auto()    # name
    CHARACTERS = auto()     # text
    CDATA = auto()          # text, written verbatim
    COMMENT = auto()        # text


@dataclass(frozen=True)
class Event:
    """One unit of a flattened document."""

    type: EventType
    name: Optional[QualifiedName] = None
    attrs: Optional[Mapping[QualifiedName, Any]] = None
    text: Optional[str] = None

    @classmethod
    def start(cls, name: NameLike,
              attrs: Optional[Mapping[Any, Any]] = None) -> "Event":
        """Create a start-element event."""
        return cls(EventType.START_ELEMENT, as_qname(name),
                   {as_qname(key): value for key, value in (attrs or {}).items()})

    @classmethod
    def end(cls, name: NameLike) -> "Event":
        """Create an end-element event."""
        return cls(EventType.END_ELEMENT, as_qname(name))

    @classmethod
    def characters(cls, text: str) -> "Event":
        """Create a characters event."""
        return cls(EventType.CHARACTERS, text=text)

    @classmethod
    def cdata(cls, text: str) -> "Event":
        """Create a CDATA event."""
        return cls(EventType.CDATA, text=text)

    @classmethod
    def comment(cls, text: str) -> "Event":
        """Create a comment event."""
        return cls(EventType.COMMENT, text=text)

    def __repr__(self) -> str:
        if self.name is not None:
            return f"Event({self.type.name}, {str(self.name)!r})"
        return f"Event({self.type.name}, {self.text!r})"
