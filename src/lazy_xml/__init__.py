"""Lazy XML.

A bridge between XML text, flat event streams and immutable element trees.
Parsed trees are lazy: element content is read from the input only as it is
consumed. Trees can be written back out, built directly or converted from a
compact literal notation, and names are namespace aware throughout.

Progressive API Disclosure:
- Level 1: Simple functions - parse(), parse_string(), emit(), emit_string()
- Level 2: Tree construction - element(), sexp_as_element(), with_xmlns()
- Level 3: Event streams - source_seq(), flatten_elements(), event_tree()
- Level 4: Writer and reader adapters - XMLEventReader, XMLStreamWriter
"""

__version__ = "0.1.0"
__author__ = "Lazy XML Team"

# Level 1: Simple functions
from .api import emit, emit_string, events_for, parse, parse_file, parse_string

# Level 3: Event streams
from .events import Event, EventType, flatten_elements

# Names and namespaces
from .namespace import NamespaceContext, QualifiedName, name_equals, with_xmlns

# Level 2: Tree construction
from .sexp import sexp_as_element, sexps_as_fragment

# Configuration and errors
from .shared import (
    BridgeConfig,
    EncodingMismatchError,
    InvalidStructureError,
    NamespaceError,
    ReaderConfig,
    UnresolvedPrefixError,
    WriterConfig,
    XMLBridgeError,
    XMLSyntaxError,
)

# Level 4: Adapters
from .stream import XMLEventReader, XMLStreamWriter, emit_event, source_seq
from .tree import (
    CData,
    Comment,
    Element,
    cdata,
    element,
    event_tree,
    seq_tree,
    tree_equals,
    xml_comment,
)

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple functions
    "parse",
    "parse_string",
    "parse_file",
    "events_for",
    "emit",
    "emit_string",

    # Level 2: Tree construction
    "Element",
    "CData",
    "Comment",
    "element",
    "cdata",
    "xml_comment",
    "sexp_as_element",
    "sexps_as_fragment",
    "with_xmlns",
    "tree_equals",

    # Level 3: Event streams
    "Event",
    "EventType",
    "flatten_elements",
    "event_tree",
    "seq_tree",
    "source_seq",

    # Level 4: Adapters
    "XMLEventReader",
    "XMLStreamWriter",
    "emit_event",

    # Names and namespaces
    "QualifiedName",
    "NamespaceContext",
    "name_equals",

    # Configuration and errors
    "BridgeConfig",
    "ReaderConfig",
    "WriterConfig",
    "XMLBridgeError",
    "NamespaceError",
    "UnresolvedPrefixError",
    "InvalidStructureError",
    "EncodingMismatchError",
    "XMLSyntaxError",
]
