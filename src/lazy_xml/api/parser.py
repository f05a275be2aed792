"""Top-level parse and emit functions.

Parsing returns the root of a lazy tree: nothing past the root's start tag
is read until its content is consumed. Emitting flattens a tree into events
and writes them through an :class:`~lazy_xml.stream.XMLStreamWriter`.
"""

import codecs
import io
import time
from pathlib import Path
from typing import Any, BinaryIO, Iterator, Optional, TextIO, Union

from lazy_xml.events import Event, flatten_elements
from lazy_xml.shared import (
    BridgeConfig,
    EncodingMismatchError,
    StreamMetrics,
    XMLBridgeError,
    get_logger,
)
from lazy_xml.stream import XMLStreamWriter, emit_event, source_seq
from lazy_xml.tree import Element, event_tree

# Type definitions for input data
InputType = Union[str, bytes, BinaryIO, TextIO]

MS_PER_SECOND = 1000


def events_for(source: InputType, config: Optional[BridgeConfig] = None) -> Iterator[Event]:
    """Lazily read the flat event stream of an XML document."""
    config = config or BridgeConfig()
    return source_seq(source, config.reader, config.correlation_id)


def parse(source: InputType, config: Optional[BridgeConfig] = None) -> Optional[Element]:
    """Parse XML into a lazy Element tree.

    Args:
        source: XML text, bytes, or a text or binary file-like object
        config: Optional configuration, defaults to BridgeConfig()

    Returns:
        The root Element, or None for a document with no element

    Raises:
        XMLSyntaxError: When malformed input is reached, which may be while
            the returned tree is being consumed

    Examples:
        >>> root = parse('<feed><entry id="1">Hello</entry></feed>')
        >>> [child.get("id") for child in root.children]
        ['1']
    """
    config = config or BridgeConfig()
    logger = get_logger(__name__, config.correlation_id, "parse")
    logger.debug(
        "Starting lazy parse",
        extra={"input_type": type(source).__name__, "config_name": config.name},
    )
    return event_tree(events_for(source, config))


def parse_string(xml_string: str, config: Optional[BridgeConfig] = None) -> Optional[Element]:
    """Parse XML from a string.

    Examples:
        >>> parse_string("<a><b/></a>").tag.local
        'a'
    """
    if not isinstance(xml_string, str):
        raise TypeError(f"Expected str, got {type(xml_string).__name__}")
    return parse(xml_string, config)


def parse_file(file_path: Union[str, Path],
               config: Optional[BridgeConfig] = None) -> Optional[Element]:
    """Parse an XML file into a lazy tree.

    The file is opened in binary mode so that expat honours the document's
    own encoding declaration. It is closed once the event stream is
    exhausted or the tree is garbage collected.
    """
    config = config or BridgeConfig()
    stream = Path(file_path).open("rb")
    events = source_seq(stream, config.reader, config.correlation_id, close_source=True)
    return event_tree(events)


def _check_encoding(stream: Any, config: BridgeConfig) -> None:
    actual = getattr(stream, "encoding", None)
    if not config.writer.check_encoding or not isinstance(actual, str):
        return
    try:
        actual_codec = codecs.lookup(actual).name
    except LookupError:
        actual_codec = actual.lower()
    if actual_codec != config.writer.codec_name:
        raise EncodingMismatchError(config.writer.encoding, actual)


def emit(node: Any, stream: Union[TextIO, BinaryIO],
         config: Optional[BridgeConfig] = None) -> StreamMetrics:
    """Write a tree, or a forest of nodes, as XML.

    Args:
        node: Element, literal-converted nodes, or any content the event
            generator accepts
        stream: Text stream, or binary stream written in the declared encoding
        config: Optional configuration, defaults to BridgeConfig()

    Returns:
        Metrics of the write

    Raises:
        EncodingMismatchError: If a text stream's encoding differs from the
            declared one; nothing is written in that case
        NamespaceError: If a name cannot be spelled in its namespace context
    """
    config = config or BridgeConfig()
    logger = get_logger(__name__, config.correlation_id, "emit")
    metrics = StreamMetrics()
    start_time = time.time()

    try:
        _check_encoding(stream, config)
        writer = XMLStreamWriter(stream, config.writer.encoding)
        if config.writer.xml_declaration:
            writer.write_start_document(config.writer.encoding, config.writer.version)
        for event in flatten_elements([node]):
            emit_event(event, writer)
        writer.write_end_document()
    except XMLBridgeError as e:
        logger.error(
            "Emit failed",
            extra={"error_type": type(e).__name__, "details": e.details},
            exc_info=False,
        )
        raise

    metrics.events_written = writer.events_written
    metrics.processing_time_ms = (time.time() - start_time) * MS_PER_SECOND
    logger.debug(
        "Emit completed",
        extra={
            "events_written": metrics.events_written,
            "processing_time_ms": metrics.processing_time_ms,
        },
    )
    return metrics


def emit_string(node: Any, config: Optional[BridgeConfig] = None) -> str:
    """Write a tree as an XML string.

    Examples:
        >>> emit_string(Element("a", {}, ["x"]), BridgeConfig.fragment())
        '<a>x</a>'
    """
    buffer = io.StringIO()
    emit(node, buffer, config)
    return buffer.getvalue()
