"""Pull-style event reader on top of expat.

expat pushes callbacks while it is fed input; :class:`XMLEventReader` turns
that into an explicit cursor. Each :meth:`XMLEventReader.advance` call feeds
expat one more chunk only when no event is already queued, so a consumer
that stops early leaves the rest of the input unread.

The reader is single pass and owned by one consumer. Sharing one reader,
or a lazy tree built on it, between threads is undefined behaviour.
"""

import io
import time
from collections import deque
from typing import Any, Deque, Dict, Iterator, List, Optional, Union
from xml.parsers import expat

from lazy_xml.events.event import Event, EventType
from lazy_xml.namespace import XMLNS_ATTRIBUTE, NULL_NS_URI, QualifiedName
from lazy_xml.shared import ReaderConfig, StreamMetrics, XMLSyntaxError, get_logger

# expat reports namespaced names as "uri<sep>local<sep>prefix"
_NS_SEPARATOR = " "

Source = Union[str, bytes, io.IOBase, Any]


def _open_source(source: Source) -> Any:
    if isinstance(source, str):
        return io.StringIO(source)
    if isinstance(source, (bytes, bytearray)):
        return io.BytesIO(bytes(source))
    if hasattr(source, "read"):
        return source
    raise TypeError(f"Cannot read XML from {type(source).__name__}")


class XMLEventReader:
    """Explicit cursor producing :class:`Event` objects from XML text.

    Use as a context manager so that the expat parser, and the source when
    ``close_source`` is set, are released on every exit path.
    """

    def __init__(
        self,
        source: Source,
        config: Optional[ReaderConfig] = None,
        correlation_id: Optional[str] = None,
        close_source: bool = False,
    ) -> None:
        """Initialize the reader.

        Args:
            source: XML text, bytes, or a text or binary file-like object
            config: Reader configuration, defaults to ReaderConfig()
            correlation_id: Optional correlation ID for logging
            close_source: Close ``source`` when the reader is closed
        """
        self.config = config or ReaderConfig()
        self.logger = get_logger(__name__, correlation_id, "event_reader")
        self.metrics = StreamMetrics()

        self._source = _open_source(source)
        self._close_source = close_source
        self._queue: Deque[Event] = deque()
        self._text: List[str] = []
        self._declarations: Dict[QualifiedName, str] = {}
        self._finished = False
        self._started_at = time.time()
        self._parser = self._create_parser()

    def _create_parser(self) -> Any:
        namespace_aware = self.config.namespace_aware
        parser = expat.ParserCreate(
            namespace_separator=_NS_SEPARATOR if namespace_aware else None
        )
        if namespace_aware:
            parser.namespace_prefixes = True
            parser.StartNamespaceDeclHandler = self._on_namespace_decl
        parser.ordered_attributes = True
        parser.buffer_text = True
        parser.StartElementHandler = self._on_start_element
        parser.EndElementHandler = self._on_end_element
        parser.CharacterDataHandler = self._on_characters
        if self.config.include_comments:
            parser.CommentHandler = self._on_comment
        return parser

    # Context management
    def __enter__(self) -> "XMLEventReader":
        return self

    def __exit__(self, exc_type: Any, exc_value: Any, traceback: Any) -> None:
        self.close()

    def close(self) -> None:
        """Release the parser and, if owned, the source."""
        if self._parser is None:
            return
        self._parser = None
        self._finished = True
        self._queue.clear()
        self.metrics.processing_time_ms = (time.time() - self._started_at) * 1000
        if self._close_source:
            self._source.close()
        self.logger.debug(
            "Event reader closed",
            extra={
                "events_read": self.metrics.events_read,
                "chunks_read": self.metrics.chunks_read,
            },
        )

    @property
    def closed(self) -> bool:
        """Check if the reader has been closed."""
        return self._parser is None

    # Cursor
    def advance(self) -> Optional[Event]:
        """Return the next event, or None once the input is exhausted."""
        while not self._queue:
            if self._finished:
                return None
            self._feed()
        self.metrics.events_read += 1
        return self._queue.popleft()

    def __iter__(self) -> Iterator[Event]:
        while True:
            event = self.advance()
            if event is None:
                return
            yield event

    def _feed(self) -> None:
        if self._parser is None:
            raise ValueError("I/O operation on closed event reader")
        chunk = self._source.read(self.config.buffer_size)
        try:
            if chunk:
                self.metrics.chunks_read += 1
                self.metrics.bytes_read += len(chunk)
                self._parser.Parse(chunk, False)
            else:
                self._parser.Parse(b"", True)
                self._flush_text()
                self._finished = True
        except expat.ExpatError as e:
            raise XMLSyntaxError(
                f"Malformed XML: {expat.ErrorString(e.code)}",
                line=e.lineno,
                column=e.offset,
            ) from e

    # Name decoding
    def _tag_name(self, raw: str) -> QualifiedName:
        if not self.config.namespace_aware:
            return QualifiedName.parse(raw)
        parts = raw.split(_NS_SEPARATOR)
        if len(parts) == 3:
            return QualifiedName(parts[1], parts[2], parts[0])
        if len(parts) == 2:
            return QualifiedName(parts[1], None, parts[0])
        return QualifiedName(raw, None, NULL_NS_URI)

    def _attribute_name(self, raw: str) -> QualifiedName:
        if not self.config.namespace_aware:
            return QualifiedName.parse(raw)
        parts = raw.split(_NS_SEPARATOR)
        if len(parts) == 3:
            return QualifiedName(parts[1], parts[2], parts[0])
        if len(parts) == 2:
            return QualifiedName(parts[1], None, parts[0])
        # unprefixed attributes are in no namespace
        return QualifiedName(raw)

    # expat callbacks
    def _flush_text(self) -> None:
        if not self._text:
            return
        text = "".join(self._text)
        self._text = []
        if self.config.skip_whitespace and not text.strip():
            return
        self._queue.append(Event(EventType.CHARACTERS, text=text))

    def _on_namespace_decl(self, prefix: Optional[str], uri: Optional[str]) -> None:
        if prefix:
            key = QualifiedName(prefix, XMLNS_ATTRIBUTE)
        else:
            key = QualifiedName(XMLNS_ATTRIBUTE)
        self._declarations[key] = uri or NULL_NS_URI

    def _on_start_element(self, name: str, attributes: List[str]) -> None:
        self._flush_text()
        attrs: Dict[QualifiedName, str] = dict(self._declarations)
        self._declarations = {}
        for index in range(0, len(attributes), 2):
            attrs[self._attribute_name(attributes[index])] = attributes[index + 1]
        self._queue.append(Event(EventType.START_ELEMENT, self._tag_name(name), attrs))

    def _on_end_element(self, name: str) -> None:
        self._flush_text()
        self._queue.append(Event(EventType.END_ELEMENT, self._tag_name(name)))

    def _on_characters(self, data: str) -> None:
        self._text.append(data)
        if not self.config.coalescing:
            self._flush_text()

    def _on_comment(self, data: str) -> None:
        self._flush_text()
        self._queue.append(Event(EventType.COMMENT, text=data))


def source_seq(
    source: Source,
    config: Optional[ReaderConfig] = None,
    correlation_id: Optional[str] = None,
    close_source: bool = False,
) -> Iterator[Event]:
    """Lazily read the events of an XML document.

    The reader is released when the generator is exhausted, closed, garbage
    collected, or raises.

    Raises:
        XMLSyntaxError: When the input is not well-formed XML
    """
    logger = get_logger(__name__, correlation_id, "source_seq")
    with XMLEventReader(source, config, correlation_id, close_source) as reader:
        try:
            yield from reader
        except XMLSyntaxError as e:
            logger.error(
                "XML input rejected by tokenizer",
                extra={"line": e.line, "column": e.column},
                exc_info=False,
            )
            raise
