"""StAX-style XML writer on top of :class:`xml.sax.saxutils.XMLGenerator`.

The writer mirrors the event variants one call each. A start tag is held
back until the next call that is not a namespace or attribute write, so the
caller can add declarations and attributes after
:meth:`XMLStreamWriter.write_start_element`. The bindings in scope at the
cursor are available as :attr:`XMLStreamWriter.namespace_context`.
"""

from typing import Any, Dict, List, Optional, Tuple
from xml.sax.saxutils import XMLGenerator

from lazy_xml.namespace import (
    XMLNS_ATTRIBUTE,
    NamespaceContext,
    QualifiedName,
)

_CDATA_END = "]]>"


class _XMLGenerator(XMLGenerator):
    """XMLGenerator with comment and CDATA output."""

    def comment(self, text: str) -> None:
        self._finish_pending_start_element()
        self._write(f"<!--{text}-->")

    def cdata(self, text: str) -> None:
        self._finish_pending_start_element()
        self._write(f"<![CDATA[{text}]]>")

    def declaration(self, version: str, encoding: str) -> None:
        self._write(f'<?xml version="{version}" encoding="{encoding}"?>')


class XMLStreamWriter:
    """Sequential XML writer with namespace bookkeeping.

    Not thread safe; calls must follow document order.
    """

    def __init__(self, out: Any, encoding: str = "UTF-8") -> None:
        """Initialize the writer.

        Args:
            out: Text stream, or binary stream which is wrapped with ``encoding``
            encoding: Character encoding used when ``out`` is binary
        """
        self._generator = _XMLGenerator(out, encoding, short_empty_elements=False)
        self._contexts: List[NamespaceContext] = [NamespaceContext()]
        self._open_tags: List[str] = []
        self._pending: Optional[Tuple[str, Dict[str, str]]] = None
        self.events_written = 0

    @property
    def namespace_context(self) -> NamespaceContext:
        """Bindings in scope at the write cursor."""
        return self._contexts[-1]

    @property
    def depth(self) -> int:
        """Number of elements currently open."""
        return len(self._open_tags)

    def _flush_start_tag(self) -> None:
        if self._pending is None:
            return
        qname, attrs = self._pending
        self._pending = None
        self._generator.startElement(qname, attrs)

    def _require_pending(self, call: str) -> Dict[str, str]:
        if self._pending is None:
            raise ValueError(f"{call} is only valid directly after write_start_element")
        return self._pending[1]

    def write_start_document(self, encoding: str = "UTF-8", version: str = "1.0") -> None:
        """Write the XML declaration."""
        self._generator.declaration(version, encoding)

    def write_end_document(self) -> None:
        """Close every open element and flush the destination."""
        while self._open_tags:
            self.write_end_element()
        self._flush_start_tag()
        self._generator.endDocument()

    def write_start_element(self, name: QualifiedName) -> None:
        """Open an element spelled with ``name``'s prefix and local part."""
        self._flush_start_tag()
        qname = str(name)
        self._pending = (qname, {})
        self._open_tags.append(qname)
        self._contexts.append(self.namespace_context.child())
        self.events_written += 1

    def write_default_namespace(self, uri: str) -> None:
        """Declare the default namespace on the pending start tag."""
        self._require_pending("write_default_namespace")[XMLNS_ATTRIBUTE] = uri
        self._contexts[-1] = self._contexts[-2].child(
            {**self.namespace_context.local_bindings, "": uri}
        )

    def write_namespace(self, prefix: str, uri: str) -> None:
        """Declare ``prefix`` on the pending start tag."""
        if not prefix:
            self.write_default_namespace(uri)
            return
        self._require_pending("write_namespace")[f"{XMLNS_ATTRIBUTE}:{prefix}"] = uri
        self._contexts[-1] = self._contexts[-2].child(
            {**self.namespace_context.local_bindings, prefix: uri}
        )

    def write_attribute(self, name: QualifiedName, value: str) -> None:
        """Add an attribute to the pending start tag."""
        self._require_pending("write_attribute")[str(name)] = value

    def write_characters(self, text: str) -> None:
        """Write escaped character data."""
        self._flush_start_tag()
        self._generator.characters(text)
        self.events_written += 1

    def write_cdata(self, text: str) -> None:
        """Write ``text`` verbatim, split so no section contains ``]]>``."""
        self._flush_start_tag()
        while _CDATA_END in text:
            index = text.index(_CDATA_END) + 2
            self._generator.cdata(text[:index])
            text = text[index:]
        if text:
            self._generator.cdata(text)
        self.events_written += 1

    def write_comment(self, text: str) -> None:
        """Write a comment."""
        self._flush_start_tag()
        self._generator.comment(text)
        self.events_written += 1

    def write_end_element(self) -> None:
        """Close the innermost open element."""
        if not self._open_tags:
            raise ValueError("No open element to close")
        self._flush_start_tag()
        self._generator.endElement(self._open_tags.pop())
        self._contexts.pop()
        self.events_written += 1

    def flush(self) -> None:
        """Flush buffered output without closing anything."""
        self._flush_start_tag()
        self._generator._flush()


__all__ = ["XMLStreamWriter"]
