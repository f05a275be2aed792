"""Public API for lazy_xml.

Key Components:
    parse / parse_string / parse_file: XML to lazy Element tree
    events_for: XML to flat event stream
    emit / emit_string: Element tree to XML
"""

from .parser import (
    emit,
    emit_string,
    events_for,
    parse,
    parse_file,
    parse_string,
)

__all__ = [
    "emit",
    "emit_string",
    "events_for",
    "parse",
    "parse_file",
    "parse_string",
]
