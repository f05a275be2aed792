"""Exception hierarchy for lazy_xml.

All errors are caller-input errors: they are raised synchronously at the
point the problem is detected and are never retried internally.
"""

from typing import Any, Dict, Optional


class XMLBridgeError(Exception):
    """Base exception for all lazy_xml errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.details = details or {}


class NamespaceError(XMLBridgeError):
    """A qualified name cannot be written in the namespace context at hand."""


class UnresolvedPrefixError(NamespaceError):
    """A tag or attribute references a prefix with no binding in scope."""

    def __init__(self, prefix: str, name: Any,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(f"Unbound namespace prefix {prefix!r} in name {name}",
                         details)
        self.prefix = prefix
        self.name = name


class InvalidStructureError(XMLBridgeError, ValueError):
    """Literal notation that is malformed or does not yield exactly one root."""


class EncodingMismatchError(XMLBridgeError):
    """Declared output encoding differs from the destination's encoding."""

    def __init__(self, declared: str, actual: str):
        super().__init__(
            f"Output encoding of stream ({actual}) doesn't match "
            f"declaration ({declared})",
            {"declared": declared, "actual": actual},
        )
        self.declared = declared
        self.actual = actual


class XMLSyntaxError(XMLBridgeError):
    """The underlying tokenizer rejected the input as malformed XML."""

    def __init__(self, message: str, line: Optional[int] = None,
                 column: Optional[int] = None):
        super().__init__(message, {"line": line, "column": column})
        self.line = line
        self.column = column
