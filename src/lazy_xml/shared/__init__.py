"""Shared utilities for lazy_xml.

This module provides the configuration objects, error hierarchy, metrics and
logging helpers used across the namespace, tree, event and stream layers.
"""

from .config import (
    BridgeConfig,
    ConfigError,
    ConfigValidationError,
    ReaderConfig,
    WriterConfig,
)
from .errors import (
    EncodingMismatchError,
    InvalidStructureError,
    NamespaceError,
    UnresolvedPrefixError,
    XMLBridgeError,
    XMLSyntaxError,
)
from .logging import (
    CorrelationLogger,
    get_logger,
)
from .metrics import StreamMetrics

__all__ = [
    "BridgeConfig",
    "ConfigError",
    "ConfigValidationError",
    "ReaderConfig",
    "WriterConfig",
    "EncodingMismatchError",
    "InvalidStructureError",
    "NamespaceError",
    "UnresolvedPrefixError",
    "XMLBridgeError",
    "XMLSyntaxError",
    "CorrelationLogger",
    "get_logger",
    "StreamMetrics",
]
