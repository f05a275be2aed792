"""Configuration classes for lazy_xml.

Reader and writer behaviour is controlled by small dataclasses that validate
themselves on construction; :class:`BridgeConfig` bundles them into one
immutable object that can be overridden, serialized and restored.
"""

import codecs
import json
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional

_COMPONENTS = ("reader", "writer")
_XML_VERSIONS = ("1.0", "1.1")


def _codec_name(encoding: str) -> str:
    """Return the canonical codec name for ``encoding``.

    Raises:
        LookupError: If the encoding is unknown to the codec registry
    """
    return codecs.lookup(encoding).name


@dataclass
class ReaderConfig:
    """Configuration for turning XML text into an event stream."""

    namespace_aware: bool = True
    coalescing: bool = True
    skip_whitespace: bool = True
    include_comments: bool = False
    buffer_size: int = 8192

    def __post_init__(self) -> None:
        """Validate reader configuration."""
        if self.buffer_size <= 0:
            raise ValueError("buffer_size must be > 0")


@dataclass
class WriterConfig:
    """Configuration for writing an event stream as XML text."""

    encoding: str = "UTF-8"
    version: str = "1.0"
    xml_declaration: bool = True
    check_encoding: bool = True

    def __post_init__(self) -> None:
        """Validate writer configuration."""
        if not self.encoding:
            raise ValueError("encoding cannot be empty")
        try:
            _codec_name(self.encoding)
        except LookupError as e:
            raise ValueError(f"unknown encoding: {self.encoding}") from e
        if self.version not in _XML_VERSIONS:
            raise ValueError(f"version must be one of {list(_XML_VERSIONS)}")

    @property
    def codec_name(self) -> str:
        """Canonical codec name of the declared encoding."""
        return _codec_name(self.encoding)


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigValidationError(ConfigError):
    """Exception raised when configuration validation fails."""

    def __init__(self, message: str, field_name: Optional[str] = None,
                 suggestions: Optional[List[str]] = None):
        super().__init__(message)
        self.field_name = field_name
        self.suggestions = suggestions or []


@dataclass(frozen=True)
class BridgeConfig:
    """Complete configuration for parsing and emitting.

    Frozen so one instance can be shared by any number of parse and emit
    calls.
    """

    reader: ReaderConfig = field(default_factory=ReaderConfig)
    writer: WriterConfig = field(default_factory=WriterConfig)

    correlation_id: Optional[str] = None
    name: Optional[str] = None

    def __post_init__(self) -> None:
        """Re-validate components and report failures uniformly."""
        try:
            self.reader.__post_init__()
            self.writer.__post_init__()
        except ValueError as e:
            raise ConfigValidationError(str(e)) from e

    def override(self, **kwargs: Any) -> "BridgeConfig":
        """Create a new configuration with specific overrides.

        Component fields use double-underscore notation.

        Example:
            >>> config = BridgeConfig().override(
            ...     reader__buffer_size=1024,
            ...     writer__encoding="ISO-8859-1",
            ... )
        """
        nested: Dict[str, Dict[str, Any]] = {}
        top_level: Dict[str, Any] = {}
        for key, value in kwargs.items():
            if "__" in key:
                component, field_name = key.split("__", 1)
                if component not in _COMPONENTS:
                    raise ConfigValidationError(
                        f"Unknown configuration component: {component}",
                        field_name=key,
                        suggestions=[f"{name}__{field_name}" for name in _COMPONENTS],
                    )
                nested.setdefault(component, {})[field_name] = value
            else:
                top_level[key] = value

        new_fields: Dict[str, Any] = dict(top_level)
        try:
            for component, overrides in nested.items():
                new_fields[component] = replace(getattr(self, component), **overrides)
            return replace(self, **new_fields)
        except (TypeError, ValueError) as e:
            raise ConfigValidationError(str(e)) from e

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary format."""
        def _dataclass_to_dict(obj: Any) -> Any:
            if hasattr(obj, "__dataclass_fields__"):
                return {name: _dataclass_to_dict(getattr(obj, name))
                        for name in obj.__dataclass_fields__}
            return obj

        return _dataclass_to_dict(self)

    def to_json(self, indent: int = 2) -> str:
        """Convert configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BridgeConfig":
        """Create configuration from dictionary.

        Unknown keys are rejected rather than silently dropped.
        """
        try:
            reader = ReaderConfig(**data.get("reader", {}))
            writer = WriterConfig(**data.get("writer", {}))
        except (TypeError, ValueError) as e:
            raise ConfigValidationError(f"Invalid configuration: {e}") from e

        unknown = set(data) - {"reader", "writer", "correlation_id", "name"}
        if unknown:
            raise ConfigValidationError(
                f"Unknown configuration keys: {sorted(unknown)}",
                field_name=sorted(unknown)[0],
            )
        return cls(
            reader=reader,
            writer=writer,
            correlation_id=data.get("correlation_id"),
            name=data.get("name"),
        )

    @classmethod
    def from_json(cls, json_str: str) -> "BridgeConfig":
        """Create configuration from JSON string."""
        return cls.from_dict(json.loads(json_str))

    # Preset factory methods
    @classmethod
    def round_trip(cls) -> "BridgeConfig":
        """Preset that keeps every text node and comment of the input."""
        return cls(
            reader=ReaderConfig(skip_whitespace=False, include_comments=True),
            name="round_trip",
        )

    @classmethod
    def fragment(cls) -> "BridgeConfig":
        """Preset for emitting fragments without an XML declaration."""
        return cls(
            writer=WriterConfig(xml_declaration=False),
            name="fragment",
        )
