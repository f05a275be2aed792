"""Prefix to URI bindings in scope at a point of a tree or event stream."""

from collections import ChainMap
from typing import Dict, Iterator, Mapping, Optional, Tuple

from .names import (
    DEFAULT_NS_PREFIX,
    NULL_NS_URI,
    XML_NS_URI,
    XMLNS_ATTRIBUTE,
    XMLNS_ATTRIBUTE_NS_URI,
)

_PREDEFINED = {
    "xml": XML_NS_URI,
    XMLNS_ATTRIBUTE: XMLNS_ATTRIBUTE_NS_URI,
    DEFAULT_NS_PREFIX: NULL_NS_URI,
}


def _normalize(bindings: Optional[Mapping[Optional[str], str]]) -> Dict[str, str]:
    return {prefix or DEFAULT_NS_PREFIX: uri for prefix, uri in (bindings or {}).items()}


class NamespaceContext(Mapping[str, str]):
    """Immutable, nestable prefix table.

    The root context binds ``xml`` and ``xmlns`` to their reserved URIs and
    the empty (default) prefix to the null namespace. :meth:`child` creates a
    nested scope that inherits every ambient binding and may shadow any of
    them. ``None`` and ``""`` both name the default prefix.
    """

    def __init__(self, bindings: Optional[Mapping[Optional[str], str]] = None) -> None:
        self._bindings = ChainMap(_normalize(bindings), _PREDEFINED)

    def __getitem__(self, prefix: str) -> str:
        return self._bindings[prefix or DEFAULT_NS_PREFIX]

    def __iter__(self) -> Iterator[str]:
        return iter(self._bindings)

    def __len__(self) -> int:
        return len(self._bindings)

    def __repr__(self) -> str:
        return f"NamespaceContext({dict(self._bindings)!r})"

    def lookup(self, prefix: Optional[str]) -> Optional[str]:
        """Return the URI bound to ``prefix`` (None means default) or None."""
        return self._bindings.get(prefix or DEFAULT_NS_PREFIX)

    @property
    def default_uri(self) -> str:
        """URI of the ambient default namespace."""
        return self._bindings[DEFAULT_NS_PREFIX]

    def prefixes_for(self, uri: str) -> Tuple[str, ...]:
        """All non-default prefixes currently bound to ``uri``."""
        return tuple(
            prefix for prefix in self._bindings
            if prefix and self._bindings[prefix] == uri
        )

    def child(self, bindings: Optional[Mapping[Optional[str], str]] = None) -> "NamespaceContext":
        """Return a nested scope with ``bindings`` layered over this one."""
        nested = NamespaceContext.__new__(NamespaceContext)
        nested._bindings = self._bindings.new_child(_normalize(bindings))
        return nested

    @property
    def local_bindings(self) -> Dict[str, str]:
        """Bindings declared by the innermost scope only."""
        return dict(self._bindings.maps[0])
