"""Namespace resolution for tag and attribute names.

Tags and attributes resolve differently: an unprefixed tag belongs to the
ambient default namespace, an unprefixed attribute belongs to no namespace
at all. This follows the Namespaces in XML recommendation and must be kept.
"""

from typing import Any, Dict, Mapping, Optional, Tuple

from lazy_xml.shared.errors import UnresolvedPrefixError

from .context import NamespaceContext
from .names import XMLNS_ATTRIBUTE, NameLike, QualifiedName, as_qname


def resolve_tag(name: NameLike, context: Mapping[str, str]) -> QualifiedName:
    """Resolve an element name within a namespace context.

    Args:
        name: Tag name, resolved or not
        context: Prefix bindings in scope, ``""`` being the default namespace

    Returns:
        ``name`` itself when already resolved, otherwise a resolved copy

    Raises:
        UnresolvedPrefixError: If the prefix has no binding in ``context``
    """
    qname = as_qname(name)
    if qname.uri is not None:
        return qname
    prefix = qname.prefix or ""
    uri = context.get(prefix)
    if uri is None:
        raise UnresolvedPrefixError(prefix, qname, {"context": dict(context)})
    return qname.with_uri(uri)


def resolve_attribute(name: NameLike, context: Mapping[str, str]) -> QualifiedName:
    """Resolve an attribute name within a namespace context.

    Only prefixed names are resolved; an unprefixed attribute keeps no
    namespace even when a default namespace is in scope.

    Raises:
        UnresolvedPrefixError: If the prefix has no binding in ``context``
    """
    qname = as_qname(name)
    if qname.uri is not None or qname.prefix is None:
        return qname
    uri = context.get(qname.prefix)
    if uri is None:
        raise UnresolvedPrefixError(qname.prefix, qname, {"context": dict(context)})
    return qname.with_uri(uri)


def name_equals(n1: NameLike, n2: NameLike) -> bool:
    """Compare two names, tolerating unresolved ones.

    Local names must match. When both names carry a URI the URIs decide;
    when either is unresolved the prefixes decide instead. This makes a
    plain ``p:a`` equal to ``{urn:x}p:a`` without resolving either side
    first, as long as both were spelled under the same ``xmlns:p`` binding.
    """
    q1 = as_qname(n1)
    q2 = as_qname(n2)
    if q1.local != q2.local:
        return False
    if q1.uri is not None and q2.uri is not None:
        return q1.uri == q2.uri
    return q1.prefix == q2.prefix


def split_attributes(
    attrs: Optional[Mapping[Any, Any]]
) -> Tuple[Optional[str], Dict[str, str], Dict[QualifiedName, Any]]:
    """Separate namespace declarations from ordinary attributes.

    Returns:
        ``(default_uri, prefix_bindings, attributes)``; ``default_uri`` is
        None when the attributes do not contain ``xmlns``
    """
    default_uri = None
    bindings: Dict[str, str] = {}
    plain: Dict[QualifiedName, Any] = {}
    for key, value in (attrs or {}).items():
        qname = as_qname(key)
        if not qname.is_namespace_declaration:
            plain[qname] = value
        elif qname.prefix == XMLNS_ATTRIBUTE:
            bindings[qname.local] = str(value)
        else:
            default_uri = str(value)
    return default_uri, bindings, plain


def element_context(
    attrs: Optional[Mapping[Any, Any]], context: NamespaceContext
) -> NamespaceContext:
    """Return the scope an element with ``attrs`` opens inside ``context``."""
    default_uri, bindings, _ = split_attributes(attrs)
    if default_uri is not None:
        bindings[""] = default_uri
    return context.child(bindings)


def with_xmlns(prefixes: Mapping[str, str], form: Any) -> Any:
    """Pre-resolve names of a literal tree against a static prefix table.

    Every name in tag position (list heads), every attribute key and every
    bare :class:`QualifiedName` whose prefix appears in ``prefixes`` is
    replaced by a resolved name. Strings in content position are text and
    are returned untouched, as are names whose prefix is not in the table.

    Args:
        prefixes: Mapping of prefix to namespace URI
        form: Literal notation, see :mod:`lazy_xml.sexp`

    Returns:
        A rewritten copy of ``form``
    """
    if not all(isinstance(prefix, str) for prefix in prefixes):
        raise TypeError("Namespace prefixes must be strings")

    def rewrite_name(name: NameLike) -> NameLike:
        qname = as_qname(name)
        uri = prefixes.get(qname.prefix) if qname.prefix else None
        if uri is None or qname.uri is not None:
            return name
        return qname.with_uri(uri)

    def walk(item: Any) -> Any:
        if isinstance(item, QualifiedName):
            return rewrite_name(item)
        if isinstance(item, list):
            if not item or not isinstance(item[0], (str, QualifiedName)):
                return [walk(child) for child in item]
            head, rest = rewrite_name(item[0]), item[1:]
            if rest and isinstance(rest[0], Mapping):
                attrs = {rewrite_name(key): value for key, value in rest[0].items()}
                rest = [attrs] + [walk(child) for child in rest[1:]]
            else:
                rest = [walk(child) for child in rest]
            return [head] + rest
        if isinstance(item, (str, bytes, Mapping)) or not hasattr(item, "__iter__"):
            return item
        return tuple(walk(child) for child in item)

    return walk(form)
