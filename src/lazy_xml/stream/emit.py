"""Writing events through an :class:`XMLStreamWriter`.

Names reaching the writer may be unresolved (``p:a``), resolved with a
prefix (``{urn:x}p:a``) or resolved without one (``{urn:x}a``). Every name
of a start tag is resolved against the writer's namespace context before
anything of that tag is written; declarations needed to spell a resolved
name are added to the same start tag.
"""

from typing import Dict, List, Optional, Tuple

from lazy_xml.events.event import Event, EventType
from lazy_xml.namespace import (
    NULL_NS_URI,
    NamespaceContext,
    QualifiedName,
    resolve_attribute,
    resolve_tag,
    split_attributes,
)
from lazy_xml.shared import NamespaceError
from lazy_xml.tree.nodes import text_of

from .writer import XMLStreamWriter


def _attribute_prefix(name: QualifiedName, scope: NamespaceContext) -> str:
    """Pick a prefix for a namespaced attribute whose own one is unusable.

    A prefix already bound to the URI is reused. A prefixed name gets a
    fresh ``nsN`` prefix otherwise; an unprefixed one cannot be spelled.
    """
    prefixes = scope.prefixes_for(name.uri)
    if prefixes:
        return prefixes[0]
    if not name.prefix:
        raise NamespaceError(
            f"No prefix for attribute URI {name.uri!r}",
            {"attribute": name.clark, "context": dict(scope)},
        )
    index = 0
    while scope.lookup(f"ns{index}") is not None:
        index += 1
    return f"ns{index}"


def _start_tag(
    event: Event, context: NamespaceContext
) -> Tuple[QualifiedName, Dict[str, str], List[Tuple[QualifiedName, str]]]:
    """Resolve a start event into ``(tag, declarations, attributes)``.

    Declarations map a prefix (``""`` for the default namespace) to a URI.

    Raises:
        UnresolvedPrefixError: If a name uses a prefix bound nowhere
        NamespaceError: If a namespaced attribute has no prefix in scope, or
            the tag's namespace contradicts a declaration on its own element
    """
    default_uri, declarations, plain = split_attributes(event.attrs)
    if default_uri is not None:
        declarations[""] = default_uri
    scope = context.child(declarations)

    tag = resolve_tag(event.name, scope)
    if scope.lookup(tag.prefix) != tag.uri:
        declared = declarations.get(tag.prefix or "")
        if declared is not None:
            raise NamespaceError(
                f"Tag {tag} is bound to {tag.uri!r} but its element declares {declared!r}",
                {"tag": tag.clark, "prefix": tag.prefix or ""},
            )
        declarations[tag.prefix or ""] = tag.uri
        scope = context.child(declarations)

    # prefixes this start tag already spells with their current binding
    used = {tag.prefix}
    attributes: List[Tuple[QualifiedName, str]] = []
    for key, value in plain.items():
        name = resolve_attribute(key, scope)
        if not name.uri:
            name = QualifiedName(name.local)
        elif not name.prefix or scope.lookup(name.prefix) != name.uri:
            prefix = name.prefix
            if not prefix or prefix in used or prefix in declarations:
                prefix = _attribute_prefix(name, scope)
            if scope.lookup(prefix) != name.uri:
                declarations[prefix] = name.uri
                scope = context.child(declarations)
            name = QualifiedName(name.local, prefix, name.uri)
        used.add(name.prefix)
        attributes.append((name, text_of(value)))
    return tag, declarations, attributes


def emit_event(event: Event, writer: XMLStreamWriter) -> None:
    """Write one event.

    Raises:
        UnresolvedPrefixError: If a start tag uses an unbound prefix
        NamespaceError: If a namespaced attribute cannot be spelled, or the
            tag contradicts a declaration on its own element
    """
    if event.type is EventType.START_ELEMENT:
        tag, declarations, attributes = _start_tag(event, writer.namespace_context)
        writer.write_start_element(QualifiedName(tag.local, tag.prefix))
        default_uri: Optional[str] = declarations.pop("", None)
        if default_uri is not None:
            writer.write_default_namespace(default_uri or NULL_NS_URI)
        for prefix, uri in declarations.items():
            writer.write_namespace(prefix, uri)
        for name, value in attributes:
            writer.write_attribute(QualifiedName(name.local, name.prefix), value)
    elif event.type is EventType.END_ELEMENT:
        writer.write_end_element()
    elif event.type is EventType.CHARACTERS:
        writer.write_characters(event.text or "")
    elif event.type is EventType.CDATA:
        writer.write_cdata(event.text or "")
    elif event.type is EventType.COMMENT:
        writer.write_comment(event.text or "")
