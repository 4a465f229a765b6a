"""
DOM Node Module
Immutable tree abstraction shared by the parser and the tree comparator.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple


class NodeKind(str, Enum):
    ELEMENT = 'Element'
    TEXT = 'Text'
    OTHER = 'Other'


@dataclass(frozen=True)
class Node:
    """A single node of a parsed document.

    Only the fields matching ``kind`` are meaningful: ``tag_name``,
    ``attributes`` and ``children`` for elements, ``text_content`` for text.
    ``name`` labels ``Other`` nodes (``#comment``, ``#cdata-section``, ...).
    """
    kind: Optional[NodeKind]
    tag_name: Optional[str] = None
    text_content: Optional[str] = None
    attributes: Mapping[str, str] = field(default_factory=dict)
    children: Tuple['Node', ...] = ()
    name: Optional[str] = None


def element(tag_name: str, attributes: Optional[Mapping[str, str]] = None, *children: Node) -> Node:
    """Build an element node; the tag is upper-cased."""
    return Node(
        kind=NodeKind.ELEMENT,
        tag_name=tag_name.upper(),
        attributes=dict(attributes or {}),
        children=tuple(children),
    )


def text(content: str) -> Node:
    return Node(kind=NodeKind.TEXT, text_content=content)


def other(name: str = '#comment', content: str = '') -> Node:
    return Node(kind=NodeKind.OTHER, name=name, text_content=content)


def effective_kind(node: Node) -> NodeKind:
    """Return the kind a node is compared as.

    Nodes missing the fields their declared kind requires are treated as
    ``Other`` so malformed trees never break a comparison.
    """
    kind = getattr(node, 'kind', None)
    if kind == NodeKind.ELEMENT and isinstance(getattr(node, 'tag_name', None), str) and node.tag_name:
        return NodeKind.ELEMENT
    if kind == NodeKind.TEXT and isinstance(getattr(node, 'text_content', None), str):
        return NodeKind.TEXT
    return NodeKind.OTHER


def node_name(node: Node) -> str:
    kind = effective_kind(node)
    if kind == NodeKind.ELEMENT:
        return node.tag_name
    if kind == NodeKind.TEXT:
        return '#text'
    return getattr(node, 'name', None) or '#other'


def iter_text(node: Node) -> Iterator[str]:
    """Yield the text runs below ``node`` in document order (comments skipped)."""
    kind = effective_kind(node)
    if kind == NodeKind.TEXT:
        yield node.text_content
        return
    if kind == NodeKind.OTHER:
        yield getattr(node, 'text_content', None) or ''
        return

    stack = list(reversed(node.children or ()))
    while stack:
        current = stack.pop()
        current_kind = effective_kind(current)
        if current_kind == NodeKind.TEXT:
            yield current.text_content
        elif current_kind == NodeKind.ELEMENT:
            stack.extend(reversed(current.children or ()))


def aggregated_text(node: Node) -> str:
    return ''.join(iter_text(node))


def node_from_dict(data: Any) -> Node:
    """Build a Node tree from a plain mapping.

    Accepts ``{'type': 'element', 'tag': ..., 'attrs': {...}, 'children': [...]}``
    and ``{'type': 'text', 'content': ...}``. Anything else becomes an
    ``Other`` node.
    """
    if not isinstance(data, dict):
        return Node(kind=NodeKind.OTHER)

    node_type = str(data.get('type', '')).lower()
    if node_type == 'element' and isinstance(data.get('tag'), str) and data['tag']:
        attrs: Dict[str, str] = {}
        raw_attrs = data.get('attrs') or {}
        if isinstance(raw_attrs, dict):
            attrs = {str(k): _attr_value(v) for k, v in raw_attrs.items()}
        children = data.get('children') or []
        if not isinstance(children, list):
            children = []
        return Node(
            kind=NodeKind.ELEMENT,
            tag_name=data['tag'].upper(),
            attributes=attrs,
            children=tuple(node_from_dict(child) for child in children),
        )
    if node_type == 'text' and isinstance(data.get('content'), str):
        return Node(kind=NodeKind.TEXT, text_content=data['content'])

    name = data.get('name')
    return Node(kind=NodeKind.OTHER, name=name if isinstance(name, str) else None)


def _attr_value(value: Any) -> str:
    if isinstance(value, list):
        return ' '.join(str(v) for v in value)
    return '' if value is None else str(value)
