"""
Structure Comparator Module
Walks two DOM trees position by position and records their structural differences.
"""

from typing import Dict, List, Optional, Tuple, Union, Any
from dataclasses import dataclass, field
from enum import Enum
import logging

from .dom_node import Node, NodeKind, effective_kind, node_name, aggregated_text

logger = logging.getLogger(__name__)

# Length of the text preview attached to added/removed children
CONTENT_PREVIEW_LENGTH = 50


class ChangeAction(str, Enum):
    REPLACE_NODE = 'replaceNode'
    REPLACE_ELEMENT = 'replaceElement'
    MODIFY_TEXT = 'modifyText'
    ADD_ATTRIBUTE = 'addAttribute'
    REMOVE_ATTRIBUTE = 'removeAttribute'
    MODIFY_ATTRIBUTE = 'modifyAttribute'
    ADD_CHILD = 'addChild'
    REMOVE_CHILD = 'removeChild'


@dataclass
class ChangeRecord:
    action: Union[ChangeAction, str]
    path: str = ''
    element: Optional[str] = None
    old_value: Optional[str] = None
    new_value: Optional[str] = None
    content: Optional[str] = None

    def to_dict(self) -> Dict[str, str]:
        """Convert to the JSON shape, leaving out fields that do not apply."""
        action = self.action.value if isinstance(self.action, ChangeAction) else str(self.action)
        result = {'action': action, 'path': self.path}
        for key, value in (('element', self.element),
                           ('oldValue', self.old_value),
                           ('newValue', self.new_value),
                           ('content', self.content)):
            if value is not None:
                result[key] = value
        return result


@dataclass
class DiffResult:
    diffs: List[ChangeRecord] = field(default_factory=list)
    summary: str = ''

    @property
    def count(self) -> int:
        return len(self.diffs)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'diffs': [record.to_dict() for record in self.diffs],
            'count': self.count,
            'summary': self.summary,
        }


def _format_attribute(name: str, value: str) -> str:
    return f'{name}="{value}"'


class TreeComparator:
    """Positional tree diff.

    Children are aligned strictly by index. An insertion early in a sibling
    list therefore shows up as modifications of every following slot plus an
    ``addChild`` at the end; moved or reordered subtrees are never matched.
    """

    def compare(self, node_a: Node, node_b: Node, path: str = '') -> List[ChangeRecord]:
        """Compare two trees and return their change records in pre-order."""
        records: List[ChangeRecord] = []
        # Pending slots: (node from A or None, node from B or None, path)
        stack: List[Tuple[Optional[Node], Optional[Node], str]] = [(node_a, node_b, path)]

        while stack:
            current_a, current_b, current_path = stack.pop()

            if current_a is None:
                records.append(ChangeRecord(
                    action=ChangeAction.ADD_CHILD,
                    path=current_path,
                    element=node_name(current_b),
                    content=aggregated_text(current_b)[:CONTENT_PREVIEW_LENGTH],
                ))
                continue
            if current_b is None:
                records.append(ChangeRecord(
                    action=ChangeAction.REMOVE_CHILD,
                    path=current_path,
                    element=node_name(current_a),
                    content=aggregated_text(current_a)[:CONTENT_PREVIEW_LENGTH],
                ))
                continue

            children = self._compare_pair(current_a, current_b, current_path, records)
            # Reversed so the lowest index is popped first
            stack.extend(reversed(children))

        logger.debug(f"Tree comparison produced {len(records)} change(s)")
        return records

    def _compare_pair(self, node_a: Node, node_b: Node, path: str,
                      records: List[ChangeRecord]) -> List[Tuple[Optional[Node], Optional[Node], str]]:
        """Record differences local to one pair and return the child slots to visit."""
        kind_a = effective_kind(node_a)
        kind_b = effective_kind(node_b)

        if kind_a != kind_b:
            records.append(ChangeRecord(
                action=ChangeAction.REPLACE_NODE,
                path=path,
                old_value=node_name(node_a),
                new_value=node_name(node_b),
            ))
            return []

        if kind_a == NodeKind.TEXT:
            text_a = node_a.text_content.strip()
            text_b = node_b.text_content.strip()
            # Empty or whitespace-only text on either side is never reported
            if text_a and text_b and text_a != text_b:
                records.append(ChangeRecord(
                    action=ChangeAction.MODIFY_TEXT,
                    path=path,
                    old_value=text_a,
                    new_value=text_b,
                ))
            return []

        if kind_a != NodeKind.ELEMENT:
            return []

        if node_a.tag_name != node_b.tag_name:
            records.append(ChangeRecord(
                action=ChangeAction.REPLACE_ELEMENT,
                path=path,
                old_value=node_a.tag_name,
                new_value=node_b.tag_name,
            ))
            return []

        self._compare_attributes(node_a, node_b, path, records)

        children_a = node_a.children or ()
        children_b = node_b.children or ()
        slots = []
        for index in range(max(len(children_a), len(children_b))):
            child_a = children_a[index] if index < len(children_a) else None
            child_b = children_b[index] if index < len(children_b) else None
            slots.append((child_a, child_b, f"{path}/{node_a.tag_name}[{index}]"))
        return slots

    def _compare_attributes(self, node_a: Node, node_b: Node, path: str,
                            records: List[ChangeRecord]) -> None:
        attrs_a = dict(node_a.attributes or {})
        attrs_b = dict(node_b.attributes or {})
        tag = node_a.tag_name

        for name, value in attrs_b.items():
            if name not in attrs_a:
                records.append(ChangeRecord(
                    action=ChangeAction.ADD_ATTRIBUTE,
                    path=path,
                    element=tag,
                    content=_format_attribute(name, value),
                ))
            elif attrs_a[name] != value:
                records.append(ChangeRecord(
                    action=ChangeAction.MODIFY_ATTRIBUTE,
                    path=path,
                    element=tag,
                    old_value=_format_attribute(name, attrs_a[name]),
                    new_value=_format_attribute(name, value),
                ))

        for name, value in attrs_a.items():
            if name not in attrs_b:
                records.append(ChangeRecord(
                    action=ChangeAction.REMOVE_ATTRIBUTE,
                    path=path,
                    element=tag,
                    content=_format_attribute(name, value),
                ))
