"""
Structure Diff Module
Turns change records into the human-readable diff summary.
"""

from typing import Callable, Dict, List, Optional
import logging
import re

from core.dom_node import Node
from core.html_parser import HTMLParser
from core.structure_comparator import ChangeAction, ChangeRecord, DiffResult, TreeComparator

logger = logging.getLogger(__name__)

_LINE_BREAKS = re.compile(r'\s*[\r\n]+\s*')


def _one_line(value: Optional[str]) -> str:
    """Fold line breaks so a record always renders on a single line."""
    return _LINE_BREAKS.sub(' ', value or '')


def _content_suffix(record: ChangeRecord) -> str:
    content = _one_line(record.content)
    return f': "{content}"' if content else ''


def _location(record: ChangeRecord) -> str:
    # The root has an empty path; show it as "/" rather than a blank location
    return _one_line(record.path) or '/'


_TEMPLATES: Dict[str, Callable[[ChangeRecord], str]] = {
    ChangeAction.ADD_CHILD.value: lambda r: (
        f"+ Added: <{_one_line(r.element)}>{_content_suffix(r)} at {_location(r)}"),
    ChangeAction.REMOVE_CHILD.value: lambda r: (
        f"- Removed: <{_one_line(r.element)}>{_content_suffix(r)} at {_location(r)}"),
    ChangeAction.MODIFY_TEXT.value: lambda r: (
        f'~ Modified text: "{_one_line(r.old_value)}" → "{_one_line(r.new_value)}"'),
    ChangeAction.ADD_ATTRIBUTE.value: lambda r: (
        f"+ Added attribute on <{_one_line(r.element)}>: {_one_line(r.content)}"),
    ChangeAction.REMOVE_ATTRIBUTE.value: lambda r: (
        f"- Removed attribute on <{_one_line(r.element)}>: {_one_line(r.content)}"),
    ChangeAction.MODIFY_ATTRIBUTE.value: lambda r: (
        f"~ Modified attribute on <{_one_line(r.element)}>: {_one_line(r.old_value)} → {_one_line(r.new_value)}"),
    ChangeAction.REPLACE_ELEMENT.value: lambda r: (
        f"↔ Replaced <{_one_line(r.old_value)}> with <{_one_line(r.new_value)}> at {_location(r)}"),
    ChangeAction.REPLACE_NODE.value: lambda r: (
        f"↔ Replaced node {_one_line(r.old_value)} with {_one_line(r.new_value)} at {_location(r)}"),
}


def render_change(record: ChangeRecord) -> str:
    """Render one record as a single summary line."""
    action = record.action.value if isinstance(record.action, ChangeAction) else str(record.action)
    template = _TEMPLATES.get(action)
    if template is None:
        logger.warning(f"No summary template for action: {action}")
        return f"? Unknown action: {_one_line(action)}"
    return template(record)


def generate_diff_summary(diffs: List[ChangeRecord]) -> str:
    """Render every record, one line each, in record order."""
    return '\n'.join(render_change(record) for record in diffs)


def compare_trees(tree_a: Node, tree_b: Node) -> DiffResult:
    """Diff two parsed trees and attach the rendered summary."""
    diffs = TreeComparator().compare(tree_a, tree_b)
    return DiffResult(diffs=diffs, summary=generate_diff_summary(diffs))


def extract_diff(html1: str, html2: str, parser: Optional[HTMLParser] = None) -> DiffResult:
    """Parse two HTML strings and return their structural differences."""
    parser = parser or HTMLParser()
    return compare_trees(parser.parse(html1), parser.parse(html2))
